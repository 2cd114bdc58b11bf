"""Явная конфигурация вместо глобальных опций сессии."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Literal

POLICIES = ("sort", "appearance")


@dataclass(frozen=True)
class PedigreeConfig:
    """
    missing_values – значения родителя, означающие «неизвестен»
                     (null/NaN распознаются всегда);
    policy         – порядок присвоения кодов:
                     * sort       – по возрастанию идентификатора
                     * appearance – по первому появлению в таблице;
    validate       – проверять результат построения;
    show_progress  – tqdm-прогресс в ``fit_many``.
    """
    missing_values: tuple = (0,)
    policy: Literal["sort", "appearance"] = "sort"
    validate: bool = True
    show_progress: bool = False

    def __post_init__(self):
        if self.policy not in POLICIES:
            raise ValueError(f"Unknown policy: {self.policy!r}")
        object.__setattr__(self, "missing_values", tuple(self.missing_values))


DEFAULT_CONFIG = PedigreeConfig()
