"""
Диагностика родословной без исправлений.

Четыре независимых свойства считаются по сырой (неперекодированной) таблице:
    * consecutive       – все идентификаторы образуют ряд 1…N;
    * complete          – у каждого известного родителя есть своя строка;
    * ancestors_precede – строка родителя выше строки потомка;
    * sorted            – колонка особей не убывает.
Проверка ничего не меняет и на плохих данных возвращает False, а не падает.
"""
from __future__ import annotations
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List

import numpy as np
from numba import njit

from .config import DEFAULT_CONFIG, PedigreeConfig
from .pedigree import Pedigree
from .table import ColumnSelector, identifier_kind, read_triples, resolve_columns

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PedigreeCheck:
    consecutive: bool
    complete: bool
    ancestors_precede: bool
    sorted: bool

    @property
    def fully_correct(self) -> bool:
        return self.consecutive and self.complete and self.ancestors_precede and self.sorted

    def failed(self) -> List[str]:
        return [name for name, ok in asdict(self).items() if not ok]

    def as_dict(self) -> Dict[str, bool]:
        return asdict(self)


@njit(cache=True)
def _parents_precede_numba(parent_pos: np.ndarray) -> bool:
    # parent_pos[i, j] – номер строки j-го родителя особи i, -1 если строки нет
    n_rows, n_parents = parent_pos.shape
    for i in range(n_rows):
        for j in range(n_parents):
            p = parent_pos[i, j]
            if p >= i:
                return False
    return True


def _is_consecutive(selves, parents_a, parents_b) -> bool:
    everyone = set(v for col in (selves, parents_a, parents_b) for v in col if v is not None)
    if identifier_kind(everyone) not in ("int", "empty"):
        # для нечисловых кодов свойство имеет смысл только после перекодирования
        return False
    return sorted(everyone) == list(range(1, len(everyone) + 1))


def _is_complete(selves, parents_a, parents_b) -> bool:
    defined = set(s for s in selves if s is not None)
    return all(p is None or p in defined for p in (*parents_a, *parents_b))


def _ancestors_precede(selves, parents_a, parents_b) -> bool:
    row_of: Dict[Any, int] = {}
    for i, s in enumerate(selves):
        if s is not None:
            row_of.setdefault(s, i)
    parent_pos = np.full((len(selves), 2), -1, dtype=np.int64)
    for i, (a, b) in enumerate(zip(parents_a, parents_b)):
        parent_pos[i, 0] = row_of.get(a, -1) if a is not None else -1
        parent_pos[i, 1] = row_of.get(b, -1) if b is not None else -1
    return bool(_parents_precede_numba(parent_pos))


def _is_sorted(selves, parents_a, parents_b) -> bool:
    if any(s is None for s in selves):
        return False
    return all(x <= y for x, y in zip(selves, selves[1:]))


_CHECKS = {
    "consecutive": _is_consecutive,
    "complete": _is_complete,
    "ancestors_precede": _ancestors_precede,
    "sorted": _is_sorted,
}


def check_pedigree(
    table,
    columns: ColumnSelector = (0, 1, 2),
    config: PedigreeConfig | None = None,
) -> PedigreeCheck:
    """
    Возвращает четыре флага; падает только если селектор колонок
    не разрешается (InvalidColumnSpecError).
    """
    config = config or DEFAULT_CONFIG
    if isinstance(table, Pedigree):
        table = table.to_frame()
    triples = read_triples(resolve_columns(table, columns), config.missing_values)

    results = {}
    for name, fn in _CHECKS.items():
        try:
            results[name] = fn(*triples)
        except TypeError as e:
            # несравнимые идентификаторы (например, числа вперемешку со строками)
            LOGGER.debug("Check %s not evaluable: %s", name, e)
            results[name] = False

    check = PedigreeCheck(**results)
    if not check.fully_correct:
        LOGGER.debug("Pedigree check failed: %s", ", ".join(check.failed()))
    return check
