"""
Каноническая родословная: N строк (код, код родителя 1, код родителя 2),
коды 1…N подряд, родители раньше потомков, 0 – неизвестный родитель.

Объект неизменяемый; массивы помечены read-only, кодек хранится рядом
для обратного перекодирования результатов.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Tuple

import numpy as np
import pandas as pd

from .codec import IdentityCodec

DEFAULT_NAMES = ("self", "parent_a", "parent_b")


def _frozen(values) -> np.ndarray:
    arr = np.array(values, dtype=np.int64)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Pedigree:
    self_codes: np.ndarray
    parent_a: np.ndarray
    parent_b: np.ndarray
    codec: IdentityCodec
    names: Tuple[str, str, str] = field(default=DEFAULT_NAMES)

    def __post_init__(self):
        for name in ("self_codes", "parent_a", "parent_b"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))
        if not len(self.self_codes) == len(self.parent_a) == len(self.parent_b) == len(self.codec):
            raise ValueError("Pedigree columns and codec must have the same length")
        object.__setattr__(self, "names", tuple(str(n) for n in self.names))

    def __len__(self) -> int:
        return len(self.self_codes)

    def rows(self) -> Iterator[Tuple[int, int, int]]:
        for s, a, b in zip(self.self_codes, self.parent_a, self.parent_b):
            yield int(s), int(a), int(b)

    def as_array(self) -> np.ndarray:
        """Матрица (N, 3), только для чтения."""
        arr = np.column_stack([self.self_codes, self.parent_a, self.parent_b]).reshape(-1, 3)
        arr.setflags(write=False)
        return arr

    @property
    def code_map(self) -> Dict[Any, int]:
        return self.codec.old_to_new

    @property
    def inverse_map(self) -> Dict[int, Any]:
        return self.codec.new_to_old

    def founders(self) -> np.ndarray:
        mask = (self.parent_a == 0) & (self.parent_b == 0)
        return self.self_codes[mask]

    def to_frame(self) -> pd.DataFrame:
        df = pd.DataFrame(
            {
                self.names[0]: self.self_codes,
                self.names[1]: self.parent_a,
                self.names[2]: self.parent_b,
            }
        )
        df.attrs["code_map"] = self.code_map
        return df

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pedigree):
            return NotImplemented
        return (
            np.array_equal(self.as_array(), other.as_array())
            and self.codec == other.codec
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"<Pedigree with {len(self)} individuals, {len(self.founders())} founders>"
