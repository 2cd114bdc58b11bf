"""
Граница с внешним решателем (матрица родства / REML).

Наружу уходят только целые тройки (особь, родитель 1, родитель 2) в
канонических кодах; результаты решателя, индексированные кодами,
переводятся обратно в исходные идентификаторы.
"""
from __future__ import annotations
from typing import Any, Dict, Iterator, Tuple

import numpy as np
import pandas as pd

from .pedigree import Pedigree


class SolverPedigreeView:
    """Read-only представление канонической родословной для решателя."""

    __slots__ = ("_rows",)

    def __init__(self, pedigree: Pedigree):
        self._rows = pedigree.as_array()

    def __iter__(self) -> Iterator[Tuple[int, int, int]]:
        for s, a, b in self._rows:
            yield int(s), int(a), int(b)

    def __len__(self) -> int:
        return self._rows.shape[0]

    def as_array(self) -> np.ndarray:
        return self._rows

    def __repr__(self) -> str:
        return f"SolverPedigreeView(n={len(self)})"


def to_external(pedigree: Pedigree) -> SolverPedigreeView:
    return SolverPedigreeView(pedigree)


def decode_result(pedigree: Pedigree, result_by_code):
    """
    Перекодирует ключи результата (коды 1…N) в исходные идентификаторы.

    Значения не трогаются: для DataFrame сохраняются все колонки
    (например, стандартные ошибки). Поддерживаются Mapping, Series и
    DataFrame, индексированные кодами. Любой код вне 1…N –
    UnknownCodeError.
    """
    codec = pedigree.codec
    if isinstance(result_by_code, (pd.Series, pd.DataFrame)):
        decoded = result_by_code.copy()
        decoded.index = pd.Index(
            [codec.decode(code) for code in result_by_code.index],
            name=result_by_code.index.name,
        )
        return decoded

    decoded: Dict[Any, Any] = {}
    for code, value in result_by_code.items():
        decoded[codec.decode(code)] = value
    return decoded


def encode_ids(pedigree: Pedigree, ids) -> np.ndarray:
    """Исходные идентификаторы → коды (например, колонка особей в данных)."""
    return np.array([pedigree.codec.encode(i) for i in ids], dtype=np.int64)
