"""
Чтение таблицы родословной: выбор трёх колонок (особь, родитель 1, родитель 2)
и единая нормализация идентификаторов.

Неизвестный родитель – ``None`` после нормализации, независимо от того,
был ли он записан как 0, NaN, None или pd.NA.
"""
from __future__ import annotations
from numbers import Integral
from typing import Any, Iterable, List, Sequence, Tuple

import numpy as np
import pandas as pd

from .errors import InvalidColumnSpecError

ColumnSelector = Sequence[int | str]
Triples = Tuple[List[Any], List[Any], List[Any]]


def as_frame(table: Any) -> pd.DataFrame:
    if isinstance(table, pd.DataFrame):
        return table
    try:
        return pd.DataFrame(table)
    except (TypeError, ValueError) as e:
        raise InvalidColumnSpecError(f"Cannot read pedigree table: {e}") from e


def resolve_columns(table: Any, columns: ColumnSelector = (0, 1, 2)) -> pd.DataFrame:
    """
    Возвращает подтаблицу из трёх колонок в порядке (self, parent_a, parent_b).

    ``columns`` – три позиции (int) или три имени (str); смешивать нельзя.
    Целые числа всегда трактуются как позиции, даже если колонки таблицы
    названы числами.
    """
    df = as_frame(table)
    if isinstance(columns, (str, bytes)) or not isinstance(columns, Iterable):
        raise InvalidColumnSpecError(f"Column selector must hold three columns, got {columns!r}")
    columns = list(columns)
    if len(columns) != 3:
        raise InvalidColumnSpecError(f"Column selector must hold exactly three columns, got {len(columns)}")

    if all(isinstance(c, Integral) and not isinstance(c, bool) for c in columns):
        positions = [int(c) for c in columns]
        n_cols = df.shape[1]
        bad = [p for p in positions if not 0 <= p < n_cols]
        if bad:
            raise InvalidColumnSpecError(f"Column positions {bad} out of range for a table with {n_cols} columns")
        if len(set(positions)) != 3:
            raise InvalidColumnSpecError(f"Column positions must be distinct, got {positions}")
        return df.iloc[:, positions]

    if all(isinstance(c, str) for c in columns):
        unknown = [c for c in columns if c not in df.columns]
        if unknown:
            raise InvalidColumnSpecError(f"Unknown columns: {unknown}")
        if len(set(columns)) != 3:
            raise InvalidColumnSpecError(f"Column names must be distinct, got {columns}")
        if any(not isinstance(df.columns.get_loc(c), Integral) for c in columns):
            raise InvalidColumnSpecError(f"Column names {columns} are not unique in the table")
        return df.loc[:, columns]

    raise InvalidColumnSpecError(f"Column selector mixes positions and names: {columns!r}")


def is_missing(value: Any, missing_values: tuple = (0,)) -> bool:
    if value is None:
        return True
    if pd.api.types.is_scalar(value) and not isinstance(value, str) and pd.isna(value):
        return True
    return any(
        value == m
        and isinstance(value, str) == isinstance(m, str)
        and isinstance(value, bool) == isinstance(m, bool)
        for m in missing_values
    )


def normalize_identifier(value: Any, missing_values: tuple = (0,)) -> Any:
    """numpy-скаляры → python, 5.0 → 5, любой маркер пропуска → None.

    Строки не меняются: " A" и "A" – разные особи.
    """
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, str) and value == "":
        return None
    if is_missing(value, missing_values):
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def read_triples(sub: pd.DataFrame, missing_values: tuple = (0,)) -> Triples:
    selves, parents_a, parents_b = [], [], []
    for s, a, b in sub.itertuples(index=False, name=None):
        selves.append(normalize_identifier(s, missing_values))
        parents_a.append(normalize_identifier(a, missing_values))
        parents_b.append(normalize_identifier(b, missing_values))
    return selves, parents_a, parents_b


def identifier_kind(values: Iterable[Any]) -> str:
    """'int' | 'number' | 'str' | 'other' | 'mixed' | 'empty' для непустых значений."""
    kinds = set()
    for v in values:
        if v is None:
            continue
        if isinstance(v, bool):
            kinds.add("other")
        elif isinstance(v, Integral):
            kinds.add("int")
        elif isinstance(v, (float, np.floating)):
            kinds.add("number")
        elif isinstance(v, str):
            kinds.add("str")
        else:
            kinds.add("other")
    if not kinds:
        return "empty"
    if kinds == {"int", "number"}:
        return "number"
    if len(kinds) > 1:
        return "mixed"
    return kinds.pop()
