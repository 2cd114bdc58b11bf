"""
Сессия подгонки модели: родословная строится и перекодируется, данные
переводятся в коды, внешний решатель (REML и т.п.) вызывается как чёрный
ящик, а его оценки возвращаются в исходных идентификаторах.

Каждая подгонка владеет своей ``Pedigree``; решатель получает только
read-only представление. ``fit_many`` запускает независимые подгонки
параллельно (бутстрэп, перебор родословных).
"""
from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple

import pandas as pd
from tqdm import tqdm

from .adapter import SolverPedigreeView, decode_result, encode_ids, to_external
from .builder import build_pedigree
from .config import DEFAULT_CONFIG, PedigreeConfig
from .errors import InvalidColumnSpecError
from .pedigree import Pedigree
from .table import ColumnSelector, as_frame, normalize_identifier

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneticSpec:
    """Аддитивный генетический эффект: таблица родословной + колонка особей в данных."""
    pedigree: Any
    id: str
    columns: ColumnSelector = (0, 1, 2)


@dataclass(frozen=True)
class SolverResult:
    varcomp: Mapping[str, float]
    ranef_by_code: Any = None
    extra: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FitResult:
    varcomp: dict
    ranef: Any
    pedigree: Optional[Pedigree]
    raw: SolverResult


Solver = Callable[[pd.DataFrame, Optional[SolverPedigreeView]], SolverResult]


def fit(
    data,
    solver: Solver,
    genetic: GeneticSpec | None = None,
    config: PedigreeConfig | None = None,
) -> FitResult:
    config = config or DEFAULT_CONFIG
    data = as_frame(data).copy()

    if genetic is None:
        LOGGER.info("🚀  Solving without genetic effect (%d records) …", len(data))
        raw = solver(data, None)
        return FitResult(dict(raw.varcomp), raw.ranef_by_code, None, raw)

    if genetic.id not in data.columns:
        raise InvalidColumnSpecError(f"Data has no column {genetic.id!r}")
    ids = [normalize_identifier(v, config.missing_values) for v in data[genetic.id]]
    if any(i is None for i in ids):
        raise InvalidColumnSpecError(f"Column {genetic.id!r} has records with unknown individual")

    LOGGER.info("📦  Building pedigree …")
    pedigree = build_pedigree(genetic.pedigree, genetic.columns, config, extra_ids=ids)
    data[genetic.id] = encode_ids(pedigree, ids)

    LOGGER.info("🚀  Solving (%d records, %d individuals) …", len(data), len(pedigree))
    raw = solver(data, to_external(pedigree))

    ranef = None
    if raw.ranef_by_code is not None:
        ranef = decode_result(pedigree, raw.ranef_by_code)
    return FitResult(dict(raw.varcomp), ranef, pedigree, raw)


def get_pedigree(result: FitResult) -> Pedigree | None:
    """Перекодированная родословная подгонки; None, если генетического эффекта не было."""
    return result.pedigree


def fit_many(
    jobs: Iterable[Tuple[Any, GeneticSpec | None]],
    solver: Solver,
    max_workers: int | None = None,
    config: PedigreeConfig | None = None,
) -> List[FitResult]:
    """
    Независимые подгонки ``(data, genetic)`` параллельно; результаты – в
    порядке заданий. Первая по порядку ошибка пробрасывается как есть.
    """
    config = config or DEFAULT_CONFIG
    jobs = list(jobs)
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [pool.submit(fit, data, solver, genetic, config) for data, genetic in jobs]
        for _ in tqdm(as_completed(futures), total=len(futures), desc="fits",
                      disable=not config.show_progress):
            pass
    return [f.result() for f in futures]
