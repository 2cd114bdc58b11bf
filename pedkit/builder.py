"""
Построение канонической родословной из произвольной таблицы.

Шаги:
    1. выбор колонок (self, parent_a, parent_b) и нормализация пропусков;
    2. все идентификаторы – и особи, и родители без своей строки
       (для последних добавляются строки основателей);
    3. ранжирование по политике кодека (sort / appearance);
    4. топологическая сортировка: из доступных особей (родители уже
       закодированы) берётся особь с наименьшим рангом;
    5. перекодирование в 1…N и самопроверка результата.

Если порядок идентификаторов уже согласован с поколениями, политика ``sort``
даёт ровно порядок по возрастанию, поэтому правильная родословная
перекодируется тождественно.
"""
from __future__ import annotations
import heapq
import logging
from collections import defaultdict
from typing import Any, Dict, Hashable, Iterable, List, Tuple

from .checker import check_pedigree
from .codec import IdentityCodec
from .config import DEFAULT_CONFIG, PedigreeConfig
from .errors import BuilderInvariantViolation, MixedIdentifierError, PedigreeCycleError
from .pedigree import Pedigree
from .table import ColumnSelector, identifier_kind, normalize_identifier, read_triples, resolve_columns

LOGGER = logging.getLogger(__name__)

ParentMap = Dict[Any, Tuple[Any, Any]]


def _unique(values: Iterable[Hashable]) -> List[Hashable]:
    return list(dict.fromkeys(v for v in values if v is not None))


def _rank(selves, parents_a, parents_b, extra, policy: str) -> Dict[Any, int]:
    if policy == "sort":
        return IdentityCodec.sorted([*selves, *parents_a, *parents_b, *extra]).old_to_new
    # appearance: родители строки раньше самой особи
    seen = _unique(v for row in zip(parents_a, parents_b, selves) for v in row)
    seen = _unique([*seen, *extra])
    return {ident: r for r, ident in enumerate(seen, start=1)}


def _topological_order(parents: ParentMap, rank: Dict[Any, int]) -> List[Any]:
    children = defaultdict(list)
    pending = {}
    for ind, (a, b) in parents.items():
        known = {p for p in (a, b) if p is not None}
        pending[ind] = len(known)
        for p in known:
            children[p].append(ind)

    by_rank = {r: ind for ind, r in rank.items()}
    heap = [rank[ind] for ind, n in pending.items() if n == 0]
    heapq.heapify(heap)
    order = []
    while heap:
        ind = by_rank[heapq.heappop(heap)]
        order.append(ind)
        for child in children[ind]:
            pending[child] -= 1
            if pending[child] == 0:
                heapq.heappush(heap, rank[child])

    if len(order) < len(parents):
        raise PedigreeCycleError(ind for ind, n in pending.items() if n > 0)
    return order


def build_pedigree(
    table,
    columns: ColumnSelector = (0, 1, 2),
    config: PedigreeConfig | None = None,
    extra_ids: Iterable[Any] = (),
) -> Pedigree:
    """
    Возвращает каноническую ``Pedigree`` с присоединённым кодеком.

    ``extra_ids`` – особи, которых может не быть в таблице (например, из
    данных наблюдений); они становятся основателями.
    """
    config = config or DEFAULT_CONFIG
    if isinstance(table, Pedigree):
        table = table.to_frame()
    sub = resolve_columns(table, columns)
    selves, parents_a, parents_b = read_triples(sub, config.missing_values)
    extra = [normalize_identifier(v, config.missing_values) for v in extra_ids]
    LOGGER.info("🌳  Building pedigree from %d rows …", len(selves))

    keep = [i for i, s in enumerate(selves) if s is not None]
    if len(keep) < len(selves):
        LOGGER.warning("Dropping %d rows with unknown individual", len(selves) - len(keep))
        selves = [selves[i] for i in keep]
        parents_a = [parents_a[i] for i in keep]
        parents_b = [parents_b[i] for i in keep]

    if identifier_kind([*selves, *parents_a, *parents_b, *extra]) == "mixed":
        raise MixedIdentifierError(
            f"Columns {list(sub.columns)} mix numeric and non-numeric identifiers"
        )
    IdentityCodec.check_unique(selves)

    parents: ParentMap = dict(zip(selves, zip(parents_a, parents_b)))
    founders = [p for p in _unique([*parents_a, *parents_b, *extra]) if p not in parents]
    if founders:
        LOGGER.warning("Adding %d founder rows for individuals without their own row", len(founders))
        for p in founders:
            parents[p] = (None, None)

    rank = _rank(selves, parents_a, parents_b, extra, config.policy)
    codec = IdentityCodec(_topological_order(parents, rank))
    LOGGER.debug("Codec (%s policy): %r", config.policy, codec)
    if not codec.is_identity():
        LOGGER.info("🔢  Recoded %d individuals to 1…%d", len(codec), len(codec))

    order = codec.new_to_old
    pedigree = Pedigree(
        self_codes=list(order),
        parent_a=[codec.encode_parent(parents[order[c]][0]) for c in order],
        parent_b=[codec.encode_parent(parents[order[c]][1]) for c in order],
        codec=codec,
        names=tuple(sub.columns),
    )

    if config.validate:
        # в канонической форме неизвестный родитель всегда 0
        check = check_pedigree(pedigree)
        if not check.fully_correct:
            raise BuilderInvariantViolation(check)
    return pedigree
