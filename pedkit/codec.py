"""
IdentityCodec – взаимно-однозначное отображение исходных идентификаторов
в плотные коды 1…N и обратно.

Кодек сам порядок не выбирает: он нумерует идентификаторы в том порядке,
в каком их передали. ``IdentityCodec.sorted`` – политика «по возрастанию».
"""
from __future__ import annotations
from collections import Counter
from typing import Any, Dict, Hashable, Iterable, List

import numpy as np

from .errors import (
    DuplicateDefinitionError,
    MixedIdentifierError,
    PedigreeError,
    UnknownCodeError,
    UnknownIdentifierError,
)
from .table import identifier_kind


class IdentityCodec:
    def __init__(self, ordered_ids: Iterable[Hashable]):
        self._new_to_old: List[Any] = list(ordered_ids)
        self._old_to_new: Dict[Any, int] = {}
        for code, ident in enumerate(self._new_to_old, start=1):
            if ident is None:
                raise PedigreeError("Unknown-parent marker cannot be coded")
            if ident in self._old_to_new:
                raise DuplicateDefinitionError([ident])
            self._old_to_new[ident] = code

    @classmethod
    def sorted(cls, ids: Iterable[Hashable]) -> "IdentityCodec":
        """Коды по возрастанию естественного порядка значений."""
        unique = set(i for i in ids if i is not None)
        if identifier_kind(unique) == "mixed":
            raise MixedIdentifierError("Identifiers mix numeric and non-numeric values")
        try:
            return cls(sorted(unique))
        except TypeError as e:
            raise MixedIdentifierError(f"Identifiers are not mutually comparable: {e}") from e

    @staticmethod
    def check_unique(selves: Iterable[Hashable]) -> None:
        """Одна особь – одна строка; иначе DuplicateDefinitionError."""
        counts = Counter(s for s in selves if s is not None)
        dups = [ident for ident, n in counts.items() if n > 1]
        if dups:
            raise DuplicateDefinitionError(dups)

    def encode(self, ident: Hashable) -> int:
        try:
            return self._old_to_new[ident]
        except (KeyError, TypeError):
            raise UnknownIdentifierError(ident) from None

    def encode_parent(self, ident: Hashable) -> int:
        """Как ``encode``, но неизвестный родитель (None) → 0."""
        return 0 if ident is None else self.encode(ident)

    def decode(self, code: Any) -> Any:
        if isinstance(code, (bool, np.bool_)):
            raise UnknownCodeError(code)
        try:
            as_int = int(code)
        except (TypeError, ValueError):
            raise UnknownCodeError(code) from None
        if as_int != code or not 1 <= as_int <= len(self._new_to_old):
            raise UnknownCodeError(code)
        return self._new_to_old[as_int - 1]

    @property
    def old_to_new(self) -> Dict[Any, int]:
        return dict(self._old_to_new)

    @property
    def new_to_old(self) -> Dict[int, Any]:
        return {code: ident for code, ident in enumerate(self._new_to_old, start=1)}

    def is_identity(self) -> bool:
        return all(old == new for old, new in self._old_to_new.items())

    def __contains__(self, ident: Hashable) -> bool:
        try:
            return ident in self._old_to_new
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._new_to_old)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IdentityCodec):
            return NotImplemented
        return self._new_to_old == other._new_to_old

    def __repr__(self) -> str:
        return f"IdentityCodec(n={len(self)})"
