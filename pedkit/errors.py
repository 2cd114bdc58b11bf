"""
Исключения пакета.

Пользовательские ошибки (селектор колонок, дубли, петли) поднимаются сразу;
``BuilderInvariantViolation`` означает дефект самого построителя.
"""
from __future__ import annotations


class PedigreeError(Exception):
    """Базовый класс всех ошибок pedkit."""


class InvalidColumnSpecError(PedigreeError, ValueError):
    """Селектор не сводится ровно к трём колонкам таблицы."""


class MixedIdentifierError(InvalidColumnSpecError):
    """В колонках идентификаторов смешаны числа и строки."""


class DuplicateDefinitionError(PedigreeError, ValueError):
    def __init__(self, duplicates):
        self.duplicates = list(duplicates)
        shown = ", ".join(repr(d) for d in self.duplicates[:10])
        more = "" if len(self.duplicates) <= 10 else f" (+{len(self.duplicates) - 10} more)"
        super().__init__(f"Individuals defined on more than one row: {shown}{more}")


class PedigreeCycleError(PedigreeError, ValueError):
    def __init__(self, members):
        self.members = list(members)
        shown = ", ".join(repr(m) for m in self.members[:10])
        super().__init__(f"Pedigree contains a directed loop through: {shown}")


class BuilderInvariantViolation(PedigreeError, AssertionError):
    def __init__(self, check):
        self.check = check
        super().__init__(
            f"Builder produced a non-canonical pedigree (failed: {', '.join(check.failed())})"
        )


class UnknownIdentifierError(PedigreeError, KeyError):
    """``encode`` для значения вне исходного набора идентификаторов."""


class UnknownCodeError(PedigreeError, KeyError):
    """Код вне диапазона ``1..N``."""
