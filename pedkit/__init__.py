"""Проверка, исправление и перекодирование родословных для смешанных моделей."""
from .adapter import SolverPedigreeView, decode_result, to_external
from .builder import build_pedigree
from .checker import PedigreeCheck, check_pedigree
from .codec import IdentityCodec
from .config import PedigreeConfig
from .errors import (
    BuilderInvariantViolation,
    DuplicateDefinitionError,
    InvalidColumnSpecError,
    MixedIdentifierError,
    PedigreeCycleError,
    PedigreeError,
    UnknownCodeError,
    UnknownIdentifierError,
)
from .pedigree import Pedigree
from .session import FitResult, GeneticSpec, SolverResult, fit, fit_many, get_pedigree
