"""Partial Struct Generator

A Python package for deriving "partial" record types from a full record
description. Each ``partial(...)`` annotation yields a dataclass holding a
subset of the full type's fields, a companion class for the omitted fields,
and conversion methods between the full and partial representations.
"""

__version__ = "1.0.1"
__author__ = "François Lagunas"

from .errors import (
    FieldConflictError,
    NameCollisionError,
    OutputWriteError,
    PartialError,
    PartialGrammarError,
    RecordDefinitionError,
    UnknownFieldError,
)
from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    FormatterConfig,
    OutputConfig,
    OutputMode,
    PartialGenerator,
)

__all__ = [
    "PartialGenerator",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "AtomicWriter",
    "PartialError",
    "PartialGrammarError",
    "UnknownFieldError",
    "FieldConflictError",
    "NameCollisionError",
    "RecordDefinitionError",
    "OutputWriteError",
]
