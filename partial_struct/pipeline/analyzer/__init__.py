"""
Analyzer module.

Derives names, classifies fields and synthesizes the IR of the partial types
and their conversion routines.
"""

from __future__ import annotations

from .classifier import FieldClassifier
from .ir_nodes import (
    IR,
    ClassDef,
    ClassifiedField,
    Construct,
    ConversionSet,
    FieldAssignment,
    FieldDef,
    FieldTreatment,
    MethodDef,
    MethodKind,
    ParamDef,
    PartialFamily,
    PartialNames,
    ValueSource,
)
from .name_resolver import NameResolver, check_collisions
from .synthesizer import ConversionSynthesizer, StructSynthesizer, is_optional_type, wrap_optional

__all__ = [
    "IR",
    "ClassDef",
    "ClassifiedField",
    "Construct",
    "ConversionSet",
    "FieldAssignment",
    "FieldDef",
    "FieldTreatment",
    "MethodDef",
    "MethodKind",
    "ParamDef",
    "PartialFamily",
    "PartialNames",
    "ValueSource",
    "FieldClassifier",
    "NameResolver",
    "check_collisions",
    "StructSynthesizer",
    "ConversionSynthesizer",
    "is_optional_type",
    "wrap_optional",
]
