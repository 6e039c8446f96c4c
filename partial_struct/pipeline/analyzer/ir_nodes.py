"""
IR (Intermediate Representation) node definitions.

These nodes describe the generated types and conversion routines without
committing to any output syntax. The backend renders them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..annotation.config import PartialConfig
from ..record_ast.nodes import FieldNode, RecordNode


class FieldTreatment(Enum):
    """How a field of the full type appears in one partial type."""

    KEPT = "kept"  # copied with its original type
    OMITTED = "omitted"  # moved to the omitted companion type
    OPTIONAL_WRAPPED = "optional"  # kept, but as T | None


@dataclass(frozen=True)
class ClassifiedField:
    """A field of the full type and its treatment under one configuration."""

    field: FieldNode
    treatment: FieldTreatment

    @property
    def name(self) -> str:
        return self.field.name


@dataclass(frozen=True)
class PartialNames:
    """Every name derived for one configuration."""

    target: str  # PartialUser
    omitted: str  # PartialUserOmitted
    to_full: str  # to_user
    to_full_cloned: str  # to_user_cloned
    from_full: str  # from_user
    split: str  # from_user_with_omitted
    into_target: str  # into_partial_user_with_omitted (on the full type)

    def type_names(self) -> list[str]:
        return [self.target, self.omitted]

    def method_names(self) -> list[str]:
        return [self.to_full, self.to_full_cloned, self.from_full, self.split]


@dataclass
class FieldDef:
    """A field of a generated class."""

    name: str
    type_expr: str
    # Python expression used as default value, None = required
    default: str | None = None


class ValueSource(Enum):
    """Where a conversion reads the value of one field from."""

    SELF = "self"  # attribute of the instance the method is called on
    PARAM = "param"  # method parameter
    SELF_OR_FALLBACK = "self_or_fallback"  # instance attribute unless absent, then parameter
    FULL = "full"  # attribute of the full instance passed in


@dataclass(frozen=True)
class FieldAssignment:
    """One keyword argument of a constructor call inside a conversion."""

    field_name: str
    source: ValueSource
    param_name: str | None = None
    deep_copy: bool = False


@dataclass
class Construct:
    """A constructor call: ``type_name(field=value, ...)``."""

    type_name: str
    assignments: list[FieldAssignment] = field(default_factory=list)


class MethodKind(Enum):
    INSTANCE = "instance"
    CLASSMETHOD = "classmethod"


@dataclass
class ParamDef:
    """A method parameter."""

    name: str
    type_expr: str
    default: str | None = None


@dataclass
class MethodDef:
    """A generated method.

    The body is either a tuple of constructor calls returned together, or a
    delegation to another callable with the method's receiver as argument.
    """

    name: str
    kind: MethodKind = MethodKind.INSTANCE
    params: list[ParamDef] = field(default_factory=list)
    return_type: str = ""
    docstring: str = ""

    # Returned values; more than one is returned as a tuple
    returns: list[Construct] = field(default_factory=list)

    # Dotted callable the method forwards its receiver to (e.g. "PartialUser.from_user_with_omitted")
    delegate_to: str | None = None


@dataclass
class ClassDef:
    """A generated dataclass."""

    name: str
    fields: list[FieldDef] = field(default_factory=list)
    decorators: list[str] = field(default_factory=list)
    docstring: str | None = None
    methods: list[MethodDef] = field(default_factory=list)


@dataclass
class ConversionSet:
    """The conversion routines generated for one configuration."""

    reconstruct: MethodDef
    from_full: MethodDef
    split: MethodDef
    # Lives on the full type
    forward: MethodDef
    reconstruct_cloned: MethodDef | None = None

    def partial_methods(self) -> list[MethodDef]:
        """Methods attached to the partial type, in output order."""
        methods = [self.reconstruct]
        if self.reconstruct_cloned is not None:
            methods.append(self.reconstruct_cloned)
        methods.extend([self.from_full, self.split])
        return methods


@dataclass
class PartialFamily:
    """Everything generated for one configuration."""

    config: PartialConfig
    names: PartialNames
    classification: list[ClassifiedField]
    partial_type: ClassDef
    omitted_type: ClassDef
    conversions: ConversionSet

    def fields_with(self, treatment: FieldTreatment) -> list[ClassifiedField]:
        return [f for f in self.classification if f.treatment == treatment]


@dataclass
class IR:
    """Complete intermediate representation for one record."""

    record: RecordNode
    families: list[PartialFamily] = field(default_factory=list)

    # The full type itself, when it is emitted rather than imported
    full_type: ClassDef | None = None

    # Module the full type is imported from, when not emitted
    source_module: str = ""

    # Comment placed at the top of the generated file
    generation_comment: str = ""
