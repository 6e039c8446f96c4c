"""
Struct and conversion synthesizers.

Build the IR of the partial type, its omitted companion type and the
conversion routines between them and the full type, from the classified
fields of one configuration.
"""

from __future__ import annotations

import ast

from ..annotation.config import PartialConfig
from ..record_ast.nodes import RecordNode
from .ir_nodes import (
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
    PartialNames,
    ValueSource,
)

# Expressions that bind tighter than "|" and can be wrapped without parentheses
_ATOMIC_TYPE_NODES = (ast.Name, ast.Attribute, ast.Subscript, ast.Constant, ast.BinOp)


def _is_optional_node(node: ast.expr) -> bool:
    if isinstance(node, ast.Constant):
        if node.value is None:
            return True
        if isinstance(node.value, str):
            # Forward reference written as a string
            try:
                return _is_optional_node(ast.parse(node.value, mode="eval").body)
            except SyntaxError:
                return False
        return False
    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        return _is_optional_node(node.left) or _is_optional_node(node.right)
    if isinstance(node, ast.Subscript):
        origin = node.value
        origin_name = origin.id if isinstance(origin, ast.Name) else origin.attr if isinstance(origin, ast.Attribute) else ""
        if origin_name == "Optional":
            return True
        if origin_name == "Union":
            members = node.slice.elts if isinstance(node.slice, ast.Tuple) else [node.slice]
            return any(_is_optional_node(m) for m in members)
    return False


def is_optional_type(type_expr: str) -> bool:
    """Check whether a type expression already admits None at its top level."""
    return _is_optional_node(ast.parse(type_expr, mode="eval").body)


def wrap_optional(type_expr: str) -> str:
    """
    Wrap a type expression in the optional-value container.

    Examples:
        "str" -> "str | None"
        "list[int]" -> "list[int] | None"
        "int | None" -> "int | None"
        "Optional[int]" -> "Optional[int]"
    """
    node = ast.parse(type_expr, mode="eval").body
    if _is_optional_node(node):
        return type_expr
    if not isinstance(node, _ATOMIC_TYPE_NODES):
        type_expr = f"({type_expr})"
    return f"{type_expr} | None"


def _describe_omitted(record: RecordNode, classification: list[ClassifiedField]) -> str:
    omitted = [f.name for f in classification if f.treatment == FieldTreatment.OMITTED]
    if not omitted:
        return f"A partial version of `{record.name}` including all fields."
    return f"A partial version of `{record.name}` omitting the fields: {', '.join(omitted)}."


class StructSynthesizer:
    """Builds the partial type and its omitted companion type."""

    def synthesize(
        self,
        record: RecordNode,
        config: PartialConfig,
        names: PartialNames,
        classification: list[ClassifiedField],
    ) -> tuple[ClassDef, ClassDef]:
        """
        Build the class definitions for one configuration.

        Fields keep the full type's declaration order. Every generated field is
        public, whatever the visibility of the original field.

        Returns:
            (partial type, omitted companion type); methods are attached later
        """
        partial_fields: list[FieldDef] = []
        omitted_fields: list[FieldDef] = []

        for classified in classification:
            field = classified.field
            if classified.treatment == FieldTreatment.KEPT:
                partial_fields.append(FieldDef(name=field.name, type_expr=field.type_expr))
            elif classified.treatment == FieldTreatment.OPTIONAL_WRAPPED:
                partial_fields.append(FieldDef(name=field.name, type_expr=wrap_optional(field.type_expr), default="None"))
            else:
                omitted_fields.append(FieldDef(name=field.name, type_expr=field.type_expr))

        partial_type = ClassDef(
            name=names.target,
            fields=partial_fields,
            decorators=list(config.derive),
            docstring=_describe_omitted(record, classification),
        )
        omitted_type = ClassDef(
            name=names.omitted,
            fields=omitted_fields,
            docstring=f"Fields of `{record.name}` left out of `{names.target}`.",
        )
        return partial_type, omitted_type

    def full_type(self, record: RecordNode, forwards: list[MethodDef]) -> ClassDef:
        """Build the full type itself, carrying the forwarding methods of every configuration."""
        return ClassDef(
            name=record.name,
            fields=[FieldDef(name=f.name, type_expr=f.type_expr) for f in record.fields],
            methods=list(forwards),
        )


class ConversionSynthesizer:
    """Builds the conversion routines of one configuration."""

    def __init__(self, add_cloned_reconstruction: bool = True):
        self.add_cloned_reconstruction = add_cloned_reconstruction

    def synthesize(self, record: RecordNode, names: PartialNames, classification: list[ClassifiedField]) -> ConversionSet:
        """
        Build reconstruction, from-full, split and forwarding methods.

        Args:
            record: The full record type
            names: Names derived for the configuration
            classification: Treatment of every field

        Returns:
            The ConversionSet for the configuration
        """
        reconstruct_cloned = None
        if self.add_cloned_reconstruction:
            reconstruct_cloned = self._reconstruct(record, names, classification, cloned=True)

        return ConversionSet(
            reconstruct=self._reconstruct(record, names, classification, cloned=False),
            reconstruct_cloned=reconstruct_cloned,
            from_full=self._from_full(record, names, classification),
            split=self._split(record, names, classification),
            forward=self._forward(names),
        )

    def _reconstruct(self, record: RecordNode, names: PartialNames, classification: list[ClassifiedField], cloned: bool) -> MethodDef:
        omitted_params: list[ParamDef] = []
        fallback_params: list[ParamDef] = []
        assignments: list[FieldAssignment] = []

        for classified in classification:
            field = classified.field
            if classified.treatment == FieldTreatment.KEPT:
                assignments.append(FieldAssignment(field.name, ValueSource.SELF, deep_copy=cloned))
            elif classified.treatment == FieldTreatment.OMITTED:
                omitted_params.append(ParamDef(name=field.name, type_expr=field.type_expr))
                assignments.append(FieldAssignment(field.name, ValueSource.PARAM, param_name=field.name))
            else:
                fallback_params.append(ParamDef(name=field.name, type_expr=wrap_optional(field.type_expr), default="None"))
                assignments.append(FieldAssignment(field.name, ValueSource.SELF_OR_FALLBACK, param_name=field.name, deep_copy=cloned))

        if cloned:
            docstring = (
                f"Creates a new `{record.name}` from deep copies of this partial record's fields and the omitted fields.\n\n"
                "The partial record is left untouched and shares no mutable state with the result."
            )
        else:
            docstring = f"Converts this partial record into `{record.name}` by providing the omitted fields."
        if fallback_params:
            docstring += (
                "\n\nOptional fields left as None take the matching fallback argument. "
                f"When both are None the field is None, which is only valid if `{record.name}` allows it."
            )

        return MethodDef(
            name=names.to_full_cloned if cloned else names.to_full,
            params=omitted_params + fallback_params,
            return_type=record.name,
            docstring=docstring,
            returns=[Construct(record.name, assignments)],
        )

    def _from_full(self, record: RecordNode, names: PartialNames, classification: list[ClassifiedField]) -> MethodDef:
        partial = Construct("cls")
        for classified in classification:
            if classified.treatment != FieldTreatment.OMITTED:
                partial.assignments.append(FieldAssignment(classified.name, ValueSource.FULL))

        return MethodDef(
            name=names.from_full,
            kind=MethodKind.CLASSMETHOD,
            params=[ParamDef(name="full", type_expr=record.name)],
            return_type=names.target,
            docstring=f"Converts `{record.name}` into this partial record by projecting the included fields.",
            returns=[partial],
        )

    def _split(self, record: RecordNode, names: PartialNames, classification: list[ClassifiedField]) -> MethodDef:
        partial = Construct("cls")
        omitted = Construct(names.omitted)
        # One pass: every field lands in exactly one of the two constructors
        for classified in classification:
            target = omitted if classified.treatment == FieldTreatment.OMITTED else partial
            target.assignments.append(FieldAssignment(classified.name, ValueSource.FULL))

        return MethodDef(
            name=names.split,
            kind=MethodKind.CLASSMETHOD,
            params=[ParamDef(name="full", type_expr=record.name)],
            return_type=f"tuple[{names.target}, {names.omitted}]",
            docstring=f"Splits `{record.name}` into this partial record and the omitted fields.",
            returns=[partial, omitted],
        )

    def _forward(self, names: PartialNames) -> MethodDef:
        return MethodDef(
            name=names.into_target,
            return_type=f"tuple[{names.target}, {names.omitted}]",
            docstring=f"Splits this record into `{names.target}` and `{names.omitted}`.",
            delegate_to=f"{names.target}.{names.split}",
        )
