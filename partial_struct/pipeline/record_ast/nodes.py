"""
Node definitions for a full record type description.

These nodes represent the record type exactly as described by the caller,
before any annotation is parsed. They are never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Visibility(str, Enum):
    """Declared visibility of a field on the full type."""

    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True)
class FieldNode:
    """A field of the full record type."""

    name: str
    # Python type expression, e.g. "int" or "list[str] | None"
    type_expr: str
    visibility: Visibility = Visibility.PUBLIC

    # Original location in the description (for error messages)
    source_path: str = ""


@dataclass(frozen=True)
class RecordNode:
    """The full record type plus the annotations attached to it."""

    name: str
    fields: tuple[FieldNode, ...] = ()

    # Raw partial annotations, in declaration order: clause text or a config dict
    annotations: tuple[str | dict[str, Any], ...] = ()

    # Import statements the field types need
    imports: tuple[str, ...] = ()

    # Module already defining the full type ("" = emit it)
    source_module: str = ""

    # Raw description for reference
    raw: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def get_field(self, name: str) -> FieldNode | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None
