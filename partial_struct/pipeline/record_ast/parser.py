"""
Record description parser.

Phase 1 of the pipeline: turn the JSON record description into an immutable
RecordNode, checking names and type expressions but without looking at the
partial annotations themselves.
"""

from __future__ import annotations

import ast
import logging
from typing import Any

from ...errors import RecordDefinitionError
from ...utils import is_field_name, is_type_name
from .nodes import FieldNode, RecordNode, Visibility

logger = logging.getLogger(__name__)


class RecordParser:
    """Parses a record description dictionary into a RecordNode."""

    KNOWN_KEYS = {"name", "fields", "partials", "imports", "source_module"}
    FIELD_KEYS = {"name", "type", "visibility"}

    def parse(self, description: dict[str, Any], name: str | None = None) -> RecordNode:
        """
        Parse a record description.

        Args:
            description: The decoded JSON description
            name: Overrides the record name found in the description

        Returns:
            RecordNode with fields in declaration order
        """
        if not isinstance(description, dict):
            raise RecordDefinitionError("Record description must be a JSON object")

        for key in description:
            # Skip comment fields
            if key.startswith("_comment") or key == "$comment":
                continue
            if key not in self.KNOWN_KEYS:
                raise RecordDefinitionError(f"Unknown key '{key}' in record description", identifier=key)

        record_name = name if name is not None else description.get("name")
        if not isinstance(record_name, str) or not is_type_name(record_name):
            raise RecordDefinitionError(f"Record name must be an identifier, got {record_name!r}", identifier=str(record_name))

        fields = self._parse_fields(description.get("fields", []))
        annotations = self._parse_annotations(description.get("partials"))
        imports = self._parse_imports(description.get("imports", []))
        source_module = self._parse_source_module(description.get("source_module", ""))

        logger.debug("Parsed record %s: %d fields, %d partial annotations", record_name, len(fields), len(annotations))

        return RecordNode(
            name=record_name,
            fields=tuple(fields),
            annotations=tuple(annotations),
            imports=tuple(imports),
            source_module=source_module,
            raw=description,
        )

    def _parse_fields(self, fields: Any) -> list[FieldNode]:
        if not isinstance(fields, list):
            raise RecordDefinitionError("'fields' must be a list")

        result: list[FieldNode] = []
        seen: set[str] = set()
        for i, field_desc in enumerate(fields):
            path = f"fields[{i}]"
            if not isinstance(field_desc, dict):
                raise RecordDefinitionError(f"{path} must be an object")

            unknown = set(field_desc) - self.FIELD_KEYS
            if unknown:
                raise RecordDefinitionError(f"{path} has unknown keys: {', '.join(sorted(unknown))}")

            field_name = field_desc.get("name")
            if not isinstance(field_name, str) or not is_field_name(field_name):
                raise RecordDefinitionError(
                    f"{path}: field name must be an identifier that is not a keyword, 'self' or 'cls', got {field_name!r}",
                    identifier=str(field_name),
                )
            if field_name in seen:
                raise RecordDefinitionError(f"{path}: duplicate field '{field_name}'", identifier=field_name)
            seen.add(field_name)

            type_expr = field_desc.get("type")
            if not isinstance(type_expr, str) or not self._is_type_expression(type_expr):
                raise RecordDefinitionError(f"{path}: field '{field_name}' has an invalid type {type_expr!r}", identifier=field_name)

            visibility = field_desc.get("visibility", Visibility.PUBLIC.value)
            try:
                visibility = Visibility(visibility)
            except ValueError:
                raise RecordDefinitionError(f"{path}: unknown visibility {visibility!r}", identifier=field_name) from None

            result.append(FieldNode(name=field_name, type_expr=type_expr.strip(), visibility=visibility, source_path=path))
        return result

    def _parse_annotations(self, partials: Any) -> list[str | dict[str, Any]]:
        """Normalize the 'partials' entry; no annotation means one empty annotation."""
        if partials is None:
            return [""]
        if isinstance(partials, (str, dict)):
            partials = [partials]
        if not isinstance(partials, list):
            raise RecordDefinitionError("'partials' must be a list of annotation strings or objects")
        if not partials:
            return [""]

        for i, annotation in enumerate(partials):
            if not isinstance(annotation, (str, dict)):
                raise RecordDefinitionError(f"partials[{i}] must be a string or an object", config_index=i)
        return list(partials)

    def _parse_imports(self, imports: Any) -> list[str]:
        if not isinstance(imports, list):
            raise RecordDefinitionError("'imports' must be a list of import statements")

        result = []
        for line in imports:
            if not isinstance(line, str):
                raise RecordDefinitionError(f"Import must be a string, got {line!r}")
            try:
                module = ast.parse(line.strip(), mode="exec")
            except SyntaxError as e:
                raise RecordDefinitionError(f"Invalid import statement {line!r}: {e.msg}") from e
            if len(module.body) != 1 or not isinstance(module.body[0], (ast.Import, ast.ImportFrom)):
                raise RecordDefinitionError(f"Expected a single import statement, got {line!r}")
            result.append(line.strip())
        return result

    def _parse_source_module(self, source_module: Any) -> str:
        if not isinstance(source_module, str):
            raise RecordDefinitionError("'source_module' must be a string")
        if source_module and not all(is_type_name(part) for part in source_module.split(".")):
            raise RecordDefinitionError(f"Invalid module path {source_module!r}", identifier=source_module)
        return source_module

    @staticmethod
    def _is_type_expression(text: str) -> bool:
        """Check that text parses as a Python expression usable as an annotation."""
        if not text.strip():
            return False
        try:
            ast.parse(text.strip(), mode="eval")
        except SyntaxError:
            return False
        return True
