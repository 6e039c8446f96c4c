"""
Python code generation backend.

Renders the IR as a module of ``@dataclass(kw_only=True)`` classes.
"""

from __future__ import annotations

import collections
import sys
from typing import Any

from ..analyzer.ir_nodes import IR, ClassDef, Construct, FieldAssignment, MethodDef, MethodKind, ValueSource
from ..analyzer.name_resolver import COPY_ALIAS
from .base import CodeBackend

INDENT = "    "

# Modules imported under a private name so record fields cannot shadow them
MODULE_ALIASES = {"copy": COPY_ALIAS}


def _indent(lines: list[str], level: int = 1) -> list[str]:
    return [INDENT * level + line if line else "" for line in lines]


def _docstring_lines(docstring: str) -> list[str]:
    parts = docstring.split("\n")
    if len(parts) == 1:
        return [f'"""{docstring}"""']
    return [f'"""{parts[0]}', *parts[1:], '"""']


class PythonBackend(CodeBackend):
    """Python code generation backend."""

    TEMPLATE_LANG = "python"
    FILE_EXTENSION = "py"

    def __init__(self, config):
        super().__init__(config)
        self.python_imports: set[tuple[str, str]] = set()

    def generate(self, ir: IR) -> str:
        """Generate Python code from IR."""
        # Reset import tracking
        self.python_imports = {("dataclasses", "dataclass")}

        if self.config.use_future_annotations:
            self.python_imports.add(("__future__", "annotations"))

        # Derive markers we know the home of get imported
        for family in ir.families:
            for marker in family.partial_type.decorators:
                module = self.config.derive_imports.get(marker)
                if module:
                    self.python_imports.add((module, marker))

        blocks: list[str] = []
        if ir.full_type is not None:
            blocks.append(self.render_class(ir.full_type))
        for family in ir.families:
            blocks.append(self.render_class(family.partial_type))
            blocks.append(self.render_class(family.omitted_type))

        attachments = []
        if ir.full_type is None:
            for family in ir.families:
                attachments.append(self._prepare_attachment(ir.record.name, family.conversions.forward))

        # Rendering the methods may add imports, so the prefix comes last
        prefix = self.prefix_template.render(
            generation_comment=ir.generation_comment,
            import_groups=self._assemble_imports(ir),
        )
        suffix = self.suffix_template.render(record_name=ir.record.name, attachments=attachments)

        body = "\n\n\n".join(block.rstrip("\n") for block in blocks)
        output = prefix.rstrip("\n") + "\n\n\n" + body + "\n"
        if suffix.strip():
            output += "\n\n" + suffix.strip("\n") + "\n"
        return output

    def render_class(self, class_def: ClassDef) -> str:
        """Render one generated dataclass."""
        return self.class_template.render(self._prepare_class_context(class_def))

    def _prepare_class_context(self, class_def: ClassDef) -> dict[str, Any]:
        """
        Prepare the template context for a class.

        Args:
            class_def: The class definition

        Returns:
            Dictionary of template variables
        """
        body: list[str] = []
        if class_def.docstring:
            body.extend(_docstring_lines(class_def.docstring))

        if class_def.fields:
            if body:
                body.append("")
            for field in class_def.fields:
                line = f"{field.name}: {field.type_expr}"
                if field.default is not None:
                    line += f" = {field.default}"
                body.append(line)

        for method in class_def.methods:
            if body:
                body.append("")
            body.extend(self._render_method(method))

        if not body:
            body.append("pass")

        return {
            "CLASS_NAME": class_def.name,
            "DECORATORS": class_def.decorators,
            "BODY": _indent(body),
        }

    def _prepare_attachment(self, record_name: str, method: MethodDef) -> dict[str, Any]:
        """A forwarding method defined at module level and set on the imported full type."""
        return {
            "METHOD_NAME": method.name,
            "LINES": self._render_method(method, function_name=f"_{method.name}", self_type=record_name),
        }

    def _render_method(self, method: MethodDef, function_name: str | None = None, self_type: str | None = None) -> list[str]:
        lines: list[str] = []
        if method.kind == MethodKind.CLASSMETHOD:
            lines.append("@classmethod")
            params = ["cls"]
        else:
            params = [f"self: {self._annotation(self_type)}" if self_type else "self"]

        for param in method.params:
            rendered = f"{param.name}: {self._annotation(param.type_expr)}"
            if param.default is not None:
                rendered += f" = {param.default}"
            params.append(rendered)

        lines.append(f"def {function_name or method.name}({', '.join(params)}) -> {self._annotation(method.return_type)}:")

        body: list[str] = []
        if method.docstring:
            body.extend(_docstring_lines(method.docstring))

        receiver = "cls" if method.kind == MethodKind.CLASSMETHOD else "self"
        if method.delegate_to:
            body.append(f"return {method.delegate_to}({receiver})")
        elif len(method.returns) == 1:
            body.extend(self._render_construct(method.returns[0], prefix="return "))
        else:
            body.append("return (")
            for construct in method.returns:
                body.extend(_indent(self._render_construct(construct, suffix=",")))
            body.append(")")

        lines.extend(_indent(body))
        return lines

    def _render_construct(self, construct: Construct, prefix: str = "", suffix: str = "") -> list[str]:
        if not construct.assignments:
            return [f"{prefix}{construct.type_name}(){suffix}"]
        lines = [f"{prefix}{construct.type_name}("]
        for assignment in construct.assignments:
            lines.append(f"{INDENT}{assignment.field_name}={self._render_value(assignment)},")
        lines.append(f"){suffix}")
        return lines

    def _render_value(self, assignment: FieldAssignment) -> str:
        name = assignment.field_name
        if assignment.source == ValueSource.PARAM:
            return assignment.param_name

        if assignment.source == ValueSource.FULL:
            return f"full.{name}"

        value = f"self.{name}"
        if assignment.deep_copy:
            self.python_imports.add(("copy", ""))
            value = f"{COPY_ALIAS}.deepcopy({value})"

        if assignment.source == ValueSource.SELF_OR_FALLBACK:
            return f"{value} if self.{name} is not None else {assignment.param_name}"
        return value

    def _annotation(self, type_expr: str) -> str:
        """Method annotations name classes defined later in the module; quote them without PEP 563."""
        if self.config.use_future_annotations:
            return type_expr
        return repr(type_expr)

    def _assemble_imports(self, ir: IR) -> list[list[str]]:
        """Group imports: __future__, standard library, third party, record imports, full type."""
        import_groups: dict[str, set[str]] = collections.defaultdict(set)
        for module, name in self.python_imports:
            import_groups[module].add(name)

        def format_import(module: str) -> str:
            names = sorted(n for n in import_groups[module] if n)
            if not names:
                alias = MODULE_ALIASES.get(module)
                return f"import {module} as {alias}" if alias else f"import {module}"
            return f"from {module} import {', '.join(names)}"

        future = [format_import("__future__")] if "__future__" in import_groups else []
        modules = sorted(m for m in import_groups if m != "__future__")
        # "import x" sorts before "from x import y"
        modules.sort(key=lambda m: (bool([n for n in import_groups[m] if n]), m))

        stdlib = [format_import(m) for m in modules if m.split(".")[0] in sys.stdlib_module_names]
        third_party = [format_import(m) for m in modules if m.split(".")[0] not in sys.stdlib_module_names]
        record_imports = list(ir.record.imports)
        full_type = [f"from {ir.source_module} import {ir.record.name}"] if ir.full_type is None else []

        return [group for group in (future, stdlib, third_party, record_imports, full_type) if group]
