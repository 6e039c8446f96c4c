"""
Diagnostics raised while synthesizing partial record types.

Every error points back at the annotation that caused it: the configuration
index (0-based, in annotation order), the clause, the offending identifier and,
for grammar errors, the column inside the annotation text.
"""

from __future__ import annotations


class PartialError(Exception):
    """Base class for all partial-struct diagnostics.

    Attributes:
        message: Human readable description without location prefix
        config_index: Index of the offending ``partial(...)`` annotation
        clause: Clause the offending identifier came from (``omit``, ``derive``...)
        identifier: The offending identifier or token text
        column: 0-based column inside the annotation text
    """

    def __init__(
        self,
        message: str,
        *,
        config_index: int | None = None,
        clause: str | None = None,
        identifier: str | None = None,
        column: int | None = None,
    ):
        self.message = message
        self.config_index = config_index
        self.clause = clause
        self.identifier = identifier
        self.column = column
        super().__init__(self._format())

    def _format(self) -> str:
        location = []
        if self.config_index is not None:
            location.append(f"partial #{self.config_index}")
        if self.column is not None:
            location.append(f"column {self.column}")
        if location:
            return f"{', '.join(location)}: {self.message}"
        return self.message


class PartialGrammarError(PartialError):
    """Raised when an annotation does not follow the clause grammar.

    This covers:
    - Malformed clauses (missing parenthesis, stray tokens)
    - Unknown clause keywords
    - Duplicate clauses of the same kind in one annotation
    """


class UnknownFieldError(PartialError):
    """Raised when ``omit`` or ``optional`` names a field the record does not have."""


class FieldConflictError(PartialError):
    """Raised when a field is listed in both ``omit`` and ``optional``."""


class NameCollisionError(PartialError):
    """Raised when generated names clash.

    Either two configurations resolve to the same generated type name, or a
    generated name clashes with the full type, another generated method or a
    field.
    """

    def __init__(self, message: str, *, config_index: int | None = None, other_index: int | None = None, identifier: str | None = None):
        self.other_index = other_index
        super().__init__(message, config_index=config_index, identifier=identifier)


class RecordDefinitionError(PartialError):
    """Raised when the record description itself is malformed."""


class OutputWriteError(PartialError):
    """Raised when generated code cannot be written.

    This can happen when:
    - The generated code does not parse
    - The output file already exists and overwriting was not requested
    """
