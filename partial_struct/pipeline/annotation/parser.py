"""
Annotation parser.

Phase 2 of the pipeline: turn the clause list of one ``partial(...)``
annotation into a PartialConfig. Clauses may appear in any order and each at
most once:

    "Target", derive(A, B), omit(x, y), optional(z)

Field names are only checked for syntax here; whether they exist on the
record is decided by the field classifier.
"""

from __future__ import annotations

import logging
from typing import Any

from ...errors import FieldConflictError, PartialGrammarError
from ...utils import is_type_name
from .config import PartialConfig
from .tokenizer import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)

TARGET_CLAUSE = "name"
LIST_CLAUSES = ("derive", "omit", "optional")


class _ClauseState:
    """Accumulates clauses while parsing one annotation."""

    def __init__(self, config_index: int):
        self.config_index = config_index
        self.target_name: str | None = None
        self.lists: dict[str, list[str]] = {}
        self.columns: dict[tuple[str, str], int] = {}
        self.clause_columns: dict[str, int] = {}

    def start_clause(self, clause: str, column: int) -> None:
        if clause in self.clause_columns:
            first = self.clause_columns[clause]
            what = "target name" if clause == TARGET_CLAUSE else f"'{clause}' clause"
            raise PartialGrammarError(
                f"Duplicate {what}; the first one is at column {first}",
                config_index=self.config_index,
                clause=clause,
                column=column,
            )
        self.clause_columns[clause] = column
        if clause != TARGET_CLAUSE:
            self.lists[clause] = []

    def add_name(self, clause: str, name: str, column: int) -> None:
        if (clause, name) in self.columns:
            raise PartialGrammarError(
                f"'{name}' is listed twice in '{clause}'",
                config_index=self.config_index,
                clause=clause,
                identifier=name,
                column=column,
            )
        self.columns[(clause, name)] = column
        self.lists[clause].append(name)

    def build(self) -> PartialConfig:
        config = PartialConfig(
            index=self.config_index,
            target_name=self.target_name,
            derive=tuple(self.lists.get("derive", ())),
            omit=tuple(self.lists.get("omit", ())),
            optional=tuple(self.lists.get("optional", ())),
            columns=dict(self.columns),
        )
        _check_conflicts(config)
        return config


def _check_conflicts(config: PartialConfig) -> None:
    """A field cannot be both removed and present-but-optional."""
    optional = set(config.optional)
    for name in config.omit:
        if name in optional:
            raise FieldConflictError(
                f"Field '{name}' is listed in both 'omit' and 'optional'",
                config_index=config.index,
                clause="optional",
                identifier=name,
                column=config.column_of("optional", name),
            )


class AnnotationParser:
    """Parses partial annotations into PartialConfig objects."""

    def parse(self, annotation: str | dict[str, Any], config_index: int = 0) -> PartialConfig:
        """
        Parse an annotation given either as clause text or as a JSON object.

        Args:
            annotation: Clause list text or a config dictionary
            config_index: Position of the annotation on the record

        Returns:
            The validated PartialConfig
        """
        if isinstance(annotation, dict):
            return self.parse_object(annotation, config_index)
        return self.parse_text(annotation, config_index)

    def parse_text(self, text: str, config_index: int = 0) -> PartialConfig:
        """
        Parse the clause list of one annotation.

        Args:
            text: e.g. ``"UserInfo", derive(dataclass_json), omit(password)``
            config_index: Position of the annotation on the record

        Returns:
            The validated PartialConfig

        Raises:
            PartialGrammarError: On malformed, unknown or duplicate clauses
            FieldConflictError: When a field is in both omit and optional
        """
        tokens = tokenize(text, config_index)
        state = _ClauseState(config_index)
        pos = 0

        while tokens[pos].kind != TokenKind.EOF:
            pos = self._parse_clause(tokens, pos, state)
            token = tokens[pos]
            if token.kind == TokenKind.COMMA:
                pos += 1
            elif token.kind != TokenKind.EOF:
                raise self._error(f"Expected ',' between clauses, found {token.describe()}", token, config_index)

        config = state.build()
        logger.debug("Parsed partial #%d: %s", config_index, config)
        return config

    def parse_object(self, obj: dict[str, Any], config_index: int = 0) -> PartialConfig:
        """
        Build a PartialConfig from ``{"name": ..., "derive": [...], "omit": [...], "optional": [...]}``.

        The same rules as the text grammar apply: names must be identifiers,
        lists must not repeat a name, omit and optional must be disjoint.
        """
        state = _ClauseState(config_index)
        for key, value in obj.items():
            if key == TARGET_CLAUSE:
                if value is None:
                    continue
                if not isinstance(value, str) or not is_type_name(value):
                    raise PartialGrammarError(
                        f"Target name must be an identifier, got {value!r}",
                        config_index=config_index,
                        clause=TARGET_CLAUSE,
                        identifier=str(value),
                    )
                state.start_clause(TARGET_CLAUSE, 0)
                state.target_name = value
            elif key in LIST_CLAUSES:
                if not isinstance(value, list):
                    raise PartialGrammarError(f"'{key}' must be a list of identifiers", config_index=config_index, clause=key)
                state.start_clause(key, 0)
                for name in value:
                    if not isinstance(name, str) or not is_type_name(name):
                        raise PartialGrammarError(
                            f"Expected an identifier in '{key}', found {name!r}",
                            config_index=config_index,
                            clause=key,
                            identifier=str(name),
                        )
                    state.add_name(key, name, 0)
            else:
                raise PartialGrammarError(
                    f"Unknown clause '{key}'; expected 'name', 'derive', 'omit' or 'optional'",
                    config_index=config_index,
                    identifier=key,
                )
        return state.build()

    def _parse_clause(self, tokens: list[Token], pos: int, state: _ClauseState) -> int:
        """Parse one clause starting at tokens[pos]; return the position after it."""
        token = tokens[pos]

        if token.kind == TokenKind.STRING:
            try:
                value = token.value
            except (SyntaxError, ValueError) as e:
                raise self._error(f"Invalid string literal {token.text}", token, state.config_index, TARGET_CLAUSE) from e
            if not is_type_name(value):
                raise self._error(f"Target name {token.text} is not a valid identifier", token, state.config_index, TARGET_CLAUSE)
            state.start_clause(TARGET_CLAUSE, token.column)
            state.target_name = value
            return pos + 1

        if token.kind != TokenKind.IDENT:
            raise self._error(
                f"Expected a string literal or one of 'derive', 'omit', 'optional', found {token.describe()}",
                token,
                state.config_index,
            )

        clause = token.text
        if clause not in LIST_CLAUSES:
            raise self._error(
                f"Unknown clause '{clause}'; expected 'derive', 'omit' or 'optional'",
                token,
                state.config_index,
            )
        state.start_clause(clause, token.column)
        pos += 1

        if tokens[pos].kind != TokenKind.LPAREN:
            raise self._error(f"Expected '(' after '{clause}', found {tokens[pos].describe()}", tokens[pos], state.config_index, clause)
        pos += 1

        while tokens[pos].kind != TokenKind.RPAREN:
            token = tokens[pos]
            if token.kind != TokenKind.IDENT or not is_type_name(token.text):
                raise self._error(f"Expected an identifier in '{clause}', found {token.describe()}", token, state.config_index, clause)
            state.add_name(clause, token.text, token.column)
            pos += 1

            token = tokens[pos]
            if token.kind == TokenKind.COMMA:
                pos += 1
            elif token.kind != TokenKind.RPAREN:
                raise self._error(f"Expected ',' or ')' in '{clause}', found {token.describe()}", token, state.config_index, clause)

        return pos + 1

    @staticmethod
    def _error(message: str, token: Token, config_index: int, clause: str | None = None) -> PartialGrammarError:
        return PartialGrammarError(
            message,
            config_index=config_index,
            clause=clause,
            identifier=token.text or None,
            column=token.column,
        )
