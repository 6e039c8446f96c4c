"""
Tokenizer for the partial annotation grammar.
"""

from __future__ import annotations

import ast
import re
from dataclasses import dataclass
from enum import Enum

from ...errors import PartialGrammarError


class TokenKind(Enum):
    """Kind of token in an annotation."""

    STRING = "string"
    IDENT = "identifier"
    LPAREN = "'('"
    RPAREN = "')'"
    COMMA = "','"
    EOF = "end of annotation"


@dataclass(frozen=True)
class Token:
    """A token and the column it starts at."""

    kind: TokenKind
    text: str
    column: int

    @property
    def value(self) -> str:
        """Decoded value of a string token, or the raw text otherwise."""
        if self.kind == TokenKind.STRING:
            return ast.literal_eval(self.text)
        return self.text

    def describe(self) -> str:
        if self.kind == TokenKind.EOF:
            return self.kind.value
        return f"'{self.text}'"


_TOKEN_PATTERN = re.compile(
    r"""
    (?P<ws>\s+)
    | (?P<string>"(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*')
    | (?P<ident>[A-Za-z_][A-Za-z0-9_]*)
    | (?P<lparen>\()
    | (?P<rparen>\))
    | (?P<comma>,)
    """,
    re.VERBOSE,
)

_GROUP_KINDS = {
    "string": TokenKind.STRING,
    "ident": TokenKind.IDENT,
    "lparen": TokenKind.LPAREN,
    "rparen": TokenKind.RPAREN,
    "comma": TokenKind.COMMA,
}


def tokenize(text: str, config_index: int | None = None) -> list[Token]:
    """
    Split annotation text into tokens.

    Args:
        text: The clause list, e.g. ``"UserInfo", omit(password)``
        config_index: Index of the annotation, used in error messages

    Returns:
        Tokens in order, always terminated by an EOF token

    Raises:
        PartialGrammarError: On a character that starts no token
    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_PATTERN.match(text, pos)
        if match is None:
            char = text[pos]
            if char in "\"'":
                message = "Unterminated string literal"
            else:
                message = f"Unexpected character {char!r}"
            raise PartialGrammarError(message, config_index=config_index, identifier=char, column=pos)
        kind = match.lastgroup
        if kind != "ws":
            tokens.append(Token(_GROUP_KINDS[kind], match.group(), pos))
        pos = match.end()
    tokens.append(Token(TokenKind.EOF, "", len(text)))
    return tokens
