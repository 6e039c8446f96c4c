"""
Annotation module.

Parses ``partial(...)`` clause lists into validated PartialConfig objects.
"""

from __future__ import annotations

from .config import PartialConfig
from .parser import AnnotationParser
from .tokenizer import Token, TokenKind, tokenize

__all__ = [
    "PartialConfig",
    "AnnotationParser",
    "Token",
    "TokenKind",
    "tokenize",
]
