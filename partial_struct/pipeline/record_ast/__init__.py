"""
Record AST module.

Contains the node definitions and parser for record type descriptions.
"""

from __future__ import annotations

from .nodes import FieldNode, RecordNode, Visibility
from .parser import RecordParser

__all__ = [
    "FieldNode",
    "RecordNode",
    "Visibility",
    "RecordParser",
]
