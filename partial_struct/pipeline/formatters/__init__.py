"""
Post-processing formatters for generated code.
"""

from __future__ import annotations

from .base import Formatter, FormatterFailed
from .black_formatter import BlackFormatter
from .ruff_formatter import RuffFormatter

FORMATTERS: dict[str, type[Formatter]] = {
    "black": BlackFormatter,
    "ruff": RuffFormatter,
}


def get_formatter(name: str) -> Formatter:
    """Instantiate the formatter registered under name."""
    try:
        return FORMATTERS[name]()
    except KeyError:
        raise ValueError(f"Unknown formatter '{name}', expected one of: {', '.join(sorted(FORMATTERS))}") from None


__all__ = [
    "Formatter",
    "FormatterFailed",
    "BlackFormatter",
    "RuffFormatter",
    "get_formatter",
]
