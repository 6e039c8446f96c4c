"""
Black formatter for generated modules.
"""

from __future__ import annotations

from ..config import FormatterConfig
from .base import Formatter, FormatterFailed


class BlackFormatter(Formatter):
    """Formats in-process with the black library (imported lazily)."""

    name = "black"

    def __init__(self):
        self._black = None

    def is_available(self) -> bool:
        if self._black is None:
            try:
                import black
            except ImportError:
                return False
            self._black = black
        return True

    def _format(self, code: str, config: FormatterConfig) -> str:
        black = self._black
        target = getattr(black.TargetVersion, config.target_version.upper(), None)
        mode = black.Mode(
            target_versions={target} if target is not None else set(),
            line_length=config.line_length,
            string_normalization=config.string_normalization,
            magic_trailing_comma=config.magic_trailing_comma,
        )
        try:
            return black.format_str(code, mode=mode)
        except black.InvalidInput as e:
            raise FormatterFailed(str(e)) from e
