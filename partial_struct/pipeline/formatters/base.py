"""
Base class for the formatters applied to generated modules.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from ..config import FormatterConfig

logger = logging.getLogger(__name__)


class Formatter(ABC):
    """A post-processing step over the generated source.

    Formatting is cosmetic: a missing tool or a failed run leaves the
    generated code as it is and logs a warning.
    """

    # Name used in FormatterConfig.name and in log messages
    name: str = ""

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the underlying tool can be used."""

    @abstractmethod
    def _format(self, code: str, config: FormatterConfig) -> str:
        """Run the tool; raise FormatterFailed when it rejects the code."""

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format a generated module.

        Args:
            code: Python source produced by the backend
            config: Formatter configuration

        Returns:
            The formatted code, or code unchanged when the tool is missing or fails
        """
        if not self.is_available():
            logger.warning("%s is not installed, leaving generated code unformatted", self.name)
            return code
        try:
            formatted = self._format(code, config)
        except FormatterFailed as e:
            logger.warning("%s could not format the generated code: %s", self.name, e)
            return code
        logger.debug("Formatted generated code with %s", self.name)
        return formatted


class FormatterFailed(Exception):
    """Raised by a formatter implementation when its tool rejects the code."""
