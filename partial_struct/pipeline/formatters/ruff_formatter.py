"""
Ruff formatter for generated modules.
"""

from __future__ import annotations

import shutil
import subprocess

from ..config import FormatterConfig
from .base import Formatter, FormatterFailed


class RuffFormatter(Formatter):
    """Formats by piping the module through ``ruff format``."""

    name = "ruff"

    def is_available(self) -> bool:
        return shutil.which("ruff") is not None

    def _format(self, code: str, config: FormatterConfig) -> str:
        cmd = ["ruff", "format", "--stdin-filename", "partials.py"]
        if config.line_length:
            cmd.extend(["--line-length", str(config.line_length)])
        if config.target_version:
            cmd.extend(["--target-version", config.target_version])

        try:
            result = subprocess.run(cmd, input=code, capture_output=True, text=True, timeout=30)
        except (OSError, subprocess.SubprocessError) as e:
            raise FormatterFailed(str(e)) from e
        if result.returncode != 0:
            raise FormatterFailed(result.stderr.strip())
        return result.stdout
