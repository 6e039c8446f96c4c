"""
CLI utilities for the generation comment.

The generated module starts with the command that produced it, rebuilt from
the active click context.
"""

from pathlib import Path
from typing import Any

import click

PROGRAM_NAME = "partial_struct"


def _display_value(value: Any) -> str:
    """Existing files are shown by name only so the comment does not depend on the checkout location."""
    if isinstance(value, (str, Path)):
        path = Path(str(value))
        if path.exists():
            return path.name
    return str(value)


def _option_tokens(option: click.Option, value: Any) -> list[str]:
    """Tokens for an option set away from its default, empty otherwise."""
    if value == option.default:
        return []
    flag = option.opts[0] if option.opts else f"--{option.name}"
    if option.is_flag:
        return [flag]
    return [flag, _display_value(value)]


def reconstruct_command_line(click_command: click.Command, program_name: str = PROGRAM_NAME) -> str:
    """
    Rebuild the invocation of click_command from the current click context.

    Positional arguments come first, in declaration order, followed by the
    options that differ from their defaults. Unset values are skipped.

    Args:
        click_command: Click command whose parameters are introspected
        program_name: Name the command line starts with

    Returns:
        The command line, or just program_name outside of a click invocation
    """
    ctx = click.get_current_context(silent=True)
    if ctx is None or not ctx.params:
        return program_name

    positional: list[str] = []
    flags: list[str] = []
    for param in click_command.params:
        value = ctx.params.get(param.name)
        if not value:
            continue
        if isinstance(param, click.Argument):
            positional.append(_display_value(value))
        elif isinstance(param, click.Option):
            flags.extend(_option_tokens(param, value))

    return " ".join([program_name, *positional, *flags])
