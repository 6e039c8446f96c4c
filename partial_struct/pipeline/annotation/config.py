"""
Parsed configuration of one partial annotation.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PartialConfig:
    """Settings of one ``partial(...)`` annotation.

    The name lists keep the order they were written in, without duplicates.
    ``omit`` and ``optional`` are disjoint once the parser has accepted them.
    """

    # Position of the annotation on the record (0-based)
    index: int = 0

    # Explicit target type name, None means "Partial<Record>"
    target_name: str | None = None

    # Opaque behavior markers copied onto the generated type as decorators
    derive: tuple[str, ...] = ()

    # Field names to drop from the partial type
    omit: tuple[str, ...] = ()

    # Field names to wrap as optional in the partial type
    optional: tuple[str, ...] = ()

    # (clause, identifier) -> column in the annotation text, for diagnostics
    columns: dict[tuple[str, str], int] = field(default_factory=dict, compare=False, hash=False)

    def column_of(self, clause: str, identifier: str) -> int | None:
        return self.columns.get((clause, identifier))

    @property
    def is_empty(self) -> bool:
        return self.target_name is None and not self.derive and not self.omit and not self.optional
