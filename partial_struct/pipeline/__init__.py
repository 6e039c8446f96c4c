"""
Pipeline - partial record type generator.

This module provides a multi-phase architecture for deriving partial types
from a full record description:

1. Phase 1 (Record parser): Parse the JSON record description into a RecordNode
2. Phase 2 (Annotation parser): Parse each partial(...) clause list into a PartialConfig
3. Phase 3 (Analyzer): Derive names, classify fields, synthesize types and conversions
4. Phase 4 (Backend): Render the IR as Python source with Jinja2 templates
5. Phase 5 (Formatter): Optional post-processing (black or ruff)
6. Phase 6 (Writer): Optional validated, atomic write to disk
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, FormatterConfig, OutputConfig, OutputMode
from .generator import PartialGenerator
from .writer import AtomicWriter

__all__ = [
    "PartialGenerator",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "AtomicWriter",
]
