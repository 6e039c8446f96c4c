"""
Partial type generator.

Drives the pipeline for one record: every ``partial(...)`` annotation is
parsed, named, classified and synthesized on its own, then the families are
checked against each other and rendered into a single module.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .. import __version__
from ..cli_utils import reconstruct_command_line
from .analyzer import (
    IR,
    ConversionSynthesizer,
    FieldClassifier,
    NameResolver,
    PartialFamily,
    StructSynthesizer,
    check_collisions,
)
from .annotation import AnnotationParser
from .backends import PythonBackend
from .config import CodeGeneratorConfig
from .formatters import get_formatter
from .record_ast import RecordNode, RecordParser
from .writer import AtomicWriter

logger = logging.getLogger(__name__)


class PartialGenerator:
    """Generates the partial types of one record."""

    def __init__(
        self,
        record: dict[str, Any] | RecordNode,
        config: CodeGeneratorConfig | None = None,
        name: str | None = None,
    ):
        """
        Initialize the generator.

        Args:
            record: The record description (decoded JSON) or an already parsed RecordNode
            config: Code generation configuration
            name: Overrides the record name of a description
        """
        self.config = config or CodeGeneratorConfig()
        if isinstance(record, RecordNode):
            self.record = record
        else:
            self.record = RecordParser().parse(record, name)

        self.annotation_parser = AnnotationParser()
        self.name_resolver = NameResolver()
        self.classifier = FieldClassifier()
        self.struct_synthesizer = StructSynthesizer()
        self.conversion_synthesizer = ConversionSynthesizer(self.config.add_cloned_reconstruction)
        self.backend = PythonBackend(self.config)

    @property
    def source_module(self) -> str:
        """Module defining the full type, empty when the full type is emitted."""
        return self.config.source_module or self.record.source_module

    def build_family(self, annotation: str | dict[str, Any], index: int) -> PartialFamily:
        """
        Run one annotation through the pipeline.

        Args:
            annotation: Raw annotation (clause text or config dict)
            index: Position of the annotation on the record

        Returns:
            The generated family of types and conversions
        """
        config = self.annotation_parser.parse(annotation, index)
        names = self.name_resolver.resolve(self.record, config)
        classification = self.classifier.classify(self.record, config)
        partial_type, omitted_type = self.struct_synthesizer.synthesize(self.record, config, names, classification)
        conversions = self.conversion_synthesizer.synthesize(self.record, names, classification)
        partial_type.methods.extend(conversions.partial_methods())

        logger.debug(
            "partial #%d -> %s (%d fields, %d omitted)",
            index,
            names.target,
            len(partial_type.fields),
            len(omitted_type.fields),
        )
        return PartialFamily(
            config=config,
            names=names,
            classification=classification,
            partial_type=partial_type,
            omitted_type=omitted_type,
            conversions=conversions,
        )

    def analyze(self) -> IR:
        """
        Build the IR for every annotation of the record.

        Annotations are processed in order and the first failure is raised, so
        a record with any bad annotation produces no output at all.

        Raises:
            PartialError: The first diagnostic found
        """
        families = [self.build_family(annotation, i) for i, annotation in enumerate(self.record.annotations)]
        check_collisions([(family.config, family.names) for family in families])

        full_type = None
        if not self.source_module:
            full_type = self.struct_synthesizer.full_type(self.record, [family.conversions.forward for family in families])

        return IR(
            record=self.record,
            families=families,
            full_type=full_type,
            source_module=self.source_module,
            generation_comment=self._generate_command_comment(),
        )

    def generate(self) -> str:
        """Generate the module source for the record."""
        ir = self.analyze()
        code = self.backend.generate(ir)

        if self.config.formatter.enabled:
            formatter = get_formatter(self.config.formatter.name)
            code = formatter.format(code, self.config.formatter)

        logger.debug("Generated %d partial types for %s", len(ir.families), self.record.name)
        return code

    def write(self, path: str | Path) -> str:
        """Generate the module and write it to path according to the output configuration."""
        code = self.generate()
        AtomicWriter().write_output(Path(path), code, self.config.output)
        return code

    def _generate_command_comment(self) -> str:
        """Generate a simplified command line comment for the generated file"""
        if not self.config.add_generation_comment:
            return ""

        try:
            from ..partial_struct import partial_struct as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "partial_struct"

        return f"# Generated by partial_struct v{__version__} : {command_line}"
