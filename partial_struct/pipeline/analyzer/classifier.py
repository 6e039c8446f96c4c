"""
Field classifier.

Assigns every field of the full type exactly one treatment under a
configuration: omitted, optional-wrapped, or kept.
"""

from __future__ import annotations

from ...errors import UnknownFieldError
from ..annotation.config import PartialConfig
from ..record_ast.nodes import RecordNode
from .ir_nodes import ClassifiedField, FieldTreatment


class FieldClassifier:
    """Classifies record fields for one partial configuration."""

    def classify(self, record: RecordNode, config: PartialConfig) -> list[ClassifiedField]:
        """
        Classify the record's fields, in declaration order.

        Args:
            record: The full record type
            config: The parsed annotation (omit and optional already disjoint)

        Returns:
            One ClassifiedField per record field

        Raises:
            UnknownFieldError: If omit or optional names a field the record lacks
        """
        self._check_known(record, config)

        omit = set(config.omit)
        optional = set(config.optional)
        result = []
        for field in record.fields:
            if field.name in omit:
                treatment = FieldTreatment.OMITTED
            elif field.name in optional:
                treatment = FieldTreatment.OPTIONAL_WRAPPED
            else:
                treatment = FieldTreatment.KEPT
            result.append(ClassifiedField(field=field, treatment=treatment))
        return result

    def _check_known(self, record: RecordNode, config: PartialConfig) -> None:
        known = set(record.field_names)
        for clause, names in (("omit", config.omit), ("optional", config.optional)):
            for name in names:
                if name not in known:
                    raise UnknownFieldError(
                        f"Unknown field '{name}' in '{clause}': '{record.name}' has no such field",
                        config_index=config.index,
                        clause=clause,
                        identifier=name,
                        column=config.column_of(clause, name),
                    )
