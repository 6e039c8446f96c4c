"""
Name resolver for generated types and methods.

Derives the partial type name, the companion type name and every method name
of one configuration, and detects clashes between the generated names.
"""

from __future__ import annotations

from ...errors import NameCollisionError
from ...utils import to_snake_case
from ..annotation.config import PartialConfig
from ..record_ast.nodes import RecordNode
from .ir_nodes import PartialNames

PARTIAL_PREFIX = "Partial"
OMITTED_SUFFIX = "Omitted"

# Name the copy module is imported under in generated modules
COPY_ALIAS = "_copy"

# Module-level names the generated code relies on
GENERATED_MODULE_NAMES = {"dataclass", COPY_ALIAS}

# Builtins used as decorators inside generated class bodies
GENERATED_CLASS_BODY_NAMES = {"classmethod"}


class NameResolver:
    """Resolves generated names for partial configurations."""

    def resolve(self, record: RecordNode, config: PartialConfig) -> PartialNames:
        """
        Derive the names for one configuration.

        Args:
            record: The full record type
            config: The parsed annotation

        Returns:
            PartialNames for the configuration

        Raises:
            NameCollisionError: If a generated name clashes with the full type or a field
        """
        target = config.target_name or f"{PARTIAL_PREFIX}{record.name}"
        full_snake = to_snake_case(record.name)

        names = PartialNames(
            target=target,
            omitted=f"{target}{OMITTED_SUFFIX}",
            to_full=f"to_{full_snake}",
            to_full_cloned=f"to_{full_snake}_cloned",
            from_full=f"from_{full_snake}",
            split=f"from_{full_snake}_with_omitted",
            into_target=f"into_{to_snake_case(target)}_with_omitted",
        )
        self._check_own_names(record, config, names)
        return names

    def _check_own_names(self, record: RecordNode, config: PartialConfig, names: PartialNames) -> None:
        for type_name in [record.name, *names.type_names()]:
            if type_name in GENERATED_MODULE_NAMES or type_name in config.derive:
                raise NameCollisionError(
                    f"Type name '{type_name}' would shadow a name the generated module uses",
                    config_index=config.index,
                    identifier=type_name,
                )
        for type_name in names.type_names():
            if type_name == record.name:
                raise NameCollisionError(
                    f"Generated type '{type_name}' has the same name as the full type",
                    config_index=config.index,
                    identifier=type_name,
                )

        # Optional fields are assigned a default in the class body, before the methods
        for field_name in config.optional:
            if field_name in GENERATED_CLASS_BODY_NAMES:
                raise NameCollisionError(
                    f"Optional field '{field_name}' would shadow the builtin used by '{names.target}'",
                    config_index=config.index,
                    identifier=field_name,
                )

        # Omitted and optional fields become parameters of the reconstruction methods
        for field_name in (*config.omit, *config.optional):
            if field_name == record.name or field_name == COPY_ALIAS:
                raise NameCollisionError(
                    f"Field '{field_name}' would shadow '{field_name}' inside '{names.target}.{names.to_full}'",
                    config_index=config.index,
                    identifier=field_name,
                )

        # Generated methods share a namespace with the dataclass fields
        partial_fields = set(record.field_names) - set(config.omit)
        for method_name in names.method_names():
            if method_name in partial_fields:
                raise NameCollisionError(
                    f"Generated method '{names.target}.{method_name}' clashes with the field of the same name",
                    config_index=config.index,
                    identifier=method_name,
                )
        if names.into_target in record.field_names:
            raise NameCollisionError(
                f"Generated method '{record.name}.{names.into_target}' clashes with the field of the same name",
                config_index=config.index,
                identifier=names.into_target,
            )


def check_collisions(resolved: list[tuple[PartialConfig, PartialNames]]) -> None:
    """
    Check that no two configurations of one record generate the same names.

    Generated type names (partial and companion) and the forwarding methods
    added to the full type must all be distinct. The first clash in
    annotation order is reported.

    Raises:
        NameCollisionError: Naming the later configuration and the earlier one it clashes with
    """
    type_owners: dict[str, int] = {}
    method_owners: dict[str, int] = {}
    for config, names in resolved:
        for type_name in names.type_names():
            if type_name in type_owners:
                raise NameCollisionError(
                    f"Generated type '{type_name}' is also generated by partial #{type_owners[type_name]}",
                    config_index=config.index,
                    other_index=type_owners[type_name],
                    identifier=type_name,
                )
        for type_name in names.type_names():
            type_owners[type_name] = config.index

        if names.into_target in method_owners:
            raise NameCollisionError(
                f"Forwarding method '{names.into_target}' is also generated by partial #{method_owners[names.into_target]}",
                config_index=config.index,
                other_index=method_owners[names.into_target],
                identifier=names.into_target,
            )
        method_owners[names.into_target] = config.index
