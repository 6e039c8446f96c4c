"""
Tests for the generator configuration.
"""

from __future__ import annotations

from partial_struct.pipeline import CodeGeneratorConfig, OutputMode


def test_defaults():
    config = CodeGeneratorConfig()
    assert config.add_generation_comment
    assert config.use_future_annotations
    assert config.add_cloned_reconstruction
    assert config.derive_imports == {"dataclass_json": "dataclasses_json"}
    assert config.source_module == ""
    assert not config.formatter.enabled
    assert config.output.mode == OutputMode.ERROR_IF_EXISTS


def test_from_dict():
    config = CodeGeneratorConfig.from_dict(
        {
            "use_future_annotations": False,
            "source_module": "app.models",
            "derive_imports": {"registered": "app.registry"},
            "formatter": {"enabled": True, "name": "ruff", "line_length": 88},
            "output": {"mode": "force", "atomic_write": False},
            "not_an_option": 1,
        }
    )
    assert not config.use_future_annotations
    assert config.source_module == "app.models"
    # User mappings extend the defaults
    assert config.derive_imports == {"dataclass_json": "dataclasses_json", "registered": "app.registry"}
    assert config.formatter.name == "ruff"
    assert config.formatter.line_length == 88
    assert config.output.mode == OutputMode.FORCE
    assert not config.output.atomic_write
    assert config.output.validate_before_write
    assert not hasattr(config, "not_an_option")


def test_to_dict_round_trip():
    config = CodeGeneratorConfig.from_dict({"add_cloned_reconstruction": False, "output": {"mode": "force"}})
    data = config.to_dict()
    assert data["output"]["mode"] == "force"
    assert data["add_cloned_reconstruction"] is False
    assert CodeGeneratorConfig.from_dict(data) == config
