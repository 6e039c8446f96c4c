from __future__ import annotations

import sys
import types

import pytest


@pytest.fixture
def load_generated(monkeypatch):
    """Execute generated code as a fresh module registered in sys.modules."""

    def _load(code: str, module_name: str = "generated_partials", **namespace):
        module = types.ModuleType(module_name)
        module.__dict__.update(namespace)
        monkeypatch.setitem(sys.modules, module_name, module)
        exec(compile(code, f"<{module_name}>", "exec"), module.__dict__)
        return module

    return _load


@pytest.fixture
def user_description():
    return {
        "name": "User",
        "fields": [
            {"name": "id", "type": "int"},
            {"name": "name", "type": "str"},
            {"name": "email", "type": "str"},
        ],
        "partials": ["derive(registered), omit(id), optional(email)"],
    }


@pytest.fixture
def registry():
    """A derive marker that records the classes it decorates."""
    seen = []

    def registered(cls):
        seen.append(cls.__name__)
        return cls

    registered.seen = seen
    return registered
