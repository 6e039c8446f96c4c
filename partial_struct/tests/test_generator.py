"""
End-to-end tests: generate partial types and exercise the generated module.
"""

from __future__ import annotations

import dataclasses
import logging
import sys
import types

import pytest

from partial_struct import (
    CodeGeneratorConfig,
    FieldConflictError,
    NameCollisionError,
    OutputMode,
    OutputWriteError,
    PartialGrammarError,
    PartialGenerator,
    UnknownFieldError,
)


def _fields(cls):
    return [f.name for f in dataclasses.fields(cls)]


class TestConversions:
    @pytest.fixture
    def module(self, load_generated, user_description, registry):
        code = PartialGenerator(user_description).generate()
        return load_generated(code, registered=registry)

    @pytest.fixture
    def user(self, module):
        return module.User(id=7, name="Ada", email="ada@example.com")

    def test_generated_types(self, module):
        assert _fields(module.User) == ["id", "name", "email"]
        assert _fields(module.PartialUser) == ["name", "email"]
        assert _fields(module.PartialUserOmitted) == ["id"]
        # Optional fields may be left out of the constructor
        assert module.PartialUser(name="Ada").email is None

    def test_split_then_reconstruct(self, module, user):
        partial, omitted = module.PartialUser.from_user_with_omitted(user)
        assert partial == module.PartialUser(name="Ada", email="ada@example.com")
        assert omitted == module.PartialUserOmitted(id=7)
        assert partial.to_user(id=omitted.id) == user

    def test_split_covers_every_field(self, module, user):
        partial, omitted = module.PartialUser.from_user_with_omitted(user)
        values = {**dataclasses.asdict(partial), **dataclasses.asdict(omitted)}
        assert values == dataclasses.asdict(user)

    def test_from_full_drops_omitted_fields(self, module, user):
        partial = module.PartialUser.from_user(user)
        assert not hasattr(partial, "id")
        assert partial.name == "Ada"

    def test_absent_optional_takes_fallback(self, module):
        full = module.PartialUser(name="Ada").to_user(id=1, email="fallback@example.com")
        assert full == module.User(id=1, name="Ada", email="fallback@example.com")

    def test_present_optional_wins_over_fallback(self, module):
        full = module.PartialUser(name="Ada", email="mine@example.com").to_user(id=1, email="fallback@example.com")
        assert full.email == "mine@example.com"

    def test_full_side_forwarding(self, module, user):
        assert user.into_partial_user_with_omitted() == module.PartialUser.from_user_with_omitted(user)

    def test_derive_markers_decorate_only_the_partial_type(self, module, registry):
        assert registry.seen == ["PartialUser"]

    def test_cloned_reconstruction_matches(self, module):
        partial = module.PartialUser(name="Ada")
        assert partial.to_user_cloned(id=3, email="x@example.com") == partial.to_user(id=3, email="x@example.com")


def test_default_partial_name(load_generated):
    description = {"name": "Car", "fields": [{"name": "x", "type": "int"}, {"name": "model", "type": "str"}]}
    code = PartialGenerator(description).generate()
    assert "class PartialCar:" in code
    assert "def to_car(" in code

    module = load_generated(code)
    car = module.Car(x=1, model="T")
    partial, omitted = car.into_partial_car_with_omitted()
    assert partial == module.PartialCar(x=1, model="T")
    # Nothing omitted: the companion type is empty but still exists
    assert omitted == module.PartialCarOmitted()
    assert partial.to_car() == car


def test_configurations_are_independent(load_generated):
    description = {
        "name": "UserAccount",
        "fields": [
            {"name": "id", "type": "int"},
            {"name": "name", "type": "str"},
            {"name": "password", "type": "str", "visibility": "private"},
        ],
        "partials": ['"UserInfo", omit(password)', '"UserCreation", omit(id, password)'],
    }
    module = load_generated(PartialGenerator(description).generate())

    assert _fields(module.UserInfo) == ["id", "name"]
    assert _fields(module.UserInfoOmitted) == ["password"]
    assert _fields(module.UserCreation) == ["name"]
    assert _fields(module.UserCreationOmitted) == ["id", "password"]

    account = module.UserAccount(id=1, name="Ada", password="hunter2")
    info, _ = account.into_user_info_with_omitted()
    creation, secrets = account.into_user_creation_with_omitted()
    assert info.to_user_account(password="hunter2") == account
    assert creation.to_user_account(id=secrets.id, password=secrets.password) == account


def test_reconstruct_with_several_omitted_fields(load_generated):
    description = {
        "name": "MultiOmit",
        "fields": [{"name": n, "type": "int"} for n in ("a", "b", "c", "d")],
        "partials": ["omit(d, b), optional(c)"],
    }
    module = load_generated(PartialGenerator(description).generate())
    partial = module.PartialMultiOmit(a=1)
    assert partial.to_multi_omit(b=2, d=4, c=3) == module.MultiOmit(a=1, b=2, c=3, d=4)


def test_annotation_object_form(load_generated):
    description = {
        "name": "User",
        "fields": [{"name": "id", "type": "int"}, {"name": "email", "type": "str"}],
        "partials": [{"name": "UserDraft", "omit": ["id"], "optional": ["email"]}],
    }
    module = load_generated(PartialGenerator(description).generate())
    assert _fields(module.UserDraft) == ["email"]
    assert module.UserDraft().to_user(id=1, email="a@b.c") == module.User(id=1, email="a@b.c")


def test_already_optional_field_is_not_wrapped_twice():
    description = {
        "name": "Profile",
        "fields": [{"name": "nickname", "type": "str | None"}],
        "partials": ["optional(nickname)"],
    }
    code = PartialGenerator(description).generate()
    assert "nickname: str | None = None" in code
    assert "None | None" not in code


class TestDiagnostics:
    def _description(self, *partials):
        return {
            "name": "User",
            "fields": [{"name": "id", "type": "int"}, {"name": "email", "type": "str"}],
            "partials": list(partials),
        }

    def test_conflict(self):
        with pytest.raises(FieldConflictError) as exc_info:
            PartialGenerator(self._description("omit(email), optional(email)")).generate()
        assert exc_info.value.identifier == "email"

    def test_unknown_field(self):
        with pytest.raises(UnknownFieldError) as exc_info:
            PartialGenerator(self._description("omit(id)", "optional(mail)")).generate()
        assert exc_info.value.config_index == 1
        assert "partial #1" in str(exc_info.value)

    def test_first_error_in_annotation_order_wins(self):
        with pytest.raises(UnknownFieldError):
            PartialGenerator(self._description("omit(nope)", "omit(id), optional(id)")).generate()

    def test_two_configs_with_same_target(self):
        with pytest.raises(NameCollisionError) as exc_info:
            PartialGenerator(self._description('"Draft", omit(id)', '"Draft"')).generate()
        assert exc_info.value.config_index == 1
        assert exc_info.value.other_index == 0

    def test_failed_generation_writes_nothing(self, tmp_path):
        output = tmp_path / "partials.py"
        with pytest.raises(UnknownFieldError):
            PartialGenerator(self._description("omit(nope)")).write(output)
        assert not output.exists()
        assert list(tmp_path.iterdir()) == []


def test_full_type_from_source_module(load_generated, monkeypatch, user_description, registry):
    @dataclasses.dataclass(kw_only=True)
    class User:
        id: int
        name: str
        email: str

    models = types.ModuleType("app_models")
    models.User = User
    monkeypatch.setitem(sys.modules, "app_models", models)

    config = CodeGeneratorConfig(source_module="app_models")
    code = PartialGenerator(user_description, config).generate()
    assert "from app_models import User" in code
    assert "class User:" not in code
    assert "User.into_partial_user_with_omitted = _into_partial_user_with_omitted" in code

    module = load_generated(code, registered=registry)
    assert module.User is User

    user = User(id=7, name="Ada", email="ada@example.com")
    partial, omitted = user.into_partial_user_with_omitted()
    assert isinstance(partial, module.PartialUser)
    assert partial.to_user(id=omitted.id) == user


def test_source_module_from_description(user_description):
    user_description["source_module"] = "app.models"
    code = PartialGenerator(user_description).generate()
    assert "from app.models import User" in code


def test_generation_is_deterministic(user_description):
    assert PartialGenerator(user_description).generate() == PartialGenerator(user_description).generate()


def test_generation_comment(user_description):
    code = PartialGenerator(user_description).generate()
    assert code.startswith("# Generated by partial_struct v")

    config = CodeGeneratorConfig(add_generation_comment=False)
    code = PartialGenerator(user_description, config).generate()
    assert not code.startswith("#")


class TestClonedReconstruction:
    @pytest.fixture
    def description(self):
        return {
            "name": "Post",
            "fields": [{"name": "id", "type": "int"}, {"name": "tags", "type": "list[str]"}],
            "partials": ["omit(id)"],
        }

    def test_clone_shares_no_mutable_state(self, load_generated, description):
        module = load_generated(PartialGenerator(description).generate())
        partial = module.PartialPost(tags=["python"])

        cloned = partial.to_post_cloned(id=1)
        assert cloned.tags == ["python"]
        assert cloned.tags is not partial.tags

        moved = partial.to_post(id=1)
        assert moved.tags is partial.tags

    def test_can_be_disabled(self, description):
        config = CodeGeneratorConfig(add_cloned_reconstruction=False)
        code = PartialGenerator(description, config).generate()
        assert "to_post_cloned" not in code
        assert "import copy" not in code


def test_field_named_copy(load_generated):
    description = {
        "name": "Doc",
        "fields": [{"name": "copy", "type": "int"}, {"name": "tags", "type": "list[str]"}],
        "partials": ["omit(copy)"],
    }
    code = PartialGenerator(description).generate()
    assert "import copy as _copy\n" in code

    module = load_generated(code)
    partial = module.PartialDoc(tags=["a"])
    doc = partial.to_doc_cloned(copy=1)
    assert doc == module.Doc(copy=1, tags=["a"])
    assert doc.tags is not partial.tags


def test_names_used_by_generated_code_are_rejected():
    description = {
        "name": "Flags",
        "fields": [{"name": "classmethod", "type": "int"}, {"name": "other", "type": "int"}],
        "partials": ["optional(classmethod)"],
    }
    with pytest.raises(NameCollisionError, match="classmethod"):
        PartialGenerator(description).generate()

    description["partials"] = ['"dataclass"']
    with pytest.raises(NameCollisionError, match="dataclass"):
        PartialGenerator(description).generate()


def test_kept_field_named_classmethod(load_generated):
    description = {
        "name": "Flags",
        "fields": [{"name": "classmethod", "type": "int"}, {"name": "other", "type": "int"}],
        "partials": ["omit(other)"],
    }
    module = load_generated(PartialGenerator(description).generate())
    flags = module.Flags(classmethod=1, other=2)
    partial, omitted = module.PartialFlags.from_flags_with_omitted(flags)
    assert partial.to_flags(other=omitted.other) == flags


def test_keyword_target_is_a_grammar_error():
    description = {"name": "User", "fields": [{"name": "id", "type": "int"}], "partials": ['"class"']}
    with pytest.raises(PartialGrammarError) as exc_info:
        PartialGenerator(description).generate()
    assert exc_info.value.config_index == 0
    assert exc_info.value.clause == "name"


def test_without_future_annotations(load_generated, user_description, registry):
    config = CodeGeneratorConfig(use_future_annotations=False)
    code = PartialGenerator(user_description, config).generate()
    assert "from __future__" not in code
    assert "-> 'User':" in code

    module = load_generated(code, registered=registry)
    user = module.User(id=1, name="Ada", email="ada@example.com")
    partial, omitted = user.into_partial_user_with_omitted()
    assert partial.to_user(id=omitted.id) == user


def test_record_imports_are_emitted(load_generated):
    description = {
        "name": "Session",
        "fields": [{"name": "token", "type": "uuid.UUID"}, {"name": "user", "type": "str"}],
        "imports": ["import uuid"],
        "partials": ["omit(token)"],
    }
    code = PartialGenerator(description).generate()
    assert "\nimport uuid\n" in code

    module = load_generated(code)
    assert _fields(module.PartialSession) == ["user"]


def test_derive_imports():
    description = {
        "name": "User",
        "fields": [{"name": "id", "type": "int"}],
        "partials": ["derive(dataclass_json, registered)"],
    }
    code = PartialGenerator(description).generate()
    assert "from dataclasses_json import dataclass_json" in code
    # Markers without a known home are expected to be in scope already
    assert "import registered" not in code
    assert "@dataclass_json\n@registered\n@dataclass(kw_only=True)\nclass PartialUser:" in code

    config = CodeGeneratorConfig.from_dict({"derive_imports": {"registered": "app.registry"}})
    code = PartialGenerator(description, config).generate()
    assert "from app.registry import registered" in code


def test_name_override(user_description):
    code = PartialGenerator(user_description, name="Member").generate()
    assert "class PartialMember:" in code
    assert "def to_member(" in code


def test_write_honors_output_mode(tmp_path, user_description):
    output = tmp_path / "partials.py"
    code = PartialGenerator(user_description).write(output)
    assert output.read_text() == code

    with pytest.raises(OutputWriteError, match="already exists"):
        PartialGenerator(user_description).write(output)

    config = CodeGeneratorConfig()
    config.output.mode = OutputMode.FORCE
    PartialGenerator(user_description, config, name="Member").write(output)
    assert "class PartialMember:" in output.read_text()


def test_debug_logging(caplog, user_description):
    with caplog.at_level(logging.DEBUG, logger="partial_struct"):
        PartialGenerator(user_description).generate()
    assert "partial #0 -> PartialUser (2 fields, 1 omitted)" in caplog.text
