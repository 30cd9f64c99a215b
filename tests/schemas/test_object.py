# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for object schemas."""

from collections import namedtuple
from dataclasses import dataclass, field
from typing import Any

import pytest
from pydantic import BaseModel, Field

import schemakit as sk
from schemakit.core.errors import SchemaDefinitionError
from schemakit.core.issues import Issue
from schemakit.core.types import IssueCode

# ###############
# Test Helpers
# ###############

USER_SHAPE = {"name": sk.string().min(1), "age": sk.int_().gte(0)}


def _issues(schema: sk.Schema, value: Any) -> list[Issue]:
    result = schema.safe_parse(value)
    assert result.error is not None, f"Expected {schema!r} to reject {value!r}"
    return list(result.error.issues)


@dataclass
class UserRecord:
    name: str
    age: int = field(metadata={"alias": "age"})


@dataclass
class Renamed:
    full_name: str = field(metadata={"alias": "name"})


class UserModel(BaseModel):
    name: str
    years: int = Field(alias="age")


UserTuple = namedtuple("UserTuple", ["name", "age"])

# ###############
# Basic Parsing
# ###############


class TestObjectParsing:
    def test_valid(self) -> None:
        assert sk.object_(USER_SHAPE).parse({"name": "Ada", "age": 36}) == {"name": "Ada", "age": 36}

    def test_rejects_non_mapping(self) -> None:
        issue = _issues(sk.object_(USER_SHAPE), ["Ada"])[0]
        assert (issue.code, issue.expected, issue.received) == (IssueCode.INVALID_TYPE, "object", "array")

    def test_field_issues_carry_key_path(self) -> None:
        issue = _issues(sk.object_(USER_SHAPE), {"name": "", "age": 1})[0]
        assert issue.code is IssueCode.TOO_SMALL
        assert issue.path == ["name"]

    def test_every_field_reported(self) -> None:
        issues = _issues(sk.object_(USER_SHAPE), {"name": 1, "age": -1})
        assert [(i.path, i.code) for i in issues] == [
            (["name"], IssueCode.INVALID_TYPE),
            (["age"], IssueCode.TOO_SMALL),
        ]

    def test_missing_required_field(self) -> None:
        issue = _issues(sk.object_(USER_SHAPE), {"name": "Ada"})[0]
        assert issue.code is IssueCode.INVALID_TYPE
        assert issue.path == ["age"]
        assert (issue.expected, issue.received) == ("nonoptional", "missing")
        assert issue.message == "Invalid input: expected nonoptional, received missing"

    def test_missing_optional_field_absent_from_result(self) -> None:
        schema = sk.object_({"name": sk.string(), "nick": sk.string().optional()})
        assert schema.parse({"name": "Ada"}) == {"name": "Ada"}

    def test_missing_field_with_default_filled(self) -> None:
        schema = sk.object_({"role": sk.string().default("user")})
        assert schema.parse({}) == {"role": "user"}

    def test_missing_field_with_prefault_parsed(self) -> None:
        schema = sk.object_({"role": sk.string().trim().prefault("  admin  ")})
        assert schema.parse({}) == {"role": "admin"}

    def test_explicit_none_on_optional_field_kept(self) -> None:
        schema = sk.object_({"nick": sk.string().optional()})
        assert schema.parse({"nick": None}) == {"nick": None}

    def test_exact_optional_field(self) -> None:
        schema = sk.object_({"nick": sk.string().exact_optional()})
        assert schema.parse({}) == {}
        issue = _issues(schema, {"nick": None})[0]
        assert issue.code is IssueCode.INVALID_TYPE
        assert issue.path == ["nick"]

    def test_nested_paths(self) -> None:
        schema = sk.object_({"user": sk.object_({"tags": sk.list_(sk.string())})})
        issue = _issues(schema, {"user": {"tags": ["a", 2]}})[0]
        assert issue.path == ["user", "tags", 1]

    def test_checks_skipped_on_structural_failure(self) -> None:
        calls: list[Any] = []
        schema = sk.object_(USER_SHAPE).refine(lambda v: calls.append(v) or True)
        _issues(schema, {"name": 1, "age": 1})
        assert calls == []

    def test_refine_with_path(self) -> None:
        schema = sk.object_({"password": sk.string(), "confirm": sk.string()}).refine(
            lambda v: v["password"] == v["confirm"], error="Passwords differ", path=["confirm"]
        )
        issue = _issues(schema, {"password": "a", "confirm": "b"})[0]
        assert issue.path == ["confirm"]
        assert issue.message == "Passwords differ"

    def test_input_not_mutated(self) -> None:
        data = {"name": "  Ada  ", "age": 1, "extra": True}
        schema = sk.object_({"name": sk.string().trim(), "age": sk.int_()})
        assert schema.parse(data) == {"name": "Ada", "age": 1}
        assert data == {"name": "  Ada  ", "age": 1, "extra": True}

    def test_non_schema_field_rejected(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="field 'name'"):
            sk.object_({"name": str})  # type: ignore[dict-item]


class TestStructuredInputs:
    def test_dataclass(self) -> None:
        assert sk.object_(USER_SHAPE).parse(UserRecord("Ada", 36)) == {"name": "Ada", "age": 36}

    def test_dataclass_alias(self) -> None:
        assert sk.object_({"name": sk.string()}).parse(Renamed("Ada")) == {"name": "Ada"}

    def test_pydantic_model_by_alias(self) -> None:
        model = UserModel(name="Ada", age=36)
        assert sk.object_(USER_SHAPE).parse(model) == {"name": "Ada", "age": 36}

    def test_namedtuple(self) -> None:
        assert sk.object_(USER_SHAPE).parse(UserTuple("Ada", 36)) == {"name": "Ada", "age": 36}


# ###############
# Unknown Keys
# ###############


class TestUnknownKeys:
    def test_strip_by_default(self) -> None:
        assert sk.object_({"a": sk.int_()}).parse({"a": 1, "b": 2}) == {"a": 1}

    def test_strict_reports_all_extras_once(self) -> None:
        issues = _issues(sk.strict_object({"a": sk.int_()}), {"a": 1, "b": 2, "c": 3})
        assert len(issues) == 1
        assert issues[0].code is IssueCode.UNRECOGNIZED_KEYS
        assert issues[0].keys == ["b", "c"]
        assert issues[0].message == 'Unrecognized keys: "b", "c"'

    def test_strict_reports_alongside_field_issues(self) -> None:
        issues = _issues(sk.object_({"a": sk.int_()}).strict(), {"a": "x", "b": 2})
        assert [i.code for i in issues] == [IssueCode.INVALID_TYPE, IssueCode.UNRECOGNIZED_KEYS]

    def test_passthrough(self) -> None:
        schema = sk.loose_object({"a": sk.int_()})
        assert schema.parse({"a": 1, "b": "x"}) == {"a": 1, "b": "x"}
        assert sk.object_({"a": sk.int_()}).passthrough().parse({"a": 1, "b": 2}) == {"a": 1, "b": 2}

    def test_catchall_validates_extras(self) -> None:
        schema = sk.object_({"a": sk.int_()}).catchall(sk.string())
        assert schema.parse({"a": 1, "b": "x"}) == {"a": 1, "b": "x"}
        issue = _issues(schema, {"a": 1, "b": 2})[0]
        assert issue.path == ["b"]
        assert issue.code is IssueCode.INVALID_TYPE

    def test_catchall_reports_non_string_keys(self) -> None:
        result = sk.object_({}).catchall(sk.int_()).safe_parse({1.5: "x"})
        assert result.error is not None
        assert result.error.issues[0].path == [1.5]
        assert str(result.error) == "✖ Invalid input: expected int, received string\n  → at [1.5]"

    def test_strip_after_strict(self) -> None:
        schema = sk.strict_object({"a": sk.int_()}).strip()
        assert schema.parse({"a": 1, "b": 2}) == {"a": 1}

    def test_mode_methods_do_not_modify_receiver(self) -> None:
        base = sk.object_({"a": sk.int_()})
        base.strict()
        base.catchall(sk.string())
        assert base.mode == "strip"
        assert base.catchall_schema is None


# ###############
# Shape Operations
# ###############


class TestShapeOperations:
    def test_keyof(self) -> None:
        keys = sk.object_(USER_SHAPE).keyof()
        assert keys.options == ["name", "age"]
        assert keys.parse("age") == "age"

    def test_pick_and_omit(self) -> None:
        schema = sk.object_(USER_SHAPE)
        assert list(schema.pick(["name"]).shape) == ["name"]
        assert list(schema.omit(["name"]).shape) == ["age"]

    def test_pick_unknown_key(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="unknown key"):
            sk.object_(USER_SHAPE).pick(["email"])

    def test_pick_refined_rejected(self) -> None:
        refined = sk.object_(USER_SHAPE).refine(lambda v: True)
        with pytest.raises(SchemaDefinitionError):
            refined.pick(["name"])
        with pytest.raises(SchemaDefinitionError):
            refined.omit(["name"])

    def test_extend(self) -> None:
        schema = sk.object_({"a": sk.int_()}).extend({"b": sk.string()})
        assert schema.parse({"a": 1, "b": "x"}) == {"a": 1, "b": "x"}

    def test_extend_refined_overwrite_rejected(self) -> None:
        refined = sk.object_({"a": sk.int_()}).refine(lambda v: True)
        with pytest.raises(SchemaDefinitionError, match="safe_extend"):
            refined.extend({"a": sk.string()})
        assert "b" in refined.extend({"b": sk.string()}).shape

    def test_safe_extend_keeps_checks(self) -> None:
        refined = sk.object_({"a": sk.int_()}).refine(lambda v: v["a"] > 0, error="positive")
        extended = refined.safe_extend({"a": sk.int_(coerce=True)})
        assert extended.parse({"a": "3"}) == {"a": 3}
        assert _issues(extended, {"a": "0"})[0].message == "positive"

    def test_merge(self) -> None:
        left = sk.object_({"a": sk.int_(), "b": sk.int_()})
        right = sk.strict_object({"b": sk.string()})
        merged = left.merge(right)
        assert merged.parse({"a": 1, "b": "x"}) == {"a": 1, "b": "x"}
        assert merged.mode == "strict"

    def test_partial(self) -> None:
        schema = sk.object_(USER_SHAPE).partial()
        assert schema.parse({}) == {}
        assert _issues(schema, {"name": ""})[0].code is IssueCode.TOO_SMALL

    def test_partial_selected_keys(self) -> None:
        schema = sk.object_(USER_SHAPE).partial(["age"])
        assert schema.parse({"name": "Ada"}) == {"name": "Ada"}
        assert _issues(schema, {"age": 1})[0].path == ["name"]

    def test_partial_accepts_explicit_none(self) -> None:
        schema = sk.object_({"a": sk.string()}).partial()
        assert schema.parse({"a": None}) == {"a": None}
        only_age = sk.object_(USER_SHAPE).partial(["age"])
        assert only_age.parse({"name": "Ada", "age": None}) == {"name": "Ada", "age": None}
        assert _issues(only_age, {"name": None})[0].path == ["name"]

    def test_partial_none_still_uses_default(self) -> None:
        schema = sk.object_({"a": sk.string().default("x")}).partial()
        assert schema.parse({"a": None}) == {"a": "x"}

    def test_required_overrides_optional(self) -> None:
        schema = sk.object_({"nick": sk.string().optional()}).required()
        issue = _issues(schema, {})[0]
        assert issue.path == ["nick"]
        assert issue.expected == "nonoptional"

    def test_required_after_partial(self) -> None:
        schema = sk.object_(USER_SHAPE).partial().required(["name"])
        assert schema.parse({"name": "Ada"}) == {"name": "Ada"}
        assert _issues(schema, {})[0].path == ["name"]
