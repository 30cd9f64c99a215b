# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for schema internals and the per-call parse state."""

import copy

import pytest

from schemakit.core import issues
from schemakit.core.context import ParseContext, ParsePayload, RefinementContext
from schemakit.core.internals import UNSET, SchemaInternals, to_error_map
from schemakit.core.types import IssueCode, TypeTag

# ###############
# Internals
# ###############


class TestSchemaInternals:
    def test_clone_leaves_original_untouched(self) -> None:
        original = SchemaInternals(type=TypeTag.STRING)
        changed = original.clone(optional=True)
        assert changed.optional
        assert not original.optional

    def test_record_is_frozen(self) -> None:
        internals = SchemaInternals(type=TypeTag.STRING)
        with pytest.raises(AttributeError):
            internals.optional = True  # type: ignore[misc]

    def test_bag_is_read_only(self) -> None:
        internals = SchemaInternals(type=TypeTag.OBJECT, bag={"mode": "strip"})
        with pytest.raises(TypeError):
            internals.bag["mode"] = "strict"  # type: ignore[index]

    def test_with_bag_adds_entries(self) -> None:
        internals = SchemaInternals(type=TypeTag.OBJECT, bag={"mode": "strip"})
        updated = internals.with_bag(mode="strict", catchall=None)
        assert dict(updated.bag) == {"mode": "strict", "catchall": None}
        assert internals.bag["mode"] == "strip"

    def test_default_and_prefault_flags(self) -> None:
        internals = SchemaInternals(type=TypeTag.STRING)
        assert not internals.has_default
        assert not internals.has_prefault
        assert internals.clone(default_value=None).has_default
        assert internals.clone(prefault_factory=lambda: "x").has_prefault

    def test_default_value_is_copied(self) -> None:
        internals = SchemaInternals(type=TypeTag.ARRAY, default_value=[1])
        first = internals.get_default()
        first.append(2)
        assert internals.get_default() == [1]

    def test_factory_called_each_time(self) -> None:
        calls: list[int] = []

        def produce() -> int:
            calls.append(1)
            return len(calls)

        internals = SchemaInternals(type=TypeTag.INT, default_factory=produce)
        assert internals.get_default() == 1
        assert internals.get_default() == 2

    def test_pointer_flavor(self) -> None:
        internals = SchemaInternals(type=TypeTag.STRING)
        assert not internals.pointer
        assert internals.clone(optional=True).pointer
        assert internals.clone(nilable=True).pointer


class TestUnset:
    def test_singleton(self) -> None:
        assert copy.copy(UNSET) is UNSET
        assert copy.deepcopy(UNSET) is UNSET
        assert repr(UNSET) == "UNSET"
        assert not UNSET


class TestToErrorMap:
    def test_string_becomes_fixed_map(self) -> None:
        error_map = to_error_map("Nope")
        assert error_map is not None
        assert error_map(issues.custom(None, 1)) == "Nope"

    def test_callable_kept(self) -> None:
        def error_map(_issue: issues.RawIssue) -> str:
            return "x"

        assert to_error_map(error_map) is error_map

    def test_none(self) -> None:
        assert to_error_map(None) is None


# ###############
# Parse State
# ###############


class TestParseContext:
    def test_descend_extends_path(self) -> None:
        ctx = ParseContext().descend("user").descend(0)
        assert ctx.path == ("user", 0)


class TestParsePayload:
    def test_merge_prefixes_paths(self) -> None:
        payload = ParsePayload({})
        payload.merge([issues.custom("x", 1).with_path(("b",))], "a")
        assert payload.issues[0].path == ("a", "b")
        assert payload.has_issues


class TestRefinementContext:
    def test_add_message_issue(self) -> None:
        payload = ParsePayload("abc")
        ctx = RefinementContext(ParseContext().descend("name"), payload)
        ctx.add_issue("Too fancy", params={"level": 2})
        assert ctx.value == "abc"
        assert ctx.path == ("name",)
        issue = payload.issues[0]
        assert issue.code is IssueCode.CUSTOM
        assert issue.message == "Too fancy"
        assert issue.get("params") == {"level": 2}

    def test_add_raw_issue_with_path(self) -> None:
        payload = ParsePayload({"a": 1})
        ctx = RefinementContext(ParseContext(), payload)
        ctx.add_issue(issues.too_small("number", 2, 1), path=["a"])
        assert payload.issues[0].path == ("a",)
        assert payload.issues[0].code is IssueCode.TOO_SMALL
