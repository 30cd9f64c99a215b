# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the optionality and default wrappers."""

import pytest

import schemakit as sk
from schemakit.core.errors import ValidationError
from schemakit.core.types import IssueCode


class TestOptional:
    def test_accepts_none(self) -> None:
        assert sk.string().optional().parse(None) is None
        assert sk.string().optional().parse("a") == "a"

    def test_checks_skipped_for_none(self) -> None:
        assert sk.string().min(3).optional().parse(None) is None

    def test_nilable_and_nullish(self) -> None:
        assert sk.int_().nilable().parse(None) is None
        assert sk.int_().nullish().parse(None) is None

    def test_is_optional(self) -> None:
        assert not sk.string().is_optional()
        assert sk.string().optional().is_optional()
        assert sk.string().nilable().is_optional()

    def test_receiver_unchanged(self) -> None:
        base = sk.string()
        base.optional()
        with pytest.raises(ValidationError):
            base.parse(None)


class TestNonoptional:
    def test_reverts_optional(self) -> None:
        schema = sk.string().optional().nonoptional()
        assert not schema.is_optional()
        result = schema.safe_parse(None)
        assert result.error is not None
        issue = result.error.issues[0]
        assert issue.code is IssueCode.NONOPTIONAL_VIOLATION
        assert issue.message == "Invalid input: expected nonoptional, received nil"

    def test_values_still_parsed(self) -> None:
        assert sk.string().nonoptional().parse("a") == "a"


class TestExactOptional:
    def test_none_rejected_outside_objects(self) -> None:
        result = sk.string().exact_optional().safe_parse(None)
        assert result.error is not None
        assert result.error.issues[0].code is IssueCode.INVALID_TYPE


class TestDefault:
    def test_replaces_none(self) -> None:
        assert sk.string().default("anon").parse(None) == "anon"

    def test_bypasses_checks(self) -> None:
        assert sk.string().min(10).default("short").parse(None) == "short"

    def test_present_value_validated(self) -> None:
        assert not sk.string().min(10).default("short").safe_parse("tiny").success

    def test_mutable_default_copied(self) -> None:
        schema = sk.list_(sk.int_()).default([])
        first = schema.parse(None)
        first.append(1)
        assert schema.parse(None) == []

    def test_factory(self) -> None:
        counter = iter(range(10))
        schema = sk.int_().default_factory(lambda: next(counter))
        assert schema.parse(None) == 0
        assert schema.parse(None) == 1

    def test_later_default_replaces_factory(self) -> None:
        schema = sk.int_().default_factory(lambda: 1).default(2)
        assert schema.parse(None) == 2


class TestPrefault:
    def test_substitute_is_parsed(self) -> None:
        assert sk.string().trim().prefault("  x  ").parse(None) == "x"

    def test_substitute_must_pass_checks(self) -> None:
        result = sk.string().min(3).prefault("ok").safe_parse(None)
        assert result.error is not None
        assert result.error.issues[0].code is IssueCode.TOO_SMALL

    def test_not_applied_to_invalid_input(self) -> None:
        assert not sk.string().prefault("fallback").safe_parse(1).success

    def test_factory(self) -> None:
        assert sk.int_(coerce=True).prefault_factory(lambda: "7").parse(None) == 7
