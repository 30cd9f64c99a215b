# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for unions, exclusive unions and intersections."""

from typing import Any

import pytest

import schemakit as sk
from schemakit.core.errors import SchemaDefinitionError
from schemakit.core.issues import Issue
from schemakit.core.types import IssueCode
from schemakit.schemas.unions import UNMERGEABLE_MESSAGE, merge_values


def _issues(schema: sk.Schema, value: Any) -> list[Issue]:
    result = schema.safe_parse(value)
    assert result.error is not None, f"Expected {schema!r} to reject {value!r}"
    return list(result.error.issues)


# ###############
# Union
# ###############


class TestUnion:
    def test_any_option_succeeds(self) -> None:
        schema = sk.union([sk.string(), sk.int_()])
        assert schema.parse("a") == "a"
        assert schema.parse(1) == 1

    def test_first_success_wins(self) -> None:
        schema = sk.union([sk.string().transform(lambda v, ctx: "first"), sk.string()])
        assert schema.parse("x") == "first"

    def test_type_preserving_success_preferred(self) -> None:
        assert sk.union([sk.string(coerce=True), sk.int_()]).parse(5) == 5

    def test_coerced_result_when_nothing_else_matches(self) -> None:
        assert sk.union([sk.string(coerce=True), sk.bool_()]).parse(5) == "5"

    def test_failure_keeps_every_option(self) -> None:
        issue = _issues(sk.union([sk.string(), sk.int_()]), 1.5)[0]
        assert issue.code is IssueCode.INVALID_UNION
        assert issue.errors is not None
        assert [[i.code for i in option] for option in issue.errors] == [
            [IssueCode.INVALID_TYPE],
            [IssueCode.INVALID_TYPE],
        ]
        assert issue.errors[0][0].expected == "string"
        assert issue.errors[1][0].expected == "int"

    def test_none_option(self) -> None:
        assert sk.union([sk.string(), sk.none()]).parse(None) is None

    def test_or_shorthand(self) -> None:
        assert sk.string().or_(sk.int_()).parse(2) == 2

    def test_requires_options(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="at least one option"):
            sk.union([])


# ###############
# Exclusive Union
# ###############


class TestXor:
    def test_exactly_one_match(self) -> None:
        schema = sk.xor([sk.string(), sk.int_()])
        assert schema.parse("a") == "a"

    def test_two_matches_rejected(self) -> None:
        issue = _issues(sk.xor([sk.int_(), sk.int_().positive()]), 3)[0]
        assert issue.code is IssueCode.INVALID_XOR
        assert issue.match_count == 2
        assert issue.message == "Invalid input: expected exactly one option to match, 2 matched"

    def test_no_match_is_invalid_union(self) -> None:
        issue = _issues(sk.xor([sk.string(), sk.int_()]), 1.5)[0]
        assert issue.code is IssueCode.INVALID_UNION
        assert issue.errors is not None
        assert len(issue.errors) == 2


# ###############
# Intersection
# ###############


class TestIntersection:
    def test_object_results_merged(self) -> None:
        left = sk.loose_object({"a": sk.int_()})
        right = sk.loose_object({"b": sk.string()})
        assert sk.intersection(left, right).parse({"a": 1, "b": "x"}) == {"a": 1, "b": "x"}

    def test_both_sides_reported(self) -> None:
        schema = sk.intersection(sk.object_({"a": sk.int_()}), sk.object_({"b": sk.int_()}))
        issues = _issues(schema, {"a": "x", "b": "y"})
        assert [i.path for i in issues] == [["a"], ["b"]]

    def test_conflict(self) -> None:
        schema = sk.intersection(sk.string().transform(lambda v, ctx: 1), sk.string().transform(lambda v, ctx: 2))
        issue = _issues(schema, "x")[0]
        assert issue.code is IssueCode.CUSTOM
        assert issue.message == UNMERGEABLE_MESSAGE

    def test_and_shorthand(self) -> None:
        assert sk.int_().gte(0).and_(sk.int_().lte(5)).parse(3) == 3
        assert _issues(sk.int_().gte(0).and_(sk.int_().lte(5)), 6)[0].code is IssueCode.TOO_BIG


class TestMergeValues:
    def test_equal_scalars(self) -> None:
        assert merge_values(1, 1) == (1, True)

    def test_type_mismatch_conflicts(self) -> None:
        assert merge_values(1, True) == (None, False)

    def test_nested_dicts(self) -> None:
        merged, ok = merge_values({"a": {"x": 1}}, {"a": {"y": 2}, "b": 3})
        assert ok
        assert merged == {"a": {"x": 1, "y": 2}, "b": 3}

    def test_lists_merged_elementwise(self) -> None:
        assert merge_values([{"a": 1}], [{"b": 2}]) == ([{"a": 1, "b": 2}], True)
        assert merge_values([1], [1, 2]) == (None, False)
