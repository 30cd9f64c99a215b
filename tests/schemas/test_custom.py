# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for custom schemas and property checks."""

from dataclasses import dataclass
from typing import Any

import schemakit as sk
from schemakit import checks
from schemakit.core.context import ParsePayload, RefinementContext
from schemakit.core.types import IssueCode

# ###############
# Custom
# ###############


class TestCustom:
    def test_predicate(self) -> None:
        schema = sk.custom(lambda v: isinstance(v, complex), error="Need a complex number")
        assert schema.parse(1j) == 1j
        result = schema.safe_parse(1)
        assert result.error is not None
        issue = result.error.issues[0]
        assert (issue.code, issue.message) == (IssueCode.CUSTOM, "Need a complex number")

    def test_without_predicate_accepts_anything(self) -> None:
        marker = object()
        assert sk.custom().parse(marker) is marker

    def test_check_callback(self) -> None:
        def positive_real(payload: ParsePayload, ctx: RefinementContext) -> None:
            if payload.value.real <= 0:
                ctx.add_issue("Real part must be positive")

        schema = sk.custom(check=positive_real)
        assert schema.parse(1 + 1j) == 1 + 1j
        result = schema.safe_parse(-1 + 1j)
        assert result.error is not None
        assert result.error.issues[0].message == "Real part must be positive"

    def test_params(self) -> None:
        result = sk.custom(lambda v: False, params={"kind": "always"}).safe_parse(1)
        assert result.error is not None
        assert result.error.issues[0].params == {"kind": "always"}


# ###############
# Property Checks
# ###############


@dataclass
class Upload:
    name: str
    size: int


class TestPropertyCheck:
    def test_attribute_validated(self) -> None:
        schema = sk.any_().check(checks.property("size", sk.int_().lte(1024)))
        assert isinstance(schema.parse(Upload("a.txt", 10)), Upload)
        result = schema.safe_parse(Upload("a.txt", 4096))
        assert result.error is not None
        issue = result.error.issues[0]
        assert issue.path == ["size"]
        assert issue.code is IssueCode.TOO_BIG

    def test_missing_property(self) -> None:
        result = sk.any_().check(checks.property("size", sk.int_())).safe_parse({"name": "x"})
        assert result.error is not None
        issue: Any = result.error.issues[0]
        assert issue.received == "nil"

    def test_error_replaces_property_messages(self) -> None:
        schema = sk.object_({"a": sk.string()}).check(checks.property("a", sk.string().min(3), error="prop msg"))
        result = schema.safe_parse({"a": "x"})
        assert result.error is not None
        issue = result.error.issues[0]
        assert (issue.path, issue.message) == (["a"], "prop msg")

    def test_property_schema_messages_kept_without_error(self) -> None:
        schema = sk.object_({"a": sk.string()}).check(checks.property("a", sk.string().min(3, error="own msg")))
        result = schema.safe_parse({"a": "x"})
        assert result.error is not None
        assert result.error.issues[0].message == "own msg"
