# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for message resolution and issue finalization."""

from schemakit.checks.base import Check
from schemakit.core import issues
from schemakit.core.config import SchemaKitConfig
from schemakit.core.context import ParseContext, ParsePayload
from schemakit.core.finalize import finalize_issue, resolve_message
from schemakit.core.internals import SchemaInternals
from schemakit.core.issues import ErrorMap, RawIssue
from schemakit.core.types import IssueCode, TypeTag

# ###############
# Test Helpers
# ###############


def _fixed(message: str | None) -> ErrorMap:
    """Build an error map that always answers with *message*."""
    return lambda _issue: message


def _noop(payload: ParsePayload, ctx: ParseContext) -> None:
    pass


def _issue(check_message: str | None = "check", inst_message: str | None = "inst") -> RawIssue:
    raw = issues.too_small("string", 3, "ab")
    check = Check(kind="min_length", fn=_noop, error=_fixed(check_message))
    inst = SchemaInternals(type=TypeTag.STRING, error=_fixed(inst_message))
    return raw.with_check(check).with_inst(inst)


_CONFIG = SchemaKitConfig(custom_error=_fixed("custom"), locale_error=_fixed("locale"))


# ###############
# Message Priority
# ###############


class TestResolveMessage:
    def test_context_error_wins(self) -> None:
        ctx = ParseContext(error=_fixed("ctx"))
        assert resolve_message(_issue(), ctx, _CONFIG) == "ctx"

    def test_check_error_before_schema_error(self) -> None:
        assert resolve_message(_issue(), ParseContext(), _CONFIG) == "check"

    def test_schema_error_before_global(self) -> None:
        assert resolve_message(_issue(check_message=None), ParseContext(), _CONFIG) == "inst"

    def test_global_custom_before_locale(self) -> None:
        raw = _issue(check_message=None, inst_message=None)
        assert resolve_message(raw, ParseContext(), _CONFIG) == "custom"

    def test_locale_before_default(self) -> None:
        raw = _issue(check_message=None, inst_message=None)
        config = SchemaKitConfig(locale_error=_fixed("locale"))
        assert resolve_message(raw, ParseContext(), config) == "locale"

    def test_default_when_every_map_declines(self) -> None:
        raw = _issue(check_message=None, inst_message=None)
        message = resolve_message(raw, ParseContext(error=_fixed(None)), SchemaKitConfig())
        assert message == "Too small: expected string to have at least 3 characters"

    def test_error_map_receives_raw_issue(self) -> None:
        seen: list[RawIssue] = []

        def record(issue: RawIssue) -> None:
            seen.append(issue)

        raw = issues.invalid_type(TypeTag.INT, "x")
        resolve_message(raw, ParseContext(error=record), SchemaKitConfig())
        assert seen == [raw]


# ###############
# Finalization
# ###############


class TestFinalizeIssue:
    def test_copies_properties(self) -> None:
        raw = issues.too_small("string", 3, "ab").with_path(("name",))
        final = finalize_issue(raw, ParseContext(), SchemaKitConfig())
        assert final.code is IssueCode.TOO_SMALL
        assert final.path == ["name"]
        assert final.minimum == 3
        assert final.inclusive is True
        assert final.origin == "string"

    def test_input_hidden_by_default(self) -> None:
        final = finalize_issue(issues.invalid_type(TypeTag.INT, "x"), ParseContext(), SchemaKitConfig())
        assert final.input is None

    def test_input_reported_on_request(self) -> None:
        ctx = ParseContext(report_input=True)
        final = finalize_issue(issues.invalid_type(TypeTag.INT, "x"), ctx, SchemaKitConfig())
        assert final.input == "x"

    def test_exact_size_flag_copied(self) -> None:
        exact = finalize_issue(issues.too_big("string", 2, "abc", exact=True), ParseContext(), SchemaKitConfig())
        inclusive = finalize_issue(issues.too_big("string", 2, "abc"), ParseContext(), SchemaKitConfig())
        assert (exact.exact, inclusive.exact) == (True, False)

    def test_element_key_copied(self) -> None:
        nested = [issues.invalid_type(TypeTag.INT, "a")]
        final = finalize_issue(issues.invalid_element("set", "a", nested, {"a"}), ParseContext(), SchemaKitConfig())
        assert final.key == "a"

    def test_discriminator_note_copied(self) -> None:
        raw = issues.invalid_union([], {}, note="no matching discriminator")
        final = finalize_issue(raw, ParseContext(), SchemaKitConfig())
        assert final.note == "no matching discriminator"
        assert final.message == "Invalid input: no matching discriminator"

    def test_union_errors_finalized_recursively(self) -> None:
        options = [[issues.invalid_type(TypeTag.INT, True)], [issues.invalid_type(TypeTag.STRING, True)]]
        final = finalize_issue(issues.invalid_union(options, True), ParseContext(), SchemaKitConfig())
        assert final.errors is not None
        assert [option[0].expected for option in final.errors] == ["int", "string"]
        assert final.errors[0][0].message == "Invalid input: expected int, received bool"

    def test_nested_key_issues_finalized(self) -> None:
        nested = [issues.too_small("string", 2, "a")]
        final = finalize_issue(issues.invalid_key("record", nested, "a"), ParseContext(), SchemaKitConfig())
        assert final.issues is not None
        assert final.issues[0].code is IssueCode.TOO_SMALL

    def test_final_issue_serializes(self) -> None:
        final = finalize_issue(issues.unrecognized_keys(["x"], {}), ParseContext(), SchemaKitConfig())
        dumped = final.model_dump(exclude_none=True)
        assert dumped["keys"] == ["x"]
        assert dumped["code"] is IssueCode.UNRECOGNIZED_KEYS
        assert '"unrecognized_keys"' in final.model_dump_json()
