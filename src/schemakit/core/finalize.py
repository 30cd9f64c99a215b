# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Turning raw issues into final, user-visible issues."""

from __future__ import annotations

from collections.abc import Iterable

from schemakit.core.config import SchemaKitConfig, get_config
from schemakit.core.context import ParseContext
from schemakit.core.issues import ErrorMap, Issue, RawIssue
from schemakit.core.messages import default_message

# ###############
# Public Interface
# ###############

# Properties copied verbatim from a raw issue onto the final issue.
_COPIED_PROPERTIES = (
    "expected",
    "received",
    "format",
    "pattern",
    "minimum",
    "maximum",
    "inclusive",
    "exact",
    "divisor",
    "keys",
    "key",
    "options",
    "params",
    "match_count",
    "note",
)


def resolve_message(
    issue: RawIssue,
    ctx: ParseContext | None = None,
    config: SchemaKitConfig | None = None,
) -> str:
    """Compute the message of *issue* through the customizer chain.

    Priority: per-call context error map, per-check error map, per-schema
    error map, global custom error map, global locale error map, and finally
    the code-default English message. An error map returning None passes the
    decision on to the next one.
    """
    config = config if config is not None else get_config()
    chain: list[ErrorMap | None] = [
        ctx.error if ctx is not None else None,
        getattr(issue.check, "error", None),
        getattr(issue.inst, "error", None),
        config.custom_error,
        config.locale_error,
    ]
    for error_map in chain:
        if error_map is None:
            continue
        message = error_map(issue)
        if message:
            return message
    return default_message(issue)


def finalize_issue(
    issue: RawIssue,
    ctx: ParseContext | None = None,
    config: SchemaKitConfig | None = None,
) -> Issue:
    """Finalize a single raw issue, recursing into nested union and element issues."""
    config = config if config is not None else get_config()
    fields = {key: issue.properties[key] for key in _COPIED_PROPERTIES if key in issue.properties}
    if "errors" in issue.properties:
        fields["errors"] = [finalize_issues(option, ctx, config) for option in issue.properties["errors"]]
    if "issues" in issue.properties:
        fields["issues"] = finalize_issues(issue.properties["issues"], ctx, config)
    report_input = ctx is not None and ctx.report_input
    return Issue(
        code=issue.code,
        path=list(issue.path),
        message=resolve_message(issue, ctx, config),
        input=issue.input if report_input else None,
        origin=issue.origin,
        **fields,
    )


def finalize_issues(
    raw_issues: Iterable[RawIssue],
    ctx: ParseContext | None = None,
    config: SchemaKitConfig | None = None,
) -> list[Issue]:
    """Finalize raw issues, keeping emission order."""
    return [finalize_issue(issue, ctx, config) for issue in raw_issues]
