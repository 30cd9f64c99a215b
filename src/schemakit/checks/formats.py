# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""String format checks."""

from __future__ import annotations

import re
from collections.abc import Iterable

from schemakit.checks.base import Check, make_check
from schemakit.core import issues
from schemakit.core.context import ParseContext, ParsePayload
from schemakit.core.issues import ErrorMap

# ###############
# Public Interface
# ###############

EMAIL_PATTERN = re.compile(
    r"^(?!\.)(?!.*\.\.)([A-Za-z0-9_'+\-\.]*)[A-Za-z0-9_+\-]@([A-Za-z0-9][A-Za-z0-9\-]*\.)+[A-Za-z]{2,}$"
)


def regex(
    pattern: str | re.Pattern[str],
    *,
    format: str = "regex",
    error: str | ErrorMap | None = None,
    abort: bool = False,
) -> Check:
    """Require the string to contain a match of *pattern*.

    Args:
        pattern: A compiled or uncompiled regular expression. It is searched,
            not anchored; anchor it explicitly to match the whole string.
        format: Format name reported on failure (``"email"`` for emails).
        error: Message or error map for issues reported by this check.
        abort: Stop later checks when this one fails.
    """
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern

    def fn(payload: ParsePayload, ctx: ParseContext) -> None:
        if compiled.search(payload.value) is None:
            payload.add_issue(issues.invalid_format(format, payload.value, pattern=compiled.pattern))

    return make_check(format, fn, error=error, abort=abort, pattern=compiled.pattern)


def email(*, error: str | ErrorMap | None = None, abort: bool = False) -> Check:
    return regex(EMAIL_PATTERN, format="email", error=error, abort=abort)


def starts_with(prefix: str, *, error: str | ErrorMap | None = None, abort: bool = False) -> Check:
    def fn(payload: ParsePayload, ctx: ParseContext) -> None:
        if not payload.value.startswith(prefix):
            payload.add_issue(issues.invalid_format("starts_with", payload.value, prefix=prefix))

    return make_check("starts_with", fn, error=error, abort=abort, prefix=prefix)


def ends_with(suffix: str, *, error: str | ErrorMap | None = None, abort: bool = False) -> Check:
    def fn(payload: ParsePayload, ctx: ParseContext) -> None:
        if not payload.value.endswith(suffix):
            payload.add_issue(issues.invalid_format("ends_with", payload.value, suffix=suffix))

    return make_check("ends_with", fn, error=error, abort=abort, suffix=suffix)


def includes(substring: str, *, error: str | ErrorMap | None = None, abort: bool = False) -> Check:
    def fn(payload: ParsePayload, ctx: ParseContext) -> None:
        if substring not in payload.value:
            payload.add_issue(issues.invalid_format("includes", payload.value, includes=substring))

    return make_check("includes", fn, error=error, abort=abort, includes=substring)


def lowercase(*, error: str | ErrorMap | None = None, abort: bool = False) -> Check:
    def fn(payload: ParsePayload, ctx: ParseContext) -> None:
        if payload.value != payload.value.lower():
            payload.add_issue(issues.invalid_format("lowercase", payload.value))

    return make_check("lowercase", fn, error=error, abort=abort)


def uppercase(*, error: str | ErrorMap | None = None, abort: bool = False) -> Check:
    def fn(payload: ParsePayload, ctx: ParseContext) -> None:
        if payload.value != payload.value.upper():
            payload.add_issue(issues.invalid_format("uppercase", payload.value))

    return make_check("uppercase", fn, error=error, abort=abort)


def mime(types: Iterable[str], *, error: str | ErrorMap | None = None, abort: bool = False) -> Check:
    """Require the value's ``content_type`` attribute to be one of *types*.

    Plain strings are treated as the content type itself.
    """
    allowed = list(types)

    def fn(payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        content_type = value if isinstance(value, str) else getattr(value, "content_type", None)
        if content_type not in allowed:
            payload.add_issue(issues.invalid_format("mime", content_type, options=allowed))

    return make_check("mime", fn, error=error, abort=abort, types=allowed)
