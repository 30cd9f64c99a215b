# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""User-defined checks: predicates, payload callbacks, overwrites and property checks."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from schemakit.checks.base import Check, make_check
from schemakit.core import issues
from schemakit.core.context import ParseContext, ParsePayload, RefinementContext
from schemakit.core.issues import ErrorMap
from schemakit.core.types import PathSegment

# ###############
# Public Interface
# ###############


def custom(
    predicate: Callable[[Any], Any],
    *,
    error: str | ErrorMap | None = None,
    abort: bool = False,
    path: Iterable[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
    convert: Callable[[Any], Any] | None = None,
) -> Check:
    """Report a ``custom`` issue when *predicate* returns a falsy value.

    Args:
        predicate: Called with the payload value.
        error: Message or error map for the reported issue.
        abort: Stop later checks when the predicate fails.
        path: Path of the reported issue, relative to the value.
        params: Parameters attached to the reported issue.
        convert: Applied to the payload value before calling *predicate*;
            schemas use it to hand over the value in its exposed form.
    """
    issue_path = tuple(path)

    def fn(payload: ParsePayload, ctx: ParseContext) -> None:
        value = convert(payload.value) if convert is not None else payload.value
        if not predicate(value):
            payload.add_issue(issues.custom(None, payload.value, params=params).with_path(issue_path))

    return make_check("custom", fn, error=error, abort=abort, path=list(issue_path), params=dict(params or {}))


def callback(
    fn: Callable[[ParsePayload, RefinementContext], None],
    *,
    error: str | ErrorMap | None = None,
    abort: bool = False,
) -> Check:
    """Wrap a callback receiving the payload and a refinement context.

    The callback reports failures through ``ctx.add_issue``; its return value
    is ignored.
    """

    def run(payload: ParsePayload, ctx: ParseContext) -> None:
        fn(payload, RefinementContext(ctx, payload))

    return make_check("custom", run, error=error, abort=abort)


def overwrite(fn: Callable[[Any], Any]) -> Check:
    """Replace the payload value with ``fn(value)``; never reports issues."""

    def run(payload: ParsePayload, ctx: ParseContext) -> None:
        payload.value = fn(payload.value)

    return make_check("overwrite", run)


def property(
    name: str,
    schema: Any,
    *,
    error: str | ErrorMap | None = None,
    abort: bool = False,
) -> Check:
    """Validate one property of the value against *schema*.

    The property is read by key from mappings and by attribute otherwise.
    Issues reported by *schema* are prefixed with *name*. When *error* is
    given it takes over the messages of those issues.
    """

    def fn(payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        if isinstance(value, Mapping):
            child = value.get(name)
        else:
            child = getattr(value, name, None)
        result = schema._run(child, ctx.descend(name))
        reported = result.issues
        if check.error is not None:
            reported = [issue.with_check(check) for issue in reported]
        payload.merge(reported, name)

    check = make_check("property", fn, error=error, abort=abort, name=name)
    return check
