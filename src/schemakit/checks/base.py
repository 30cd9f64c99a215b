# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""The check record and the check loop.

A check is a named function over a :class:`~schemakit.core.context.ParsePayload`.
It reports failures by appending raw issues to the payload and may replace the
payload value (overwrite checks). Checks of a schema run in insertion order
over the same payload.
"""

from __future__ import annotations

import numbers
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from schemakit.core.context import ParseContext, ParsePayload
from schemakit.core.internals import to_error_map
from schemakit.core.issues import ErrorMap

# ###############
# Public Interface
# ###############

CheckFn = Callable[[ParsePayload, ParseContext], None]


@dataclass(frozen=True)
class Check:
    """A single validation or rewrite step attached to a schema.

    Attributes:
        kind: Name of the check, such as ``"min_length"`` or ``"custom"``.
        fn: Function reporting issues on the payload.
        params: Parameters the check was built with, for introspection.
        error: Error map used for messages of issues this check reports.
        abort: Stop running later checks once this one reported an issue.
    """

    kind: str
    fn: CheckFn
    params: Mapping[str, Any] = field(default_factory=dict)
    error: ErrorMap | None = None
    abort: bool = False

    def run(self, payload: ParsePayload, ctx: ParseContext) -> bool:
        """Run the check and stamp the issues it reported.

        Returns:
            True when the check reported at least one issue.
        """
        start = len(payload.issues)
        self.fn(payload, ctx)
        for index in range(start, len(payload.issues)):
            issue = payload.issues[index]
            if issue.check is None and issue.inst is None:
                payload.issues[index] = issue.with_check(self)
        return len(payload.issues) > start


def make_check(
    kind: str,
    fn: CheckFn,
    *,
    error: str | ErrorMap | None = None,
    abort: bool = False,
    **params: Any,
) -> Check:
    """Build a Check, normalizing ``error`` into an error map."""
    return Check(kind=kind, fn=fn, params=params, error=to_error_map(error), abort=abort)


def run_checks(
    checks: Iterable[Check],
    payload: ParsePayload,
    ctx: ParseContext,
    *,
    abort: bool = False,
) -> None:
    """Run *checks* in order, stopping after an aborting check that reported issues.

    With *abort* set every check aborts, so the loop ends at the first failure.
    """
    for check in checks:
        if check.run(payload, ctx) and (abort or check.abort):
            break


def origin_of(value: Any) -> str:
    """Return the origin recorded on size and range issues for *value*."""
    if isinstance(value, str):
        return "string"
    if isinstance(value, (bytes, bytearray)):
        return "bytes"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, (set, frozenset)):
        return "set"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, numbers.Number):
        return "number"
    return type(value).__name__
