# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Per-call parse state: context, payload, and refinement context."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from schemakit.core import issues
from schemakit.core.issues import ErrorMap, RawIssue
from schemakit.core.types import PathSegment

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ParseContext:
    """Read-only configuration of a single parse call.

    Attributes:
        error: Per-call error map, the highest-priority message customizer.
        report_input: Copy the offending input into finalized issues.
        path: Location of the value being parsed, maintained by composites.
    """

    error: ErrorMap | None = None
    report_input: bool = False
    path: tuple[PathSegment, ...] = ()

    def descend(self, segment: PathSegment) -> ParseContext:
        """Return a context for a child value located at *segment*."""
        return replace(self, path=(*self.path, segment))


@dataclass
class ParsePayload:
    """The value and issue accumulator threaded through checks and transforms.

    Attributes:
        value: The current value; overwrite checks and transforms replace it.
        issues: Raw issues collected so far, in emission order.
        path: Path of the value, relative to the schema being parsed.
    """

    value: Any
    issues: list[RawIssue] = field(default_factory=list)
    path: list[PathSegment] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return len(self.issues) > 0

    def add_issue(self, issue: RawIssue) -> None:
        self.issues.append(issue)

    def merge(self, other: Iterable[RawIssue], *prefix: PathSegment) -> None:
        """Append issues reported by a child, prefixing their paths with *prefix*."""
        for issue in other:
            self.issues.append(issue.prefixed(*prefix) if prefix else issue)


class RefinementContext:
    """Handle given to transforms and check callbacks for reporting issues.

    It exposes the fields of the underlying :class:`ParseContext` and lets the
    callee push issues onto the in-flight payload.
    """

    def __init__(self, ctx: ParseContext, payload: ParsePayload, inst: Any = None) -> None:
        self._ctx = ctx
        self._payload = payload
        self._inst = inst

    @property
    def context(self) -> ParseContext:
        return self._ctx

    @property
    def path(self) -> tuple[PathSegment, ...]:
        return self._ctx.path

    @property
    def value(self) -> Any:
        return self._payload.value

    def add_issue(
        self,
        issue: str | RawIssue | None = None,
        *,
        path: Iterable[PathSegment] = (),
        params: Mapping[str, Any] | None = None,
    ) -> None:
        """Report an issue on the value being refined or transformed.

        Args:
            issue: A message for a ``custom`` issue, or a fully built raw issue.
            path: Path of the issue relative to the current value.
            params: Extra parameters attached to a ``custom`` issue.
        """
        if isinstance(issue, RawIssue):
            raw = issue
        else:
            raw = issues.custom(issue, self._payload.value, params=params)
        if path:
            raw = raw.with_path((*path, *raw.path))
        if raw.inst is None and self._inst is not None:
            raw = raw.with_inst(self._inst)
        self._payload.add_issue(raw)
