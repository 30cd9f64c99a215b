# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""The parse engine shared by every schema kind.

A parse call is an explicit state machine. Each state names the step that is
performed while the machine is in it; its handler returns the next state.

::

    NIL_HANDLING ──► COERCED ──► EXTRACTED ──► CHECKED ──► TRANSFORMED ──► CONVERTED ──► RETURNED
         │  ▲                        │            │             │
         ▼  │                        └────────────┴─────────────┴──────────► ERRORED
    PREFAULT_RETRY

The engine only talks to schemas through the leaf contract: ``_coerce``,
``_extract``, ``_extract_indirect``, ``_validate``, ``_zero`` and
``_accepts_none``. It never inspects what kind of schema it is running.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

from schemakit.checks.base import run_checks
from schemakit.core import issues
from schemakit.core.context import ParseContext, ParsePayload, RefinementContext
from schemakit.core.errors import ValidationError
from schemakit.engine.coerce import CoercionError

# ###############
# Public Interface
# ###############


class ParseState(Enum):
    """States of a single parse call; ERRORED and RETURNED are terminal."""

    NIL_HANDLING = "nil_handling"
    COERCED = "coerced"
    EXTRACTED = "extracted"
    CHECKED = "checked"
    PREFAULT_RETRY = "prefault_retry"
    TRANSFORMED = "transformed"
    CONVERTED = "converted"
    ERRORED = "errored"
    RETURNED = "returned"


TERMINAL_STATES = frozenset({ParseState.ERRORED, ParseState.RETURNED})


def run(schema: Any, value: Any, ctx: ParseContext, *, convert: bool = True) -> ParsePayload:
    """Parse *value* with *schema* and return the resulting payload.

    Issue paths in the returned payload are relative to *schema*. Callers
    that need a final error finalize the payload's issues themselves.

    Args:
        schema: The schema to run.
        value: The input value.
        ctx: The per-call parse context.
        convert: Map an absent result to the schema's zero value when the
            schema is not optional.

    Returns:
        The payload holding the parsed value and every raw issue.
    """
    return _ParseRun(schema, value, ctx, convert).execute()


def trace(schema: Any, value: Any, ctx: ParseContext | None = None) -> list[ParseState]:
    """Return the sequence of states visited while parsing *value*."""
    parse_run = _ParseRun(schema, value, ctx or ParseContext(), True)
    parse_run.execute()
    return parse_run.visited


# ################
# Implementation
# ################


class _ParseRun:
    """State of one parse call of one schema."""

    def __init__(self, schema: Any, value: Any, ctx: ParseContext, convert: bool) -> None:
        self.schema = schema
        self.inst = schema.internals
        self.ctx = ctx
        self.convert = convert
        self.payload = ParsePayload(value)
        self.prefaulted = False
        self.visited: list[ParseState] = []

    def execute(self) -> ParsePayload:
        state = ParseState.NIL_HANDLING
        while True:
            self.visited.append(state)
            if state in TERMINAL_STATES:
                break
            state = _HANDLERS[state](self)
        self._stamp()
        return self.payload

    # Handlers

    def _nil_handling(self) -> ParseState:
        if self.payload.value is not None:
            return ParseState.COERCED
        inst = self.inst
        if inst.has_default:
            self.payload.value = inst.get_default()
            return ParseState.CONVERTED
        if inst.has_prefault and not self.prefaulted:
            return ParseState.PREFAULT_RETRY
        if inst.nonoptional:
            return self._fail(issues.nonoptional_violation(None))
        if inst.exact_optional and not inst.nilable:
            return self._fail(issues.invalid_type(inst.type, None))
        if inst.optional or inst.nilable:
            return ParseState.RETURNED
        if self.schema._accepts_none():
            return ParseState.COERCED
        return self._fail(issues.invalid_type(inst.type, None, received="nil"))

    def _prefault_retry(self) -> ParseState:
        self.prefaulted = True
        self.payload = ParsePayload(self.inst.get_prefault())
        return ParseState.NIL_HANDLING

    def _coerced(self) -> ParseState:
        if not self.inst.coerce:
            return ParseState.EXTRACTED
        try:
            self.payload.value = self.schema._coerce(self.payload.value)
        except CoercionError:
            return self._fail(issues.invalid_type(self.inst.type, self.payload.value))
        return ParseState.EXTRACTED

    def _extracted(self) -> ParseState:
        value = self.payload.value
        out, ok = self.schema._extract(value)
        if not ok:
            out, ok = self.schema._extract_indirect(value)
        if not ok:
            return self._fail(issues.invalid_type(self.inst.type, value))
        self.payload.value = out
        self.schema._validate(self.payload, self.ctx)
        if self.payload.has_issues:
            return ParseState.ERRORED
        return ParseState.CHECKED

    def _checked(self) -> ParseState:
        run_checks(self.inst.checks, self.payload, self.ctx, abort=self.inst.abort)
        if self.payload.has_issues:
            return ParseState.ERRORED
        return ParseState.TRANSFORMED

    def _transformed(self) -> ParseState:
        transform = self.inst.transform
        if transform is None:
            return ParseState.CONVERTED
        payload = self.payload
        refinement = RefinementContext(self.ctx, payload, self.inst)
        try:
            result = transform(payload.value, refinement)
        except ValidationError as exc:
            payload.merge(issues.from_final(issue) for issue in exc.issues)
        except (ValueError, TypeError) as exc:
            payload.add_issue(issues.custom(str(exc) or None, payload.value))
        else:
            payload.value = result
        if payload.has_issues:
            return ParseState.ERRORED
        return ParseState.CONVERTED

    def _converted(self) -> ParseState:
        if self.convert and self.payload.value is None and not self.inst.pointer:
            self.payload.value = self.schema._zero()
        return ParseState.RETURNED

    # Helpers

    def _fail(self, issue: issues.RawIssue) -> ParseState:
        self.payload.add_issue(issue)
        return ParseState.ERRORED

    def _stamp(self) -> None:
        """Attach the schema internals, path and params to every issue this run reported itself."""
        inst = self.inst
        reported = self.payload.issues
        for index, issue in enumerate(reported):
            if issue.inst is not None:
                continue
            issue = issue.with_inst(inst)
            if inst.path:
                issue = issue.prefixed(*inst.path)
            if inst.params and issue.get("params") is None:
                issue = issue.with_params(inst.params)
            reported[index] = issue


_HANDLERS: dict[ParseState, Callable[[_ParseRun], ParseState]] = {
    ParseState.NIL_HANDLING: _ParseRun._nil_handling,
    ParseState.PREFAULT_RETRY: _ParseRun._prefault_retry,
    ParseState.COERCED: _ParseRun._coerced,
    ParseState.EXTRACTED: _ParseRun._extracted,
    ParseState.CHECKED: _ParseRun._checked,
    ParseState.TRANSFORMED: _ParseRun._transformed,
    ParseState.CONVERTED: _ParseRun._converted,
}
