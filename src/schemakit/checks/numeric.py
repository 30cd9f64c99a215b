# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Range and divisibility checks for ordered values."""

from __future__ import annotations

import math
from typing import Any

from schemakit.checks.base import Check, make_check, origin_of
from schemakit.core import issues
from schemakit.core.context import ParseContext, ParsePayload
from schemakit.core.issues import ErrorMap

# ###############
# Public Interface
# ###############


def gt(value: Any, *, error: str | ErrorMap | None = None, abort: bool = False) -> Check:
    """Require the value to be strictly greater than *value*."""

    def fn(payload: ParsePayload, ctx: ParseContext) -> None:
        if not payload.value > value:
            payload.add_issue(issues.too_small(origin_of(payload.value), value, payload.value, inclusive=False))

    return make_check("gt", fn, error=error, abort=abort, value=value)


def gte(value: Any, *, error: str | ErrorMap | None = None, abort: bool = False) -> Check:
    """Require the value to be greater than or equal to *value*."""

    def fn(payload: ParsePayload, ctx: ParseContext) -> None:
        if not payload.value >= value:
            payload.add_issue(issues.too_small(origin_of(payload.value), value, payload.value))

    return make_check("gte", fn, error=error, abort=abort, value=value)


def lt(value: Any, *, error: str | ErrorMap | None = None, abort: bool = False) -> Check:
    """Require the value to be strictly less than *value*."""

    def fn(payload: ParsePayload, ctx: ParseContext) -> None:
        if not payload.value < value:
            payload.add_issue(issues.too_big(origin_of(payload.value), value, payload.value, inclusive=False))

    return make_check("lt", fn, error=error, abort=abort, value=value)


def lte(value: Any, *, error: str | ErrorMap | None = None, abort: bool = False) -> Check:
    """Require the value to be less than or equal to *value*."""

    def fn(payload: ParsePayload, ctx: ParseContext) -> None:
        if not payload.value <= value:
            payload.add_issue(issues.too_big(origin_of(payload.value), value, payload.value))

    return make_check("lte", fn, error=error, abort=abort, value=value)


def multiple_of(divisor: int | float, *, error: str | ErrorMap | None = None, abort: bool = False) -> Check:
    """Require the value to be an integer multiple of *divisor*.

    Float operands are compared with a small tolerance so that, for example,
    ``0.3`` counts as a multiple of ``0.1``.
    """
    if divisor == 0:
        raise ValueError("multiple_of divisor must not be zero")

    def fn(payload: ParsePayload, ctx: ParseContext) -> None:
        if not _is_multiple(payload.value, divisor):
            payload.add_issue(issues.not_multiple_of(divisor, payload.value))

    return make_check("multiple_of", fn, error=error, abort=abort, divisor=divisor)


# ################
# Implementation
# ################

_TOLERANCE = 1e-9


def _is_multiple(value: Any, divisor: int | float) -> bool:
    if isinstance(value, int) and isinstance(divisor, int):
        return value % divisor == 0
    remainder = math.fmod(value, divisor)
    return math.isclose(remainder, 0.0, abs_tol=_TOLERANCE) or math.isclose(
        abs(remainder), abs(divisor), abs_tol=_TOLERANCE
    )
