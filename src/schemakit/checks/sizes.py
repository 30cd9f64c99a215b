# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Size checks for sized values.

``min_size``/``max_size``/``size`` are attached to collections (arrays,
sets, objects); ``min_length``/``max_length``/``length`` to strings and
sequences. Both families measure with :func:`len` and only differ in name.
"""

from __future__ import annotations

from schemakit.checks.base import Check, make_check, origin_of
from schemakit.core import issues
from schemakit.core.context import ParseContext, ParsePayload
from schemakit.core.issues import ErrorMap

# ###############
# Public Interface
# ###############


def min_size(minimum: int, *, error: str | ErrorMap | None = None, abort: bool = False) -> Check:
    return _at_least("min_size", minimum, error=error, abort=abort)


def max_size(maximum: int, *, error: str | ErrorMap | None = None, abort: bool = False) -> Check:
    return _at_most("max_size", maximum, error=error, abort=abort)


def size(exact: int, *, error: str | ErrorMap | None = None, abort: bool = False) -> Check:
    return _exactly("size", exact, error=error, abort=abort)


def min_length(minimum: int, *, error: str | ErrorMap | None = None, abort: bool = False) -> Check:
    return _at_least("min_length", minimum, error=error, abort=abort)


def max_length(maximum: int, *, error: str | ErrorMap | None = None, abort: bool = False) -> Check:
    return _at_most("max_length", maximum, error=error, abort=abort)


def length(exact: int, *, error: str | ErrorMap | None = None, abort: bool = False) -> Check:
    return _exactly("length", exact, error=error, abort=abort)


# ################
# Implementation
# ################


def _at_least(kind: str, minimum: int, *, error: str | ErrorMap | None, abort: bool) -> Check:
    def fn(payload: ParsePayload, ctx: ParseContext) -> None:
        if len(payload.value) < minimum:
            payload.add_issue(issues.too_small(origin_of(payload.value), minimum, payload.value))

    return make_check(kind, fn, error=error, abort=abort, minimum=minimum)


def _at_most(kind: str, maximum: int, *, error: str | ErrorMap | None, abort: bool) -> Check:
    def fn(payload: ParsePayload, ctx: ParseContext) -> None:
        if len(payload.value) > maximum:
            payload.add_issue(issues.too_big(origin_of(payload.value), maximum, payload.value))

    return make_check(kind, fn, error=error, abort=abort, maximum=maximum)


def _exactly(kind: str, exact: int, *, error: str | ErrorMap | None, abort: bool) -> Check:
    def fn(payload: ParsePayload, ctx: ParseContext) -> None:
        actual = len(payload.value)
        origin = origin_of(payload.value)
        if actual < exact:
            payload.add_issue(issues.too_small(origin, exact, payload.value, exact=True))
        elif actual > exact:
            payload.add_issue(issues.too_big(origin, exact, payload.value, exact=True))

    return make_check(kind, fn, error=error, abort=abort, exact=exact)
