# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Positional schemas: arrays, tuples and homogeneous lists."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from schemakit import checks
from schemakit.core import issues
from schemakit.core.context import ParseContext, ParsePayload
from schemakit.core.errors import SchemaDefinitionError
from schemakit.core.issues import ErrorMap
from schemakit.core.types import PathSegment, TypeTag
from schemakit.schemas.base import Schema

# ###############
# Public Interface
# ###############


class ArraySchema(Schema):
    """Positional items followed by an optional rest schema.

    Without a rest schema the input length must equal the number of items;
    with one it must be at least that number. A length mismatch is reported
    once and the elements are not validated.
    """

    TYPE = TypeTag.ARRAY

    @property
    def items(self) -> tuple[Schema, ...]:
        return self._internals.bag["items"]

    @property
    def rest(self) -> Schema | None:
        return self._internals.bag["rest"]

    @property
    def element(self) -> Schema | None:
        """The schema of homogeneous lists; None for fixed arrays."""
        return self.rest

    def min(self, minimum: int, *, error: str | ErrorMap | None = None) -> ArraySchema:
        return self._with_checks(checks.min_length(minimum, error=error))

    def max(self, maximum: int, *, error: str | ErrorMap | None = None) -> ArraySchema:
        return self._with_checks(checks.max_length(maximum, error=error))

    def length(self, exact: int, *, error: str | ErrorMap | None = None) -> ArraySchema:
        return self._with_checks(checks.length(exact, error=error))

    def nonempty(self, *, error: str | ErrorMap | None = None) -> ArraySchema:
        return self.min(1, error=error)

    def _extract(self, value: Any) -> tuple[Any, bool]:
        if isinstance(value, (list, tuple)):
            return list(value), True
        return None, False

    def _extract_indirect(self, value: Any) -> tuple[Any, bool]:
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
            return list(value), True
        return None, False

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        values: list[Any] = payload.value
        items = self.items
        rest = self.rest
        if rest is None and len(values) != len(items):
            if len(values) < len(items):
                payload.add_issue(issues.too_small("array", len(items), values, exact=True))
            else:
                payload.add_issue(issues.too_big("array", len(items), values, exact=True))
            return
        if len(values) < len(items):
            payload.add_issue(issues.too_small("array", len(items), values))
            return

        result: list[Any] = []
        for index, value in enumerate(values):
            child = items[index] if index < len(items) else rest
            outcome = child._run(value, ctx.descend(index))
            if outcome.has_issues:
                payload.merge(outcome.issues, index)
            else:
                result.append(outcome.value)
        payload.value = self._internals.bag["output"](result)

    def _zero(self) -> Any:
        return self._internals.bag["output"]()

    def _python_types(self) -> tuple[type, ...]:
        return (self._internals.bag["output"],)


def array(
    items: Iterable[Schema],
    rest: Schema | None = None,
    *,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> ArraySchema:
    """A list with one schema per position, optionally followed by *rest* elements."""
    return _array(
        TypeTag.ARRAY, list, items, rest, error=error, description=description, abort=abort, path=path, params=params
    )


def tuple_(
    items: Iterable[Schema],
    rest: Schema | None = None,
    *,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> ArraySchema:
    """Like :func:`array`, but the result is a tuple."""
    return _array(
        TypeTag.TUPLE, tuple, items, rest, error=error, description=description, abort=abort, path=path, params=params
    )


def list_(
    element: Schema,
    *,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> ArraySchema:
    """A list of any length whose elements all satisfy *element*."""
    return _array(
        TypeTag.LIST, list, (), element, error=error, description=description, abort=abort, path=path, params=params
    )


# ################
# Implementation
# ################


def _array(
    type_: TypeTag,
    output: type,
    items: Iterable[Schema],
    rest: Schema | None,
    **options: Any,
) -> ArraySchema:
    positional = tuple(items)
    for index, child in enumerate((*positional, rest) if rest is not None else positional):
        if not isinstance(child, Schema):
            raise SchemaDefinitionError(f"array item {index} must be a schema, got {type(child).__name__}")
    return ArraySchema._create(type_=type_, items=positional, rest=rest, output=output, **options)
