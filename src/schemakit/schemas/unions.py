# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Union, exclusive union, discriminated union and intersection schemas."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from schemakit.core import issues
from schemakit.core.context import ParseContext, ParsePayload
from schemakit.core.errors import SchemaDefinitionError
from schemakit.core.issues import ErrorMap, RawIssue
from schemakit.core.types import PathSegment, TypeTag
from schemakit.schemas.base import Schema, enum_value, same_value
from schemakit.schemas.objects import ObjectSchema, structured_fields
from schemakit.schemas.primitives import EnumSchema, LiteralSchema

# ###############
# Public Interface
# ###############

UNMERGEABLE_MESSAGE = "Intersection results could not be merged"


class UnionSchema(Schema):
    """Succeeds when any option succeeds.

    Options are tried in order. The first success whose result has the same
    Python type as the input is returned; failing that, the first success.
    """

    TYPE = TypeTag.UNION

    @property
    def options(self) -> tuple[Schema, ...]:
        return self._internals.bag["options"]

    def _extract(self, value: Any) -> tuple[Any, bool]:
        return value, True

    def _accepts_none(self) -> bool:
        return True

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        first_success: ParsePayload | None = None
        failures: list[list[RawIssue]] = []
        for option in self.options:
            outcome = option._run(value, ctx)
            if outcome.has_issues:
                failures.append(outcome.issues)
                continue
            if type(outcome.value) is type(value):
                payload.value = outcome.value
                return
            if first_success is None:
                first_success = outcome
        if first_success is not None:
            payload.value = first_success.value
            return
        payload.add_issue(issues.invalid_union(failures, value))

    def _python_types(self) -> tuple[type, ...]:
        return tuple(t for option in self.options for t in option._python_types())


class XorSchema(UnionSchema):
    """Succeeds when exactly one option succeeds."""

    TYPE = TypeTag.XOR

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        successes: list[ParsePayload] = []
        failures: list[list[RawIssue]] = []
        for option in self.options:
            outcome = option._run(value, ctx)
            if outcome.has_issues:
                failures.append(outcome.issues)
            else:
                successes.append(outcome)
        if len(successes) == 1:
            payload.value = successes[0].value
        elif not successes:
            payload.add_issue(issues.invalid_union(failures, value))
        else:
            payload.add_issue(issues.invalid_xor(len(successes), value))


class IntersectionSchema(Schema):
    """Succeeds when both sides succeed; their results are merged.

    Dictionaries are merged key by key and lists element by element; any
    other pair of results must be equal.
    """

    TYPE = TypeTag.INTERSECTION

    @property
    def left(self) -> Schema:
        return self._internals.bag["left"]

    @property
    def right(self) -> Schema:
        return self._internals.bag["right"]

    def _extract(self, value: Any) -> tuple[Any, bool]:
        return value, True

    def _accepts_none(self) -> bool:
        return True

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        left = self.left._run(payload.value, ctx)
        right = self.right._run(payload.value, ctx)
        payload.merge(left.issues)
        payload.merge(right.issues)
        if payload.has_issues:
            return
        merged, ok = merge_values(left.value, right.value)
        if not ok:
            payload.add_issue(issues.custom(UNMERGEABLE_MESSAGE, payload.value))
            return
        payload.value = merged


class DiscriminatedUnionSchema(UnionSchema):
    """A union of object schemas told apart by the value of one key.

    Every option declares the key with a literal or enum schema. The input is
    routed to the single option whose discriminator values contain the input's
    value; no other option is tried. With ``union_fallback`` set, an input
    without a known discriminator is parsed as a plain union instead.
    """

    TYPE = TypeTag.DISCRIMINATED_UNION

    @property
    def discriminator(self) -> str:
        return self._internals.bag["discriminator"]

    @property
    def routes(self) -> tuple[tuple[Any, Schema], ...]:
        """Pairs of discriminator value and the option it selects."""
        return self._internals.bag["routes"]

    def _accepts_none(self) -> bool:
        return False

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        if not isinstance(value, Mapping):
            value, ok = structured_fields(value)
            if not ok:
                payload.add_issue(issues.invalid_type(TypeTag.OBJECT, payload.value))
                return
            payload.value = value
        key = self.discriminator
        option = self._route(value[key]) if key in value else None
        if option is not None:
            outcome = option._run(value, ctx)
            payload.merge(outcome.issues)
            payload.value = outcome.value
            return
        if self._internals.bag["union_fallback"]:
            super()._validate(payload, ctx)
            return
        payload.add_issue(
            issues.invalid_union(
                [], value, note="no matching discriminator", options=[allowed for allowed, _ in self.routes]
            ).with_path((key,))
        )

    def _python_types(self) -> tuple[type, ...]:
        return (dict,)

    # ################
    # Implementation
    # ################

    def _route(self, tag: Any) -> Schema | None:
        plain, is_member = enum_value(tag)
        for allowed, option in self.routes:
            if same_value(tag, allowed) or (is_member and same_value(plain, allowed)):
                return option
        return None


def union(
    options: Iterable[Schema],
    *,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> UnionSchema:
    return UnionSchema._create(
        error=error,
        description=description,
        abort=abort,
        path=path,
        params=params,
        options=_options(options, "union"),
    )


def xor(
    options: Iterable[Schema],
    *,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> XorSchema:
    return XorSchema._create(
        error=error,
        description=description,
        abort=abort,
        path=path,
        params=params,
        options=_options(options, "xor"),
    )


def discriminated_union(
    key: str,
    options: Iterable[Schema],
    *,
    union_fallback: bool = False,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> DiscriminatedUnionSchema:
    """A union that picks its option by the value found under *key*.

    Raises:
        SchemaDefinitionError: An option is not an object (or discriminated
            union) declaring *key* as a literal or enum, or two options share a
            discriminator value.
    """
    collected = _options(options, "discriminated_union")
    routes: list[tuple[Any, Schema]] = []
    for index, option in enumerate(collected):
        values = _discriminator_values(option, key)
        if not values:
            raise SchemaDefinitionError(
                f"discriminated_union() option {index} must declare '{key}' as a literal or enum"
            )
        for value in values:
            if any(same_value(value, allowed) for allowed, _ in routes):
                raise SchemaDefinitionError(f"discriminated_union(): duplicate discriminator value {value!r}")
            routes.append((value, option))
    return DiscriminatedUnionSchema._create(
        error=error,
        description=description,
        abort=abort,
        path=path,
        params=params,
        options=collected,
        discriminator=key,
        routes=tuple(routes),
        union_fallback=union_fallback,
    )


def intersection(
    left: Schema,
    right: Schema,
    *,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> IntersectionSchema:
    return IntersectionSchema._create(
        error=error,
        description=description,
        abort=abort,
        path=path,
        params=params,
        left=left,
        right=right,
    )


def merge_values(a: Any, b: Any) -> tuple[Any, bool]:
    """Merge two parse results of an intersection.

    Returns:
        The merged value and True, or None and False when they conflict.
    """
    if a is b or (type(a) is type(b) and a == b):
        return a, True
    if isinstance(a, dict) and isinstance(b, dict):
        merged = dict(a)
        for key, value in b.items():
            if key in merged:
                value, ok = merge_values(merged[key], value)
                if not ok:
                    return None, False
            merged[key] = value
        return merged, True
    if isinstance(a, list) and isinstance(b, list):
        if len(a) != len(b):
            return None, False
        items = []
        for left_item, right_item in zip(a, b):
            item, ok = merge_values(left_item, right_item)
            if not ok:
                return None, False
            items.append(item)
        return items, True
    return None, False


# ################
# Implementation
# ################


def _options(options: Iterable[Schema], kind: str) -> tuple[Schema, ...]:
    collected = tuple(options)
    if not collected:
        raise SchemaDefinitionError(f"{kind}() requires at least one option")
    for index, option in enumerate(collected):
        if not isinstance(option, Schema):
            raise SchemaDefinitionError(f"{kind}() option {index} must be a schema, got {type(option).__name__}")
    return collected


def _discriminator_values(option: Schema, key: str) -> list[Any]:
    if isinstance(option, DiscriminatedUnionSchema):
        if option.discriminator != key:
            return []
        return [value for value, _ in option.routes]
    if not isinstance(option, ObjectSchema):
        return []
    field = option.shape.get(key)
    if isinstance(field, LiteralSchema):
        return list(field.values)
    if isinstance(field, EnumSchema):
        return field.options
    return []
