# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Leaf schemas: strings, numbers, booleans, literals, enums and the catch-alls."""

from __future__ import annotations

import math
import numbers
import re
from collections.abc import Iterable, Mapping, Sequence
from enum import Enum
from typing import Any

from schemakit import checks
from schemakit.core import issues
from schemakit.core.context import ParseContext, ParsePayload
from schemakit.core.errors import SchemaDefinitionError
from schemakit.core.issues import ErrorMap
from schemakit.core.types import PathSegment, TypeTag
from schemakit.engine import coerce as coercion
from schemakit.schemas.base import Schema, enum_value, is_integral, same_value

# ###############
# Public Interface
# ###############

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class StringSchema(Schema):
    TYPE = TypeTag.STRING

    def min(self, minimum: int, *, error: str | ErrorMap | None = None) -> StringSchema:
        return self._with_checks(checks.min_length(minimum, error=error))

    def max(self, maximum: int, *, error: str | ErrorMap | None = None) -> StringSchema:
        return self._with_checks(checks.max_length(maximum, error=error))

    def length(self, exact: int, *, error: str | ErrorMap | None = None) -> StringSchema:
        return self._with_checks(checks.length(exact, error=error))

    def nonempty(self, *, error: str | ErrorMap | None = None) -> StringSchema:
        return self.min(1, error=error)

    def regex(self, pattern: str | re.Pattern[str], *, error: str | ErrorMap | None = None) -> StringSchema:
        return self._with_checks(checks.regex(pattern, error=error))

    def email(self, *, error: str | ErrorMap | None = None) -> StringSchema:
        return self._with_checks(checks.email(error=error))

    def starts_with(self, prefix: str, *, error: str | ErrorMap | None = None) -> StringSchema:
        return self._with_checks(checks.starts_with(prefix, error=error))

    def ends_with(self, suffix: str, *, error: str | ErrorMap | None = None) -> StringSchema:
        return self._with_checks(checks.ends_with(suffix, error=error))

    def includes(self, substring: str, *, error: str | ErrorMap | None = None) -> StringSchema:
        return self._with_checks(checks.includes(substring, error=error))

    def lowercase(self, *, error: str | ErrorMap | None = None) -> StringSchema:
        return self._with_checks(checks.lowercase(error=error))

    def uppercase(self, *, error: str | ErrorMap | None = None) -> StringSchema:
        return self._with_checks(checks.uppercase(error=error))

    def trim(self) -> StringSchema:
        return self._with_checks(checks.overwrite(str.strip))

    def to_lower(self) -> StringSchema:
        return self._with_checks(checks.overwrite(str.lower))

    def to_upper(self) -> StringSchema:
        return self._with_checks(checks.overwrite(str.upper))

    def _extract(self, value: Any) -> tuple[Any, bool]:
        if isinstance(value, str) and not isinstance(value, Enum):
            return str(value), True
        return None, False

    def _extract_indirect(self, value: Any) -> tuple[Any, bool]:
        unwrapped, ok = enum_value(value)
        if ok and isinstance(unwrapped, str):
            return unwrapped, True
        return None, False

    def _coerce(self, value: Any) -> Any:
        return coercion.to_string(value)

    def _zero(self) -> Any:
        return ""

    def _python_types(self) -> tuple[type, ...]:
        return (str,)


class _NumberSchema(Schema):
    """Range and divisibility methods shared by the numeric kinds."""

    def gt(self, value: Any, *, error: str | ErrorMap | None = None) -> Any:
        return self._with_checks(checks.gt(value, error=error))

    def gte(self, value: Any, *, error: str | ErrorMap | None = None) -> Any:
        return self._with_checks(checks.gte(value, error=error))

    def lt(self, value: Any, *, error: str | ErrorMap | None = None) -> Any:
        return self._with_checks(checks.lt(value, error=error))

    def lte(self, value: Any, *, error: str | ErrorMap | None = None) -> Any:
        return self._with_checks(checks.lte(value, error=error))

    def min(self, value: Any, *, error: str | ErrorMap | None = None) -> Any:
        return self.gte(value, error=error)

    def max(self, value: Any, *, error: str | ErrorMap | None = None) -> Any:
        return self.lte(value, error=error)

    def positive(self, *, error: str | ErrorMap | None = None) -> Any:
        return self.gt(0, error=error)

    def negative(self, *, error: str | ErrorMap | None = None) -> Any:
        return self.lt(0, error=error)

    def nonnegative(self, *, error: str | ErrorMap | None = None) -> Any:
        return self.gte(0, error=error)

    def nonpositive(self, *, error: str | ErrorMap | None = None) -> Any:
        return self.lte(0, error=error)

    def multiple_of(self, divisor: int | float, *, error: str | ErrorMap | None = None) -> Any:
        return self._with_checks(checks.multiple_of(divisor, error=error))


class IntSchema(_NumberSchema):
    """Integers; bool is rejected even though it subclasses int."""

    TYPE = TypeTag.INT

    def _extract(self, value: Any) -> tuple[Any, bool]:
        if isinstance(value, int) and not isinstance(value, (bool, Enum)):
            return value, True
        return None, False

    def _extract_indirect(self, value: Any) -> tuple[Any, bool]:
        unwrapped, ok = enum_value(value)
        if ok:
            value = unwrapped
        if is_integral(value):
            return int(value), True
        return None, False

    def _coerce(self, value: Any) -> Any:
        return coercion.to_int(value)

    def _zero(self) -> Any:
        return 0

    def _python_types(self) -> tuple[type, ...]:
        return (int,)

    def _strict_accepts(self, value: Any) -> bool:
        return not isinstance(value, bool) and super()._strict_accepts(value)


class FloatSchema(_NumberSchema):
    """Finite floating-point numbers; ints are accepted and widened."""

    TYPE = TypeTag.FLOAT

    def _extract(self, value: Any) -> tuple[Any, bool]:
        if isinstance(value, float) and not isinstance(value, Enum) and math.isfinite(value):
            return value, True
        return None, False

    def _extract_indirect(self, value: Any) -> tuple[Any, bool]:
        unwrapped, ok = enum_value(value)
        if ok:
            value = unwrapped
        if isinstance(value, numbers.Real) and not isinstance(value, bool):
            number = float(value)
            if math.isfinite(number):
                return number, True
        return None, False

    def _coerce(self, value: Any) -> Any:
        return coercion.to_float(value)

    def _zero(self) -> Any:
        return 0.0

    def _python_types(self) -> tuple[type, ...]:
        return (float,)


class BoolSchema(Schema):
    TYPE = TypeTag.BOOL

    def _extract(self, value: Any) -> tuple[Any, bool]:
        if isinstance(value, bool):
            return value, True
        return None, False

    def _coerce(self, value: Any) -> Any:
        return coercion.to_bool(value)

    def _zero(self) -> Any:
        return False

    def _python_types(self) -> tuple[type, ...]:
        return (bool,)


class NoneSchema(Schema):
    TYPE = TypeTag.NIL

    def _extract(self, value: Any) -> tuple[Any, bool]:
        if value is None:
            return None, True
        return None, False

    def _accepts_none(self) -> bool:
        return True

    def _python_types(self) -> tuple[type, ...]:
        return (type(None),)


class AnySchema(Schema):
    TYPE = TypeTag.ANY

    def _extract(self, value: Any) -> tuple[Any, bool]:
        return value, True

    def _accepts_none(self) -> bool:
        return True


class UnknownSchema(AnySchema):
    TYPE = TypeTag.UNKNOWN


class NeverSchema(Schema):
    TYPE = TypeTag.NEVER


class LiteralSchema(Schema):
    """Accepts only the given values; matching also compares types (``1`` is not ``True``)."""

    TYPE = TypeTag.LITERAL

    @property
    def values(self) -> tuple[Any, ...]:
        return self._internals.bag["values"]

    def _extract(self, value: Any) -> tuple[Any, bool]:
        return value, True

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        if not any(same_value(payload.value, allowed) for allowed in self.values):
            payload.add_issue(issues.invalid_value(self.values, payload.value))

    def _accepts_none(self) -> bool:
        return None in self.values

    def _python_types(self) -> tuple[type, ...]:
        return tuple({type(v) for v in self.values})


class EnumSchema(Schema):
    """One of a fixed set of values, or of the members of an Enum class.

    With an Enum class, both members and raw member values are accepted and
    the result is always the member.
    """

    TYPE = TypeTag.ENUM

    @property
    def options(self) -> list[Any]:
        return list(self._internals.bag["values"])

    @property
    def enum_class(self) -> type[Enum] | None:
        return self._internals.bag["enum_class"]

    def exclude(self, values: Iterable[Any], **params: Any) -> EnumSchema:
        """Return an enum of the remaining plain values."""
        removed = list(values)
        return enum_([v for v in self.options if v not in removed], **params)

    def _extract(self, value: Any) -> tuple[Any, bool]:
        return value, True

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        enum_class = self.enum_class
        if enum_class is not None:
            if isinstance(value, enum_class):
                return
            for member in enum_class:
                if same_value(value, member.value):
                    payload.value = member
                    return
        elif any(same_value(value, allowed) for allowed in self._internals.bag["values"]):
            return
        payload.add_issue(issues.invalid_value(self.options, value))

    def _python_types(self) -> tuple[type, ...]:
        if self.enum_class is not None:
            return (self.enum_class,)
        return tuple({type(v) for v in self.options})


def string(
    *,
    coerce: bool = False,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> StringSchema:
    return StringSchema._create(
        coerce=coerce, error=error, description=description, abort=abort, path=path, params=params
    )


def email(
    *,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> StringSchema:
    """A string that must look like an email address."""
    return StringSchema._create(
        error=error, description=description, abort=abort, path=path, params=params, checks=[checks.email()]
    )


def int_(
    *,
    coerce: bool = False,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> IntSchema:
    return IntSchema._create(coerce=coerce, error=error, description=description, abort=abort, path=path, params=params)


def int32(
    *,
    coerce: bool = False,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> IntSchema:
    """An int within the signed 32-bit range."""
    return IntSchema._create(
        type_=TypeTag.INT32,
        coerce=coerce,
        error=error,
        description=description,
        abort=abort,
        path=path,
        params=params,
        checks=[checks.gte(INT32_MIN), checks.lte(INT32_MAX)],
    )


def int64(
    *,
    coerce: bool = False,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> IntSchema:
    """An int within the signed 64-bit range."""
    return IntSchema._create(
        type_=TypeTag.INT64,
        coerce=coerce,
        error=error,
        description=description,
        abort=abort,
        path=path,
        params=params,
        checks=[checks.gte(INT64_MIN), checks.lte(INT64_MAX)],
    )


def float_(
    *,
    coerce: bool = False,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> FloatSchema:
    return FloatSchema._create(
        coerce=coerce, error=error, description=description, abort=abort, path=path, params=params
    )


def bool_(
    *,
    coerce: bool = False,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> BoolSchema:
    return BoolSchema._create(
        coerce=coerce, error=error, description=description, abort=abort, path=path, params=params
    )


def none(
    *,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> NoneSchema:
    return NoneSchema._create(error=error, description=description, path=path, params=params)


def any_(*, description: str | None = None) -> AnySchema:
    return AnySchema._create(description=description)


def unknown(*, description: str | None = None) -> UnknownSchema:
    return UnknownSchema._create(description=description)


def never(
    *,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> NeverSchema:
    return NeverSchema._create(error=error, description=description, path=path, params=params)


def literal(
    *values: Any,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> LiteralSchema:
    """Accept exactly one of *values*."""
    if not values:
        raise SchemaDefinitionError("literal() requires at least one value")
    return LiteralSchema._create(
        error=error,
        description=description,
        abort=abort,
        path=path,
        params=params,
        values=tuple(values),
    )


def enum_(
    values: Iterable[Any] | type[Enum],
    *,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> EnumSchema:
    """Accept one of *values*, or a member (or member value) of an Enum class."""
    if isinstance(values, type) and issubclass(values, Enum):
        enum_class: type[Enum] | None = values
        options = tuple(member.value for member in values)
    else:
        enum_class = None
        options = tuple(values)
    if not options:
        raise SchemaDefinitionError("enum_() requires at least one value")
    return EnumSchema._create(
        error=error,
        description=description,
        abort=abort,
        path=path,
        params=params,
        values=options,
        enum_class=enum_class,
    )
