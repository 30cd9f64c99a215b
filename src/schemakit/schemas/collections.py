# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Keyed and unordered collections: records and sets."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from schemakit import checks
from schemakit.core import issues
from schemakit.core.context import ParseContext, ParsePayload
from schemakit.core.issues import ErrorMap
from schemakit.core.types import PathSegment, TypeTag
from schemakit.schemas.base import Schema

# ###############
# Public Interface
# ###############

UNHASHABLE_MESSAGE = "Set elements must be hashable after parsing"


class RecordSchema(Schema):
    """A mapping whose keys and values each satisfy one schema.

    A key that fails its schema is reported as ``invalid_key`` at the key's
    path, carrying the key schema's issues; value issues are prefixed with the
    key.
    """

    TYPE = TypeTag.RECORD

    @property
    def key_schema(self) -> Schema:
        return self._internals.bag["key"]

    @property
    def value_schema(self) -> Schema:
        return self._internals.bag["value"]

    def min(self, minimum: int, *, error: str | ErrorMap | None = None) -> RecordSchema:
        return self._with_checks(checks.min_size(minimum, error=error))

    def max(self, maximum: int, *, error: str | ErrorMap | None = None) -> RecordSchema:
        return self._with_checks(checks.max_size(maximum, error=error))

    def _extract(self, value: Any) -> tuple[Any, bool]:
        if isinstance(value, Mapping):
            return dict(value), True
        return None, False

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        data: dict[Any, Any] = payload.value
        result: dict[Any, Any] = {}
        for key, value in data.items():
            key_outcome = self.key_schema._run(key, ctx.descend(key))
            if key_outcome.has_issues:
                payload.add_issue(issues.invalid_key("record", key_outcome.issues, key).with_path((key,)))
                continue
            value_outcome = self.value_schema._run(value, ctx.descend(key))
            if value_outcome.has_issues:
                payload.merge(value_outcome.issues, key)
                continue
            result[key_outcome.value] = value_outcome.value
        payload.value = result

    def _zero(self) -> Any:
        return {}

    def _python_types(self) -> tuple[type, ...]:
        return (dict,)


class SetSchema(Schema):
    """A set whose elements satisfy one schema.

    Lists and tuples are accepted and turned into sets. An element that fails
    is reported as ``invalid_element`` carrying the element schema's issues.
    """

    TYPE = TypeTag.SET

    @property
    def element(self) -> Schema:
        return self._internals.bag["element"]

    def min(self, minimum: int, *, error: str | ErrorMap | None = None) -> SetSchema:
        return self._with_checks(checks.min_size(minimum, error=error))

    def max(self, maximum: int, *, error: str | ErrorMap | None = None) -> SetSchema:
        return self._with_checks(checks.max_size(maximum, error=error))

    def size(self, exact: int, *, error: str | ErrorMap | None = None) -> SetSchema:
        return self._with_checks(checks.size(exact, error=error))

    def nonempty(self, *, error: str | ErrorMap | None = None) -> SetSchema:
        return self.min(1, error=error)

    def _extract(self, value: Any) -> tuple[Any, bool]:
        if isinstance(value, (set, frozenset)):
            return set(value), True
        return None, False

    def _extract_indirect(self, value: Any) -> tuple[Any, bool]:
        if isinstance(value, (list, tuple)):
            try:
                return set(value), True
            except TypeError:
                return None, False
        return None, False

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        result = set()
        for element in payload.value:
            outcome = self.element._run(element, ctx)
            if outcome.has_issues:
                payload.add_issue(issues.invalid_element("set", element, outcome.issues, payload.value))
            else:
                try:
                    result.add(outcome.value)
                except TypeError:
                    payload.add_issue(issues.custom(UNHASHABLE_MESSAGE, outcome.value).with_path((element,)))
        payload.value = result

    def _zero(self) -> Any:
        return set()

    def _python_types(self) -> tuple[type, ...]:
        return (set,)


def record(
    key: Schema,
    value: Schema,
    *,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> RecordSchema:
    return RecordSchema._create(
        error=error,
        description=description,
        abort=abort,
        path=path,
        params=params,
        key=key,
        value=value,
    )


def set_(
    element: Schema,
    *,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> SetSchema:
    return SetSchema._create(
        error=error,
        description=description,
        abort=abort,
        path=path,
        params=params,
        element=element,
    )
