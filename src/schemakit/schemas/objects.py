# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Object schemas: keyed records with a fixed shape.

Mappings are validated directly. Dataclass instances, pydantic models and
named tuples are first turned into dictionaries; dataclass fields may be
renamed with ``field(metadata={"alias": "..."})`` and pydantic fields through
their own aliases.

Unknown keys are handled according to the mode:

- ``strip`` (default): dropped from the result;
- ``strict``: reported in a single ``unrecognized_keys`` issue;
- ``passthrough``: copied to the result, or validated by the catchall schema.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel

from schemakit.core import issues
from schemakit.core.context import ParseContext, ParsePayload
from schemakit.core.errors import SchemaDefinitionError
from schemakit.core.issues import ErrorMap
from schemakit.core.types import PathSegment, TypeTag
from schemakit.schemas.base import Schema

# ###############
# Public Interface
# ###############

STRICT = "strict"
STRIP = "strip"
PASSTHROUGH = "passthrough"


class ObjectSchema(Schema):
    TYPE = TypeTag.OBJECT

    @property
    def shape(self) -> Mapping[str, Schema]:
        return self._internals.bag["shape"]

    @property
    def mode(self) -> str:
        return self._internals.bag["mode"]

    @property
    def catchall_schema(self) -> Schema | None:
        return self._internals.bag["catchall"]

    # Unknown-key modes

    def strict(self) -> ObjectSchema:
        return self._with_bag(mode=STRICT, catchall=None)

    def strip(self) -> ObjectSchema:
        return self._with_bag(mode=STRIP, catchall=None)

    def passthrough(self) -> ObjectSchema:
        return self._with_bag(mode=PASSTHROUGH)

    def catchall(self, schema: Schema) -> ObjectSchema:
        """Validate every unknown key's value with *schema*."""
        return self._with_bag(mode=PASSTHROUGH, catchall=schema)

    # Shape operations

    def keyof(self) -> Any:
        from schemakit.schemas.primitives import enum_

        return enum_(list(self.shape))

    def pick(self, keys: Iterable[str]) -> ObjectSchema:
        """Keep only *keys*; checks are dropped.

        Raises:
            SchemaDefinitionError: If the schema carries refinements or a key is unknown.
        """
        selected = self._known_keys(keys, "pick")
        self._reject_refined("pick")
        return self._reshaped({key: child for key, child in self.shape.items() if key in selected})

    def omit(self, keys: Iterable[str]) -> ObjectSchema:
        """Remove *keys*; checks are dropped.

        Raises:
            SchemaDefinitionError: If the schema carries refinements or a key is unknown.
        """
        removed = self._known_keys(keys, "omit")
        self._reject_refined("omit")
        return self._reshaped({key: child for key, child in self.shape.items() if key not in removed})

    def extend(self, shape: Mapping[str, Schema]) -> ObjectSchema:
        """Add or replace fields.

        Raises:
            SchemaDefinitionError: If the schema carries refinements and a new
                key overwrites an existing one; use :meth:`safe_extend` then.
        """
        if self._internals.refined:
            collisions = [key for key in shape if key in self.shape]
            if collisions:
                raise SchemaDefinitionError(
                    f"Cannot extend a refined object schema with existing key(s): {', '.join(collisions)}; "
                    "use safe_extend() instead"
                )
        return self.safe_extend(shape)

    def safe_extend(self, shape: Mapping[str, Schema]) -> ObjectSchema:
        """Add or replace fields, keeping the existing checks."""
        return self._with_bag(shape=MappingProxyType({**self.shape, **shape}))

    def merge(self, other: ObjectSchema) -> ObjectSchema:
        """Combine both shapes; *other* wins on shared keys and provides the unknown-key mode."""
        merged = self._internals.clone(checks=(), refined=False).with_bag(
            shape=MappingProxyType({**self.shape, **other.shape}),
            mode=other.mode,
            catchall=other.catchall_schema,
        )
        return self._rebuild(merged)

    def partial(self, keys: Iterable[str] | None = None) -> ObjectSchema:
        """Make *keys* (all fields when None) optional."""
        bag = self._internals.bag
        if keys is None:
            exceptions: frozenset[str] = frozenset()
        else:
            selected = self._known_keys(keys, "partial")
            current = bag["partial_exceptions"] if bag["partial"] else frozenset(self.shape)
            exceptions = frozenset(current - selected)
        return self._with_bag(partial=True, partial_exceptions=exceptions)

    def required(self, keys: Iterable[str] | None = None) -> ObjectSchema:
        """Make *keys* (all fields when None) required, even if their schemas are optional."""
        selected = frozenset(self.shape) if keys is None else self._known_keys(keys, "required")
        shape = {key: child.nonoptional() if key in selected else child for key, child in self.shape.items()}
        bag = self._internals.bag
        return self._with_bag(
            shape=MappingProxyType(shape),
            partial_exceptions=frozenset(bag["partial_exceptions"] | selected),
        )

    # Leaf contract

    def _extract(self, value: Any) -> tuple[Any, bool]:
        if isinstance(value, Mapping):
            return dict(value), True
        return None, False

    def _extract_indirect(self, value: Any) -> tuple[Any, bool]:
        return structured_fields(value)

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        data: dict[Any, Any] = payload.value
        result: dict[Any, Any] = {}

        for key, child in self.shape.items():
            child_inst = child.internals
            if key not in data:
                if child_inst.has_default or child_inst.has_prefault:
                    self._parse_field(payload, result, key, child, None, ctx)
                elif not self._field_optional(key, child):
                    payload.add_issue(
                        issues.invalid_type(TypeTag.NONOPTIONAL, None, received="missing").with_path((key,))
                    )
                continue
            value = data[key]
            if value is None and self._partial_field(key) and not (child_inst.has_default or child_inst.has_prefault):
                result[key] = None
                continue
            if value is None and child_inst.exact_optional and not child_inst.nilable:
                payload.add_issue(issues.invalid_type(child_inst.type, None).with_path((key,)))
                continue
            self._parse_field(payload, result, key, child, value, ctx)

        extras = [key for key in data if key not in self.shape]
        catchall = self.catchall_schema
        if catchall is not None:
            for key in extras:
                self._parse_field(payload, result, key, catchall, data[key], ctx)
        elif self.mode == STRICT:
            if extras:
                payload.add_issue(issues.unrecognized_keys(extras, data))
        elif self.mode == PASSTHROUGH:
            for key in extras:
                result[key] = data[key]

        payload.value = result

    def _zero(self) -> Any:
        return {}

    def _python_types(self) -> tuple[type, ...]:
        return (dict,)

    # ################
    # Implementation
    # ################

    def _with_bag(self, **entries: Any) -> ObjectSchema:
        return self._rebuild(self._internals.with_bag(**entries))

    def _reshaped(self, shape: dict[str, Schema]) -> ObjectSchema:
        bag = self._internals.bag
        internals = self._internals.clone(checks=(), refined=False).with_bag(
            shape=MappingProxyType(shape),
            partial_exceptions=frozenset(bag["partial_exceptions"] & shape.keys()),
        )
        return self._rebuild(internals)

    def _known_keys(self, keys: Iterable[str], operation: str) -> frozenset[str]:
        selected = frozenset(keys)
        unknown = sorted(selected - self.shape.keys())
        if unknown:
            raise SchemaDefinitionError(f"{operation}(): unknown key(s): {', '.join(unknown)}")
        return selected

    def _reject_refined(self, operation: str) -> None:
        if self._internals.refined:
            raise SchemaDefinitionError(f"{operation}() cannot be used on an object schema with refinements")

    def _partial_field(self, key: str) -> bool:
        bag = self._internals.bag
        return bag["partial"] and key not in bag["partial_exceptions"]

    def _field_optional(self, key: str, child: Schema) -> bool:
        return self._partial_field(key) or child.internals.pointer

    @staticmethod
    def _parse_field(
        payload: ParsePayload,
        result: dict[Any, Any],
        key: Any,
        child: Schema,
        value: Any,
        ctx: ParseContext,
    ) -> None:
        outcome = child._run(value, ctx.descend(key))
        if outcome.has_issues:
            payload.merge(outcome.issues, key)
        else:
            result[key] = outcome.value


def structured_fields(value: Any) -> tuple[dict[str, Any] | None, bool]:
    """Read the fields of a dataclass, pydantic model or named tuple into a dict."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.metadata.get("alias", f.name): getattr(value, f.name) for f in dataclasses.fields(value)}, True
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True), True
    if isinstance(value, tuple) and hasattr(value, "_asdict"):
        return dict(value._asdict()), True
    return None, False


def object_(
    shape: Mapping[str, Schema],
    *,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> ObjectSchema:
    """An object that drops unknown keys."""
    return _object(shape, STRIP, error=error, description=description, abort=abort, path=path, params=params)


def strict_object(
    shape: Mapping[str, Schema],
    *,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> ObjectSchema:
    """An object that rejects unknown keys."""
    return _object(shape, STRICT, error=error, description=description, abort=abort, path=path, params=params)


def loose_object(
    shape: Mapping[str, Schema],
    *,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> ObjectSchema:
    """An object that keeps unknown keys."""
    return _object(shape, PASSTHROUGH, error=error, description=description, abort=abort, path=path, params=params)


def _object(shape: Mapping[str, Schema], mode: str, **options: Any) -> ObjectSchema:
    for key, child in shape.items():
        if not isinstance(child, Schema):
            raise SchemaDefinitionError(f"field '{key}' must be a schema, got {type(child).__name__}")
    return ObjectSchema._create(
        shape=MappingProxyType(dict(shape)),
        mode=mode,
        catchall=None,
        partial=False,
        partial_exceptions=frozenset(),
        **options,
    )
