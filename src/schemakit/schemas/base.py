# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""The schema base class: leaf contract, modifiers, composition and parse entry points.

Schemas are immutable. Every modifier derives a new
:class:`~schemakit.core.internals.SchemaInternals` record and builds a new
schema of the same kind from it through the record's ``constructor``.
"""

from __future__ import annotations

import numbers
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from schemakit import checks
from schemakit.checks.base import Check
from schemakit.core.context import ParseContext, ParsePayload, RefinementContext
from schemakit.core.errors import ValidationError
from schemakit.core.finalize import finalize_issues
from schemakit.core.internals import SchemaInternals, to_error_map
from schemakit.core.issues import ErrorMap
from schemakit.core.registry import GLOBAL_REGISTRY, SchemaMeta
from schemakit.core.types import PathSegment, TypeTag
from schemakit.engine import parser

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ParseResult:
    """Outcome of :meth:`Schema.safe_parse`.

    Attributes:
        success: True when the input satisfied the schema.
        data: The parsed value; None on failure.
        error: The validation error; None on success.
    """

    success: bool
    data: Any = None
    error: ValidationError | None = None

    def unwrap(self) -> Any:
        """Return the parsed value, raising the validation error on failure."""
        if self.error is not None:
            raise self.error
        return self.data


class Schema:
    """Base class of every schema kind.

    Subclasses implement the leaf contract used by the parse engine:

    - ``_extract(value)`` returns ``(value, True)`` when the input already has
      the schema's base type, ``(None, False)`` otherwise;
    - ``_extract_indirect(value)`` tries the same through an accepted
      representation (an Enum member, a dataclass, another sequence type...);
    - ``_coerce(value)`` converts the raw input when ``coerce=True`` and raises
      :class:`~schemakit.engine.coerce.CoercionError` on failure;
    - ``_validate(payload, ctx)`` validates children of composite kinds;
    - ``_zero()`` is the result of a non-optional schema whose value is absent;
    - ``_python_types()`` lists the Python types of parsed values;
    - ``_accepts_none()`` tells whether None is a legal input of the kind itself.
    """

    TYPE: ClassVar[TypeTag]

    def __init__(self, internals: SchemaInternals) -> None:
        self._internals = internals

    @classmethod
    def _create(
        cls,
        *,
        type_: TypeTag | None = None,
        error: str | ErrorMap | None = None,
        description: str | None = None,
        coerce: bool = False,
        abort: bool = False,
        path: Iterable[PathSegment] = (),
        params: Mapping[str, Any] | None = None,
        checks: Iterable[Check] = (),
        **bag: Any,
    ) -> Any:
        """Build a schema of this kind from factory parameters."""
        internals = SchemaInternals(
            type=type_ or cls.TYPE,
            checks=tuple(checks),
            coerce=coerce,
            error=to_error_map(error),
            abort=abort,
            path=tuple(path),
            params=dict(params) if params else None,
            bag=bag,
            constructor=cls,
        )
        schema = cls(internals)
        if description is not None:
            GLOBAL_REGISTRY.add(schema, SchemaMeta(description=description))
        return schema

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._internals.type.value})"

    @property
    def internals(self) -> SchemaInternals:
        return self._internals

    @property
    def type(self) -> TypeTag:
        return self._internals.type

    @property
    def description(self) -> str | None:
        meta = GLOBAL_REGISTRY.get(self)
        return meta.description if meta is not None else None

    @property
    def metadata(self) -> SchemaMeta | None:
        """Metadata registered for this schema in the global registry."""
        return GLOBAL_REGISTRY.get(self)

    def is_optional(self) -> bool:
        return self._internals.pointer

    # Parse entry points

    def safe_parse(self, value: Any, ctx: ParseContext | None = None) -> ParseResult:
        """Parse *value*, returning the outcome instead of raising."""
        ctx = ctx if ctx is not None else ParseContext()
        payload = self._run(value, ctx)
        if payload.has_issues:
            return ParseResult(success=False, error=ValidationError(finalize_issues(payload.issues, ctx)))
        return ParseResult(success=True, data=payload.value)

    def parse(self, value: Any, ctx: ParseContext | None = None) -> Any:
        """Parse *value* and return the result.

        Raises:
            ValidationError: If *value* does not satisfy the schema.
        """
        return self.safe_parse(value, ctx).unwrap()

    def parse_any(self, value: Any, ctx: ParseContext | None = None) -> Any:
        """Parse *value* without mapping an absent result to the zero value.

        Raises:
            ValidationError: If *value* does not satisfy the schema.
        """
        ctx = ctx if ctx is not None else ParseContext()
        payload = parser.run(self, value, ctx, convert=False)
        if payload.has_issues:
            raise ValidationError(finalize_issues(payload.issues, ctx))
        return payload.value

    def strict_parse(self, value: Any, ctx: ParseContext | None = None) -> Any:
        """Parse *value*, first requiring it to already have the output type.

        Raises:
            TypeError: If *value* is not an instance of the schema's output type.
            ValidationError: If *value* does not satisfy the schema.
        """
        if not self._strict_accepts(value):
            expected = ", ".join(t.__name__ for t in self._python_types())
            raise TypeError(f"{self!r} expects a value of type {expected}, got {type(value).__name__}")
        return self.parse(value, ctx)

    # Wrappers

    def optional(self) -> Any:
        return self._rebuild(self._internals.clone(optional=True, nonoptional=False))

    def nilable(self) -> Any:
        return self._rebuild(self._internals.clone(nilable=True, nonoptional=False))

    def nullish(self) -> Any:
        return self._rebuild(self._internals.clone(optional=True, nilable=True, nonoptional=False))

    def nonoptional(self) -> Any:
        return self._rebuild(
            self._internals.clone(nonoptional=True, optional=False, nilable=False, exact_optional=False)
        )

    def exact_optional(self) -> Any:
        """Allow the field to be absent from an object, but not to be None."""
        return self._rebuild(self._internals.clone(optional=True, exact_optional=True, nonoptional=False))

    def default(self, value: Any) -> Any:
        """Return *value* for None input, bypassing every check."""
        return self._rebuild(self._internals.clone(default_value=value, default_factory=None))

    def default_factory(self, factory: Callable[[], Any]) -> Any:
        return self._rebuild(self._internals.clone(default_factory=factory))

    def prefault(self, value: Any) -> Any:
        """Parse *value* in place of None input."""
        return self._rebuild(self._internals.clone(prefault_value=value, prefault_factory=None))

    def prefault_factory(self, factory: Callable[[], Any]) -> Any:
        return self._rebuild(self._internals.clone(prefault_factory=factory))

    # Checks and refinements

    def check(self, *items: Check | Callable[[ParsePayload, RefinementContext], None]) -> Any:
        """Attach checks; plain callables receive the payload and a refinement context."""
        attached = [item if isinstance(item, Check) else checks.callback(item) for item in items]
        return self._rebuild(self._internals.with_checks(attached).clone(refined=True))

    def refine(
        self,
        predicate: Callable[[Any], Any],
        *,
        error: str | ErrorMap | None = None,
        abort: bool = False,
        path: Iterable[PathSegment] = (),
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Report a ``custom`` issue when *predicate* returns a falsy value."""
        check = checks.custom(
            predicate, error=error, abort=abort, path=path, params=params, convert=self._constraint_value
        )
        return self._rebuild(self._internals.with_checks([check]).clone(refined=True))

    def overwrite(self, fn: Callable[[Any], Any]) -> Any:
        """Replace the value with ``fn(value)`` while the checks run."""
        return self._rebuild(self._internals.with_checks([checks.overwrite(fn)]).clone(refined=True))

    # Composition

    def or_(self, other: Schema) -> Any:
        from schemakit.schemas.unions import union

        return union([self, other])

    def and_(self, other: Schema) -> Any:
        from schemakit.schemas.unions import intersection

        return intersection(self, other)

    def pipe(self, out: Schema) -> Any:
        from schemakit.schemas.pipes import pipe

        return pipe(self, out)

    def transform(self, fn: Callable[[Any, RefinementContext], Any]) -> Any:
        """Return a schema applying ``fn(value, ctx)`` to this schema's result."""
        from schemakit.schemas.pipes import TransformSchema

        return TransformSchema.wrap(self, fn)

    # Metadata

    def meta(self, **fields: Any) -> Any:
        """Return a copy of this schema registered with *fields* as metadata."""
        clone = self._rebuild(self._internals)
        current = GLOBAL_REGISTRY.get(clone) or SchemaMeta()
        GLOBAL_REGISTRY.add(clone, current.merged(**fields))
        return clone

    def describe(self, description: str) -> Any:
        return self.meta(description=description)

    # Leaf contract

    def _extract(self, value: Any) -> tuple[Any, bool]:
        return None, False

    def _extract_indirect(self, value: Any) -> tuple[Any, bool]:
        return None, False

    def _coerce(self, value: Any) -> Any:
        return value

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        pass

    def _zero(self) -> Any:
        return None

    def _python_types(self) -> tuple[type, ...]:
        return (object,)

    def _accepts_none(self) -> bool:
        return False

    # ################
    # Implementation
    # ################

    def _run(self, value: Any, ctx: ParseContext) -> ParsePayload:
        """Parse *value*; issue paths in the result are relative to this schema."""
        return parser.run(self, value, ctx)

    def _rebuild(self, internals: SchemaInternals) -> Any:
        """Build a schema of the same kind, inheriting registered metadata except ``id``."""
        schema = internals.constructor(internals)
        meta = GLOBAL_REGISTRY.get(self)
        if meta is not None:
            GLOBAL_REGISTRY.add(schema, SchemaMeta(**meta.model_dump(exclude={"id"}, exclude_none=True)))
        return schema

    def _with_checks(self, *added: Check) -> Any:
        return self._rebuild(self._internals.with_checks(added))

    def _constraint_value(self, value: Any) -> Any:
        if value is None and not self._internals.pointer:
            return self._zero()
        return value

    def _strict_accepts(self, value: Any) -> bool:
        if value is None and self._internals.pointer:
            return True
        return isinstance(value, self._python_types())


def enum_value(value: Any) -> tuple[Any, bool]:
    """Unwrap an Enum member into its value for indirect extraction."""
    if isinstance(value, Enum):
        return value.value, True
    return None, False


def same_value(value: Any, allowed: Any) -> bool:
    """Equality that also requires equal types, so ``1`` does not match ``True``."""
    return type(value) is type(allowed) and value == allowed


def is_integral(value: Any) -> bool:
    """True for integral numbers other than bool."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)
