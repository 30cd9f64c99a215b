# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sequential composition: pipes and transforms."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from schemakit.core.context import ParseContext, ParsePayload, RefinementContext
from schemakit.core.issues import ErrorMap
from schemakit.core.types import PathSegment, TypeTag
from schemakit.schemas.base import Schema

# ###############
# Public Interface
# ###############


class PipeSchema(Schema):
    """Parses with ``in_`` and feeds the result to ``out``; nothing is retried."""

    TYPE = TypeTag.PIPE

    @property
    def in_(self) -> Schema:
        return self._internals.bag["in_"]

    @property
    def out(self) -> Schema:
        return self._internals.bag["out"]

    def _extract(self, value: Any) -> tuple[Any, bool]:
        return value, True

    def _accepts_none(self) -> bool:
        return True

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        first = self.in_._run(payload.value, ctx)
        if first.has_issues:
            payload.merge(first.issues)
            return
        second = self.out._run(first.value, ctx)
        if second.has_issues:
            payload.merge(second.issues)
            return
        payload.value = second.value

    def _python_types(self) -> tuple[type, ...]:
        return self.out._python_types()


class TransformSchema(Schema):
    """Parses with a source schema, then rewrites the value with a function.

    The function receives the value and a
    :class:`~schemakit.core.context.RefinementContext`. It may report issues
    through the context or raise ``ValueError``/``TypeError`` (reported as a
    ``custom`` issue) or a ``ValidationError`` (whose issues are kept).
    Checks attached to the transform schema run before the function, on the
    source's result.
    """

    TYPE = TypeTag.TRANSFORM

    @classmethod
    def wrap(cls, source: Schema, fn: Callable[[Any, RefinementContext], Any]) -> TransformSchema:
        schema = cls._create(source=source)
        return cls(schema.internals.clone(transform=fn))

    @property
    def source(self) -> Schema:
        return self._internals.bag["source"]

    def _extract(self, value: Any) -> tuple[Any, bool]:
        return value, True

    def _accepts_none(self) -> bool:
        return True

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        outcome = self.source._run(payload.value, ctx)
        if outcome.has_issues:
            payload.merge(outcome.issues)
            return
        payload.value = outcome.value


def pipe(
    in_: Schema,
    out: Schema,
    *,
    error: str | ErrorMap | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
    params: Mapping[str, Any] | None = None,
) -> PipeSchema:
    return PipeSchema._create(
        error=error, description=description, abort=abort, path=path, params=params, in_=in_, out=out
    )


def transform(source: Schema, fn: Callable[[Any, RefinementContext], Any]) -> TransformSchema:
    """Equivalent to ``source.transform(fn)``."""
    return TransformSchema.wrap(source, fn)
