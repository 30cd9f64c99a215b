# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""The escape-hatch schema: any input, validated by a user predicate or check callback."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from schemakit import checks
from schemakit.core.context import ParsePayload, RefinementContext
from schemakit.core.issues import ErrorMap
from schemakit.core.types import PathSegment, TypeTag
from schemakit.schemas.base import Schema

# ###############
# Public Interface
# ###############


class CustomSchema(Schema):
    TYPE = TypeTag.CUSTOM

    def _extract(self, value: Any) -> tuple[Any, bool]:
        return value, True

    def _accepts_none(self) -> bool:
        return True


def custom(
    predicate: Callable[[Any], Any] | None = None,
    *,
    check: Callable[[ParsePayload, RefinementContext], None] | None = None,
    error: str | ErrorMap | None = None,
    params: Mapping[str, Any] | None = None,
    description: str | None = None,
    abort: bool = False,
    path: Sequence[PathSegment] = (),
) -> CustomSchema:
    """Build a schema accepting any value that passes *predicate* and *check*.

    Args:
        predicate: Called with the input; a falsy result reports a ``custom`` issue.
        check: Called with the payload and a refinement context; reports
            issues through ``ctx.add_issue``.
        error: Message or error map for the issues reported.
        params: Parameters attached to the predicate's issue.
        description: Registered as the schema's description.
        abort: Skip *check* once *predicate* failed.
        path: Path of the predicate's issue relative to the value.
    """
    seeded = []
    if predicate is not None:
        seeded.append(checks.custom(predicate, error=error, abort=abort, path=path, params=params))
    if check is not None:
        seeded.append(checks.callback(check, error=error))
    return CustomSchema._create(description=description, checks=seeded)
