# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Deferred schemas for recursive definitions."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from schemakit.core.context import ParseContext, ParsePayload
from schemakit.core.types import TypeTag
from schemakit.schemas.base import Schema

# ###############
# Public Interface
# ###############


class LazySchema(Schema):
    """Delegates to the schema returned by a getter, resolved on first use.

    Example::

        node = lazy(lambda: object_({"value": int_(), "children": list_(node)}))
    """

    TYPE = TypeTag.LAZY

    @property
    def schema(self) -> Schema:
        return self._internals.bag["resolver"].resolve()

    def _extract(self, value: Any) -> tuple[Any, bool]:
        return value, True

    def _accepts_none(self) -> bool:
        return True

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        outcome = self.schema._run(payload.value, ctx)
        if outcome.has_issues:
            payload.merge(outcome.issues)
            return
        payload.value = outcome.value

    def _python_types(self) -> tuple[type, ...]:
        return self.schema._python_types()


def lazy(getter: Callable[[], Schema]) -> LazySchema:
    return LazySchema._create(resolver=_Resolver(getter))


# ################
# Implementation
# ################


class _Resolver:
    """Calls the getter once and caches its schema; shared by clones of a lazy schema."""

    def __init__(self, getter: Callable[[], Schema]) -> None:
        self._getter = getter
        self._lock = threading.Lock()
        self._schema: Schema | None = None

    def resolve(self) -> Schema:
        if self._schema is None:
            with self._lock:
                if self._schema is None:
                    self._schema = self._getter()
        return self._schema
