# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Process-wide metadata registry keyed by schema identity.

Writers are serialized by a lock and publish a fresh snapshot; readers look
at the snapshot current at the time of the call and never take the lock.
Entries are held through weak references so a registered schema can still be
garbage collected. Nothing stored here is consulted while parsing.
"""

from __future__ import annotations

import threading
import weakref
from collections.abc import Iterator
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

# ###############
# Public Interface
# ###############

M = TypeVar("M")


class SchemaMeta(BaseModel):
    """Descriptive metadata attached to a schema.

    Unknown keys are kept so that callers can attach their own annotations.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str | None = None
    title: str | None = None
    description: str | None = None
    examples: list[Any] | None = None
    deprecated: bool | None = None

    def merged(self, **fields: Any) -> SchemaMeta:
        """Return a copy with *fields* layered on top of the current values."""
        return SchemaMeta(**{**self.model_dump(exclude_none=True), **fields})


class Registry(Generic[M]):
    """Map from schema identity to metadata."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._entries: dict[int, tuple[weakref.ref[Any], M]] = {}

    def add(self, schema: Any, meta: M) -> None:
        """Register *meta* for *schema*, replacing any previous entry."""
        key = id(schema)
        with self._lock:
            entries = dict(self._entries)
            entries[key] = (weakref.ref(schema, lambda _ref, k=key: self._discard(k, _ref)), meta)
            self._entries = entries

    def get(self, schema: Any) -> M | None:
        """Return the metadata of *schema*, or None when it is not registered."""
        entry = self._entries.get(id(schema))
        if entry is None or entry[0]() is not schema:
            return None
        return entry[1]

    def has(self, schema: Any) -> bool:
        return self.get(schema) is not None

    def remove(self, schema: Any) -> None:
        """Drop the entry of *schema*; unknown schemas are ignored."""
        with self._lock:
            entry = self._entries.get(id(schema))
            if entry is None or entry[0]() is not schema:
                return
            entries = dict(self._entries)
            del entries[id(schema)]
            self._entries = entries

    def items(self) -> Iterator[tuple[Any, M]]:
        """Iterate live ``(schema, meta)`` pairs of the current snapshot."""
        for ref, meta in list(self._entries.values()):
            schema = ref()
            if schema is not None:
                yield schema, meta

    def __len__(self) -> int:
        return sum(1 for _ in self.items())

    # ################
    # Implementation
    # ################

    def _discard(self, key: int, ref: weakref.ref[Any]) -> None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry[0] is not ref:
                return
            entries = dict(self._entries)
            del entries[key]
            self._entries = entries


GLOBAL_REGISTRY: Registry[SchemaMeta] = Registry()
