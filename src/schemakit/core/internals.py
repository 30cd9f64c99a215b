# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""The state record shared by every schema kind.

A :class:`SchemaInternals` is never mutated once a schema holds it. Every
modifier derives a new record through :meth:`SchemaInternals.clone` and wraps
it in a new schema through the record's ``constructor``. Child schemas stored
in ``bag`` are shared by reference between the old and the new record.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from schemakit.core.issues import ErrorMap
from schemakit.core.types import TypeTag

if TYPE_CHECKING:
    from schemakit.checks.base import Check

# ###############
# Public Interface
# ###############


class _Unset:
    """Marker for "no value"; None is a legal default and prefault."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Unset:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Unset:
        return self


UNSET: Any = _Unset()


@dataclass(frozen=True)
class SchemaInternals:
    """Kind, checks, nil-handling flags and per-kind state of a schema.

    Attributes:
        type: The schema kind.
        checks: Checks run in order over the parse payload.
        optional: Nil input is accepted and returned as None.
        nilable: Same nil policy as ``optional``; kept apart for introspection.
        nonoptional: Nil input is rejected with ``nonoptional_violation``.
        exact_optional: Inside an object the field may be absent but not None.
        coerce: Run the kind's coercion before extraction.
        default_value: Value returned verbatim for nil input.
        default_factory: Producer of the default value, called per parse.
        prefault_value: Value parsed in place of nil input.
        prefault_factory: Producer of the prefault value, called per parse.
        error: Per-schema error map.
        transform: Function applied to the validated value.
        bag: Read-only per-kind state such as ``shape`` or ``options``.
        constructor: Builds a schema of the same kind from a record.
        refined: True once a user refinement was attached.
        abort: Stop the check loop at the first check that reports an issue.
        path: Path prepended to issues the schema reports itself.
        params: Parameters attached to issues the schema reports itself.
    """

    type: TypeTag
    checks: tuple[Check, ...] = ()
    optional: bool = False
    nilable: bool = False
    nonoptional: bool = False
    exact_optional: bool = False
    coerce: bool = False
    default_value: Any = UNSET
    default_factory: Callable[[], Any] | None = None
    prefault_value: Any = UNSET
    prefault_factory: Callable[[], Any] | None = None
    error: ErrorMap | None = None
    transform: Callable[..., Any] | None = None
    bag: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    constructor: Callable[[SchemaInternals], Any] | None = None
    refined: bool = False
    abort: bool = False
    path: tuple[Any, ...] = ()
    params: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.bag, MappingProxyType):
            object.__setattr__(self, "bag", MappingProxyType(dict(self.bag)))
        if not isinstance(self.checks, tuple):
            object.__setattr__(self, "checks", tuple(self.checks))
        if not isinstance(self.path, tuple):
            object.__setattr__(self, "path", tuple(self.path))

    def clone(self, **changes: Any) -> SchemaInternals:
        """Return a new record with *changes* applied."""
        return replace(self, **changes)

    def with_bag(self, **entries: Any) -> SchemaInternals:
        """Return a new record whose bag has *entries* added or replaced."""
        return self.clone(bag={**self.bag, **entries})

    def with_checks(self, checks: Iterable[Check]) -> SchemaInternals:
        """Return a new record with *checks* appended after the existing ones."""
        return self.clone(checks=(*self.checks, *checks))

    @property
    def has_default(self) -> bool:
        return self.default_value is not UNSET or self.default_factory is not None

    @property
    def has_prefault(self) -> bool:
        return self.prefault_value is not UNSET or self.prefault_factory is not None

    @property
    def pointer(self) -> bool:
        """True when the schema yields None rather than a zero value for absent results."""
        return (self.optional or self.nilable) and not self.nonoptional

    def get_default(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return copy.copy(self.default_value)

    def get_prefault(self) -> Any:
        if self.prefault_factory is not None:
            return self.prefault_factory()
        return copy.copy(self.prefault_value)


def to_error_map(error: str | ErrorMap | None) -> ErrorMap | None:
    """Normalize an ``error`` factory parameter into an error map.

    Args:
        error: A fixed message, an error map, or None.

    Returns:
        An error map, or None when *error* is None.
    """
    if error is None or callable(error):
        return error
    message = str(error)
    return lambda _issue: message
