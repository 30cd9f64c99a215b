# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Exceptions raised by SchemaKit."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from schemakit.core.formatting import (
    ErrorTree,
    FlattenedError,
    IssueMapper,
    flatten_error,
    format_error,
    prettify_error,
    to_dot_path,
    treeify_error,
)
from schemakit.core.issues import Issue

# ###############
# Public Interface
# ###############


class ValidationError(ValueError):
    """Raised when an input does not satisfy a schema.

    Attributes:
        issues: Every finalized issue, in emission order.
    """

    def __init__(self, issues: Iterable[Issue]) -> None:
        self.issues: tuple[Issue, ...] = tuple(issues)
        super().__init__(prettify_error(self))

    def __str__(self) -> str:
        return prettify_error(self)

    def __repr__(self) -> str:
        return f"ValidationError({len(self.issues)} issue(s))"

    def by_path(self) -> dict[str, list[Issue]]:
        """Group issues by their dot path; the root is keyed by ``""``."""
        grouped: dict[str, list[Issue]] = {}
        for issue in self.issues:
            grouped.setdefault(to_dot_path(issue.path), []).append(issue)
        return grouped

    def flatten(self, mapper: IssueMapper | None = None) -> FlattenedError:
        return flatten_error(self, mapper)

    def treeify(self, mapper: IssueMapper | None = None) -> ErrorTree:
        return treeify_error(self, mapper)

    def format(self, mapper: IssueMapper | None = None) -> dict[str, Any]:
        return format_error(self, mapper)


class SchemaDefinitionError(ValueError):
    """Raised when a schema cannot be built from the given definition."""


def find_validation_error(exc: BaseException | None) -> ValidationError | None:
    """Return the first ValidationError in the cause or context chain of *exc*.

    Args:
        exc: The exception to inspect; it is itself checked first.

    Returns:
        The ValidationError found, or None.
    """
    seen: set[int] = set()
    while exc is not None and id(exc) not in seen:
        if isinstance(exc, ValidationError):
            return exc
        seen.add(id(exc))
        exc = exc.__cause__ or exc.__context__
    return None
