# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Presentation helpers for validation errors: dot paths, flat, tree, and pretty forms."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from schemakit.core.issues import Issue
from schemakit.core.types import IssueCode, PathSegment

if TYPE_CHECKING:
    from schemakit.core.errors import ValidationError

# ###############
# Public Interface
# ###############

IssueMapper = Callable[[Issue], str]


@dataclass
class FlattenedError:
    """Errors split into form-level messages and first-segment field messages.

    Attributes:
        form_errors: Messages of issues with an empty path.
        field_errors: Messages keyed by the first path segment.
    """

    form_errors: list[str] = field(default_factory=list)
    field_errors: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class ErrorTree:
    """Errors arranged along the shape of the input.

    Attributes:
        errors: Messages of issues located exactly at this node.
        properties: Subtrees for non-integer path segments.
        items: Subtrees for integer path segments; unused positions are None.
    """

    errors: list[str] = field(default_factory=list)
    properties: dict[Any, ErrorTree] = field(default_factory=dict)
    items: list[ErrorTree | None] = field(default_factory=list)


def to_dot_path(path: Sequence[Any]) -> str:
    """Render a path as a JavaScript-style accessor, e.g. ``user.emails[2]``."""
    parts: list[str] = []
    for segment in path:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        elif not isinstance(segment, str):
            parts.append(f"[{segment!r}]")
        elif _NON_WORD.search(segment):
            parts.append(f"[{json.dumps(segment)}]")
        else:
            if parts:
                parts.append(".")
            parts.append(segment)
    return "".join(parts)


def prettify_error(error: ValidationError) -> str:
    """Render every issue as a ``✖ message`` line followed by its location."""
    lines: list[str] = []
    for issue in sorted(error.issues, key=lambda i: len(i.path)):
        lines.append(f"✖ {issue.message}")
        if issue.path:
            lines.append(f"  → at {to_dot_path(issue.path)}")
    return "\n".join(lines)


def flatten_error(error: ValidationError, mapper: IssueMapper | None = None) -> FlattenedError:
    """Group messages by the first path segment of each leaf issue."""
    mapper = mapper or _message
    result = FlattenedError()
    for path, issue in _walk(error.issues, ()):
        if not path:
            result.form_errors.append(mapper(issue))
        else:
            result.field_errors.setdefault(str(path[0]), []).append(mapper(issue))
    return result


def treeify_error(error: ValidationError, mapper: IssueMapper | None = None) -> ErrorTree:
    """Arrange messages in a tree following the full path of each leaf issue."""
    mapper = mapper or _message
    root = ErrorTree()
    for path, issue in _walk(error.issues, ()):
        node = root
        for segment in path:
            if isinstance(segment, int):
                while len(node.items) <= segment:
                    node.items.append(None)
                child = node.items[segment]
                if child is None:
                    child = ErrorTree()
                    node.items[segment] = child
                node = child
            else:
                node = node.properties.setdefault(segment, ErrorTree())
        node.errors.append(mapper(issue))
    return root


def format_error(error: ValidationError, mapper: IssueMapper | None = None) -> dict[str, Any]:
    """Return nested dictionaries with an ``_errors`` list at every level."""
    mapper = mapper or _message
    root: dict[str, Any] = {"_errors": []}
    for path, issue in _walk(error.issues, ()):
        node = root
        for segment in path:
            node = node.setdefault(str(segment), {"_errors": []})
        node["_errors"].append(mapper(issue))
    return root


# ################
# Implementation
# ################

_NON_WORD = re.compile(r"[^\w$]")


def _message(issue: Issue) -> str:
    return issue.message


def _walk(issues: Iterable[Issue], base: tuple[PathSegment, ...]) -> Iterator[tuple[tuple[PathSegment, ...], Issue]]:
    """Yield leaf issues with their absolute path, descending into nested issues."""
    for issue in issues:
        path = (*base, *issue.path)
        if issue.code is IssueCode.INVALID_UNION and issue.errors:
            for option_issues in issue.errors:
                yield from _walk(option_issues, path)
        elif issue.code in (IssueCode.INVALID_KEY, IssueCode.INVALID_ELEMENT) and issue.issues:
            yield from _walk(issue.issues, path)
        else:
            yield path, issue
