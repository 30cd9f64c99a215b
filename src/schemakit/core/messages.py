# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Default English messages for raw issues."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from schemakit.core.issues import RawIssue
from schemakit.core.types import IssueCode

# ###############
# Public Interface
# ###############

# Unit used in size messages, keyed by the origin of the measured value.
SIZE_UNITS: dict[str, str] = {
    "string": "characters",
    "bytes": "bytes",
    "file": "bytes",
    "array": "items",
    "tuple": "items",
    "list": "items",
    "set": "items",
    "object": "keys",
    "record": "keys",
}

# Human-readable nouns for invalid_format messages.
FORMAT_NOUNS: dict[str, str] = {
    "regex": "input",
    "email": "email address",
    "lowercase": "lowercase string",
    "uppercase": "uppercase string",
    "mime": "MIME type",
}


def default_message(issue: RawIssue) -> str:
    """Return the message carried by *issue*, or the code-default English message."""
    if issue.message:
        return issue.message
    formatter = _FORMATTERS.get(issue.code)
    if formatter is None:
        return "Invalid input"
    return formatter(issue)


def stringify(value: Any) -> str:
    """Render a primitive value the way it appears inside messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return format_threshold(value)
    if isinstance(value, int):
        return str(value)
    return f'"{value}"'


def join_values(values: Sequence[Any], separator: str = "|") -> str:
    return separator.join(stringify(v) for v in values)


def format_threshold(threshold: Any) -> str:
    """Render a size or numeric bound without spurious decimals."""
    if isinstance(threshold, float) and threshold.is_integer():
        return str(int(threshold))
    return str(threshold)


# ################
# Implementation
# ################


def _invalid_type(issue: RawIssue) -> str:
    return f"Invalid input: expected {issue.get('expected')}, received {issue.get('received')}"


def _invalid_value(issue: RawIssue) -> str:
    options = issue.get("options") or []
    if not options:
        return "Invalid value"
    if len(options) == 1:
        return f"Invalid input: expected {stringify(options[0])}"
    return f"Invalid option: expected one of {join_values(options)}"


def _size(issue: RawIssue, *, too_small: bool) -> str:
    origin = issue.origin or "value"
    bound = issue.get("minimum") if too_small else issue.get("maximum")
    label = "Too small" if too_small else "Too big"
    if bound is None:
        return label
    if issue.get("exact"):
        adjective = "exactly "
    elif too_small:
        adjective = "at least " if issue.get("inclusive", True) else "more than "
    else:
        adjective = "at most " if issue.get("inclusive", True) else "less than "
    unit = SIZE_UNITS.get(origin)
    if unit is not None:
        return f"{label}: expected {origin} to have {adjective}{format_threshold(bound)} {unit}"
    return f"{label}: expected {origin} to be {adjective}{format_threshold(bound)}"


def _invalid_format(issue: RawIssue) -> str:
    fmt = issue.get("format")
    if fmt == "starts_with":
        return f"Invalid string: must start with {stringify(issue.get('prefix'))}"
    if fmt == "ends_with":
        return f"Invalid string: must end with {stringify(issue.get('suffix'))}"
    if fmt == "includes":
        return f"Invalid string: must include {stringify(issue.get('includes'))}"
    if fmt == "regex" and issue.get("pattern"):
        return f"Invalid string: must match pattern {issue.get('pattern')}"
    if fmt == "mime":
        allowed = issue.get("options") or []
        return f"Invalid MIME type: expected one of {join_values(allowed)}"
    if not fmt:
        return "Invalid format"
    return f"Invalid {FORMAT_NOUNS.get(fmt, fmt)}"


def _not_multiple_of(issue: RawIssue) -> str:
    return f"Invalid number: must be a multiple of {format_threshold(issue.get('divisor'))}"


def _unrecognized_keys(issue: RawIssue) -> str:
    keys = issue.get("keys") or []
    noun = "key" if len(keys) == 1 else "keys"
    return f"Unrecognized {noun}: {join_values(keys, ', ')}"


def _invalid_key(issue: RawIssue) -> str:
    return f"Invalid key in {issue.origin or 'object'}"


def _invalid_element(issue: RawIssue) -> str:
    return f"Invalid value in {issue.origin or 'collection'}"


def _invalid_union(issue: RawIssue) -> str:
    note = issue.get("note")
    if note:
        return f"Invalid input: {note}"
    return "Invalid input: no union member matched"


def _invalid_xor(issue: RawIssue) -> str:
    return f"Invalid input: expected exactly one option to match, {issue.get('match_count')} matched"


def _custom(issue: RawIssue) -> str:
    return "Invalid input"


def _nonoptional(issue: RawIssue) -> str:
    return f"Invalid input: expected nonoptional, received {issue.get('received')}"


_FORMATTERS = {
    IssueCode.INVALID_TYPE: _invalid_type,
    IssueCode.INVALID_VALUE: _invalid_value,
    IssueCode.TOO_SMALL: lambda issue: _size(issue, too_small=True),
    IssueCode.TOO_BIG: lambda issue: _size(issue, too_small=False),
    IssueCode.INVALID_FORMAT: _invalid_format,
    IssueCode.NOT_MULTIPLE_OF: _not_multiple_of,
    IssueCode.UNRECOGNIZED_KEYS: _unrecognized_keys,
    IssueCode.INVALID_KEY: _invalid_key,
    IssueCode.INVALID_ELEMENT: _invalid_element,
    IssueCode.INVALID_UNION: _invalid_union,
    IssueCode.INVALID_XOR: _invalid_xor,
    IssueCode.CUSTOM: _custom,
    IssueCode.NONOPTIONAL_VIOLATION: _nonoptional,
}
