# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Raw and final issue records.

A :class:`RawIssue` is what checks and schemas emit while a parse is in
flight. It carries the originating schema internals and check so that the
finalizer can look up error customizers later. Once a parse call returns,
every raw issue is turned into an :class:`Issue`, the public and serializable
record exposed on :class:`~schemakit.core.errors.ValidationError`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from schemakit.core.types import IssueCode, PathSegment, TypeTag, parsed_type

# ###############
# Public Interface
# ###############

# An error map turns a raw issue into a message, or returns None to decline
# and let the next customizer in the chain decide.
ErrorMap = Callable[["RawIssue"], "str | None"]


@dataclass(frozen=True)
class RawIssue:
    """A validation failure before message finalization.

    Attributes:
        code: The issue code.
        input: The offending input value.
        path: Path of the value relative to the schema that reported it.
        message: An explicit message, used as the default for custom issues.
        properties: Code-specific properties (``expected``, ``minimum``...).
        inst: Internals of the schema that produced the issue.
        check: The check that produced the issue, if any.
        origin: Kind of value the issue is about (``"string"``, ``"array"``...).
    """

    code: IssueCode
    input: Any = None
    path: tuple[PathSegment, ...] = ()
    message: str | None = None
    properties: Mapping[str, Any] = field(default_factory=dict)
    inst: Any = None
    check: Any = None
    origin: str | None = None

    def get(self, key: str, default: Any = None) -> Any:
        """Return a property of the issue, or *default* when it is absent."""
        return self.properties.get(key, default)

    def with_origin(self, origin: str | TypeTag) -> RawIssue:
        return replace(self, origin=_name(origin))

    def with_path(self, path: Iterable[PathSegment]) -> RawIssue:
        return replace(self, path=tuple(path))

    def with_params(self, params: Mapping[str, Any] | None) -> RawIssue:
        if not params:
            return self
        return replace(self, properties={**self.properties, "params": dict(params)})

    def with_inst(self, inst: Any) -> RawIssue:
        return replace(self, inst=inst)

    def with_check(self, check: Any) -> RawIssue:
        return replace(self, check=check)

    def with_message(self, message: str | None) -> RawIssue:
        return replace(self, message=message)

    def prefixed(self, *segments: PathSegment) -> RawIssue:
        """Return a copy whose path starts with *segments*."""
        return replace(self, path=(*segments, *self.path))


class Issue(BaseModel):
    """A finalized, user-visible validation issue."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    code: IssueCode
    path: list[Any] = _Field(default_factory=list)
    message: str
    input: Any = None
    expected: str | None = None
    received: str | None = None
    origin: str | None = None
    format: str | None = None
    pattern: str | None = None
    minimum: Any = None
    maximum: Any = None
    inclusive: bool | None = None
    exact: bool | None = None
    divisor: Any = None
    keys: list[Any] | None = None
    key: Any = None
    note: str | None = None
    options: list[Any] | None = None
    params: dict[str, Any] | None = None
    match_count: int | None = None
    errors: list[list[Issue]] | None = None
    issues: list[Issue] | None = None


Issue.model_rebuild()


# Constructors, one per issue code.


def invalid_type(
    expected: str | TypeTag,
    input: Any,
    *,
    received: str | None = None,
) -> RawIssue:
    return RawIssue(
        IssueCode.INVALID_TYPE,
        input,
        properties={"expected": _name(expected), "received": received or parsed_type(input)},
    )


def too_small(
    origin: str | TypeTag,
    minimum: Any,
    input: Any,
    *,
    inclusive: bool = True,
    exact: bool = False,
) -> RawIssue:
    return RawIssue(
        IssueCode.TOO_SMALL,
        input,
        properties={"minimum": minimum, "inclusive": inclusive, "exact": exact},
        origin=_name(origin),
    )


def too_big(
    origin: str | TypeTag,
    maximum: Any,
    input: Any,
    *,
    inclusive: bool = True,
    exact: bool = False,
) -> RawIssue:
    return RawIssue(
        IssueCode.TOO_BIG,
        input,
        properties={"maximum": maximum, "inclusive": inclusive, "exact": exact},
        origin=_name(origin),
    )


def invalid_format(format: str, input: Any, **properties: Any) -> RawIssue:
    return RawIssue(
        IssueCode.INVALID_FORMAT,
        input,
        properties={"format": format, **properties},
        origin="string",
    )


def not_multiple_of(divisor: Any, input: Any) -> RawIssue:
    return RawIssue(IssueCode.NOT_MULTIPLE_OF, input, properties={"divisor": divisor}, origin="number")


def invalid_value(options: Sequence[Any], input: Any) -> RawIssue:
    return RawIssue(IssueCode.INVALID_VALUE, input, properties={"options": list(options)})


def invalid_union(errors: Sequence[Sequence[RawIssue]], input: Any, **properties: Any) -> RawIssue:
    return RawIssue(
        IssueCode.INVALID_UNION,
        input,
        properties={"errors": [tuple(option_issues) for option_issues in errors], **properties},
    )


def invalid_xor(match_count: int, input: Any) -> RawIssue:
    return RawIssue(IssueCode.INVALID_XOR, input, properties={"match_count": match_count})


def unrecognized_keys(keys: Sequence[str], input: Any) -> RawIssue:
    return RawIssue(IssueCode.UNRECOGNIZED_KEYS, input, properties={"keys": list(keys)}, origin="object")


def invalid_element(origin: str | TypeTag, key: Any, issues: Sequence[RawIssue], input: Any) -> RawIssue:
    return RawIssue(
        IssueCode.INVALID_ELEMENT,
        input,
        properties={"key": key, "issues": tuple(issues)},
        origin=_name(origin),
    )


def invalid_key(origin: str | TypeTag, issues: Sequence[RawIssue], input: Any) -> RawIssue:
    return RawIssue(
        IssueCode.INVALID_KEY,
        input,
        properties={"issues": tuple(issues)},
        origin=_name(origin),
    )


def custom(message: str | None, input: Any, *, params: Mapping[str, Any] | None = None) -> RawIssue:
    return RawIssue(IssueCode.CUSTOM, input, message=message).with_params(params)


def nonoptional_violation(input: Any) -> RawIssue:
    return RawIssue(
        IssueCode.NONOPTIONAL_VIOLATION,
        input,
        properties={"expected": TypeTag.NONOPTIONAL.value, "received": parsed_type(input)},
    )


def from_final(issue: Issue) -> RawIssue:
    """Turn a finalized issue back into a raw one, keeping its message.

    Used when a transform raises a ValidationError whose issues must join the
    payload of the schema being parsed.
    """
    properties = issue.model_dump(
        exclude={"code", "path", "message", "input", "origin", "errors", "issues"},
        exclude_none=True,
    )
    if issue.errors is not None:
        properties["errors"] = [tuple(from_final(i) for i in option) for option in issue.errors]
    if issue.issues is not None:
        properties["issues"] = tuple(from_final(i) for i in issue.issues)
    return RawIssue(
        issue.code,
        issue.input,
        path=tuple(issue.path),
        message=issue.message,
        properties=properties,
        origin=issue.origin,
    )


# ################
# Implementation
# ################


def _name(value: str | Enum) -> str:
    return value.value if isinstance(value, Enum) else value
