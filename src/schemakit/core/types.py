# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type tags, issue codes, and parsed-type naming shared by every schema."""

from __future__ import annotations

import math
from collections.abc import Mapping
from enum import Enum
from typing import Any

# ###############
# Public Interface
# ###############

PathSegment = str | int


class TypeTag(Enum):
    """Every schema kind known to the engine.

    The wrapper tags (``OPTIONAL``, ``NULLABLE``, ``DEFAULT``, ``PREFAULT``,
    ``NONOPTIONAL``) never name a schema; they only appear inside issue
    properties such as ``expected="nonoptional"``.
    """

    STRING = "string"
    INT = "int"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT = "float"
    BOOL = "bool"
    NIL = "nil"
    ANY = "any"
    UNKNOWN = "unknown"
    NEVER = "never"
    LITERAL = "literal"
    ENUM = "enum"
    ARRAY = "array"
    TUPLE = "tuple"
    LIST = "list"
    OBJECT = "object"
    RECORD = "record"
    SET = "set"
    UNION = "union"
    XOR = "xor"
    DISCRIMINATED_UNION = "discriminated_union"
    INTERSECTION = "intersection"
    PIPE = "pipe"
    TRANSFORM = "transform"
    LAZY = "lazy"
    CUSTOM = "custom"
    OPTIONAL = "optional"
    NULLABLE = "nullable"
    DEFAULT = "default"
    PREFAULT = "prefault"
    NONOPTIONAL = "nonoptional"


class IssueCode(Enum):
    """The closed taxonomy of validation failures."""

    INVALID_TYPE = "invalid_type"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    INVALID_FORMAT = "invalid_format"
    NOT_MULTIPLE_OF = "not_multiple_of"
    INVALID_VALUE = "invalid_value"
    INVALID_UNION = "invalid_union"
    INVALID_XOR = "invalid_xor"
    UNRECOGNIZED_KEYS = "unrecognized_keys"
    INVALID_ELEMENT = "invalid_element"
    INVALID_KEY = "invalid_key"
    CUSTOM = "custom"
    NONOPTIONAL_VIOLATION = "nonoptional_violation"


def parsed_type(value: Any) -> str:
    """Return the name used for *value* in ``received`` properties and messages.

    Args:
        value: Any runtime value.

    Returns:
        A short, stable type name such as ``"string"``, ``"number"``,
        ``"nil"``, ``"NaN"``, ``"array"`` or ``"object"``.
    """
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "number"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity"
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (bytes, bytearray)):
        return "bytes"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, (set, frozenset)):
        return "set"
    if isinstance(value, Mapping):
        return "object"
    if callable(value):
        return "function"
    return type(value).__name__
