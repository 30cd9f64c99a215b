# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Coercion functions used by leaf schemas built with ``coerce=True``."""

from __future__ import annotations

import math
from typing import Any

# ###############
# Public Interface
# ###############


class CoercionError(ValueError):
    """Raised when a value cannot be coerced to the requested type."""


def to_string(value: Any) -> str:
    """Coerce scalars to their string form; bytes are decoded as UTF-8."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CoercionError(f"cannot decode bytes as UTF-8: {exc}") from exc
    raise CoercionError(f"cannot coerce {type(value).__name__} to string")


def to_int(value: Any) -> int:
    """Coerce booleans, integral floats and numeric strings to int."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise CoercionError(f"cannot coerce {value!r} to int")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            raise CoercionError(f"cannot coerce {value!r} to int") from None
        return to_int(number)
    raise CoercionError(f"cannot coerce {type(value).__name__} to int")


def to_float(value: Any) -> float:
    """Coerce booleans, ints and numeric strings to float."""
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            raise CoercionError(f"cannot coerce {value!r} to float") from None
    raise CoercionError(f"cannot coerce {type(value).__name__} to float")


def to_bool(value: Any) -> bool:
    """Coerce common truthy and falsy spellings and numbers to bool.

    Strings are matched case-insensitively after trimming against
    ``true/1/yes/on/y`` and ``false/0/no/off/n`` (the empty string is false).
    Numbers are true when non-zero.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUTHY:
            return True
        if text in _FALSY:
            return False
    raise CoercionError(f"cannot coerce {value!r} to bool")


# ################
# Implementation
# ################

_TRUTHY = frozenset({"true", "1", "yes", "on", "y"})
_FALSY = frozenset({"false", "0", "no", "off", "n", ""})
