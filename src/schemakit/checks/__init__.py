# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reusable checks attached to schemas (ranges, sizes, formats, refinements)."""

from schemakit.checks.base import Check, CheckFn, make_check, origin_of, run_checks
from schemakit.checks.custom import callback, custom, overwrite, property
from schemakit.checks.formats import (
    EMAIL_PATTERN,
    email,
    ends_with,
    includes,
    lowercase,
    mime,
    regex,
    starts_with,
    uppercase,
)
from schemakit.checks.numeric import gt, gte, lt, lte, multiple_of
from schemakit.checks.sizes import length, max_length, max_size, min_length, min_size, size

__all__ = [
    # Base
    "Check",
    "CheckFn",
    "make_check",
    "origin_of",
    "run_checks",
    # Numeric
    "gt",
    "gte",
    "lt",
    "lte",
    "multiple_of",
    # Sizes
    "min_size",
    "max_size",
    "size",
    "min_length",
    "max_length",
    "length",
    # Formats
    "EMAIL_PATTERN",
    "email",
    "regex",
    "mime",
    "starts_with",
    "ends_with",
    "includes",
    "lowercase",
    "uppercase",
    # Custom
    "callback",
    "custom",
    "overwrite",
    "property",
]
