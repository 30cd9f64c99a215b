# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parse engine: the parse state machine and leaf coercions."""

from schemakit.engine.coerce import CoercionError, to_bool, to_float, to_int, to_string
from schemakit.engine.parser import TERMINAL_STATES, ParseState, run, trace

__all__ = [
    "ParseState",
    "TERMINAL_STATES",
    "run",
    "trace",
    "CoercionError",
    "to_bool",
    "to_float",
    "to_int",
    "to_string",
]
