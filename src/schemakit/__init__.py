# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""SchemaKit: composable runtime validation and parsing of untrusted data.

Example::

    import schemakit as sk

    user = sk.object_({"name": sk.string().min(1), "age": sk.int_().gte(0)}).strict()
    user.parse({"name": "Ada", "age": 36})
"""

from schemakit import checks
from schemakit.core import (
    GLOBAL_REGISTRY,
    UNSET,
    ConfigError,
    ErrorTree,
    FlattenedError,
    Issue,
    IssueCode,
    ParseContext,
    RefinementContext,
    Registry,
    SchemaDefinitionError,
    SchemaKitConfig,
    SchemaMeta,
    TypeTag,
    ValidationError,
    configure,
    find_validation_error,
    flatten_error,
    format_error,
    get_config,
    load_config,
    load_message_catalog,
    prettify_error,
    to_dot_path,
    treeify_error,
)
from schemakit.schemas import (
    ParseResult,
    Schema,
    any_,
    array,
    bool_,
    custom,
    discriminated_union,
    email,
    enum_,
    float_,
    int32,
    int64,
    int_,
    intersection,
    lazy,
    list_,
    literal,
    loose_object,
    never,
    none,
    object_,
    pipe,
    record,
    set_,
    strict_object,
    string,
    transform,
    tuple_,
    union,
    unknown,
    xor,
)

__all__ = [
    "checks",
    # Schemas
    "ParseResult",
    "Schema",
    "any_",
    "array",
    "bool_",
    "custom",
    "discriminated_union",
    "email",
    "enum_",
    "float_",
    "int32",
    "int64",
    "int_",
    "intersection",
    "lazy",
    "list_",
    "literal",
    "loose_object",
    "never",
    "none",
    "object_",
    "pipe",
    "record",
    "set_",
    "strict_object",
    "string",
    "transform",
    "tuple_",
    "union",
    "unknown",
    "xor",
    # Errors
    "ErrorTree",
    "FlattenedError",
    "Issue",
    "IssueCode",
    "SchemaDefinitionError",
    "ValidationError",
    "find_validation_error",
    "flatten_error",
    "format_error",
    "prettify_error",
    "to_dot_path",
    "treeify_error",
    # Parse context
    "ParseContext",
    "RefinementContext",
    "TypeTag",
    "UNSET",
    # Configuration
    "ConfigError",
    "SchemaKitConfig",
    "configure",
    "get_config",
    "load_config",
    "load_message_catalog",
    # Registry
    "GLOBAL_REGISTRY",
    "Registry",
    "SchemaMeta",
]
