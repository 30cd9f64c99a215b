# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Issue model, parse context, schema internals, configuration and registry."""

from schemakit.core.config import (
    ConfigError,
    SchemaKitConfig,
    configure,
    get_config,
    load_config,
    load_message_catalog,
)
from schemakit.core.context import ParseContext, ParsePayload, RefinementContext
from schemakit.core.errors import SchemaDefinitionError, ValidationError, find_validation_error
from schemakit.core.finalize import finalize_issue, finalize_issues, resolve_message
from schemakit.core.formatting import (
    ErrorTree,
    FlattenedError,
    flatten_error,
    format_error,
    prettify_error,
    to_dot_path,
    treeify_error,
)
from schemakit.core.internals import UNSET, SchemaInternals, to_error_map
from schemakit.core.issues import ErrorMap, Issue, RawIssue
from schemakit.core.registry import GLOBAL_REGISTRY, Registry, SchemaMeta
from schemakit.core.types import IssueCode, PathSegment, TypeTag, parsed_type

__all__ = [
    # Types
    "IssueCode",
    "PathSegment",
    "TypeTag",
    "parsed_type",
    # Issues and errors
    "ErrorMap",
    "Issue",
    "RawIssue",
    "SchemaDefinitionError",
    "ValidationError",
    "find_validation_error",
    "finalize_issue",
    "finalize_issues",
    "resolve_message",
    # Formatting
    "ErrorTree",
    "FlattenedError",
    "flatten_error",
    "format_error",
    "prettify_error",
    "to_dot_path",
    "treeify_error",
    # Parse state
    "ParseContext",
    "ParsePayload",
    "RefinementContext",
    # Internals
    "UNSET",
    "SchemaInternals",
    "to_error_map",
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
