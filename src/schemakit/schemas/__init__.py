# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema kinds and their factory functions."""

from schemakit.schemas.arrays import ArraySchema, array, list_, tuple_
from schemakit.schemas.base import ParseResult, Schema
from schemakit.schemas.collections import RecordSchema, SetSchema, record, set_
from schemakit.schemas.custom import CustomSchema, custom
from schemakit.schemas.lazy import LazySchema, lazy
from schemakit.schemas.objects import ObjectSchema, loose_object, object_, strict_object
from schemakit.schemas.pipes import PipeSchema, TransformSchema, pipe, transform
from schemakit.schemas.primitives import (
    AnySchema,
    BoolSchema,
    EnumSchema,
    FloatSchema,
    IntSchema,
    LiteralSchema,
    NeverSchema,
    NoneSchema,
    StringSchema,
    UnknownSchema,
    any_,
    bool_,
    email,
    enum_,
    float_,
    int32,
    int64,
    int_,
    literal,
    never,
    none,
    string,
    unknown,
)
from schemakit.schemas.unions import (
    DiscriminatedUnionSchema,
    IntersectionSchema,
    UnionSchema,
    XorSchema,
    discriminated_union,
    intersection,
    union,
    xor,
)

__all__ = [
    # Base
    "ParseResult",
    "Schema",
    # Leaves
    "AnySchema",
    "BoolSchema",
    "CustomSchema",
    "EnumSchema",
    "FloatSchema",
    "IntSchema",
    "LiteralSchema",
    "NeverSchema",
    "NoneSchema",
    "StringSchema",
    "UnknownSchema",
    "any_",
    "bool_",
    "custom",
    "email",
    "enum_",
    "float_",
    "int32",
    "int64",
    "int_",
    "literal",
    "never",
    "none",
    "string",
    "unknown",
    # Composites
    "ArraySchema",
    "DiscriminatedUnionSchema",
    "IntersectionSchema",
    "LazySchema",
    "ObjectSchema",
    "PipeSchema",
    "RecordSchema",
    "SetSchema",
    "TransformSchema",
    "UnionSchema",
    "XorSchema",
    "array",
    "discriminated_union",
    "intersection",
    "lazy",
    "list_",
    "loose_object",
    "object_",
    "pipe",
    "record",
    "set_",
    "strict_object",
    "transform",
    "tuple_",
    "union",
    "xor",
]
