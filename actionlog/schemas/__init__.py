"""Pluggable schema validation."""

from actionlog.schemas.compiler import PydanticSchemaCompiler, SchemaCompiler, Validator

__all__ = [
    "PydanticSchemaCompiler",
    "SchemaCompiler",
    "Validator",
]
