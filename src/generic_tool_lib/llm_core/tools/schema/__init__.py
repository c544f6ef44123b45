"""Tool schema inference, resolution and validation."""

from .inference import JsonSchemaMode, SchemaInferrer, build_type_adapter, handler_types, infer_schema, pydantic_inferrer
from .resolver import ResolvedSchema, resolve_schema
from .schema_validator import SchemaValidator

__all__ = [
    "JsonSchemaMode",
    "SchemaInferrer",
    "build_type_adapter",
    "handler_types",
    "infer_schema",
    "pydantic_inferrer",
    "ResolvedSchema",
    "resolve_schema",
    "SchemaValidator",
]
