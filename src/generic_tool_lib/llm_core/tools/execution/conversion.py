"""Schema-checked conversion between untyped bags and a handler's typed values."""

from collections.abc import Mapping
from typing import Any, Dict, Optional

from jsonschema import ValidationError as SchemaViolation
from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from ...exceptions import ConversionError
from ...exceptions.exceptions import ConversionStage
from ..schema import ResolvedSchema


def convert_to_typed(
    args: Mapping[str, Any],
    schema: Optional[ResolvedSchema],
    adapter: TypeAdapter[Any],
    *,
    tool_name: Optional[str] = None,
) -> Any:
    """
    Converts an argument bag into the handler's input type.

    The bag is first validated against the resolved schema, then mapped onto
    the type with pydantic, which also fills in defaults.

    Args:
        args: Arguments as produced by the model.
        schema: Resolved input schema, or None to skip schema validation.
        adapter: Adapter for the handler's input type.
        tool_name: Name of the tool, for error messages.

    Returns:
        The typed input value.

    Raises:
        ConversionError: If the bag violates the schema or cannot be mapped onto the type.
    """
    bag = dict(args)
    if schema is not None:
        _check(schema, bag, "input", tool_name)

    try:
        return adapter.validate_python(bag)
    except ValidationError as e:
        raise ConversionError(_format_pydantic(e), stage="input", tool_name=tool_name) from e


def convert_from_typed(
    output: Any,
    schema: Optional[ResolvedSchema],
    adapter: TypeAdapter[Any],
    *,
    tool_name: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Converts a handler's typed output back into a result bag.

    Args:
        output: The value the handler returned.
        schema: Resolved output schema, or None to skip schema validation.
        adapter: Adapter for the handler's output type.
        tool_name: Name of the tool, for error messages.

    Returns:
        A JSON-compatible dictionary.

    Raises:
        ConversionError: If the value cannot be serialized to a JSON object or violates the schema.
    """
    try:
        bag = adapter.dump_python(output, mode="json", by_alias=True, warnings="error")
    except (PydanticSerializationError, ValueError, TypeError) as e:
        raise ConversionError(f"cannot serialize {type(output).__name__}: {e}", stage="output", tool_name=tool_name) from e

    if not isinstance(bag, dict):
        raise ConversionError(
            f"result must serialize to a JSON object, got {type(bag).__name__}", stage="output", tool_name=tool_name
        )

    if schema is not None:
        _check(schema, bag, "output", tool_name)
    return bag


def _check(schema: ResolvedSchema, instance: Any, stage: ConversionStage, tool_name: Optional[str]) -> None:
    try:
        schema.validate(instance)
    except SchemaViolation as e:
        raise ConversionError(f"{e.message} (at {e.json_path})", stage=stage, tool_name=tool_name) from e


def _format_pydantic(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ())) or "<root>"
        parts.append(f"{location}: {item.get('msg', '')}")
    return "; ".join(parts)
