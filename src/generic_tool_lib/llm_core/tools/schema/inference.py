"""Structural schema inference from Python type annotations."""

import inspect
from typing import Any, Callable, Dict, Literal, Optional, Tuple, get_type_hints

from pydantic import TypeAdapter
from pydantic.errors import PydanticUndefinedAnnotation, PydanticUserError

from ...exceptions import SchemaError
from ...logger import get_logger

logger = get_logger(__name__)

JsonSchemaMode = Literal["validation", "serialization"]

# A strategy turning a type into a raw JSON schema document.
SchemaInferrer = Callable[[Any, JsonSchemaMode], Dict[str, Any]]

_INFERENCE_ERRORS = (PydanticUserError, PydanticUndefinedAnnotation, TypeError)


def build_type_adapter(type_: Any) -> TypeAdapter[Any]:
    """Create the pydantic adapter used to describe and convert values of ``type_``.

    Raises:
        SchemaError: If pydantic cannot build a core schema for the type.
    """
    try:
        return TypeAdapter(type_)
    except _INFERENCE_ERRORS as e:
        raise SchemaError(f"unsupported type {_type_name(type_)}: {e}") from e


def pydantic_inferrer(type_: Any, mode: JsonSchemaMode = "validation") -> Dict[str, Any]:
    """Default inference strategy backed by ``TypeAdapter.json_schema``."""
    adapter = build_type_adapter(type_)
    try:
        return adapter.json_schema(mode=mode)
    except _INFERENCE_ERRORS as e:
        raise SchemaError(f"cannot describe {_type_name(type_)} as JSON schema: {e}") from e


def infer_schema(
    type_: Any, mode: JsonSchemaMode = "validation", inferrer: Optional[SchemaInferrer] = None
) -> Dict[str, Any]:
    """Infer a raw JSON schema from the static shape of ``type_``.

    Args:
        type_: The type to describe (pydantic model, dataclass, TypedDict, builtin, ...).
        mode: ``"validation"`` for values flowing into a handler, ``"serialization"`` for values it returns.
        inferrer: Strategy to use instead of pydantic.

    Returns:
        The raw schema document.

    Raises:
        SchemaError: If the strategy fails or does not produce a JSON object.
    """
    strategy = inferrer or pydantic_inferrer
    try:
        schema = strategy(type_, mode)
    except SchemaError:
        raise
    except Exception as e:
        raise SchemaError(f"schema inference for {_type_name(type_)} failed: {e}") from e

    if not isinstance(schema, dict):
        raise SchemaError(f"schema inference for {_type_name(type_)} returned {type(schema).__name__}, not an object")
    logger.debug(f"Inferred {mode} schema for {_type_name(type_)}.")
    return schema


def handler_types(handler: Callable[..., Any]) -> Tuple[Any, Any]:
    """Read the input and output types a ``handler(context, args) -> result`` declares.

    Missing annotations are reported as ``Any``.

    Raises:
        SchemaError: If the handler does not accept a context and an argument, or its hints cannot be resolved.
    """
    try:
        signature = inspect.signature(handler)
    except (TypeError, ValueError) as e:
        raise SchemaError(f"cannot inspect handler {handler!r}: {e}") from e

    params = [
        p
        for p in signature.parameters.values()
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    if len(params) != 2:
        raise SchemaError(
            f"handler {getattr(handler, '__name__', handler)!r} must take exactly (context, args), "
            f"got {len(params)} positional parameter(s)"
        )

    target = handler if inspect.isroutine(handler) else getattr(type(handler), "__call__", handler)
    try:
        hints = get_type_hints(target)
    except Exception as e:
        raise SchemaError(f"cannot resolve type hints of handler {getattr(handler, '__name__', handler)!r}: {e}") from e

    return hints.get(params[1].name, Any), hints.get("return", Any)


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", None) or repr(type_)
