"""Adapt a typed Python handler into a schema-validated tool."""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, Dict, Generic, Optional, TypeVar, Union, overload

from google.genai import types
from pydantic import TypeAdapter

from ..context import ToolContext
from ..exceptions import ArgumentTypeError, DuplicateToolError, HandlerFault, SchemaError, ToolValidationError
from ..exceptions.exceptions import SchemaSide
from ..logger import get_logger
from .base import Tool
from .execution.conversion import convert_from_typed, convert_to_typed
from .models import FunctionToolConfig
from .schema import JsonSchemaMode, ResolvedSchema, SchemaInferrer, build_type_adapter, handler_types, resolve_schema

if TYPE_CHECKING:
    from ..request import LlmRequest

logger = get_logger(__name__)

TArgs = TypeVar("TArgs")
TResults = TypeVar("TResults")

# A handler never reports errors through a second return value: failures the
# model should see belong in TResults.
Function = Callable[[ToolContext, TArgs], TResults]

_UNSET: Any = object()


class FunctionTool(Tool, Generic[TArgs, TResults]):
    """
    A tool backed by a typed Python function.

    Built by :func:`new_function_tool`. Once constructed, its configuration,
    schemas and type adapters never change, so a single instance may be
    registered into many requests and invoked from several threads at once.
    """

    __slots__ = ("_config", "_handler", "_input_schema", "_output_schema", "_input_adapter", "_output_adapter")

    def __init__(
        self,
        config: FunctionToolConfig,
        handler: Function[TArgs, TResults],
        input_schema: Optional[ResolvedSchema],
        output_schema: Optional[ResolvedSchema],
        input_adapter: TypeAdapter[TArgs],
        output_adapter: TypeAdapter[TResults],
    ) -> None:
        self._config = config
        self._handler = handler
        self._input_schema = input_schema
        self._output_schema = output_schema
        self._input_adapter = input_adapter
        self._output_adapter = output_adapter

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def description(self) -> str:
        return self._config.description

    @property
    def config(self) -> FunctionToolConfig:
        return self._config

    @property
    def input_schema(self) -> Optional[ResolvedSchema]:
        return self._input_schema

    @property
    def output_schema(self) -> Optional[ResolvedSchema]:
        return self._output_schema

    def declaration(self) -> Optional[types.FunctionDeclaration]:
        """
        Builds the Gemini function declaration for this tool.

        The schemas are declared in raw form, or with references inlined when
        the tool was configured with ``inline_refs``.

        Returns:
            The declaration, or None when the tool has neither an input nor an output schema.
        """
        if self._input_schema is None and self._output_schema is None:
            return None

        return types.FunctionDeclaration(
            name=self.name,
            description=self.description,
            parameters_json_schema=self._render(self._input_schema) if self._input_schema is not None else None,
            response_json_schema=self._render(self._output_schema) if self._output_schema is not None else None,
        )

    def register_into(self, request: LlmRequest) -> None:
        """
        Registers this tool and its declaration into ``request``.

        Each call appends its own ``types.Tool`` entry, so declarations keep
        registration order. The request is not touched when the name is taken.

        Args:
            request: The request being assembled for the current turn.

        Raises:
            DuplicateToolError: If a tool with the same name is already registered.
        """
        name = self.name
        if name in request.tools:
            raise DuplicateToolError(name)

        decl = self.declaration()
        if request.config is None:
            request.config = types.GenerateContentConfig()

        request.tools[name] = self
        if decl is not None:
            tools = list(request.config.tools or [])
            tools.append(types.Tool(function_declarations=[decl]))
            request.config.tools = tools
        logger.info(f"Registered tool '{name}' into request.")

    def invoke(self, context: ToolContext, args: Any) -> Dict[str, Any]:
        """
        Runs the handler with arguments produced by the model.

        Args:
            context: Invocation context passed through to the handler.
            args: The untyped argument bag.

        Returns:
            The handler's result as a JSON-compatible dictionary.

        Raises:
            ArgumentTypeError: If ``args`` is not a string-keyed mapping. The handler is not called.
            ConversionError: If the arguments or the result do not match their schema.
                The handler is not called when the arguments fail.
            HandlerFault: If the handler raised.
        """
        if not isinstance(args, Mapping) or not all(isinstance(key, str) for key in args):
            raise ArgumentTypeError(f"unexpected args type for tool '{self.name}', got: {type(args).__name__}")

        typed_input = convert_to_typed(args, self._input_schema, self._input_adapter, tool_name=self.name)

        logger.debug(f"Invoking handler of tool '{self.name}'.")
        try:
            output = self._handler(context, typed_input)
        except Exception as e:
            raise HandlerFault(self.name, e) from e

        return convert_from_typed(output, self._output_schema, self._output_adapter, tool_name=self.name)

    def _render(self, schema: ResolvedSchema) -> Dict[str, Any]:
        return schema.inlined() if self._config.inline_refs else schema.render()


def new_function_tool(
    config: FunctionToolConfig,
    handler: Function[TArgs, TResults],
    *,
    input_type: Any = _UNSET,
    output_type: Any = _UNSET,
    inferrer: Optional[SchemaInferrer] = None,
) -> FunctionTool[TArgs, TResults]:
    """
    Creates a tool from a name, a description and a typed handler.

    Schemas missing from ``config`` are inferred from the input and output
    types. Those default to the annotations of the handler's second
    parameter and of its return value.

    Args:
        config: Name, description and optional schema overrides.
        handler: ``handler(context, args) -> result``.
        input_type: Type of ``args`` if it should not be read from the handler's annotations.
        output_type: Type of ``result`` if it should not be read from the handler's annotations.
        inferrer: Optional schema inference strategy replacing the pydantic default.

    Returns:
        The immutable tool.

    Raises:
        SchemaError: If either schema cannot be inferred or resolved. ``side`` tells which one.
    """
    if input_type is _UNSET or output_type is _UNSET:
        declared_input, declared_output = handler_types(handler)
        if input_type is _UNSET:
            input_type = declared_input
        if output_type is _UNSET:
            output_type = declared_output

    input_adapter, input_schema = _resolve_side(
        input_type, config.input_schema, "input", "validation", inferrer, config.inline_refs
    )
    output_adapter, output_schema = _resolve_side(
        output_type, config.output_schema, "output", "serialization", inferrer, config.inline_refs
    )

    logger.debug(f"Created function tool '{config.name}'.")
    return FunctionTool(
        config=config,
        handler=handler,
        input_schema=input_schema,
        output_schema=output_schema,
        input_adapter=input_adapter,
        output_adapter=output_adapter,
    )


def _resolve_side(
    type_: Any,
    explicit: Optional[Dict[str, Any]],
    side: SchemaSide,
    mode: JsonSchemaMode,
    inferrer: Optional[SchemaInferrer],
    inline_refs: bool,
) -> tuple[TypeAdapter[Any], ResolvedSchema]:
    try:
        adapter = build_type_adapter(type_)
        schema = resolve_schema(type_, explicit, mode=mode, inferrer=inferrer)
    except SchemaError as e:
        raise SchemaError(f"failed to infer {side} schema: {e}", side=side) from e
    if inline_refs and schema.recursive:
        raise SchemaError(f"{side} schema is recursive and cannot be inlined", side=side)
    return adapter, schema


@overload
def function_tool(func: Callable[..., Any], /) -> FunctionTool[Any, Any]: ...


@overload
def function_tool(
    name: Optional[str] = None,
    /,
    *,
    description: Optional[str] = None,
    input_schema: Optional[Dict[str, Any]] = None,
    output_schema: Optional[Dict[str, Any]] = None,
    inline_refs: bool = False,
) -> Callable[[Callable[..., Any]], FunctionTool[Any, Any]]: ...


def function_tool(
    name_or_func: Union[str, Callable[..., Any], None] = None,
    /,
    *,
    description: Optional[str] = None,
    input_schema: Optional[Dict[str, Any]] = None,
    output_schema: Optional[Dict[str, Any]] = None,
    inline_refs: bool = False,
) -> Any:
    """A decorator to turn a typed handler into a tool.

    Usable bare (``@function_tool``) or with arguments (``@function_tool("add")``).
    The name defaults to the function name and the description to its docstring.

    Raises:
        ToolValidationError: If no description is given and the function has no docstring.
        SchemaError: If a schema cannot be inferred or resolved.
    """

    def decorate(func: Callable[..., Any]) -> FunctionTool[Any, Any]:
        tool_name = name_or_func if isinstance(name_or_func, str) else func.__name__
        tool_description = description if description is not None else _get_docstring_from_func(func, tool_name)
        config = FunctionToolConfig(
            name=tool_name,
            description=tool_description,
            input_schema=input_schema,
            output_schema=output_schema,
            inline_refs=inline_refs,
        )
        return new_function_tool(config, func)

    if callable(name_or_func):
        return decorate(name_or_func)
    return decorate


def _get_docstring_from_func(func: Callable[..., Any], tool_name: str) -> str:
    doc = inspect.getdoc(func)
    if not doc:
        msg = f"Tool '{tool_name}' missing docstring. LLMs need a description of what the tool does."
        raise ToolValidationError(msg)
    return doc
