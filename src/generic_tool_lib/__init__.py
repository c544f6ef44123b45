"""Generic Tool Library - Typed Python functions as schema-validated Gemini tools."""

from .llm_core import (
    Tool,
    FunctionTool,
    FunctionToolConfig,
    LlmRequest,
    ToolContext,
    ToolCallDispatcher,
    ToolCallRequest,
    ToolCallResult,
    ResolvedSchema,
    function_tool,
    new_function_tool,
    resolve_schema,
    LLMToolError,
    SchemaError,
    DuplicateToolError,
    ConversionError,
    ArgumentTypeError,
    HandlerFault,
)

__all__ = [
    "Tool",
    "FunctionTool",
    "FunctionToolConfig",
    "LlmRequest",
    "ToolContext",
    "ToolCallDispatcher",
    "ToolCallRequest",
    "ToolCallResult",
    "ResolvedSchema",
    "function_tool",
    "new_function_tool",
    "resolve_schema",
    "LLMToolError",
    "SchemaError",
    "DuplicateToolError",
    "ConversionError",
    "ArgumentTypeError",
    "HandlerFault",
]
