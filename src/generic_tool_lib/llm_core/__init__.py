"""Public exports for the core tool abstractions and utilities."""

from .context import ToolContext
from .exceptions import (
    LLMToolError,
    ToolRegistrationError,
    DuplicateToolError,
    ToolNotFoundError,
    ToolExecutionError,
    HandlerFault,
    ToolValidationError,
    SchemaError,
    ConversionError,
    ArgumentTypeError,
)
from .logger import get_logger, setup_logging
from .tools import (
    Tool,
    FunctionTool,
    FunctionToolConfig,
    ToolCallRequest,
    ToolCallResult,
    ToolCallDispatcher,
    ResolvedSchema,
    SchemaValidator,
    function_tool,
    infer_schema,
    new_function_tool,
    resolve_schema,
)
from .request import LlmRequest

__all__ = [
    "ToolContext",
    "LLMToolError",
    "ToolRegistrationError",
    "DuplicateToolError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "HandlerFault",
    "ToolValidationError",
    "SchemaError",
    "ConversionError",
    "ArgumentTypeError",
    "get_logger",
    "setup_logging",
    "Tool",
    "FunctionTool",
    "FunctionToolConfig",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolCallDispatcher",
    "ResolvedSchema",
    "SchemaValidator",
    "function_tool",
    "infer_schema",
    "new_function_tool",
    "resolve_schema",
    "LlmRequest",
]
