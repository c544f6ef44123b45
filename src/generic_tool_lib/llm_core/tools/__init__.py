from .base import Tool
from .models import FunctionToolConfig, ToolCallRequest, ToolCallResult
from .schema import ResolvedSchema, SchemaValidator, infer_schema, resolve_schema
from .function_tool import FunctionTool, function_tool, new_function_tool
from .execution import ToolCallDispatcher, convert_from_typed, convert_to_typed

__all__ = [
    "Tool",
    "FunctionToolConfig",
    "ToolCallRequest",
    "ToolCallResult",
    "ResolvedSchema",
    "SchemaValidator",
    "infer_schema",
    "resolve_schema",
    "FunctionTool",
    "function_tool",
    "new_function_tool",
    "ToolCallDispatcher",
    "convert_from_typed",
    "convert_to_typed",
]
