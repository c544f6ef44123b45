"""Tool-related data models."""

from .config import FunctionToolConfig
from .tool_call import ToolCallRequest, ToolCallResult

__all__ = ["FunctionToolConfig", "ToolCallRequest", "ToolCallResult"]
