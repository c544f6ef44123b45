"""Conversion of tool values and dispatch of model function calls."""

from .conversion import convert_from_typed, convert_to_typed
from .dispatch import DEFAULT_TOOL_TIMEOUT, ToolCallDispatcher

__all__ = ["convert_from_typed", "convert_to_typed", "DEFAULT_TOOL_TIMEOUT", "ToolCallDispatcher"]
