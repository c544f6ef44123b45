"""Export the tool-related exception hierarchy used across construction, registration and invocation paths."""

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

__all__ = [
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
]
