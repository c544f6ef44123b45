"""
Custom exception classes for the tool system.

This module defines the hierarchy of exceptions raised while building a tool
from a typed handler, registering it into a request and invoking it with
arguments produced by a model.
"""

from typing import Literal, Optional

SchemaSide = Literal["input", "output"]
ConversionStage = Literal["input", "output"]


class LLMToolError(Exception):
    """Base exception for all tool-related errors."""

    pass


class ToolRegistrationError(LLMToolError):
    """Raised when there is an error registering a tool."""

    pass


class DuplicateToolError(ToolRegistrationError):
    """Raised when a request already holds a tool with the same name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"duplicate tool: {name!r}")


class ToolNotFoundError(LLMToolError):
    """Raised when a requested tool is not found in the request."""

    pass


class ToolExecutionError(LLMToolError):
    """Raised when a tool fails during execution."""

    pass


class HandlerFault(ToolExecutionError):
    """Raised when a handler raises instead of encoding its failure in the output."""

    def __init__(self, tool_name: str, error: BaseException) -> None:
        self.tool_name = tool_name
        super().__init__(f"handler of tool {tool_name!r} raised {type(error).__name__}: {error}")


class ToolValidationError(LLMToolError):
    """Raised when tool parameters or definition are invalid."""

    pass


class SchemaError(ToolValidationError):
    """Raised when a schema is malformed or cannot be inferred from a type.

    Attributes:
        side: Which schema of the tool failed, if known.
    """

    def __init__(self, message: str, side: Optional[SchemaSide] = None) -> None:
        self.side = side
        super().__init__(message)


class ConversionError(ToolValidationError):
    """Raised when an argument or result bag does not match its resolved schema.

    Attributes:
        stage: ``"input"`` when converting arguments, ``"output"`` when converting the result.
        tool_name: Name of the tool whose invocation failed.
    """

    def __init__(self, message: str, stage: ConversionStage, tool_name: Optional[str] = None) -> None:
        self.stage = stage
        self.tool_name = tool_name
        prefix = f"tool {tool_name!r}: " if tool_name else ""
        super().__init__(f"{prefix}{stage} conversion failed: {message}")


class ArgumentTypeError(LLMToolError, TypeError):
    """Raised when a tool is invoked with something other than a string-keyed mapping."""

    pass
