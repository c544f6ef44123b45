"""Data models for tool calls crossing the model boundary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, cast

from google.genai import types


@dataclass(frozen=True)
class ToolCallRequest:
    """Represents a normalized tool call request from an LLM response."""

    name: str
    arguments: Any
    call_id: Optional[str] = None

    @classmethod
    def from_function_call(cls, function_call: types.FunctionCall) -> "ToolCallRequest":
        """Build a request from a Gemini function call part."""
        return cls(
            name=cast(str, function_call.name),
            arguments=getattr(function_call, "args", None),
            call_id=getattr(function_call, "id", None),
        )


@dataclass(frozen=True)
class ToolCallResult:
    """Represents the outcome of executing a tool call."""

    name: str
    response: Dict[str, Any]
    call_id: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return "error" in self.response
