"""Mutable per-turn request that tools register themselves into."""

from __future__ import annotations

from typing import Dict, List, Optional

from google.genai import types
from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import ToolNotFoundError
from ..logger import get_logger
from ..tools.base import Tool

logger = get_logger(__name__)


class LlmRequest(BaseModel):
    """
    An outgoing model request being assembled for one turn.

    The request owns the name-keyed tool map used to dispatch function calls
    and the generation config whose ``tools`` list carries the declarations
    sent to the model. It is not synchronized: tools must be registered from
    a single thread, or under a lock held by the caller.

    Attributes:
        model: Name of the model the request is meant for.
        contents: Conversation contents to send.
        config: Generation config; created on first registration if missing.
        tools: Registered tools by name. Not serialized.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    model: Optional[str] = None
    contents: List[types.Content] = Field(default_factory=list)
    config: Optional[types.GenerateContentConfig] = None
    tools: Dict[str, Tool] = Field(default_factory=dict, exclude=True)

    def register_tools(self, *tools: Tool) -> None:
        """Registers tools in order, stopping at the first failure.

        Tools registered before the failing one stay registered.

        Raises:
            DuplicateToolError: If a tool name is already taken.
        """
        for tool in tools:
            tool.register_into(self)
        logger.debug(f"Request now holds {len(self.tools)} tool(s): {list(self.tools)}")

    def declarations(self) -> List[types.FunctionDeclaration]:
        """Flattens the function declarations attached to the generation config, in registration order."""
        if self.config is None or not self.config.tools:
            return []

        declarations: List[types.FunctionDeclaration] = []
        for entry in self.config.tools:
            function_declarations = getattr(entry, "function_declarations", None)
            if function_declarations:
                declarations.extend(function_declarations)
        return declarations

    def get_tool(self, name: str) -> Tool:
        """Returns the tool registered under ``name``.

        Raises:
            ToolNotFoundError: If no such tool was registered.
        """
        tool = self.tools.get(name)
        if tool is None:
            raise ToolNotFoundError(f"Tool '{name}' not found in request.")
        return tool

    def __repr__(self) -> str:
        return f"LlmRequest(model={self.model!r}, tools={list(self.tools)!r})"

