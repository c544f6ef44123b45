"""Abstract tool contract shared by every tool kind that can join a request."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from google.genai import types

from ..context import ToolContext

if TYPE_CHECKING:
    from ..request import LlmRequest


class Tool(ABC):
    """
    A named, described callable exposed to a model request pipeline.

    Implementations must be immutable once built so that one instance can be
    registered into many requests and invoked concurrently.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @abstractmethod
    def declaration(self) -> Optional[types.FunctionDeclaration]:
        """Builds the provider-facing declaration, or None if the tool has nothing to declare."""
        pass

    @abstractmethod
    def register_into(self, request: LlmRequest) -> None:
        """Adds the tool and its declaration to an outgoing request."""
        pass

    @abstractmethod
    def invoke(self, context: ToolContext, args: Any) -> Dict[str, Any]:
        """Runs the tool with the untyped arguments the model produced."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
