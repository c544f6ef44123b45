"""Request object shared by all tools registered for a model turn."""

from .models import LlmRequest

__all__ = ["LlmRequest"]
