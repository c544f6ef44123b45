"""Invocation context handed to every tool handler."""

from __future__ import annotations

import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class ToolContext:
    """Carries cancellation and deadline information for a single tool call.

    The library never interprets the context itself: it is passed through to
    the handler untouched, and it is the handler's job to check ``cancelled``
    or ``remaining()`` if it does long-running work.

    Attributes:
        invocation_id: Identifier of the surrounding model turn.
        function_call_id: Identifier of the model's function call, if the provider sent one.
        deadline: Absolute ``time.monotonic()`` timestamp after which the call should give up.
        state: Free-form values the pipeline wants to share with handlers.
    """

    invocation_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    function_call_id: Optional[str] = None
    deadline: Optional[float] = None
    state: Dict[str, Any] = field(default_factory=dict)
    _cancel_event: threading.Event = field(default_factory=threading.Event, repr=False, compare=False)

    @classmethod
    def with_timeout(cls, seconds: float, **kwargs: Any) -> "ToolContext":
        """Create a context whose deadline is ``seconds`` from now."""
        return cls(deadline=time.monotonic() + seconds, **kwargs)

    def cancel(self) -> None:
        """Signal the handler that its result is no longer wanted."""
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def remaining(self) -> Optional[float]:
        """Seconds left until the deadline, or None if the context has no deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0.0

    def done(self) -> bool:
        """True once the context was cancelled or its deadline has passed."""
        return self.cancelled or self.expired
