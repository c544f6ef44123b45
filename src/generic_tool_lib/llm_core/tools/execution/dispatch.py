"""Dispatch function calls returned by the model to the tools registered in a request."""

from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from ...context import ToolContext
from ...exceptions import HandlerFault, LLMToolError, ToolExecutionError
from ...logger import get_logger
from ..models import ToolCallRequest, ToolCallResult

if TYPE_CHECKING:
    from ...request import LlmRequest

logger = get_logger(__name__)

DEFAULT_TOOL_TIMEOUT = 180.0
INTERNAL_ERROR_MESSAGE = "An internal error occurred during tool execution."


class ToolCallDispatcher:
    """Runs tool calls against the tools registered in a request.

    Tool failures are turned into ``{"error": ...}`` results so the pipeline
    can hand them back to the model. Exceptions raised inside a handler are
    logged and reported with a generic message. Anything that is not an
    ``LLMToolError`` propagates.
    """

    def __init__(
        self,
        request: LlmRequest,
        *,
        tool_timeout: float = DEFAULT_TOOL_TIMEOUT,
        argument_error_formatter: Optional[Callable[[str, Exception], str]] = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            request: Request whose registered tools serve the calls.
            tool_timeout: Timeout in seconds for async execution. Default is 180 seconds.
            argument_error_formatter: Optional formatter for argument parsing errors.
        """
        self._request = request
        self._tool_timeout = tool_timeout
        self._argument_error_formatter = argument_error_formatter or self._default_argument_error

    def execute_tool_call(self, tool_call: ToolCallRequest, context: Optional[ToolContext] = None) -> ToolCallResult:
        """Execute a single tool call synchronously.

        Args:
            tool_call: The tool call request containing name, ID, and arguments.
            context: Context for the handler. A fresh one is created if omitted.

        Returns:
            The result of the tool execution, including any errors.
        """
        context = context or ToolContext(function_call_id=tool_call.call_id)
        try:
            response = self._run(tool_call, context)
        except LLMToolError as exc:
            return self._error_result(tool_call, exc)
        return ToolCallResult(name=tool_call.name, response={"result": response}, call_id=tool_call.call_id)

    async def execute_tool_call_async(
        self, tool_call: ToolCallRequest, context: Optional[ToolContext] = None
    ) -> ToolCallResult:
        """Execute a single tool call in a worker thread with a timeout.

        On timeout the context is cancelled so a handler that watches it can stop.

        Args:
            tool_call: The tool call request containing name, ID, and arguments.
            context: Context for the handler. A fresh one is created if omitted.

        Returns:
            The result of the tool execution, including any errors.
        """
        context = context or ToolContext.with_timeout(self._tool_timeout, function_call_id=tool_call.call_id)
        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(self._run, tool_call, context),
                timeout=self._tool_timeout,
            )
        except asyncio.TimeoutError:
            context.cancel()
            msg = f"Tool execution timed out after {self._tool_timeout} seconds."
            return self._error_result(tool_call, ToolExecutionError(msg))
        except LLMToolError as exc:
            return self._error_result(tool_call, exc)
        return ToolCallResult(name=tool_call.name, response={"result": response}, call_id=tool_call.call_id)

    def _run(self, tool_call: ToolCallRequest, context: ToolContext) -> Dict[str, Any]:
        logger.debug(f"Handling tool call: {tool_call.name} (ID: {tool_call.call_id})")
        tool = self._request.get_tool(tool_call.name)
        function_args = self._normalize_function_args(tool_call.name, tool_call.arguments)

        logger.info(f"Executing tool '{tool_call.name}'...")
        response = tool.invoke(context, function_args)
        logger.info(f"Tool '{tool_call.name}' executed successfully.")
        return response

    def _normalize_function_args(self, tool_name: str, raw_args: Any) -> Any:
        """Normalize tool arguments into a dictionary.

        Handles JSON strings, mappings, or None values. Any other value is
        passed through unchanged so the tool itself rejects it.

        Args:
            tool_name: Name of the tool (for error reporting).
            raw_args: The raw arguments.

        Returns:
            The normalized arguments.

        Raises:
            ToolExecutionError: If a JSON string cannot be parsed into an object.
        """
        if raw_args is None or raw_args == "":
            return {}

        if isinstance(raw_args, str):
            try:
                parsed = json.loads(raw_args)
            except json.JSONDecodeError as exc:
                raise ToolExecutionError(self._argument_error_formatter(tool_name, exc)) from exc

            if parsed is None:
                return {}

            if not isinstance(parsed, dict):
                msg = ValueError("Function arguments must decode to a JSON object.")
                raise ToolExecutionError(self._argument_error_formatter(tool_name, msg))

            return parsed

        return raw_args

    @staticmethod
    def _error_result(tool_call: ToolCallRequest, exc: Exception) -> ToolCallResult:
        if isinstance(exc, HandlerFault):
            # the handler's own error text stays in the log, the model gets a generic message
            logger.error(f"Unexpected error executing tool '{tool_call.name}': {exc}", exc_info=exc)
            msg = INTERNAL_ERROR_MESSAGE
        else:
            msg = str(exc)
            logger.warning(f"Tool call '{tool_call.name}' failed: {msg} ({type(exc).__name__})")
        return ToolCallResult(name=tool_call.name, response={"error": msg}, call_id=tool_call.call_id)

    @staticmethod
    def _default_argument_error(tool_name: str, error: Exception) -> str:
        """Format a default error message for argument parsing failures.

        Args:
            tool_name: Name of the tool.
            error: The exception that occurred.

        Returns:
            A formatted error message string.
        """
        return f"Failed to parse arguments for tool '{tool_name}': {error}"
