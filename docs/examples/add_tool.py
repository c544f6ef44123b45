import asyncio

from google.genai import types
from pydantic import BaseModel, Field

from generic_tool_lib import LlmRequest, ToolCallDispatcher, ToolCallRequest, ToolContext, function_tool
from generic_tool_lib.llm_core import setup_logging


class AddArgs(BaseModel):
    a: int = Field(description="First addend")
    b: int = Field(description="Second addend")


class AddResult(BaseModel):
    sum: int


@function_tool
def add(ctx: ToolContext, args: AddArgs) -> AddResult:
    """Adds two integers."""
    return AddResult(sum=args.a + args.b)


async def main() -> None:
    """
    Registers a tool into a request and answers a function call the way a pipeline would.
    """
    setup_logging()

    request = LlmRequest(model="gemini-2.5-flash")
    add.register_into(request)
    print(f"Declared: {[d.name for d in request.declarations()]}")

    # What the model would send back for "What is 2 + 3?"
    call = types.FunctionCall(name="add", args={"a": 2, "b": 3}, id="call_1")

    dispatcher = ToolCallDispatcher(request)
    result = await dispatcher.execute_tool_call_async(ToolCallRequest.from_function_call(call))
    print(f"Response: {result.response}")


if __name__ == "__main__":
    asyncio.run(main())
