from typing import Callable

import pytest
from pydantic import BaseModel

from generic_tool_lib import FunctionTool, FunctionToolConfig, LlmRequest, ToolContext, new_function_tool


class AddArgs(BaseModel):
    a: int
    b: int


class AddResult(BaseModel):
    sum: int


def add(ctx: ToolContext, args: AddArgs) -> AddResult:
    return AddResult(sum=args.a + args.b)


@pytest.fixture
def add_tool() -> FunctionTool[AddArgs, AddResult]:
    return new_function_tool(FunctionToolConfig(name="add", description="Adds two integers."), add)


@pytest.fixture
def make_add_tool() -> Callable[[str], FunctionTool[AddArgs, AddResult]]:
    def factory(name: str = "add") -> FunctionTool[AddArgs, AddResult]:
        return new_function_tool(FunctionToolConfig(name=name, description=f"{name} tool"), add)

    return factory


@pytest.fixture
def llm_request() -> LlmRequest:
    return LlmRequest(model="gemini-2.5-flash")


@pytest.fixture
def context() -> ToolContext:
    return ToolContext(function_call_id="call_1")
