import json
from dataclasses import dataclass
from typing import Any, Dict

import pytest
from google.genai import types
from pydantic import BaseModel, ValidationError

from generic_tool_lib import (
    FunctionTool,
    FunctionToolConfig,
    SchemaError,
    ToolContext,
    function_tool,
    new_function_tool,
)
from generic_tool_lib.llm_core import ToolValidationError


class Location(BaseModel):
    lat: float
    lon: float


class WeatherQuery(BaseModel):
    city: str
    where: Location
    days: int = 1


class Forecast(BaseModel):
    summary: str


@dataclass
class Point:
    x: int
    y: int


class Opaque:
    pass


def weather(ctx: ToolContext, query: WeatherQuery) -> Forecast:
    return Forecast(summary=f"sunny in {query.city}")


def broken_output(ctx: ToolContext, query: WeatherQuery) -> Opaque:
    return Opaque()


def test_new_function_tool_exposes_name_and_description(add_tool: FunctionTool[Any, Any]) -> None:
    assert add_tool.name == "add"
    assert add_tool.description == "Adds two integers."


def test_declaration_carries_inferred_schemas(add_tool: FunctionTool[Any, Any]) -> None:
    decl = add_tool.declaration()

    assert isinstance(decl, types.FunctionDeclaration)
    assert decl.name == "add"
    assert decl.description == "Adds two integers."

    params = decl.parameters_json_schema
    assert params["type"] == "object"
    assert set(params["properties"]) == {"a", "b"}
    assert params["properties"]["a"]["type"] == "integer"
    assert set(params["required"]) == {"a", "b"}

    response = decl.response_json_schema
    assert response["properties"]["sum"]["type"] == "integer"


def test_explicit_schemas_override_inference() -> None:
    input_schema = {"type": "object", "properties": {"city": {"type": "string"}}, "required": ["city"]}
    output_schema = {"type": "object", "properties": {"summary": {"type": "string"}}}
    tool = new_function_tool(
        FunctionToolConfig(
            name="weather", description="Forecast.", input_schema=input_schema, output_schema=output_schema
        ),
        weather,
    )

    decl = tool.declaration()
    assert decl is not None
    assert decl.parameters_json_schema == input_schema
    assert decl.response_json_schema == output_schema


def test_declaration_inlines_references_when_configured() -> None:
    raw_tool = new_function_tool(FunctionToolConfig(name="weather", description="Forecast."), weather)
    inlined_tool = new_function_tool(
        FunctionToolConfig(name="weather", description="Forecast.", inline_refs=True), weather
    )

    raw_decl = raw_tool.declaration()
    inlined_decl = inlined_tool.declaration()
    assert raw_decl is not None and inlined_decl is not None

    assert "$ref" in json.dumps(raw_decl.parameters_json_schema)
    assert "$ref" not in json.dumps(inlined_decl.parameters_json_schema)
    assert inlined_decl.parameters_json_schema["properties"]["where"]["type"] == "object"


def test_dataclass_types_are_inferred() -> None:
    def move(ctx: ToolContext, point: Point) -> Point:
        return Point(x=point.x + 1, y=point.y)

    tool = new_function_tool(FunctionToolConfig(name="move"), move)
    decl = tool.declaration()

    assert decl is not None
    assert set(decl.parameters_json_schema["properties"]) == {"x", "y"}
    assert decl.description == ""


def test_explicit_types_take_precedence_over_annotations() -> None:
    def untyped(ctx, args):  # type: ignore[no-untyped-def]
        return {"summary": "ok"}

    tool = new_function_tool(
        FunctionToolConfig(name="untyped", description="d"), untyped, input_type=WeatherQuery, output_type=Dict[str, Any]
    )

    assert tool.input_schema is not None
    assert set(tool.input_schema.render()["properties"]) == {"city", "where", "days"}


def test_unannotated_handler_accepts_any_object() -> None:
    def untyped(ctx, args):  # type: ignore[no-untyped-def]
        return args

    tool = new_function_tool(FunctionToolConfig(name="untyped", description="d"), untyped)

    assert tool.input_schema is not None
    assert tool.input_schema.render() == {}


def test_output_inference_failure_names_the_side() -> None:
    with pytest.raises(SchemaError, match="failed to infer output schema") as exc_info:
        new_function_tool(FunctionToolConfig(name="broken", description="d"), broken_output)

    assert exc_info.value.side == "output"


def test_malformed_input_schema_names_the_side() -> None:
    config = FunctionToolConfig(name="weather", description="d", input_schema={"type": "nope"})

    with pytest.raises(SchemaError, match="failed to infer input schema") as exc_info:
        new_function_tool(config, weather)

    assert exc_info.value.side == "input"


TREE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {"label": {"type": "string"}, "children": {"type": "array", "items": {"$ref": "#"}}},
    "required": ["label"],
}


def count_nodes(ctx: ToolContext, tree: Dict[str, Any]) -> Dict[str, int]:
    return {"count": 1 + sum(count_nodes(ctx, child)["count"] for child in tree.get("children", []))}


def test_explicit_recursive_input_schema_is_declared_raw(context: ToolContext) -> None:
    tool = new_function_tool(FunctionToolConfig(name="count", input_schema=TREE_SCHEMA), count_nodes)

    decl = tool.declaration()

    assert decl is not None
    assert decl.parameters_json_schema == TREE_SCHEMA
    assert tool.invoke(context, {"label": "a", "children": [{"label": "b"}, {"label": "c", "children": []}]}) == {
        "count": 3
    }


def test_recursive_schema_cannot_be_inlined() -> None:
    config = FunctionToolConfig(name="count", input_schema=TREE_SCHEMA, inline_refs=True)

    with pytest.raises(SchemaError, match="recursive and cannot be inlined") as exc_info:
        new_function_tool(config, count_nodes)

    assert exc_info.value.side == "input"


def test_handler_with_wrong_arity_is_rejected() -> None:
    def no_context(query: WeatherQuery) -> Forecast:
        return Forecast(summary="")

    with pytest.raises(SchemaError, match="exactly \\(context, args\\)"):
        new_function_tool(FunctionToolConfig(name="bad", description="d"), no_context)  # type: ignore[arg-type]


@pytest.mark.parametrize("name", ["", "   "])
def test_blank_tool_name_is_rejected(name: str) -> None:
    with pytest.raises(ValidationError):
        FunctionToolConfig(name=name, description="d")


def test_config_strips_whitespace_from_name() -> None:
    assert FunctionToolConfig(name="  add ").name == "add"


def test_tool_is_read_only(add_tool: FunctionTool[Any, Any]) -> None:
    with pytest.raises(AttributeError):
        add_tool.name = "other"  # type: ignore[misc]
    with pytest.raises(ValidationError):
        add_tool.config.name = "other"  # type: ignore[misc]


def test_function_tool_decorator_bare() -> None:
    @function_tool
    def get_forecast(ctx: ToolContext, query: WeatherQuery) -> Forecast:
        """Returns the weather forecast for a city."""
        return Forecast(summary="rain")

    assert isinstance(get_forecast, FunctionTool)
    assert get_forecast.name == "get_forecast"
    assert get_forecast.description == "Returns the weather forecast for a city."


def test_function_tool_decorator_with_arguments() -> None:
    @function_tool("forecast", description="Weather lookup.", inline_refs=True)
    def get_forecast(ctx: ToolContext, query: WeatherQuery) -> Forecast:
        return Forecast(summary="rain")

    assert get_forecast.name == "forecast"
    assert get_forecast.description == "Weather lookup."
    assert get_forecast.config.inline_refs is True


def test_function_tool_decorator_requires_description() -> None:
    with pytest.raises(ToolValidationError, match="missing docstring"):

        @function_tool
        def no_doc(ctx: ToolContext, query: WeatherQuery) -> Forecast:
            return Forecast(summary="")
