from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FunctionToolConfig(BaseModel):
    """
    Setup-time configuration of a function tool.

    Attributes:
        name: The unique name of the tool within a request.
        description: A human-readable description of what the tool does.
        input_schema: Optional JSON schema for the tool's parameters.
                      If None, it is inferred from the handler's input type.
        output_schema: Optional JSON schema for the tool's result.
                       If None, it is inferred from the handler's output type.
        inline_refs: Declare the schemas with every ``$ref`` inlined, for
                     providers that reject ``$defs``.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    description: str = ""
    input_schema: Optional[Dict[str, Any]] = None
    output_schema: Optional[Dict[str, Any]] = None
    inline_refs: bool = False

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("tool name must not be blank")
        return value
