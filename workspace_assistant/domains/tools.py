"""
Tool definition domain models.

Tools are declared as data: a name, a schema shown to the language model,
a handler kind and an opaque binding the backend knows how to invoke.
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from workspace_assistant.domains.intent import ExternalApp


class HandlerKind(str, Enum):
    """How a tool reaches the backend."""

    READ = "read"
    WRITE = "write"
    LONG_RUNNING_ACTION = "long_running_action"


class ContextRequirements(BaseModel):
    """Identity fields injected into every call of a tool."""

    model_config = ConfigDict(frozen=True)

    needs_workspace_id: bool = False
    needs_user_id: bool = False


class ToolParameters(BaseModel):
    """JSON-Schema-like declaration of a tool's arguments."""

    model_config = ConfigDict(frozen=True)

    properties: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    required: List[str] = Field(default_factory=list)

    @field_validator("properties")
    @classmethod
    def properties_have_type(
        cls, v: Dict[str, Dict[str, Any]]
    ) -> Dict[str, Dict[str, Any]]:
        for name, prop in v.items():
            if "type" not in prop:
                raise ValueError(f"Parameter '{name}' must declare a type")
        return v

    @field_validator("required")
    @classmethod
    def required_are_declared(cls, v: List[str], info) -> List[str]:
        declared = (info.data or {}).get("properties", {})
        missing = [name for name in v if name not in declared]
        if missing:
            raise ValueError(f"Required parameters are not declared: {missing}")
        return v

    def to_json_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {k: dict(v) for k, v in self.properties.items()},
            "required": list(self.required),
            "additionalProperties": False,
        }


class ToolDefinition(BaseModel):
    """Static descriptor of one tool in the catalog."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Unique tool name")
    description: str = Field(..., description="Description shown to the model")
    parameters: ToolParameters = Field(default_factory=ToolParameters)
    handler_kind: HandlerKind = Field(..., description="Backend operation kind")
    handler_binding: str = Field(
        ..., description="Opaque reference to the backend operation"
    )
    context: ContextRequirements = Field(default_factory=ContextRequirements)
    external_app: Optional[ExternalApp] = Field(
        default=None, description="Integration this tool belongs to, if any"
    )

    @field_validator("name", "description", "handler_binding")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v

    @property
    def is_external(self) -> bool:
        return self.external_app is not None

    def to_openai_tool(self) -> Dict[str, Any]:
        """Render the function declaration sent to the model provider."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters.to_json_schema(),
            },
        }
