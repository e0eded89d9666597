"""
Model step and response models.

ModelTurn is what the language model returns for one step; the
metadata and result models are what the orchestrator returns to callers.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from workspace_assistant.domains.intent import ExternalApp, QueryIntent

ASSISTANT_METADATA_SCHEMA_VERSION = "v1"


class ModelToolCall(BaseModel):
    """A tool call requested by the model."""

    id: str
    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class ModelTurn(BaseModel):
    """One assistant turn: optional text plus zero or more tool calls."""

    text: str = ""
    tool_calls: List[ModelToolCall] = Field(default_factory=list)
    finish_reason: Optional[str] = None
    usage: Dict[str, int] = Field(default_factory=dict)


class ToolCallRecord(BaseModel):
    """A tool call that was executed during the step loop."""

    step: int
    tool_name: str
    external_app: Optional[ExternalApp] = None


class ToolsMetadata(BaseModel):
    internal_enabled: bool = True
    external_enabled: bool = False
    external_used: bool = False
    connected_apps: List[str] = Field(default_factory=list)


class FallbackMetadata(BaseModel):
    attempted: bool = False
    reason: Optional[str] = None


class AssistantResponseMetadata(BaseModel):
    """Structured description of how a response was produced."""

    schema_version: str = ASSISTANT_METADATA_SCHEMA_VERSION
    assistant_type: str
    execution_path: str
    intent: QueryIntent
    tools: ToolsMetadata = Field(default_factory=ToolsMetadata)
    fallback: FallbackMetadata = Field(default_factory=FallbackMetadata)
    steps: int = 0
    tool_calls: List[ToolCallRecord] = Field(default_factory=list)


class SendMessageResult(BaseModel):
    """Outcome of one send_message request."""

    success: bool
    content: Optional[str] = None
    error: Optional[str] = None
    error_category: Optional[str] = None
    user_action: Optional[str] = None
    metadata: Optional[AssistantResponseMetadata] = None
