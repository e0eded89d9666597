"""
Observability records: request outcomes and external tool audit events.
"""
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from workspace_assistant.domains.conversation import utc_now


class RequestOutcome(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class RequestOutcomeLog(BaseModel):
    """One row per completed assistant request."""

    workspace_id: str
    user_id: str
    conversation_id: str
    outcome: RequestOutcome
    duration_ms: int = Field(..., ge=0)
    execution_path: str
    error_category: Optional[str] = None
    timestamp: datetime = Field(default_factory=utc_now)


class ToolAuditEvent(BaseModel):
    """Audit trail entry for an external integration tool call."""

    workspace_id: str
    user_id: Optional[str] = None
    tool_name: str
    toolkit: Optional[str] = None
    arguments_snapshot: Any = None
    outcome: RequestOutcome
    error: Optional[str] = None
    execution_path: str
    tool_call_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=utc_now)
