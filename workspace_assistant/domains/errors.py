"""
Error domain models for the assistant.

Categories are derived per error and drive the retry/fallback policy;
they are recorded on outcome logs but never persisted as entities.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AssistantErrorCategory(str, Enum):
    """Fixed taxonomy of assistant failures."""

    RATE_LIMIT = "rate_limit"
    TOOL_FAILURE = "tool_failure"
    CONTEXT_TOO_LARGE = "context_too_large"
    AUTHENTICATION = "authentication"
    UNKNOWN = "unknown"


class FallbackMode(str, Enum):
    INTERNAL_ONLY = "internal_only"


class UserAction(str, Enum):
    RECONNECT_INTEGRATION = "reconnect_integration"


class ErrorAdjustments(BaseModel):
    """Changes the caller should apply before retrying."""

    max_messages: Optional[int] = Field(default=None, gt=0)


class ErrorContext(BaseModel):
    """What the error policy knows about the failing request."""

    query: str = ""
    attempt_count: int = Field(default=0, ge=0)


class ErrorHandlingResult(BaseModel):
    """Caller-actionable decision for one failure."""

    should_retry: bool
    message: str
    category: AssistantErrorCategory = AssistantErrorCategory.UNKNOWN
    fallback_mode: Optional[FallbackMode] = None
    user_action: Optional[UserAction] = None
    adjustments: Optional[ErrorAdjustments] = None


class MissingContextError(Exception):
    """Raised when the workspace or user of a conversation cannot be resolved."""

    USER_MESSAGE = "Missing workspace or user context for this conversation."

    def __init__(self, conversation_id: str):
        self.conversation_id = conversation_id
        super().__init__(
            f"Could not resolve workspace/user for conversation {conversation_id}"
        )


class ToolExecutionError(Exception):
    """A tool call failed while being dispatched to the backend."""

    def __init__(self, tool_name: str, reason: str):
        self.tool_name = tool_name
        self.reason = reason
        super().__init__(f"Tool '{tool_name}' failed to execute: {reason}")
