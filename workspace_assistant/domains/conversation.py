"""
Conversation domain models.

A Conversation ties one workspace/user pair to a stable conversation id.
Messages are append-only and owned by their conversation.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MessageRole(str, Enum):
    """Roles persisted in conversation history."""

    USER = "user"
    ASSISTANT = "assistant"


class StreamStatus(str, Enum):
    """Lifecycle of a response stream record."""

    STREAMING = "streaming"
    FINISHED = "finished"
    ABORTED = "aborted"


class Conversation(BaseModel):
    """The (workspace, user) -> conversation pointer row."""

    conversation_id: str = Field(..., description="Stable conversation id")
    workspace_id: str = Field(..., description="Owning workspace")
    user_id: str = Field(..., description="Owning user")
    last_message_at: datetime = Field(default_factory=utc_now)

    @field_validator("conversation_id", "workspace_id", "user_id")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Identifier cannot be empty")
        return v


class Message(BaseModel):
    """A single persisted chat message."""

    conversation_id: str
    role: MessageRole
    content: str
    seq: int = Field(default=0, ge=0, description="Creation order within a conversation")
    created_at: datetime = Field(default_factory=utc_now)


class StreamState(BaseModel):
    """Persisted state of the stream serving one assistant response."""

    stream_id: str
    conversation_id: str
    status: StreamStatus = StreamStatus.STREAMING
    created_at: datetime = Field(default_factory=utc_now)
    finished_at: Optional[datetime] = None
    abort_reason: Optional[str] = None
