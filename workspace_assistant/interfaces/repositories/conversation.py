from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from workspace_assistant.domains.conversation import (
    Conversation,
    Message,
    MessageRole,
    StreamState,
)
from workspace_assistant.domains.monitoring import RequestOutcomeLog, ToolAuditEvent


class ConversationRepository(ABC):
    """Interface for the conversation/message store and observability sinks."""

    @abstractmethod
    async def create_chat_conversation(
        self, external_id: str, title: Optional[str] = None
    ) -> str:
        """Create a chat thread and return its conversation id."""
        pass

    @abstractmethod
    async def list_chat_conversations(self, external_id_prefix: str) -> List[dict]:
        """List chat threads whose external id starts with the prefix."""
        pass

    @abstractmethod
    async def get_conversation(self, conversation_id: str) -> Optional[Conversation]:
        """Look up the workspace/user pointer row for a conversation id."""
        pass

    @abstractmethod
    async def get_by_workspace_and_user(
        self, workspace_id: str, user_id: str
    ) -> Optional[Conversation]:
        """Look up the pointer row for a workspace/user pair."""
        pass

    @abstractmethod
    async def upsert_conversation(
        self,
        workspace_id: str,
        user_id: str,
        conversation_id: str,
        last_message_at: datetime,
    ) -> None:
        """Insert or update the pointer row for a workspace/user pair."""
        pass

    @abstractmethod
    async def add_message(
        self, conversation_id: str, role: MessageRole, content: str
    ) -> Message:
        """Append a message to a conversation."""
        pass

    @abstractmethod
    async def list_messages(self, conversation_id: str) -> List[Message]:
        """List all messages of a conversation in creation order."""
        pass

    @abstractmethod
    async def create_stream(self, conversation_id: str) -> str:
        """Open a stream record and return its id."""
        pass

    @abstractmethod
    async def finish_stream(self, stream_id: str) -> None:
        """Mark a stream as finished."""
        pass

    @abstractmethod
    async def abort_stream(self, conversation_id: str, reason: str) -> int:
        """Abort all open streams of a conversation, returning how many."""
        pass

    @abstractmethod
    async def get_stream(self, conversation_id: str) -> Optional[StreamState]:
        """Return the latest stream of a conversation."""
        pass

    @abstractmethod
    async def insert_request_log(self, log: RequestOutcomeLog) -> None:
        """Persist a request outcome row."""
        pass

    @abstractmethod
    async def insert_tool_audit_event(self, event: ToolAuditEvent) -> None:
        """Persist a tool audit row."""
        pass

    @abstractmethod
    async def list_recent_tool_events(
        self, workspace_id: str, user_id: str, limit: int = 10
    ) -> List[ToolAuditEvent]:
        """Most recent tool audit events of a user in a workspace."""
        pass
