from abc import ABC, abstractmethod
from typing import List, Optional

from workspace_assistant.domains.conversation import Message, StreamState
from workspace_assistant.domains.responses import SendMessageResult


class AssistantService(ABC):
    """Interface for the conversation orchestrator."""

    @abstractmethod
    async def send_message(
        self,
        conversation_id: str,
        message: str,
        workspace_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> SendMessageResult:
        """Answer one user message within a conversation."""
        pass

    @abstractmethod
    async def create_conversation(
        self,
        workspace_id: str,
        user_id: str,
        title: Optional[str] = None,
        force_new: bool = False,
    ) -> str:
        """Return the conversation id for a workspace/user pair."""
        pass

    @abstractmethod
    async def list_conversations(self, workspace_id: str, user_id: str) -> List[dict]:
        """List the chat threads of a workspace/user pair."""
        pass

    @abstractmethod
    async def get_messages(self, conversation_id: str) -> List[Message]:
        """Get the message history of a conversation."""
        pass

    @abstractmethod
    async def get_stream_state(self, conversation_id: str) -> Optional[StreamState]:
        """Get the latest stream state of a conversation."""
        pass

    @abstractmethod
    async def abort_stream(
        self, conversation_id: str, reason: str = "User cancelled"
    ) -> int:
        """Abort any open stream of a conversation."""
        pass
