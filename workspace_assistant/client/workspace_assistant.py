"""
Simplified client interface for interacting with the Workspace Assistant.

This module provides a clean API for end users to interact with
the assistant without dealing with internal implementation details.
"""

import importlib.util
import json
from typing import Any, Dict, List, Optional

from workspace_assistant.domains.conversation import Message, StreamState
from workspace_assistant.domains.responses import SendMessageResult
from workspace_assistant.factories.assistant_factory import WorkspaceAssistantFactory


class WorkspaceAssistant:
    """Simplified client interface for the workspace assistant."""

    def __init__(self, config_path: str = None, config: Dict[str, Any] = None):
        """Initialize the assistant from config file or dictionary.

        Args:
            config_path: Path to configuration file (JSON or Python)
            config: Configuration dictionary
        """
        if not config and not config_path:
            raise ValueError("Either config or config_path must be provided")

        if config_path:
            with open(config_path, "r") as f:
                if config_path.endswith(".json"):
                    config = json.load(f)
                else:
                    # Assume it's a Python file exposing `config`
                    spec = importlib.util.spec_from_file_location("config", config_path)
                    config_module = importlib.util.module_from_spec(spec)
                    spec.loader.exec_module(config_module)
                    config = config_module.config

        self.assistant_service = WorkspaceAssistantFactory.create_from_config(config)

    async def create_conversation(
        self,
        workspace_id: str,
        user_id: str,
        title: Optional[str] = None,
        force_new: bool = False,
    ) -> str:
        """Return the conversation id for a workspace/user pair.

        Args:
            workspace_id: Workspace ID
            user_id: User ID
            title: Optional thread title
            force_new: Start a fresh thread even if one exists
        """
        return await self.assistant_service.create_conversation(
            workspace_id, user_id, title=title, force_new=force_new
        )

    async def send_message(
        self,
        conversation_id: str,
        message: str,
        workspace_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> SendMessageResult:
        """Send a user message and return the assistant's answer.

        Args:
            conversation_id: Conversation ID
            message: User message text
            workspace_id: Optional workspace ID (resolved from the conversation otherwise)
            user_id: Optional user ID (resolved from the conversation otherwise)
        """
        return await self.assistant_service.send_message(
            conversation_id,
            message,
            workspace_id=workspace_id,
            user_id=user_id,
        )

    async def get_messages(self, conversation_id: str) -> List[Message]:
        return await self.assistant_service.get_messages(conversation_id)

    async def list_conversations(self, workspace_id: str, user_id: str) -> List[dict]:
        return await self.assistant_service.list_conversations(workspace_id, user_id)

    async def get_stream_state(self, conversation_id: str) -> Optional[StreamState]:
        return await self.assistant_service.get_stream_state(conversation_id)

    async def abort_stream(
        self, conversation_id: str, reason: str = "User cancelled"
    ) -> int:
        return await self.assistant_service.abort_stream(conversation_id, reason)

    async def flush(self) -> None:
        """Wait for pending outcome and audit log writes."""
        await self.assistant_service.outcome_logger.drain()
        audit_logger = self.assistant_service.tool_executor.audit_logger
        if audit_logger is not None:
            await audit_logger.drain()
