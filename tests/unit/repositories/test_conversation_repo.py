"""
Tests for the MongoDB conversation repository.
"""

import pytest

from workspace_assistant.domains.conversation import MessageRole, StreamStatus, utc_now
from workspace_assistant.domains.monitoring import (
    RequestOutcome,
    RequestOutcomeLog,
    ToolAuditEvent,
)


class TestMongoConversationRepository:
    """Test suite for MongoConversationRepository."""

    def test_init_creates_collections(self, conversation_repository):
        names = conversation_repository.db.db.list_collection_names()
        for name in (
            "assistant_conversations",
            "chat_conversations",
            "assistant_messages",
            "assistant_streams",
            "assistant_request_logs",
            "assistant_tool_audit_events",
        ):
            assert name in names

    @pytest.mark.asyncio
    async def test_chat_conversations_by_prefix(self, conversation_repository):
        a = await conversation_repository.create_chat_conversation(
            "workspace_w_user_u_1", "Chat"
        )
        await conversation_repository.create_chat_conversation("workspace_w_user_v_1")
        threads = await conversation_repository.list_chat_conversations(
            "workspace_w_user_u_"
        )
        assert [t["conversation_id"] for t in threads] == [a]
        assert threads[0]["title"] == "Chat"

    @pytest.mark.asyncio
    async def test_prefix_is_literal(self, conversation_repository):
        await conversation_repository.create_chat_conversation("workspaceXw")
        assert await conversation_repository.list_chat_conversations("workspace.w") == []

    @pytest.mark.asyncio
    async def test_upsert_and_lookup_pointer(self, conversation_repository):
        assert await conversation_repository.get_conversation("c1") is None

        await conversation_repository.upsert_conversation("ws1", "u1", "c1", utc_now())
        await conversation_repository.upsert_conversation("ws1", "u1", "c2", utc_now())

        assert await conversation_repository.get_conversation("c1") is None
        conversation = await conversation_repository.get_conversation("c2")
        assert (conversation.workspace_id, conversation.user_id) == ("ws1", "u1")
        pointer = await conversation_repository.get_by_workspace_and_user("ws1", "u1")
        assert pointer.conversation_id == "c2"
        assert await conversation_repository.get_by_workspace_and_user("ws1", "u2") is None

    @pytest.mark.asyncio
    async def test_messages_are_ordered_per_conversation(self, conversation_repository):
        await conversation_repository.add_message("c1", MessageRole.USER, "one")
        await conversation_repository.add_message("c2", MessageRole.USER, "other")
        second = await conversation_repository.add_message(
            "c1", MessageRole.ASSISTANT, "two"
        )
        assert second.seq == 2

        messages = await conversation_repository.list_messages("c1")
        assert [(m.seq, m.role, m.content) for m in messages] == [
            (1, MessageRole.USER, "one"),
            (2, MessageRole.ASSISTANT, "two"),
        ]
        assert len(await conversation_repository.list_messages("c2")) == 1

    @pytest.mark.asyncio
    async def test_stream_lifecycle(self, conversation_repository):
        assert await conversation_repository.get_stream("c1") is None

        stream_id = await conversation_repository.create_stream("c1")
        state = await conversation_repository.get_stream("c1")
        assert state.stream_id == stream_id
        assert state.status == StreamStatus.STREAMING

        await conversation_repository.finish_stream(stream_id)
        state = await conversation_repository.get_stream("c1")
        assert state.status == StreamStatus.FINISHED
        assert state.finished_at is not None

        assert await conversation_repository.abort_stream("c1", "late") == 0

    @pytest.mark.asyncio
    async def test_abort_open_streams(self, conversation_repository):
        await conversation_repository.create_stream("c1")
        assert await conversation_repository.abort_stream("c1", "User cancelled") == 1
        state = await conversation_repository.get_stream("c1")
        assert state.status == StreamStatus.ABORTED
        assert state.abort_reason == "User cancelled"

    @pytest.mark.asyncio
    async def test_request_log(self, conversation_repository):
        await conversation_repository.insert_request_log(
            RequestOutcomeLog(
                workspace_id="ws1",
                user_id="u1",
                conversation_id="c1",
                outcome=RequestOutcome.SUCCESS,
                duration_ms=42,
                execution_path="workspace-assistant",
            )
        )
        docs = list(conversation_repository.db.db["assistant_request_logs"].find({}))
        assert docs[0]["outcome"] == "success"
        assert docs[0]["duration_ms"] == 42

    @pytest.mark.asyncio
    async def test_recent_tool_events(self, conversation_repository):
        for i in range(3):
            await conversation_repository.insert_tool_audit_event(
                ToolAuditEvent(
                    workspace_id="ws1",
                    user_id="u1",
                    tool_name=f"tool{i}",
                    outcome=RequestOutcome.SUCCESS,
                    execution_path="workspace-assistant",
                )
            )
        await conversation_repository.insert_tool_audit_event(
            ToolAuditEvent(
                workspace_id="ws1",
                user_id="u2",
                tool_name="other",
                outcome=RequestOutcome.ERROR,
                execution_path="workspace-assistant",
            )
        )

        events = await conversation_repository.list_recent_tool_events(
            "ws1", "u1", limit=2
        )
        assert len(events) == 2
        assert all(e.user_id == "u1" for e in events)
        assert all(e.outcome == RequestOutcome.SUCCESS for e in events)
