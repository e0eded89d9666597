"""
MongoDB implementation of the conversation repository.

Stores the workspace/user conversation pointers, chat threads, messages,
response streams and the observability sinks (request outcome logs and
tool audit events).
"""
import logging
import re
import uuid
from datetime import datetime
from typing import Dict, List, Optional

from workspace_assistant.domains.conversation import (
    Conversation,
    Message,
    MessageRole,
    StreamState,
    StreamStatus,
    utc_now,
)
from workspace_assistant.domains.monitoring import RequestOutcomeLog, ToolAuditEvent
from workspace_assistant.interfaces.providers.data_storage import DataStorageProvider
from workspace_assistant.interfaces.repositories.conversation import (
    ConversationRepository,
)

logger = logging.getLogger(__name__)


class MongoConversationRepository(ConversationRepository):
    """MongoDB implementation of ConversationRepository."""

    def __init__(self, db_adapter: DataStorageProvider):
        """Initialize the repository and ensure collections and indexes.

        Args:
            db_adapter: MongoDB adapter
        """
        self.db = db_adapter
        self.conversations_collection = "assistant_conversations"
        self.chats_collection = "chat_conversations"
        self.messages_collection = "assistant_messages"
        self.counters_collection = "assistant_message_counters"
        self.streams_collection = "assistant_streams"
        self.request_logs_collection = "assistant_request_logs"
        self.tool_audit_collection = "assistant_tool_audit_events"

        for name in (
            self.conversations_collection,
            self.chats_collection,
            self.messages_collection,
            self.counters_collection,
            self.streams_collection,
            self.request_logs_collection,
            self.tool_audit_collection,
        ):
            self.db.create_collection(name)

        self.db.create_index(
            self.conversations_collection,
            [("workspace_id", 1), ("user_id", 1)],
            unique=True,
        )
        self.db.create_index(
            self.conversations_collection, [("conversation_id", 1)], unique=True
        )
        self.db.create_index(self.chats_collection, [("external_id", 1)])
        self.db.create_index(
            self.messages_collection, [("conversation_id", 1), ("seq", 1)]
        )
        self.db.create_index(
            self.streams_collection, [("conversation_id", 1), ("created_at", -1)]
        )
        self.db.create_index(self.request_logs_collection, [("timestamp", -1)])
        self.db.create_index(
            self.tool_audit_collection,
            [("workspace_id", 1), ("user_id", 1), ("timestamp", -1)],
        )

    # Chat threads

    async def create_chat_conversation(
        self, external_id: str, title: Optional[str] = None
    ) -> str:
        conversation_id = str(uuid.uuid4())
        self.db.insert_one(
            self.chats_collection,
            {
                "_id": conversation_id,
                "external_id": external_id,
                "title": title,
                "created_at": utc_now(),
            },
        )
        return conversation_id

    async def list_chat_conversations(self, external_id_prefix: str) -> List[Dict]:
        docs = self.db.find(
            self.chats_collection,
            {"external_id": {"$regex": f"^{re.escape(external_id_prefix)}"}},
            sort=[("created_at", -1)],
        )
        return [
            {
                "conversation_id": doc["_id"],
                "external_id": doc["external_id"],
                "title": doc.get("title"),
                "created_at": doc.get("created_at"),
            }
            for doc in docs
        ]

    # Conversation pointers

    @staticmethod
    def _to_conversation(doc: Optional[Dict]) -> Optional[Conversation]:
        if not doc:
            return None
        return Conversation(
            conversation_id=doc["conversation_id"],
            workspace_id=doc["workspace_id"],
            user_id=doc["user_id"],
            last_message_at=doc["last_message_at"],
        )

    async def get_conversation(self, conversation_id: str) -> Optional[Conversation]:
        doc = self.db.find_one(
            self.conversations_collection, {"conversation_id": conversation_id}
        )
        return self._to_conversation(doc)

    async def get_by_workspace_and_user(
        self, workspace_id: str, user_id: str
    ) -> Optional[Conversation]:
        doc = self.db.find_one(
            self.conversations_collection,
            {"workspace_id": workspace_id, "user_id": user_id},
        )
        return self._to_conversation(doc)

    async def upsert_conversation(
        self,
        workspace_id: str,
        user_id: str,
        conversation_id: str,
        last_message_at: datetime,
    ) -> None:
        self.db.update_one(
            self.conversations_collection,
            {"workspace_id": workspace_id, "user_id": user_id},
            {
                "$set": {
                    "conversation_id": conversation_id,
                    "last_message_at": last_message_at,
                }
            },
            upsert=True,
        )

    # Messages

    def _next_seq(self, conversation_id: str) -> int:
        counter = self.db.find_one_and_update(
            self.counters_collection,
            {"_id": conversation_id},
            {"$inc": {"seq": 1}},
            upsert=True,
        )
        return int(counter["seq"])

    async def add_message(
        self, conversation_id: str, role: MessageRole, content: str
    ) -> Message:
        message = Message(
            conversation_id=conversation_id,
            role=role,
            content=content,
            seq=self._next_seq(conversation_id),
        )
        doc = message.model_dump()
        doc["role"] = message.role.value
        self.db.insert_one(self.messages_collection, doc)
        return message

    async def list_messages(self, conversation_id: str) -> List[Message]:
        docs = self.db.find(
            self.messages_collection,
            {"conversation_id": conversation_id},
            sort=[("seq", 1)],
        )
        return [
            Message(
                conversation_id=doc["conversation_id"],
                role=doc["role"],
                content=doc["content"],
                seq=doc["seq"],
                created_at=doc["created_at"],
            )
            for doc in docs
        ]

    # Streams

    async def create_stream(self, conversation_id: str) -> str:
        stream = StreamState(
            stream_id=str(uuid.uuid4()), conversation_id=conversation_id
        )
        doc = stream.model_dump()
        doc["status"] = stream.status.value
        doc["_id"] = stream.stream_id
        self.db.insert_one(self.streams_collection, doc)
        return stream.stream_id

    async def finish_stream(self, stream_id: str) -> None:
        self.db.update_one(
            self.streams_collection,
            {"_id": stream_id, "status": StreamStatus.STREAMING.value},
            {
                "$set": {
                    "status": StreamStatus.FINISHED.value,
                    "finished_at": utc_now(),
                }
            },
        )

    async def abort_stream(self, conversation_id: str, reason: str) -> int:
        return self.db.update_many(
            self.streams_collection,
            {
                "conversation_id": conversation_id,
                "status": StreamStatus.STREAMING.value,
            },
            {
                "$set": {
                    "status": StreamStatus.ABORTED.value,
                    "finished_at": utc_now(),
                    "abort_reason": reason,
                }
            },
        )

    async def get_stream(self, conversation_id: str) -> Optional[StreamState]:
        doc = self.db.find_one(
            self.streams_collection,
            {"conversation_id": conversation_id},
            sort=[("created_at", -1)],
        )
        if not doc:
            return None
        doc.pop("_id", None)
        return StreamState(**doc)

    # Observability sinks

    async def insert_request_log(self, log: RequestOutcomeLog) -> None:
        doc = log.model_dump()
        doc["outcome"] = log.outcome.value
        self.db.insert_one(self.request_logs_collection, doc)

    async def insert_tool_audit_event(self, event: ToolAuditEvent) -> None:
        doc = event.model_dump()
        doc["outcome"] = event.outcome.value
        self.db.insert_one(self.tool_audit_collection, doc)

    async def list_recent_tool_events(
        self, workspace_id: str, user_id: str, limit: int = 10
    ) -> List[ToolAuditEvent]:
        docs = self.db.find(
            self.tool_audit_collection,
            {"workspace_id": workspace_id, "user_id": user_id},
            sort=[("timestamp", -1)],
            limit=limit,
        )
        events = []
        for doc in docs:
            doc.pop("_id", None)
            events.append(ToolAuditEvent(**doc))
        return events

