"""
Request outcome and tool audit logging.

Both sinks are fire-and-forget: a failed write is logged and dropped,
never surfaced to the request that produced it.
"""

import asyncio
import logging
from typing import Any, Optional, Set

from workspace_assistant.domains.monitoring import (
    RequestOutcome,
    RequestOutcomeLog,
    ToolAuditEvent,
)
from workspace_assistant.interfaces.repositories.conversation import (
    ConversationRepository,
)
from workspace_assistant.services.audit import sanitize_audit_payload

logger = logging.getLogger(__name__)


class _BackgroundWriter:
    """Tracks fire-and-forget write tasks so they can be drained."""

    def __init__(self):
        self._pending: Set[asyncio.Task] = set()

    def _spawn(self, coro) -> Optional[asyncio.Task]:
        try:
            task = asyncio.get_running_loop().create_task(coro)
        except RuntimeError:
            coro.close()
            logger.warning("No running event loop; dropping log write")
            return None
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for all pending writes to settle."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


class RequestOutcomeLogger(_BackgroundWriter):
    """Records latency, outcome and error category per request."""

    def __init__(self, repository: ConversationRepository):
        super().__init__()
        self.repository = repository

    async def log_now(self, entry: RequestOutcomeLog) -> None:
        try:
            await self.repository.insert_request_log(entry)
        except Exception as e:
            logger.error(f"Failed to write request outcome log: {e}")

    def log(
        self,
        workspace_id: str,
        user_id: str,
        conversation_id: str,
        outcome: RequestOutcome,
        duration_ms: int,
        execution_path: str,
        error_category: Optional[str] = None,
    ) -> Optional[asyncio.Task]:
        """Schedule the write and return immediately."""
        try:
            entry = RequestOutcomeLog(
                workspace_id=workspace_id,
                user_id=user_id,
                conversation_id=conversation_id,
                outcome=outcome,
                duration_ms=max(0, int(duration_ms)),
                execution_path=execution_path,
                error_category=error_category,
            )
        except Exception as e:
            logger.error(f"Invalid request outcome log: {e}")
            return None
        logger.info(
            f"Assistant request {outcome.value} in {entry.duration_ms}ms "
            f"(path={execution_path}, category={error_category})"
        )
        return self._spawn(self.log_now(entry))


class ToolAuditLogger(_BackgroundWriter):
    """Records every external integration tool attempt."""

    def __init__(self, repository: ConversationRepository):
        super().__init__()
        self.repository = repository

    async def record_now(self, event: ToolAuditEvent) -> None:
        try:
            await self.repository.insert_tool_audit_event(event)
        except Exception as e:
            logger.error(f"Failed to write tool audit event: {e}")

    def record(
        self,
        workspace_id: str,
        user_id: Optional[str],
        tool_name: str,
        outcome: RequestOutcome,
        execution_path: str,
        toolkit: Optional[str] = None,
        arguments: Any = None,
        error: Optional[str] = None,
        tool_call_id: Optional[str] = None,
    ) -> Optional[asyncio.Task]:
        safe_error = sanitize_audit_payload(error)
        event = ToolAuditEvent(
            workspace_id=workspace_id,
            user_id=user_id,
            tool_name=tool_name,
            toolkit=toolkit,
            arguments_snapshot=sanitize_audit_payload(arguments),
            outcome=outcome,
            error=safe_error if isinstance(safe_error, str) else None,
            execution_path=execution_path,
            tool_call_id=tool_call_id,
        )
        return self._spawn(self.record_now(event))
