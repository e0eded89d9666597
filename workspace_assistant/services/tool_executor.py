"""
Tool executor adapter.

Binds selected tool definitions to a request's identity and invokes
them on behalf of the model loop. Failures propagate to the caller as
ToolExecutionError; nothing is swallowed here.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel

from workspace_assistant.domains.errors import ToolExecutionError
from workspace_assistant.domains.monitoring import RequestOutcome
from workspace_assistant.domains.tools import ToolDefinition
from workspace_assistant.interfaces.providers.backend import BackendProvider
from workspace_assistant.plugins.tools.bound_tool import BoundTool
from workspace_assistant.services.monitoring import ToolAuditLogger

logger = logging.getLogger(__name__)


class ToolInvocationContext(BaseModel):
    """Identity injected into every tool call of one request."""

    workspace_id: str
    user_id: str
    conversation_id: Optional[str] = None
    execution_path: str = "workspace-assistant"


class ToolExecutor:
    """Builds and invokes bound tools for the model loop."""

    def __init__(
        self,
        backend: BackendProvider,
        audit_logger: Optional[ToolAuditLogger] = None,
    ):
        self.backend = backend
        self.audit_logger = audit_logger

    def bind(
        self, definitions: Iterable[ToolDefinition], context: ToolInvocationContext
    ) -> Dict[str, BoundTool]:
        """Create one callable per definition, keyed by tool name."""
        tools = {
            d.name: BoundTool(d, self.backend, context.workspace_id, context.user_id)
            for d in definitions
        }
        logger.debug(f"Bound tools: {list(tools.keys())}")
        return tools

    async def invoke(
        self,
        tools: Dict[str, BoundTool],
        name: str,
        arguments: Dict[str, Any],
        context: ToolInvocationContext,
        call_id: Optional[str] = None,
    ) -> Any:
        """Invoke a bound tool by name and return the raw backend result."""
        tool = tools.get(name)
        if tool is None:
            raise ToolExecutionError(name, "tool is not available for this request")

        try:
            result = await tool.execute(**arguments)
        except Exception as e:
            logger.error(f"Error executing tool '{name}': {e}")
            self._audit(tool, arguments, context, call_id, RequestOutcome.ERROR, str(e))
            raise ToolExecutionError(name, str(e)) from e

        self._audit(tool, arguments, context, call_id, RequestOutcome.SUCCESS)
        return result

    def _audit(
        self,
        tool: BoundTool,
        arguments: Dict[str, Any],
        context: ToolInvocationContext,
        call_id: Optional[str],
        outcome: RequestOutcome,
        error: Optional[str] = None,
    ) -> None:
        if self.audit_logger is None or tool.external_app is None:
            return
        try:
            self.audit_logger.record(
                workspace_id=context.workspace_id,
                user_id=context.user_id,
                tool_name=tool.name,
                toolkit=tool.external_app.value,
                arguments=arguments,
                outcome=outcome,
                error=error,
                execution_path=context.execution_path,
                tool_call_id=call_id,
            )
        except Exception as e:
            logger.error(f"Failed to record tool audit for '{tool.name}': {e}")
