"""
BoundTool implementation for the Workspace Assistant.

A BoundTool is a ToolDefinition bound to one request's identity and to a
backend. It is the callable the language model loop invokes.
"""
import logging
from typing import Any, Callable, Dict, Optional

from workspace_assistant.domains.intent import ExternalApp
from workspace_assistant.domains.tools import HandlerKind, ToolDefinition
from workspace_assistant.interfaces.plugins.plugins import Tool
from workspace_assistant.interfaces.providers.backend import BackendProvider

logger = logging.getLogger(__name__)


class BoundTool(Tool):
    """Tool callable with workspace/user context injected."""

    def __init__(
        self,
        definition: ToolDefinition,
        backend: BackendProvider,
        workspace_id: str,
        user_id: str,
    ):
        self._definition = definition
        self._backend = backend
        self._workspace_id = workspace_id
        self._user_id = user_id

    @property
    def name(self) -> str:
        return self._definition.name

    @property
    def description(self) -> str:
        return self._definition.description

    @property
    def external_app(self) -> Optional[ExternalApp]:
        return self._definition.external_app

    @property
    def definition(self) -> ToolDefinition:
        return self._definition

    def get_schema(self) -> Dict[str, Any]:
        return self._definition.parameters.to_json_schema()

    def build_arguments(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Merge caller arguments with injected identity; injected values win."""
        args = dict(params)
        if self._definition.context.needs_workspace_id:
            args["workspaceId"] = self._workspace_id
        if self._definition.context.needs_user_id:
            args["userId"] = self._user_id
        return args

    def _dispatcher(self) -> Callable[[str, Dict[str, Any]], Any]:
        kind = self._definition.handler_kind
        if kind == HandlerKind.READ:
            return self._backend.run_query
        if kind == HandlerKind.WRITE:
            return self._backend.run_mutation
        return self._backend.run_action

    async def execute(self, **params) -> Any:
        """Dispatch to the backend and return its result unchanged."""
        args = self.build_arguments(params)
        logger.info(
            f"Executing tool '{self.name}' ({self._definition.handler_kind.value})"
        )
        logger.debug(f"Tool '{self.name}' args: {args}")
        return await self._dispatcher()(self._definition.handler_binding, args)
