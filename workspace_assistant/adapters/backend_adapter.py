"""
Handler backend for the Workspace Assistant.

Resolves tool handler bindings to in-process callables. Each binding is
registered under the kind of operation it performs; sync callables are
supported alongside coroutine functions.
"""
import inspect
import logging
from typing import Any, Callable, Dict

from workspace_assistant.domains.tools import HandlerKind
from workspace_assistant.interfaces.providers.backend import BackendProvider

logger = logging.getLogger(__name__)

Handler = Callable[[Dict[str, Any]], Any]


class HandlerBackend(BackendProvider):
    """BackendProvider backed by a binding -> callable registry."""

    def __init__(self):
        self._handlers: Dict[HandlerKind, Dict[str, Handler]] = {
            kind: {} for kind in HandlerKind
        }

    def register(self, kind: HandlerKind, binding: str, handler: Handler) -> None:
        """Register a handler for a binding.

        Raises:
            ValueError: If the handler is not callable
        """
        if not callable(handler):
            raise ValueError(f"Handler for '{binding}' is not callable")
        self._handlers[kind][binding] = handler
        logger.debug(f"Registered {kind.value} handler for '{binding}'")

    def has_handler(self, kind: HandlerKind, binding: str) -> bool:
        return binding in self._handlers[kind]

    async def _dispatch(
        self, kind: HandlerKind, binding: str, args: Dict[str, Any]
    ) -> Any:
        handler = self._handlers[kind].get(binding)
        if handler is None:
            raise LookupError(f"No {kind.value} handler registered for '{binding}'")
        result = handler(args)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def run_query(self, binding: str, args: Dict[str, Any]) -> Any:
        return await self._dispatch(HandlerKind.READ, binding, args)

    async def run_mutation(self, binding: str, args: Dict[str, Any]) -> Any:
        return await self._dispatch(HandlerKind.WRITE, binding, args)

    async def run_action(self, binding: str, args: Dict[str, Any]) -> Any:
        return await self._dispatch(HandlerKind.LONG_RUNNING_ACTION, binding, args)
