from abc import ABC, abstractmethod
from typing import Any, Dict


class BackendProvider(ABC):
    """Interface for the host backend that tool bindings resolve against."""

    @abstractmethod
    async def run_query(self, binding: str, args: Dict[str, Any]) -> Any:
        """Run a non-mutating read."""
        pass

    @abstractmethod
    async def run_mutation(self, binding: str, args: Dict[str, Any]) -> Any:
        """Run a mutating write."""
        pass

    @abstractmethod
    async def run_action(self, binding: str, args: Dict[str, Any]) -> Any:
        """Run a long-running action that may call third-party services."""
        pass
