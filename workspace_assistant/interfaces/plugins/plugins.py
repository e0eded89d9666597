"""
Tool interfaces.

These interfaces define the contracts for the callables exposed to the
language model and the catalog they are built from.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional

from workspace_assistant.domains.intent import ExternalApp
from workspace_assistant.domains.tools import ToolDefinition


class Tool(ABC):
    """Interface for tools that can be called by the language model."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the name of the tool."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Get the description of the tool."""
        pass

    @property
    @abstractmethod
    def external_app(self) -> Optional[ExternalApp]:
        """Get the integration this tool belongs to, if any."""
        pass

    @abstractmethod
    def get_schema(self) -> Dict[str, Any]:
        """Get the schema for the tool parameters."""
        pass

    @abstractmethod
    async def execute(self, **params) -> Any:
        """Execute the tool with the given parameters."""
        pass


class ToolCatalog(ABC):
    """Interface for the read-only tool catalog."""

    @property
    @abstractmethod
    def definitions(self) -> List[ToolDefinition]:
        """All tool definitions in catalog order."""
        pass

    @abstractmethod
    def get(self, name: str) -> Optional[ToolDefinition]:
        """Get a tool definition by name."""
        pass

    @abstractmethod
    def names(self) -> List[str]:
        """List all tool names."""
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[ToolDefinition]:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass
