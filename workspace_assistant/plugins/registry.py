"""
Tool catalog for the Workspace Assistant.

This module implements the concrete ToolCatalog: an immutable, ordered
collection of tool definitions built once and shared by all requests.
"""

import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from workspace_assistant.domains.tools import ToolDefinition
from workspace_assistant.interfaces.plugins.plugins import (
    ToolCatalog as ToolCatalogInterface,
)

logger = logging.getLogger(__name__)


class ToolCatalog(ToolCatalogInterface):
    """Read-only registry of tool definitions."""

    def __init__(self, definitions: Iterable[ToolDefinition]):
        """Build the catalog, rejecting duplicate tool names."""
        items: Tuple[ToolDefinition, ...] = tuple(definitions)
        seen = set()
        duplicates = []
        for definition in items:
            if definition.name in seen:
                duplicates.append(definition.name)
            seen.add(definition.name)
        if duplicates:
            raise ValueError(f"Duplicate tool names in catalog: {duplicates}")

        self._definitions = items
        self._by_name = {d.name: d for d in items}
        logger.info(f"Tool catalog built with {len(items)} tools")

    @property
    def definitions(self) -> List[ToolDefinition]:
        return list(self._definitions)

    def get(self, name: str) -> Optional[ToolDefinition]:
        return self._by_name.get(name)

    def names(self) -> List[str]:
        return [d.name for d in self._definitions]

    def internal_tools(self) -> List[ToolDefinition]:
        return [d for d in self._definitions if d.external_app is None]

    def external_tools(self) -> List[ToolDefinition]:
        return [d for d in self._definitions if d.external_app is not None]

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name
