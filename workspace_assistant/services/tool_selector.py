"""
Tool selection for a single request.

Internal tools are always exposed; an integration's tools are exposed
only when the query asked for that integration.
"""

import logging
from typing import Iterable, List

from workspace_assistant.domains.intent import ExternalApp
from workspace_assistant.domains.tools import ToolDefinition

logger = logging.getLogger(__name__)


def select_tools(
    catalog: Iterable[ToolDefinition],
    requested_external_apps: Iterable[ExternalApp],
) -> List[ToolDefinition]:
    """Filter the catalog down to the tools usable for this request.

    Catalog order is preserved, with internal tools listed before
    matching external tools.
    """
    definitions = list(catalog)
    app_set = set(requested_external_apps)
    internal = [d for d in definitions if d.external_app is None]
    if not app_set:
        return internal

    external = [
        d
        for d in definitions
        if d.external_app is not None and d.external_app in app_set
    ]
    logger.debug(
        f"Selected {len(internal)} internal and {len(external)} external tools"
    )
    return internal + external


def internal_only(tools: Iterable[ToolDefinition]) -> List[ToolDefinition]:
    """Drop every integration tool from a selection."""
    return [t for t in tools if t.external_app is None]
