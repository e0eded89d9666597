"""
Tools for the Workspace Assistant.

This package contains the default tool definitions and the BoundTool
callable built from them for each request.
"""

from workspace_assistant.plugins.tools.bound_tool import BoundTool
from workspace_assistant.plugins.tools.definitions import (
    DEFAULT_TOOL_DEFINITIONS,
    default_catalog,
)

__all__ = ["BoundTool", "DEFAULT_TOOL_DEFINITIONS", "default_catalog"]
