"""
Workspace Assistant - tool-calling AI assistant for team workspaces.

This package classifies user queries, selects internal and external
integration tools, drives a bounded tool-calling loop against the language
model and records the outcome of every request.
"""

# Client interface (main entry point)
from workspace_assistant.client.workspace_assistant import WorkspaceAssistant

# Factory for creating assistant systems
from workspace_assistant.factories.assistant_factory import WorkspaceAssistantFactory

# Core components
from workspace_assistant.services.assistant import AssistantService
from workspace_assistant.services.error_handling import (
    categorize_error,
    format_user_friendly_error,
    handle_assistant_error,
)
from workspace_assistant.services.intent_classifier import classify_query
from workspace_assistant.services.tool_selector import select_tools
from workspace_assistant.plugins.registry import ToolCatalog
from workspace_assistant.plugins.tools.definitions import default_catalog
from workspace_assistant.interfaces.plugins.plugins import Tool

# Package metadata
__all__ = [
    # Main client interfaces
    "WorkspaceAssistant",
    # Factories
    "WorkspaceAssistantFactory",
    # Services
    "AssistantService",
    "categorize_error",
    "format_user_friendly_error",
    "handle_assistant_error",
    "classify_query",
    "select_tools",
    # Tools
    "ToolCatalog",
    "default_catalog",
    "Tool",
]
