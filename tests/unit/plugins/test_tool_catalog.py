"""
Tests for the tool catalog and the default tool definitions.
"""

import pytest

from workspace_assistant.domains.intent import ExternalApp
from workspace_assistant.domains.tools import (
    ContextRequirements,
    HandlerKind,
    ToolDefinition,
)
from workspace_assistant.plugins.registry import ToolCatalog
from workspace_assistant.plugins.tools.definitions import (
    DEFAULT_TOOL_DEFINITIONS,
    EXTERNAL_TOOL_BY_APP,
    EXTERNAL_TOOL_DEFINITIONS,
    INTERNAL_TOOL_DEFINITIONS,
    default_catalog,
)


def _definition(name, external_app=None):
    return ToolDefinition(
        name=name,
        description=f"{name} tool",
        handler_kind=HandlerKind.READ,
        handler_binding=f"test.{name}",
        external_app=external_app,
    )


class TestToolCatalog:
    """Test suite for ToolCatalog."""

    def test_preserves_order(self):
        catalog = ToolCatalog([_definition("b"), _definition("a")])
        assert catalog.names() == ["b", "a"]
        assert [d.name for d in catalog] == ["b", "a"]
        assert len(catalog) == 2

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError, match="Duplicate tool names"):
            ToolCatalog([_definition("a"), _definition("a")])

    def test_lookup(self):
        catalog = ToolCatalog([_definition("a")])
        assert catalog.get("a").name == "a"
        assert catalog.get("missing") is None
        assert "a" in catalog
        assert "missing" not in catalog

    def test_internal_and_external_split(self):
        catalog = ToolCatalog(
            [_definition("a"), _definition("b", external_app=ExternalApp.SLACK)]
        )
        assert [d.name for d in catalog.internal_tools()] == ["a"]
        assert [d.name for d in catalog.external_tools()] == ["b"]

    def test_definitions_copy_does_not_mutate_catalog(self):
        catalog = ToolCatalog([_definition("a")])
        catalog.definitions.append(_definition("b"))
        assert catalog.names() == ["a"]


class TestDefaultDefinitions:
    """Test suite for the built-in tool definitions."""

    def test_default_catalog_is_shared(self):
        assert default_catalog() is default_catalog()
        assert len(default_catalog()) == len(DEFAULT_TOOL_DEFINITIONS) == 19

    def test_internal_tools(self):
        assert len(INTERNAL_TOOL_DEFINITIONS) == 13
        assert all(d.external_app is None for d in INTERNAL_TOOL_DEFINITIONS)
        assert all(
            d.handler_binding == f"assistantTools.{d.name}"
            for d in INTERNAL_TOOL_DEFINITIONS
        )

    def test_workspace_only_tools(self):
        catalog = default_catalog()
        for name in ("searchChannels", "getChannelSummary", "semanticSearch"):
            assert catalog.get(name).context == ContextRequirements(
                needs_workspace_id=True
            )
        assert catalog.get("getChannelSummary").parameters.required == ["channelId"]

    def test_one_external_tool_per_app(self):
        assert len(EXTERNAL_TOOL_DEFINITIONS) == len(ExternalApp)
        assert set(EXTERNAL_TOOL_BY_APP) == set(ExternalApp)

    def test_external_tools_take_an_instruction(self):
        for definition in EXTERNAL_TOOL_DEFINITIONS:
            assert definition.handler_kind == HandlerKind.LONG_RUNNING_ACTION
            assert definition.parameters.required == ["instruction"]
            assert definition.context.needs_workspace_id
            assert definition.context.needs_user_id

    def test_openai_declaration(self):
        declaration = default_catalog().get("runGmailTool").to_openai_tool()
        assert declaration["type"] == "function"
        function = declaration["function"]
        assert function["name"] == "runGmailTool"
        assert function["parameters"]["required"] == ["instruction"]
        assert function["parameters"]["additionalProperties"] is False
