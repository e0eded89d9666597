"""
Tests for per-request tool selection.
"""

from workspace_assistant.domains.intent import ExternalApp
from workspace_assistant.plugins.tools.definitions import (
    EXTERNAL_TOOL_DEFINITIONS,
    INTERNAL_TOOL_DEFINITIONS,
    default_catalog,
)
from workspace_assistant.services.tool_selector import internal_only, select_tools


def test_no_apps_selects_internal_tools_only():
    selected = select_tools(default_catalog(), [])
    assert [t.name for t in selected] == [t.name for t in INTERNAL_TOOL_DEFINITIONS]
    assert all(t.external_app is None for t in selected)


def test_requested_app_adds_its_tool_after_internal_tools():
    selected = select_tools(default_catalog(), [ExternalApp.GMAIL])
    names = [t.name for t in selected]
    assert names[: len(INTERNAL_TOOL_DEFINITIONS)] == [
        t.name for t in INTERNAL_TOOL_DEFINITIONS
    ]
    assert names[len(INTERNAL_TOOL_DEFINITIONS):] == ["runGmailTool"]


def test_external_tools_keep_catalog_order():
    """Test request order does not change catalog order."""
    selected = select_tools(
        default_catalog(), [ExternalApp.LINEAR, ExternalApp.GMAIL, ExternalApp.SLACK]
    )
    external = [t.name for t in selected if t.external_app is not None]
    assert external == ["runGmailTool", "runSlackTool", "runLinearTool"]


def test_all_apps_select_whole_catalog():
    selected = select_tools(default_catalog(), list(ExternalApp))
    assert len(selected) == len(INTERNAL_TOOL_DEFINITIONS) + len(
        EXTERNAL_TOOL_DEFINITIONS
    )


def test_internal_only_drops_integration_tools():
    selected = select_tools(default_catalog(), [ExternalApp.SLACK])
    assert [t.name for t in internal_only(selected)] == [
        t.name for t in INTERNAL_TOOL_DEFINITIONS
    ]
