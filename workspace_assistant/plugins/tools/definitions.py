"""
Default tool definitions.

Internal tools read workspace data; external tools drive a third-party
integration from a natural-language instruction.
"""

from functools import lru_cache
from typing import Dict, List

from workspace_assistant.domains.intent import ExternalApp
from workspace_assistant.domains.tools import (
    ContextRequirements,
    HandlerKind,
    ToolDefinition,
    ToolParameters,
)
from workspace_assistant.plugins.registry import ToolCatalog

WORKSPACE_AND_USER = ContextRequirements(needs_workspace_id=True, needs_user_id=True)
WORKSPACE_ONLY = ContextRequirements(needs_workspace_id=True)
NO_PARAMETERS = ToolParameters()


def _internal(
    name: str,
    description: str,
    binding: str,
    parameters: ToolParameters = NO_PARAMETERS,
    handler_kind: HandlerKind = HandlerKind.READ,
    context: ContextRequirements = WORKSPACE_AND_USER,
) -> ToolDefinition:
    return ToolDefinition(
        name=name,
        description=description,
        parameters=parameters,
        handler_kind=handler_kind,
        handler_binding=binding,
        context=context,
    )


def _external(
    name: str, app: ExternalApp, label: str, description: str
) -> ToolDefinition:
    return ToolDefinition(
        name=name,
        description=description,
        parameters=ToolParameters(
            properties={
                "instruction": {
                    "type": "string",
                    "description": f"What you want {label} to do",
                }
            },
            required=["instruction"],
        ),
        handler_kind=HandlerKind.LONG_RUNNING_ACTION,
        handler_binding=f"integrations.{name}",
        context=WORKSPACE_AND_USER,
        external_app=app,
    )


INTERNAL_TOOL_DEFINITIONS: List[ToolDefinition] = [
    _internal(
        "getMyCalendarToday",
        "Get the user's calendar events for today. Returns all meetings and events scheduled for the current day.",
        "assistantTools.getMyCalendarToday",
    ),
    _internal(
        "getMyCalendarTomorrow",
        "Get the user's calendar events for tomorrow. Returns all meetings and events scheduled for the next day.",
        "assistantTools.getMyCalendarTomorrow",
    ),
    _internal(
        "getMyCalendarThisWeek",
        "Get the user's calendar events for this week (the next 7 days starting from today). Use when the user asks about 'this week' or 'upcoming week'.",
        "assistantTools.getMyCalendarThisWeek",
    ),
    _internal(
        "getMyCalendarNextWeek",
        "Get the user's calendar events for next week (7-14 days from now). Returns all meetings scheduled in the upcoming week.",
        "assistantTools.getMyCalendarNextWeek",
    ),
    _internal(
        "getMyTasksToday",
        "Get tasks assigned to the user that are due today. Returns incomplete tasks with today's due date.",
        "assistantTools.getMyTasksToday",
    ),
    _internal(
        "getMyTasksTomorrow",
        "Get tasks assigned to the user that are due tomorrow. Returns incomplete tasks with tomorrow's due date.",
        "assistantTools.getMyTasksTomorrow",
    ),
    _internal(
        "getMyTasksThisWeek",
        "Get tasks assigned to the user that are due this week (next 7 days). Use when the user asks about 'this week' or 'upcoming' tasks.",
        "assistantTools.getMyTasksThisWeek",
    ),
    _internal(
        "getMyAllTasks",
        "Get all tasks assigned to the user. Can optionally include completed tasks. Use this for general task queries like 'what are my tasks' or 'show all my work'.",
        "assistantTools.getMyAllTasks",
        parameters=ToolParameters(
            properties={
                "includeCompleted": {
                    "type": "boolean",
                    "description": "Whether to include completed tasks (default: false)",
                }
            }
        ),
    ),
    _internal(
        "searchChannels",
        "Search for channels in the workspace by name. Returns matching channels with their IDs. ALWAYS use this first when the user mentions a channel by name (e.g., '#general') to get the channel ID before calling other channel tools.",
        "assistantTools.searchChannels",
        parameters=ToolParameters(
            properties={
                "query": {
                    "type": "string",
                    "description": "Channel name to search for (without # symbol). Leave empty to get all channels.",
                }
            }
        ),
        context=WORKSPACE_ONLY,
    ),
    _internal(
        "getChannelSummary",
        "Get a summary of recent messages in a specific channel. Requires a channel ID - if the user provides a channel name (e.g., '#general'), FIRST call searchChannels to find the ID, then use that ID here.",
        "assistantTools.getChannelSummary",
        parameters=ToolParameters(
            properties={
                "channelId": {
                    "type": "string",
                    "description": "Channel ID (get this from searchChannels if you only have the channel name)",
                },
                "limit": {
                    "type": "number",
                    "description": "Max number of messages to analyze (default: 40)",
                },
            },
            required=["channelId"],
        ),
        handler_kind=HandlerKind.LONG_RUNNING_ACTION,
        context=WORKSPACE_ONLY,
    ),
    _internal(
        "getWorkspaceOverview",
        "Get high-level overview statistics for the workspace. Returns counts of channels, members, tasks, and upcoming events.",
        "assistantTools.getWorkspaceOverview",
    ),
    _internal(
        "getMyCards",
        "Get all cards (from Kanban boards) assigned to the user across all channels. Returns card details including board/list location.",
        "assistantTools.getMyCards",
    ),
    _internal(
        "semanticSearch",
        "Perform semantic search across all workspace content (messages, notes, tasks, cards). Use this for general questions that don't fit other tools.",
        "assistantTools.semanticSearch",
        parameters=ToolParameters(
            properties={
                "query": {"type": "string", "description": "Search query"},
                "limit": {
                    "type": "number",
                    "description": "Max results to return (default: 10)",
                },
            },
            required=["query"],
        ),
        handler_kind=HandlerKind.LONG_RUNNING_ACTION,
        context=WORKSPACE_ONLY,
    ),
]

EXTERNAL_TOOL_DEFINITIONS: List[ToolDefinition] = [
    _external(
        "runGmailTool",
        ExternalApp.GMAIL,
        "Gmail",
        "Use Gmail to send emails, read inbox messages, or search email threads. Provide a clear instruction like 'send email to alice@example.com about the roadmap'.",
    ),
    _external(
        "runSlackTool",
        ExternalApp.SLACK,
        "Slack",
        "Use Slack to post messages, reply in threads, or get channel info. Provide a clear instruction like 'post in #general that the deploy is done'.",
    ),
    _external(
        "runGithubTool",
        ExternalApp.GITHUB,
        "GitHub",
        "Use GitHub to create issues, comment on PRs, or search repositories. Provide a clear instruction like 'create an issue in repo X about bug Y'.",
    ),
    _external(
        "runNotionTool",
        ExternalApp.NOTION,
        "Notion",
        "Use Notion to create or update pages and databases. Provide a clear instruction like 'create a page titled Q1 Plan with these bullets'.",
    ),
    _external(
        "runClickupTool",
        ExternalApp.CLICKUP,
        "ClickUp",
        "Use ClickUp to create or update tasks. Provide a clear instruction like 'create a task in List A titled Fix onboarding bug'.",
    ),
    _external(
        "runLinearTool",
        ExternalApp.LINEAR,
        "Linear",
        "Use Linear to create or update issues. Provide a clear instruction like 'create a bug issue in Team X titled Login fails on Safari'.",
    ),
]

DEFAULT_TOOL_DEFINITIONS: List[ToolDefinition] = (
    INTERNAL_TOOL_DEFINITIONS + EXTERNAL_TOOL_DEFINITIONS
)

# Tool each integration is steered to in the system prompt.
EXTERNAL_TOOL_BY_APP: Dict[ExternalApp, str] = {
    d.external_app: d.name for d in EXTERNAL_TOOL_DEFINITIONS
}


@lru_cache(maxsize=1)
def default_catalog() -> ToolCatalog:
    """The process-wide catalog, built on first use."""
    return ToolCatalog(DEFAULT_TOOL_DEFINITIONS)
