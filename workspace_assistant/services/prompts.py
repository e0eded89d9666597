"""
System prompt construction for the assistant.
"""

from typing import Iterable, Optional, Sequence

from workspace_assistant.domains.intent import ExternalApp
from workspace_assistant.domains.monitoring import ToolAuditEvent
from workspace_assistant.plugins.tools.definitions import EXTERNAL_TOOL_BY_APP

BASE_SYSTEM_PROMPT = """You are Proddy, a personal work assistant for team workspaces.

Your role:
- Help users manage their calendar, meetings, tasks, and workspace activities
- Provide summaries of channels and conversations
- Answer questions about workspace data
- Be concise, actionable, and friendly

Guidelines:
- Use available tools for real-time data when needed
- Format responses with clear headings and bullet points
- When showing dates/times, use readable formats
- If you don't have information, say so clearly
- Never invent data; only use tool outputs and user-provided context"""

INTERNAL_ONLY_POLICY = (
    "External tool policy: do not use external integration tools for this request; "
    "respond using workspace/internal capabilities only."
)
EXTERNAL_ALLOWED_POLICY = (
    "External tool policy: external actions are allowed for this request. "
    "Only act through an integration the user explicitly asked for."
)


def _external_policy(apps: Sequence[ExternalApp]) -> str:
    lines = [
        f"- For {app.value.title()} requests: use {EXTERNAL_TOOL_BY_APP[app]}"
        for app in apps
        if app in EXTERNAL_TOOL_BY_APP
    ]
    if not lines:
        return EXTERNAL_ALLOWED_POLICY
    return (
        f"{EXTERNAL_ALLOWED_POLICY}\n\n"
        "Use the matching tool for each integration the user mentioned:\n"
        + "\n".join(lines)
        + "\n\nNever claim you cannot access these integrations; report tool errors instead."
    )


def build_system_prompt(
    external_tools_allowed: bool = False,
    requested_apps: Optional[Iterable[ExternalApp]] = None,
    workspace_context: Optional[str] = None,
) -> str:
    """Base instructions plus exactly one external-tool policy clause."""
    if external_tools_allowed:
        policy = _external_policy(list(requested_apps or []))
    else:
        policy = INTERNAL_ONLY_POLICY

    parts = [BASE_SYSTEM_PROMPT, policy]
    if workspace_context and workspace_context.strip():
        parts.append(f"Workspace context: {workspace_context.strip()}")
    return "\n\n".join(parts)


def build_thread_context_prompt(recent_tools: Sequence[ToolAuditEvent]) -> str:
    """Short summary of the user's recent tool usage, or an empty string."""
    if not recent_tools:
        return ""
    lines = [f"- {event.tool_name}: {event.outcome.value}" for event in recent_tools]
    return "Recent tools used in this conversation:\n" + "\n".join(lines)
