"""
Query intent classification.

Maps raw user text to the integrations it references. The keyword table
is deployment policy: each integration is matched by its name and by
phrasing strongly tied to acting through it.
"""

import logging
import re
from typing import List, Optional, Pattern, Tuple

from workspace_assistant.domains.intent import ExternalApp, QueryIntent, QueryMode

logger = logging.getLogger(__name__)

EXTERNAL_APP_PATTERNS: List[Tuple[ExternalApp, Pattern[str]]] = [
    (
        ExternalApp.GMAIL,
        re.compile(
            r"\b(gmail|send\s+(an\s+)?email|email\s+to|my\s+inbox|draft\s+(an\s+)?email)\b"
        ),
    ),
    (
        ExternalApp.GITHUB,
        re.compile(
            r"\b(github|my\s+(repo|repos|repositories)|pull\s+requests?)\b"
        ),
    ),
    (ExternalApp.SLACK, re.compile(r"\bslack\b")),
    (ExternalApp.NOTION, re.compile(r"\bnotion\b")),
    (ExternalApp.CLICKUP, re.compile(r"\b(clickup|click\s+up)\b")),
    (ExternalApp.LINEAR, re.compile(r"\blinear\b")),
]

INTERNAL_SIGNAL_PATTERN = re.compile(
    r"\b(workspace|channels?|messages?|calendar|meetings?|tasks?|boards?|cards?|notes?|summary|summarize|search|assigned|today|tomorrow|next\s+week|this\s+week)\b"
)


def classify_query(text: Optional[str]) -> QueryIntent:
    """Classify a user message into a QueryIntent.

    Total over any input: None or empty text yields the default
    workspace-only intent.
    """
    normalized = (text or "").lower()
    if not normalized.strip():
        return QueryIntent()

    hits: List[Tuple[int, int, ExternalApp]] = []
    for order, (app, pattern) in enumerate(EXTERNAL_APP_PATTERNS):
        match = pattern.search(normalized)
        if match:
            hits.append((match.start(), order, app))

    requested = [app for _, _, app in sorted(hits)]
    if not requested:
        return QueryIntent()

    has_internal_signal = bool(INTERNAL_SIGNAL_PATTERN.search(normalized))
    mode = QueryMode.HYBRID if has_internal_signal else QueryMode.EXTERNAL
    intent = QueryIntent(
        mode=mode,
        requires_external_tools=True,
        requested_external_apps=requested,
    )
    logger.debug(
        f"Classified query mode={mode.value} apps={[a.value for a in requested]}"
    )
    return intent
