"""
Error categorization and recovery policy for the assistant.

Classification is a pure, ordered substring match over the error text.
handle_assistant_error turns a category into a caller-actionable decision;
it never raises and never performs the recovery itself.
"""

import asyncio
import logging
from typing import Any, Dict, List, Tuple

from workspace_assistant.domains.errors import (
    AssistantErrorCategory,
    ErrorAdjustments,
    ErrorContext,
    ErrorHandlingResult,
    FallbackMode,
    ToolExecutionError,
    UserAction,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."
MAX_RATE_LIMIT_RETRIES = 3
CONTEXT_TOO_LARGE_MAX_MESSAGES = 20

# First match wins.
ERROR_RULES: List[Tuple[AssistantErrorCategory, Tuple[str, ...]]] = [
    (
        AssistantErrorCategory.RATE_LIMIT,
        ("rate limit", "rate_limit", "too many requests", "429"),
    ),
    (
        AssistantErrorCategory.TOOL_FAILURE,
        ("tool", "composio", "integration", "execute"),
    ),
    (
        AssistantErrorCategory.CONTEXT_TOO_LARGE,
        ("context", "token", "length", "too long"),
    ),
    (
        AssistantErrorCategory.AUTHENTICATION,
        ("auth", "unauthorized", "reconnect", "credentials"),
    ),
]

USER_FACING_MESSAGES: Dict[AssistantErrorCategory, str] = {
    AssistantErrorCategory.RATE_LIMIT: "Service is busy. Please wait a moment and try again.",
    AssistantErrorCategory.TOOL_FAILURE: "An integration couldn't complete that. Try again or use workspace-only questions.",
    AssistantErrorCategory.CONTEXT_TOO_LARGE: "That request was too long. Try a shorter message or start a new chat.",
    AssistantErrorCategory.AUTHENTICATION: "Please reconnect the integration in Settings and try again.",
    AssistantErrorCategory.UNKNOWN: GENERIC_ERROR_MESSAGE,
}


def _normalize_message(error: Any) -> str:
    if isinstance(error, BaseException):
        return str(error)
    if isinstance(error, str):
        return error
    return GENERIC_ERROR_MESSAGE


def _match_rules(msg: str) -> AssistantErrorCategory:
    for category, needles in ERROR_RULES:
        if any(needle in msg for needle in needles):
            return category
    return AssistantErrorCategory.UNKNOWN


def categorize_error(error: Any) -> AssistantErrorCategory:
    """Map any error (exception, string or other value) to a category.

    A ToolExecutionError whose underlying reason is an authentication
    failure is reported as authentication; other tool errors follow the
    rule order.
    """
    if isinstance(error, ToolExecutionError):
        reason_category = _match_rules(str(error.reason).lower())
        if reason_category == AssistantErrorCategory.AUTHENTICATION:
            return reason_category
    return _match_rules(_normalize_message(error).lower())


def format_user_friendly_error(error: Any) -> str:
    """Return the fixed user-safe sentence for the error's category."""
    return USER_FACING_MESSAGES[categorize_error(error)]


def backoff_seconds(attempt_count: int) -> int:
    """Exponential backoff before the next rate-limit retry."""
    return 2**attempt_count


async def handle_assistant_error(
    error: Any, context: ErrorContext
) -> ErrorHandlingResult:
    """Decide how the caller should recover from an error.

    Rate limits are the only category retried in-process; the call
    suspends for the backoff period before signalling the retry.

    Args:
        error: The raised exception or error value
        context: The failing query and how many attempts were made so far

    Returns:
        Retry/fallback decision and a user-safe message
    """
    category = categorize_error(error)
    logger.debug(
        f"Handling assistant error category={category.value} attempt={context.attempt_count}"
    )

    if category == AssistantErrorCategory.RATE_LIMIT:
        if context.attempt_count < MAX_RATE_LIMIT_RETRIES:
            delay = backoff_seconds(context.attempt_count)
            logger.info(f"Rate limited, retrying in {delay}s")
            await asyncio.sleep(delay)
            return ErrorHandlingResult(
                should_retry=True,
                category=category,
                message="Retrying after rate limit...",
            )
        return ErrorHandlingResult(
            should_retry=False,
            category=category,
            message=USER_FACING_MESSAGES[category],
        )

    if category == AssistantErrorCategory.TOOL_FAILURE:
        return ErrorHandlingResult(
            should_retry=False,
            category=category,
            fallback_mode=FallbackMode.INTERNAL_ONLY,
            message="An integration couldn't complete that. You can try again or ask about workspace content only.",
        )

    if category == AssistantErrorCategory.CONTEXT_TOO_LARGE:
        return ErrorHandlingResult(
            should_retry=False,
            category=category,
            adjustments=ErrorAdjustments(max_messages=CONTEXT_TOO_LARGE_MAX_MESSAGES),
            message=USER_FACING_MESSAGES[category],
        )

    if category == AssistantErrorCategory.AUTHENTICATION:
        return ErrorHandlingResult(
            should_retry=False,
            category=category,
            user_action=UserAction.RECONNECT_INTEGRATION,
            message="Please reconnect your integration in Settings and try again.",
        )

    return ErrorHandlingResult(
        should_retry=False,
        category=category,
        message=format_user_friendly_error(error),
    )
