"""
Sanitising of tool arguments and errors before they are written to the
audit trail.
"""

import re
from typing import Any

REDACTED_VALUE = "[REDACTED]"
TRUNCATED_VALUE = "[TRUNCATED]"
MAX_DEPTH = 6
MAX_STRING_LENGTH = 2000

SENSITIVE_KEY_PATTERN = re.compile(
    r"(^|_|-)(token|secret|password|passphrase|api[_-]?key|authorization|cookie|credential|private[_-]?key|access[_-]?token|refresh[_-]?token|client[_-]?secret)(_|-|$)",
    re.IGNORECASE,
)
BEARER_PATTERN = re.compile(r"(Bearer\s+)[^\s]+", re.IGNORECASE)
INLINE_SECRET_PATTERN = re.compile(
    r"(token|secret|password|api[_-]?key)\s*[:=]\s*[\"']?[^\"',\s}]+", re.IGNORECASE
)


def _sanitize_string(value: str) -> str:
    value = BEARER_PATTERN.sub(rf"\g<1>{REDACTED_VALUE}", value)
    value = INLINE_SECRET_PATTERN.sub(rf"\g<1>={REDACTED_VALUE}", value)
    return value[:MAX_STRING_LENGTH]


def sanitize_audit_payload(value: Any, depth: int = 0, parent_key: str = "") -> Any:
    """Redact secrets and bound the size of an audit payload."""
    if depth > MAX_DEPTH:
        return TRUNCATED_VALUE
    if value is None:
        return None
    if parent_key and SENSITIVE_KEY_PATTERN.search(parent_key):
        return REDACTED_VALUE
    if isinstance(value, str):
        return _sanitize_string(value)
    if isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, (list, tuple, set)):
        return [sanitize_audit_payload(v, depth + 1, parent_key) for v in value]
    if isinstance(value, dict):
        return {
            str(k): sanitize_audit_payload(v, depth + 1, str(k))
            for k, v in value.items()
        }
    return str(value)[:MAX_STRING_LENGTH]
