"""
Tests for audit payload sanitising.
"""

from workspace_assistant.services.audit import (
    MAX_DEPTH,
    MAX_STRING_LENGTH,
    REDACTED_VALUE,
    TRUNCATED_VALUE,
    sanitize_audit_payload,
)


def test_sensitive_keys_are_redacted():
    payload = {
        "password": "hunter2",
        "access_token": "abc",
        "client-secret": "xyz",
        "instruction": "send the report",
    }
    assert sanitize_audit_payload(payload) == {
        "password": REDACTED_VALUE,
        "access_token": REDACTED_VALUE,
        "client-secret": REDACTED_VALUE,
        "instruction": "send the report",
    }


def test_bearer_tokens_are_redacted():
    assert (
        sanitize_audit_payload("header Bearer eyJhbGciOi.payload")
        == f"header Bearer {REDACTED_VALUE}"
    )


def test_inline_secrets_are_redacted():
    result = sanitize_audit_payload("call failed with api_key=sk-live-123 now")
    assert "sk-live-123" not in result
    assert REDACTED_VALUE in result


def test_long_strings_are_truncated():
    assert len(sanitize_audit_payload("x" * (MAX_STRING_LENGTH + 50))) == MAX_STRING_LENGTH


def test_deep_nesting_is_truncated():
    payload = "leaf"
    for _ in range(MAX_DEPTH + 2):
        payload = {"child": payload}
    result = sanitize_audit_payload(payload)

    node = result
    for _ in range(MAX_DEPTH + 1):
        node = node["child"]
    assert node == TRUNCATED_VALUE


def test_scalars_and_sequences():
    assert sanitize_audit_payload(None) is None
    assert sanitize_audit_payload(3) == 3
    assert sanitize_audit_payload(True) is True
    assert sanitize_audit_payload(("a", 1)) == ["a", 1]
    assert sanitize_audit_payload(object()).startswith("<object object")
