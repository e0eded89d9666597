"""
Tests for query intent classification.
"""

import pytest
from hypothesis import given, strategies as st

from workspace_assistant.domains.intent import ExternalApp, QueryIntent, QueryMode
from workspace_assistant.services.intent_classifier import classify_query


class TestClassifyQuery:
    """Test suite for classify_query."""

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_input_is_internal(self, text):
        assert classify_query(text) == QueryIntent()

    def test_workspace_question_is_internal(self):
        intent = classify_query("What's on my calendar today?")
        assert intent.mode == QueryMode.INTERNAL
        assert intent.requires_external_tools is False
        assert intent.requested_external_apps == []

    @pytest.mark.parametrize(
        "text,app",
        [
            ("Send an email to alice about the roadmap", ExternalApp.GMAIL),
            ("check my inbox", ExternalApp.GMAIL),
            ("open a github issue", ExternalApp.GITHUB),
            ("list pull requests waiting on me", ExternalApp.GITHUB),
            ("post it on Slack", ExternalApp.SLACK),
            ("create a Notion page", ExternalApp.NOTION),
            ("add this to ClickUp", ExternalApp.CLICKUP),
            ("file a bug in Linear", ExternalApp.LINEAR),
        ],
    )
    def test_single_app(self, text, app):
        intent = classify_query(text)
        assert intent.requires_external_tools is True
        assert intent.requested_external_apps == [app]
        assert intent.mode == QueryMode.EXTERNAL

    def test_hybrid_when_workspace_signals_present(self):
        intent = classify_query("Summarize #general and post the summary in Slack")
        assert intent.mode == QueryMode.HYBRID
        assert intent.requested_external_apps == [ExternalApp.SLACK]

    def test_apps_ordered_by_first_mention(self):
        intent = classify_query("Post on slack, then open a GitHub issue and email to bob")
        assert intent.requested_external_apps == [
            ExternalApp.SLACK,
            ExternalApp.GITHUB,
            ExternalApp.GMAIL,
        ]

    def test_repeated_mentions_are_deduplicated(self):
        intent = classify_query("slack slack SLACK")
        assert intent.requested_external_apps == [ExternalApp.SLACK]

    def test_case_insensitive(self):
        assert classify_query("GMAIL").requested_external_apps == [ExternalApp.GMAIL]

    def test_word_boundaries(self):
        """Test app names embedded in other words do not match."""
        intent = classify_query("the slacker wrote a nonlinear notional plan")
        assert intent.requested_external_apps == []

    @given(st.text())
    def test_total_and_consistent(self, text):
        """Test classification never raises and honours the intent invariants."""
        intent = classify_query(text)
        assert intent.requires_external_tools == bool(intent.requested_external_apps)
        assert len(set(intent.requested_external_apps)) == len(
            intent.requested_external_apps
        )
        if not intent.requested_external_apps:
            assert intent.mode == QueryMode.INTERNAL
