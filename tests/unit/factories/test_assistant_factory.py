"""
Tests for the WorkspaceAssistantFactory.
"""

import mongomock
import pytest
from unittest.mock import patch

from workspace_assistant.adapters.openai_adapter import OpenAIAdapter
from workspace_assistant.domains.tools import HandlerKind
from workspace_assistant.factories.assistant_factory import WorkspaceAssistantFactory
from workspace_assistant.plugins.tools.definitions import default_catalog
from workspace_assistant.repositories.conversation import MongoConversationRepository
from workspace_assistant.services.assistant import AssistantService


def lookup_user():
    return "configured-user"


@pytest.fixture
def base_config():
    return {
        "openai": {"api_key": "test-key"},
        "mongo": {
            "connection_string": "mongodb://localhost:27017",
            "database": "factory_test",
        },
    }


@pytest.fixture
def patched_clients():
    with patch(
        "workspace_assistant.adapters.mongodb_adapter.MongoClient",
        mongomock.MongoClient,
    ), patch("workspace_assistant.adapters.openai_adapter.AsyncOpenAI"):
        yield


class TestCreateFromConfig:
    """Test suite for create_from_config."""

    @pytest.mark.parametrize(
        "mutate,message",
        [
            (lambda c: c.pop("openai"), "OpenAI API key"),
            (lambda c: c["openai"].pop("api_key"), "OpenAI API key"),
            (lambda c: c.pop("mongo"), "MongoDB configuration"),
            (lambda c: c["mongo"].pop("connection_string"), "connection string"),
            (lambda c: c["mongo"].pop("database"), "database name"),
            (lambda c: c.update({"logfire": {}}), "Logfire API key"),
        ],
    )
    def test_missing_required_keys(self, base_config, patched_clients, mutate, message):
        mutate(base_config)
        with pytest.raises(ValueError, match=message):
            WorkspaceAssistantFactory.create_from_config(base_config)

    def test_wires_service(self, base_config, patched_clients):
        base_config["openai"].update({"model": "gpt-4o", "temperature": 0.2})
        base_config["assistant"] = {
            "execution_path": "cli",
            "assistant_type": "proddy",
            "auth_user_resolver": f"{__name__}.lookup_user",
        }

        service = WorkspaceAssistantFactory.create_from_config(base_config)

        assert isinstance(service, AssistantService)
        assert isinstance(service.llm_provider, OpenAIAdapter)
        assert service.llm_provider.text_model == "gpt-4o"
        assert isinstance(service.repository, MongoConversationRepository)
        assert service.model == "gpt-4o"
        assert service.temperature == 0.2
        assert service.execution_path == "cli"
        assert service.assistant_type == "proddy"
        assert service.auth_user_resolver() == "configured-user"
        assert service.catalog is default_catalog()
        assert service.tool_executor.audit_logger is not None

    def test_defaults(self, base_config, patched_clients):
        service = WorkspaceAssistantFactory.create_from_config(base_config)
        assert service.temperature == 0.7
        assert service.execution_path == "workspace-assistant"
        assert service.auth_user_resolver is None


class TestCreateBackend:
    """Test suite for handler loading."""

    def test_handlers_registered_by_tool_kind(self):
        backend = WorkspaceAssistantFactory._create_backend(
            {
                "assistantTools.getMyCards": "json.dumps",
                "integrations.runSlackTool": "json.loads",
            },
            default_catalog(),
        )
        assert backend.has_handler(HandlerKind.READ, "assistantTools.getMyCards")
        assert backend.has_handler(
            HandlerKind.LONG_RUNNING_ACTION, "integrations.runSlackTool"
        )

    def test_bad_entries_are_skipped(self):
        backend = WorkspaceAssistantFactory._create_backend(
            {
                "unknown.binding": "json.dumps",
                "assistantTools.getMyCards": "no_such_module.handler",
                "assistantTools.getMyAllTasks": "string.ascii_letters",
            },
            default_catalog(),
        )
        assert not backend.has_handler(HandlerKind.READ, "assistantTools.getMyCards")
        assert not backend.has_handler(HandlerKind.READ, "assistantTools.getMyAllTasks")
