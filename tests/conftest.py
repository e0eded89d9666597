"""
Shared fixtures: a MongoDB adapter backed by mongomock and the
conversation repository built on it.
"""

import uuid

import mongomock
import pytest
from unittest.mock import patch

from workspace_assistant.adapters.mongodb_adapter import MongoDBAdapter
from workspace_assistant.repositories.conversation import MongoConversationRepository


@pytest.fixture
def mongodb_adapter():
    """Fixture for a MongoDB adapter using mongomock."""
    with patch(
        "workspace_assistant.adapters.mongodb_adapter.MongoClient",
        mongomock.MongoClient,
    ):
        adapter = MongoDBAdapter(
            connection_string="mongodb://localhost:27017",
            database_name=f"test_{uuid.uuid4().hex}",
        )
    return adapter


@pytest.fixture
def conversation_repository(mongodb_adapter):
    """Fixture for the conversation repository."""
    return MongoConversationRepository(mongodb_adapter)
