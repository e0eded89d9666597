"""
Factory for creating and wiring components of the Workspace Assistant.

This module handles the creation and dependency injection for all
services and components used in the system.
"""

import importlib
import logging
from typing import Any, Callable, Dict, Optional

# Service imports
from workspace_assistant.services.assistant import (
    DEFAULT_ASSISTANT_TYPE,
    DEFAULT_EXECUTION_PATH,
    DEFAULT_TEMPERATURE,
    AssistantService,
)
from workspace_assistant.services.monitoring import (
    RequestOutcomeLogger,
    ToolAuditLogger,
)
from workspace_assistant.services.tool_executor import ToolExecutor

# Repository imports
from workspace_assistant.repositories.conversation import MongoConversationRepository

# Adapter imports
from workspace_assistant.adapters.backend_adapter import HandlerBackend
from workspace_assistant.adapters.mongodb_adapter import MongoDBAdapter
from workspace_assistant.adapters.openai_adapter import OpenAIAdapter

# Plugin imports
from workspace_assistant.plugins.registry import ToolCatalog
from workspace_assistant.plugins.tools.definitions import default_catalog

# Setup logger for this module
logger = logging.getLogger(__name__)


class WorkspaceAssistantFactory:
    """Factory for creating and wiring components of the Workspace Assistant."""

    @staticmethod
    def _import_callable(path: str) -> Callable:
        """Resolve a dotted "module.attribute" path to a callable."""
        module_path, attr_name = path.rsplit(".", 1)
        module = importlib.import_module(module_path)
        target = getattr(module, attr_name)
        if not callable(target):
            raise ValueError(f"'{path}' is not callable")
        return target

    @staticmethod
    def _create_backend(
        handler_configs: Dict[str, str], catalog: ToolCatalog
    ) -> HandlerBackend:
        """Instantiates the handler backend from binding -> import path config."""
        backend = HandlerBackend()
        kinds = {d.handler_binding: d.handler_kind for d in catalog}

        for binding, handler_path in (handler_configs or {}).items():
            kind = kinds.get(binding)
            if kind is None:
                logger.warning(f"No tool uses binding '{binding}'; skipping handler")
                continue
            try:
                handler = WorkspaceAssistantFactory._import_callable(handler_path)
            except (ImportError, AttributeError, ValueError) as e:
                logger.error(f"Error loading handler '{handler_path}': {e}")
                continue
            backend.register(kind, binding, handler)
            logger.info(f"Loaded {kind.value} handler for '{binding}'")

        missing = [b for b in kinds if not backend.has_handler(kinds[b], b)]
        if missing:
            logger.warning(f"{len(missing)} tool binding(s) have no handler: {missing}")
        return backend

    @staticmethod
    def create_from_config(
        config: Dict[str, Any], catalog: Optional[ToolCatalog] = None
    ) -> AssistantService:  # pragma: no cover
        """Create the assistant from configuration.

        Args:
            config: Configuration dictionary
            catalog: Optional tool catalog (defaults to the built-in one)

        Returns:
            Configured AssistantService instance
        """
        if "mongo" not in config:
            raise ValueError("MongoDB configuration is required.")
        if "connection_string" not in config["mongo"]:
            raise ValueError("MongoDB connection string is required.")
        if "database" not in config["mongo"]:
            raise ValueError("MongoDB database name is required.")

        if "openai" not in config or "api_key" not in config["openai"]:
            raise ValueError("OpenAI API key is required in config.")

        db_adapter = MongoDBAdapter(
            connection_string=config["mongo"]["connection_string"],
            database_name=config["mongo"]["database"],
        )

        llm_model = config["openai"].get("model")
        if llm_model:
            logger.info(f"Using OpenAI as LLM provider with model: {llm_model}")
        else:
            logger.info("Using OpenAI as LLM provider")

        if "logfire" in config:
            if "api_key" not in config["logfire"]:
                raise ValueError("Pydantic Logfire API key is required.")
            llm_adapter = OpenAIAdapter(
                api_key=config["openai"]["api_key"],
                model=llm_model,
                logfire_api_key=config["logfire"].get("api_key"),
            )
        else:
            llm_adapter = OpenAIAdapter(
                api_key=config["openai"]["api_key"],
                model=llm_model,
            )

        catalog = catalog or default_catalog()
        repository = MongoConversationRepository(db_adapter)
        backend = WorkspaceAssistantFactory._create_backend(
            config.get("backend", {}).get("handlers", {}), catalog
        )
        tool_executor = ToolExecutor(
            backend=backend, audit_logger=ToolAuditLogger(repository)
        )

        assistant_config = config.get("assistant", {})
        auth_user_resolver = None
        if assistant_config.get("auth_user_resolver"):
            auth_user_resolver = WorkspaceAssistantFactory._import_callable(
                assistant_config["auth_user_resolver"]
            )

        return AssistantService(
            llm_provider=llm_adapter,
            repository=repository,
            tool_executor=tool_executor,
            catalog=catalog,
            outcome_logger=RequestOutcomeLogger(repository),
            model=llm_model,
            temperature=config["openai"].get("temperature", DEFAULT_TEMPERATURE),
            auth_user_resolver=auth_user_resolver,
            execution_path=assistant_config.get(
                "execution_path", DEFAULT_EXECUTION_PATH
            ),
            assistant_type=assistant_config.get(
                "assistant_type", DEFAULT_ASSISTANT_TYPE
            ),
        )
