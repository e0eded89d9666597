"""
Assistant conversation service.

This service orchestrates one assistant request end to end: it resolves
the conversation's identity, classifies the query, selects and binds
tools, drives a bounded tool-calling loop against the language model,
persists the exchange and records the outcome.
"""

import inspect
import json
import logging
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from workspace_assistant.domains.conversation import (
    Message,
    MessageRole,
    StreamState,
    utc_now,
)
from workspace_assistant.domains.errors import (
    AssistantErrorCategory,
    ErrorContext,
    ErrorHandlingResult,
    FallbackMode,
    MissingContextError,
)
from workspace_assistant.domains.intent import QueryIntent
from workspace_assistant.domains.monitoring import RequestOutcome
from workspace_assistant.domains.responses import (
    AssistantResponseMetadata,
    FallbackMetadata,
    SendMessageResult,
    ToolCallRecord,
    ToolsMetadata,
)
from workspace_assistant.domains.tools import ToolDefinition
from workspace_assistant.interfaces.plugins.plugins import ToolCatalog
from workspace_assistant.interfaces.providers.llm import LLMProvider
from workspace_assistant.interfaces.repositories.conversation import (
    ConversationRepository,
)
from workspace_assistant.interfaces.services.assistant import (
    AssistantService as AssistantServiceInterface,
)
from workspace_assistant.plugins.tools.bound_tool import BoundTool
from workspace_assistant.plugins.tools.definitions import default_catalog
from workspace_assistant.services.error_handling import (
    categorize_error,
    format_user_friendly_error,
    handle_assistant_error,
)
from workspace_assistant.services.intent_classifier import classify_query
from workspace_assistant.services.monitoring import RequestOutcomeLogger
from workspace_assistant.services.prompts import (
    build_system_prompt,
    build_thread_context_prompt,
)
from workspace_assistant.services.tool_executor import (
    ToolExecutor,
    ToolInvocationContext,
)
from workspace_assistant.services.tool_selector import internal_only, select_tools

logger = logging.getLogger(__name__)

MAX_STEPS = 5
DEFAULT_TEMPERATURE = 0.7
DEFAULT_EXECUTION_PATH = "workspace-assistant"
DEFAULT_ASSISTANT_TYPE = "workspace"
DEFAULT_CONVERSATION_TITLE = "Chat with Proddy"
EMPTY_RESPONSE_TEXT = "No response generated"
RECENT_TOOL_EVENTS = 10

AuthUserResolver = Callable[[], Union[Optional[str], Awaitable[Optional[str]]]]


class AssistantRequestError(Exception):
    """The step loop failed and the error policy allows no further recovery."""

    def __init__(self, decision: ErrorHandlingResult, cause: BaseException):
        self.decision = decision
        self.cause = cause
        super().__init__(str(cause))


class StepLoopResult:
    """What one successful run of the step loop produced."""

    def __init__(self, text: str, steps: int, tool_calls: List[ToolCallRecord]):
        self.text = text
        self.steps = steps
        self.tool_calls = tool_calls

    @property
    def external_used(self) -> bool:
        return any(call.external_app is not None for call in self.tool_calls)


class AssistantService(AssistantServiceInterface):
    """Conversation orchestrator for the workspace assistant."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        repository: ConversationRepository,
        tool_executor: ToolExecutor,
        catalog: Optional[ToolCatalog] = None,
        outcome_logger: Optional[RequestOutcomeLogger] = None,
        model: Optional[str] = None,
        temperature: float = DEFAULT_TEMPERATURE,
        auth_user_resolver: Optional[AuthUserResolver] = None,
        execution_path: str = DEFAULT_EXECUTION_PATH,
        assistant_type: str = DEFAULT_ASSISTANT_TYPE,
    ):
        """Initialize the assistant service.

        Args:
            llm_provider: Provider for language model steps
            repository: Conversation, message and observability store
            tool_executor: Binds and invokes tools against the backend
            catalog: Process-wide tool catalog (defaults to the built-in one)
            outcome_logger: Fire-and-forget request outcome sink
            model: Optional model override for the provider
            temperature: Sampling temperature for every step
            auth_user_resolver: Fallback for the caller's authenticated user id
            execution_path: Tag recorded on metadata and outcome logs
            assistant_type: Tag recorded on metadata
        """
        self.llm_provider = llm_provider
        self.repository = repository
        self.tool_executor = tool_executor
        self.catalog = catalog or default_catalog()
        self.outcome_logger = outcome_logger or RequestOutcomeLogger(repository)
        self.model = model
        self.temperature = temperature
        self.auth_user_resolver = auth_user_resolver
        self.execution_path = execution_path
        self.assistant_type = assistant_type

    # ------------------------------------------------------------------
    # Conversation management
    # ------------------------------------------------------------------

    async def create_conversation(
        self,
        workspace_id: str,
        user_id: str,
        title: Optional[str] = None,
        force_new: bool = False,
    ) -> str:
        """Return the pair's conversation id, creating one if needed."""
        existing = await self.repository.get_by_workspace_and_user(
            workspace_id, user_id
        )
        if existing and not force_new:
            return existing.conversation_id

        external_id = (
            f"{self._external_prefix(workspace_id, user_id)}_{int(time.time() * 1000)}"
        )
        conversation_id = await self.repository.create_chat_conversation(
            external_id, title or DEFAULT_CONVERSATION_TITLE
        )
        await self.repository.upsert_conversation(
            workspace_id, user_id, conversation_id, utc_now()
        )
        logger.info(
            f"Created conversation {conversation_id} for workspace {workspace_id} user {user_id}"
        )
        return conversation_id

    async def list_conversations(self, workspace_id: str, user_id: str) -> List[dict]:
        return await self.repository.list_chat_conversations(
            f"{self._external_prefix(workspace_id, user_id)}_"
        )

    async def get_messages(self, conversation_id: str) -> List[Message]:
        return await self.repository.list_messages(conversation_id)

    async def get_stream_state(self, conversation_id: str) -> Optional[StreamState]:
        return await self.repository.get_stream(conversation_id)

    async def abort_stream(
        self, conversation_id: str, reason: str = "User cancelled"
    ) -> int:
        aborted = await self.repository.abort_stream(conversation_id, reason)
        logger.info(f"Aborted {aborted} stream(s) for conversation {conversation_id}")
        return aborted

    @staticmethod
    def _external_prefix(workspace_id: str, user_id: str) -> str:
        return f"workspace_{workspace_id}_user_{user_id}"

    # ------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------

    async def _resolve_identity(
        self,
        conversation_id: str,
        workspace_id: Optional[str],
        user_id: Optional[str],
    ) -> tuple:
        """Explicit arguments, then conversation metadata, then the auth user."""
        if not workspace_id or not user_id:
            conversation = await self.repository.get_conversation(conversation_id)
            if conversation:
                workspace_id = workspace_id or conversation.workspace_id
                user_id = user_id or conversation.user_id

        if not user_id and self.auth_user_resolver is not None:
            resolved = self.auth_user_resolver()
            if inspect.isawaitable(resolved):
                resolved = await resolved
            user_id = resolved

        if not workspace_id or not user_id:
            raise MissingContextError(conversation_id)
        return workspace_id, user_id

    async def _workspace_context(self, workspace_id: str, user_id: str) -> str:
        try:
            events = await self.repository.list_recent_tool_events(
                workspace_id, user_id, limit=RECENT_TOOL_EVENTS
            )
        except Exception as e:
            logger.error(f"Error loading recent tool usage: {e}")
            return ""
        return build_thread_context_prompt(events)

    async def _build_messages(
        self,
        conversation_id: str,
        system_prompt: str,
        max_messages: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        history = await self.repository.list_messages(conversation_id)
        if max_messages:
            history = history[-max_messages:]
        messages: List[Dict[str, Any]] = [{"role": "system", "content": system_prompt}]
        messages.extend({"role": m.role.value, "content": m.content} for m in history)
        return messages

    async def _run_step_loop(
        self,
        messages: List[Dict[str, Any]],
        tools: Dict[str, BoundTool],
        context: ToolInvocationContext,
    ) -> StepLoopResult:
        """Drive at most MAX_STEPS model turns, executing requested tools."""
        declarations = [tool.definition.to_openai_tool() for tool in tools.values()]
        records: List[ToolCallRecord] = []
        turn = None
        steps = 0

        for step in range(1, MAX_STEPS + 1):
            steps = step
            turn = await self.llm_provider.chat(
                messages=messages,
                tools=declarations or None,
                model=self.model,
                temperature=self.temperature,
            )
            if not turn.tool_calls:
                break

            messages.append(
                {
                    "role": "assistant",
                    "content": turn.text or None,
                    "tool_calls": [
                        {
                            "id": call.id,
                            "type": "function",
                            "function": {
                                "name": call.name,
                                "arguments": json.dumps(call.arguments),
                            },
                        }
                        for call in turn.tool_calls
                    ],
                }
            )
            for call in turn.tool_calls:
                result = await self.tool_executor.invoke(
                    tools, call.name, call.arguments, context, call_id=call.id
                )
                records.append(
                    ToolCallRecord(
                        step=step,
                        tool_name=call.name,
                        external_app=tools[call.name].external_app,
                    )
                )
                messages.append(
                    {
                        "role": "tool",
                        "tool_call_id": call.id,
                        "content": json.dumps(result, default=str),
                    }
                )
        else:
            logger.warning(
                f"Step limit of {MAX_STEPS} reached with tool calls still pending"
            )

        text = (turn.text if turn else "") or EMPTY_RESPONSE_TEXT
        return StepLoopResult(text=text, steps=steps, tool_calls=records)

    async def _run_with_recovery(
        self,
        conversation_id: str,
        message: str,
        intent: QueryIntent,
        selected: List[ToolDefinition],
        context: ToolInvocationContext,
        workspace_context: str,
        fallback: FallbackMetadata,
    ) -> StepLoopResult:
        """Run the step loop, applying the error policy between attempts."""
        tools_in_use = list(selected)
        max_messages: Optional[int] = None
        attempt = 0

        while True:
            external_allowed = any(t.external_app is not None for t in tools_in_use)
            system_prompt = build_system_prompt(
                external_tools_allowed=external_allowed,
                requested_apps=intent.requested_external_apps,
                workspace_context=workspace_context,
            )
            messages = await self._build_messages(
                conversation_id, system_prompt, max_messages
            )
            tools = self.tool_executor.bind(tools_in_use, context)

            try:
                return await self._run_step_loop(messages, tools, context)
            except Exception as e:
                logger.error(f"Step loop failed on attempt {attempt + 1}: {e}")
                decision = await handle_assistant_error(
                    e, ErrorContext(query=message, attempt_count=attempt)
                )
                attempt += 1

                if decision.should_retry:
                    continue
                if (
                    decision.fallback_mode == FallbackMode.INTERNAL_ONLY
                    and external_allowed
                ):
                    logger.info("Retrying with internal tools only")
                    fallback.attempted = True
                    fallback.reason = decision.category.value
                    tools_in_use = internal_only(tools_in_use)
                    continue
                if (
                    decision.adjustments is not None
                    and decision.adjustments.max_messages
                    and max_messages is None
                ):
                    max_messages = decision.adjustments.max_messages
                    logger.info(f"Retrying with history truncated to {max_messages}")
                    fallback.attempted = True
                    fallback.reason = decision.category.value
                    continue
                raise AssistantRequestError(decision, e) from e

    async def send_message(
        self,
        conversation_id: str,
        message: str,
        workspace_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> SendMessageResult:
        """Answer one user message.

        The user message is persisted before the model is called; the
        assistant message only after the step loop succeeds.

        Args:
            conversation_id: Conversation to append to
            message: Raw user text
            workspace_id: Optional explicit workspace
            user_id: Optional explicit user

        Returns:
            Structured success (content + metadata) or user-safe failure
        """
        started = time.perf_counter()

        try:
            workspace_id, user_id = await self._resolve_identity(
                conversation_id, workspace_id, user_id
            )
        except MissingContextError as e:
            logger.warning(str(e))
            return SendMessageResult(
                success=False,
                error=MissingContextError.USER_MESSAGE,
            )
        except Exception as e:
            logger.exception(f"Error resolving conversation identity: {e}")
            category = categorize_error(e)
            return SendMessageResult(
                success=False,
                error=format_user_friendly_error(e),
                error_category=category.value,
            )

        intent = classify_query(message)
        selected = select_tools(self.catalog, intent.requested_external_apps)
        logger.info(
            f"Query classified mode={intent.mode.value} "
            f"external={intent.requires_external_tools} tools={len(selected)}"
        )
        context = ToolInvocationContext(
            workspace_id=workspace_id,
            user_id=user_id,
            conversation_id=conversation_id,
            execution_path=self.execution_path,
        )
        fallback = FallbackMetadata()
        stream_id: Optional[str] = None

        try:
            await self.repository.add_message(conversation_id, MessageRole.USER, message)
            stream_id = await self.repository.create_stream(conversation_id)
            workspace_context = await self._workspace_context(workspace_id, user_id)

            result = await self._run_with_recovery(
                conversation_id,
                message,
                intent,
                selected,
                context,
                workspace_context,
                fallback,
            )

            await self.repository.finish_stream(stream_id)
            await self.repository.add_message(
                conversation_id, MessageRole.ASSISTANT, result.text
            )
            await self.repository.upsert_conversation(
                workspace_id, user_id, conversation_id, utc_now()
            )
        except Exception as e:
            if isinstance(e, AssistantRequestError):
                category = e.decision.category
                error_message = e.decision.message
                user_action = e.decision.user_action
            else:
                logger.exception(f"Error in assistant request: {e}")
                category = categorize_error(e)
                error_message = format_user_friendly_error(e)
                user_action = None

            if stream_id is not None:
                await self._abort_quietly(conversation_id)
            self._log_outcome(
                workspace_id,
                user_id,
                conversation_id,
                RequestOutcome.ERROR,
                started,
                category,
            )
            return SendMessageResult(
                success=False,
                error=error_message,
                error_category=category.value,
                user_action=user_action.value if user_action else None,
            )

        metadata = AssistantResponseMetadata(
            assistant_type=self.assistant_type,
            execution_path=self.execution_path,
            intent=intent,
            tools=ToolsMetadata(
                internal_enabled=True,
                external_enabled=any(t.external_app is not None for t in selected),
                external_used=result.external_used,
                connected_apps=[
                    t.external_app.value
                    for t in selected
                    if t.external_app is not None
                ],
            ),
            fallback=fallback,
            steps=result.steps,
            tool_calls=result.tool_calls,
        )
        self._log_outcome(
            workspace_id, user_id, conversation_id, RequestOutcome.SUCCESS, started
        )
        return SendMessageResult(success=True, content=result.text, metadata=metadata)

    async def _abort_quietly(self, conversation_id: str) -> None:
        try:
            await self.repository.abort_stream(conversation_id, "Request failed")
        except Exception as e:
            logger.error(f"Error aborting stream for {conversation_id}: {e}")

    def _log_outcome(
        self,
        workspace_id: str,
        user_id: str,
        conversation_id: str,
        outcome: RequestOutcome,
        started: float,
        category: Optional[AssistantErrorCategory] = None,
    ) -> None:
        duration_ms = int((time.perf_counter() - started) * 1000)
        try:
            self.outcome_logger.log(
                workspace_id=workspace_id,
                user_id=user_id,
                conversation_id=conversation_id,
                outcome=outcome,
                duration_ms=duration_ms,
                execution_path=self.execution_path,
                error_category=category.value if category else None,
            )
        except Exception as e:
            logger.error(f"Error logging request outcome: {e}")
