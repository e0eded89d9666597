"""
LLM provider adapter for the Workspace Assistant.

This adapter implements the LLMProvider interface on top of the OpenAI
chat completions API with function calling.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import logfire
from openai import AsyncOpenAI

from workspace_assistant.domains.responses import ModelToolCall, ModelTurn
from workspace_assistant.interfaces.providers.llm import LLMProvider

# Setup logger for this module
logger = logging.getLogger(__name__)

DEFAULT_CHAT_MODEL = "gpt-4o-mini"


class OpenAIAdapter(LLMProvider):
    """OpenAI implementation of LLMProvider using chat completions."""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        logfire_api_key: Optional[str] = None,
    ):
        self.api_key = api_key
        self.client = AsyncOpenAI(api_key=api_key)

        self.logfire = False
        if logfire_api_key:
            try:
                logfire.configure(token=logfire_api_key)
                self.logfire = True
                logfire.instrument_openai(self.client)
                logger.info(
                    "Logfire configured and OpenAI client instrumented successfully."
                )
            except Exception as e:
                logger.error(f"Failed to configure Logfire: {e}")
                self.logfire = False

        self.text_model = model or DEFAULT_CHAT_MODEL

    @staticmethod
    def _parse_arguments(raw: Optional[str]) -> Dict[str, Any]:
        if not raw:
            return {}
        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"Could not parse tool call arguments: {raw!r}")
            return {}
        return parsed if isinstance(parsed, dict) else {}

    async def chat(
        self,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> ModelTurn:
        """Run one chat completion step.

        API errors propagate so the caller's error policy can classify them.
        """
        request_params: Dict[str, Any] = {
            "model": model or self.text_model,
            "messages": messages,
        }
        if temperature is not None:
            request_params["temperature"] = temperature
        if tools:
            request_params["tools"] = tools

        completion = await self.client.chat.completions.create(**request_params)

        choice = completion.choices[0]
        message = choice.message
        tool_calls = [
            ModelToolCall(
                id=call.id,
                name=call.function.name,
                arguments=self._parse_arguments(call.function.arguments),
            )
            for call in (message.tool_calls or [])
        ]

        usage: Dict[str, int] = {}
        if completion.usage is not None:
            usage = {
                "prompt_tokens": completion.usage.prompt_tokens,
                "completion_tokens": completion.usage.completion_tokens,
                "total_tokens": completion.usage.total_tokens,
            }

        return ModelTurn(
            text=message.content or "",
            tool_calls=tool_calls,
            finish_reason=choice.finish_reason,
            usage=usage,
        )
