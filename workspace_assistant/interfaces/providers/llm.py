from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from workspace_assistant.domains.responses import ModelTurn


class LLMProvider(ABC):
    """Interface for language model providers."""

    @abstractmethod
    async def chat(
        self,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> ModelTurn:
        """Run a single assistant step.

        Args:
            messages: Ordered chat messages (system, user, assistant, tool)
            tools: Function declarations the model may call this step
            model: Optional model override
            temperature: Optional sampling temperature

        Returns:
            The assistant turn, including any requested tool calls
        """
        pass
