"""Base agent class for the orchestration core."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..errors import AgentValidationError
from .protocol import (
    AgentConfig,
    AgentContext,
    AgentExecutionOptions,
    AgentStatus,
    BaseAgentResponse,
    create_failure_response,
    create_success_response,
)

if TYPE_CHECKING:
    from ..completion import TextCompletionClient
    from ..observability import AgentObserver

logger = logging.getLogger(__name__)

MAX_CONFIDENCE = 95
DEFAULT_CONFIDENCE = 85


def as_number(value: Any, default: float = 0) -> float:
    """Read a numeric field of model output; anything non-numeric gives ``default``."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return default
    return default


class Agent(ABC):
    """Abstract base class for all agents.

    Each concrete agent must implement ``process(input_data, context, config)``,
    which validates its input, builds prompts, calls the model through
    :meth:`execute_ai` and repairs the parsed result. Callers never call
    ``process`` directly; :meth:`execute` wraps it so that every failure
    becomes a response envelope instead of an exception.

    Attributes:
        agent_id: Stable registry key
        name: Human-readable name
        description: What the agent does
        status: Status of the most recent call on this instance. Concurrent
            calls overwrite it, so use ``response.metadata.status`` for a
            per-call answer.
    """

    def __init__(
        self,
        agent_id: str,
        name: str,
        description: str,
        completion_client: Optional[TextCompletionClient] = None,
        default_config: Optional[AgentConfig] = None,
        observer: Optional[AgentObserver] = None,
    ):
        self.agent_id = agent_id
        self.name = name
        self.description = description
        self.completion_client = completion_client
        self.default_config = default_config or AgentConfig()
        self.observer = observer
        self.status = AgentStatus.IDLE

    async def execute(
        self,
        input_data: Any,
        context: AgentContext,
        options: Optional[AgentExecutionOptions] = None,
    ) -> BaseAgentResponse:
        """Run the agent and capture the outcome in a response envelope.

        Args:
            input_data: Agent-specific input, usually a mapping
            context: Shared read-only context
            options: Config overrides and execution hints

        Returns:
            BaseAgentResponse; never raises for agent-level failures
        """
        self.status = AgentStatus.PROCESSING
        options = options or AgentExecutionOptions()
        config = self.default_config.merged(options.config)

        if self.observer:
            keys = list(input_data.keys()) if isinstance(input_data, dict) else None
            self.observer.log_agent_start(self.agent_id, keys)

        start = time.time()
        try:
            result = await self.process(input_data, context, config)
            if result is None:
                raise AgentValidationError(f"{self.name} produced no output")
            raw_confidence = self.calculate_confidence(result, context)
            confidence = max(0, min(int(round(raw_confidence)), MAX_CONFIDENCE))
        except Exception as e:
            processing_time = (time.time() - start) * 1000
            self.status = AgentStatus.ERROR
            message = str(e) or "Unknown error"
            logger.warning(f"Agent '{self.agent_id}' failed: {message}")
            if self.observer:
                self.observer.log_error(
                    error_type=type(e).__name__,
                    message=message,
                    context={"agent_id": self.agent_id},
                    agent_id=self.agent_id,
                )
                self.observer.log_agent_end(self.agent_id, False, processing_time)
            return create_failure_response(self.agent_id, message, processing_time)

        processing_time = (time.time() - start) * 1000
        self.status = AgentStatus.COMPLETED
        if self.observer:
            self.observer.log_agent_end(self.agent_id, True, processing_time, confidence)

        return create_success_response(self.agent_id, result, processing_time, confidence)

    @abstractmethod
    async def process(self, input_data: Any, context: AgentContext, config: AgentConfig) -> Any:
        """Produce the agent's output.

        Raises:
            Exception: Any failure; :meth:`execute` converts it to a response
        """
        pass

    def calculate_confidence(self, result: Any, context: AgentContext) -> float:
        """Heuristic 0-95 score for ``result``. Override to weigh completeness."""
        return DEFAULT_CONFIDENCE

    async def execute_ai(self, system_prompt: str, user_prompt: str, config: AgentConfig) -> Dict[str, Any]:
        """Send the combined prompt to the completion client.

        Args:
            system_prompt: Role and output rules
            user_prompt: Task-specific content
            config: Effective config for this call

        Returns:
            The parsed JSON object

        Raises:
            AgentValidationError: If no client is configured or the reply is not a JSON object
            CompletionError: If the completion call fails
        """
        if self.completion_client is None:
            raise AgentValidationError(f"{self.name} has no completion client configured")

        result = await self.completion_client.generate(
            f"{system_prompt}\n\n{user_prompt}",
            {"temperature": config.temperature, "max_output_tokens": config.max_tokens},
        )
        if not isinstance(result.data, dict):
            raise AgentValidationError(
                f"{self.name} expected a JSON object from the model, got {type(result.data).__name__}"
            )
        return result.data

    @staticmethod
    def with_custom_instructions(prompt: str, config: AgentConfig) -> str:
        """Append the caller's custom instructions to a system prompt."""
        if not config.custom_instructions:
            return prompt
        return f"{prompt}\n\nADDITIONAL INSTRUCTIONS:\n{config.custom_instructions}"

    def describe(self) -> Dict[str, str]:
        return {
            "id": self.agent_id,
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(agent_id={self.agent_id!r}, status={self.status.value!r})"
