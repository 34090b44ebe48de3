"""Agent registry and execution orchestrator."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence, Union

from ..cache import ResponseCache
from ..errors import AgentNotFoundError
from .history import ExecutionHistory, ExecutionHistoryEntry
from .protocol import (
    AgentContext,
    AgentExecutionOptions,
    AgentStatus,
    BaseAgentResponse,
    create_failure_response,
)

if TYPE_CHECKING:
    from ..observability import AgentObserver
    from .base import Agent

logger = logging.getLogger(__name__)


@dataclass
class AgentStep:
    """One requested agent call in a sequence or parallel batch."""

    agent_id: str
    input: Any = field(default_factory=dict)
    options: Optional[AgentExecutionOptions] = None

    @classmethod
    def coerce(cls, step: Union["AgentStep", Mapping[str, Any]]) -> "AgentStep":
        if isinstance(step, AgentStep):
            return step
        return cls(
            agent_id=step["agent_id"],
            input=step.get("input", {}),
            options=step.get("options"),
        )


class AgentOrchestrator:
    """Holds the registered agents and executes them.

    The orchestrator provides:
    - Registration and lookup by agent id (last registration wins)
    - Single, sequential (fail-fast) and parallel execution
    - Optional per-call timeouts and response caching
    - A bounded execution history with aggregate statistics

    Example:
        orchestrator = AgentOrchestrator()
        orchestrator.register_agent(SkillsExtractionAgent(client))
        response = await orchestrator.execute_agent(
            "skills-extractor", {"extraction_type": "job-requirements"}, context
        )
        orchestrator.get_execution_stats()
    """

    def __init__(
        self,
        history_limit: Optional[int] = 1000,
        cache: Optional[ResponseCache] = None,
        observer: Optional[AgentObserver] = None,
    ):
        """
        Args:
            history_limit: Entries kept for statistics; None keeps all
            cache: Response cache used when a call sets ``options.cache``
            observer: Observer receiving cache events
        """
        self._agents: Dict[str, Agent] = {}
        self._history = ExecutionHistory(limit=history_limit)
        self._cache = cache or ResponseCache()
        self.observer = observer

    def register_agent(self, agent: Agent) -> None:
        """Register ``agent`` under its id, replacing any previous entry."""
        previous = self._agents.get(agent.agent_id)
        if previous is not None and previous is not agent:
            logger.warning(f"Agent '{agent.agent_id}' re-registered; replacing {previous!r}")
        self._agents[agent.agent_id] = agent
        logger.info(f"Registered agent '{agent.agent_id}' ({agent.name})")

    def get_agent(self, agent_id: str) -> Optional[Agent]:
        return self._agents.get(agent_id)

    def list_agents(self) -> List[Dict[str, str]]:
        """Snapshot of ``{id, name, description, status}`` for every agent."""
        return [agent.describe() for agent in self._agents.values()]

    async def execute_agent(
        self,
        agent_id: str,
        input_data: Any,
        context: AgentContext,
        options: Optional[AgentExecutionOptions] = None,
    ) -> BaseAgentResponse:
        """Execute one agent and record the outcome.

        Args:
            agent_id: Registered agent id
            input_data: Agent-specific input
            context: Shared context
            options: Config overrides, timeout (ms) and cache hints

        Returns:
            The agent's response envelope

        Raises:
            AgentNotFoundError: If ``agent_id`` is not registered. Nothing is
                recorded in that case.
        """
        agent = self._agents.get(agent_id)
        if agent is None:
            raise AgentNotFoundError(agent_id)

        options = options or AgentExecutionOptions()
        cache_key = None
        if options.cache:
            cache_key = self._cache.make_key(
                agent_id,
                {
                    "input": input_data,
                    "context": context.fingerprint(),
                    "config": agent.default_config.merged(options.config),
                },
            )
            cached = self._cache.get(cache_key)
            if cached is not None:
                if self.observer:
                    self.observer.log_cache_hit(agent_id)
                self._record(agent_id, cached)
                return cached

        response = await self._run_with_timeout(agent, input_data, context, options)
        self._record(agent_id, response)

        if cache_key is not None and response.success:
            self._cache.set(cache_key, response, options.cache_ttl)

        return response

    async def _run_with_timeout(
        self,
        agent: Agent,
        input_data: Any,
        context: AgentContext,
        options: AgentExecutionOptions,
    ) -> BaseAgentResponse:
        if not options.timeout:
            return await agent.execute(input_data, context, options)

        try:
            return await asyncio.wait_for(
                agent.execute(input_data, context, options),
                timeout=options.timeout / 1000,
            )
        except asyncio.TimeoutError:
            agent.status = AgentStatus.ERROR
            message = f"Agent execution timed out after {options.timeout}ms"
            logger.warning(f"Agent '{agent.agent_id}' timed out after {options.timeout}ms")
            if self.observer:
                self.observer.log_error(
                    error_type="TimeoutError",
                    message=message,
                    context={"timeout_ms": options.timeout},
                    agent_id=agent.agent_id,
                )
                self.observer.log_agent_end(agent.agent_id, False, float(options.timeout))
            return create_failure_response(agent.agent_id, message, float(options.timeout))

    def _record(self, agent_id: str, response: BaseAgentResponse) -> None:
        self._history.append(
            ExecutionHistoryEntry(
                agent_id=agent_id,
                timestamp=datetime.now(),
                duration=response.metadata.processing_time,
                success=response.success,
            )
        )

    async def execute_sequence(
        self,
        steps: Sequence[Union[AgentStep, Mapping[str, Any]]],
        context: AgentContext,
    ) -> List[BaseAgentResponse]:
        """Run steps in order, stopping right after the first failure.

        Returns:
            Responses for every attempted step, including the failing one
        """
        results: List[BaseAgentResponse] = []
        for raw_step in steps:
            step = AgentStep.coerce(raw_step)
            response = await self.execute_agent(step.agent_id, step.input, context, step.options)
            results.append(response)
            if not response.success:
                logger.info(f"Sequence stopped at '{step.agent_id}': {response.error}")
                break
        return results

    async def execute_parallel(
        self,
        executions: Sequence[Union[AgentStep, Mapping[str, Any]]],
        context: AgentContext,
    ) -> List[BaseAgentResponse]:
        """Run all executions concurrently.

        Returns:
            Responses in the order requested, whatever order they finish in
        """
        steps = [AgentStep.coerce(step) for step in executions]
        return list(
            await asyncio.gather(
                *(self.execute_agent(s.agent_id, s.input, context, s.options) for s in steps)
            )
        )

    def get_execution_stats(self) -> Dict[str, Any]:
        """Totals, success rate (0-100), average duration (ms) and per-agent usage."""
        return self._history.stats()

    def get_history(self) -> List[ExecutionHistoryEntry]:
        return self._history.entries()

    def clear_history(self) -> None:
        self._history.clear()

    def get_cache_stats(self) -> Dict[str, Any]:
        return self._cache.get_stats()

    def clear_cache(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._agents)

    def __contains__(self, agent_id: str) -> bool:
        return agent_id in self._agents

    def __repr__(self) -> str:
        return f"AgentOrchestrator(agents={list(self._agents)!r}, history={len(self._history)})"
