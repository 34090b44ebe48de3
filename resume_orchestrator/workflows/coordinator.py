"""Workflow coordinator - runs named and custom multi-agent workflows."""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Union

from ..agents.orchestrator import AgentStep
from ..agents.protocol import AgentContext, AgentExecutionOptions, BaseAgentResponse
from ..errors import AgentExecutionError
from ..models import coerce_bundle, coerce_profile
from .definitions import WorkflowDefinition, WorkflowType, get_workflow_definition
from .insights import generate_workflow_insights
from .models import (
    AgentRunResult,
    CustomWorkflowStep,
    WorkflowConfig,
    WorkflowInsights,
    WorkflowResult,
)

if TYPE_CHECKING:
    from ..agents.orchestrator import AgentOrchestrator
    from ..observability import AgentObserver

logger = logging.getLogger(__name__)

DEFAULT_STEP_TIMEOUT_MS = 60000

# A failed review does not invalidate the optimizations before it.
CONTINUE_ON_FAILURE = frozenset({"resume-reviewer"})


class WorkflowCoordinator:
    """Runs workflows on top of an AgentOrchestrator.

    Named workflows come from the workflow table; each step's default input
    is overlaid with the caller's parameters. Sequential runs stop at the
    first failed step unless that step is the reviewer. Parallel runs are
    used only when both the caller asks for them and the workflow allows it.

    Example:
        coordinator = WorkflowCoordinator(orchestrator)
        result = await coordinator.execute_workflow(
            WorkflowConfig(type="resume-review", profile=profile, data=data)
        )
        result.workflow_insights.overall_score
    """

    def __init__(
        self,
        orchestrator: AgentOrchestrator,
        observer: Optional[AgentObserver] = None,
        step_timeout_ms: Optional[int] = DEFAULT_STEP_TIMEOUT_MS,
    ):
        self.orchestrator = orchestrator
        self.observer = observer
        self.step_timeout_ms = step_timeout_ms

    async def execute_workflow(self, config: WorkflowConfig) -> WorkflowResult:
        """Run a named workflow.

        Args:
            config: Workflow type, shared context inputs and parameters

        Returns:
            WorkflowResult. ``success`` is False only when the workflow itself
            raised; agent failures are reported per agent. An unknown type
            runs the empty custom workflow and keeps the requested type name.
        """
        start = time.time()
        workflow_type = config.type_name
        try:
            definition, _ = get_workflow_definition(config.type)
            parameters = config.resolved_parameters().as_input()
            context = self._build_context(config, workflow_type, parameters)
            parallel = config.parallel_execution and definition.parallelizable

            if self.observer:
                self.observer.log_workflow_start(workflow_type, definition.agent_ids, parallel)
            logger.info(
                f"Running workflow '{workflow_type}' with {len(definition.steps)} steps"
                f"{' in parallel' if parallel else ''}"
            )

            steps = self._build_steps(definition, parameters)
            if parallel:
                responses = await self.orchestrator.execute_parallel(steps, context)
            else:
                responses = await self._run_sequential(steps, context)

            agent_results = [self._to_run_result(response) for response in responses]
            insights = self.generate_workflow_insights(agent_results)
            return self._finish(workflow_type, start, agent_results, insights)
        except Exception as e:
            return self._fail(workflow_type, start, e)

    async def _run_sequential(self, steps: Sequence[AgentStep], context: AgentContext) -> List[BaseAgentResponse]:
        responses: List[BaseAgentResponse] = []
        for step in steps:
            response = await self.orchestrator.execute_agent(step.agent_id, step.input, context, step.options)
            responses.append(response)
            if not response.success and step.agent_id not in CONTINUE_ON_FAILURE:
                logger.info(f"Workflow stopped at '{step.agent_id}': {response.error}")
                break
        return responses

    def _build_steps(self, definition: WorkflowDefinition, parameters: Dict[str, Any]) -> List[AgentStep]:
        return [
            AgentStep(
                agent_id=step.agent_id,
                input={**step.default_input.as_input(), **parameters},
                options=AgentExecutionOptions(timeout=self.step_timeout_ms),
            )
            for step in definition.steps
        ]

    def generate_workflow_insights(self, results: Sequence[AgentRunResult]) -> WorkflowInsights:
        return generate_workflow_insights(results)

    async def execute_custom_workflow(
        self,
        agent_sequence: Sequence[Union[CustomWorkflowStep, Dict[str, Any]]],
        config: WorkflowConfig,
    ) -> WorkflowResult:
        """Run caller-defined steps.

        Consecutive ``parallel`` steps run together; every other step runs on
        its own. Groups run in order and a failure does not stop later groups.
        Each step gets only its own ``input``.

        Args:
            agent_sequence: Steps to run
            config: Shared context inputs; ``type`` is ignored

        Returns:
            WorkflowResult with ``workflow_type`` "custom"
        """
        start = time.time()
        workflow_type = WorkflowType.CUSTOM.value
        try:
            steps = [self._coerce_custom_step(step) for step in agent_sequence]
            parameters = config.resolved_parameters().as_input()
            context = self._build_context(config, workflow_type, parameters)

            if self.observer:
                self.observer.log_workflow_start(workflow_type, [s.agent_id for s in steps], False)

            responses: List[BaseAgentResponse] = []
            for group in self.group_custom_steps(steps):
                if len(group) == 1:
                    step = group[0]
                    responses.append(
                        await self.orchestrator.execute_agent(step.agent_id, step.input, context, self._options())
                    )
                else:
                    responses.extend(
                        await self.orchestrator.execute_parallel(
                            [AgentStep(s.agent_id, s.input, self._options()) for s in group],
                            context,
                        )
                    )

            agent_results = [self._to_run_result(response) for response in responses]
            insights = self.generate_workflow_insights(agent_results)
            return self._finish(workflow_type, start, agent_results, insights)
        except Exception as e:
            return self._fail(workflow_type, start, e)

    @staticmethod
    def group_custom_steps(steps: Sequence[CustomWorkflowStep]) -> List[List[CustomWorkflowStep]]:
        """Group consecutive parallel steps; a sequential step closes the open group."""
        groups: List[List[CustomWorkflowStep]] = []
        current: List[CustomWorkflowStep] = []
        for step in steps:
            if step.parallel:
                current.append(step)
                continue
            if current:
                groups.append(current)
                current = []
            groups.append([step])
        if current:
            groups.append(current)
        return groups

    async def execute_single_agent(self, agent_id: str, input_data: Any, config: WorkflowConfig) -> Any:
        """Run one agent with the config's context and return its data.

        Raises:
            AgentNotFoundError: If ``agent_id`` is not registered
            AgentExecutionError: If the agent reports failure
        """
        parameters = config.resolved_parameters().as_input()
        context = self._build_context(config, config.type_name, parameters)
        response = await self.orchestrator.execute_agent(agent_id, input_data, context, self._options())
        if not response.success:
            raise AgentExecutionError(agent_id, response.error)
        return response.data

    def get_available_agents(self):
        return self.orchestrator.list_agents()

    def get_execution_stats(self) -> Dict[str, Any]:
        return self.orchestrator.get_execution_stats()

    def _options(self) -> AgentExecutionOptions:
        return AgentExecutionOptions(timeout=self.step_timeout_ms)

    @staticmethod
    def _build_context(config: WorkflowConfig, workflow_type: str, parameters: Dict[str, Any]) -> AgentContext:
        return AgentContext(
            job_description=config.job_description,
            position=config.position,
            company=config.company,
            profile=coerce_profile(config.profile),
            data=coerce_bundle(config.data),
            metadata={
                "workflow_type": workflow_type,
                "parameters": parameters,
                "started_at": datetime.now().isoformat(),
            },
        )

    @staticmethod
    def _coerce_custom_step(step: Union[CustomWorkflowStep, Dict[str, Any]]) -> CustomWorkflowStep:
        if isinstance(step, CustomWorkflowStep):
            return step
        return CustomWorkflowStep(
            agent_id=step["agent_id"],
            input=step.get("input", {}),
            parallel=bool(step.get("parallel", False)),
        )

    @staticmethod
    def _to_run_result(response: BaseAgentResponse) -> AgentRunResult:
        return AgentRunResult(
            agent_id=response.metadata.agent_id,
            success=response.success,
            data=response.data,
            error=response.error,
            execution_time=response.metadata.processing_time,
        )

    def _finish(
        self,
        workflow_type: str,
        start: float,
        agent_results: List[AgentRunResult],
        insights: WorkflowInsights,
    ) -> WorkflowResult:
        duration_ms = (time.time() - start) * 1000
        if self.observer:
            self.observer.log_workflow_end(workflow_type, True, duration_ms, len(agent_results))
        return WorkflowResult(
            success=True,
            workflow_type=workflow_type,
            agent_results=agent_results,
            workflow_insights=insights,
            total_execution_time=duration_ms,
        )

    def _fail(self, workflow_type: str, start: float, error: Exception) -> WorkflowResult:
        duration_ms = (time.time() - start) * 1000
        message = str(error) or "Unknown workflow error"
        logger.error(f"Workflow '{workflow_type}' failed: {message}")
        if self.observer:
            self.observer.log_error(
                error_type=type(error).__name__,
                message=message,
                context={"workflow_type": workflow_type},
            )
            self.observer.log_workflow_end(workflow_type, False, duration_ms, 0)
        return WorkflowResult(
            success=False,
            workflow_type=workflow_type,
            agent_results=[],
            total_execution_time=duration_ms,
            error=message,
        )
