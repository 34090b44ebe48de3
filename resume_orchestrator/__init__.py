"""AI agent orchestration core for the resume builder.

Agents turn resume data and a job description into structured suggestions;
the orchestrator runs them singly, in sequence or in parallel; the workflow
coordinator composes them into named workflows and summarizes the results.
"""

from .agents import (
    Agent,
    AgentConfig,
    AgentContext,
    AgentExecutionOptions,
    AgentOrchestrator,
    BaseAgentResponse,
)
from .errors import (
    AgentError,
    AgentExecutionError,
    AgentNotFoundError,
    AgentValidationError,
    CompletionError,
)
from .factory import create_coordinator, create_default_agents, create_orchestrator
from .models import DataBundle, Profile
from .workflows import WorkflowConfig, WorkflowCoordinator, WorkflowResult, WorkflowType

__all__ = [
    "Agent",
    "AgentConfig",
    "AgentContext",
    "AgentExecutionOptions",
    "AgentOrchestrator",
    "BaseAgentResponse",
    "AgentError",
    "AgentExecutionError",
    "AgentNotFoundError",
    "AgentValidationError",
    "CompletionError",
    "create_coordinator",
    "create_default_agents",
    "create_orchestrator",
    "DataBundle",
    "Profile",
    "WorkflowConfig",
    "WorkflowCoordinator",
    "WorkflowResult",
    "WorkflowType",
]
