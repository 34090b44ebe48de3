"""Named and custom multi-agent workflows."""

from .definitions import (
    WORKFLOW_DEFINITIONS,
    ATSDefaults,
    ContentOptimizationDefaults,
    GrammarDefaults,
    ResumeBuilderDefaults,
    ResumeReviewDefaults,
    SkillsExtractionDefaults,
    WorkflowDefinition,
    WorkflowStep,
    WorkflowType,
    get_workflow_definition,
    list_workflows,
)
from .models import (
    AgentRunResult,
    CustomWorkflowStep,
    WorkflowConfig,
    WorkflowInsights,
    WorkflowParameters,
    WorkflowResult,
)
from .insights import generate_workflow_insights
from .coordinator import WorkflowCoordinator

__all__ = [
    "WORKFLOW_DEFINITIONS",
    "ATSDefaults",
    "ContentOptimizationDefaults",
    "GrammarDefaults",
    "ResumeBuilderDefaults",
    "ResumeReviewDefaults",
    "SkillsExtractionDefaults",
    "WorkflowDefinition",
    "WorkflowStep",
    "WorkflowType",
    "get_workflow_definition",
    "list_workflows",
    "AgentRunResult",
    "CustomWorkflowStep",
    "WorkflowConfig",
    "WorkflowInsights",
    "WorkflowParameters",
    "WorkflowResult",
    "generate_workflow_insights",
    "WorkflowCoordinator",
]
