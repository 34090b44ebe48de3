"""Value types for workflow requests and results."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from ..models import DataBundle, Profile
from .definitions import WorkflowType

_CAMEL_KEYS = {
    "focusAreas": "focus_areas",
    "customInstructions": "custom_instructions",
    "minExperiences": "min_experiences",
    "minProjects": "min_projects",
}


@dataclass
class WorkflowParameters:
    """Caller overrides applied on top of every step's default input.

    Unknown keys are kept in ``extra`` and passed through to the agents.
    """

    aggressiveness: Optional[int] = None
    focus_areas: Optional[List[str]] = None
    custom_instructions: Optional[str] = None
    min_experiences: Optional[int] = None
    min_projects: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def as_input(self) -> Dict[str, Any]:
        result = dict(self.extra)
        for key in ("aggressiveness", "focus_areas", "custom_instructions", "min_experiences", "min_projects"):
            value = getattr(self, key)
            if value is not None:
                result[key] = list(value) if key == "focus_areas" else value
        return result

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]]) -> "WorkflowParameters":
        """Build parameters from snake_case or camelCase keys."""
        known: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for key, value in (values or {}).items():
            key = _CAMEL_KEYS.get(key, key)
            if key in ("aggressiveness", "focus_areas", "custom_instructions", "min_experiences", "min_projects"):
                known[key] = value
            else:
                extra[key] = value
        return cls(extra=extra, **known)


@dataclass
class WorkflowConfig:
    type: Union[WorkflowType, str]
    job_description: Optional[str] = None
    position: Optional[str] = None
    company: Optional[str] = None
    profile: Optional[Union[Profile, Dict[str, Any]]] = None
    data: Optional[Union[DataBundle, Dict[str, Any]]] = None
    parameters: Optional[Union[WorkflowParameters, Dict[str, Any]]] = None
    parallel_execution: bool = False

    def resolved_parameters(self) -> WorkflowParameters:
        if isinstance(self.parameters, WorkflowParameters):
            return self.parameters
        return WorkflowParameters.from_mapping(self.parameters)

    @property
    def type_name(self) -> str:
        return self.type.value if isinstance(self.type, WorkflowType) else str(self.type)


@dataclass
class AgentRunResult:
    agent_id: str
    success: bool
    data: Any = None
    error: Optional[str] = None
    execution_time: float = 0.0


@dataclass
class WorkflowInsights:
    overall_score: int
    key_recommendations: List[str] = field(default_factory=list)
    priority_actions: List[str] = field(default_factory=list)
    estimated_impact: str = "Low"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class WorkflowResult:
    """Outcome of one workflow run.

    ``success`` reports whether the workflow itself ran to completion;
    individual agent failures are in ``agent_results``.
    """

    success: bool
    workflow_type: str
    agent_results: List[AgentRunResult] = field(default_factory=list)
    workflow_insights: Optional[WorkflowInsights] = None
    total_execution_time: float = 0.0
    error: Optional[str] = None

    @property
    def failed_agents(self) -> List[str]:
        return [r.agent_id for r in self.agent_results if not r.success]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "workflow_type": self.workflow_type,
            "agent_results": [asdict(r) for r in self.agent_results],
            "workflow_insights": self.workflow_insights.to_dict() if self.workflow_insights else None,
            "total_execution_time": self.total_execution_time,
            "error": self.error,
        }


@dataclass
class CustomWorkflowStep:
    agent_id: str
    input: Any = field(default_factory=dict)
    parallel: bool = False
