"""Named workflows and the agent steps they run."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)


class WorkflowType(str, Enum):
    FULL_RESUME_OPTIMIZATION = "full-resume-optimization"
    JOB_SPECIFIC_OPTIMIZATION = "job-specific-optimization"
    CONTENT_ENHANCEMENT = "content-enhancement"
    SKILLS_ANALYSIS = "skills-analysis"
    RESUME_REVIEW = "resume-review"
    ATS_OPTIMIZATION = "ats-optimization"
    MANUAL_EDITING_ASSISTANCE = "manual-editing-assistance"
    CUSTOM = "custom"


class StepDefaults:
    """Mixin for the per-agent default inputs of a workflow step."""

    def as_input(self) -> Dict[str, Any]:
        """Fields that are set, as a fresh dict safe for callers to mutate."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            result[f.name] = list(value) if isinstance(value, tuple) else value
        return result


@dataclass(frozen=True)
class SkillsExtractionDefaults(StepDefaults):
    extraction_type: Optional[str] = None
    include_soft_skills: Optional[bool] = None


@dataclass(frozen=True)
class ResumeBuilderDefaults(StepDefaults):
    enforce_minimums: Optional[bool] = None
    min_experiences: Optional[int] = None
    min_projects: Optional[int] = None


@dataclass(frozen=True)
class ContentOptimizationDefaults(StepDefaults):
    aggressiveness: Optional[int] = None
    allow_dramatic_changes: Optional[bool] = None
    preserve_readability: Optional[bool] = None
    focus_areas: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class ResumeReviewDefaults(StepDefaults):
    review_depth: Optional[str] = None
    focus_areas: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class ATSDefaults(StepDefaults):
    keyword_density: Optional[str] = None
    preserve_readability: Optional[bool] = None
    focus_areas: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class GrammarDefaults(StepDefaults):
    pass


@dataclass(frozen=True)
class WorkflowStep:
    agent_id: str
    default_input: StepDefaults


@dataclass(frozen=True)
class WorkflowDefinition:
    steps: Tuple[WorkflowStep, ...]
    parallelizable: bool
    description: str

    @property
    def agent_ids(self) -> List[str]:
        return [step.agent_id for step in self.steps]


WORKFLOW_DEFINITIONS: Mapping[WorkflowType, WorkflowDefinition] = MappingProxyType({
    WorkflowType.FULL_RESUME_OPTIMIZATION: WorkflowDefinition(
        steps=(
            WorkflowStep("skills-extractor", SkillsExtractionDefaults(extraction_type="job-requirements")),
            WorkflowStep("resume-builder", ResumeBuilderDefaults(enforce_minimums=True)),
            WorkflowStep(
                "content-optimizer",
                ContentOptimizationDefaults(aggressiveness=4, allow_dramatic_changes=True),
            ),
            WorkflowStep("ats-optimizer", ATSDefaults(keyword_density="aggressive")),
            WorkflowStep("resume-reviewer", ResumeReviewDefaults(review_depth="comprehensive")),
        ),
        parallelizable=False,
        description="Complete resume optimization from job analysis to final review",
    ),
    WorkflowType.JOB_SPECIFIC_OPTIMIZATION: WorkflowDefinition(
        steps=(
            WorkflowStep("skills-extractor", SkillsExtractionDefaults(extraction_type="skill-gap-analysis")),
            WorkflowStep("resume-builder", ResumeBuilderDefaults(enforce_minimums=True)),
            WorkflowStep(
                "content-optimizer",
                ContentOptimizationDefaults(aggressiveness=3, focus_areas=("keywords", "impact")),
            ),
        ),
        parallelizable=False,
        description="Optimize resume for specific job with gap analysis",
    ),
    WorkflowType.CONTENT_ENHANCEMENT: WorkflowDefinition(
        steps=(
            WorkflowStep(
                "content-optimizer",
                ContentOptimizationDefaults(aggressiveness=2, preserve_readability=True),
            ),
            WorkflowStep("resume-reviewer", ResumeReviewDefaults(focus_areas=("content", "impact"))),
        ),
        parallelizable=False,
        description="Enhance content quality and impact",
    ),
    WorkflowType.SKILLS_ANALYSIS: WorkflowDefinition(
        steps=(
            WorkflowStep("skills-extractor", SkillsExtractionDefaults(extraction_type="job-requirements")),
            WorkflowStep("skills-extractor", SkillsExtractionDefaults(extraction_type="resume-skills")),
            WorkflowStep("skills-extractor", SkillsExtractionDefaults(extraction_type="skill-gap-analysis")),
        ),
        parallelizable=True,
        description="Comprehensive skills analysis and gap identification",
    ),
    WorkflowType.RESUME_REVIEW: WorkflowDefinition(
        steps=(
            WorkflowStep("resume-reviewer", ResumeReviewDefaults(review_depth="comprehensive")),
            WorkflowStep("ats-optimizer", ATSDefaults(focus_areas=("keywords", "formatting"))),
        ),
        parallelizable=True,
        description="Professional resume review with ATS analysis",
    ),
    WorkflowType.ATS_OPTIMIZATION: WorkflowDefinition(
        steps=(
            WorkflowStep("ats-optimizer", ATSDefaults(keyword_density="moderate", preserve_readability=True)),
        ),
        parallelizable=False,
        description="ATS compatibility optimization",
    ),
    WorkflowType.MANUAL_EDITING_ASSISTANCE: WorkflowDefinition(
        steps=(WorkflowStep("grammar-enhancer", GrammarDefaults()),),
        parallelizable=False,
        description="Interactive editing assistance",
    ),
    WorkflowType.CUSTOM: WorkflowDefinition(
        steps=(),
        parallelizable=True,
        description="Custom workflow",
    ),
})


def get_workflow_definition(workflow_type: Union[WorkflowType, str]) -> Tuple[WorkflowDefinition, bool]:
    """Look up a workflow definition.

    Args:
        workflow_type: A WorkflowType or its string value

    Returns:
        Tuple of (definition, resolved). Unknown types resolve to the empty
        ``custom`` definition with ``resolved`` False.
    """
    try:
        key = WorkflowType(workflow_type)
    except ValueError:
        logger.warning(f"Unknown workflow type '{workflow_type}', falling back to custom")
        return WORKFLOW_DEFINITIONS[WorkflowType.CUSTOM], False
    return WORKFLOW_DEFINITIONS[key], True


def list_workflows() -> List[Dict[str, Any]]:
    return [
        {
            "type": workflow_type.value,
            "description": definition.description,
            "parallelizable": definition.parallelizable,
            "agents": definition.agent_ids,
        }
        for workflow_type, definition in WORKFLOW_DEFINITIONS.items()
    ]
