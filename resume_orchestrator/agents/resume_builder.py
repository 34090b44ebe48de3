"""Resume builder agent - selects the experiences and projects to feature for a job."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from ..errors import AgentValidationError
from ..skills.resume_builder_prompt import RESUME_BUILDER_PROMPT, RESUME_BUILDER_RESPONSE_FORMAT
from .base import Agent, as_number
from .formatting import as_dict, format_experiences, format_job_header, format_projects
from .protocol import AgentConfig, AgentContext

MIN_SELECTIONS = 3
MIN_JOB_DESCRIPTION_LENGTH = 50
BACKFILL_SCORE = 50
BACKFILL_REASON = "Selected to meet minimum requirement"
BACKFILL_NOTE = " (Additional items added to meet 3-item minimum)"


@dataclass
class ResumeBuilderInput:
    max_experiences: Optional[int] = None
    max_projects: Optional[int] = None
    min_experiences: Optional[int] = None
    min_projects: Optional[int] = None
    enforce_minimums: bool = True
    selection_criteria: Optional[str] = None

    @classmethod
    def from_input(cls, input_data: Optional[Mapping[str, Any]]) -> "ResumeBuilderInput":
        input_data = input_data or {}
        return cls(
            max_experiences=input_data.get("max_experiences"),
            max_projects=input_data.get("max_projects"),
            min_experiences=input_data.get("min_experiences"),
            min_projects=input_data.get("min_projects"),
            enforce_minimums=input_data.get("enforce_minimums", True) is not False,
            selection_criteria=input_data.get("selection_criteria"),
        )


class ResumeBuilderAgent(Agent):
    """Chooses the most relevant experiences and projects for a job description.

    At least three items are always returned when enough exist, unless the
    caller disables ``enforce_minimums``; the model's picks are topped up
    from the remaining experiences first, then projects.
    """

    def __init__(self, completion_client=None, default_config=None, observer=None):
        super().__init__(
            agent_id="resume-builder",
            name="Resume Builder Agent",
            description=(
                "Analyzes job descriptions and selects optimal experiences and projects "
                "for resume building with minimum 3 selections"
            ),
            completion_client=completion_client,
            default_config=default_config,
            observer=observer,
        )

    async def process(self, input_data: Any, context: AgentContext, config: AgentConfig) -> Dict[str, Any]:
        request = ResumeBuilderInput.from_input(input_data)
        self.validate_input(context)

        system_prompt = self.with_custom_instructions(RESUME_BUILDER_PROMPT, config)
        result = await self.execute_ai(system_prompt, self.build_user_prompt(request, context), config)
        return self.enforce_minimum_selections(result, context, request)

    def validate_input(self, context: AgentContext) -> None:
        job_description = (context.job_description or "").strip()
        if not job_description:
            raise AgentValidationError("Job description is required for resume building")

        data = context.data
        if data is None or not (data.experiences or data.projects):
            raise AgentValidationError("No experiences or projects available to select from")

        if len(context.job_description) < MIN_JOB_DESCRIPTION_LENGTH:
            raise AgentValidationError("Job description is too short for meaningful analysis")

    def build_user_prompt(self, request: ResumeBuilderInput, context: AgentContext) -> str:
        data = context.data
        return (
            f"JOB DESCRIPTION:\n{context.job_description}\n\n"
            f"{format_job_header(context)}\n\n"
            f"AVAILABLE EXPERIENCES ({len(data.experiences)} total):\n{format_experiences(data.experiences)}\n\n"
            f"AVAILABLE PROJECTS ({len(data.projects)} total):\n{format_projects(data.projects)}\n\n"
            "SELECTION PARAMETERS:\n"
            f"- Maximum experiences to select: {request.max_experiences or 'No limit'}\n"
            f"- Maximum projects to select: {request.max_projects or 'No limit'}\n"
            f"- Minimum experiences to include: {request.min_experiences or 'Not specified'}\n"
            f"- Minimum projects to include: {request.min_projects or 'Not specified'}\n"
            f"- Enforce minimums: {'Yes' if request.enforce_minimums else 'No'}\n"
            f"- Custom criteria: {request.selection_criteria or 'Use standard criteria'}\n\n"
            f"Select AT LEAST {MIN_SELECTIONS} items in total unless fewer are available.\n\n"
            f"{RESUME_BUILDER_RESPONSE_FORMAT}"
        )

    def enforce_minimum_selections(
        self,
        result: Dict[str, Any],
        context: AgentContext,
        request: ResumeBuilderInput,
    ) -> Dict[str, Any]:
        """Top up the selection to three items from the unselected library items."""
        experiences: List[Dict[str, Any]] = list(result.get("selected_experiences") or [])
        projects: List[Dict[str, Any]] = list(result.get("selected_projects") or [])
        result["selected_experiences"] = experiences
        result["selected_projects"] = projects

        analysis = result.get("selection_analysis")
        if not isinstance(analysis, dict):
            analysis = {"selection_strategy": "", "key_factors": [], "missing_skills_needed": []}
        result["selection_analysis"] = analysis

        selected = len(experiences) + len(projects)
        if selected >= MIN_SELECTIONS or not request.enforce_minimums:
            return result

        chosen_experiences = {_item_id(entry, "experience") for entry in experiences}
        chosen_projects = {_item_id(entry, "project") for entry in projects}
        total = selected

        for exp in context.data.experiences:
            if total >= MIN_SELECTIONS:
                break
            if exp.id in chosen_experiences:
                continue
            experiences.append({
                "experience": as_dict(exp),
                "relevance_score": BACKFILL_SCORE,
                "reasons": [BACKFILL_REASON],
                "suggested_order": len(experiences) + 1,
            })
            total += 1

        for proj in context.data.projects:
            if total >= MIN_SELECTIONS:
                break
            if proj.id in chosen_projects:
                continue
            projects.append({
                "project": as_dict(proj),
                "relevance_score": BACKFILL_SCORE,
                "reasons": [BACKFILL_REASON],
                "suggested_order": len(projects) + 1,
            })
            total += 1

        if total > selected:
            analysis["selection_strategy"] = (analysis.get("selection_strategy") or "") + BACKFILL_NOTE
        return result

    def calculate_confidence(self, result: Dict[str, Any], context: AgentContext) -> float:
        experiences = result.get("selected_experiences") or []
        projects = result.get("selected_projects") or []
        if not experiences and not projects:
            return 20

        confidence = 70
        if len(experiences) + len(projects) >= MIN_SELECTIONS:
            confidence += 15

        scores = [as_number(entry.get("relevance_score")) for entry in experiences + projects if isinstance(entry, dict)]
        if all(score >= 60 for score in scores):
            confidence += 10

        if len(result["selection_analysis"].get("key_factors") or []) >= 3:
            confidence += 5

        return min(confidence, 95)


def _item_id(entry: Any, key: str) -> Optional[str]:
    if not isinstance(entry, dict):
        return None
    item = entry.get(key)
    return item.get("id") if isinstance(item, dict) else None
