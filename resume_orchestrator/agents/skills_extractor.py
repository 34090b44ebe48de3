"""Skills extraction agent - extracts skills from job descriptions and resumes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..errors import AgentValidationError
from ..models import Skill
from ..skills.skills_prompt import (
    JOB_REQUIREMENTS_FOCUS,
    RESUME_SKILLS_FOCUS,
    SKILL_GAP_FOCUS,
    SKILL_GAPS_RESPONSE_FORMAT,
    SKILLS_EXTRACTION_PROMPT,
    SKILLS_RESPONSE_FORMAT,
)
from .base import Agent, as_number
from .formatting import format_experiences, format_projects, format_skills, join_or, selected_data
from .protocol import AgentConfig, AgentContext

EXTRACTION_TYPES = ("job-requirements", "resume-skills", "skill-gap-analysis")
MIN_SOURCE_LENGTH = 20

_FOCUS_BY_TYPE = {
    "job-requirements": JOB_REQUIREMENTS_FOCUS,
    "resume-skills": RESUME_SKILLS_FOCUS,
    "skill-gap-analysis": SKILL_GAP_FOCUS,
}


@dataclass
class SkillsExtractionInput:
    """Input for the skills extractor.

    ``source_text`` falls back to the job description, or for
    ``resume-skills`` to the resume content in the context. For gap analysis
    ``existing_skills`` falls back to the skills in the context data.
    """

    source_text: str = ""
    extraction_type: Optional[str] = None
    existing_skills: List[Skill] = field(default_factory=list)
    focus_categories: List[str] = field(default_factory=list)
    include_soft_skills: bool = True
    confidence_threshold: int = 60

    @classmethod
    def from_input(cls, input_data: Optional[Mapping[str, Any]], context: AgentContext) -> "SkillsExtractionInput":
        input_data = input_data or {}
        extraction_type = input_data.get("extraction_type")

        source_text = input_data.get("source_text") or ""
        if not source_text:
            if extraction_type == "resume-skills":
                source_text = _resume_text(context)
            else:
                source_text = context.job_description or ""

        existing = input_data.get("existing_skills")
        if existing is None and extraction_type == "skill-gap-analysis" and context.data is not None:
            existing = context.data.skills

        return cls(
            source_text=source_text,
            extraction_type=extraction_type,
            existing_skills=[s if isinstance(s, Skill) else Skill.model_validate(s) for s in existing or []],
            focus_categories=list(input_data.get("focus_categories") or []),
            include_soft_skills=input_data.get("include_soft_skills", True) is not False,
            confidence_threshold=input_data.get("confidence_threshold") or 60,
        )


def _resume_text(context: AgentContext) -> str:
    data = selected_data(context)
    if data is None:
        return ""
    return (
        f"EXPERIENCES:\n{format_experiences(data.experiences)}\n\n"
        f"PROJECTS:\n{format_projects(data.projects)}\n\n"
        f"SKILLS:\n{format_skills(data.skills)}"
    )


class SkillsExtractionAgent(Agent):
    """Extracts and categorizes skills, with optional gap analysis."""

    def __init__(self, completion_client=None, default_config=None, observer=None):
        super().__init__(
            agent_id="skills-extractor",
            name="Skills Extraction Agent",
            description=(
                "Extracts skills, technologies, and requirements from job descriptions "
                "and resumes with gap analysis"
            ),
            completion_client=completion_client,
            default_config=default_config,
            observer=observer,
        )

    async def process(self, input_data: Any, context: AgentContext, config: AgentConfig) -> Dict[str, Any]:
        request = SkillsExtractionInput.from_input(input_data, context)
        self.validate_input(request)

        system_prompt = self.with_custom_instructions(SKILLS_EXTRACTION_PROMPT, config)
        result = await self.execute_ai(system_prompt, self.build_user_prompt(request, context), config)
        return self.repair_result(result)

    def validate_input(self, request: SkillsExtractionInput) -> None:
        if not request.source_text.strip():
            raise AgentValidationError("Source text is required for skills extraction")
        if len(request.source_text) < MIN_SOURCE_LENGTH:
            raise AgentValidationError("Source text is too short for meaningful skills extraction")
        if request.extraction_type not in EXTRACTION_TYPES:
            raise AgentValidationError("Invalid extraction type specified")
        if request.extraction_type == "skill-gap-analysis" and not request.existing_skills:
            raise AgentValidationError("Existing skills are required for gap analysis")

    def build_user_prompt(self, request: SkillsExtractionInput, context: AgentContext) -> str:
        extraction_type = request.extraction_type or ""
        sections = [
            f"EXTRACTION TASK: {extraction_type.upper()}",
            f"SOURCE TEXT TO ANALYZE:\n{request.source_text}",
        ]
        if context.position:
            sections.append(f"POSITION: {context.position}")
        if context.company:
            sections.append(f"COMPANY: {context.company}")

        sections.append(
            "EXTRACTION PARAMETERS:\n"
            f"- Focus Categories: {join_or(request.focus_categories, 'All categories')}\n"
            f"- Include Soft Skills: {'Yes' if request.include_soft_skills else 'No'}\n"
            f"- Confidence Threshold: {request.confidence_threshold}%"
        )
        if request.existing_skills:
            sections.append(
                f"EXISTING SKILLS FOR COMPARISON ({len(request.existing_skills)} total):\n"
                f"{format_skills(request.existing_skills)}"
            )

        sections.append(_FOCUS_BY_TYPE[extraction_type])
        sections.append(SKILLS_RESPONSE_FORMAT)
        if extraction_type == "skill-gap-analysis":
            sections.append(SKILL_GAPS_RESPONSE_FORMAT)
        return "\n\n".join(sections)

    def repair_result(self, result: Dict[str, Any]) -> Dict[str, Any]:
        """Fill missing sections and recompute the summary from the skills themselves."""
        extracted = result.get("extracted_skills")
        if not isinstance(extracted, dict):
            extracted = {}
        result["extracted_skills"] = extracted

        summary = result.get("extraction_summary")
        if not isinstance(summary, dict):
            summary = {}
        result["extraction_summary"] = summary

        insights = result.get("insights")
        if not isinstance(insights, dict):
            insights = {}
        for key in ("top_categories", "emerging_technologies", "industry_standards", "recommended_focus"):
            insights.setdefault(key, [])
        result["insights"] = insights

        total = high = medium = low = 0
        critical: List[str] = []
        preferred: List[str] = []
        for skills in extracted.values():
            for skill in skills or []:
                if not isinstance(skill, dict):
                    continue
                total += 1
                confidence = as_number(skill.get("confidence"))
                if confidence >= 80:
                    high += 1
                elif confidence >= 60:
                    medium += 1
                else:
                    low += 1

                importance = skill.get("importance")
                if importance == "critical":
                    critical.append(skill.get("name", ""))
                elif importance in ("important", "preferred"):
                    preferred.append(skill.get("name", ""))

        summary["total_skills_found"] = total
        summary["categories_identified"] = list(extracted.keys())
        summary["critical_skills"] = critical
        summary["preferred_skills"] = preferred
        summary["confidence_distribution"] = {"high": high, "medium": medium, "low": low}
        return result

    def calculate_confidence(self, result: Dict[str, Any], context: AgentContext) -> float:
        if not result.get("extracted_skills"):
            return 20

        summary = result.get("extraction_summary", {})
        confidence = 70

        total = as_number(summary.get("total_skills_found"))
        if total >= 15:
            confidence += 15
        elif total >= 10:
            confidence += 10
        elif total >= 5:
            confidence += 5

        categories = len(summary.get("categories_identified", []))
        if categories >= 5:
            confidence += 5
        elif categories >= 3:
            confidence += 3

        if as_number((summary.get("confidence_distribution") or {}).get("high")) >= 5:
            confidence += 5

        if len(result.get("insights", {}).get("top_categories") or []) >= 3:
            confidence += 5

        return min(confidence, 95)
