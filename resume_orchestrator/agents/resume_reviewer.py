"""Resume review agent - scores a complete resume and produces graded feedback."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..errors import AgentValidationError
from ..models import DataBundle, Profile, coerce_bundle, coerce_profile
from ..skills.reviewer_prompt import RESUME_REVIEW_PROMPT, RESUME_REVIEW_RESPONSE_FORMAT
from .base import Agent, as_number
from .formatting import format_job_header, format_resume, join_or
from .protocol import AgentConfig, AgentContext

REVIEW_DEPTHS = ("quick", "standard", "comprehensive")

_GRADES = ((90, "A"), (80, "B"), (70, "C"), (60, "D"))


def letter_grade(score: float) -> str:
    for threshold, grade in _GRADES:
        if score >= threshold:
            return grade
    return "F"


@dataclass
class ResumeReviewInput:
    """Input for the reviewer; ``profile`` and ``data`` default to the context's."""

    profile: Optional[Profile] = None
    data: Optional[DataBundle] = None
    focus_areas: List[str] = field(default_factory=list)
    review_depth: str = "standard"
    user_concerns: Optional[str] = None

    @classmethod
    def from_input(cls, input_data: Optional[Mapping[str, Any]], context: AgentContext) -> "ResumeReviewInput":
        input_data = input_data or {}
        profile = coerce_profile(input_data.get("profile")) or context.profile
        data = coerce_bundle(input_data.get("data")) or context.data
        return cls(
            profile=profile,
            data=data,
            focus_areas=list(input_data.get("focus_areas") or []),
            review_depth=input_data.get("review_depth") or "standard",
            user_concerns=input_data.get("user_concerns"),
        )


class ResumeReviewAgent(Agent):
    """Reviews a profile's resume, optionally against a target job."""

    def __init__(self, completion_client=None, default_config=None, observer=None):
        super().__init__(
            agent_id="resume-reviewer",
            name="Resume Review Agent",
            description="Provides comprehensive resume review with scoring, feedback, and recommendations",
            completion_client=completion_client,
            default_config=default_config,
            observer=observer,
        )

    async def process(self, input_data: Any, context: AgentContext, config: AgentConfig) -> Dict[str, Any]:
        request = ResumeReviewInput.from_input(input_data, context)
        self.validate_input(request)

        system_prompt = self.with_custom_instructions(RESUME_REVIEW_PROMPT, config)
        result = await self.execute_ai(system_prompt, self.build_user_prompt(request, context), config)
        return self.repair_result(result)

    def validate_input(self, request: ResumeReviewInput) -> None:
        if request.profile is None or not request.profile.id:
            raise AgentValidationError("Valid profile is required for resume review")
        if request.data is None:
            raise AgentValidationError("Data bundle is required for resume review")
        selected = request.profile.selected_data(request.data)
        if not selected.has_content():
            raise AgentValidationError(
                "Resume must have some content (experiences, projects, or skills) to review"
            )

    def build_user_prompt(self, request: ResumeReviewInput, context: AgentContext) -> str:
        selected = request.profile.selected_data(request.data)
        sections = [
            f"RESUME TO REVIEW:\n{format_resume(request.profile, selected)}",
            "REVIEW PARAMETERS:\n"
            f"- Review Depth: {request.review_depth}\n"
            f"- Focus Areas: {join_or(request.focus_areas, 'All areas')}\n"
            f"- User Concerns: {request.user_concerns or 'None specified'}",
        ]
        if context.job_description:
            sections.append(
                f"TARGET JOB:\n{format_job_header(context)}\n\nJOB DESCRIPTION:\n{context.job_description}"
            )
        else:
            sections.append("TARGET JOB: None provided. Review for general professional quality.")
        sections.append(RESUME_REVIEW_RESPONSE_FORMAT)
        return "\n\n".join(sections)

    def repair_result(self, result: Dict[str, Any]) -> Dict[str, Any]:
        """Fill missing sections with neutral defaults and derive the letter grade."""
        feedback = result.get("feedback")
        if not isinstance(feedback, dict):
            feedback = {}
        for key in ("critical", "important", "suggestions", "positive"):
            feedback.setdefault(key, [])
        result["feedback"] = feedback

        recommendations = result.get("recommendations")
        if not isinstance(recommendations, dict):
            recommendations = {}
        for key in ("immediate", "short_term", "long_term", "aspirational"):
            recommendations.setdefault(key, [])
        result["recommendations"] = recommendations

        if not isinstance(result.get("ats_analysis"), dict):
            result["ats_analysis"] = {
                "score": 70,
                "keyword_density": 2.5,
                "formatting_issues": [],
                "optimization_suggestions": [
                    "Add more relevant keywords",
                    "Ensure ATS-friendly formatting",
                ],
            }

        assessment = result.get("overall_assessment")
        if not isinstance(assessment, dict):
            assessment = {
                "score": 70,
                "summary": "Resume review completed with standard assessment",
                "strength_areas": ["Professional experience"],
                "improvement_areas": ["Content optimization needed"],
            }
        assessment["grade"] = letter_grade(as_number(assessment.get("score")))
        result["overall_assessment"] = assessment

        if not isinstance(result.get("section_analysis"), dict):
            result["section_analysis"] = {}
        return result

    def calculate_confidence(self, result: Dict[str, Any], context: AgentContext) -> float:
        feedback = result.get("feedback")
        if not result.get("overall_assessment") or not feedback:
            return 30

        confidence = 80
        total_feedback = sum(len(items) for items in feedback.values() if isinstance(items, list))
        if total_feedback >= 5:
            confidence += 10
        elif total_feedback >= 3:
            confidence += 5

        if len(result.get("section_analysis") or {}) >= 3:
            confidence += 5

        if len((result.get("recommendations") or {}).get("immediate") or []) >= 2:
            confidence += 5

        return min(confidence, 95)
