"""ATS optimization agent - rates how well a resume survives applicant tracking systems."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..errors import AgentValidationError
from ..models import DataBundle, Profile, coerce_bundle, coerce_profile
from ..skills.ats_prompt import ATS_OPTIMIZATION_PROMPT, ATS_RESPONSE_FORMAT
from .base import Agent, as_number
from .formatting import format_job_header, format_resume, join_or
from .protocol import AgentConfig, AgentContext

KEYWORD_DENSITIES = ("conservative", "moderate", "aggressive")

_GRADES = ((90, "Excellent"), (80, "Good"), (70, "Fair"), (60, "Poor"))


def ats_grade(score: float) -> str:
    for threshold, grade in _GRADES:
        if score >= threshold:
            return grade
    return "Critical"


@dataclass
class ATSOptimizationInput:
    profile: Optional[Profile] = None
    data: Optional[DataBundle] = None
    target_ats: List[str] = field(default_factory=list)
    keyword_density: str = "moderate"
    focus_areas: List[str] = field(default_factory=list)
    preserve_readability: bool = True

    @classmethod
    def from_input(cls, input_data: Optional[Mapping[str, Any]], context: AgentContext) -> "ATSOptimizationInput":
        input_data = input_data or {}
        return cls(
            profile=coerce_profile(input_data.get("profile")) or context.profile,
            data=coerce_bundle(input_data.get("data")) or context.data,
            target_ats=list(input_data.get("target_ats") or []),
            keyword_density=input_data.get("keyword_density") or "moderate",
            focus_areas=list(input_data.get("focus_areas") or []),
            preserve_readability=input_data.get("preserve_readability", True) is not False,
        )


class ATSOptimizationAgent(Agent):
    """Finds ATS parsing issues and missing keywords and plans the fixes."""

    def __init__(self, completion_client=None, default_config=None, observer=None):
        super().__init__(
            agent_id="ats-optimizer",
            name="ATS Optimization Agent",
            description="Optimizes resumes for Applicant Tracking Systems with keyword and formatting analysis",
            completion_client=completion_client,
            default_config=default_config,
            observer=observer,
        )

    async def process(self, input_data: Any, context: AgentContext, config: AgentConfig) -> Dict[str, Any]:
        request = ATSOptimizationInput.from_input(input_data, context)
        self.validate_input(request)

        system_prompt = self.with_custom_instructions(ATS_OPTIMIZATION_PROMPT, config)
        result = await self.execute_ai(system_prompt, self.build_user_prompt(request, context), config)
        return self.repair_result(result)

    def validate_input(self, request: ATSOptimizationInput) -> None:
        if request.profile is None or not request.profile.id:
            raise AgentValidationError("Valid profile is required for ATS optimization")
        if request.data is None:
            raise AgentValidationError("Data bundle is required for ATS optimization")
        if not request.profile.selected_data(request.data).has_content():
            raise AgentValidationError("Resume must have some content to optimize for ATS")

    def build_user_prompt(self, request: ATSOptimizationInput, context: AgentContext) -> str:
        selected = request.profile.selected_data(request.data)
        sections = [
            f"RESUME TO OPTIMIZE:\n{format_resume(request.profile, selected)}",
            "OPTIMIZATION PARAMETERS:\n"
            f"- Target ATS Systems: {join_or(request.target_ats, 'All major systems')}\n"
            f"- Keyword Density Strategy: {request.keyword_density}\n"
            f"- Focus Areas: {join_or(request.focus_areas, 'All areas')}\n"
            f"- Preserve Readability: {'Yes' if request.preserve_readability else 'No'}",
        ]
        if context.job_description:
            sections.append(
                f"TARGET JOB:\n{format_job_header(context)}\n\nJOB DESCRIPTION:\n{context.job_description}"
            )
        else:
            sections.append("TARGET JOB: None provided. Optimize for general ATS compatibility.")
        sections.append(ATS_RESPONSE_FORMAT)
        return "\n\n".join(sections)

    def repair_result(self, result: Dict[str, Any]) -> Dict[str, Any]:
        issues = result.get("ats_issues")
        if not isinstance(issues, dict):
            issues = {}
        for key in ("critical", "high", "medium", "low"):
            issues.setdefault(key, [])
        result["ats_issues"] = issues

        plan = result.get("action_plan")
        if not isinstance(plan, dict):
            plan = {}
        for key in ("immediate", "short_term", "long_term"):
            plan.setdefault(key, [])
        result["action_plan"] = plan

        if not isinstance(result.get("keyword_optimization"), dict):
            result["keyword_optimization"] = {
                "current_keyword_score": 60,
                "potential_keyword_score": 80,
                "missing_keywords": [],
                "overused_keywords": [],
                "keyword_density": {
                    "current": 2.0,
                    "optimal": 3.0,
                    "recommendation": "Increase keyword density with natural integration",
                },
            }

        overall = result.get("overall_ats_score")
        if not isinstance(overall, dict):
            overall = {
                "score": 70,
                "summary": "ATS optimization analysis completed with standard assessment",
                "key_strengths": ["Professional structure"],
                "critical_weaknesses": ["Keyword optimization needed"],
            }
        overall["grade"] = ats_grade(as_number(overall.get("score")))
        result["overall_ats_score"] = overall
        return result

    def calculate_confidence(self, result: Dict[str, Any], context: AgentContext) -> float:
        issues = result.get("ats_issues")
        if not result.get("overall_ats_score") or not issues:
            return 30

        confidence = 80
        total_issues = sum(len(items) for items in issues.values() if isinstance(items, list))
        if total_issues >= 5:
            confidence += 10
        elif total_issues >= 3:
            confidence += 5

        missing = (result.get("keyword_optimization") or {}).get("missing_keywords") or []
        if len(missing) >= 3:
            confidence += 5

        if len((result.get("action_plan") or {}).get("immediate") or []) >= 2:
            confidence += 5

        return min(confidence, 95)
