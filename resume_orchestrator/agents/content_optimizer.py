"""Content optimization agent - rewrites resume items to match a job."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..errors import AgentValidationError
from ..skills.content_optimizer_prompt import (
    AGGRESSIVE_GUIDANCE,
    CONTENT_OPTIMIZER_PROMPT,
    CONTENT_OPTIMIZER_RESPONSE_FORMAT,
    MODERATE_GUIDANCE,
    STANDARD_GUIDANCE,
)
from .base import Agent, as_number
from .formatting import as_dict, format_job_header, join_or, selected_data
from .protocol import AgentConfig, AgentContext

ITEM_TYPES = ("experience", "project", "skill")
MIN_JOB_DESCRIPTION_LENGTH = 50
MIN_IMPROVEMENT_SCORE = 50
DEFAULT_MAJOR_CHANGE = "Content enhanced for job alignment"


@dataclass
class OptimizationItem:
    type: str
    data: Dict[str, Any]


@dataclass
class ContentOptimizationInput:
    """Input for the content optimizer.

    Without explicit ``items`` the profile's selected experiences, projects
    and skills from the context are optimized.
    """

    items: List[OptimizationItem] = field(default_factory=list)
    aggressiveness: int = 3
    focus_areas: List[str] = field(default_factory=list)
    allow_dramatic_changes: bool = True
    custom_instructions: Optional[str] = None

    @classmethod
    def from_input(cls, input_data: Optional[Mapping[str, Any]], context: AgentContext) -> "ContentOptimizationInput":
        input_data = input_data or {}
        raw_items = input_data.get("items")
        if raw_items is None:
            raw_items = _items_from_context(context)

        items = []
        for raw in raw_items:
            if isinstance(raw, OptimizationItem):
                items.append(raw)
            else:
                items.append(OptimizationItem(type=raw.get("type"), data=as_dict(raw.get("data") or {})))

        return cls(
            items=items,
            aggressiveness=input_data.get("aggressiveness") or 3,
            focus_areas=list(input_data.get("focus_areas") or []),
            allow_dramatic_changes=input_data.get("allow_dramatic_changes", True) is not False,
            custom_instructions=input_data.get("custom_instructions"),
        )


def _items_from_context(context: AgentContext) -> List[Dict[str, Any]]:
    data = selected_data(context)
    if data is None:
        return []
    items = [{"type": "experience", "data": exp} for exp in data.experiences]
    items += [{"type": "project", "data": proj} for proj in data.projects]
    items += [{"type": "skill", "data": skill} for skill in data.skills]
    return items


class ContentOptimizationAgent(Agent):
    """Rewrites bullets and tags of resume items to align with a job description."""

    def __init__(self, completion_client=None, default_config=None, observer=None):
        super().__init__(
            agent_id="content-optimizer",
            name="Content Optimization Agent",
            description=(
                "Optimizes resume content to match job requirements with rewrites "
                "and keyword integration"
            ),
            completion_client=completion_client,
            default_config=default_config,
            observer=observer,
        )

    async def process(self, input_data: Any, context: AgentContext, config: AgentConfig) -> Dict[str, Any]:
        request = ContentOptimizationInput.from_input(input_data, context)
        self.validate_input(request, context)

        system_prompt = self.with_custom_instructions(CONTENT_OPTIMIZER_PROMPT, config)
        result = await self.execute_ai(system_prompt, self.build_user_prompt(request, context), config)
        return self.repair_result(result, request)

    def validate_input(self, request: ContentOptimizationInput, context: AgentContext) -> None:
        if not request.items:
            raise AgentValidationError("No items provided for optimization")

        job_description = (context.job_description or "").strip()
        if not job_description:
            raise AgentValidationError("Job description is required for content optimization")
        if len(context.job_description) < MIN_JOB_DESCRIPTION_LENGTH:
            raise AgentValidationError("Job description is too short for meaningful optimization")

        for item in request.items:
            if item.type not in ITEM_TYPES:
                raise AgentValidationError(f"Invalid item type: {item.type}")

    def build_user_prompt(self, request: ContentOptimizationInput, context: AgentContext) -> str:
        level = request.aggressiveness
        if level >= 4:
            label, guidance = "EXTREMELY AGGRESSIVE", AGGRESSIVE_GUIDANCE
        elif level >= 3:
            label, guidance = "AGGRESSIVE", STANDARD_GUIDANCE
        else:
            label, guidance = "MODERATE", MODERATE_GUIDANCE

        rendered = []
        for idx, item in enumerate(request.items, start=1):
            data = item.data
            if item.type == "experience":
                heading = f"Title: {data.get('title')} at {data.get('company')}"
            elif item.type == "project":
                heading = f"Project: {data.get('title')}"
            else:
                heading = f"Skill: {data.get('name')}"
            lines = [
                f"{idx}. TYPE: {item.type.upper()}",
                f"   {heading}",
                f"   Current Bullets: {json.dumps(data.get('bullets') or [])}",
                f"   Current Tags: {json.dumps(data.get('tags') or [])}",
            ]
            if item.type == "skill":
                lines.append(f"   Details: {data.get('details') or ''}")
            if item.type == "project" and data.get("link"):
                lines.append(f"   Link: {data['link']}")
            rendered.append("\n".join(lines))

        return (
            f"JOB DESCRIPTION TO OPTIMIZE AGAINST:\n{context.job_description}\n\n"
            f"{format_job_header(context)}\n\n"
            f"ITEMS TO OPTIMIZE ({len(request.items)} total):\n" + "\n\n".join(rendered) + "\n\n"
            "OPTIMIZATION PARAMETERS:\n"
            f"- Aggressiveness Level: {level}/5 ({label})\n"
            f"- Focus Areas: {join_or(request.focus_areas, 'All areas')}\n"
            f"- Allow Dramatic Changes: {'YES' if request.allow_dramatic_changes else 'NO'}\n"
            f"- Custom Instructions: {request.custom_instructions or 'None'}\n\n"
            f"{guidance}\n\n"
            f"{CONTENT_OPTIMIZER_RESPONSE_FORMAT}"
        )

    def repair_result(self, result: Dict[str, Any], request: ContentOptimizationInput) -> Dict[str, Any]:
        """Require one entry per input item and guarantee a recorded change per entry."""
        optimized = result.get("optimized_items")
        if not isinstance(optimized, list) or len(optimized) != len(request.items):
            raise AgentValidationError("Optimization failed to process all items")

        for entry in optimized:
            if not isinstance(entry, dict):
                raise AgentValidationError("Optimization failed to process all items")

            changes = entry.get("changes_summary")
            if not isinstance(changes, dict):
                changes = {}
            if not changes.get("bullets_modified"):
                changes["bullets_modified"] = 1
                if not changes.get("major_changes"):
                    changes["major_changes"] = [DEFAULT_MAJOR_CHANGE]
            entry["changes_summary"] = changes

            score = as_number(entry.get("improvement_score"))
            entry["improvement_score"] = max(MIN_IMPROVEMENT_SCORE, score)

        analysis = result.get("optimization_analysis")
        if not isinstance(analysis, dict):
            result["optimization_analysis"] = {"total_items_processed": len(optimized)}
        return result

    def calculate_confidence(self, result: Dict[str, Any], context: AgentContext) -> float:
        if not result.get("optimized_items"):
            return 20

        analysis = result.get("optimization_analysis") or {}
        confidence = 70

        average = as_number(analysis.get("average_improvement_score"))
        if average >= 80:
            confidence += 15
        elif average >= 70:
            confidence += 10
        elif average >= 60:
            confidence += 5

        rewritten = as_number(analysis.get("content_rewritten_percent"))
        if rewritten >= 70:
            confidence += 10
        elif rewritten >= 50:
            confidence += 5

        if len(analysis.get("key_technologies_added") or []) >= 5:
            confidence += 5

        return min(confidence, 95)
