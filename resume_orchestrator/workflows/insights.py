"""Combine per-agent results into workflow-level insights."""

from __future__ import annotations

from typing import Any, List, Sequence

from .models import AgentRunResult, WorkflowInsights

MAX_KEY_RECOMMENDATIONS = 5
MAX_PRIORITY_ACTIONS = 3


def estimated_impact(score: int) -> str:
    if score >= 80:
        return "High"
    if score >= 60:
        return "Medium"
    return "Low"


def _strings(values: Any) -> List[str]:
    if not isinstance(values, list):
        return []
    return [value for value in values if isinstance(value, str)]


def generate_workflow_insights(results: Sequence[AgentRunResult]) -> WorkflowInsights:
    """Summarize a workflow run.

    The score is the percentage of successful agent runs. Recommendations and
    actions are collected from successful reviewer, ATS and skills results in
    run order.

    Args:
        results: Per-agent results of the run

    Returns:
        WorkflowInsights; an empty run scores 0 with Low impact
    """
    if not results:
        return WorkflowInsights(overall_score=0, estimated_impact="Low")

    succeeded = sum(1 for r in results if r.success)
    score = round(succeeded / len(results) * 100)

    key_recommendations: List[str] = []
    priority_actions: List[str] = []
    for result in results:
        if not result.success or not isinstance(result.data, dict):
            continue
        data = result.data

        if result.agent_id == "resume-reviewer":
            recommendations = data.get("recommendations")
            if isinstance(recommendations, dict):
                key_recommendations.extend(_strings(recommendations.get("immediate")))
                priority_actions.extend(_strings(recommendations.get("short_term")))

        elif result.agent_id == "ats-optimizer":
            plan = data.get("action_plan")
            if isinstance(plan, dict):
                for item in plan.get("immediate") or []:
                    if isinstance(item, dict) and item.get("action"):
                        priority_actions.append(item["action"])

        elif result.agent_id == "skills-extractor":
            gaps = data.get("skill_gaps")
            if isinstance(gaps, dict):
                key_recommendations.extend(_strings(gaps.get("recommendations")))

    return WorkflowInsights(
        overall_score=score,
        key_recommendations=key_recommendations[:MAX_KEY_RECOMMENDATIONS],
        priority_actions=priority_actions[:MAX_PRIORITY_ACTIONS],
        estimated_impact=estimated_impact(score),
    )
