"""Helpers that render resume data into prompt text."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel

from ..models import DataBundle
from .protocol import AgentContext


def as_dict(item: Any) -> Dict[str, Any]:
    """Return ``item`` as a plain dict whether it is a model or a mapping."""
    if isinstance(item, BaseModel):
        return item.model_dump()
    if isinstance(item, Mapping):
        return dict(item)
    raise TypeError(f"Expected a model or mapping, got {type(item).__name__}")


def _joined(values: Optional[Iterable[str]], sep: str, empty: str) -> str:
    values = list(values or [])
    return sep.join(values) if values else empty


def format_job_header(context: AgentContext) -> str:
    return (
        f"COMPANY: {context.company or 'Not specified'}\n"
        f"POSITION: {context.position or 'Not specified'}"
    )


def format_experiences(experiences: Iterable[Any]) -> str:
    lines: List[str] = []
    for idx, exp in enumerate(experiences, start=1):
        exp = as_dict(exp)
        lines.append(
            f"{idx}. [{exp.get('id')}] {exp.get('company')} - {exp.get('title')} ({exp.get('date') or 'n/a'})\n"
            f"   Bullets: {_joined(exp.get('bullets'), ' | ', 'None')}\n"
            f"   Tags: {_joined(exp.get('tags'), ', ', 'None')}"
        )
    return "\n".join(lines) or "None provided"


def format_projects(projects: Iterable[Any]) -> str:
    lines: List[str] = []
    for idx, proj in enumerate(projects, start=1):
        proj = as_dict(proj)
        lines.append(
            f"{idx}. [{proj.get('id')}] {proj.get('title')}\n"
            f"   Link: {proj.get('link') or 'None'}\n"
            f"   Bullets: {_joined(proj.get('bullets'), ' | ', 'None')}\n"
            f"   Tags: {_joined(proj.get('tags'), ', ', 'None')}"
        )
    return "\n".join(lines) or "None provided"


def format_skills(skills: Iterable[Any]) -> str:
    lines = []
    for skill in skills:
        skill = as_dict(skill)
        lines.append(f"- {skill.get('name')}: {skill.get('details') or ''}".rstrip(": "))
    return "\n".join(lines) or "None provided"


def format_education(education: Iterable[Any]) -> str:
    lines = []
    for entry in education:
        entry = as_dict(entry)
        lines.append(f"- {entry.get('title')}: {entry.get('details') or ''}".rstrip(": "))
    return "\n".join(lines) or "None provided"


def format_resume(profile: Any, data: Any) -> str:
    """Render a profile and its data bundle as a plain-text resume summary."""
    info = data.personal_info
    if info is not None:
        personal = (
            f"- Name: {info.full_name}\n"
            f"- Email: {info.email}\n"
            f"- Phone: {info.phone or 'Not provided'}\n"
            f"- Location: {info.location or 'Not provided'}\n"
            f"- LinkedIn: {info.linkedin or 'Not provided'}\n"
            f"- GitHub: {info.github or 'Not provided'}\n"
            f"- Summary: {info.summary or 'No summary provided'}"
        )
    else:
        personal = "No personal information provided"

    return (
        f"PROFILE: {profile.name} ({profile.id})\n\n"
        f"PERSONAL INFORMATION:\n{personal}\n\n"
        f"WORK EXPERIENCES ({len(data.experiences)} total):\n{format_experiences(data.experiences)}\n\n"
        f"PROJECTS ({len(data.projects)} total):\n{format_projects(data.projects)}\n\n"
        f"SKILLS ({len(data.skills)} total):\n{format_skills(data.skills)}\n\n"
        f"EDUCATION ({len(data.education)} total):\n{format_education(data.education)}"
    )


def join_or(values: Optional[Iterable[str]], default: str) -> str:
    return _joined(values, ", ", default)


def selected_data(context: AgentContext) -> Optional[DataBundle]:
    """The profile's selected slice of the context data, or all data without a profile."""
    if context.data is None:
        return None
    if context.profile is None:
        return context.data
    return context.profile.selected_data(context.data)
