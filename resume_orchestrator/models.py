"""Resume data contracts consumed by the orchestration core.

The surrounding application owns these records; agents only read them to
build prompts and return suggested edits. Field names are snake_case and
camelCase payloads from the web client are accepted through aliases.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ResumeModel(BaseModel):
    """Base model accepting both snake_case and camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PersonalInfo(ResumeModel):
    full_name: str
    email: str
    phone: str = ""
    location: str = ""
    linkedin: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None
    summary: Optional[str] = None


class Experience(ResumeModel):
    id: str
    title: str
    company: str
    date: str = ""
    bullets: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)


class Project(ResumeModel):
    id: str
    title: str
    link: Optional[str] = None
    bullets: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)


class Skill(ResumeModel):
    id: str
    name: str
    details: str = ""


class Education(ResumeModel):
    id: str
    title: str
    details: str = ""


class DataBundle(ResumeModel):
    """The user's full master library of resume content."""

    personal_info: Optional[PersonalInfo] = None
    experiences: List[Experience] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)

    def has_content(self) -> bool:
        """True when there is at least one experience, project or skill."""
        return bool(self.experiences or self.projects or self.skills)


class AIOptimizationInfo(ResumeModel):
    timestamp: Optional[str] = None
    key_insights: List[str] = Field(default_factory=list)
    job_description_hash: Optional[str] = None


class Profile(ResumeModel):
    """A resume variant assembled from a subset of the master data."""

    id: str
    name: str
    personal_info: Optional[PersonalInfo] = None
    experience_ids: List[str] = Field(default_factory=list)
    project_ids: List[str] = Field(default_factory=list)
    skill_ids: List[str] = Field(default_factory=list)
    education_ids: List[str] = Field(default_factory=list)
    experience_overrides: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    project_overrides: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    skill_overrides: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    education_overrides: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    template: Optional[str] = None
    job_id: Optional[str] = None
    ai_optimization: Optional[AIOptimizationInfo] = None

    def selected_data(self, bundle: DataBundle) -> DataBundle:
        """Return a copy of ``bundle`` limited to this profile's selections.

        Items keep the profile's selection order, and per-item overrides are
        laid over the master records. ``bundle`` itself is left untouched.

        Args:
            bundle: The master data bundle

        Returns:
            A new DataBundle containing only the selected items
        """
        return DataBundle(
            personal_info=self.personal_info or bundle.personal_info,
            experiences=_select(bundle.experiences, self.experience_ids, self.experience_overrides),
            projects=_select(bundle.projects, self.project_ids, self.project_overrides),
            skills=_select(bundle.skills, self.skill_ids, self.skill_overrides),
            education=_select(bundle.education, self.education_ids, self.education_overrides),
        )


def _select(items: List[Any], ids: List[str], overrides: Dict[str, Dict[str, Any]]) -> List[Any]:
    by_id = {item.id: item for item in items}
    selected = []
    for item_id in ids:
        item = by_id.get(item_id)
        if item is None:
            continue
        override = overrides.get(item_id)
        if override:
            item = item.model_validate({**item.model_dump(), **override})
        selected.append(item)
    return selected


def coerce_profile(value: Any) -> Optional[Profile]:
    """Accept a Profile, a plain mapping, or None."""
    if value is None or isinstance(value, Profile):
        return value
    return Profile.model_validate(value)


def coerce_bundle(value: Any) -> Optional[DataBundle]:
    """Accept a DataBundle, a plain mapping, or None."""
    if value is None or isinstance(value, DataBundle):
        return value
    return DataBundle.model_validate(value)
