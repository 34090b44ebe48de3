"""Tests for resume data contracts."""

import pytest
from pydantic import ValidationError

from resume_orchestrator.models import DataBundle, Profile, coerce_bundle, coerce_profile


class TestDataBundle:
    def test_accepts_camel_case(self, sample_data):
        assert sample_data.personal_info.full_name == "Jane Smith"
        assert [e.id for e in sample_data.experiences] == ["exp-1", "exp-2"]

    def test_accepts_snake_case(self):
        bundle = DataBundle(personal_info={"full_name": "Ann", "email": "ann@example.com"})
        assert bundle.personal_info.full_name == "Ann"

    def test_dump_by_alias(self, sample_data):
        payload = sample_data.model_dump(by_alias=True)
        assert payload["personalInfo"]["fullName"] == "Jane Smith"

    def test_has_content(self, sample_data):
        assert sample_data.has_content()
        assert not DataBundle().has_content()
        assert not DataBundle(education=sample_data.education).has_content()

    def test_missing_required_field(self):
        with pytest.raises(ValidationError):
            DataBundle.model_validate({"experiences": [{"id": "exp-1", "title": "Engineer"}]})


class TestProfileSelection:
    def test_selected_data_keeps_selection_order(self, sample_data):
        profile = Profile(id="p", name="Reordered", experience_ids=["exp-2", "exp-1"], skill_ids=["skill-3"])

        selected = profile.selected_data(sample_data)

        assert [e.id for e in selected.experiences] == ["exp-2", "exp-1"]
        assert [s.name for s in selected.skills] == ["PostgreSQL"]
        assert selected.projects == []

    def test_unknown_ids_are_skipped(self, sample_data):
        profile = Profile(id="p", name="Stale", project_ids=["proj-9", "proj-2"])
        assert [p.id for p in profile.selected_data(sample_data).projects] == ["proj-2"]

    def test_overrides_apply_without_touching_master(self, sample_data):
        profile = Profile.model_validate(
            {
                "id": "p",
                "name": "Tailored",
                "experienceIds": ["exp-1"],
                "experienceOverrides": {"exp-1": {"title": "Staff Engineer"}},
            }
        )

        selected = profile.selected_data(sample_data)

        assert selected.experiences[0].title == "Staff Engineer"
        assert selected.experiences[0].company == "Acme Corp"
        assert sample_data.experiences[0].title == "Senior Software Engineer"

    def test_profile_personal_info_wins(self, sample_data):
        profile = Profile(id="p", name="Alias", personal_info={"full_name": "J. Smith", "email": "j@example.com"})
        assert profile.selected_data(sample_data).personal_info.full_name == "J. Smith"
        assert Profile(id="p", name="Plain").selected_data(sample_data).personal_info.full_name == "Jane Smith"


class TestCoercion:
    def test_coerce_profile(self, sample_profile):
        assert coerce_profile(None) is None
        assert coerce_profile(sample_profile) is sample_profile
        assert coerce_profile({"id": "p", "name": "P", "skillIds": ["skill-1"]}).skill_ids == ["skill-1"]

    def test_coerce_bundle(self, sample_data):
        assert coerce_bundle(None) is None
        assert coerce_bundle(sample_data) is sample_data
        assert coerce_bundle({"skills": [{"id": "s", "name": "Go"}]}).skills[0].name == "Go"
