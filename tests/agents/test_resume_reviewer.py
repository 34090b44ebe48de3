"""Tests for ResumeReviewAgent."""

import pytest

from resume_orchestrator.agents.protocol import AgentContext
from resume_orchestrator.agents.resume_reviewer import ResumeReviewAgent, letter_grade
from resume_orchestrator.models import Profile

FULL_REVIEW = {
    "overall_assessment": {"score": 92, "grade": "B", "summary": "Strong resume"},
    "feedback": {
        "critical": [{"issue": "No metrics"}],
        "important": [{"issue": "Long summary"}, {"issue": "Dense bullets"}],
        "suggestions": [{"issue": "Add links"}],
        "positive": [{"issue": "Clear progression"}],
    },
    "section_analysis": {"summary": {}, "experiences": {}, "projects": {}},
    "recommendations": {"immediate": ["Add metrics", "Trim summary"], "short_term": ["Add certifications"]},
}


@pytest.fixture
def context(job_description, sample_profile, sample_data):
    return AgentContext(job_description=job_description, company="Acme", profile=sample_profile, data=sample_data)


class TestLetterGrade:
    @pytest.mark.parametrize("score,grade", [(95, "A"), (90, "A"), (85, "B"), (70, "C"), (60, "D"), (59, "F")])
    def test_letter_grade(self, score, grade):
        assert letter_grade(score) == grade


class TestResumeReview:
    @pytest.mark.asyncio
    async def test_full_review(self, fake_client, context):
        client = fake_client(FULL_REVIEW)
        agent = ResumeReviewAgent(completion_client=client)

        response = await agent.execute({"review_depth": "comprehensive"}, context)

        assert response.success is True
        assert response.data["overall_assessment"]["grade"] == "A"
        assert response.data["recommendations"]["aspirational"] == []
        assert response.confidence == 95
        prompt = client.prompts[0]
        assert "PROFILE: Backend roles (profile-1)" in prompt
        assert "Review Depth: comprehensive" in prompt
        assert "COMPANY: Acme" in prompt
        assert "Budget Tracker" not in prompt

    @pytest.mark.asyncio
    async def test_empty_reply_gets_defaults(self, fake_client, context):
        agent = ResumeReviewAgent(completion_client=fake_client({}))

        response = await agent.execute({}, context)

        data = response.data
        assert data["overall_assessment"] == {
            "score": 70,
            "grade": "C",
            "summary": "Resume review completed with standard assessment",
            "strength_areas": ["Professional experience"],
            "improvement_areas": ["Content optimization needed"],
        }
        assert data["feedback"] == {"critical": [], "important": [], "suggestions": [], "positive": []}
        assert data["ats_analysis"]["optimization_suggestions"] == [
            "Add more relevant keywords",
            "Ensure ATS-friendly formatting",
        ]
        assert response.confidence == 80

    @pytest.mark.asyncio
    async def test_profile_and_data_from_input(self, fake_client, sample_data):
        client = fake_client(FULL_REVIEW)
        agent = ResumeReviewAgent(completion_client=client)

        response = await agent.execute(
            {
                "profile": {"id": "p-2", "name": "Frontend", "projectIds": ["proj-2"]},
                "data": sample_data.model_dump(by_alias=True),
            },
            AgentContext(),
        )

        assert response.success is True
        assert "Budget Tracker" in client.prompts[0]
        assert "TARGET JOB: None provided" in client.prompts[0]

    @pytest.mark.asyncio
    async def test_requires_profile(self, fake_client, sample_data):
        agent = ResumeReviewAgent(completion_client=fake_client({}))
        response = await agent.execute({}, AgentContext(data=sample_data))
        assert response.error == "Valid profile is required for resume review"

    @pytest.mark.asyncio
    async def test_requires_data(self, fake_client, sample_profile):
        agent = ResumeReviewAgent(completion_client=fake_client({}))
        response = await agent.execute({}, AgentContext(profile=sample_profile))
        assert response.error == "Data bundle is required for resume review"

    @pytest.mark.asyncio
    async def test_requires_content(self, fake_client, sample_data):
        agent = ResumeReviewAgent(completion_client=fake_client({}))
        empty_profile = Profile(id="p-3", name="Empty", education_ids=["edu-1"])

        response = await agent.execute({}, AgentContext(profile=empty_profile, data=sample_data))

        assert response.error == "Resume must have some content (experiences, projects, or skills) to review"
