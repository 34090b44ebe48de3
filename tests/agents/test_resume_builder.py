"""Tests for ResumeBuilderAgent."""

import pytest

from resume_orchestrator.agents.protocol import AgentContext
from resume_orchestrator.agents.resume_builder import ResumeBuilderAgent
from resume_orchestrator.models import DataBundle


def _selection(kind, item_id, score):
    return {kind: {"id": item_id}, "relevance_score": score, "reasons": ["Relevant"], "suggested_order": 1}


FULL_REPLY = {
    "selected_experiences": [_selection("experience", "exp-1", 92), _selection("experience", "exp-2", 75)],
    "selected_projects": [_selection("project", "proj-1", 80)],
    "selection_analysis": {
        "selection_strategy": "Favour backend depth",
        "key_factors": ["Python", "Kubernetes", "APIs"],
        "missing_skills_needed": [],
    },
}


@pytest.fixture
def context(job_description, sample_data):
    return AgentContext(job_description=job_description, position="Backend Engineer", data=sample_data)


class TestResumeBuilder:
    @pytest.mark.asyncio
    async def test_full_selection(self, fake_client, context):
        client = fake_client(FULL_REPLY)
        agent = ResumeBuilderAgent(completion_client=client)

        response = await agent.execute({"max_experiences": 2}, context)

        assert response.success is True
        assert len(response.data["selected_experiences"]) == 2
        assert response.confidence == 95
        prompt = client.prompts[0]
        assert "AVAILABLE EXPERIENCES (2 total)" in prompt
        assert "Maximum experiences to select: 2" in prompt
        assert "Minimum projects to include: Not specified" in prompt

    @pytest.mark.asyncio
    async def test_missing_relevance_score_counts_as_low(self, fake_client, context):
        experiences = [_selection("experience", "exp-1", 92), _selection("experience", "exp-2", None)]
        reply = dict(FULL_REPLY, selected_experiences=experiences)
        agent = ResumeBuilderAgent(completion_client=fake_client(reply))

        response = await agent.execute({}, context)

        assert response.success is True
        # three items (+15) and three key factors (+5), scores not all at 60
        assert response.confidence == 90

    @pytest.mark.asyncio
    async def test_backfills_to_three_items(self, fake_client, context):
        reply = {
            "selected_experiences": [_selection("experience", "exp-1", 90)],
            "selected_projects": [],
            "selection_analysis": {"selection_strategy": "Strongest match only", "key_factors": []},
        }
        agent = ResumeBuilderAgent(completion_client=fake_client(reply))

        response = await agent.execute({}, context)

        data = response.data
        assert [e["experience"]["id"] for e in data["selected_experiences"]] == ["exp-1", "exp-2"]
        assert [p["project"]["id"] for p in data["selected_projects"]] == ["proj-1"]
        backfilled = data["selected_experiences"][1]
        assert backfilled["relevance_score"] == 50
        assert backfilled["reasons"] == ["Selected to meet minimum requirement"]
        assert data["selection_analysis"]["selection_strategy"].endswith(
            "(Additional items added to meet 3-item minimum)"
        )
        # three items (+15), but not all scores reach 60
        assert response.confidence == 85

    @pytest.mark.asyncio
    async def test_backfill_can_be_disabled(self, fake_client, context):
        reply = {"selected_experiences": [_selection("experience", "exp-1", 90)]}
        agent = ResumeBuilderAgent(completion_client=fake_client(reply))

        response = await agent.execute({"enforce_minimums": False}, context)

        assert len(response.data["selected_experiences"]) == 1
        assert response.data["selected_projects"] == []
        assert response.data["selection_analysis"]["key_factors"] == []

    @pytest.mark.asyncio
    async def test_backfill_limited_by_library(self, fake_client, job_description, sample_data):
        data = DataBundle(experiences=sample_data.experiences[:1], projects=sample_data.projects[:1])
        context = AgentContext(job_description=job_description, data=data)
        agent = ResumeBuilderAgent(completion_client=fake_client({}))

        response = await agent.execute({}, context)

        assert len(response.data["selected_experiences"]) == 1
        assert len(response.data["selected_projects"]) == 1

    @pytest.mark.asyncio
    async def test_requires_job_description(self, fake_client, sample_data):
        agent = ResumeBuilderAgent(completion_client=fake_client(FULL_REPLY))
        response = await agent.execute({}, AgentContext(data=sample_data))
        assert response.error == "Job description is required for resume building"

    @pytest.mark.asyncio
    async def test_requires_library_items(self, fake_client, job_description):
        agent = ResumeBuilderAgent(completion_client=fake_client(FULL_REPLY))
        response = await agent.execute({}, AgentContext(job_description=job_description, data=DataBundle()))
        assert response.error == "No experiences or projects available to select from"

    @pytest.mark.asyncio
    async def test_short_job_description(self, fake_client, sample_data):
        agent = ResumeBuilderAgent(completion_client=fake_client(FULL_REPLY))
        response = await agent.execute({}, AgentContext(job_description="Python developer", data=sample_data))
        assert response.error == "Job description is too short for meaningful analysis"
