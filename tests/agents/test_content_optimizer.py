"""Tests for ContentOptimizationAgent."""

import pytest

from resume_orchestrator.agents.content_optimizer import ContentOptimizationAgent
from resume_orchestrator.agents.protocol import AgentContext

ITEMS = [
    {
        "type": "experience",
        "data": {"id": "exp-1", "title": "Engineer", "company": "Acme", "bullets": ["Built APIs"], "tags": ["python"]},
    },
    {"type": "skill", "data": {"id": "skill-1", "name": "Python", "details": "8 years"}},
]


def _optimized(score=85, changes=None):
    entry = {"original_item": {}, "optimized_item": {}, "improvement_score": score}
    if changes is not None:
        entry["changes_summary"] = changes
    return entry


@pytest.fixture
def context(job_description, sample_profile, sample_data):
    return AgentContext(job_description=job_description, profile=sample_profile, data=sample_data)


class TestContentOptimization:
    @pytest.mark.asyncio
    async def test_optimizes_explicit_items(self, fake_client, context):
        reply = {
            "optimized_items": [
                _optimized(90, {"bullets_modified": 2, "major_changes": ["Quantified impact"]}),
                _optimized(80, {"bullets_modified": 1}),
            ],
            "optimization_analysis": {
                "average_improvement_score": 85,
                "content_rewritten_percent": 75,
                "key_technologies_added": ["AWS", "Docker", "Kubernetes", "React", "Terraform"],
            },
        }
        client = fake_client(reply)
        agent = ContentOptimizationAgent(completion_client=client)

        response = await agent.execute({"items": ITEMS, "aggressiveness": 4}, context)

        assert response.success is True
        assert response.confidence == 95
        prompt = client.prompts[0]
        assert "ITEMS TO OPTIMIZE (2 total)" in prompt
        assert "Aggressiveness Level: 4/5 (EXTREMELY AGGRESSIVE)" in prompt
        assert "Title: Engineer at Acme" in prompt
        assert "Skill: Python" in prompt

    @pytest.mark.asyncio
    async def test_every_item_records_a_change(self, fake_client, context):
        reply = {"optimized_items": [_optimized(30), _optimized(70, {"bullets_modified": 0, "major_changes": ["Kept"]})]}
        agent = ContentOptimizationAgent(completion_client=fake_client(reply))

        response = await agent.execute({"items": ITEMS}, context)

        first, second = response.data["optimized_items"]
        assert first["changes_summary"] == {
            "bullets_modified": 1,
            "major_changes": ["Content enhanced for job alignment"],
        }
        assert first["improvement_score"] == 50
        assert second["changes_summary"]["bullets_modified"] == 1
        assert second["changes_summary"]["major_changes"] == ["Kept"]
        assert second["improvement_score"] == 70
        assert response.data["optimization_analysis"] == {"total_items_processed": 2}
        assert response.confidence == 70

    @pytest.mark.asyncio
    async def test_items_default_to_profile_selection(self, fake_client, context):
        reply = {"optimized_items": [_optimized() for _ in range(5)]}
        client = fake_client(reply)
        agent = ContentOptimizationAgent(completion_client=client)

        response = await agent.execute({"aggressiveness": 2}, context)

        assert response.success is True
        prompt = client.prompts[0]
        assert "ITEMS TO OPTIMIZE (5 total)" in prompt
        assert "Aggressiveness Level: 2/5 (MODERATE)" in prompt
        assert "Budget Tracker" not in prompt

    @pytest.mark.asyncio
    async def test_item_count_mismatch_fails(self, fake_client, context):
        agent = ContentOptimizationAgent(completion_client=fake_client({"optimized_items": [_optimized()]}))

        response = await agent.execute({"items": ITEMS}, context)

        assert response.success is False
        assert response.error == "Optimization failed to process all items"

    @pytest.mark.asyncio
    async def test_no_items(self, fake_client, job_description):
        agent = ContentOptimizationAgent(completion_client=fake_client({}))
        response = await agent.execute({}, AgentContext(job_description=job_description))
        assert response.error == "No items provided for optimization"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "job_description,error",
        [
            (None, "Job description is required for content optimization"),
            ("Python developer", "Job description is too short for meaningful optimization"),
        ],
    )
    async def test_job_description_checks(self, fake_client, job_description, error):
        agent = ContentOptimizationAgent(completion_client=fake_client({}))
        response = await agent.execute({"items": ITEMS}, AgentContext(job_description=job_description))
        assert response.error == error

    @pytest.mark.asyncio
    async def test_invalid_item_type(self, fake_client, context):
        agent = ContentOptimizationAgent(completion_client=fake_client({}))
        items = ITEMS + [{"type": "education", "data": {"id": "edu-1"}}]

        response = await agent.execute({"items": items}, context)

        assert response.error == "Invalid item type: education"
