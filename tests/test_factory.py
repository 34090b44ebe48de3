"""Tests for orchestrator and coordinator wiring."""

import pytest

from resume_orchestrator.agents.protocol import AgentContext
from resume_orchestrator.completion import TextCompletionClient
from resume_orchestrator.config import OrchestratorSettings, Settings
from resume_orchestrator.factory import create_coordinator, create_default_agents, create_orchestrator
from resume_orchestrator.observability import AgentObserver
from resume_orchestrator.workflows.models import WorkflowConfig

AGENT_IDS = [
    "resume-builder",
    "content-optimizer",
    "grammar-enhancer",
    "skills-extractor",
    "resume-reviewer",
    "ats-optimizer",
]


class TestFactory:
    def test_default_agents_share_the_client(self, fake_client):
        client = fake_client({})
        agents = create_default_agents(client)

        assert [agent.agent_id for agent in agents] == AGENT_IDS
        assert all(agent.completion_client is client for agent in agents)

    def test_orchestrator_registers_defaults(self, fake_client):
        orchestrator = create_orchestrator(completion_client=fake_client({}))

        assert [entry["id"] for entry in orchestrator.list_agents()] == AGENT_IDS

    def test_orchestrators_are_independent(self, fake_client):
        first = create_orchestrator(completion_client=fake_client({}))
        second = create_orchestrator(completion_client=fake_client({}))

        assert first is not second
        assert first.get_agent("resume-builder") is not second.get_agent("resume-builder")

    def test_without_defaults(self):
        assert len(create_orchestrator(register_defaults=False)) == 0

    def test_client_is_built_lazily_without_credentials(self):
        orchestrator = create_orchestrator(Settings())

        client = orchestrator.get_agent("skills-extractor").completion_client
        assert isinstance(client, TextCompletionClient)

    def test_coordinator_uses_settings(self, fake_client):
        settings = Settings(orchestrator=OrchestratorSettings(default_timeout_ms=1500), verbose=True)

        coordinator = create_coordinator(settings, completion_client=fake_client({}))

        assert coordinator.step_timeout_ms == 1500
        assert isinstance(coordinator.observer, AgentObserver)
        assert coordinator.observer.verbose is True

    def test_coordinator_keeps_given_observer(self, fake_client):
        observer = AgentObserver()

        coordinator = create_coordinator(Settings(verbose=True), completion_client=fake_client({}), observer=observer)

        assert coordinator.observer is observer

    @pytest.mark.asyncio
    async def test_end_to_end_ats_workflow(self, fake_client, job_description, sample_profile, sample_data):
        reply = {
            "overall_ats_score": {"score": 82},
            "ats_issues": {"critical": [], "high": [{"issue": "Missing Terraform"}]},
            "action_plan": {"immediate": [{"action": "Add Terraform to skills"}]},
        }
        coordinator = create_coordinator(Settings(), completion_client=fake_client(reply))

        result = await coordinator.execute_workflow(
            WorkflowConfig(
                type="ats-optimization",
                job_description=job_description,
                profile=sample_profile,
                data=sample_data,
            )
        )

        assert result.success is True
        ats = result.agent_results[0]
        assert ats.success is True
        assert ats.data["overall_ats_score"]["grade"] == "Good"
        assert result.workflow_insights.priority_actions == ["Add Terraform to skills"]
        assert coordinator.get_execution_stats()["agent_usage"] == {"ats-optimizer": 1}

    @pytest.mark.asyncio
    async def test_agent_without_credentials_fails_cleanly(self, job_description, sample_profile, sample_data):
        orchestrator = create_orchestrator(Settings())
        context = AgentContext(job_description=job_description, profile=sample_profile, data=sample_data)

        response = await orchestrator.execute_agent("ats-optimizer", {}, context)

        assert response.success is False
        assert "GEMINI_API_KEY" in response.error


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    directory = tmp_path / "config"
    directory.mkdir()
    return directory


class TestCoordinatorConfigValidation:
    def test_invalid_config_is_rejected(self, config_dir, fake_client):
        (config_dir / "config.yaml").write_text("model: gemini-1.5-flash\ngeneration:\n  temperature: 5\n")

        with pytest.raises(ValueError, match="generation.temperature"):
            create_coordinator(completion_client=fake_client({}))

    def test_missing_api_key_is_rejected_without_client(self, config_dir):
        (config_dir / "config.yaml").write_text("provider: gemini\nmodel: gemini-1.5-flash\n")

        with pytest.raises(ValueError, match="api_key"):
            create_coordinator()

    def test_valid_config_builds_coordinator(self, config_dir):
        (config_dir / "config.yaml").write_text(
            "provider: gemini\nmodel: gemini-1.5-flash\napi_key: test-key\n"
            "orchestrator:\n  default_timeout_ms: 500\n"
        )

        coordinator = create_coordinator()

        assert coordinator.step_timeout_ms == 500
        assert len(coordinator.orchestrator) == len(AGENT_IDS)

    def test_injected_client_needs_no_api_key(self, config_dir, fake_client):
        (config_dir / "config.yaml").write_text("provider: gemini\nmodel: gemini-1.5-flash\n")

        coordinator = create_coordinator(completion_client=fake_client({}))

        assert coordinator.orchestrator.get_agent("ats-optimizer") is not None
