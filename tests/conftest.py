"""Global pytest fixtures for deterministic test environment."""

from __future__ import annotations

import copy
import json
from typing import Any, List

import pytest

from resume_orchestrator.completion import CompletionResult
from resume_orchestrator.models import DataBundle, Profile

JOB_DESCRIPTION = (
    "Senior Backend Engineer at Acme. Requirements: 5+ years of Python, "
    "experience with Docker, Kubernetes and AWS, strong PostgreSQL skills, "
    "and a track record of building RESTful APIs. Preferred: React and CI/CD."
)


class FakeCompletionClient:
    """Replays canned replies in order and records every prompt.

    The last reply is repeated once the list runs out. A reply that is an
    exception is raised instead of returned.
    """

    def __init__(self, *replies: Any):
        self.replies: List[Any] = list(replies) or [{}]
        self.prompts: List[str] = []
        self.configs: List[Any] = []

    async def generate(self, prompt, config=None):
        self.prompts.append(prompt)
        self.configs.append(config)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        text = reply if isinstance(reply, str) else json.dumps(reply)
        return CompletionResult(data=copy.deepcopy(reply), text=text)

    @property
    def call_count(self) -> int:
        return len(self.prompts)


@pytest.fixture(autouse=True)
def _isolate_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear provider keys that can leak into tests on developer machines."""
    for key in (
        "GEMINI_API_KEY",
        "OPENAI_API_KEY",
        "DEEPSEEK_API_KEY",
        "KIMI_API_KEY",
        "GLM_API_KEY",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def job_description() -> str:
    return JOB_DESCRIPTION


@pytest.fixture
def fake_client():
    """Factory for FakeCompletionClient instances."""
    return FakeCompletionClient


@pytest.fixture
def sample_data() -> DataBundle:
    return DataBundle.model_validate({
        "personalInfo": {
            "fullName": "Jane Smith",
            "email": "jane@example.com",
            "location": "Berlin",
            "summary": "Backend engineer focused on distributed systems.",
        },
        "experiences": [
            {
                "id": "exp-1",
                "title": "Senior Software Engineer",
                "company": "Acme Corp",
                "date": "2020 - Present",
                "bullets": ["Led a team of 5 engineers", "Built CI/CD with Docker"],
                "tags": ["python", "docker"],
            },
            {
                "id": "exp-2",
                "title": "Software Engineer",
                "company": "StartupCo",
                "date": "2016 - 2019",
                "bullets": ["Built RESTful APIs with Django"],
                "tags": ["django", "postgresql"],
            },
        ],
        "projects": [
            {
                "id": "proj-1",
                "title": "Kubernetes Operator",
                "link": "https://github.com/jane/operator",
                "bullets": ["Automated database failover"],
                "tags": ["go", "kubernetes"],
            },
            {
                "id": "proj-2",
                "title": "Budget Tracker",
                "bullets": ["React front end for personal finance"],
                "tags": ["react"],
            },
        ],
        "skills": [
            {"id": "skill-1", "name": "Python", "details": "8 years"},
            {"id": "skill-2", "name": "Docker"},
            {"id": "skill-3", "name": "PostgreSQL"},
        ],
        "education": [{"id": "edu-1", "title": "B.S. Computer Science", "details": "State University"}],
    })


@pytest.fixture
def sample_profile() -> Profile:
    return Profile(
        id="profile-1",
        name="Backend roles",
        experience_ids=["exp-1", "exp-2"],
        project_ids=["proj-1"],
        skill_ids=["skill-1", "skill-2"],
        education_ids=["edu-1"],
    )
