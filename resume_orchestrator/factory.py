"""Factory functions wiring agents, the orchestrator and the coordinator."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .agents.ats_optimizer import ATSOptimizationAgent
from .agents.base import Agent
from .agents.content_optimizer import ContentOptimizationAgent
from .agents.grammar_enhancer import GrammarEnhancementAgent
from .agents.orchestrator import AgentOrchestrator
from .agents.resume_builder import ResumeBuilderAgent
from .agents.resume_reviewer import ResumeReviewAgent
from .agents.skills_extractor import SkillsExtractionAgent
from .cache import ResponseCache
from .completion import TextCompletionClient
from .config import Settings, load_raw_config, load_settings
from .config_validator import Severity, has_errors, validate_config
from .observability import AgentObserver
from .workflows.coordinator import WorkflowCoordinator

logger = logging.getLogger(__name__)


def create_default_agents(
    completion_client: Optional[TextCompletionClient],
    observer: Optional[AgentObserver] = None,
) -> List[Agent]:
    """Instantiate the six built-in agents sharing one completion client."""
    agent_classes = (
        ResumeBuilderAgent,
        ContentOptimizationAgent,
        GrammarEnhancementAgent,
        SkillsExtractionAgent,
        ResumeReviewAgent,
        ATSOptimizationAgent,
    )
    return [cls(completion_client=completion_client, observer=observer) for cls in agent_classes]


def create_orchestrator(
    settings: Optional[Settings] = None,
    completion_client: Optional[TextCompletionClient] = None,
    observer: Optional[AgentObserver] = None,
    register_defaults: bool = True,
) -> AgentOrchestrator:
    """Create a fresh orchestrator.

    Args:
        settings: Typed settings; built-in defaults are used when None
        completion_client: Client shared by the default agents; built from
            ``settings`` when None
        observer: Optional observer for agent and cache events
        register_defaults: Register the six built-in agents

    Returns:
        A new AgentOrchestrator. Every call returns an independent instance.
    """
    settings = settings or Settings()
    orchestrator = AgentOrchestrator(
        history_limit=settings.orchestrator.history_limit,
        cache=ResponseCache(
            default_ttl_seconds=settings.orchestrator.cache_ttl_seconds,
            max_entries=settings.orchestrator.cache_max_entries,
        ),
        observer=observer,
    )

    if register_defaults:
        if completion_client is None:
            completion_client = TextCompletionClient.from_settings(settings, observer=observer)
        for agent in create_default_agents(completion_client, observer):
            orchestrator.register_agent(agent)

    logger.info(f"Created orchestrator with {len(orchestrator)} agents")
    return orchestrator


def create_coordinator(
    settings: Optional[Settings] = None,
    completion_client: Optional[TextCompletionClient] = None,
    observer: Optional[AgentObserver] = None,
    register_defaults: bool = True,
) -> WorkflowCoordinator:
    """Create an orchestrator and a coordinator on top of it.

    Settings are read from ``config/config.yaml`` (plus the local override)
    when not given and validated first; any error raises ValueError. A
    verbose observer is attached if the config asks for one.
    """
    if settings is None:
        raw_config = load_raw_config()
        _check_config(raw_config, needs_api_key=register_defaults and completion_client is None)
        settings = load_settings(raw_config)
    if observer is None and settings.verbose:
        observer = AgentObserver(verbose=True)

    orchestrator = create_orchestrator(
        settings=settings,
        completion_client=completion_client,
        observer=observer,
        register_defaults=register_defaults,
    )
    return WorkflowCoordinator(
        orchestrator,
        observer=observer,
        step_timeout_ms=settings.orchestrator.default_timeout_ms,
    )


def _check_config(raw_config: Dict[str, Any], needs_api_key: bool = True) -> None:
    issues = validate_config(raw_config)
    if not needs_api_key:
        issues = [issue for issue in issues if issue.field != "api_key"]

    for issue in issues:
        if issue.severity == Severity.WARNING:
            logger.warning(f"Config [{issue.field}] {issue.message}")
        else:
            logger.error(f"Config [{issue.field}] {issue.message}")

    if has_errors(issues):
        fields = ", ".join(issue.field for issue in issues if issue.severity == Severity.ERROR)
        raise ValueError(f"Invalid configuration ({fields})")
