"""Agents and the orchestrator that runs them.

Six specialized agents share one base class. Each validates its input,
prompts the completion client, and repairs the parsed result so that the
fields callers rely on are always present.
"""

from .protocol import (
    AgentConfig,
    AgentContext,
    AgentExecutionOptions,
    AgentStatus,
    BaseAgentResponse,
    ResponseMetadata,
    create_failure_response,
    create_success_response,
)
from .base import Agent
from .history import ExecutionHistory, ExecutionHistoryEntry
from .orchestrator import AgentOrchestrator, AgentStep
from .skills_extractor import SkillsExtractionAgent
from .resume_builder import ResumeBuilderAgent
from .content_optimizer import ContentOptimizationAgent
from .grammar_enhancer import GrammarEnhancementAgent
from .resume_reviewer import ResumeReviewAgent
from .ats_optimizer import ATSOptimizationAgent

__all__ = [
    "AgentConfig",
    "AgentContext",
    "AgentExecutionOptions",
    "AgentStatus",
    "BaseAgentResponse",
    "ResponseMetadata",
    "create_failure_response",
    "create_success_response",
    "Agent",
    "ExecutionHistory",
    "ExecutionHistoryEntry",
    "AgentOrchestrator",
    "AgentStep",
    "SkillsExtractionAgent",
    "ResumeBuilderAgent",
    "ContentOptimizationAgent",
    "GrammarEnhancementAgent",
    "ResumeReviewAgent",
    "ATSOptimizationAgent",
]
