"""Observability for agent and workflow execution - logging and metrics."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table


@dataclass
class AgentEvent:
    """A single event in an agent or workflow execution."""

    timestamp: datetime
    event_type: str  # "agent_start", "agent_end", "llm_request", "cache_hit", "workflow_start", "workflow_end", "error"
    data: Dict[str, Any]
    duration_ms: Optional[float] = None
    tokens_used: Optional[int] = None


class AgentObserver:
    """
    Observability layer for tracking agent execution.

    Collects events and forwards a one-line summary of each to the
    ``resume_orchestrator`` logger.
    """

    def __init__(self, verbose: bool = False, max_events: int = 5000):
        self.events: List[AgentEvent] = []
        self.logger = logging.getLogger("resume_orchestrator")
        self.verbose = verbose
        self.max_events = max_events
        self._setup_logging()

    def _setup_logging(self):
        """Configure logging format and handlers."""
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
        self.logger.setLevel(logging.INFO if self.verbose else logging.WARNING)

    def _record(self, event: AgentEvent):
        self.events.append(event)
        if len(self.events) > self.max_events:
            del self.events[: len(self.events) - self.max_events]

    def log_agent_start(self, agent_id: str, input_keys: Optional[List[str]] = None):
        self._record(AgentEvent(
            timestamp=datetime.now(),
            event_type="agent_start",
            data={"agent_id": agent_id, "input_keys": input_keys or []},
        ))
        self.logger.info(f"[{agent_id}] started")

    def log_agent_end(
        self,
        agent_id: str,
        success: bool,
        duration_ms: float,
        confidence: Optional[int] = None,
    ):
        """
        Log the end of one agent execution.

        Args:
            agent_id: Agent that ran
            success: Whether the agent reported success
            duration_ms: Wall-clock processing time
            confidence: Confidence the agent reported, if any
        """
        self._record(AgentEvent(
            timestamp=datetime.now(),
            event_type="agent_end",
            data={"agent_id": agent_id, "success": success, "confidence": confidence},
            duration_ms=duration_ms,
        ))
        status = "ok" if success else "failed"
        self.logger.info(f"[{agent_id}] {status} ({duration_ms:.2f}ms, confidence={confidence})")

    def log_llm_request(self, model: str, tokens: int, duration_ms: float):
        self._record(AgentEvent(
            timestamp=datetime.now(),
            event_type="llm_request",
            data={"model": model},
            duration_ms=duration_ms,
            tokens_used=tokens,
        ))
        self.logger.info(f"LLM: {model} | {tokens} tokens | {duration_ms:.2f}ms")

    def log_cache_hit(self, agent_id: str):
        self._record(AgentEvent(timestamp=datetime.now(), event_type="cache_hit", data={"agent_id": agent_id}))
        self.logger.info(f"[{agent_id}] served from cache")

    def log_workflow_start(self, workflow_type: str, agent_ids: List[str], parallel: bool):
        self._record(AgentEvent(
            timestamp=datetime.now(),
            event_type="workflow_start",
            data={"workflow_type": workflow_type, "agents": agent_ids, "parallel": parallel},
        ))
        mode = "parallel" if parallel else "sequential"
        self.logger.info(f"Workflow {workflow_type} started ({mode}, {len(agent_ids)} agents)")

    def log_workflow_end(self, workflow_type: str, success: bool, duration_ms: float, agent_count: int):
        self._record(AgentEvent(
            timestamp=datetime.now(),
            event_type="workflow_end",
            data={"workflow_type": workflow_type, "success": success, "agent_count": agent_count},
            duration_ms=duration_ms,
        ))
        self.logger.info(
            f"Workflow {workflow_type} finished success={success} "
            f"({agent_count} results, {duration_ms:.2f}ms)"
        )

    def log_error(
        self,
        error_type: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        agent_id: Optional[str] = None,
    ):
        """
        Log an error event.

        Args:
            error_type: Type of error (e.g., "AgentValidationError", "RATE_LIMIT")
            message: Error message
            context: Additional context about the error
            agent_id: Agent the error belongs to, if any
        """
        self._record(AgentEvent(
            timestamp=datetime.now(),
            event_type="error",
            data={"error_type": error_type, "message": message, "context": context or {}, "agent_id": agent_id},
        ))
        prefix = f"[{agent_id}] " if agent_id else ""
        self.logger.error(f"{prefix}Error ({error_type}): {message}")

    def get_session_stats(self) -> Dict[str, Any]:
        """
        Get aggregated statistics for the current session.

        Returns:
            Dictionary with session statistics
        """
        agent_runs = [e for e in self.events if e.event_type == "agent_end"]
        workflows = [e for e in self.events if e.event_type == "workflow_end"]
        llm_requests = [e for e in self.events if e.event_type == "llm_request"]
        cache_hits = [e for e in self.events if e.event_type == "cache_hit"]
        errors = [e for e in self.events if e.event_type == "error"]

        lookups = len(agent_runs) + len(cache_hits)
        return {
            "event_count": len(self.events),
            "agent_runs": len(agent_runs),
            "agent_failures": sum(1 for e in agent_runs if not e.data.get("success")),
            "workflows": len(workflows),
            "llm_requests": len(llm_requests),
            "errors": len(errors),
            "total_tokens": sum(e.tokens_used or 0 for e in llm_requests),
            "total_agent_duration_ms": sum(e.duration_ms or 0 for e in agent_runs),
            "cache_hit_rate": len(cache_hits) / lookups if lookups else 0.0,
        }

    def print_session_summary(self, console: Optional[Console] = None):
        """Print a formatted summary of the session."""
        stats = self.get_session_stats()
        table = Table(title="Session Summary", show_header=False)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("Events", str(stats["event_count"]))
        table.add_row("Agent runs", f"{stats['agent_runs']} ({stats['agent_failures']} failed)")
        table.add_row("Workflows", str(stats["workflows"]))
        table.add_row("LLM requests", str(stats["llm_requests"]))
        table.add_row("Errors", str(stats["errors"]))
        table.add_row("Total tokens", f"{stats['total_tokens']:,}")
        table.add_row("Agent time", f"{stats['total_agent_duration_ms']:.2f}ms")
        table.add_row("Cache hit rate", f"{stats['cache_hit_rate']:.1%}")
        (console or Console()).print(table)

    def clear(self):
        """Clear all recorded events."""
        self.events.clear()
