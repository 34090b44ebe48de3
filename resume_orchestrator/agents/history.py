"""Execution history and aggregate statistics for the orchestrator."""

from __future__ import annotations

from collections import Counter, deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional


@dataclass
class ExecutionHistoryEntry:
    """One record per ``execute_agent`` call.

    Attributes:
        agent_id: Agent that was executed
        timestamp: When the call finished
        duration: Wall-clock milliseconds reported by the agent
        success: Whether the agent reported success
    """

    agent_id: str
    timestamp: datetime
    duration: float
    success: bool


class ExecutionHistory:
    """Ring buffer of recent executions.

    Only the newest ``limit`` entries are kept; statistics describe that
    window. ``limit=None`` keeps everything.

    Example:
        history = ExecutionHistory(limit=1000)
        history.append(ExecutionHistoryEntry("skills-extractor", datetime.now(), 120.0, True))
        history.stats()["success_rate"]  # 100.0
    """

    def __init__(self, limit: Optional[int] = 1000):
        if limit is not None and limit <= 0:
            raise ValueError("limit must be positive or None")
        self.limit = limit
        self._entries: Deque[ExecutionHistoryEntry] = deque(maxlen=limit)

    def append(self, entry: ExecutionHistoryEntry) -> None:
        self._entries.append(entry)

    def entries(self) -> List[ExecutionHistoryEntry]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> Dict[str, Any]:
        """Aggregate the retained window.

        Returns:
            Dict with total_executions, success_rate (0-100), average_duration
            (ms, rounded to an integer) and agent_usage (id -> count)
        """
        total = len(self._entries)
        if total == 0:
            return {
                "total_executions": 0,
                "success_rate": 0,
                "average_duration": 0,
                "agent_usage": {},
            }

        successful = sum(1 for e in self._entries if e.success)
        total_duration = sum(e.duration for e in self._entries)
        usage = Counter(e.agent_id for e in self._entries)

        return {
            "total_executions": total,
            "success_rate": successful / total * 100,
            "average_duration": round(total_duration / total),
            "agent_usage": dict(usage),
        }

    def __len__(self) -> int:
        return len(self._entries)
