"""Tests for the bounded execution history."""

from datetime import datetime

import pytest

from resume_orchestrator.agents.history import ExecutionHistory, ExecutionHistoryEntry


def _entry(agent_id="x", duration=10.0, success=True):
    return ExecutionHistoryEntry(agent_id, datetime.now(), duration, success)


class TestExecutionHistory:
    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            ExecutionHistory(limit=0)

    def test_unbounded(self):
        history = ExecutionHistory(limit=None)
        for _ in range(1500):
            history.append(_entry())
        assert len(history) == 1500

    def test_oldest_entries_are_dropped(self):
        history = ExecutionHistory(limit=2)
        history.append(_entry("a"))
        history.append(_entry("b"))
        history.append(_entry("c"))

        assert [e.agent_id for e in history.entries()] == ["b", "c"]

    def test_stats(self):
        history = ExecutionHistory()
        history.append(_entry("a", 10.0, True))
        history.append(_entry("a", 15.0, False))
        history.append(_entry("b", 20.0, True))
        history.append(_entry("b", 30.0, True))

        stats = history.stats()
        assert stats["total_executions"] == 4
        assert stats["success_rate"] == 75
        assert stats["average_duration"] == 19
        assert stats["agent_usage"] == {"a": 2, "b": 2}

    def test_entries_returns_copy(self):
        history = ExecutionHistory()
        history.append(_entry())
        history.entries().clear()
        assert len(history) == 1
