"""TTL cache for agent responses, keyed by agent id and call arguments."""

from __future__ import annotations

import dataclasses
import hashlib
import json
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from pydantic import BaseModel


def _to_jsonable(value: Any) -> Any:
    """Convert dataclasses and pydantic models into plain data for hashing."""
    if isinstance(value, BaseModel):
        return value.model_dump()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {str(k): _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


class CacheEntry:
    """A single cache entry with TTL (time-to-live)."""

    def __init__(self, value: Any, ttl_seconds: int = 300):
        self.value = value
        self.created_at = datetime.now()
        self.ttl = timedelta(seconds=ttl_seconds)
        self.hits = 0

    def is_expired(self) -> bool:
        return datetime.now() - self.created_at > self.ttl

    def touch(self):
        self.hits += 1


class ResponseCache:
    """
    Cache for successful agent responses.

    Entries are keyed on the agent id together with the input, the shared
    context and the effective config, so a changed job description or a
    different temperature never returns a stale response.
    """

    def __init__(self, default_ttl_seconds: int = 300, max_entries: Optional[int] = 1000):
        self.default_ttl_seconds = default_ttl_seconds
        self.max_entries = max_entries
        self._cache: Dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    def make_key(self, agent_id: str, payload: Dict[str, Any]) -> str:
        """
        Create a deterministic cache key.

        Args:
            agent_id: Agent the response belongs to
            payload: Input, context and config of the call

        Returns:
            SHA256 hex digest of the serialized call
        """
        data = json.dumps(
            {"agent": agent_id, "payload": _to_jsonable(payload)},
            sort_keys=True,
            default=str,
        )
        return hashlib.sha256(data.encode()).hexdigest()

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value for ``key`` if present and fresh."""
        entry = self._cache.get(key)

        if entry is None:
            self._misses += 1
            return None

        if entry.is_expired():
            del self._cache[key]
            self._misses += 1
            return None

        entry.touch()
        self._hits += 1
        return entry.value

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None):
        """Store ``value``, dropping expired entries and then the oldest ones past ``max_entries``."""
        self._cache.pop(key, None)
        self._cache[key] = CacheEntry(value, ttl_seconds or self.default_ttl_seconds)
        self.evict_expired()
        if self.max_entries is not None:
            while len(self._cache) > self.max_entries:
                del self._cache[next(iter(self._cache))]

    def clear(self):
        self._cache.clear()
        self._hits = 0
        self._misses = 0

    def evict_expired(self) -> int:
        """Remove expired entries and return how many were dropped."""
        expired_keys = [key for key, entry in self._cache.items() if entry.is_expired()]
        for key in expired_keys:
            del self._cache[key]
        return len(expired_keys)

    def get_stats(self) -> Dict[str, Any]:
        total_requests = self._hits + self._misses
        hit_rate = self._hits / total_requests if total_requests > 0 else 0.0

        return {
            "hits": self._hits,
            "misses": self._misses,
            "total_requests": total_requests,
            "hit_rate": hit_rate,
            "cache_size": len(self._cache),
        }

    def __len__(self) -> int:
        return len(self._cache)
