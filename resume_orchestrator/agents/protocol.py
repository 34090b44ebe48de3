"""Value types exchanged between agents, the orchestrator and workflows."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from ..models import DataBundle, Profile

RESPONSE_VERSION = "1.0.0"


class AgentStatus(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass
class AgentConfig:
    """Generation parameters for one agent call.

    Attributes:
        temperature: Sampling temperature
        max_tokens: Maximum output tokens
        custom_instructions: Free text appended to the system prompt
        context_size: Hint for how much context the prompt may use
    """

    temperature: float = 0.3
    max_tokens: int = 4096
    custom_instructions: Optional[str] = None
    context_size: int = 8192

    def merged(self, overrides: Optional[Union["AgentConfig", Mapping[str, Any]]] = None) -> "AgentConfig":
        """Return a copy with every non-None field of ``overrides`` applied."""
        if overrides is None:
            return replace(self)
        if isinstance(overrides, AgentConfig):
            overrides = {f.name: getattr(overrides, f.name) for f in fields(overrides)}
        known = {f.name for f in fields(self)}
        updates = {k: v for k, v in overrides.items() if k in known and v is not None}
        return replace(self, **updates)


@dataclass
class AgentExecutionOptions:
    """Per-call execution hints.

    Attributes:
        config: Overrides merged over the agent's default config
        timeout: Milliseconds before the call is abandoned; None waits forever
        cache: Whether a fresh cached response may be reused
        cache_ttl: Seconds a successful response stays cached
    """

    config: Optional[Union[AgentConfig, Dict[str, Any]]] = None
    timeout: Optional[int] = None
    cache: bool = False
    cache_ttl: Optional[int] = None


@dataclass(frozen=True)
class AgentContext:
    """Read-only inputs shared by every agent in one workflow run."""

    job_description: Optional[str] = None
    position: Optional[str] = None
    company: Optional[str] = None
    profile: Optional[Profile] = None
    data: Optional[DataBundle] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def fingerprint(self) -> Dict[str, Any]:
        """Plain-data view of the context used for cache keys."""
        return {
            "job_description": self.job_description,
            "position": self.position,
            "company": self.company,
            "profile": self.profile.model_dump() if self.profile else None,
            "data": self.data.model_dump() if self.data else None,
        }


@dataclass
class ResponseMetadata:
    processing_time: float
    agent_id: str
    version: str = RESPONSE_VERSION
    status: AgentStatus = AgentStatus.COMPLETED


@dataclass
class BaseAgentResponse:
    """Uniform result envelope for every agent execution.

    A successful response always carries ``data`` and no ``error``; a failed
    one carries ``error`` and no ``data``.
    """

    success: bool
    metadata: ResponseMetadata
    data: Any = None
    error: Optional[str] = None
    confidence: Optional[int] = None

    def __post_init__(self):
        if self.success and (self.data is None or self.error is not None):
            raise ValueError("A successful response needs data and no error")
        if not self.success and (self.data is not None or not self.error):
            raise ValueError("A failed response needs an error and no data")

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["metadata"]["status"] = self.metadata.status.value
        return result


def create_success_response(
    agent_id: str,
    data: Any,
    processing_time: float,
    confidence: Optional[int] = None,
) -> BaseAgentResponse:
    return BaseAgentResponse(
        success=True,
        data=data,
        metadata=ResponseMetadata(
            processing_time=processing_time,
            agent_id=agent_id,
            status=AgentStatus.COMPLETED,
        ),
        confidence=confidence,
    )


def create_failure_response(agent_id: str, error: str, processing_time: float) -> BaseAgentResponse:
    return BaseAgentResponse(
        success=False,
        error=error or "Unknown error",
        metadata=ResponseMetadata(
            processing_time=processing_time,
            agent_id=agent_id,
            status=AgentStatus.ERROR,
        ),
    )
