"""Exception types shared by agents, the orchestrator and the completion client."""

from __future__ import annotations

from typing import Optional


class AgentError(Exception):
    """Base class for orchestration errors."""

    pass


class AgentValidationError(AgentError):
    """Raised when an agent's input or the model's output fails a precondition."""

    pass


class AgentNotFoundError(AgentError, LookupError):
    """Raised when an agent id is not present in the registry."""

    def __init__(self, agent_id: str):
        super().__init__(f"Agent not found: {agent_id}")
        self.agent_id = agent_id


class AgentExecutionError(AgentError):
    """Raised by direct single-agent calls when the agent reports failure."""

    def __init__(self, agent_id: str, error: str):
        super().__init__(f"Agent execution failed: {error}")
        self.agent_id = agent_id
        self.error = error


class CompletionError(Exception):
    """Base class for text-completion failures.

    Attributes:
        code: Stable error code for callers that branch on failure kind
    """

    code = "GENERATION_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class ApiKeyMissingError(CompletionError):
    """Credentials for the completion provider are missing or rejected."""

    code = "API_KEY_MISSING"


class RateLimitError(CompletionError):
    """The provider refused the request because of rate limits or quota."""

    code = "RATE_LIMIT"


class GenerationError(CompletionError):
    """The provider failed to produce a completion."""

    code = "GENERATION_ERROR"


class ParsingError(CompletionError):
    """The completion could not be interpreted."""

    code = "PARSING_ERROR"
