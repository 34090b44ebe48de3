"""Text-completion client used by agents.

The client sends one prompt, strips Markdown code fences from the reply and
tries to parse it as JSON. When parsing fails the cleaned text is returned
as-is, so callers must accept either shape.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional, Union

from .errors import ApiKeyMissingError, CompletionError, GenerationError, RateLimitError
from .providers import create_provider
from .providers.base import CompletionProvider
from .providers.types import GenerationConfig
from .retry import RetryConfig, retry_with_backoff

if TYPE_CHECKING:
    from .config import Settings
    from .observability import AgentObserver

logger = logging.getLogger(__name__)


@dataclass
class CompletionResult:
    """Parsed completion: a JSON value when the reply parsed, else the raw text."""

    data: Any
    text: str = ""
    duration_ms: float = 0.0
    usage: Optional[Dict[str, int]] = None


def clean_response_text(text: str) -> str:
    """Remove a surrounding ```json / ``` fence and trim whitespace."""
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[len("```json"):]
    elif cleaned.startswith("```"):
        cleaned = cleaned[len("```"):]
    if cleaned.endswith("```"):
        cleaned = cleaned[: -len("```")]
    return cleaned.strip()


def parse_completion_text(text: str) -> Any:
    """Parse cleaned completion text as JSON, falling back to the string."""
    cleaned = clean_response_text(text)
    try:
        return json.loads(cleaned)
    except (json.JSONDecodeError, ValueError):
        logger.debug("Completion is not valid JSON; returning raw text")
        return cleaned


def map_completion_error(error: Exception) -> CompletionError:
    """Translate a provider exception into the client's error taxonomy."""
    if isinstance(error, CompletionError):
        return error

    message = str(error)
    lowered = message.lower()
    if "api key" in lowered:
        return ApiKeyMissingError("Gemini API key not configured or invalid")
    if "rate limit" in lowered or "quota" in lowered:
        return RateLimitError("Rate limit exceeded. Please try again later.")
    return GenerationError(f"AI generation failed: {message}")


class TextCompletionClient:
    """Single-operation client: ``generate(prompt, config) -> CompletionResult``.

    The provider is created on first use so that a missing credential is
    reported when an agent actually calls the model, not at import time.

    Example:
        client = TextCompletionClient(provider_factory=lambda: create_provider(
            "gemini", "${GEMINI_API_KEY}", "gemini-1.5-flash"))
        result = await client.generate(prompt, {"temperature": 0.2})
    """

    def __init__(
        self,
        provider: Optional[CompletionProvider] = None,
        provider_factory: Optional[Callable[[], CompletionProvider]] = None,
        defaults: Optional[GenerationConfig] = None,
        retry_config: Optional[RetryConfig] = None,
        observer: Optional[AgentObserver] = None,
    ):
        """
        Args:
            provider: Ready provider instance
            provider_factory: Called once to build the provider when none was given
            defaults: Generation defaults merged under per-call settings
            retry_config: Retry policy for transient provider failures
            observer: Observer receiving completion events
        """
        self._provider = provider
        self._provider_factory = provider_factory
        self.defaults = defaults or GenerationConfig()
        self.retry_config = retry_config or RetryConfig()
        self.observer = observer

    @classmethod
    def from_settings(cls, settings: Settings, observer: Optional[AgentObserver] = None) -> "TextCompletionClient":
        """Build a client for the provider and defaults in ``settings``."""
        llm = settings.llm

        def _factory() -> CompletionProvider:
            return create_provider(
                provider=llm.provider,
                api_key=llm.api_key,
                model=llm.model,
                api_base=llm.api_base,
            )

        return cls(
            provider_factory=_factory,
            defaults=GenerationConfig(
                temperature=settings.generation.temperature,
                top_k=settings.generation.top_k,
                top_p=settings.generation.top_p,
                max_output_tokens=settings.generation.max_output_tokens,
            ),
            retry_config=RetryConfig(
                max_attempts=settings.retry.max_attempts,
                base_delay=settings.retry.base_delay,
                max_delay=settings.retry.max_delay,
            ),
            observer=observer,
        )

    def _get_provider(self) -> CompletionProvider:
        if self._provider is None:
            if self._provider_factory is None:
                raise ApiKeyMissingError("Gemini API key not configured or invalid")
            self._provider = self._provider_factory()
        return self._provider

    async def generate(
        self,
        prompt: str,
        config: Optional[Union[GenerationConfig, Mapping[str, Any]]] = None,
    ) -> CompletionResult:
        """
        Send ``prompt`` and return the parsed reply.

        Args:
            prompt: Full prompt text
            config: Per-call generation overrides

        Returns:
            CompletionResult whose ``data`` is parsed JSON or the cleaned text

        Raises:
            ApiKeyMissingError: Credentials are missing or rejected
            RateLimitError: The provider is rate limiting or out of quota
            GenerationError: Any other generation failure, including an empty reply
        """
        generation = self.defaults.merged(config)
        start = time.time()

        try:
            provider = self._get_provider()
            response = await retry_with_backoff(provider.complete, self.retry_config, prompt, generation)
        except Exception as e:
            mapped = map_completion_error(e)
            logger.error(f"Completion failed ({mapped.code}): {e}")
            if self.observer:
                self.observer.log_error(
                    error_type=mapped.code,
                    message=str(mapped),
                    context={"prompt_chars": len(prompt)},
                )
            raise mapped from e

        duration_ms = (time.time() - start) * 1000
        if not response.text:
            raise GenerationError("AI generation failed: No response from model")

        if self.observer:
            self.observer.log_llm_request(
                model=getattr(provider, "model", "unknown"),
                tokens=response.usage.get("total_tokens", 0),
                duration_ms=duration_ms,
            )

        return CompletionResult(
            data=parse_completion_text(response.text),
            text=response.text,
            duration_ms=duration_ms,
            usage=response.usage or None,
        )
