"""Tests for the text-completion client."""

import pytest

from resume_orchestrator.completion import (
    TextCompletionClient,
    clean_response_text,
    map_completion_error,
    parse_completion_text,
)
from resume_orchestrator.config import Settings
from resume_orchestrator.errors import (
    ApiKeyMissingError,
    CompletionError,
    GenerationError,
    RateLimitError,
)
from resume_orchestrator.observability import AgentObserver
from resume_orchestrator.providers.types import CompletionResponse, GenerationConfig
from resume_orchestrator.retry import RetryConfig

SINGLE_ATTEMPT = RetryConfig(max_attempts=1)


class FakeProvider:
    """Provider returning a fixed text, or raising a fixed error."""

    model = "fake-model"

    def __init__(self, text="", error=None, usage=None):
        self.text = text
        self.error = error
        self.usage = usage or {}
        self.configs = []

    async def complete(self, prompt, config):
        self.configs.append(config)
        if self.error:
            raise self.error
        return CompletionResponse(text=self.text, usage=self.usage)


class TestResponseParsing:
    def test_strips_json_fence(self):
        assert clean_response_text('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_strips_plain_fence(self):
        assert clean_response_text("```\n[1, 2]\n```") == "[1, 2]"

    def test_parses_json(self):
        assert parse_completion_text('```json\n{"skills": ["Python"]}\n```') == {"skills": ["Python"]}

    def test_falls_back_to_text(self):
        assert parse_completion_text("  Sure, here you go  ") == "Sure, here you go"


class TestErrorMapping:
    def test_api_key_error(self):
        mapped = map_completion_error(Exception("API key not valid. Please pass a valid API key."))
        assert isinstance(mapped, ApiKeyMissingError)
        assert mapped.code == "API_KEY_MISSING"
        assert str(mapped) == "Gemini API key not configured or invalid"

    @pytest.mark.parametrize("message", ["Rate limit reached", "Quota exceeded for model"])
    def test_rate_limit_error(self, message):
        mapped = map_completion_error(Exception(message))
        assert isinstance(mapped, RateLimitError)
        assert str(mapped) == "Rate limit exceeded. Please try again later."

    def test_other_error(self):
        mapped = map_completion_error(RuntimeError("boom"))
        assert isinstance(mapped, GenerationError)
        assert str(mapped) == "AI generation failed: boom"

    def test_completion_errors_pass_through(self):
        original = RateLimitError("slow down")
        assert map_completion_error(original) is original


class TestTextCompletionClient:
    @pytest.mark.asyncio
    async def test_generate_parses_reply(self):
        provider = FakeProvider(text='```json\n{"ok": true}\n```', usage={"total_tokens": 42})
        client = TextCompletionClient(provider=provider, retry_config=SINGLE_ATTEMPT)

        result = await client.generate("prompt")

        assert result.data == {"ok": True}
        assert result.usage == {"total_tokens": 42}
        assert result.duration_ms >= 0

    @pytest.mark.asyncio
    async def test_per_call_config_overrides_defaults(self):
        provider = FakeProvider(text="{}")
        client = TextCompletionClient(
            provider=provider,
            defaults=GenerationConfig(temperature=0.3, top_k=20),
            retry_config=SINGLE_ATTEMPT,
        )

        await client.generate("prompt", {"temperature": 0.8, "max_output_tokens": None})

        sent = provider.configs[0]
        assert sent.temperature == 0.8
        assert sent.top_k == 20
        assert sent.max_output_tokens == 4096

    @pytest.mark.asyncio
    async def test_empty_reply_is_generation_error(self):
        client = TextCompletionClient(provider=FakeProvider(text=""), retry_config=SINGLE_ATTEMPT)

        with pytest.raises(GenerationError, match=r"^AI generation failed: No response from model$"):
            await client.generate("prompt")

    @pytest.mark.asyncio
    async def test_provider_errors_are_mapped(self):
        observer = AgentObserver()
        client = TextCompletionClient(
            provider=FakeProvider(error=RuntimeError("quota exhausted")),
            retry_config=SINGLE_ATTEMPT,
            observer=observer,
        )

        with pytest.raises(RateLimitError) as exc_info:
            await client.generate("prompt")

        assert isinstance(exc_info.value, CompletionError)
        assert observer.events[-1].data["error_type"] == "RATE_LIMIT"

    @pytest.mark.asyncio
    async def test_missing_provider_is_api_key_error(self):
        with pytest.raises(ApiKeyMissingError):
            await TextCompletionClient().generate("prompt")

    @pytest.mark.asyncio
    async def test_provider_factory_called_once(self):
        calls = []

        def factory():
            calls.append(1)
            return FakeProvider(text="{}")

        client = TextCompletionClient(provider_factory=factory, retry_config=SINGLE_ATTEMPT)
        await client.generate("one")
        await client.generate("two")

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_observer_records_llm_request(self):
        observer = AgentObserver()
        client = TextCompletionClient(
            provider=FakeProvider(text="{}", usage={"total_tokens": 120}),
            retry_config=SINGLE_ATTEMPT,
            observer=observer,
        )

        await client.generate("prompt")

        stats = observer.get_session_stats()
        assert stats["llm_requests"] == 1
        assert stats["total_tokens"] == 120

    @pytest.mark.asyncio
    async def test_from_settings_without_key_fails_on_first_call(self):
        client = TextCompletionClient.from_settings(Settings())

        with pytest.raises(ApiKeyMissingError):
            await client.generate("prompt")
