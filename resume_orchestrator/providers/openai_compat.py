"""OpenAI-compatible provider implementation."""

from __future__ import annotations

from typing import Any, Dict

from openai import AsyncOpenAI

from .types import CompletionResponse, GenerationConfig


class OpenAICompatibleProvider:
    """Provider for OpenAI-compatible chat APIs.

    The whole prompt is sent as a single user message. Chat APIs have no
    ``top_k`` parameter, so that setting is ignored here.
    """

    def __init__(self, api_key: str, model: str, api_base: str = "") -> None:
        self.model = model
        self.api_base = api_base or ""
        self.client = AsyncOpenAI(api_key=api_key, base_url=api_base or None)

    async def complete(self, prompt: str, config: GenerationConfig) -> CompletionResponse:
        completion = await self.client.chat.completions.create(**self._build_kwargs(prompt, config))

        text = ""
        if completion.choices:
            text = completion.choices[0].message.content or ""

        usage: Dict[str, int] = {}
        if completion.usage is not None:
            usage = {
                "prompt_tokens": completion.usage.prompt_tokens or 0,
                "completion_tokens": completion.usage.completion_tokens or 0,
                "total_tokens": completion.usage.total_tokens or 0,
            }

        return CompletionResponse(text=text.strip(), usage=usage, raw=completion)

    def _build_kwargs(self, prompt: str, config: GenerationConfig) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": config.temperature,
            "top_p": config.top_p,
            "max_tokens": config.max_output_tokens,
        }
