"""Gemini provider implementation."""

from __future__ import annotations

import asyncio
from typing import Dict

from google import genai
from google.genai import types

from .types import CompletionResponse, GenerationConfig


class GeminiProvider:
    """Google Gemini provider using google-genai SDK."""

    def __init__(self, api_key: str, model: str, api_base: str = "") -> None:
        self.model = model
        # google-genai does not expose a stable api_base option; keep for future use
        _ = api_base
        self.client = genai.Client(api_key=api_key)

    async def complete(self, prompt: str, config: GenerationConfig) -> CompletionResponse:
        response = await asyncio.to_thread(
            self.client.models.generate_content,
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=config.temperature,
                top_k=config.top_k,
                top_p=config.top_p,
                max_output_tokens=config.max_output_tokens,
            ),
        )
        return CompletionResponse(
            text=(response.text or "").strip(),
            usage=self._usage(response),
            raw=response,
        )

    def _usage(self, response) -> Dict[str, int]:
        meta = getattr(response, "usage_metadata", None)
        if meta is None:
            return {}
        return {
            "prompt_tokens": meta.prompt_token_count or 0,
            "completion_tokens": meta.candidates_token_count or 0,
            "total_tokens": meta.total_token_count or 0,
        }
