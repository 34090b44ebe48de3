"""Provider-agnostic generation types."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Union


@dataclass
class GenerationConfig:
    """Sampling settings passed to providers."""

    temperature: float = 0.3
    top_k: int = 40
    top_p: float = 0.95
    max_output_tokens: int = 4096

    def merged(
        self, overrides: Optional[Union["GenerationConfig", Mapping[str, Any]]] = None
    ) -> "GenerationConfig":
        """Return a copy with non-None override fields applied."""
        if overrides is None:
            return replace(self)
        if isinstance(overrides, GenerationConfig):
            overrides = {
                "temperature": overrides.temperature,
                "top_k": overrides.top_k,
                "top_p": overrides.top_p,
                "max_output_tokens": overrides.max_output_tokens,
            }
        known = {k: v for k, v in overrides.items() if v is not None and hasattr(self, k)}
        return replace(self, **known)


@dataclass
class CompletionResponse:
    """Normalized raw response from a provider."""

    text: str = ""
    usage: Dict[str, int] = field(default_factory=dict)
    raw: Any = None
