"""Configuration validator for startup checks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from .errors import ApiKeyMissingError
from .providers import PROVIDER_DEFAULTS, resolve_api_key


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ConfigError:
    """A single configuration issue."""

    field: str
    message: str
    severity: Severity


def validate_config(raw_config: Dict[str, Any]) -> List[ConfigError]:
    """Validate raw configuration and return a list of issues.

    Args:
        raw_config: Raw config dict from YAML

    Returns:
        List of ConfigError (empty = valid)
    """
    errors: List[ConfigError] = []

    # --- Provider ---
    provider = str(raw_config.get("provider", "gemini") or "gemini").lower()
    if provider not in PROVIDER_DEFAULTS:
        errors.append(ConfigError(
            field="provider",
            message=f"Unknown provider {provider!r}; it will be treated as OpenAI-compatible",
            severity=Severity.WARNING,
        ))

    # --- API Key ---
    try:
        resolve_api_key(provider, raw_config.get("api_key", "") or "")
    except ApiKeyMissingError as e:
        errors.append(ConfigError(field="api_key", message=str(e), severity=Severity.ERROR))

    # --- Model ---
    model = raw_config.get("model", "")
    if not model or not isinstance(model, str):
        errors.append(ConfigError(
            field="model",
            message="model must be a non-empty string",
            severity=Severity.ERROR,
        ))

    # --- Generation ---
    generation = raw_config.get("generation", {}) or {}

    temperature = generation.get("temperature", 0.3)
    if not isinstance(temperature, (int, float)) or temperature < 0 or temperature > 2:
        errors.append(ConfigError(
            field="generation.temperature",
            message=f"temperature must be a number between 0 and 2, got {temperature}",
            severity=Severity.ERROR,
        ))

    top_p = generation.get("top_p", 0.95)
    if not isinstance(top_p, (int, float)) or top_p <= 0 or top_p > 1:
        errors.append(ConfigError(
            field="generation.top_p",
            message=f"top_p must be in (0, 1], got {top_p}",
            severity=Severity.ERROR,
        ))

    max_tokens = generation.get("max_output_tokens", 4096)
    if not isinstance(max_tokens, int) or max_tokens <= 0:
        errors.append(ConfigError(
            field="generation.max_output_tokens",
            message=f"max_output_tokens must be a positive integer, got {max_tokens}",
            severity=Severity.ERROR,
        ))

    # --- Orchestrator ---
    orchestrator = raw_config.get("orchestrator", {}) or {}

    history_limit = orchestrator.get("history_limit", 1000)
    if history_limit is not None and (not isinstance(history_limit, int) or history_limit <= 0):
        errors.append(ConfigError(
            field="orchestrator.history_limit",
            message=f"history_limit must be a positive integer or null, got {history_limit!r}",
            severity=Severity.ERROR,
        ))

    timeout = orchestrator.get("default_timeout_ms", 60000)
    if isinstance(timeout, (int, float)) and timeout < 1000:
        errors.append(ConfigError(
            field="orchestrator.default_timeout_ms",
            message=f"default_timeout_ms of {timeout} is shorter than a typical completion call",
            severity=Severity.WARNING,
        ))

    return errors


def has_errors(issues: List[ConfigError]) -> bool:
    """Check if any issues are errors (not just warnings)."""
    return any(e.severity == Severity.ERROR for e in issues)
