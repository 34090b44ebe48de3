"""Configuration loading for the orchestration core."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

REPO_ROOT = Path(__file__).resolve().parents[1]


@dataclass
class LLMSettings:
    """Which completion backend to talk to."""

    provider: str = "gemini"
    model: str = "gemini-1.5-flash"
    api_key: str = "${GEMINI_API_KEY}"
    api_base: str = ""


@dataclass
class GenerationSettings:
    """Default sampling parameters for completions."""

    temperature: float = 0.3
    top_k: int = 40
    top_p: float = 0.95
    max_output_tokens: int = 4096


@dataclass
class RetrySettings:
    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0


@dataclass
class OrchestratorSettings:
    """Limits for the orchestrator and workflow coordinator."""

    history_limit: Optional[int] = 1000
    default_timeout_ms: int = 60000
    cache_ttl_seconds: int = 300
    cache_max_entries: Optional[int] = 1000


@dataclass
class Settings:
    llm: LLMSettings = field(default_factory=LLMSettings)
    generation: GenerationSettings = field(default_factory=GenerationSettings)
    retry: RetrySettings = field(default_factory=RetrySettings)
    orchestrator: OrchestratorSettings = field(default_factory=OrchestratorSettings)
    verbose: bool = False


def load_raw_config(config_path: str = "config/config.local.yaml") -> Dict[str, Any]:
    """Load raw configuration dictionary from YAML files.

    ``config/config.yaml`` supplies defaults and ``config_path`` (normally
    ``config/config.local.yaml`` with secrets) is deep-merged over it. Paths
    are tried relative to the working directory first, then the repo root.

    Raises:
        ValueError: If a config file does not contain a mapping
    """

    def _resolve(candidate: str) -> Path:
        path = Path(candidate)
        if path.exists():
            return path
        alt = REPO_ROOT / candidate
        if alt.exists():
            return alt
        return path

    base = _load_yaml(_resolve("config/config.yaml"))
    return _deep_merge(base, _load_yaml(_resolve(config_path)))


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must be a mapping: {path}")
    return data


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        base_value = merged.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(base_value, value)
        else:
            merged[key] = value
    return merged


def load_settings(raw_config: Optional[Dict[str, Any]] = None) -> Settings:
    """Build typed settings from a raw config dict.

    Args:
        raw_config: Raw config from :func:`load_raw_config`; loaded when None

    Returns:
        Settings with defaults for every missing key
    """
    if raw_config is None:
        raw_config = load_raw_config()

    generation = raw_config.get("generation", {}) or {}
    retry = raw_config.get("retry", {}) or {}
    orchestrator = raw_config.get("orchestrator", {}) or {}

    llm_defaults = LLMSettings()
    gen_defaults = GenerationSettings()
    retry_defaults = RetrySettings()
    orch_defaults = OrchestratorSettings()

    return Settings(
        llm=LLMSettings(
            provider=raw_config.get("provider", llm_defaults.provider),
            model=raw_config.get("model", llm_defaults.model),
            api_key=raw_config.get("api_key", llm_defaults.api_key) or "",
            api_base=raw_config.get("api_base", llm_defaults.api_base) or "",
        ),
        generation=GenerationSettings(
            temperature=generation.get("temperature", gen_defaults.temperature),
            top_k=generation.get("top_k", gen_defaults.top_k),
            top_p=generation.get("top_p", gen_defaults.top_p),
            max_output_tokens=generation.get("max_output_tokens", gen_defaults.max_output_tokens),
        ),
        retry=RetrySettings(
            max_attempts=retry.get("max_attempts", retry_defaults.max_attempts),
            base_delay=retry.get("base_delay", retry_defaults.base_delay),
            max_delay=retry.get("max_delay", retry_defaults.max_delay),
        ),
        orchestrator=OrchestratorSettings(
            history_limit=orchestrator.get("history_limit", orch_defaults.history_limit),
            default_timeout_ms=orchestrator.get("default_timeout_ms", orch_defaults.default_timeout_ms),
            cache_ttl_seconds=orchestrator.get("cache_ttl_seconds", orch_defaults.cache_ttl_seconds),
            cache_max_entries=orchestrator.get("cache_max_entries", orch_defaults.cache_max_entries),
        ),
        verbose=bool(raw_config.get("verbose", False)),
    )
