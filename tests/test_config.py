"""Tests for YAML config loading and typed settings."""

import pytest

from resume_orchestrator.config import Settings, load_raw_config, load_settings


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    directory = tmp_path / "config"
    directory.mkdir()
    return directory


class TestLoadRawConfig:
    def test_local_file_is_deep_merged(self, config_dir):
        (config_dir / "config.yaml").write_text(
            "provider: gemini\nmodel: base-model\ngeneration:\n  temperature: 0.3\n  top_p: 0.9\n"
        )
        (config_dir / "config.local.yaml").write_text("api_key: secret\ngeneration:\n  temperature: 0.7\n")

        raw = load_raw_config()

        assert raw["provider"] == "gemini"
        assert raw["model"] == "base-model"
        assert raw["api_key"] == "secret"
        assert raw["generation"] == {"temperature": 0.7, "top_p": 0.9}

    def test_custom_override_path(self, config_dir):
        (config_dir / "config.yaml").write_text("model: base-model\n")
        (config_dir / "staging.yaml").write_text("model: staging-model\n")

        assert load_raw_config("config/staging.yaml")["model"] == "staging-model"

    def test_non_mapping_file_is_rejected(self, config_dir):
        (config_dir / "config.yaml").write_text("model: base-model\n")
        (config_dir / "config.local.yaml").write_text("- just\n- a list\n")

        with pytest.raises(ValueError, match="must be a mapping"):
            load_raw_config()

    def test_empty_local_file(self, config_dir):
        (config_dir / "config.yaml").write_text("model: base-model\n")
        (config_dir / "config.local.yaml").write_text("")

        assert load_raw_config() == {"model": "base-model"}


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings({})

        assert settings == Settings()
        assert settings.llm.provider == "gemini"
        assert settings.orchestrator.history_limit == 1000
        assert settings.orchestrator.default_timeout_ms == 60000
        assert settings.orchestrator.cache_max_entries == 1000
        assert settings.verbose is False

    def test_overrides(self):
        settings = load_settings(
            {
                "provider": "deepseek",
                "model": "deepseek-chat",
                "api_key": None,
                "generation": {"temperature": 0.9},
                "retry": {"max_attempts": 5},
                "orchestrator": {"history_limit": None, "cache_ttl_seconds": 60, "cache_max_entries": None},
                "verbose": True,
            }
        )

        assert settings.llm.provider == "deepseek"
        assert settings.llm.api_key == ""
        assert settings.generation.temperature == 0.9
        assert settings.generation.max_output_tokens == 4096
        assert settings.retry.max_attempts == 5
        assert settings.orchestrator.history_limit is None
        assert settings.orchestrator.cache_ttl_seconds == 60
        assert settings.orchestrator.cache_max_entries is None
        assert settings.verbose is True
