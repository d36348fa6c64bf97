"""
Tests for the model table, LLM profiles and settings loading.
"""
import pytest

from backend.config import (
    CLAUDE_HAIKU,
    DEFAULT_MAX_TOKENS,
    DEFAULT_STORAGE_DIR,
    DEFAULT_TURN_DELAY,
    GPT4_1,
    GPT4_1_NANO,
    GPT5_MINI,
    PROFILES,
    LLMProfile,
    Settings,
    resolve_profile,
    response_token_budget,
)

ENV_VARS = ("LLM_PROFILE", "OPENAI_API_KEY", "ANTHROPIC_API_KEY", "SOPHIA_STORAGE_DIR", "SOPHIA_TURN_DELAY")


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestModels:

    def test_calculate_cost(self):
        assert GPT4_1.calculate_cost(1_000_000, 500_000) == pytest.approx(2.0 + 4.0)

    def test_reasoning_detection(self):
        assert GPT5_MINI.is_reasoning_model
        assert not GPT4_1_NANO.is_reasoning_model
        assert not CLAUDE_HAIKU.is_reasoning_model

    def test_token_budget(self):
        assert response_token_budget(GPT4_1_NANO, 150) == 300
        assert response_token_budget(GPT4_1_NANO, 40) == 80
        assert response_token_budget(GPT5_MINI, 40) == DEFAULT_MAX_TOKENS

    def test_str(self):
        assert str(GPT4_1) == "gpt-4.1"


class TestProfiles:

    @pytest.mark.parametrize("name,expected", [
        ("debug", "debug"),
        ("PROD", "production"),
        (" balanced ", "balanced"),
        ("anthropic", "claude"),
        (None, "debug"),
        ("nonsense", "debug"),
    ])
    def test_resolve_profile(self, name, expected):
        assert resolve_profile(name).name == expected

    def test_mixed_providers_rejected(self):
        with pytest.raises(ValueError, match="mixes providers"):
            LLMProfile("mixed", GPT4_1, CLAUDE_HAIKU, GPT4_1)

    def test_profile_provider(self):
        assert PROFILES["claude"].provider == "anthropic"
        assert PROFILES["debug"].provider == "openai"


class TestSettings:

    def test_defaults(self, clean_env):
        settings = Settings.from_env()

        assert settings.profile.name == "debug"
        assert settings.storage_dir == DEFAULT_STORAGE_DIR
        assert settings.turn_delay == DEFAULT_TURN_DELAY
        assert not settings.has_api_key

    def test_from_env(self, clean_env):
        clean_env.setenv("LLM_PROFILE", "claude")
        clean_env.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        clean_env.setenv("SOPHIA_STORAGE_DIR", "/tmp/sophia")
        clean_env.setenv("SOPHIA_TURN_DELAY", "0")

        settings = Settings.from_env()

        assert settings.profile.name == "claude"
        assert settings.api_key == "sk-ant-test"
        assert settings.has_api_key
        assert settings.storage_dir == "/tmp/sophia"
        assert settings.turn_delay == 0.0

    def test_key_follows_profile_provider(self, clean_env):
        clean_env.setenv("ANTHROPIC_API_KEY", "sk-ant-test")

        settings = Settings.from_env()

        assert settings.profile.provider == "openai"
        assert not settings.has_api_key

    def test_placeholder_key_is_not_a_key(self, clean_env):
        clean_env.setenv("OPENAI_API_KEY", "PASTE_YOUR_KEY_HERE")
        assert not Settings.from_env().has_api_key

    @pytest.mark.parametrize("raw,expected", [("abc", DEFAULT_TURN_DELAY), ("-3", 0.0), ("1.5", 1.5)])
    def test_turn_delay_parsing(self, clean_env, raw, expected):
        clean_env.setenv("SOPHIA_TURN_DELAY", raw)
        assert Settings.from_env().turn_delay == expected
