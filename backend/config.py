"""
Application configuration: model table, pricing, LLM profiles and settings.

Settings come from environment variables, optionally loaded from a .env
file.  A profile picks the model used for each pipeline stage:

  debug       — gpt-4.1-nano everywhere (cheapest, default)
  balanced    — gpt-4.1-mini for turns, gpt-4.1 for summary and storyboard
  production  — gpt-4.1 everywhere
  claude      — Anthropic models (Haiku for turns, Sonnet for the rest)
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()

PROVIDER_OPENAI = "openai"
PROVIDER_ANTHROPIC = "anthropic"

# Temperature settings for different use cases
CREATIVE_TEMPERATURE = 0.8       # philosopher turns
BALANCED_TEMPERATURE = 0.5
PRECISE_TEMPERATURE = 0.2
SUMMARIZATION_TEMPERATURE = 0.3  # precise, with a little creativity
DIRECTOR_TEMPERATURE = 0.7

# Token limits
DEFAULT_MAX_TOKENS = 300
LONG_RESPONSE_MAX_TOKENS = 600
SUMMARIZATION_MAX_TOKENS = 1000
DIRECTOR_MAX_TOKENS = SUMMARIZATION_MAX_TOKENS * 2  # scene descriptions are long

DEFAULT_TURN_DELAY = 0.5
DEFAULT_STORAGE_DIR = "conversations"

_REASONING_PREFIXES = ("gpt-5", "o1", "o3", "o4")


@dataclass(frozen=True)
class ModelPricing:
    """USD per one million tokens."""
    input_cost_per_1m: float
    output_cost_per_1m: float


@dataclass(frozen=True)
class LLMModel:
    model_id: str
    provider: str
    pricing: ModelPricing

    def calculate_cost(self, prompt_tokens: int, completion_tokens: int) -> float:
        input_cost = prompt_tokens / 1_000_000 * self.pricing.input_cost_per_1m
        output_cost = completion_tokens / 1_000_000 * self.pricing.output_cost_per_1m
        return input_cost + output_cost

    @property
    def is_reasoning_model(self) -> bool:
        return self.model_id.startswith(_REASONING_PREFIXES)

    def __str__(self) -> str:
        return self.model_id


GPT4_1 = LLMModel("gpt-4.1", PROVIDER_OPENAI, ModelPricing(2.0, 8.0))
GPT4_1_MINI = LLMModel("gpt-4.1-mini", PROVIDER_OPENAI, ModelPricing(0.4, 1.6))
GPT4_1_NANO = LLMModel("gpt-4.1-nano", PROVIDER_OPENAI, ModelPricing(0.1, 0.4))
GPT5_MINI = LLMModel("gpt-5-mini", PROVIDER_OPENAI, ModelPricing(0.25, 2.0))
CLAUDE_SONNET = LLMModel("claude-sonnet-4-6", PROVIDER_ANTHROPIC, ModelPricing(3.0, 15.0))
CLAUDE_HAIKU = LLMModel("claude-haiku-4-5", PROVIDER_ANTHROPIC, ModelPricing(1.0, 5.0))


def response_token_budget(model: LLMModel, max_words: int) -> int:
    """
    Max tokens for one philosopher turn.  Roughly two tokens per word, except
    for reasoning models which spend part of the budget thinking.
    """
    if model.is_reasoning_model:
        return DEFAULT_MAX_TOKENS
    return max_words * 2


@dataclass(frozen=True)
class LLMProfile:
    name: str
    philosophical_model: LLMModel
    summarization_model: LLMModel
    director_model: LLMModel

    def __post_init__(self):
        providers = {
            self.philosophical_model.provider,
            self.summarization_model.provider,
            self.director_model.provider,
        }
        if len(providers) != 1:
            raise ValueError(f"Profile '{self.name}' mixes providers: {sorted(providers)}")

    @property
    def provider(self) -> str:
        return self.philosophical_model.provider


PROFILES: Dict[str, LLMProfile] = {
    "debug": LLMProfile("debug", GPT4_1_NANO, GPT4_1_NANO, GPT4_1_NANO),
    "balanced": LLMProfile("balanced", GPT4_1_MINI, GPT4_1, GPT4_1),
    "production": LLMProfile("production", GPT4_1, GPT4_1, GPT4_1),
    "claude": LLMProfile("claude", CLAUDE_HAIKU, CLAUDE_SONNET, CLAUDE_SONNET),
}

_PROFILE_ALIASES = {
    "debug": "debug", "dev": "debug", "test": "debug",
    "balanced": "balanced", "bal": "balanced",
    "production": "production", "prod": "production",
    "claude": "claude", "anthropic": "claude",
}


def resolve_profile(name: Optional[str]) -> LLMProfile:
    """Map a profile name or alias to a profile; unknown names fall back to debug."""
    key = _PROFILE_ALIASES.get((name or "debug").strip().lower())
    if key is None:
        logger.warning("Unknown LLM profile '%s', using debug profile", name)
        key = "debug"
    return PROFILES[key]


@dataclass(frozen=True)
class Settings:
    profile: LLMProfile
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    storage_dir: str = DEFAULT_STORAGE_DIR
    turn_delay: float = DEFAULT_TURN_DELAY

    @property
    def api_key(self) -> Optional[str]:
        """Key for the provider the active profile uses."""
        if self.profile.provider == PROVIDER_ANTHROPIC:
            return self.anthropic_api_key
        return self.openai_api_key

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key and not self.api_key.startswith("PASTE_"))

    @classmethod
    def from_env(cls) -> "Settings":
        profile = resolve_profile(os.getenv("LLM_PROFILE"))
        try:
            turn_delay = float(os.getenv("SOPHIA_TURN_DELAY", DEFAULT_TURN_DELAY))
        except ValueError:
            logger.warning("Invalid SOPHIA_TURN_DELAY, using %.1fs", DEFAULT_TURN_DELAY)
            turn_delay = DEFAULT_TURN_DELAY

        settings = cls(
            profile=profile,
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            storage_dir=os.getenv("SOPHIA_STORAGE_DIR", DEFAULT_STORAGE_DIR),
            turn_delay=max(0.0, turn_delay),
        )
        logger.info(
            "LLM profile %s: turns=%s summary=%s director=%s",
            profile.name,
            profile.philosophical_model,
            profile.summarization_model,
            profile.director_model,
        )
        return settings
