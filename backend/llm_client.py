"""
LLM capability boundary.

Engines only ever see `LLMClient.chat_completion(...)`, which either returns
an `LLMResponse` or raises `LLMCallError`.  Two concrete clients are
provided, one per provider SDK:

  OpenAIChatClient     — openai.OpenAI chat completions
  AnthropicChatClient  — anthropic.Anthropic messages

Both log model, token usage and cost for every call.
"""

import abc
import logging
from dataclasses import dataclass
from typing import Optional

import anthropic
import openai

from backend.config import PROVIDER_ANTHROPIC, PROVIDER_OPENAI, LLMModel, Settings

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 120.0


class LLMCallError(RuntimeError):
    """Network, HTTP, auth or response-shape failure from the model API."""


class EmptyResponseError(LLMCallError):
    """The call succeeded but produced no usable text."""


@dataclass(frozen=True)
class LLMResponse:
    text: str
    prompt_tokens: int = 0
    completion_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


class LLMClient(abc.ABC):
    """Single-shot chat completion: one system prompt, one user message."""

    @abc.abstractmethod
    def chat_completion(
        self,
        model: LLMModel,
        system_prompt: str,
        user_context: str,
        max_tokens: int = 1000,
        temperature: float = 0.7,
    ) -> LLMResponse:
        ...

    def close(self) -> None:
        """Release the underlying HTTP resources."""

    @staticmethod
    def _log_usage(model: LLMModel, response: LLMResponse) -> None:
        cost = model.calculate_cost(response.prompt_tokens, response.completion_tokens)
        logger.info(
            "LLM API: %s | tokens=%d (%d+%d) | cost=$%.4f",
            model.model_id,
            response.total_tokens,
            response.prompt_tokens,
            response.completion_tokens,
            cost,
        )


class OpenAIChatClient(LLMClient):

    def __init__(self, api_key: Optional[str] = None, client: Optional[openai.OpenAI] = None):
        self._client = client or openai.OpenAI(api_key=api_key, timeout=REQUEST_TIMEOUT_SECONDS)

    def chat_completion(
        self,
        model: LLMModel,
        system_prompt: str,
        user_context: str,
        max_tokens: int = 1000,
        temperature: float = 0.7,
    ) -> LLMResponse:
        logger.debug(
            "OpenAI call: model=%s max_tokens=%d temperature=%.2f system=%d chars user=%d chars",
            model.model_id, max_tokens, temperature, len(system_prompt), len(user_context),
        )
        kwargs = dict(
            model=model.model_id,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_context},
            ],
            max_completion_tokens=max_tokens,
        )
        # Reasoning models only accept the default temperature.
        if not model.is_reasoning_model:
            kwargs["temperature"] = temperature

        try:
            completion = self._client.chat.completions.create(**kwargs)
        except openai.OpenAIError as exc:
            logger.error("OpenAI API call failed: %s", exc)
            raise LLMCallError(f"OpenAI API error: {exc}") from exc

        if not completion.choices:
            raise LLMCallError("OpenAI response contained no choices")

        usage = completion.usage
        response = LLMResponse(
            text=(completion.choices[0].message.content or "").strip(),
            prompt_tokens=usage.prompt_tokens if usage else 0,
            completion_tokens=usage.completion_tokens if usage else 0,
        )
        self._log_usage(model, response)
        return response

    def close(self) -> None:
        self._client.close()


class AnthropicChatClient(LLMClient):

    def __init__(self, api_key: Optional[str] = None, client: Optional[anthropic.Anthropic] = None):
        self._client = client or anthropic.Anthropic(api_key=api_key, timeout=REQUEST_TIMEOUT_SECONDS)

    def chat_completion(
        self,
        model: LLMModel,
        system_prompt: str,
        user_context: str,
        max_tokens: int = 1000,
        temperature: float = 0.7,
    ) -> LLMResponse:
        logger.debug(
            "Anthropic call: model=%s max_tokens=%d temperature=%.2f system=%d chars user=%d chars",
            model.model_id, max_tokens, temperature, len(system_prompt), len(user_context),
        )
        try:
            message = self._client.messages.create(
                model=model.model_id,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_context}],
            )
        except anthropic.AnthropicError as exc:
            logger.error("Anthropic API call failed: %s", exc)
            raise LLMCallError(f"Anthropic API error: {exc}") from exc

        text = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        )
        response = LLMResponse(
            text=text.strip(),
            prompt_tokens=message.usage.input_tokens,
            completion_tokens=message.usage.output_tokens,
        )
        self._log_usage(model, response)
        return response

    def close(self) -> None:
        self._client.close()


def create_llm_client(settings: Settings) -> LLMClient:
    """Build the client for the provider of the active profile."""
    provider = settings.profile.provider
    if provider == PROVIDER_ANTHROPIC:
        return AnthropicChatClient(api_key=settings.anthropic_api_key)
    if provider == PROVIDER_OPENAI:
        return OpenAIChatClient(api_key=settings.openai_api_key)
    raise ValueError(f"Unsupported LLM provider: {provider}")
