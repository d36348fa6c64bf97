"""
Conversation engine — drives the round-robin turn loop.

Each iteration re-reads the state machine, asks the current philosopher for
a turn, records it, and goes round again until the state is no longer
InProgress (completed, reset from outside, or failed).  There is no turn
counter here; the state machine decides when the discussion is over.

Failures never escape `start()`: any exception from building the prompt or
calling the model ends the loop in the Error state, with the original
exception kept as the cause.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Callable

from backend.config import CREATIVE_TEMPERATURE, DEFAULT_TURN_DELAY, LLMModel, response_token_budget
from backend.llm_client import EmptyResponseError, LLMClient
from backend.state_machine import ConversationStateManager
from models.conversation import ConversationConfig, PhilosopherContribution
from models.state import ConversationState, InProgress
from prompts.builder import build_turn_prompt

logger = logging.getLogger(__name__)


class ConversationEngine:
    """
    Usage:
        engine = ConversationEngine(client, ConversationStateManager(), model=GPT4_1_NANO)
        engine.start(ConversationConfig(topic="What is justice?", participants=[socrates, kant]))
        final_state = engine.state
    """

    def __init__(
        self,
        llm_client: LLMClient,
        state_manager: ConversationStateManager,
        model: LLMModel,
        turn_delay: float = DEFAULT_TURN_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._llm = llm_client
        self._states = state_manager
        self._model = model
        self._turn_delay = turn_delay
        self._sleep = sleep

    @property
    def state(self) -> ConversationState:
        return self._states.state

    # ── Public API ────────────────────────────────────────────────────────────

    def start(self, config: ConversationConfig) -> None:
        """Begin a new conversation and run it until it completes or fails."""
        try:
            if not isinstance(config, ConversationConfig):
                raise TypeError(f"Expected ConversationConfig, got {type(config).__name__}")
            logger.info(
                "Starting conversation with %d philosophers on topic: '%s'",
                len(config.participants), config.topic,
            )
            self._states.start_conversation(config)
        except Exception as exc:
            logger.exception("Failed to start conversation")
            self._states.set_error("Failed to start conversation", exc)
            return

        self._run_turns()

    def reset(self) -> None:
        self._states.reset()

    # ── Turn loop ─────────────────────────────────────────────────────────────

    def _run_turns(self) -> None:
        while self._take_turn():
            if self._turn_delay > 0:
                self._sleep(self._turn_delay)

    def _take_turn(self) -> bool:
        """
        Produce one contribution.  Returns True when another turn should
        follow, False when the loop must stop.
        """
        current = self._states.state
        if not isinstance(current, InProgress):
            logger.warning("Turn requested but state is %s; stopping", current.tag.value)
            return False

        philosopher = current.current_philosopher
        if philosopher is None:
            logger.warning("No current philosopher available; stopping")
            return False

        logger.info("Generating response for %s (round %d)", philosopher.name, current.current_round)
        try:
            prompt = build_turn_prompt(philosopher, current)
            logger.debug(
                "System prompt: %d chars, user prompt: %d chars",
                len(philosopher.system_prompt), len(prompt),
            )
            response = self._llm.chat_completion(
                model=self._model,
                system_prompt=philosopher.system_prompt,
                user_context=prompt,
                max_tokens=response_token_budget(self._model, current.config.max_words_per_response),
                temperature=CREATIVE_TEMPERATURE,
            )
            text = response.text.strip() if response.text else ""
            if not text:
                raise EmptyResponseError(f"Empty response from LLM for {philosopher.name}")
        except Exception as exc:
            logger.exception("Failed to generate response for %s", philosopher.name)
            self._states.set_error(f"Failed to generate response for {philosopher.name}", exc)
            return False

        logger.debug("%s: %s...", philosopher.name, text[:100])
        self._states.add_contribution(PhilosopherContribution(
            philosopher=philosopher,
            response=text,
            round_number=current.current_round,
            timestamp=datetime.now(timezone.utc),
        ))
        logger.info("Added contribution for %s", philosopher.name)

        after = self._states.state
        if isinstance(after, InProgress) and not after.is_complete:
            return True
        logger.info("Conversation finished in state %s", after.tag.value)
        return False
