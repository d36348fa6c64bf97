"""
Conversation state machine — the single source of truth for a run.

ConversationStateManager holds exactly one ConversationState value.  Every
change goes through a named transition which swaps the whole value under a
lock, then notifies subscribers with the new value.  Readers use `.state`
and never block.

Transitions never raise on a wrong starting state: an invalid transition
lands in the Error state instead.

Usage:
    manager = ConversationStateManager()
    unsubscribe = manager.subscribe(lambda state: render(state))
    manager.start_conversation(config)
"""

import logging
import threading
from typing import Callable, List, Optional

from models.conversation import (
    ConversationConfig,
    ConversationRound,
    DirectorConfig,
    PhilosopherContribution,
    SummarizationConfig,
)
from models.state import (
    Completed,
    ConversationState,
    CreatingVideoScript,
    Error,
    InProgress,
    NotStarted,
    SummarizationComplete,
    Summarizing,
    VideoScriptComplete,
    flatten_contributions,
)
from models.summary import ConversationSummary, VideoScript

logger = logging.getLogger(__name__)

StateListener = Callable[[ConversationState], None]


class ConversationStateManager:

    def __init__(self):
        self._state: ConversationState = NotStarted()
        self._lock = threading.RLock()
        self._listeners: List[StateListener] = []

    # ── Observation ───────────────────────────────────────────────────────────

    @property
    def state(self) -> ConversationState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a listener called with every committed state, in commit order.
        Returns a callable that removes the listener again.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, new_state: ConversationState) -> None:
        # Caller holds the lock, so listeners see states in commit order.
        self._state = new_state
        logger.debug("State -> %s", new_state.tag.value)
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("State listener %r failed", listener)

    # ── Transitions ───────────────────────────────────────────────────────────

    def start_conversation(self, config: ConversationConfig) -> None:
        with self._lock:
            self._commit(InProgress(
                config=config,
                rounds=(ConversationRound(round_number=1),),
                current_round=1,
                current_philosopher_index=0,
            ))

    def add_contribution(self, contribution: PhilosopherContribution) -> None:
        """
        Record a turn and advance to the next speaker.  No-op unless the
        current state is InProgress.
        """
        with self._lock:
            current = self._state
            if not isinstance(current, InProgress):
                logger.debug("Ignoring contribution in state %s", current.tag.value)
                return

            rounds = tuple(
                r.add_contribution(contribution) if r.round_number == contribution.round_number else r
                for r in current.rounds
            )

            next_index = current.current_philosopher_index + 1
            if next_index < len(current.config.participants):
                self._commit(InProgress(
                    config=current.config,
                    rounds=rounds,
                    current_round=current.current_round,
                    current_philosopher_index=next_index,
                ))
                return

            # Everyone has spoken this round.
            rounds = tuple(
                ConversationRound(r.round_number, r.contributions, is_complete=True)
                if r.round_number == current.current_round else r
                for r in rounds
            )
            next_round = current.current_round + 1
            if next_round > current.config.max_rounds:
                self._commit(Completed(
                    config=current.config,
                    rounds=rounds,
                    final_contributions=tuple(flatten_contributions(rounds)),
                ))
            else:
                self._commit(InProgress(
                    config=current.config,
                    rounds=rounds + (ConversationRound(round_number=next_round),),
                    current_round=next_round,
                    current_philosopher_index=0,
                ))

    def set_error(self, message: str, cause: Optional[BaseException] = None) -> None:
        with self._lock:
            self._commit(Error(message=message, cause=cause))

    def start_summarization(self, config: SummarizationConfig) -> None:
        with self._lock:
            current = self._state
            if not isinstance(current, Completed):
                self._commit(Error("Can only summarize completed conversations"))
                return
            self._commit(Summarizing(original_conversation=current, config=config))

    def complete_summarization(self, summary: ConversationSummary) -> None:
        with self._lock:
            current = self._state
            if not isinstance(current, Summarizing):
                self._commit(Error("Not currently summarizing"))
                return
            self._commit(SummarizationComplete(
                original_conversation=current.original_conversation,
                summary=summary,
            ))

    def start_video_script_creation(self, config: DirectorConfig) -> None:
        with self._lock:
            current = self._state
            if not isinstance(current, SummarizationComplete):
                self._commit(Error("Can only create video scripts from completed summaries"))
                return
            self._commit(CreatingVideoScript(summary=current.summary, config=config))

    def complete_video_script(self, video_script: VideoScript) -> None:
        with self._lock:
            current = self._state
            if not isinstance(current, CreatingVideoScript):
                self._commit(Error("Not currently creating video script"))
                return
            self._commit(VideoScriptComplete(summary=current.summary, video_script=video_script))

    def reset(self) -> None:
        with self._lock:
            self._commit(NotStarted())
