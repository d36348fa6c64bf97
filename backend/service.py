"""
PhilosopherService — the application facade the UI talks to.

Wires one LLM client, the philosopher catalog, the state machine, the three
engines and JSON storage together, and owns the steps the engines leave to
their caller:

  - snapshotting the state machine into storage after each major transition
  - moving the state machine through Summarizing / CreatingVideoScript and
    into Error when a single-shot engine fails
  - re-running the pipeline on conversations loaded from history

Usage:
    service = PhilosopherService()
    service.start_conversation(ConversationConfig(topic="What is justice?",
                                                  participants=[socrates, kant]))
    summary = service.summarize_current()
    script = service.create_video_script()
"""

import logging
import time
from collections import OrderedDict
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from backend.config import Settings
from backend.conversation_engine import ConversationEngine
from backend.director_engine import DirectorEngine
from backend.llm_client import LLMClient, create_llm_client
from backend.philosophers import PhilosopherCatalog
from backend.state_machine import ConversationStateManager, StateListener
from backend.storage import ConversationStorage
from backend.summarization_engine import SummarizationEngine
from models.conversation import (
    ConversationConfig,
    ConversationRound,
    DirectorConfig,
    Philosopher,
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
    Summarizing,
    VideoScriptComplete,
)
from models.stored import STATUS_COMPLETED, StoredConversation, StoredConversationSummary
from models.summary import ConversationSummary, VideoScript

logger = logging.getLogger(__name__)


class InvalidStateError(RuntimeError):
    """The requested pipeline step does not fit the current conversation state."""


class PhilosopherService:

    def __init__(
        self,
        settings: Optional[Settings] = None,
        llm_client: Optional[LLMClient] = None,
        catalog: Optional[PhilosopherCatalog] = None,
        storage: Optional[ConversationStorage] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings or Settings.from_env()
        self._llm = llm_client or create_llm_client(self.settings)
        self.catalog = catalog or PhilosopherCatalog()
        self.storage = storage or ConversationStorage(self.settings.storage_dir)
        self._states = ConversationStateManager()

        profile = self.settings.profile
        self._conversation_engine = ConversationEngine(
            self._llm,
            self._states,
            model=profile.philosophical_model,
            turn_delay=self.settings.turn_delay,
            sleep=sleep,
        )
        self._summarization_engine = SummarizationEngine(self._llm, profile.summarization_model)
        self._director_engine = DirectorEngine(self._llm, profile.director_model)

        self.current_conversation_id: Optional[str] = None
        self.current_summary_id: Optional[str] = None
        self.current_script_id: Optional[str] = None
        self._recording = False
        self._states.subscribe(self._autosave)

    # ── State ─────────────────────────────────────────────────────────────────

    @property
    def state(self) -> ConversationState:
        return self._states.state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        return self._states.subscribe(listener)

    # ── Catalog ───────────────────────────────────────────────────────────────

    def get_all_philosophers(self) -> List[Philosopher]:
        return self.catalog.get_all()

    def search_philosophers(self, query: str) -> List[Philosopher]:
        return self.catalog.search(query)

    # ── Live pipeline ─────────────────────────────────────────────────────────

    def start_conversation(self, config: ConversationConfig) -> ConversationState:
        """Run a whole conversation, saving it after every turn.  Returns the final state."""
        logger.info("Starting conversation with: %s", config.participant_names)
        self.current_conversation_id = None
        self.current_summary_id = None
        self.current_script_id = None
        self._recording = True
        try:
            self._conversation_engine.start(config)
        finally:
            self._recording = False
        return self.state

    def reset_conversation(self) -> None:
        self._conversation_engine.reset()
        self.current_conversation_id = None
        self.current_summary_id = None
        self.current_script_id = None

    def save_current_conversation(self) -> Optional[str]:
        state = self.state
        if isinstance(state, (NotStarted, CreatingVideoScript, VideoScriptComplete)):
            return self.current_conversation_id
        self.current_conversation_id = self.storage.save_conversation(
            state, existing_id=self.current_conversation_id
        )
        return self.current_conversation_id

    def _autosave(self, state: ConversationState) -> None:
        # Snapshot every turn while a live conversation runs.
        if self._recording and isinstance(state, (InProgress, Completed, Error)):
            self.save_current_conversation()

    def summarize_current(self, config: SummarizationConfig = SummarizationConfig()) -> ConversationSummary:
        """
        Summarize the completed conversation held by the state machine.

        Raises InvalidStateError when there is no completed conversation and
        re-raises engine failures after moving the state machine to Error.
        """
        self._states.start_summarization(config)
        current = self.state
        if not isinstance(current, Summarizing):
            raise InvalidStateError(getattr(current, "message", "Cannot summarize now"))

        try:
            summary = self._summarization_engine.summarize_conversation(
                current.original_conversation, config
            )
        except Exception as exc:
            logger.exception("Summarization failed")
            self._states.set_error("Failed to summarize conversation", exc)
            raise

        self._states.complete_summarization(summary)
        conversation_id = self.current_conversation_id or self.save_current_conversation()
        self.current_summary_id = self.storage.save_summary(conversation_id, summary)
        return summary

    def create_video_script(self, config: DirectorConfig = DirectorConfig()) -> VideoScript:
        """Turn the current summary into a video script; same failure policy as summarize_current."""
        self._states.start_video_script_creation(config)
        current = self.state
        if not isinstance(current, CreatingVideoScript):
            raise InvalidStateError(getattr(current, "message", "Cannot create a video script now"))

        try:
            script = self._director_engine.create_video_script(current.summary, config)
        except Exception as exc:
            logger.exception("Video script creation failed")
            self._states.set_error("Failed to create video script", exc)
            raise

        self._states.complete_video_script(script)
        if self.current_summary_id:
            self.current_script_id = self.storage.save_video_script(self.current_summary_id, script)
        return script

    # ── History pipeline ──────────────────────────────────────────────────────

    def summarize_stored_conversation(
        self, conversation_id: str, config: SummarizationConfig = SummarizationConfig()
    ) -> Tuple[str, ConversationSummary]:
        """Summarize a conversation from storage without touching the live state."""
        stored = self.storage.load_conversation(conversation_id)
        if stored is None:
            raise KeyError(f"Conversation not found: {conversation_id}")
        if stored.status != STATUS_COMPLETED:
            raise InvalidStateError(f"Conversation {conversation_id} is {stored.status}, not completed")

        summary = self._summarization_engine.summarize_conversation(
            self.stored_to_completed(stored), config
        )
        return self.storage.save_summary(conversation_id, summary), summary

    def create_video_script_for_summary(
        self, summary_id: str, config: DirectorConfig = DirectorConfig()
    ) -> Tuple[str, VideoScript]:
        stored = self.storage.load_summary(summary_id)
        if stored is None:
            raise KeyError(f"Summary not found: {summary_id}")
        script = self._director_engine.create_video_script(stored.to_summary(), config)
        return self.storage.save_video_script(summary_id, script), script

    def stored_to_completed(self, stored: StoredConversation) -> Completed:
        participants = tuple(self.catalog.get_by_id(p.id) for p in stored.participants)
        by_id = {p.id: p for p in participants}
        config = ConversationConfig(
            topic=stored.topic,
            participants=participants,
            max_rounds=stored.max_rounds,
            max_words_per_response=stored.max_words_per_response,
        )

        grouped: "OrderedDict[int, List[PhilosopherContribution]]" = OrderedDict()
        for item in sorted(stored.contributions, key=lambda c: c.round_number):
            philosopher = by_id.get(item.philosopher_id) or self.catalog.get_by_id(item.philosopher_id)
            grouped.setdefault(item.round_number, []).append(PhilosopherContribution(
                philosopher=philosopher,
                response=item.response,
                round_number=item.round_number,
                timestamp=datetime.fromisoformat(item.timestamp),
                word_count=item.word_count,
            ))

        rounds = tuple(
            ConversationRound(round_number=n, contributions=tuple(items), is_complete=True)
            for n, items in grouped.items()
        )
        final = tuple(sorted((c for r in rounds for c in r.contributions), key=lambda c: c.timestamp))
        return Completed(config=config, rounds=rounds, final_contributions=final)

    # ── History passthroughs ──────────────────────────────────────────────────

    def get_all_conversations(self) -> List[StoredConversation]:
        return self.storage.get_all_conversations()

    def get_completed_conversations(self) -> List[StoredConversation]:
        return self.storage.get_conversations_by_status(STATUS_COMPLETED)

    def load_conversation(self, conversation_id: str) -> Optional[StoredConversation]:
        return self.storage.load_conversation(conversation_id)

    def delete_conversation(self, conversation_id: str) -> bool:
        return self.storage.delete_conversation(conversation_id)

    def get_all_summaries(self) -> List[StoredConversationSummary]:
        return self.storage.get_all_summaries()

    def get_summaries_for_conversation(self, conversation_id: str) -> List[StoredConversationSummary]:
        return self.storage.get_summaries_for_conversation(conversation_id)

    def load_summary(self, summary_id: str) -> Optional[StoredConversationSummary]:
        return self.storage.load_summary(summary_id)

    def close(self) -> None:
        self._llm.close()
