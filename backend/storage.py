"""
JSON-file storage for conversations, summaries and video scripts.

Layout under the storage directory:
    <root>/conv_<millis>_<nnnn>.json
    <root>/summaries/summary_<millis>_<nnnn>.json
    <root>/video_scripts/script_<millis>_<nnnn>.json

One record per file, pretty-printed.  Files that cannot be read are skipped
with a warning when listing.  A lock serialises all file access from this
instance.
"""

import json
import logging
import random
import threading
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

from models.conversation import ConversationConfig
from models.state import (
    Completed,
    ConversationState,
    Error,
    InProgress,
    NotStarted,
    SummarizationComplete,
    Summarizing,
)
from models.stored import (
    STATUS_COMPLETED,
    STATUS_ERROR,
    STATUS_IN_PROGRESS,
    StoredContribution,
    StoredConversation,
    StoredConversationSummary,
    StoredPhilosopher,
    StoredVideoScript,
)
from models.summary import ConversationSummary, VideoScript

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _generate_id(prefix: str) -> str:
    return f"{prefix}_{int(time.time() * 1000)}_{random.randint(1000, 9999)}"


class ConversationStorage:

    def __init__(self, storage_dir: str = "conversations"):
        self.root = Path(storage_dir)
        self.summaries_dir = self.root / "summaries"
        self.scripts_dir = self.root / "video_scripts"
        self._lock = threading.RLock()
        for directory in (self.root, self.summaries_dir, self.scripts_dir):
            directory.mkdir(parents=True, exist_ok=True)

    # ── Conversations ─────────────────────────────────────────────────────────

    def save_conversation(self, state: ConversationState, existing_id: Optional[str] = None) -> str:
        """
        Snapshot a state-machine value.  Returns the record id; NotStarted
        writes nothing.
        """
        conversation_id = existing_id or _generate_id("conv")
        with self._lock:
            if isinstance(state, NotStarted):
                return conversation_id

            previous = self.load_conversation(conversation_id) if existing_id else None
            created_at = previous.created_at if previous else _now_iso()

            if isinstance(state, InProgress):
                record = self._conversation_record(
                    conversation_id, state.config, STATUS_IN_PROGRESS, created_at,
                    state.all_contributions(),
                )
            elif isinstance(state, Completed):
                record = self._completed_record(conversation_id, state, created_at)
            elif isinstance(state, (Summarizing, SummarizationComplete)):
                record = self._completed_record(conversation_id, state.original_conversation, created_at)
            elif isinstance(state, Error):
                if previous is not None:
                    record = previous
                    record.status = STATUS_ERROR
                    record.error_message = state.message
                    record.completed_at = _now_iso()
                else:
                    record = StoredConversation(
                        id=conversation_id,
                        topic="Error occurred",
                        participants=[],
                        max_rounds=1,
                        max_words_per_response=100,
                        status=STATUS_ERROR,
                        created_at=created_at,
                        completed_at=_now_iso(),
                        error_message=state.message,
                    )
            else:
                # Video-script stages carry no conversation to store.
                logger.debug("Nothing to save for state %s", state.tag.value)
                return conversation_id

            self._write(self.root / f"{conversation_id}.json", record.to_dict())
        logger.info("Saved conversation %s (%s)", conversation_id, record.status)
        return conversation_id

    def load_conversation(self, conversation_id: str) -> Optional[StoredConversation]:
        return self._load(self.root / f"{conversation_id}.json", StoredConversation.from_dict)

    def get_all_conversations(self) -> List[StoredConversation]:
        records = self._load_all(self.root, StoredConversation.from_dict)
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def get_conversations_by_status(self, status: str) -> List[StoredConversation]:
        return [c for c in self.get_all_conversations() if c.status == status]

    def delete_conversation(self, conversation_id: str) -> bool:
        return self._delete(self.root / f"{conversation_id}.json")

    # ── Summaries ─────────────────────────────────────────────────────────────

    def save_summary(self, conversation_id: str, summary: ConversationSummary) -> str:
        summary_id = _generate_id("summary")
        record = StoredConversationSummary.from_summary(summary_id, conversation_id, summary)
        with self._lock:
            self._write(self.summaries_dir / f"{summary_id}.json", record.to_dict())
        logger.info("Saved summary %s for conversation %s", summary_id, conversation_id)
        return summary_id

    def load_summary(self, summary_id: str) -> Optional[StoredConversationSummary]:
        return self._load(self.summaries_dir / f"{summary_id}.json", StoredConversationSummary.from_dict)

    def get_all_summaries(self) -> List[StoredConversationSummary]:
        records = self._load_all(self.summaries_dir, StoredConversationSummary.from_dict)
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def get_summaries_for_conversation(self, conversation_id: str) -> List[StoredConversationSummary]:
        return [s for s in self.get_all_summaries() if s.original_conversation_id == conversation_id]

    def delete_summary(self, summary_id: str) -> bool:
        return self._delete(self.summaries_dir / f"{summary_id}.json")

    # ── Video scripts ─────────────────────────────────────────────────────────

    def save_video_script(self, summary_id: str, script: VideoScript) -> str:
        script_id = _generate_id("script")
        record = StoredVideoScript.from_video_script(script_id, summary_id, script)
        with self._lock:
            self._write(self.scripts_dir / f"{script_id}.json", record.to_dict())
        logger.info("Saved video script %s for summary %s", script_id, summary_id)
        return script_id

    def load_video_script(self, script_id: str) -> Optional[StoredVideoScript]:
        return self._load(self.scripts_dir / f"{script_id}.json", StoredVideoScript.from_dict)

    def get_video_scripts_for_summary(self, summary_id: str) -> List[StoredVideoScript]:
        records = self._load_all(self.scripts_dir, StoredVideoScript.from_dict)
        matching = [r for r in records if r.summary_id == summary_id]
        return sorted(matching, key=lambda r: r.created_at, reverse=True)

    def delete_video_script(self, script_id: str) -> bool:
        return self._delete(self.scripts_dir / f"{script_id}.json")

    # ── Private helpers ───────────────────────────────────────────────────────

    @staticmethod
    def _conversation_record(conversation_id, config: ConversationConfig, status, created_at, contributions):
        return StoredConversation(
            id=conversation_id,
            topic=config.topic,
            participants=[StoredPhilosopher.from_philosopher(p) for p in config.participants],
            max_rounds=config.max_rounds,
            max_words_per_response=config.max_words_per_response,
            status=status,
            created_at=created_at,
            contributions=[StoredContribution.from_contribution(c) for c in contributions],
        )

    def _completed_record(self, conversation_id, state: Completed, created_at) -> StoredConversation:
        record = self._conversation_record(
            conversation_id, state.config, STATUS_COMPLETED, created_at, state.final_contributions,
        )
        record.completed_at = _now_iso()
        return record

    @staticmethod
    def _write(path: Path, data: dict) -> None:
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    def _load(self, path: Path, factory: Callable[[dict], T]) -> Optional[T]:
        with self._lock:
            if not path.exists():
                return None
            try:
                return factory(json.loads(path.read_text(encoding="utf-8")))
            except (OSError, ValueError, TypeError, KeyError) as exc:
                logger.warning("Could not read %s: %s", path, exc)
                return None

    def _load_all(self, directory: Path, factory: Callable[[dict], T]) -> List[T]:
        with self._lock:
            paths = sorted(directory.glob("*.json"))
        records = []
        for path in paths:
            record = self._load(path, factory)
            if record is not None:
                records.append(record)
        return records

    def _delete(self, path: Path) -> bool:
        with self._lock:
            if not path.exists():
                return False
            path.unlink()
            logger.info("Deleted %s", path.name)
            return True
