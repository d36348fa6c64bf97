"""
Conversation state: a closed set of variants, exactly one of which is current.

Each variant carries a `tag` so callers can switch on it without isinstance
chains.  ConversationStateManager (backend/state_machine.py) is the only
thing that creates new values during a run.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, List, Optional, Tuple, Union

from models.conversation import (
    ConversationConfig,
    ConversationRound,
    DirectorConfig,
    Philosopher,
    PhilosopherContribution,
    SummarizationConfig,
)
from models.summary import ConversationSummary, VideoScript


class StateTag(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    SUMMARIZING = "summarizing"
    SUMMARIZATION_COMPLETE = "summarization_complete"
    CREATING_VIDEO_SCRIPT = "creating_video_script"
    VIDEO_SCRIPT_COMPLETE = "video_script_complete"
    ERROR = "error"


def flatten_contributions(rounds: Tuple[ConversationRound, ...]) -> List[PhilosopherContribution]:
    """All contributions across rounds, ordered by timestamp (stable for ties)."""
    everything = [c for r in rounds for c in r.contributions]
    return sorted(everything, key=lambda c: c.timestamp)


@dataclass(frozen=True)
class NotStarted:
    tag: ClassVar[StateTag] = StateTag.NOT_STARTED


@dataclass(frozen=True)
class InProgress:
    tag: ClassVar[StateTag] = StateTag.IN_PROGRESS

    config: ConversationConfig
    rounds: Tuple[ConversationRound, ...] = ()
    current_round: int = 1
    current_philosopher_index: int = 0

    @property
    def current_philosopher(self) -> Optional[Philosopher]:
        if 0 <= self.current_philosopher_index < len(self.config.participants):
            return self.config.participants[self.current_philosopher_index]
        return None

    @property
    def is_complete(self) -> bool:
        return self.current_round > self.config.max_rounds

    def current_round_data(self) -> Optional[ConversationRound]:
        return next((r for r in self.rounds if r.round_number == self.current_round), None)

    def all_contributions(self) -> List[PhilosopherContribution]:
        return flatten_contributions(self.rounds)


@dataclass(frozen=True)
class Completed:
    tag: ClassVar[StateTag] = StateTag.COMPLETED

    config: ConversationConfig
    rounds: Tuple[ConversationRound, ...]
    final_contributions: Tuple[PhilosopherContribution, ...]


@dataclass(frozen=True)
class Summarizing:
    tag: ClassVar[StateTag] = StateTag.SUMMARIZING

    original_conversation: Completed
    config: SummarizationConfig


@dataclass(frozen=True)
class SummarizationComplete:
    tag: ClassVar[StateTag] = StateTag.SUMMARIZATION_COMPLETE

    original_conversation: Completed
    summary: ConversationSummary


@dataclass(frozen=True)
class CreatingVideoScript:
    tag: ClassVar[StateTag] = StateTag.CREATING_VIDEO_SCRIPT

    summary: ConversationSummary
    config: DirectorConfig


@dataclass(frozen=True)
class VideoScriptComplete:
    tag: ClassVar[StateTag] = StateTag.VIDEO_SCRIPT_COMPLETE

    summary: ConversationSummary
    video_script: VideoScript


@dataclass(frozen=True)
class Error:
    tag: ClassVar[StateTag] = StateTag.ERROR

    message: str
    cause: Optional[BaseException] = None


ConversationState = Union[
    NotStarted,
    InProgress,
    Completed,
    Summarizing,
    SummarizationComplete,
    CreatingVideoScript,
    VideoScriptComplete,
    Error,
]
