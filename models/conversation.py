"""
Data models for a philosopher conversation.

Frozen dataclasses: every update returns a new value.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import List, Tuple


def count_words(text: str) -> int:
    """Whitespace-token count, the word measure used everywhere in the app."""
    return len(text.split())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Philosopher:
    """
    A persona taking part in the discussion.

    id            : stable lookup key, e.g. "socrates"
    name          : display name
    description   : one-line blurb shown in the UI
    system_prompt : the text that steers the model into character
    era / nationality : free-text tags used for filtering
    """
    id: str
    name: str
    description: str
    system_prompt: str
    era: str = ""
    nationality: str = ""


@dataclass(frozen=True)
class PhilosopherContribution:
    """One philosopher's single turn inside a round."""
    philosopher: Philosopher
    response: str
    round_number: int
    timestamp: datetime = field(default_factory=utc_now)
    word_count: int = -1

    def __post_init__(self):
        if self.word_count < 0:
            object.__setattr__(self, "word_count", count_words(self.response))


@dataclass(frozen=True)
class ConversationRound:
    """
    round_number  : 1-based counter
    contributions : insertion order is speaking order
    """
    round_number: int
    contributions: Tuple[PhilosopherContribution, ...] = ()
    is_complete: bool = False

    def add_contribution(self, contribution: PhilosopherContribution) -> "ConversationRound":
        return replace(self, contributions=self.contributions + (contribution,))

    @property
    def word_count(self) -> int:
        return sum(c.word_count for c in self.contributions)


@dataclass(frozen=True)
class ConversationConfig:
    """
    Settings for one discussion.  Invalid values fail construction.
    """
    topic: str
    participants: Tuple[Philosopher, ...]
    max_rounds: int = 3
    max_words_per_response: int = 150

    def __post_init__(self):
        object.__setattr__(self, "participants", tuple(self.participants))
        if not self.participants:
            raise ValueError("At least one philosopher must participate")
        if self.max_rounds <= 0:
            raise ValueError("Must have at least one round")
        if self.max_words_per_response <= 0:
            raise ValueError("Must allow at least one word per response")
        if not self.topic or not self.topic.strip():
            raise ValueError("Topic cannot be blank")

    @property
    def participant_names(self) -> List[str]:
        return [p.name for p in self.participants]


@dataclass(frozen=True)
class SummarizationConfig:
    target_rounds: int = 3
    max_words_per_response: int = 50
    preserve_original_participants: bool = True

    def __post_init__(self):
        if self.target_rounds <= 0:
            raise ValueError("Must have at least one round in summary")
        if self.max_words_per_response <= 0:
            raise ValueError("Must allow at least one word per response")


@dataclass(frozen=True)
class DirectorConfig:
    include_opening_shot: bool = True
    include_closing_shot: bool = True
    scene_transition_style: str = "philosophical_atmosphere"
    estimated_duration: str = "60 seconds"
