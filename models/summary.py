"""
Data models for the post-conversation pipeline: the condensed summary and
the scene-by-scene video script derived from it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Sequence, Tuple

from models.conversation import ConversationConfig, Philosopher, utc_now

DEFAULT_SUMMARY_WORDS = 50


@dataclass(frozen=True)
class SummaryContribution:
    philosopher_name: str
    response: str
    word_count: int


@dataclass(frozen=True)
class SummaryRound:
    round_number: int
    contributions: Tuple[SummaryContribution, ...] = ()

    @property
    def word_count(self) -> int:
        return sum(c.word_count for c in self.contributions)


@dataclass(frozen=True)
class ConversationSummary:
    """
    A condensed, video-ready version of a finished conversation.

    original_topic  : the topic the conversation was started with
    condensed_topic : shorter, punchier phrasing produced by the summarizer
    participants    : philosopher display names, in speaking order
    rounds          : numbered 1..N by position
    video_notes     : free-text notes on what makes the exchange compelling
    """
    original_topic: str
    condensed_topic: str
    participants: Tuple[str, ...]
    rounds: Tuple[SummaryRound, ...]
    video_notes: str
    created_at: datetime = field(default_factory=utc_now)

    @property
    def total_word_count(self) -> int:
        return sum(r.word_count for r in self.rounds)

    def to_conversation_config(self, philosophers: Sequence[Philosopher]) -> ConversationConfig:
        """Build a config that would replay this summary as a fresh conversation."""
        selected = []
        for name in self.participants:
            match = next((p for p in philosophers if p.name.lower() == name.lower()), None)
            if match is not None:
                selected.append(match)
        word_counts = [c.word_count for r in self.rounds for c in r.contributions]
        return ConversationConfig(
            topic=self.condensed_topic,
            participants=tuple(selected),
            max_rounds=len(self.rounds),
            max_words_per_response=max(word_counts) if word_counts else DEFAULT_SUMMARY_WORDS,
        )


class SceneType(str, Enum):
    OPENING = "OPENING"
    DIALOGUE = "DIALOGUE"
    TRANSITION = "TRANSITION"
    CLOSING = "CLOSING"


@dataclass(frozen=True)
class Scene:
    scene_number: int
    type: SceneType
    duration: str
    image_prompt: str
    dialogue: Optional[str] = None
    philosopher_name: Optional[str] = None
    director_notes: Optional[str] = None

    @property
    def is_dialogue_scene(self) -> bool:
        return self.type == SceneType.DIALOGUE and self.philosopher_name is not None


@dataclass(frozen=True)
class VideoScript:
    title: str
    description: str
    estimated_duration: str
    scenes: Tuple[Scene, ...]
    production_notes: Tuple[str, ...] = ()
    created_at: datetime = field(default_factory=utc_now)

    @property
    def total_scenes(self) -> int:
        return len(self.scenes)

    @property
    def has_dialogue_scenes(self) -> bool:
        return any(s.type == SceneType.DIALOGUE for s in self.scenes)
