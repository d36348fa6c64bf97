"""
Persistence records for conversations, summaries and video scripts.

These mirror the on-disk JSON files written by backend/storage.py.  Every
record knows how to turn itself into a plain dict (`to_dict`) and back
(`from_dict`); timestamps are stored as ISO-8601 strings.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import List, Optional

from models.conversation import Philosopher, PhilosopherContribution
from models.summary import (
    ConversationSummary,
    Scene,
    SceneType,
    SummaryContribution,
    SummaryRound,
    VideoScript,
)

STATUS_IN_PROGRESS = "in_progress"
STATUS_COMPLETED = "completed"
STATUS_ERROR = "error"


@dataclass
class StoredPhilosopher:
    id: str
    name: str
    description: str = ""
    era: str = ""
    nationality: str = ""

    @classmethod
    def from_philosopher(cls, philosopher: Philosopher) -> "StoredPhilosopher":
        return cls(
            id=philosopher.id,
            name=philosopher.name,
            description=philosopher.description,
            era=philosopher.era,
            nationality=philosopher.nationality,
        )


@dataclass
class StoredContribution:
    philosopher_id: str
    philosopher_name: str
    response: str
    timestamp: str
    round_number: int
    word_count: int

    @classmethod
    def from_contribution(cls, contribution: PhilosopherContribution) -> "StoredContribution":
        return cls(
            philosopher_id=contribution.philosopher.id,
            philosopher_name=contribution.philosopher.name,
            response=contribution.response,
            timestamp=contribution.timestamp.isoformat(),
            round_number=contribution.round_number,
            word_count=contribution.word_count,
        )


@dataclass
class StoredConversation:
    id: str
    topic: str
    participants: List[StoredPhilosopher]
    max_rounds: int
    max_words_per_response: int
    status: str
    created_at: str
    completed_at: Optional[str] = None
    error_message: Optional[str] = None
    contributions: List[StoredContribution] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "StoredConversation":
        data = dict(data)
        data["participants"] = [StoredPhilosopher(**p) for p in data.get("participants", [])]
        data["contributions"] = [StoredContribution(**c) for c in data.get("contributions", [])]
        return cls(**data)


@dataclass
class StoredSummaryContribution:
    philosopher_name: str
    response: str
    word_count: int


@dataclass
class StoredSummaryRound:
    round_number: int
    contributions: List[StoredSummaryContribution] = field(default_factory=list)


@dataclass
class StoredConversationSummary:
    id: str
    original_conversation_id: str
    original_topic: str
    condensed_topic: str
    participants: List[str]
    rounds: List[StoredSummaryRound]
    video_notes: str
    created_at: str
    total_word_count: int

    @classmethod
    def from_summary(
        cls, id: str, conversation_id: str, summary: ConversationSummary
    ) -> "StoredConversationSummary":
        return cls(
            id=id,
            original_conversation_id=conversation_id,
            original_topic=summary.original_topic,
            condensed_topic=summary.condensed_topic,
            participants=list(summary.participants),
            rounds=[
                StoredSummaryRound(
                    round_number=r.round_number,
                    contributions=[
                        StoredSummaryContribution(c.philosopher_name, c.response, c.word_count)
                        for c in r.contributions
                    ],
                )
                for r in summary.rounds
            ],
            video_notes=summary.video_notes,
            created_at=summary.created_at.isoformat(),
            total_word_count=summary.total_word_count,
        )

    def to_summary(self) -> ConversationSummary:
        return ConversationSummary(
            original_topic=self.original_topic,
            condensed_topic=self.condensed_topic,
            participants=tuple(self.participants),
            rounds=tuple(
                SummaryRound(
                    round_number=r.round_number,
                    contributions=tuple(
                        SummaryContribution(c.philosopher_name, c.response, c.word_count)
                        for c in r.contributions
                    ),
                )
                for r in self.rounds
            ),
            video_notes=self.video_notes,
            created_at=datetime.fromisoformat(self.created_at),
        )

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "StoredConversationSummary":
        data = dict(data)
        data["rounds"] = [
            StoredSummaryRound(
                round_number=r["round_number"],
                contributions=[StoredSummaryContribution(**c) for c in r.get("contributions", [])],
            )
            for r in data.get("rounds", [])
        ]
        return cls(**data)


@dataclass
class StoredScene:
    scene_number: int
    type: str
    duration: str
    image_prompt: str
    dialogue: Optional[str] = None
    philosopher_name: Optional[str] = None
    director_notes: Optional[str] = None


@dataclass
class StoredVideoScript:
    id: str
    summary_id: str
    title: str
    description: str
    estimated_duration: str
    scenes: List[StoredScene]
    production_notes: List[str]
    created_at: str

    @classmethod
    def from_video_script(cls, id: str, summary_id: str, script: VideoScript) -> "StoredVideoScript":
        return cls(
            id=id,
            summary_id=summary_id,
            title=script.title,
            description=script.description,
            estimated_duration=script.estimated_duration,
            scenes=[
                StoredScene(
                    scene_number=s.scene_number,
                    type=s.type.value,
                    duration=s.duration,
                    image_prompt=s.image_prompt,
                    dialogue=s.dialogue,
                    philosopher_name=s.philosopher_name,
                    director_notes=s.director_notes,
                )
                for s in script.scenes
            ],
            production_notes=list(script.production_notes),
            created_at=script.created_at.isoformat(),
        )

    def to_video_script(self) -> VideoScript:
        return VideoScript(
            title=self.title,
            description=self.description,
            estimated_duration=self.estimated_duration,
            scenes=tuple(
                Scene(
                    scene_number=s.scene_number,
                    type=SceneType(s.type),
                    duration=s.duration,
                    image_prompt=s.image_prompt,
                    dialogue=s.dialogue,
                    philosopher_name=s.philosopher_name,
                    director_notes=s.director_notes,
                )
                for s in self.scenes
            ),
            production_notes=tuple(self.production_notes),
            created_at=datetime.fromisoformat(self.created_at),
        )

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "StoredVideoScript":
        data = dict(data)
        data["scenes"] = [StoredScene(**s) for s in data.get("scenes", [])]
        return cls(**data)
