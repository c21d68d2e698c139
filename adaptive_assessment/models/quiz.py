"""Quiz data contracts: dimensions, archetypes, questions and results.

Learning archetypes are built from two Myers-Briggs style dimensions:
  - T/F: Thinking (tactical) vs Feeling (strategic)
  - J/P: Judging (structured) vs Perceiving (experimental)

Questions and answers arrive as static data and are validated with
pydantic at load time; everything derived at runtime (responses,
results) is a plain frozen dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from adaptive_assessment.settings import MAX_ANSWER_WEIGHT


class Dimension(str, Enum):
    """Dimension a question is designed to measure."""

    TF = "T-F"
    JP = "J-P"


class Archetype(str, Enum):
    """Player learning archetype: four quadrants plus the neutral dead-zone."""

    TJ = "TJ"
    TP = "TP"
    FJ = "FJ"
    FP = "FP"
    NEUTRAL = "Neutral"


ARCHETYPE_DESCRIPTIONS: dict[Archetype, str] = {
    Archetype.TJ: (
        "Tactical-Structured: You learn best through systematic tactical "
        "training with clear patterns and rules."
    ),
    Archetype.TP: (
        "Tactical-Experimental: You learn best through tactical puzzles and "
        "experimentation with different combinations."
    ),
    Archetype.FJ: (
        "Strategic-Structured: You learn best through positional understanding "
        "and structured study of strategic principles."
    ),
    Archetype.FP: (
        "Strategic-Experimental: You learn best through exploring creative "
        "strategic ideas and playing various positions."
    ),
    Archetype.NEUTRAL: (
        "Balanced: You benefit from a mix of tactical and strategic content "
        "with varied learning approaches."
    ),
}


class Answer(BaseModel):
    """One answer option; carries a signed weight on each dimension."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    text: str
    score_tf: int = Field(..., ge=-MAX_ANSWER_WEIGHT, le=MAX_ANSWER_WEIGHT, strict=True)
    score_jp: int = Field(..., ge=-MAX_ANSWER_WEIGHT, le=MAX_ANSWER_WEIGHT, strict=True)

    @property
    def is_neutral(self) -> bool:
        return self.score_tf == 0 and self.score_jp == 0


class Question(BaseModel):
    """A quiz question with its ordered answer options."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    text: str
    dimension: Dimension
    answers: tuple[Answer, ...] = Field(..., min_length=1)

    def find_answer(self, answer_id: str) -> Answer | None:
        for answer in self.answers:
            if answer.id == answer_id:
                return answer
        return None


@dataclass(frozen=True)
class Response:
    """Immutable record of one answered question."""

    question_id: str
    answer_id: str
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "question_id": self.question_id,
            "answer_id": self.answer_id,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Response:
        return cls(
            question_id=data["question_id"],
            answer_id=data["answer_id"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


@dataclass(frozen=True)
class ArchetypeResult:
    """Final classification of a session.

    A pure function of the totals and the response count, so recomputing
    it from the same inputs always yields an equal value.
    """

    archetype: Archetype
    confidence: int
    total_tf: int
    total_jp: int
    explanation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "archetype": self.archetype.value,
            "confidence": self.confidence,
            "total_tf": self.total_tf,
            "total_jp": self.total_jp,
            "explanation": self.explanation,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ArchetypeResult:
        return cls(
            archetype=Archetype(data["archetype"]),
            confidence=data["confidence"],
            total_tf=data["total_tf"],
            total_jp=data["total_jp"],
            explanation=data["explanation"],
        )
