"""State definitions: the engine's session value and the langgraph host state.

``SessionState`` is an immutable value.  Every engine operation takes
one and returns a new one; whoever drives the session (the
``SessionController`` wrapper or the langgraph workflow) holds the
current value.  Nothing else shares it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypedDict

from adaptive_assessment.models.quiz import Archetype, Response


class SessionPhase(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class SessionState:
    """Accumulated evidence for one assessment."""

    responses: tuple[Response, ...] = field(default_factory=tuple)
    total_tf: int = 0
    total_jp: int = 0
    confidence: int = 0  # 0 – 100
    is_complete: bool = False
    archetype: Archetype | None = None  # committed only on completion

    @property
    def response_count(self) -> int:
        return len(self.responses)

    @property
    def answered_ids(self) -> frozenset[str]:
        return frozenset(r.question_id for r in self.responses)

    @property
    def phase(self) -> SessionPhase:
        if self.is_complete:
            return SessionPhase.COMPLETED
        if not self.responses:
            return SessionPhase.NOT_STARTED
        return SessionPhase.IN_PROGRESS

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain data (for checkpointed hosts and session logs)."""
        return {
            "responses": [r.to_dict() for r in self.responses],
            "total_tf": self.total_tf,
            "total_jp": self.total_jp,
            "confidence": self.confidence,
            "is_complete": self.is_complete,
            "archetype": self.archetype.value if self.archetype else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionState:
        archetype = data.get("archetype")
        return cls(
            responses=tuple(Response.from_dict(r) for r in data.get("responses", [])),
            total_tf=data.get("total_tf", 0),
            total_jp=data.get("total_jp", 0),
            confidence=data.get("confidence", 0),
            is_complete=data.get("is_complete", False),
            archetype=Archetype(archetype) if archetype else None,
        )


class QuizWorkflowState(TypedDict, total=False):
    """Shared state for the langgraph quiz host.

    Holds only plain data so the checkpointer can persist it; the
    engine value travels as ``SessionState.to_dict()``.
    """

    # --- Session identity ---
    session_id: str

    # --- Engine state ---
    session: dict[str, Any]  # SessionState.to_dict()

    # --- Question / answer exchange ---
    current_question: dict[str, Any] | None  # Question.model_dump(mode="json")
    answer_id: str  # latest raw answer from interrupt()
    error: str  # message of the last rejected answer, "" if none

    # --- Output ---
    result: dict[str, Any]  # ArchetypeResult.to_dict()
    saved: bool  # True once the profile store accepted the result
