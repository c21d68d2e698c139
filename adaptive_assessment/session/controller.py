"""Session controller — sequencing, response recording and early termination.

State machine:

    NOT_STARTED → IN_PROGRESS → COMPLETED
         ↑              │
         └── reset() ───┘   (reset is valid from any phase)

The transitions are pure functions ``(SessionState, input) -> SessionState``
so each one can be tested on its own.  ``SessionController`` is the thin
mutable wrapper a host holds: it keeps the current value and raises the
matching exception for rejected transitions.

Completion happens when either
  - ``max_questions`` responses have been recorded, or
  - at least ``min_questions`` responses exist and confidence has reached
    ``confidence_threshold`` (early termination), or
  - the bank has no unanswered question left.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone

from adaptive_assessment.bank.question_bank import QuestionBank
from adaptive_assessment.errors import Err, ErrorKind, Ok, Outcome
from adaptive_assessment.models.initial_state import new_session_state
from adaptive_assessment.models.quiz import Archetype, ArchetypeResult, Question, Response
from adaptive_assessment.models.state import SessionPhase, SessionState
from adaptive_assessment.scoring.accumulator import ScoreTotals
from adaptive_assessment.scoring.classifier import build_result
from adaptive_assessment.scoring.confidence import estimate_confidence
from adaptive_assessment.settings import AssessmentConfig, get_config

logger = logging.getLogger(__name__)


# ── Pure transitions ──────────────────────────────────────────────────────


def should_terminate_early(state: SessionState, config: AssessmentConfig) -> bool:
    """True once enough confident evidence has been collected."""
    return (
        state.response_count >= config.min_questions
        and state.confidence >= config.confidence_threshold
    )


def complete(state: SessionState, config: AssessmentConfig) -> SessionState:
    """Commit the final archetype and confidence."""
    if state.is_complete:
        return state
    result = build_result(state.total_tf, state.total_jp, state.response_count, config)
    logger.info(
        "[session] Completed after %d responses: %s (confidence=%d)",
        state.response_count,
        result.archetype.value,
        result.confidence,
    )
    return replace(
        state,
        is_complete=True,
        archetype=result.archetype,
        confidence=result.confidence,
    )


def next_question(
    state: SessionState,
    bank: QuestionBank,
    config: AssessmentConfig,
) -> tuple[SessionState, Question | None]:
    """Return the (possibly completed) state and the next question to ask."""
    if state.is_complete:
        return state, None

    if should_terminate_early(state, config):
        return complete(state, config), None

    question = bank.next_unanswered(state.answered_ids)
    if question is None:
        # Bank shorter than max_questions and fully answered.
        return complete(state, config), None
    return state, question


def answer_question(
    state: SessionState,
    bank: QuestionBank,
    question_id: str,
    answer_id: str,
    config: AssessmentConfig,
    now: datetime | None = None,
) -> Outcome:
    """Record one answer; returns ``Ok(new_state)`` or ``Err(kind, message)``."""
    if state.is_complete:
        return Err(ErrorKind.SESSION_ALREADY_COMPLETE, "Quiz is already complete")

    question = bank.get(question_id)
    if question is None:
        return Err(ErrorKind.INVALID_QUESTION, f"Question {question_id} not found")

    if question_id in state.answered_ids:
        return Err(
            ErrorKind.QUESTION_ALREADY_ANSWERED,
            f"Question {question_id} has already been answered",
        )

    answer = question.find_answer(answer_id)
    if answer is None:
        return Err(
            ErrorKind.INVALID_ANSWER,
            f"Answer {answer_id} not found for question {question_id}",
        )

    response = Response(
        question_id=question_id,
        answer_id=answer_id,
        timestamp=now or datetime.now(timezone.utc),
    )
    totals = ScoreTotals(state.total_tf, state.total_jp).accumulate(
        answer.score_tf, answer.score_jp
    )
    responses = state.responses + (response,)
    updated = replace(
        state,
        responses=responses,
        total_tf=totals.tf,
        total_jp=totals.jp,
        confidence=estimate_confidence(totals.tf, totals.jp, len(responses), config),
    )
    logger.debug(
        "[session] %s -> %s  tf=%+d jp=%+d confidence=%d",
        question_id,
        answer_id,
        updated.total_tf,
        updated.total_jp,
        updated.confidence,
    )

    if updated.response_count >= config.max_questions or should_terminate_early(
        updated, config
    ):
        updated = complete(updated, config)
    return Ok(updated)


def progress(state: SessionState, config: AssessmentConfig) -> int:
    """Percentage of ``max_questions`` answered, capped at 100."""
    pct = int(state.response_count / config.max_questions * 100 + 0.5)
    return min(pct, 100)


# ── Mutable wrapper ───────────────────────────────────────────────────────


class SessionController:
    """Holds one session's state and exposes the host-facing operations.

    Usage:
        controller = SessionController(load_question_bank())
        while (question := controller.get_next_question()) is not None:
            controller.answer_question(question.id, pick(question).id)
        result = controller.get_result()

    One instance per assessment; it is never shared between sessions.
    """

    def __init__(self, bank: QuestionBank, config: AssessmentConfig | None = None):
        self.bank = bank
        self.config = config or get_config()
        self._state = new_session_state()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def phase(self) -> SessionPhase:
        return self._state.phase

    def get_next_question(self) -> Question | None:
        """Next unanswered question, or ``None`` once the session is over.

        May complete the session as a side effect when early termination
        criteria are already met.
        """
        self._state, question = next_question(self._state, self.bank, self.config)
        return question

    def answer_question(self, question_id: str, answer_id: str) -> None:
        """Record an answer.

        Raises
        ------
        SessionAlreadyCompleteError
            The session has already completed.
        InvalidQuestionError
            ``question_id`` is unknown (or already answered, as
            ``QuestionAlreadyAnsweredError``).
        InvalidAnswerError
            ``answer_id`` does not belong to ``question_id``.

        State is left unchanged when an error is raised.
        """
        outcome = answer_question(
            self._state, self.bank, question_id, answer_id, self.config
        )
        if isinstance(outcome, Err):
            logger.warning("[session] Rejected answer: %s", outcome.message)
            raise outcome.to_exception()
        self._state = outcome.state

    def should_terminate_early(self) -> bool:
        return should_terminate_early(self._state, self.config)

    def get_confidence(self) -> int:
        return self._state.confidence

    def is_complete(self) -> bool:
        return self._state.is_complete

    def get_archetype(self) -> Archetype | None:
        """The committed archetype; ``None`` until the session completes."""
        return self._state.archetype if self._state.is_complete else None

    def get_result(self) -> ArchetypeResult | None:
        """Full result for the host to persist; ``None`` until complete."""
        if not self._state.is_complete:
            return None
        return build_result(
            self._state.total_tf,
            self._state.total_jp,
            self._state.response_count,
            self.config,
        )

    def get_response_count(self) -> int:
        return self._state.response_count

    def get_progress(self) -> int:
        return progress(self._state, self.config)

    def reset(self) -> None:
        """Discard everything and return to NOT_STARTED."""
        self._state = new_session_state()
