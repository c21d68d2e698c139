"""Error taxonomy for the assessment engine.

Every failure here is a local validation error: raised (or returned)
synchronously, never retried by the engine, and fatal to the current
call only.  The pure transition functions in ``session.controller``
return ``Ok`` / ``Err`` values; ``SessionController`` turns an ``Err``
into the matching exception for callers that prefer ``try/except``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from adaptive_assessment.models.state import SessionState


class ErrorKind(str, Enum):
    """Why a transition was rejected."""

    INVALID_QUESTION = "invalid_question"
    QUESTION_ALREADY_ANSWERED = "question_already_answered"
    INVALID_ANSWER = "invalid_answer"
    SESSION_ALREADY_COMPLETE = "session_already_complete"


class AssessmentError(Exception):
    """Base class for all engine errors."""


class QuestionBankError(AssessmentError, ValueError):
    """The static question data violates the bank contract."""


class InvalidQuestionError(AssessmentError):
    """The question id is not in the bank."""

    kind = ErrorKind.INVALID_QUESTION


class QuestionAlreadyAnsweredError(InvalidQuestionError):
    """The question already has a response in this session."""

    kind = ErrorKind.QUESTION_ALREADY_ANSWERED


class InvalidAnswerError(AssessmentError):
    """The answer id does not belong to the named question."""

    kind = ErrorKind.INVALID_ANSWER


class SessionAlreadyCompleteError(AssessmentError):
    """A mutation was attempted after the session completed."""

    kind = ErrorKind.SESSION_ALREADY_COMPLETE


_EXCEPTIONS: dict[ErrorKind, type[AssessmentError]] = {
    ErrorKind.INVALID_QUESTION: InvalidQuestionError,
    ErrorKind.QUESTION_ALREADY_ANSWERED: QuestionAlreadyAnsweredError,
    ErrorKind.INVALID_ANSWER: InvalidAnswerError,
    ErrorKind.SESSION_ALREADY_COMPLETE: SessionAlreadyCompleteError,
}


@dataclass(frozen=True)
class Ok:
    """Accepted transition carrying the new state."""

    state: SessionState

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Rejected transition; the caller's state is unchanged."""

    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False

    def to_exception(self) -> AssessmentError:
        return _EXCEPTIONS[self.kind](self.message)


Outcome = Union[Ok, Err]
