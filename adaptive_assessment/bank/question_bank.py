"""QuestionBank — the ordered, immutable pool of quiz questions.

The bank is validated once, at construction, and shared read-only by
every session.  Sequencing is strictly positional: the next question is
always the first one not yet answered.  Adaptivity lives in the
session's termination policy, never in reordering.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from pydantic import TypeAdapter, ValidationError

from adaptive_assessment.errors import QuestionBankError
from adaptive_assessment.models.quiz import Question

_QUESTION_LIST = TypeAdapter(list[Question])


class QuestionBank:
    """Validated, ordered collection of questions."""

    def __init__(self, questions: Iterable[Question]):
        self._questions: tuple[Question, ...] = tuple(questions)
        self._by_id: dict[str, Question] = {}
        self._validate()

    @classmethod
    def from_records(cls, records: list[dict[str, Any]]) -> QuestionBank:
        """Build a bank from raw dicts (e.g. parsed JSON).

        Raises ``QuestionBankError`` for schema violations (missing fields,
        empty answer lists, weights outside [-2, 2]) as well as duplicate ids.
        """
        try:
            questions = _QUESTION_LIST.validate_python(records)
        except ValidationError as e:
            raise QuestionBankError(f"Invalid question data: {e}") from e
        return cls(questions)

    def _validate(self) -> None:
        answer_ids: set[str] = set()
        for question in self._questions:
            if question.id in self._by_id:
                raise QuestionBankError(f"Duplicate question id: {question.id}")
            if not question.answers:
                raise QuestionBankError(f"Question {question.id} has no answers")
            for answer in question.answers:
                if answer.id in answer_ids:
                    raise QuestionBankError(f"Duplicate answer id: {answer.id}")
                answer_ids.add(answer.id)
            self._by_id[question.id] = question

    # ── Queries ───────────────────────────────────────────────────────────

    def next_unanswered(self, answered_ids: Iterable[str]) -> Question | None:
        """Return the first question, in bank order, not in ``answered_ids``."""
        answered = set(answered_ids)
        for question in self._questions:
            if question.id not in answered:
                return question
        return None

    def get(self, question_id: str) -> Question | None:
        return self._by_id.get(question_id)

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(self._questions)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._by_id

    def __repr__(self) -> str:
        return f"QuestionBank({len(self._questions)} questions)"
