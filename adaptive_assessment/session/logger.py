"""Quiz session log — one JSON audit file per finished session.

Holds what a later review of the session needs:
  - Per-response: question, answer, running totals and confidence
  - Session-level: final archetype result and policy metadata
  - Written once, when the host calls ``save()``

Default location: data/sessions/
File name: {session_id}_{YYYYmmdd_HHMMSS}.json
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from adaptive_assessment import paths
from adaptive_assessment.bank.question_bank import QuestionBank
from adaptive_assessment.models.quiz import ArchetypeResult
from adaptive_assessment.models.state import SessionState
from adaptive_assessment.scoring.accumulator import ScoreTotals
from adaptive_assessment.scoring.confidence import estimate_confidence
from adaptive_assessment.settings import AssessmentConfig

SESSIONS_DIR = paths.SESSIONS_DIR


class SessionLogger:
    """Collects one session's responses and result for the JSON log.

    Usage:
        session_log = SessionLogger(session_id="quiz-42")
        session_log.log_response(controller.state)
        ...
        session_log.log_result(controller.get_result())
        session_log.save()
    """

    def __init__(self, session_id: str, sessions_dir: Path | None = None):
        self.session_id = session_id
        self.sessions_dir = sessions_dir or SESSIONS_DIR
        self.started_at = datetime.now(timezone.utc).isoformat()
        self.completed_at: str | None = None
        self.responses: list[dict[str, Any]] = []
        self.result: dict[str, Any] = {}
        self.metadata: dict[str, Any] = {"quiz": "chess-learning-archetype"}

    def log_response(self, state: SessionState) -> None:
        """Record the most recent response in ``state`` with its running totals."""
        if not state.responses:
            return
        latest = state.responses[-1]
        self.responses.append(
            {
                "response_number": state.response_count,
                **latest.to_dict(),
                "total_tf": state.total_tf,
                "total_jp": state.total_jp,
                "confidence": state.confidence,
            }
        )

    def log_state(
        self,
        state: SessionState,
        bank: QuestionBank,
        config: AssessmentConfig | None = None,
    ) -> None:
        """Record every response of a finished state (for hosts that log at the end).

        Running totals and confidence are rebuilt by replaying the answers
        against ``bank``, so entries match what ``log_response`` records.
        """
        totals = ScoreTotals()
        self.responses = []
        for i, response in enumerate(state.responses, start=1):
            question = bank.get(response.question_id)
            answer = question.find_answer(response.answer_id) if question is not None else None
            if answer is None:
                raise ValueError(
                    f"Response {response.question_id}/{response.answer_id} is not in the bank"
                )
            totals = totals.accumulate(answer.score_tf, answer.score_jp)
            self.responses.append(
                {
                    "response_number": i,
                    **response.to_dict(),
                    "total_tf": totals.tf,
                    "total_jp": totals.jp,
                    "confidence": estimate_confidence(totals.tf, totals.jp, i, config),
                }
            )

    def log_result(self, result: ArchetypeResult) -> None:
        """Record the final classification."""
        self.result = result.to_dict()
        self.completed_at = datetime.now(timezone.utc).isoformat()

    def log_config(self, config: AssessmentConfig) -> None:
        """Attach the policy that produced this session."""
        self.metadata["min_questions"] = config.min_questions
        self.metadata["max_questions"] = config.max_questions
        self.metadata["confidence_threshold"] = config.confidence_threshold
        self.metadata["neutral_threshold"] = config.neutral_threshold

    def set_metadata(self, key: str, value: Any) -> None:
        """Attach a host-specific key to the log metadata."""
        self.metadata[key] = value

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form of the log, as written by ``save()``."""
        return {
            "session_id": self.session_id,
            "started_at": self.started_at,
            "completed_at": self.completed_at,
            "metadata": self.metadata,
            "total_responses": len(self.responses),
            "responses": self.responses,
            "result": self.result,
        }

    def save(self) -> Path:
        """Write the log under ``sessions_dir``.

        Returns
        -------
        Path
            Path of the file just written.
        """
        self.sessions_dir.mkdir(parents=True, exist_ok=True)

        if self.completed_at is None:
            self.completed_at = datetime.now(timezone.utc).isoformat()

        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        filepath = self.sessions_dir / f"{self.session_id}_{timestamp}.json"

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

        return filepath

    def summary(self) -> str:
        """Short human-readable line for console output."""
        archetype = self.result.get("archetype", "?")
        confidence = self.result.get("confidence", "?")
        return (
            f"Session {self.session_id}: {len(self.responses)} responses, "
            f"archetype={archetype}, confidence={confidence}"
        )


def load_session(filepath: str | Path) -> dict[str, Any]:
    """Load a session log from a JSON file."""
    with open(filepath, encoding="utf-8") as f:
        return json.load(f)


def list_sessions(sessions_dir: Path | None = None) -> list[Path]:
    """List all session log files, newest first."""
    directory = sessions_dir or SESSIONS_DIR
    if not directory.exists():
        return []
    files = list(directory.glob("*.json"))
    return sorted(files, key=lambda p: p.stat().st_mtime, reverse=True)
