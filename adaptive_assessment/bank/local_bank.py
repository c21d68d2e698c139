"""Local JSON question source.

Reads the static quiz from data/quiz_questions.json and caches the
validated bank for the life of the process.  Hosts that ship their own
question set can pass an explicit path instead.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from adaptive_assessment.bank.question_bank import QuestionBank
from adaptive_assessment.errors import QuestionBankError
from adaptive_assessment.paths import QUESTIONS_PATH as DATA_PATH

logger = logging.getLogger(__name__)

_CACHE: QuestionBank | None = None


def reset() -> None:
    """Drop the cached bank — call from tests."""
    global _CACHE  # noqa: PLW0603
    _CACHE = None


def _read(path: Path) -> list[dict]:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise QuestionBankError(f"{path} must contain a JSON array of questions")
    return data


def load_question_bank(path: str | Path | None = None) -> QuestionBank:
    """Return the validated question bank.

    Without ``path`` the bundled quiz is loaded once and cached.  An
    explicit path is always read fresh.
    """
    global _CACHE  # noqa: PLW0603
    if path is not None:
        return QuestionBank.from_records(_read(Path(path)))

    if _CACHE is None:
        _CACHE = QuestionBank.from_records(_read(DATA_PATH))
        logger.debug("[bank] Loaded %d questions from %s", len(_CACHE), DATA_PATH)
    return _CACHE
