"""Shared fixtures: a compact question bank and the default policy."""

from __future__ import annotations

import copy

import pytest

from adaptive_assessment.bank.question_bank import QuestionBank
from adaptive_assessment.settings import AssessmentConfig


def _question(n: int) -> dict:
    dimension = "T-F" if n % 2 else "J-P"
    return {
        "id": f"q{n}",
        "text": f"Question {n}",
        "dimension": dimension,
        "answers": [
            {"id": f"q{n}a1", "text": "Tactical and structured", "score_tf": 2, "score_jp": 2},
            {"id": f"q{n}a2", "text": "Tactical and experimental", "score_tf": 2, "score_jp": -2},
            {"id": f"q{n}a3", "text": "Strategic and structured", "score_tf": -2, "score_jp": 2},
            {"id": f"q{n}a4", "text": "Strategic and experimental", "score_tf": -2, "score_jp": -2},
            {"id": f"q{n}a5", "text": "I'm not sure", "score_tf": 0, "score_jp": 0},
            {"id": f"q{n}a6", "text": "Slightly tactical", "score_tf": 1, "score_jp": 0},
        ],
    }


SAMPLE_RECORDS: list[dict] = [_question(n) for n in range(1, 13)]


@pytest.fixture
def sample_records() -> list[dict]:
    return copy.deepcopy(SAMPLE_RECORDS)


@pytest.fixture
def bank() -> QuestionBank:
    """Twelve questions; every question offers the same six answer shapes."""
    return QuestionBank.from_records(SAMPLE_RECORDS)


@pytest.fixture
def policy() -> AssessmentConfig:
    """Default policy: min 5, max 10, threshold 80, neutral zone 2."""
    return AssessmentConfig()
