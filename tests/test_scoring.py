"""Tests for the scoring modules: accumulator, confidence estimator, classifier.

All scoring is pure and local, so every test here is deterministic.
"""

from __future__ import annotations

import pytest

from adaptive_assessment.models.quiz import ARCHETYPE_DESCRIPTIONS, Archetype
from adaptive_assessment.scoring.accumulator import ScoreTotals
from adaptive_assessment.scoring.classifier import (
    build_result,
    classify,
    explain_result,
    has_clear_archetype,
)
from adaptive_assessment.scoring.confidence import estimate_confidence
from adaptive_assessment.settings import AssessmentConfig


class TestScoreTotals:
    def test_starts_at_zero(self):
        totals = ScoreTotals()
        assert (totals.tf, totals.jp) == (0, 0)

    def test_accumulate_adds_both_dimensions(self):
        totals = ScoreTotals().accumulate(2, -1).accumulate(1, -2)
        assert (totals.tf, totals.jp) == (3, -3)

    def test_accumulate_returns_new_value(self):
        original = ScoreTotals(1, 1)
        updated = original.accumulate(2, 2)
        assert original == ScoreTotals(1, 1)
        assert updated == ScoreTotals(3, 3)

    def test_no_clamping(self):
        totals = ScoreTotals()
        for _ in range(50):
            totals = totals.accumulate(2, -2)
        assert (totals.tf, totals.jp) == (100, -100)


class TestConfidence:
    def test_zero_responses_is_zero(self, policy):
        assert estimate_confidence(0, 0, 0, policy) == 0

    def test_strong_answers_at_minimum_count(self, policy):
        # avg magnitude 2 → base 1.0; response factor 5/10 → 0.7 + 0.15
        assert estimate_confidence(10, 10, 5, policy) == 85

    def test_sign_does_not_matter(self, policy):
        assert estimate_confidence(-10, -10, 5, policy) == 85
        assert estimate_confidence(10, -10, 5, policy) == 85

    def test_all_neutral_answers_only_count_term(self, policy):
        assert estimate_confidence(0, 0, 10, policy) == 30

    def test_maximum_evidence_is_100(self, policy):
        assert estimate_confidence(20, 20, 10, policy) == 100

    def test_response_factor_saturates(self, policy):
        assert estimate_confidence(0, 0, 25, policy) == 30

    def test_pathological_weights_saturate(self, policy):
        # base capped at 1.0; response factor 1/10
        assert estimate_confidence(1000, -1000, 1, policy) == 73

    def test_always_within_bounds(self, policy):
        for count in (1, 2, 5, 10, 40):
            for total in (-500, -7, 0, 3, 64, 10_000):
                assert 0 <= estimate_confidence(total, -total, count, policy) <= 100

    def test_negative_count_treated_as_empty(self, policy):
        assert estimate_confidence(4, 4, -1, policy) == 0

    def test_weights_are_configurable(self):
        cfg = AssessmentConfig(magnitude_weight=0.5, response_weight=0.5)
        assert estimate_confidence(10, 10, 5, cfg) == 75

    def test_rounds_half_up(self):
        cfg = AssessmentConfig(
            min_questions=1, max_questions=4, magnitude_weight=0.5, response_weight=0.5
        )
        # exactly 12.5 → 13 (banker's rounding would give 12)
        assert estimate_confidence(0, 0, 1, cfg) == 13

    def test_returns_int(self, policy):
        assert isinstance(estimate_confidence(3, 1, 2, policy), int)


class TestClassifier:
    def test_inside_dead_zone_is_neutral(self, policy):
        assert classify(1, 1, policy) == Archetype.NEUTRAL
        assert classify(-1, 1, policy) == Archetype.NEUTRAL
        assert classify(0, 0, policy) == Archetype.NEUTRAL

    def test_threshold_is_strict(self, policy):
        assert classify(2, 0, policy) != Archetype.NEUTRAL
        assert classify(0, -2, policy) != Archetype.NEUTRAL

    @pytest.mark.parametrize(
        ("tf", "jp", "expected"),
        [
            (2, 2, Archetype.TJ),
            (2, -2, Archetype.TP),
            (-2, 2, Archetype.FJ),
            (-2, -2, Archetype.FP),
        ],
    )
    def test_quadrants(self, policy, tf, jp, expected):
        assert classify(tf, jp, policy) == expected

    def test_zero_resolves_to_positive_pole(self, policy):
        assert classify(2, 0, policy) == Archetype.TJ
        assert classify(0, 2, policy) == Archetype.TJ
        assert classify(-2, 0, policy) == Archetype.FJ
        assert classify(0, -2, policy) == Archetype.TP

    def test_one_decisive_axis_is_enough(self, policy):
        assert classify(1, -5, policy) == Archetype.TP
        assert classify(-7, 1, policy) == Archetype.FJ

    def test_deterministic(self, policy):
        assert {classify(-3, 4, policy) for _ in range(20)} == {Archetype.FJ}

    def test_neutral_threshold_is_configurable(self):
        cfg = AssessmentConfig(neutral_threshold=3)
        assert classify(2, 2, cfg) == Archetype.NEUTRAL
        assert classify(3, 2, cfg) == Archetype.TJ

    def test_has_clear_archetype(self, policy):
        assert has_clear_archetype(2, 0, policy)
        assert has_clear_archetype(-1, -4, policy)
        assert not has_clear_archetype(1, -1, policy)


class TestBuildResult:
    def test_no_responses_is_neutral_with_zero_confidence(self, policy):
        result = build_result(0, 0, 0, policy)
        assert result.archetype == Archetype.NEUTRAL
        assert result.confidence == 0
        assert result.explanation == ARCHETYPE_DESCRIPTIONS[Archetype.NEUTRAL]

    def test_result_fields(self, policy):
        result = build_result(10, 10, 5, policy)
        assert result.archetype == Archetype.TJ
        assert result.confidence == 85
        assert (result.total_tf, result.total_jp) == (10, 10)
        assert result.explanation.startswith("Tactical-Structured")

    def test_recomputing_gives_equal_result(self, policy):
        assert build_result(-6, 3, 7, policy) == build_result(-6, 3, 7, policy)

    def test_to_dict_uses_label_values(self, policy):
        data = build_result(-4, -4, 4, policy).to_dict()
        assert data["archetype"] == "FP"
        assert set(data) == {"archetype", "confidence", "total_tf", "total_jp", "explanation"}

    def test_explain_result(self, policy):
        text = explain_result(build_result(4, -2, 3, policy))
        assert "Archetype:   TP" in text
        assert "T/F score:   +4" in text
        assert "J/P score:   -2" in text
