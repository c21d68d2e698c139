"""Archetype classifier — maps accumulated totals to a learning archetype.

Rule:
  - Both |tf| and |jp| below the neutral threshold (default 2, strict
    ``<``) → Neutral.  A total of exactly 2 already counts as decisive.
  - Otherwise the quadrant: tf >= 0 → Thinking (T), else Feeling (F);
    jp >= 0 → Judging (J), else Perceiving (P).

A total of exactly 0 on one axis resolves to the positive pole (T or
J).  That tie-break is a fixed contract and is covered by tests.
"""

from __future__ import annotations

from adaptive_assessment.models.quiz import (
    ARCHETYPE_DESCRIPTIONS,
    Archetype,
    ArchetypeResult,
)
from adaptive_assessment.scoring.confidence import estimate_confidence
from adaptive_assessment.settings import AssessmentConfig, get_config

_QUADRANTS: dict[tuple[bool, bool], Archetype] = {
    (True, True): Archetype.TJ,
    (True, False): Archetype.TP,
    (False, True): Archetype.FJ,
    (False, False): Archetype.FP,
}


def has_clear_archetype(
    total_tf: int,
    total_jp: int,
    config: AssessmentConfig | None = None,
) -> bool:
    """True when the totals are outside the neutral dead-zone."""
    threshold = (config or get_config()).neutral_threshold
    return abs(total_tf) >= threshold or abs(total_jp) >= threshold


def classify(
    total_tf: int,
    total_jp: int,
    config: AssessmentConfig | None = None,
) -> Archetype:
    """Return the archetype for the given totals."""
    if not has_clear_archetype(total_tf, total_jp, config):
        return Archetype.NEUTRAL

    is_thinking = total_tf >= 0
    is_judging = total_jp >= 0
    return _QUADRANTS[(is_thinking, is_judging)]


def build_result(
    total_tf: int,
    total_jp: int,
    response_count: int,
    config: AssessmentConfig | None = None,
) -> ArchetypeResult:
    """Compute the full, deterministic result for a set of totals."""
    if response_count == 0:
        return ArchetypeResult(
            archetype=Archetype.NEUTRAL,
            confidence=0,
            total_tf=0,
            total_jp=0,
            explanation=ARCHETYPE_DESCRIPTIONS[Archetype.NEUTRAL],
        )

    archetype = classify(total_tf, total_jp, config)
    return ArchetypeResult(
        archetype=archetype,
        confidence=estimate_confidence(total_tf, total_jp, response_count, config),
        total_tf=total_tf,
        total_jp=total_jp,
        explanation=ARCHETYPE_DESCRIPTIONS[archetype],
    )


def explain_result(result: ArchetypeResult) -> str:
    """Format a result for human display."""
    lines = [
        f"Archetype:   {result.archetype.value}",
        f"Confidence:  {result.confidence}%",
        f"T/F score:   {result.total_tf:+d}",
        f"J/P score:   {result.total_jp:+d}",
        "",
        result.explanation,
    ]
    return "\n".join(lines)
