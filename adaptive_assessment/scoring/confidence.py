"""Confidence estimator — how decisively the evidence points somewhere.

The score blends two terms:

    avg_magnitude   = (|tf| + |jp|) / (responses * 2)
    base            = min(avg_magnitude / max_answer_weight, 1.0)
    response_factor = min(responses / max_questions, 1.0)
    confidence      = round((base * 0.7 + response_factor * 0.3) * 100)

The magnitude term rewards strong, consistent answers; the response
term rewards more evidence.  The 70/30 split is policy and comes from
``AssessmentConfig``.  Saturating both terms at 1.0 keeps the result in
[0, 100] even for answer sets heavier than the nominal ±2.
"""

from __future__ import annotations

import math

from adaptive_assessment.settings import AssessmentConfig, get_config


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; x.5 must always go up here.
    return int(math.floor(value + 0.5))


def estimate_confidence(
    total_tf: int,
    total_jp: int,
    response_count: int,
    config: AssessmentConfig | None = None,
) -> int:
    """Return the 0–100 confidence for the given totals and response count."""
    if response_count <= 0:
        return 0

    cfg = config or get_config()

    avg_magnitude = (abs(total_tf) + abs(total_jp)) / (response_count * 2)
    base_confidence = min(avg_magnitude / cfg.max_answer_weight, 1.0)
    response_factor = min(response_count / cfg.max_questions, 1.0)

    confidence = (
        base_confidence * cfg.magnitude_weight
        + response_factor * cfg.response_weight
    )
    return max(0, min(100, _round_half_up(confidence * 100)))
