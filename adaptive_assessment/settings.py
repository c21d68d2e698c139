"""Project-wide settings for the assessment engine.

Env vars are only read on first attribute access, never at import,
and the parsed values stay cached in ``functools.lru_cache``.  Tests call
``reset()`` after monkeypatching the environment instead of
reloading the module.

Engine functions take an explicit ``AssessmentConfig`` and only fall
back to ``get_config()``, which builds one from these settings, when
the caller passes none.
"""

from __future__ import annotations

import functools
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final


def _float_env(name: str, default: float) -> float:
    """Float env var; unset or unparsable values give ``default``."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    """Integer env var; unset or unparsable values give ``default``."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ── Constants (never change at runtime) ──────────────────────────────────
MAX_ANSWER_WEIGHT: Final[int] = 2
APP_VERSION: Final[str] = "1.0.0"


@dataclass(frozen=True)
class AssessmentConfig:
    """Tunable policy for sequencing, confidence and classification.

    ``magnitude_weight`` and ``response_weight`` split the confidence score
    between answer strength and amount of evidence; they must sum to 1.
    """

    min_questions: int = 5
    max_questions: int = 10
    confidence_threshold: int = 80
    neutral_threshold: int = 2
    magnitude_weight: float = 0.7
    response_weight: float = 0.3
    max_answer_weight: int = MAX_ANSWER_WEIGHT

    def __post_init__(self) -> None:
        if self.max_questions < 1:
            raise ValueError(f"max_questions must be >= 1, got {self.max_questions}")
        if not 0 <= self.min_questions <= self.max_questions:
            raise ValueError(
                f"min_questions must be within [0, {self.max_questions}], "
                f"got {self.min_questions}"
            )
        if not 0 <= self.confidence_threshold <= 100:
            raise ValueError(
                f"confidence_threshold must be within [0, 100], got {self.confidence_threshold}"
            )
        if self.neutral_threshold < 0:
            raise ValueError(f"neutral_threshold must be >= 0, got {self.neutral_threshold}")
        if self.max_answer_weight <= 0:
            raise ValueError(f"max_answer_weight must be > 0, got {self.max_answer_weight}")
        if self.magnitude_weight < 0 or self.response_weight < 0:
            raise ValueError("confidence weights must be non-negative")
        if abs(self.magnitude_weight + self.response_weight - 1.0) > 1e-9:
            raise ValueError(
                "magnitude_weight + response_weight must equal 1.0, got "
                f"{self.magnitude_weight} + {self.response_weight}"
            )


# ── Lazy settings cache ──────────────────────────────────────────────────

@functools.lru_cache(maxsize=1)
def _load_settings() -> dict[str, object]:
    """Snapshot of every ``ASSESSMENT_*`` variable."""
    return {
        "MIN_QUESTIONS": _int_env("ASSESSMENT_MIN_QUESTIONS", 5),
        "MAX_QUESTIONS": _int_env("ASSESSMENT_MAX_QUESTIONS", 10),
        "CONFIDENCE_THRESHOLD": _int_env("ASSESSMENT_CONFIDENCE_THRESHOLD", 80),
        "NEUTRAL_THRESHOLD": _int_env("ASSESSMENT_NEUTRAL_THRESHOLD", 2),
        "MAGNITUDE_WEIGHT": _float_env("ASSESSMENT_MAGNITUDE_WEIGHT", 0.7),
        "RESPONSE_WEIGHT": _float_env("ASSESSMENT_RESPONSE_WEIGHT", 0.3),
        "PROFILE_PATH": os.getenv("ASSESSMENT_PROFILE_PATH", ""),
    }


def reset() -> None:
    """Forget cached env values and the derived ``AssessmentConfig``."""
    _load_settings.cache_clear()
    get_config.cache_clear()


# Declared for type checkers only; defining them at runtime would
# bypass the module ``__getattr__`` below.
if TYPE_CHECKING:
    MIN_QUESTIONS: int
    MAX_QUESTIONS: int
    CONFIDENCE_THRESHOLD: int
    NEUTRAL_THRESHOLD: int
    MAGNITUDE_WEIGHT: float
    RESPONSE_WEIGHT: float
    PROFILE_PATH: str


def __getattr__(name: str) -> object:
    """PEP 562 hook: ``settings.MAX_QUESTIONS`` etc. resolve from the cache."""
    settings = _load_settings()
    if name in settings:
        return settings[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


# ── Public helpers ────────────────────────────────────────────────────────


@functools.lru_cache(maxsize=1)
def get_config() -> AssessmentConfig:
    """Build the engine policy from the environment.

    Raises ``ValueError`` if the configured values are inconsistent
    (e.g. ``min_questions > max_questions``).
    """
    s = _load_settings()
    return AssessmentConfig(
        min_questions=s["MIN_QUESTIONS"],  # type: ignore[arg-type]
        max_questions=s["MAX_QUESTIONS"],  # type: ignore[arg-type]
        confidence_threshold=s["CONFIDENCE_THRESHOLD"],  # type: ignore[arg-type]
        neutral_threshold=s["NEUTRAL_THRESHOLD"],  # type: ignore[arg-type]
        magnitude_weight=s["MAGNITUDE_WEIGHT"],  # type: ignore[arg-type]
        response_weight=s["RESPONSE_WEIGHT"],  # type: ignore[arg-type]
    )
