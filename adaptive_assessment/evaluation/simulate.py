"""Policy simulation — how the termination policy behaves on synthetic players.

Each simulated respondent has a latent lean in [-1, 1] on both
dimensions and picks answers with softmax probabilities proportional
to how well an answer's weights match that lean.  Running many of them
through ``SessionController`` shows:
  - the archetype distribution the bank produces
  - how often sessions stop early, and after how many questions
  - mean final confidence
  - agreement between the assigned archetype and the latent quadrant

Usage:
    python -m adaptive_assessment.evaluation.simulate
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np
from dotenv import load_dotenv

from adaptive_assessment.bank.local_bank import load_question_bank
from adaptive_assessment.bank.question_bank import QuestionBank
from adaptive_assessment.logging_config import setup_logging
from adaptive_assessment.models.quiz import Answer, Archetype, Question
from adaptive_assessment.scoring.classifier import classify
from adaptive_assessment.session.controller import SessionController
from adaptive_assessment.settings import AssessmentConfig, get_config

logger = logging.getLogger(__name__)


@dataclass
class SimulatedSession:
    """Outcome of one synthetic respondent's session."""

    lean_tf: float
    lean_jp: float
    archetype: Archetype
    confidence: int
    questions_asked: int
    terminated_early: bool
    latent_archetype: Archetype


def latent_archetype(
    lean_tf: float, lean_jp: float, config: AssessmentConfig
) -> Archetype:
    """Quadrant of a latent lean under the same policy as the session."""
    # Leans in [-1, 1] map onto a full-length session's total scale.
    return classify(int(round(lean_tf * 10)), int(round(lean_jp * 10)), config)


def _choose_answer(
    question: Question,
    lean_tf: float,
    lean_jp: float,
    sharpness: float,
    rng: np.random.Generator,
) -> Answer:
    utilities = np.array(
        [lean_tf * a.score_tf + lean_jp * a.score_jp for a in question.answers],
        dtype=float,
    )
    logits = sharpness * utilities
    probs = np.exp(logits - logits.max())
    probs /= probs.sum()
    return question.answers[int(rng.choice(len(question.answers), p=probs))]


def simulate_sessions(
    n_respondents: int = 1000,
    bank: QuestionBank | None = None,
    config: AssessmentConfig | None = None,
    sharpness: float = 2.0,
    seed: int | None = 42,
) -> list[SimulatedSession]:
    """Run ``n_respondents`` synthetic players through complete sessions."""
    bank = bank if bank is not None else load_question_bank()
    config = config or get_config()
    rng = np.random.default_rng(seed)

    leans = rng.uniform(-1.0, 1.0, size=(n_respondents, 2))
    sessions: list[SimulatedSession] = []
    controller = SessionController(bank, config)

    for lean_tf, lean_jp in leans:
        controller.reset()
        while (question := controller.get_next_question()) is not None:
            answer = _choose_answer(question, lean_tf, lean_jp, sharpness, rng)
            controller.answer_question(question.id, answer.id)

        count = controller.get_response_count()
        sessions.append(
            SimulatedSession(
                lean_tf=float(lean_tf),
                lean_jp=float(lean_jp),
                archetype=controller.get_archetype() or Archetype.NEUTRAL,
                confidence=controller.get_confidence(),
                questions_asked=count,
                terminated_early=count < min(config.max_questions, len(bank)),
                latent_archetype=latent_archetype(float(lean_tf), float(lean_jp), config),
            )
        )

    logger.info("[simulate] Ran %d sessions", len(sessions))
    return sessions


def summarize(sessions: list[SimulatedSession]) -> dict[str, Any]:
    """Aggregate simulation metrics."""
    n = len(sessions)
    if n == 0:
        return {"error": "No sessions to summarize."}

    asked = np.array([s.questions_asked for s in sessions], dtype=float)
    confidence = np.array([s.confidence for s in sessions], dtype=float)
    early = np.array([s.terminated_early for s in sessions], dtype=bool)

    distribution = {a.value: 0 for a in Archetype}
    for s in sessions:
        distribution[s.archetype.value] += 1

    decisive = [s for s in sessions if s.latent_archetype != Archetype.NEUTRAL]
    agreement = (
        sum(s.archetype == s.latent_archetype for s in decisive) / len(decisive)
        if decisive
        else 0.0
    )

    return {
        "n": n,
        "archetype_distribution": distribution,
        "early_termination_rate": round(float(early.mean()), 4),
        "mean_questions_asked": round(float(asked.mean()), 2),
        "mean_confidence": round(float(confidence.mean()), 2),
        "confidence_std": round(float(np.std(confidence, ddof=1)), 2) if n > 1 else 0.0,
        "latent_agreement": round(agreement, 4),
    }


def format_report(summary: dict[str, Any]) -> str:
    """Human-readable multi-line report for ``summarize()`` output."""
    if "error" in summary:
        return f"Error: {summary['error']}"

    lines = [
        "═" * 60,
        "  ADAPTIVE QUIZ — POLICY SIMULATION",
        "═" * 60,
        f"  Simulated sessions      : {summary['n']}",
        f"  Early termination rate  : {summary['early_termination_rate']:.1%}",
        f"  Mean questions asked    : {summary['mean_questions_asked']:.2f}",
        f"  Mean confidence (SD)    : {summary['mean_confidence']:.1f} "
        f"({summary['confidence_std']:.1f})",
        f"  Latent quadrant match   : {summary['latent_agreement']:.1%}",
        "",
        "─" * 60,
        "  ARCHETYPE DISTRIBUTION",
        "─" * 60,
    ]
    n = summary["n"]
    for label, count in summary["archetype_distribution"].items():
        bar = "█" * int(round(40 * count / n))
        lines.append(f"  {label:8s} {count:6d}  {bar}")
    lines.append("═" * 60)
    return "\n".join(lines)


def main() -> None:
    load_dotenv()
    setup_logging()
    print(format_report(summarize(simulate_sessions())))


if __name__ == "__main__":
    main()
