"""LangGraph host — drives one quiz session through the engine.

The engine is synchronous and side-effect free; this graph is the
event-driven host around it.  Each node runs to completion before the
next input is accepted, and the only I/O (profile store, session log)
happens in ``finalize``.

Flow:
    START → router → ask → human_turn → record_answer → router → …
                  ↘ finalize → END   (once the session is complete)

The human_turn node uses LangGraph's ``interrupt()`` to pause execution
and wait for the player's answer id, which the caller resumes via
``Command(resume=answer_id)``.  A rejected answer is reported in the
``error`` field and the same question is asked again.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from langgraph.checkpoint.memory import MemorySaver
from langgraph.graph import END, START, StateGraph
from langgraph.types import Command, interrupt

from adaptive_assessment.bank.local_bank import load_question_bank
from adaptive_assessment.bank.question_bank import QuestionBank
from adaptive_assessment.errors import Err
from adaptive_assessment.models.state import QuizWorkflowState, SessionState
from adaptive_assessment.profile.store import PlayerProfileStore
from adaptive_assessment.scoring.classifier import build_result
from adaptive_assessment.session.controller import answer_question, complete, next_question
from adaptive_assessment.session.logger import SessionLogger
from adaptive_assessment.settings import AssessmentConfig, get_config

logger = logging.getLogger(__name__)


def _session(state: QuizWorkflowState) -> SessionState:
    return SessionState.from_dict(state.get("session") or {})


# ── Graph nodes ───────────────────────────────────────────────────────────


def router(state: QuizWorkflowState) -> Command:
    """Decide whether to keep asking or finalize the result."""
    if _session(state).is_complete:
        return Command(goto="finalize")
    return Command(goto="ask")


def ask(
    state: QuizWorkflowState,
    *,
    bank: QuestionBank,
    policy: AssessmentConfig,
) -> Command:
    """Pick the next question, or finalize if the session just ended."""
    session, question = next_question(_session(state), bank, policy)
    if question is None:
        return Command(
            update={"session": session.to_dict(), "current_question": None},
            goto="finalize",
        )
    return Command(
        update={"current_question": question.model_dump(mode="json")},
        goto="human_turn",
    )


def human_turn(state: QuizWorkflowState) -> dict:
    """Pause execution and wait for the player's answer via interrupt()."""
    prompt = {
        "question": state.get("current_question"),
        "error": state.get("error", ""),
    }
    answer_id = interrupt(prompt)
    return {"answer_id": str(answer_id)}


def record_answer(
    state: QuizWorkflowState,
    *,
    bank: QuestionBank,
    policy: AssessmentConfig,
) -> dict:
    """Apply the answer to the engine state; report rejections instead of raising."""
    question = state.get("current_question") or {}
    outcome = answer_question(
        _session(state),
        bank,
        question.get("id", ""),
        state.get("answer_id", ""),
        policy,
    )
    if isinstance(outcome, Err):
        logger.info("[workflow] %s", outcome.message)
        return {"error": outcome.message}
    return {"session": outcome.state.to_dict(), "error": ""}


def finalize(
    state: QuizWorkflowState,
    *,
    bank: QuestionBank,
    policy: AssessmentConfig,
    profiles: PlayerProfileStore | None = None,
    sessions_dir: Path | None = None,
) -> dict[str, Any]:
    """Compute the result and hand it to the host's collaborators."""
    session = complete(_session(state), policy)
    result = build_result(
        session.total_tf, session.total_jp, session.response_count, policy
    )

    saved = False
    if profiles is not None:
        saved = profiles.save(result)
        if not saved:
            logger.warning("[workflow] Profile store rejected the result")

    if sessions_dir is not None:
        session_log = SessionLogger(state.get("session_id", "unknown"), sessions_dir)
        session_log.log_config(policy)
        session_log.log_state(session, bank, policy)
        session_log.log_result(result)
        session_log.save()

    return {
        "session": session.to_dict(),
        "current_question": None,
        "result": result.to_dict(),
        "saved": saved,
    }


# ── Build the graph ───────────────────────────────────────────────────────


def build_graph(
    bank: QuestionBank | None = None,
    profiles: PlayerProfileStore | None = None,
    policy: AssessmentConfig | None = None,
    sessions_dir: Path | None = None,
):
    """Construct and compile the quiz StateGraph."""
    bank = bank if bank is not None else load_question_bank()
    policy = policy or get_config()

    def ask_node(state: QuizWorkflowState) -> Command:
        return ask(state, bank=bank, policy=policy)

    def record_answer_node(state: QuizWorkflowState) -> dict:
        return record_answer(state, bank=bank, policy=policy)

    def finalize_node(state: QuizWorkflowState) -> dict:
        return finalize(
            state,
            bank=bank,
            policy=policy,
            profiles=profiles,
            sessions_dir=sessions_dir,
        )

    graph = StateGraph(QuizWorkflowState)

    graph.add_node("router", router)
    graph.add_node("ask", ask_node)
    graph.add_node("human_turn", human_turn)
    graph.add_node("record_answer", record_answer_node)
    graph.add_node("finalize", finalize_node)

    graph.add_edge(START, "router")
    # router and ask use Command to choose their successor
    graph.add_edge("human_turn", "record_answer")
    graph.add_edge("record_answer", "router")
    graph.add_edge("finalize", END)

    checkpointer = MemorySaver()
    return graph.compile(checkpointer=checkpointer)
