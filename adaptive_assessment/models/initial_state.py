"""Factory helpers for creating fresh engine and workflow state payloads."""

from __future__ import annotations

from typing import Any

from adaptive_assessment.models.state import SessionState


def new_session_state() -> SessionState:
    """Return the empty, not-started session value."""
    return SessionState()


def new_workflow_state(session_id: str) -> dict[str, Any]:
    """Return a fresh workflow state dict used by langgraph hosts."""
    return {
        "session_id": session_id,
        "session": new_session_state().to_dict(),
        "current_question": None,
        "answer_id": "",
        "error": "",
        "result": {},
        "saved": False,
    }
