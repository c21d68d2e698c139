"""Tests for the JSON session logger."""

from __future__ import annotations

import pytest

from adaptive_assessment.bank.question_bank import QuestionBank
from adaptive_assessment.session.controller import SessionController
from adaptive_assessment.session.logger import SessionLogger, list_sessions, load_session


def _play(bank, policy, log: SessionLogger) -> SessionController:
    controller = SessionController(bank, policy)
    while (question := controller.get_next_question()) is not None:
        controller.answer_question(question.id, f"{question.id}a3")
        log.log_response(controller.state)
    return controller


def test_records_each_response_with_running_totals(tmp_path, bank, policy):
    log = SessionLogger("s-1", sessions_dir=tmp_path)
    _play(bank, policy, log)

    assert len(log.responses) == 5
    first, last = log.responses[0], log.responses[-1]
    assert first["response_number"] == 1
    assert first["question_id"] == "q1"
    assert (first["total_tf"], first["total_jp"]) == (-2, 2)
    assert last["confidence"] == 85


def test_log_response_ignores_empty_state(tmp_path, bank, policy):
    log = SessionLogger("s-2", sessions_dir=tmp_path)
    log.log_response(SessionController(bank, policy).state)
    assert log.responses == []


def test_save_and_load(tmp_path, bank, policy):
    log = SessionLogger("s-3", sessions_dir=tmp_path)
    controller = _play(bank, policy, log)
    log.log_result(controller.get_result())
    log.log_config(policy)

    path = log.save()
    assert path.parent == tmp_path
    assert path.name.startswith("s-3_")

    data = load_session(path)
    assert data["session_id"] == "s-3"
    assert data["total_responses"] == 5
    assert data["result"]["archetype"] == "FJ"
    assert data["metadata"]["max_questions"] == 10
    assert data["completed_at"] is not None
    assert "FJ" in log.summary()


def test_log_state_replaces_responses(tmp_path, bank, policy):
    log = SessionLogger("s-4", sessions_dir=tmp_path)
    live = SessionLogger("live", sessions_dir=tmp_path)
    controller = _play(bank, policy, live)
    log.set_metadata("host", "cli")
    log.log_state(controller.state, bank, policy)

    assert [r["response_number"] for r in log.responses] == [1, 2, 3, 4, 5]
    # replayed totals match what was recorded answer by answer
    assert log.responses == live.responses
    assert log.responses[-1]["confidence"] == 85
    assert log.to_dict()["metadata"]["host"] == "cli"


def test_list_sessions(tmp_path):
    assert list_sessions(tmp_path / "missing") == []
    SessionLogger("a", sessions_dir=tmp_path).save()
    assert len(list_sessions(tmp_path)) == 1


def test_log_state_rejects_responses_outside_the_bank(tmp_path, bank, policy, sample_records):
    controller = SessionController(bank, policy)
    controller.answer_question("q7", "q7a1")
    small = QuestionBank.from_records(sample_records[:3])
    with pytest.raises(ValueError, match="q7"):
        SessionLogger("s-5", sessions_dir=tmp_path).log_state(controller.state, small, policy)
