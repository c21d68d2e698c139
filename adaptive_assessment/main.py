"""CLI entry-point — take the learning-archetype quiz in the terminal.

Usage:
    python -m adaptive_assessment.main
    # or via pyproject entry-point:  archetype-quiz
"""

from __future__ import annotations

import uuid

from dotenv import load_dotenv
from langgraph.types import Command

from adaptive_assessment.logging_config import setup_logging
from adaptive_assessment.models.initial_state import new_workflow_state
from adaptive_assessment.models.quiz import ArchetypeResult
from adaptive_assessment.profile.store import JsonProfileStore
from adaptive_assessment.scoring.classifier import explain_result
from adaptive_assessment.workflow import build_graph

BANNER = """
╔══════════════════════════════════════════════════════════════╗
║            Chess Learning Archetype Quiz                     ║
║                                                              ║
║  Pick the answer closest to how you actually play.           ║
║  The quiz may finish early once your style is clear.         ║
║  Type 'quit' at any time to stop without a result.           ║
╚══════════════════════════════════════════════════════════════╝
"""


def _print_question(question: dict, number: int) -> None:
    print(f"\nQuestion {number}: {question['text']}")
    for i, answer in enumerate(question["answers"], start=1):
        print(f"  {i}. {answer['text']}")


def _to_answer_id(question: dict, raw: str) -> str:
    """Map a 1-based choice to its answer id; anything else is passed through."""
    if raw.isdigit():
        index = int(raw) - 1
        if 0 <= index < len(question["answers"]):
            return question["answers"][index]["id"]
    return raw


def main() -> None:
    load_dotenv()
    setup_logging()
    print(BANNER)

    store = JsonProfileStore()
    previous = store.load()
    if previous is not None:
        print(
            f"Previous result: {previous.archetype.value} "
            f"({previous.confidence}% confidence). Retaking the quiz replaces it.\n"
        )

    graph = build_graph(profiles=store)
    thread_id = str(uuid.uuid4())
    config = {"configurable": {"thread_id": thread_id}}

    # First invocation: router → ask → human_turn (interrupt)
    result = graph.invoke(new_workflow_state(session_id=thread_id), config)

    while not result.get("result"):
        question = result.get("current_question")
        if question is None:
            print("\nNo question available; the quiz could not continue.")
            return
        if result.get("error"):
            print(f"\n  ! {result['error']}")

        answered = len(result.get("session", {}).get("responses", []))
        _print_question(question, answered + 1)

        try:
            raw = input("Your choice: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nSession ended by user.")
            return

        if raw.lower() == "quit":
            print("\nQuiz abandoned; no result saved.")
            return

        result = graph.invoke(Command(resume=_to_answer_id(question, raw)), config)

    final = ArchetypeResult.from_dict(result["result"])
    print("\n" + "═" * 60)
    print("QUIZ COMPLETE")
    print("═" * 60)
    print(explain_result(final))
    if not result.get("saved"):
        print("\n(Your result could not be saved.)")
    print("═" * 60)


if __name__ == "__main__":
    main()
