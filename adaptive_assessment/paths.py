"""Filesystem locations used by the engine's hosts.

Modules import their default paths from here; every one of them can be
overridden by an explicit argument or, for the profile, an env var.
"""

from __future__ import annotations

from pathlib import Path

PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
DATA_DIR: Path = PROJECT_ROOT / "data"

QUESTIONS_PATH: Path = DATA_DIR / "quiz_questions.json"
SESSIONS_DIR: Path = DATA_DIR / "sessions"
PROFILE_PATH: Path = DATA_DIR / "player_profile.json"
