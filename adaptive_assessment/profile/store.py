"""Player profile persistence — the host-side store for finished results.

The engine never touches storage: a host reads ``get_result()`` after
completion and forwards it here.  Stores fail open: a missing,
unreadable or invalid profile is reported as "no profile" (and the bad
file is cleared) so that a corrupted profile never blocks a new
assessment.

File format (``JsonProfileStore``):

    {"app_version": "1.0.0", "profile": {"archetype": "TJ", ...}}
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field, ValidationError

from adaptive_assessment import paths, settings
from adaptive_assessment.models.quiz import Archetype, ArchetypeResult
from adaptive_assessment.settings import APP_VERSION

logger = logging.getLogger(__name__)


class PlayerProfile(BaseModel):
    """Persisted outcome of a completed assessment."""

    archetype: Archetype
    confidence: int = Field(..., ge=0, le=100)
    total_tf: int = 0
    total_jp: int = 0
    explanation: str
    determined_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @classmethod
    def from_result(cls, result: ArchetypeResult) -> PlayerProfile:
        return cls(
            archetype=result.archetype,
            confidence=result.confidence,
            total_tf=result.total_tf,
            total_jp=result.total_jp,
            explanation=result.explanation,
        )

    def to_result(self) -> ArchetypeResult:
        return ArchetypeResult(
            archetype=self.archetype,
            confidence=self.confidence,
            total_tf=self.total_tf,
            total_jp=self.total_jp,
            explanation=self.explanation,
        )


@runtime_checkable
class PlayerProfileStore(Protocol):
    """Interface injected into hosts; the engine does not depend on it."""

    def save(self, result: ArchetypeResult) -> bool: ...

    def load(self) -> ArchetypeResult | None: ...

    def clear(self) -> None: ...


class InMemoryProfileStore:
    """Process-local store for tests and embedding hosts."""

    def __init__(self) -> None:
        self._profile: PlayerProfile | None = None
        self.save_count = 0

    def save(self, result: ArchetypeResult) -> bool:
        self._profile = PlayerProfile.from_result(result)
        self.save_count += 1
        return True

    def load(self) -> ArchetypeResult | None:
        return self._profile.to_result() if self._profile is not None else None

    def load_profile(self) -> PlayerProfile | None:
        return self._profile

    def clear(self) -> None:
        self._profile = None


class JsonProfileStore:
    """Single-profile JSON file store with version tagging."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path or settings.PROFILE_PATH or paths.PROFILE_PATH)

    def save(self, result: ArchetypeResult) -> bool:
        """Persist ``result``; returns False (and logs) on I/O failure."""
        profile = PlayerProfile.from_result(result)
        payload = {
            "app_version": APP_VERSION,
            "profile": profile.model_dump(mode="json"),
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error("[profile] Failed to save player profile: %s", e)
            return False
        logger.info(
            "[profile] Saved %s profile to %s", profile.archetype.value, self.path
        )
        return True

    def _read(self) -> dict | None:
        if not self.path.exists():
            return None
        with open(self.path, encoding="utf-8") as f:
            return json.load(f)

    def load(self) -> ArchetypeResult | None:
        """Return the stored result, or None if absent or corrupted."""
        profile = self.load_profile()
        return profile.to_result() if profile is not None else None

    def load_profile(self) -> PlayerProfile | None:
        """Return the stored profile with its ``determined_at`` stamp."""
        try:
            data = self._read()
        except (OSError, ValueError) as e:
            logger.error("[profile] Failed to load player profile: %s", e)
            self.clear()
            return None

        if data is None:
            return None

        try:
            return PlayerProfile.model_validate(data["profile"])
        except (KeyError, TypeError, ValidationError) as e:
            logger.warning("[profile] Invalid player profile found, clearing (%s)", e)
            self.clear()
            return None

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("[profile] Failed to clear player profile: %s", e)

    def has_profile(self) -> bool:
        return self.load_profile() is not None

    def stored_version(self) -> str | None:
        try:
            data = self._read()
        except (OSError, ValueError):
            return None
        if not isinstance(data, dict):
            return None
        return data.get("app_version")

    def needs_migration(self) -> bool:
        """True when a profile written by another app version exists."""
        stored = self.stored_version()
        return stored is not None and stored != APP_VERSION
