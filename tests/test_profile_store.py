"""Tests for player profile persistence (in-memory and JSON file stores)."""

from __future__ import annotations

import json

import pytest

from adaptive_assessment import settings
from adaptive_assessment.models.quiz import Archetype
from adaptive_assessment.profile.store import (
    InMemoryProfileStore,
    JsonProfileStore,
    PlayerProfile,
    PlayerProfileStore,
)
from adaptive_assessment.scoring.classifier import build_result
from adaptive_assessment.settings import APP_VERSION, AssessmentConfig


@pytest.fixture
def result():
    return build_result(10, -10, 5, AssessmentConfig())


@pytest.fixture
def store(tmp_path):
    return JsonProfileStore(tmp_path / "profile" / "player.json")


class TestInMemoryStore:
    def test_round_trip(self, result):
        store = InMemoryProfileStore()
        assert store.load() is None
        assert store.save(result) is True
        assert store.load() == result
        assert store.load_profile().archetype == Archetype.TP
        assert store.save_count == 1

    def test_clear(self, result):
        store = InMemoryProfileStore()
        store.save(result)
        store.clear()
        assert store.load() is None

    def test_satisfies_protocol(self, tmp_path):
        assert isinstance(InMemoryProfileStore(), PlayerProfileStore)
        assert isinstance(JsonProfileStore(tmp_path / "p.json"), PlayerProfileStore)


class TestJsonStore:
    def test_missing_file_is_no_profile(self, store):
        assert store.load() is None
        assert store.has_profile() is False
        assert store.needs_migration() is False

    def test_save_and_load(self, store, result):
        assert store.save(result) is True
        assert store.path.exists()

        assert store.load() == result
        profile = store.load_profile()
        assert profile.explanation == result.explanation
        assert profile.determined_at.tzinfo is not None

    def test_file_is_version_tagged(self, store, result):
        store.save(result)
        data = json.loads(store.path.read_text(encoding="utf-8"))
        assert data["app_version"] == APP_VERSION
        assert data["profile"]["archetype"] == "TP"
        assert store.stored_version() == APP_VERSION
        assert store.needs_migration() is False

    def test_other_version_needs_migration(self, store, result):
        store.save(result)
        data = json.loads(store.path.read_text(encoding="utf-8"))
        data["app_version"] = "0.9.0"
        store.path.write_text(json.dumps(data), encoding="utf-8")
        assert store.needs_migration() is True
        # The profile itself is still usable.
        assert store.load().archetype == Archetype.TP

    def test_corrupted_json_fails_open(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json", encoding="utf-8")
        assert store.load() is None
        assert not store.path.exists()

    def test_invalid_archetype_fails_open(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(
            json.dumps({"app_version": APP_VERSION, "profile": {"archetype": "XY", "confidence": 50}}),
            encoding="utf-8",
        )
        assert store.load() is None
        assert not store.path.exists()

    def test_missing_profile_key_fails_open(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps({"app_version": APP_VERSION}), encoding="utf-8")
        assert store.load() is None

    def test_save_failure_returns_false(self, tmp_path, result):
        target = tmp_path / "is_a_dir"
        target.mkdir()
        assert JsonProfileStore(target).save(result) is False

    def test_clear_is_idempotent(self, store, result):
        store.save(result)
        store.clear()
        store.clear()
        assert store.load() is None

    def test_path_from_environment(self, monkeypatch, tmp_path):
        target = tmp_path / "env_profile.json"
        monkeypatch.setenv("ASSESSMENT_PROFILE_PATH", str(target))
        settings.reset()
        try:
            assert JsonProfileStore().path == target
        finally:
            settings.reset()


def test_profile_confidence_bounds():
    with pytest.raises(ValueError):
        PlayerProfile(archetype=Archetype.TJ, confidence=120, explanation="x")


def test_profile_converts_back_to_result(result):
    profile = PlayerProfile.from_result(result)
    assert profile.to_result() == result


def test_profile_without_explanation_fails_open(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text(
        json.dumps(
            {
                "app_version": APP_VERSION,
                "profile": {"archetype": "TJ", "confidence": 90, "total_tf": 8, "total_jp": 4},
            }
        ),
        encoding="utf-8",
    )
    assert store.load() is None
    assert not store.path.exists()
