import pytest

from domain import snapshot as snapshot_module
from domain.models import *
from domain.snapshot import (
    SnapshotBuildError, build_persona_snapshot, create_minimal_persona_snapshot,
    get_snapshot_summary, is_high_confidence_snapshot,
)
from domain.validators import SignalValidationError, validate_signals


def make_signals(**kwargs) -> dict:
    defaults = dict(
        playtimeByGenre={},
        averageSessionLengthMinutes=30,
        sessionsPerWeek=1,
        difficultyPreference="Relaxed",
        multiplayerRatio=0.05,
        lateNightRatio=0.1,
        completionRate=0.1,
    )
    defaults.update(kwargs)
    return defaults


def test_low_engagement_snapshot_without_mood():
    snap = build_persona_snapshot(make_signals())
    assert snap.traits.archetype == Archetype.ACHIEVER
    assert snap.traits.intensity == Intensity.LOW
    assert snap.traits.pacing == Pacing.BURST
    assert snap.traits.risk_profile == RiskProfile.COMFORT
    assert snap.traits.social_style == SocialStyle.SOLO
    assert snap.mood is None
    assert snap.narrative.tone == NarrativeTone.REFLECTIVE
    assert snap.confidence == pytest.approx(0.833, abs=1e-3)
    assert snap.confidence == snap.traits.confidence


def test_mood_mapping_accepts_wire_shape():
    mood = {"moodId": "chill", "intensity": 15, "timestamp": "2024-03-01T20:00:00Z"}
    snap = build_persona_snapshot(make_signals(), mood)
    assert snap.mood is not None
    assert snap.mood.intensity == 10
    assert snap.mood.timestamp.tzinfo is not None
    assert snap.narrative.tone == NarrativeTone.CALM
    assert "Currently feeling relaxed" in snap.narrative.summary


def test_snapshot_is_deterministic():
    mood = {"moodId": "focused", "intensity": 6, "timestamp": "2024-03-01T20:00:00+00:00"}
    assert build_persona_snapshot(make_signals(), mood) == build_persona_snapshot(make_signals(), mood)


def test_missing_field_names_the_field():
    signals = make_signals()
    del signals["completionRate"]
    with pytest.raises(SignalValidationError) as exc:
        build_persona_snapshot(signals)
    assert exc.value.field == "completionRate"
    assert "Invalid player signals" in str(exc.value)


def test_none_signals_rejected():
    with pytest.raises(SignalValidationError):
        build_persona_snapshot(None)


@pytest.mark.parametrize("field,value", [
    ("multiplayerRatio", 1.5),
    ("completionRate", -0.1),
    ("sessionsPerWeek", -1),
    ("averageSessionLengthMinutes", "long"),
    ("difficultyPreference", "Nightmare"),
    ("playtimeByGenre", {"RPG": -5}),
])
def test_out_of_range_values_rejected(field, value):
    with pytest.raises(SignalValidationError) as exc:
        build_persona_snapshot(make_signals(**{field: value}))
    assert exc.value.field == field


def test_validate_signals_does_not_raise():
    result = validate_signals({"playtimeByGenre": {}})
    assert not result.ok
    assert result.field is not None
    with pytest.raises(SignalValidationError):
        result.unwrap()
    assert validate_signals(make_signals()).unwrap().completion_rate == 0.1


def test_late_night_ratio_is_optional():
    signals = make_signals()
    del signals["lateNightRatio"]
    assert build_persona_snapshot(signals).confidence == pytest.approx(0.833, abs=1e-3)


def test_unexpected_failures_are_wrapped(monkeypatch):
    def boom(traits, mood=None):
        raise KeyError("template")

    monkeypatch.setattr(snapshot_module, "build_persona_narrative", boom)
    with pytest.raises(SnapshotBuildError) as exc:
        build_persona_snapshot(make_signals())
    assert isinstance(exc.value.__cause__, KeyError)
    assert str(exc.value).startswith("Failed to build persona snapshot")


def test_minimal_snapshot_and_confidence_helpers():
    snap = create_minimal_persona_snapshot(completionRate=0.9)
    assert snap.traits.archetype == Archetype.SPECIALIST
    assert snap.mood is None
    assert is_high_confidence_snapshot(snap)
    assert not is_high_confidence_snapshot(snap, threshold=0.9)


def test_snapshot_summary():
    snap = build_persona_snapshot(make_signals())
    assert get_snapshot_summary(snap) == "Achiever (Low, Burst) - no mood - 83% confidence"
