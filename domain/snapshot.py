"""
Snapshot orchestrator: validates raw signals, then runs trait extraction,
mood mapping and narrative composition in that order.

This is the only path in the engine that raises on bad input.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional, Union

from .models import PersonaSnapshot, RawPlayerSignals, UserMoodEntry
from .mood import map_mood_to_persona_context
from .narrative import build_persona_narrative
from .traits import derive_persona_traits
from .validators import SignalValidationError, validate_signals

logger = logging.getLogger(__name__)

HIGH_CONFIDENCE = 0.7

DEFAULT_SIGNALS = {
    "playtimeByGenre": {},
    "averageSessionLengthMinutes": 60,
    "sessionsPerWeek": 3,
    "difficultyPreference": "Normal",
    "multiplayerRatio": 0.3,
    "lateNightRatio": 0.2,
    "completionRate": 0.5,
}


class SnapshotBuildError(RuntimeError):
    """Raised when snapshot assembly fails for a reason other than bad signals."""


MoodInput = Union[UserMoodEntry, Mapping[str, Any], None]


def _coerce_mood_entry(entry: MoodInput) -> Optional[UserMoodEntry]:
    if entry is None or isinstance(entry, UserMoodEntry):
        return entry
    stamp = entry.get("timestamp")
    if isinstance(stamp, str):
        stamp = datetime.fromisoformat(stamp.replace("Z", "+00:00"))
    return UserMoodEntry(
        mood_id=entry.get("moodId") or entry.get("mood_id"),
        intensity=entry.get("intensity", 5),
        timestamp=stamp,
        context=entry.get("context"),
        game_id=entry.get("gameId") or entry.get("game_id"),
    )


def build_persona_snapshot(
    signals: Union[RawPlayerSignals, Mapping[str, Any]],
    mood_entry: MoodInput = None,
) -> PersonaSnapshot:
    """Build a complete persona snapshot from raw signals and an optional mood.

    Raises SignalValidationError naming the offending field when the signals
    are missing a field or out of range.
    """
    if signals is None:
        raise SignalValidationError("signals", "required")
    result = validate_signals(signals)
    if not result.ok:
        raise SignalValidationError(result.field or "signals", result.reason or "invalid")
    try:
        traits = derive_persona_traits(result.signals)
        context = map_mood_to_persona_context(traits, _coerce_mood_entry(mood_entry))
        narrative = build_persona_narrative(context.traits, context.mood)
    except Exception as e:
        raise SnapshotBuildError(f"Failed to build persona snapshot: {e}") from e
    logger.debug(
        "persona snapshot archetype=%s tone=%s confidence=%.2f",
        traits.archetype.value, narrative.tone.value, traits.confidence,
    )
    return PersonaSnapshot(
        traits=traits,
        mood=context.mood,
        narrative=narrative,
        confidence=traits.confidence,
    )


def create_minimal_persona_snapshot(**overrides: Any) -> PersonaSnapshot:
    """Snapshot from default signals with the given camelCase overrides; no mood."""
    signals = dict(DEFAULT_SIGNALS)
    signals.update(overrides)
    return build_persona_snapshot(signals, None)


def is_high_confidence_snapshot(snapshot: PersonaSnapshot, threshold: float = HIGH_CONFIDENCE) -> bool:
    return snapshot.confidence >= threshold


def get_snapshot_summary(snapshot: PersonaSnapshot) -> str:
    traits = snapshot.traits
    mood_label = snapshot.mood.mood_id if snapshot.mood else "no mood"
    confidence = round(snapshot.confidence * 100)
    return (
        f"{traits.archetype.value} ({traits.intensity.value}, {traits.pacing.value})"
        f" - {mood_label} - {confidence}% confidence"
    )
