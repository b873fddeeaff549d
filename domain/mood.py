from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from .models import Intensity, MoodState, PersonaMoodContext, PersonaTraits, UserMoodEntry


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_mood_state(mood_id: str, intensity: int, timestamp: Optional[datetime] = None) -> MoodState:
    """Build a MoodState with intensity clamped to 1..10."""
    value = max(1, min(10, int(round(intensity))))
    return MoodState(mood_id=mood_id, intensity=value, timestamp=timestamp or _now())


def map_mood_to_persona_context(
    traits: PersonaTraits, mood_entry: Optional[UserMoodEntry] = None
) -> PersonaMoodContext:
    """Attach the optional mood to the traits; a missing mood means no mood signal."""
    if mood_entry is None:
        return PersonaMoodContext(traits=traits, mood=None)
    mood = create_mood_state(mood_entry.mood_id, mood_entry.intensity, mood_entry.timestamp)
    return PersonaMoodContext(traits=traits, mood=mood)


def is_mood_recent(mood: MoodState, max_age_hours: float = 24.0, now: Optional[datetime] = None) -> bool:
    current = now or _now()
    stamp = mood.timestamp
    # Naive timestamps are treated as UTC
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)
    return current - stamp <= timedelta(hours=max_age_hours)


def intensity_category(intensity: int) -> Intensity:
    if intensity <= 3:
        return Intensity.LOW
    if intensity <= 7:
        return Intensity.MEDIUM
    return Intensity.HIGH
