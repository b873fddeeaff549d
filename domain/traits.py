"""
Trait extraction: maps RawPlayerSignals -> PersonaTraits with simple thresholds.

Archetype precedence (first match wins):
- completion rate > 0.7                        -> Specialist
- strategy hours share > 0.4                   -> Strategist
- multiplayer ratio > 0.6                      -> Socializer
- adventure + open-world hours share > 0.4     -> Explorer
- Brutal difficulty                            -> Competitor
- otherwise                                    -> Achiever

Genre shares are taken against total logged hours across every genre.
"""
from __future__ import annotations

from typing import Dict, Iterable

from .models import (
    Archetype, DifficultyPreference, Intensity, Pacing, PersonaTraits,
    RawPlayerSignals, RiskProfile, SocialStyle, clamp,
)

MIN_CONFIDENCE = 0.3
MAX_CONFIDENCE = 1.0

STRATEGY_GENRES = ("strategy",)
EXPLORATION_GENRES = ("adventure", "open-world")

_RISK_BY_DIFFICULTY: Dict[DifficultyPreference, RiskProfile] = {
    DifficultyPreference.RELAXED: RiskProfile.COMFORT,
    DifficultyPreference.NORMAL: RiskProfile.BALANCED,
    DifficultyPreference.HARD: RiskProfile.EXPERIMENTAL,
    DifficultyPreference.BRUTAL: RiskProfile.EXPERIMENTAL,
}


def _genre_key(name: str) -> str:
    return name.strip().lower().replace("_", "-").replace(" ", "-")


def _genre_share(playtime: Dict[str, float], genres: Iterable[str]) -> float:
    total = sum(playtime.values())
    if total <= 0:
        return 0.0
    wanted = {_genre_key(g) for g in genres}
    hours = sum(h for g, h in playtime.items() if _genre_key(g) in wanted)
    return hours / total


def classify_archetype(signals: RawPlayerSignals) -> Archetype:
    if signals.completion_rate > 0.7:
        return Archetype.SPECIALIST
    if _genre_share(signals.playtime_by_genre, STRATEGY_GENRES) > 0.4:
        return Archetype.STRATEGIST
    if signals.multiplayer_ratio > 0.6:
        return Archetype.SOCIALIZER
    if _genre_share(signals.playtime_by_genre, EXPLORATION_GENRES) > 0.4:
        return Archetype.EXPLORER
    if signals.difficulty_preference == DifficultyPreference.BRUTAL:
        return Archetype.COMPETITOR
    return Archetype.ACHIEVER


def classify_intensity(signals: RawPlayerSignals) -> Intensity:
    if signals.sessions_per_week >= 5 or signals.average_session_length_minutes >= 120:
        return Intensity.HIGH
    if signals.sessions_per_week <= 2 and signals.average_session_length_minutes < 60:
        return Intensity.LOW
    return Intensity.MEDIUM


def classify_pacing(signals: RawPlayerSignals) -> Pacing:
    minutes = signals.average_session_length_minutes
    if minutes < 45:
        return Pacing.BURST
    if minutes > 120:
        return Pacing.MARATHON
    return Pacing.FLOW


def classify_social_style(signals: RawPlayerSignals) -> SocialStyle:
    if signals.multiplayer_ratio < 0.2:
        return SocialStyle.SOLO
    if signals.multiplayer_ratio > 0.7:
        return SocialStyle.COMPETITIVE
    return SocialStyle.COOP


def signal_confidence(signals: RawPlayerSignals) -> float:
    """Share of the six core signals that carry data, clamped to 0.3..1.0."""
    present = [
        bool(signals.playtime_by_genre),
        signals.average_session_length_minutes is not None,
        signals.sessions_per_week is not None,
        signals.difficulty_preference is not None,
        signals.multiplayer_ratio is not None,
        signals.completion_rate is not None,
    ]
    ratio = sum(present) / len(present)
    return round(clamp(ratio, MIN_CONFIDENCE, MAX_CONFIDENCE), 3)


def derive_persona_traits(signals: RawPlayerSignals) -> PersonaTraits:
    return PersonaTraits(
        archetype=classify_archetype(signals),
        intensity=classify_intensity(signals),
        pacing=classify_pacing(signals),
        risk_profile=_RISK_BY_DIFFICULTY[signals.difficulty_preference],
        social_style=classify_social_style(signals),
        confidence=signal_confidence(signals),
    )
