"""
Match scorer: rates one catalog game against one emotional profile.

Five independent sub-scores are combined by ownership-dependent weights:
- emotional fit   weighted average of need alignments and energy/cognitive/tolerance deviation terms
- time fit        time-to-fun against the session budget, 0..1
- availability    1.0 owned, 0.6 otherwise
- novelty         freshness given play history, 0..1
- burnout risk    frustration/boredom heuristics over recent sessions, 0..1

Scoring is pure: the same inputs always produce the same MatchScore.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .models import (
    EmotionalNeed, EmotionalProfile, GameDesignPattern, MatchScore,
    PlayerLibrary, ScoredGame, SessionType, SocialAppetite,
)
from .policies import ScoringPolicies

NEED_WEIGHT = 10
DEVIATION_WEIGHT = 20
ENERGY_PENALTY = 2.0
COGNITIVE_PENALTY = 3.0
TOLERANCE_PENALTY = 2.5
COGNITIVE_FIT_RANGE = 2

DEFAULT_POLICIES = ScoringPolicies()


@dataclass(frozen=True)
class LevelTier:
    name: str  # low | moderate | high
    descriptor: str
    target: int


ENERGY_TIERS = (
    LevelTier("low", "low energy", 3),
    LevelTier("moderate", "moderate energy", 6),
    LevelTier("high", "high energy", 8),
)
COGNITIVE_TIERS = (
    LevelTier("low", "overwhelmed", 3),
    LevelTier("moderate", "focused", 6),
    LevelTier("high", "sharp", 8),
)
TOLERANCE_TIERS = (
    LevelTier("low", "gentle", 3),
    LevelTier("moderate", "balanced", 6),
    LevelTier("high", "challenging", 8),
)


def _tier(level: int, tiers) -> LevelTier:
    if level <= 3:
        return tiers[0]
    if level <= 7:
        return tiers[1]
    return tiers[2]


def energy_preference(energy_level: int) -> LevelTier:
    return _tier(energy_level, ENERGY_TIERS)


def cognitive_preference(cognitive_load: int) -> LevelTier:
    return _tier(cognitive_load, COGNITIVE_TIERS)


def tolerance_preference(tolerance_level: int) -> LevelTier:
    return _tier(tolerance_level, TOLERANCE_TIERS)


def calculate_emotional_match(profile: EmotionalProfile, game: GameDesignPattern) -> float:
    total = 0.0
    weight = 0.0
    for need in profile.emotional_needs:
        total += game.alignment_for(need) * 10
        weight += NEED_WEIGHT

    deviations = (
        (game.pacing, energy_preference(profile.energy_level).target, ENERGY_PENALTY),
        (game.mechanical_complexity, cognitive_preference(profile.cognitive_load).target, COGNITIVE_PENALTY),
        (game.friction_level, tolerance_preference(profile.tolerance_level).target, TOLERANCE_PENALTY),
    )
    for actual, target, penalty in deviations:
        total += max(0.0, 100 - abs(actual - target) * penalty)
        weight += DEVIATION_WEIGHT

    return round(total / weight, 2) if weight > 0 else 0.0


def calculate_time_fit(available_time: float, game: GameDesignPattern, session_type: SessionType) -> float:
    ttf = game.time_to_fun
    if session_type == SessionType.QUICK and available_time <= 45:
        if ttf <= 15:
            return 1.0
        if ttf <= 30:
            return 0.7
        return 0.3
    if session_type == SessionType.FOCUSED and available_time <= 120:
        if ttf <= available_time / 3:
            return 1.0
        if ttf <= available_time / 2:
            return 0.8
        return 0.5
    if session_type == SessionType.IMMERSIVE:
        if ttf <= 45:
            return 1.0
        if ttf <= 90:
            return 0.8
        return 0.6
    if session_type == SessionType.MARATHON:
        return 0.9
    # Quick/focused sessions with a larger budget than their type implies
    if ttf <= available_time * 0.3:
        return 1.0
    if ttf <= available_time * 0.5:
        return 0.8
    if ttf <= available_time:
        return 0.6
    return 0.3


def calculate_availability(game_id: str, library: PlayerLibrary) -> float:
    return 1.0 if game_id in library.owned_games else 0.6


def calculate_novelty(game_id: str, library: PlayerLibrary) -> float:
    entry = library.history_for(game_id)
    if entry is None:
        return 0.8
    if game_id in library.recent_games:
        return 0.3
    if entry.sessions > 10:
        return 0.4
    if entry.sessions > 5:
        return 0.6
    return 0.7


def calculate_burnout_risk(game: GameDesignPattern, library: PlayerLibrary) -> float:
    sessions = library.recent_sessions
    high_friction = sum(1 for s in sessions if s.difficulty == "hard" and s.frustration > 7)
    if high_friction > 2 and game.friction_level > 7:
        return 0.3
    if high_friction > 0 and game.friction_level > 5:
        return 0.6
    # Long, frustration-free sessions lately: low-stimulation games risk boredom
    low_stim = sum(1 for s in sessions if s.frustration < 3 and s.duration > 120)
    if low_stim > 3 and game.sensory_intensity < 5:
        return 0.4
    return 0.9


def combine_scores(
    emotional: float,
    time_fit: float,
    availability: float,
    novelty: float,
    burnout: float,
    owns_games: bool,
    policies: ScoringPolicies = DEFAULT_POLICIES,
) -> MatchScore:
    total = (
        emotional * policies.emotional_weight(owns_games)
        + time_fit * policies.timeFitWeight
        + availability * policies.availability_weight(owns_games)
        + novelty * policies.noveltyWeight
        + burnout * policies.burnoutWeight
    )
    return MatchScore(
        emotional_score=emotional,
        time_fit_score=time_fit,
        availability_score=availability,
        novelty_score=novelty,
        burnout_risk_score=burnout,
        total_score=total,
    )


def compute_match_score(
    profile: EmotionalProfile,
    game: GameDesignPattern,
    library: PlayerLibrary,
    policies: ScoringPolicies = DEFAULT_POLICIES,
    total_override: Optional[float] = None,
) -> MatchScore:
    score = combine_scores(
        calculate_emotional_match(profile, game),
        calculate_time_fit(profile.available_time, game, profile.session_type),
        calculate_availability(game.game_id, library),
        calculate_novelty(game.game_id, library),
        calculate_burnout_risk(game, library),
        library.owns_games,
        policies,
    )
    if total_override is None:
        return score
    return MatchScore(
        emotional_score=score.emotional_score,
        time_fit_score=score.time_fit_score,
        availability_score=score.availability_score,
        novelty_score=score.novelty_score,
        burnout_risk_score=score.burnout_risk_score,
        total_score=total_override,
    )


def _need_label(need: Optional[EmotionalNeed]) -> str:
    if need is None:
        return "balance"
    return need.value.replace("_", " ")


def generate_reasoning(profile: EmotionalProfile, game: GameDesignPattern, score: MatchScore) -> str:
    energy = energy_preference(profile.energy_level)
    cognitive = cognitive_preference(profile.cognitive_load)
    tolerance = tolerance_preference(profile.tolerance_level)
    need = profile.primary_need
    label = _need_label(need)
    alignment = game.alignment_for(need) if need is not None else 0

    parts = [f"I see you're feeling {energy.descriptor} and craving {label}."]
    if score.emotional_score > 0.8:
        parts.append(
            f"{game.game_name} is perfect for this - it delivers the {label} you need "
            f"({alignment:g}/10) with pacing that suits your {energy.descriptor}."
        )
    elif score.emotional_score > 0.6:
        parts.append(
            f"{game.game_name} should work well - it provides good {label} "
            f"with {tolerance.descriptor} challenge that won't overwhelm you."
        )
    else:
        parts.append(
            f"{game.game_name} might be a good fit despite some mismatches - "
            f"the {label} elements are strong even if the pacing isn't perfect."
        )
    if abs(game.mechanical_complexity - cognitive.target) <= COGNITIVE_FIT_RANGE:
        parts.append(f"Its mechanics fit how {cognitive.descriptor} you feel right now.")

    if energy.name == "low" and need == EmotionalNeed.COMFORT:
        parts.append("Perfect for winding down - this game respects your current energy level.")
    if need == EmotionalNeed.MASTERY and energy.name == "high":
        parts.append("Great for channeling your motivation into meaningful progress.")
    if profile.social_appetite == SocialAppetite.SOLO and energy.target < 6:
        parts.append("Ideal solo experience with gentle, contemplative pacing.")
    return " ".join(parts)


def score_game(
    profile: EmotionalProfile,
    game: GameDesignPattern,
    library: PlayerLibrary,
    policies: ScoringPolicies = DEFAULT_POLICIES,
) -> ScoredGame:
    score = compute_match_score(profile, game, library, policies)
    return ScoredGame(game=game, match_score=score, reasoning=generate_reasoning(profile, game, score))

