"""
Engine policy model with defaults; kept pure (no file IO here).
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringPolicies:
    version: str = "1.0.0"
    # Total-score weights; the owned/unowned pairs switch on library ownership
    emotionalWeightOwned: float = 0.35
    emotionalWeightUnowned: float = 0.40
    timeFitWeight: float = 0.25
    availabilityWeightOwned: float = 0.35
    availabilityWeightUnowned: float = 0.15
    noveltyWeight: float = 0.03
    burnoutWeight: float = 0.02
    alternativeThreshold: float = 0.6
    alternativeCount: int = 3
    highConfidenceThreshold: float = 0.7
    moodRecencyHours: float = 24.0

    def emotional_weight(self, owns_games: bool) -> float:
        return self.emotionalWeightOwned if owns_games else self.emotionalWeightUnowned

    def availability_weight(self, owns_games: bool) -> float:
        return self.availabilityWeightOwned if owns_games else self.availabilityWeightUnowned
