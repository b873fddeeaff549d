"""
PersonaEngine: explicit engine value bundling policies and the catalog.

Callers construct one and pass it where needed; the engine holds no
per-request state, so a single instance can serve concurrent callers.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Union

from .catalog import Catalog
from .models import (
    EmotionalProfile, GameDesignPattern, MoodState, PersonaSnapshot, RawPlayerSignals, ScoredGame,
)
from .mood import is_mood_recent
from .policies import ScoringPolicies
from .recommender import (
    HistoryInput, SessionInput, build_library, select_alternatives, select_primary,
)
from .scoring import score_game
from .snapshot import MoodInput, build_persona_snapshot, is_high_confidence_snapshot


@dataclass(frozen=True)
class PersonaEngine:
    catalog: Catalog = field(default_factory=Catalog)
    policies: ScoringPolicies = field(default_factory=ScoringPolicies)

    def build_snapshot(
        self, signals: Union[RawPlayerSignals, Mapping[str, Any]], mood_entry: MoodInput = None
    ) -> PersonaSnapshot:
        return build_persona_snapshot(signals, mood_entry)

    def is_high_confidence(self, snapshot: PersonaSnapshot) -> bool:
        return is_high_confidence_snapshot(snapshot, self.policies.highConfidenceThreshold)

    def is_mood_recent(self, mood: MoodState, now: Optional[datetime] = None) -> bool:
        return is_mood_recent(mood, self.policies.moodRecencyHours, now)

    def score(
        self,
        profile: EmotionalProfile,
        game: GameDesignPattern,
        owned_games: Iterable[str] = (),
        recent_games: Iterable[str] = (),
        play_history: Iterable[HistoryInput] = (),
        recent_sessions: Iterable[SessionInput] = (),
    ) -> ScoredGame:
        library = build_library(owned_games, recent_games, play_history, recent_sessions)
        return score_game(profile, game, library, self.policies)

    def recommend(
        self,
        profile: EmotionalProfile,
        owned_games: Iterable[str] = (),
        recent_games: Iterable[str] = (),
        play_history: Iterable[HistoryInput] = (),
        recent_sessions: Iterable[SessionInput] = (),
    ) -> Optional[ScoredGame]:
        library = build_library(owned_games, recent_games, play_history, recent_sessions)
        return select_primary(profile, self.catalog, library, self.policies)

    def alternatives(
        self,
        profile: EmotionalProfile,
        primary_game: Union[ScoredGame, GameDesignPattern, str],
        count: Optional[int] = None,
        owned_games: Iterable[str] = (),
        recent_games: Iterable[str] = (),
        play_history: Iterable[HistoryInput] = (),
        recent_sessions: Iterable[SessionInput] = (),
    ) -> List[ScoredGame]:
        primary_id = primary_game if isinstance(primary_game, str) else primary_game.game_id
        library = build_library(owned_games, recent_games, play_history, recent_sessions)
        return select_alternatives(profile, self.catalog, library, primary_id, count, self.policies)
