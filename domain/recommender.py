"""
Recommendation selector: picks the primary game (argmax of total score) and
a filtered, sorted list of alternatives from the candidate set.

Candidate set: when the player owns games that appear in the catalog, only
those are scored; otherwise the whole catalog is.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from .catalog import Catalog
from .models import (
    EmotionalProfile, GameDesignPattern, PlayerLibrary, PlayHistoryEntry,
    RecentSession, ScoredGame,
)
from .policies import ScoringPolicies
from .scoring import DEFAULT_POLICIES, score_game

logger = logging.getLogger(__name__)

HistoryInput = Union[PlayHistoryEntry, Mapping[str, Any]]
SessionInput = Union[RecentSession, Mapping[str, Any]]


def _as_history(item: HistoryInput) -> PlayHistoryEntry:
    if isinstance(item, PlayHistoryEntry):
        return item
    return PlayHistoryEntry(
        game_id=item.get("gameId") or item.get("game_id"),
        sessions=int(item.get("sessions", 0)),
        last_played=item.get("lastPlayed") or item.get("last_played"),
    )


def _as_session(item: SessionInput) -> RecentSession:
    if isinstance(item, RecentSession):
        return item
    return RecentSession(
        difficulty=str(item.get("difficulty", "")),
        duration=float(item.get("duration", 0)),
        frustration=float(item.get("frustration", 0)),
    )


def build_library(
    owned_games: Iterable[str] = (),
    recent_games: Iterable[str] = (),
    play_history: Iterable[HistoryInput] = (),
    recent_sessions: Iterable[SessionInput] = (),
) -> PlayerLibrary:
    return PlayerLibrary(
        owned_games=tuple(owned_games),
        recent_games=tuple(recent_games),
        play_history=tuple(_as_history(h) for h in play_history),
        recent_sessions=tuple(_as_session(s) for s in recent_sessions),
    )


def candidate_games(
    catalog: Catalog, library: PlayerLibrary, exclude_id: Optional[str] = None
) -> Tuple[GameDesignPattern, ...]:
    games: Tuple[GameDesignPattern, ...] = catalog.games
    if library.owns_games:
        owned = tuple(g for g in catalog.owned(library.owned_games) if g.game_id != exclude_id)
        if owned:
            games = owned
    if exclude_id is not None:
        games = tuple(g for g in games if g.game_id != exclude_id)
    return games


def select_primary(
    profile: EmotionalProfile,
    catalog: Catalog,
    library: PlayerLibrary,
    policies: ScoringPolicies = DEFAULT_POLICIES,
) -> Optional[ScoredGame]:
    best: Optional[ScoredGame] = None
    best_score = 0.0
    candidates = candidate_games(catalog, library)
    for game in candidates:
        scored = score_game(profile, game, library, policies)
        # Strictly greater keeps the first-seen game on ties
        if scored.match_score.total_score > best_score:
            best = scored
            best_score = scored.match_score.total_score
    logger.debug(
        "primary pick candidates=%d game=%s score=%.3f",
        len(candidates), best.game_id if best else None, best_score,
    )
    return best


def select_alternatives(
    profile: EmotionalProfile,
    catalog: Catalog,
    library: PlayerLibrary,
    primary_id: str,
    count: Optional[int] = None,
    policies: ScoringPolicies = DEFAULT_POLICIES,
) -> List[ScoredGame]:
    limit = policies.alternativeCount if count is None else count
    scored = [
        score_game(profile, game, library, policies)
        for game in candidate_games(catalog, library, exclude_id=primary_id)
    ]
    keep = [s for s in scored if s.match_score.total_score > policies.alternativeThreshold]
    keep.sort(key=lambda s: s.match_score.total_score, reverse=True)
    return keep[:max(0, limit)]


def get_personalized_recommendation(
    profile: EmotionalProfile,
    catalog: Catalog,
    owned_games: Iterable[str] = (),
    recent_games: Iterable[str] = (),
    play_history: Iterable[HistoryInput] = (),
    recent_sessions: Iterable[SessionInput] = (),
    policies: ScoringPolicies = DEFAULT_POLICIES,
) -> Optional[ScoredGame]:
    library = build_library(owned_games, recent_games, play_history, recent_sessions)
    return select_primary(profile, catalog, library, policies)


def get_alternative_recommendations(
    profile: EmotionalProfile,
    catalog: Catalog,
    primary_game: Union[ScoredGame, GameDesignPattern, str],
    count: Optional[int] = None,
    owned_games: Iterable[str] = (),
    recent_games: Iterable[str] = (),
    play_history: Iterable[HistoryInput] = (),
    recent_sessions: Iterable[SessionInput] = (),
    policies: ScoringPolicies = DEFAULT_POLICIES,
) -> List[ScoredGame]:
    primary_id = primary_game if isinstance(primary_game, str) else primary_game.game_id
    library = build_library(owned_games, recent_games, play_history, recent_sessions)
    return select_alternatives(profile, catalog, library, primary_id, count, policies)
