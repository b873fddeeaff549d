"""AI-advisory client and the enhanced recommendation wrapper.

The rule-based pick is always computed first. The advisory service is then
asked for a better match from the player's library; when it suggests an
owned catalog game that game is returned, otherwise the service's coaching
advice is appended to the rule-based reasoning.

Any advisory failure leaves the rule-based pick unchanged:

    AdvisoryClient  httpx client for the gaming-coach endpoints.
    Advisor         protocol the wrapper depends on; tests pass stubs.
"""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from typing import Any, Iterable, Optional, Protocol

import httpx

from domain.engine import PersonaEngine
from domain.models import EmotionalProfile, ScoredGame
from domain.recommender import HistoryInput, SessionInput, build_library
from domain.scoring import compute_match_score, generate_reasoning

logger = logging.getLogger(__name__)

RECOMMEND_PATH = "/api/ai/gaming-coach/recommend"
ADVICE_PATH = "/api/ai/gaming-coach/advice"
DEFAULT_CONFIDENCE = 0.8


class AdvisoryError(RuntimeError):
    """Raised when the advisory service cannot be reached or returns an error."""


class Advisor(Protocol):
    async def recommend(self, body: dict) -> dict: ...

    async def advice(self, body: dict) -> dict: ...


class AdvisoryClient:
    """Async HTTP client for the gaming-coach advisory service.

    Args:
        base_url: Base URL of the service, e.g. "http://localhost:3001".
        api_key:  Bearer token, or empty string if not required.
        timeout:  HTTP timeout in seconds.
    """

    def __init__(self, base_url: str, api_key: str = "", timeout: float = 30.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout

    @classmethod
    def from_env(cls) -> "AdvisoryClient":
        return cls(
            base_url=os.environ.get("GAMEPILOT_ADVISORY_URL", "http://localhost:3001"),
            api_key=os.environ.get("GAMEPILOT_ADVISORY_KEY", ""),
            timeout=float(os.environ.get("GAMEPILOT_ADVISORY_TIMEOUT", "30")),
        )

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def _post(self, path: str, body: dict) -> dict:
        url = f"{self._base_url}{path}"
        logger.debug("advisory call url=%s keys=%s", url, sorted(body))
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(url, json=body, headers=self._headers())
                resp.raise_for_status()
        except httpx.ConnectError as e:
            raise AdvisoryError(f"Cannot connect to advisory service at {self._base_url}") from e
        except httpx.HTTPStatusError as e:
            raise AdvisoryError(f"Advisory service returned HTTP {e.response.status_code}") from e
        except httpx.TimeoutException as e:
            raise AdvisoryError(f"Advisory service timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            raise AdvisoryError(f"Advisory request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise AdvisoryError("Advisory service returned invalid JSON") from e
        if not isinstance(data, dict):
            raise AdvisoryError("Unexpected response format from advisory service")
        return data

    async def recommend(self, body: dict) -> dict:
        return await self._post(RECOMMEND_PATH, body)

    async def advice(self, body: dict) -> dict:
        return await self._post(ADVICE_PATH, body)


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------

def build_recommend_body(
    engine: PersonaEngine, profile: EmotionalProfile, owned_games: Iterable[str], recent_games: Iterable[str]
) -> dict:
    owned_summary = [
        {
            "gameId": g.game_id,
            "gameName": g.game_name,
            "genres": list(g.genres),
            "difficulty": g.difficulty.value,
        }
        for g in engine.catalog.owned(tuple(owned_games))
    ]
    return {
        "emotionalProfile": profile.to_wire(),
        "ownedGames": owned_summary,
        "recentGames": list(recent_games),
        "availableTime": profile.available_time or 60,
    }


def build_advice_body(profile: EmotionalProfile, recent_sessions: list) -> dict:
    last = recent_sessions[-1] if recent_sessions else None
    return {
        "currentMood": profile.primary_need.value if profile.primary_need else "balanced",
        "recentSession": (
            {"difficulty": last.difficulty, "duration": last.duration, "frustration": last.frustration}
            if last else None
        ),
        "goals": [n.value for n in profile.emotional_needs],
        "constraints": [f"{profile.available_time or 60} minutes available"],
    }


# ---------------------------------------------------------------------------
# Enhanced recommendation
# ---------------------------------------------------------------------------

def _confidence(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value:
        return DEFAULT_CONFIDENCE
    return float(value)


async def get_ai_enhanced_recommendation(
    engine: PersonaEngine,
    profile: EmotionalProfile,
    advisor: Optional[Advisor],
    owned_games: Iterable[str] = (),
    recent_games: Iterable[str] = (),
    play_history: Iterable[HistoryInput] = (),
    recent_sessions: Iterable[SessionInput] = (),
    use_ai: bool = True,
) -> Optional[ScoredGame]:
    """Rule-based pick, optionally replaced or annotated by the advisory service."""
    library = build_library(owned_games, recent_games, play_history, recent_sessions)
    rule_based = engine.recommend(
        profile, library.owned_games, library.recent_games, library.play_history, library.recent_sessions
    )
    if not use_ai or advisor is None or rule_based is None:
        return rule_based

    try:
        suggestion = await advisor.recommend(
            build_recommend_body(engine, profile, library.owned_games, library.recent_games)
        )
    except Exception as e:
        logger.warning("AI recommendation failed, falling back to rule-based: %s", e)
        return rule_based

    if not isinstance(suggestion, dict):
        logger.warning("Ignoring AI recommendation of type %s; expected an object", type(suggestion).__name__)
        suggestion = {}
    name = suggestion.get("gameName")
    if isinstance(name, str) and name:
        game = engine.catalog.find_by_name(name)
        if game is not None and game.game_id in library.owned_games:
            score = compute_match_score(
                profile, game, library, engine.policies, total_override=_confidence(suggestion.get("confidence"))
            )
            reasoning = suggestion.get("reasoning")
            if not isinstance(reasoning, str) or not reasoning.strip():
                reasoning = generate_reasoning(profile, game, score)
            return ScoredGame(game=game, match_score=score, reasoning=reasoning)
        logger.warning("AI suggested %r which is not an owned catalog game; keeping rule-based pick", name)

    try:
        advice = await advisor.advice(build_advice_body(profile, list(library.recent_sessions)))
    except Exception as e:
        logger.warning("AI advice enhancement failed: %s", e)
        return rule_based

    text: Any = advice.get("advice") if isinstance(advice, dict) else None
    if isinstance(text, str) and text.strip():
        return replace(rule_based, reasoning=f"{rule_based.reasoning}\n\nAI Insight: {text.strip()}")
    return rule_based
