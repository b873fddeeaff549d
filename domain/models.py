"""
Domain Models for the GamePilot Persona Engine

These are pure data models with no I/O dependencies.
They define the core domain language: persona traits, moods, narratives,
emotional profiles and the game design-pattern catalog.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class Archetype(str, Enum):
    """Closed set of persona archetypes"""
    ACHIEVER = "Achiever"
    EXPLORER = "Explorer"
    SOCIALIZER = "Socializer"
    COMPETITOR = "Competitor"
    STRATEGIST = "Strategist"
    CREATIVE = "Creative"
    CASUAL = "Casual"
    SPECIALIST = "Specialist"


class Intensity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Pacing(str, Enum):
    """Preferred session rhythm"""
    BURST = "Burst"          # < 45 minutes
    FLOW = "Flow"            # 45-120 minutes
    MARATHON = "Marathon"    # > 120 minutes


class RiskProfile(str, Enum):
    COMFORT = "Comfort"
    BALANCED = "Balanced"
    EXPERIMENTAL = "Experimental"


class SocialStyle(str, Enum):
    SOLO = "Solo"
    COOP = "Coop"
    COMPETITIVE = "Competitive"


class DifficultyPreference(str, Enum):
    RELAXED = "Relaxed"
    NORMAL = "Normal"
    HARD = "Hard"
    BRUTAL = "Brutal"


class MoodId(str, Enum):
    """Moods reported by the mood-capture flow"""
    CHILL = "chill"
    STORY = "story"
    CREATIVE = "creative"
    ENERGETIC = "energetic"
    SOCIAL = "social"
    EXPLORATORY = "exploratory"
    COMPETITIVE = "competitive"
    FOCUSED = "focused"
    COZY = "cozy"
    NOSTALGIC = "nostalgic"


class NarrativeTone(str, Enum):
    CALM = "Calm"
    HYPED = "Hyped"
    COMPETITIVE = "Competitive"
    COMFORT = "Comfort"
    REFLECTIVE = "Reflective"


class EmotionalNeed(str, Enum):
    COMFORT = "comfort"
    ESCAPE = "escape"
    MASTERY = "mastery"
    CHAOS = "chaos"
    NOVELTY = "novelty"
    STORY_FLOW = "story_flow"


class SessionType(str, Enum):
    QUICK = "quick"            # <= 45 minutes
    FOCUSED = "focused"        # 1-2 hours
    IMMERSIVE = "immersive"    # 3+ hours
    MARATHON = "marathon"


class SocialAppetite(str, Enum):
    SOLO = "solo"
    COOP = "co-op"
    COMPETITIVE = "competitive"
    SOCIAL = "social"


class GameDifficulty(str, Enum):
    EASY = "easy"
    MODERATE = "moderate"
    HARD = "hard"
    CHALLENGING = "challenging"


# ---------------------------------------------------------------------------
# Inputs supplied by collaborators (validated)
# ---------------------------------------------------------------------------

class RawPlayerSignals(BaseModel):
    """Behavioural telemetry for one player, as produced by the aggregator.

    Field names follow the aggregator's camelCase wire shape; snake_case
    names are accepted as well.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    playtime_by_genre: Dict[str, float] = Field(alias="playtimeByGenre")
    average_session_length_minutes: float = Field(alias="averageSessionLengthMinutes", ge=0)
    sessions_per_week: float = Field(alias="sessionsPerWeek", ge=0)
    difficulty_preference: DifficultyPreference = Field(alias="difficultyPreference")
    multiplayer_ratio: float = Field(alias="multiplayerRatio", ge=0, le=1)
    late_night_ratio: Optional[float] = Field(default=None, alias="lateNightRatio", ge=0, le=1)
    completion_rate: float = Field(alias="completionRate", ge=0, le=1)

    @field_validator("playtime_by_genre", mode="before")
    @classmethod
    def _genre_hours(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            raise ValueError("must be a mapping of genre to hours")
        for genre, hours in v.items():
            if isinstance(hours, bool) or not isinstance(hours, (int, float)):
                raise ValueError(f"hours for genre {genre!r} must be a number")
            if hours < 0:
                raise ValueError(f"hours for genre {genre!r} must be non-negative")
        return v

    @field_validator(
        "average_session_length_minutes", "sessions_per_week",
        "multiplayer_ratio", "late_night_ratio", "completion_rate",
        mode="before",
    )
    @classmethod
    def _numbers_only(cls, v: Any) -> Any:
        # Reject strings/bools instead of letting pydantic coerce them
        if v is None:
            return v
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("must be a number")
        return v


class EmotionalProfile(BaseModel):
    """Momentary emotional/temporal profile supplied by the consumer."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    emotional_needs: Tuple[EmotionalNeed, ...] = Field(default=(), alias="emotionalNeeds")
    energy_level: int = Field(default=5, alias="energyLevel")
    cognitive_load: int = Field(default=5, alias="cognitiveLoad")
    tolerance_level: int = Field(default=5, alias="toleranceLevel")
    available_time: int = Field(default=60, alias="availableTime")
    session_type: SessionType = Field(default=SessionType.FOCUSED, alias="sessionType")
    social_appetite: SocialAppetite = Field(default=SocialAppetite.SOLO, alias="socialAppetite")

    @field_validator("emotional_needs", mode="before")
    @classmethod
    def _known_needs(cls, v: Any) -> Any:
        # Unrecognised needs are skipped, not rejected
        if not isinstance(v, (list, tuple)):
            return v
        known = {n.value for n in EmotionalNeed}
        return tuple(n for n in v if isinstance(n, str) and getattr(n, "value", n) in known)

    @field_validator("energy_level", "cognitive_load", "tolerance_level")
    @classmethod
    def _clamp_level(cls, v: int) -> int:
        return int(clamp(v, 1, 10))

    @field_validator("available_time")
    @classmethod
    def _clamp_time(cls, v: int) -> int:
        return max(0, v)

    @property
    def primary_need(self) -> Optional[EmotionalNeed]:
        return self.emotional_needs[0] if self.emotional_needs else None

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


_AXIS_FIELDS = (
    "pacing", "friction_level", "narrative_density", "mechanical_complexity",
    "reward_cadence", "agency_level", "sensory_intensity",
    "comfort_alignment", "escape_alignment", "mastery_alignment",
    "chaos_alignment", "novelty_alignment", "story_flow_alignment",
)


class GameDesignPattern(BaseModel):
    """Catalog entry describing a game's design axes and emotional alignments.

    All axes are on a 0-10 scale; time_to_fun and avg_playtime are minutes.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    game_id: str = Field(alias="gameId")
    game_name: str = Field(alias="gameName")

    # Design pattern axes
    pacing: float
    friction_level: float = Field(alias="frictionLevel")
    narrative_density: float = Field(alias="narrativeDensity")
    mechanical_complexity: float = Field(alias="mechanicalComplexity")
    reward_cadence: float = Field(alias="rewardCadence")
    agency_level: float = Field(alias="agencyLevel")
    sensory_intensity: float = Field(alias="sensoryIntensity")
    time_to_fun: float = Field(alias="timeToFun")

    # Emotional alignments
    comfort_alignment: float = Field(alias="comfortAlignment")
    escape_alignment: float = Field(alias="escapeAlignment")
    mastery_alignment: float = Field(alias="masteryAlignment")
    chaos_alignment: float = Field(alias="chaosAlignment")
    novelty_alignment: float = Field(alias="noveltyAlignment")
    story_flow_alignment: float = Field(alias="storyFlowAlignment")

    # Metadata
    genres: Tuple[str, ...] = ()
    platforms: Tuple[str, ...] = ()
    avg_playtime: float = Field(default=0, alias="avgPlaytime")
    difficulty: GameDifficulty = GameDifficulty.MODERATE

    @field_validator(*_AXIS_FIELDS)
    @classmethod
    def _clamp_axis(cls, v: float) -> float:
        return clamp(v, 0, 10)

    @field_validator("time_to_fun", "avg_playtime")
    @classmethod
    def _clamp_minutes(cls, v: float) -> float:
        return max(0, v)

    def alignment_for(self, need: EmotionalNeed) -> float:
        return getattr(self, f"{need.value}_alignment")


# ---------------------------------------------------------------------------
# Derived records (immutable engine outputs)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PersonaTraits:
    """Trait vector derived from raw signals"""
    archetype: Archetype
    intensity: Intensity
    pacing: Pacing
    risk_profile: RiskProfile
    social_style: SocialStyle
    confidence: float  # 0.3..1.0


@dataclass(frozen=True)
class UserMoodEntry:
    """Mood record as captured by the mood-capture flow"""
    mood_id: str
    intensity: int
    timestamp: datetime
    context: Optional[str] = None
    game_id: Optional[str] = None


@dataclass(frozen=True)
class MoodState:
    mood_id: str
    intensity: int  # 1..10
    timestamp: datetime


@dataclass(frozen=True)
class PersonaMoodContext:
    traits: PersonaTraits
    mood: Optional[MoodState] = None


@dataclass(frozen=True)
class PersonaNarrativeOutput:
    tone: NarrativeTone
    summary: str


@dataclass(frozen=True)
class PersonaSnapshot:
    """Fully resolved output of the inference half"""
    traits: PersonaTraits
    mood: Optional[MoodState]
    narrative: PersonaNarrativeOutput
    confidence: float


@dataclass(frozen=True)
class PlayHistoryEntry:
    game_id: str
    sessions: int
    last_played: Optional[datetime] = None


@dataclass(frozen=True)
class RecentSession:
    difficulty: str  # easy | normal | hard
    duration: float  # minutes
    frustration: float  # 0..10


@dataclass(frozen=True)
class MatchScore:
    emotional_score: float
    time_fit_score: float
    availability_score: float
    novelty_score: float
    burnout_risk_score: float
    total_score: float


@dataclass(frozen=True)
class ScoredGame:
    """Catalog entry with its match score and reasoning attached"""
    game: GameDesignPattern
    match_score: MatchScore
    reasoning: str

    @property
    def game_id(self) -> str:
        return self.game.game_id

    @property
    def game_name(self) -> str:
        return self.game.game_name

    def __str__(self) -> str:
        return f"{self.game_name} ({self.match_score.total_score:.2f})"


@dataclass(frozen=True)
class PlayerLibrary:
    """Ownership and play history used by the match scorer"""
    owned_games: Tuple[str, ...] = ()
    recent_games: Tuple[str, ...] = ()
    play_history: Tuple[PlayHistoryEntry, ...] = ()
    recent_sessions: Tuple[RecentSession, ...] = ()

    @property
    def owns_games(self) -> bool:
        return len(self.owned_games) > 0

    def history_for(self, game_id: str) -> Optional[PlayHistoryEntry]:
        for entry in self.play_history:
            if entry.game_id == game_id:
                return entry
        return None
