"""
Narrative composer: picks a tone for the snapshot and assembles a short
summary sentence from fixed descriptor tables.

Tone rules:
- no mood                            -> Reflective
- chill / story / creative           -> Calm
- energetic / social / exploratory   -> Hyped
- competitive / focused              -> Competitive
- anything else                      -> Comfort

Unknown ids never fail; they fall back to generic descriptors.
"""
from __future__ import annotations

from typing import Dict, FrozenSet, Optional

from .models import (
    Archetype, MoodId, MoodState, NarrativeTone, Pacing,
    PersonaNarrativeOutput, PersonaTraits, RiskProfile,
)

CALM_MOODS: FrozenSet[str] = frozenset({MoodId.CHILL.value, MoodId.STORY.value, MoodId.CREATIVE.value})
HYPED_MOODS: FrozenSet[str] = frozenset({MoodId.ENERGETIC.value, MoodId.SOCIAL.value, MoodId.EXPLORATORY.value})
COMPETITIVE_MOODS: FrozenSet[str] = frozenset({MoodId.COMPETITIVE.value, MoodId.FOCUSED.value})

ARCHETYPE_DESCRIPTORS: Dict[Archetype, str] = {
    Archetype.ACHIEVER: "goal-driven achiever",
    Archetype.EXPLORER: "curious explorer",
    Archetype.SOCIALIZER: "social connector",
    Archetype.COMPETITOR: "fierce competitor",
    Archetype.STRATEGIST: "tactical strategist",
    Archetype.CREATIVE: "creative builder",
    Archetype.CASUAL: "laid-back player",
    Archetype.SPECIALIST: "dedicated specialist",
}

ARCHETYPE_DESCRIPTIONS: Dict[Archetype, str] = {
    Archetype.ACHIEVER: "You thrive on completing challenges and earning rewards",
    Archetype.EXPLORER: "You love discovering new worlds and hidden secrets",
    Archetype.SOCIALIZER: "You enjoy playing with others and building communities",
    Archetype.COMPETITOR: "You seek victory and excel in competitive gameplay",
    Archetype.STRATEGIST: "You excel at planning and tactical decision-making",
    Archetype.CREATIVE: "You enjoy building, creating, and expressing yourself",
    Archetype.CASUAL: "You prefer relaxed, stress-free gaming experiences",
    Archetype.SPECIALIST: "You focus on mastering specific genres or games",
}

PACING_DESCRIPTORS: Dict[Pacing, str] = {
    Pacing.BURST: "short, punchy",
    Pacing.FLOW: "steady, flowing",
    Pacing.MARATHON: "long, immersive",
}

RISK_DESCRIPTORS: Dict[RiskProfile, str] = {
    RiskProfile.COMFORT: "comfortable, familiar",
    RiskProfile.BALANCED: "balanced",
    RiskProfile.EXPERIMENTAL: "bold, experimental",
}

MOOD_DESCRIPTORS: Dict[str, str] = {
    MoodId.CHILL.value: "relaxed",
    MoodId.STORY.value: "in the mood for a good story",
    MoodId.CREATIVE.value: "creative",
    MoodId.ENERGETIC.value: "energized",
    MoodId.SOCIAL.value: "social",
    MoodId.EXPLORATORY.value: "curious",
    MoodId.COMPETITIVE.value: "competitive",
    MoodId.FOCUSED.value: "focused",
    MoodId.COZY.value: "cozy",
    MoodId.NOSTALGIC.value: "nostalgic",
}

GENERIC_ARCHETYPE = "versatile player"
GENERIC_PACING = "moderate"
GENERIC_RISK = "thoughtful"
GENERIC_MOOD = "open to anything"

WITH_MOOD_TEMPLATE = (
    "You're a {archetype} who prefers {pacing} sessions. "
    "Currently feeling {mood}, you lean toward {risk} choices."
)
WITHOUT_MOOD_TEMPLATE = (
    "You're a {archetype} who thrives in {pacing} sessions with a {risk} approach to gaming."
)


def select_tone(mood: Optional[MoodState]) -> NarrativeTone:
    if mood is None:
        return NarrativeTone.REFLECTIVE
    mood_id = str(getattr(mood.mood_id, "value", mood.mood_id)).lower()
    if mood_id in CALM_MOODS:
        return NarrativeTone.CALM
    if mood_id in HYPED_MOODS:
        return NarrativeTone.HYPED
    if mood_id in COMPETITIVE_MOODS:
        return NarrativeTone.COMPETITIVE
    return NarrativeTone.COMFORT


def describe_mood(mood: MoodState) -> str:
    mood_id = str(getattr(mood.mood_id, "value", mood.mood_id)).lower()
    return MOOD_DESCRIPTORS.get(mood_id, GENERIC_MOOD)


def describe_archetype(archetype: Archetype) -> str:
    return ARCHETYPE_DESCRIPTIONS.get(archetype, "Your unique gaming style")


def compose_summary(traits: PersonaTraits, mood: Optional[MoodState]) -> str:
    parts = {
        "archetype": ARCHETYPE_DESCRIPTORS.get(traits.archetype, GENERIC_ARCHETYPE),
        "pacing": PACING_DESCRIPTORS.get(traits.pacing, GENERIC_PACING),
        "risk": RISK_DESCRIPTORS.get(traits.risk_profile, GENERIC_RISK),
    }
    if mood is None:
        return WITHOUT_MOOD_TEMPLATE.format(**parts)
    return WITH_MOOD_TEMPLATE.format(mood=describe_mood(mood), **parts)


def build_persona_narrative(traits: PersonaTraits, mood: Optional[MoodState] = None) -> PersonaNarrativeOutput:
    return PersonaNarrativeOutput(tone=select_tone(mood), summary=compose_summary(traits, mood))
