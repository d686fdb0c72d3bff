# ABOUTME: Provides named learner-profile presets for demos and cohort generation.
# ABOUTME: Maps archetypes like high-achiever or struggling onto concrete profile settings.

from __future__ import annotations

import random
from typing import Dict, Optional, Sequence

from .schemas import LearnerProfile

DEFAULT_SUBJECT_IDS = (
    "mathematics",
    "english-language-arts",
    "science",
    "social-studies",
    "visual-arts",
    "music",
    "physical-education",
)

PROFILE_TYPES = (
    "balanced",
    "high-achiever",
    "struggling",
    "stem-focused",
    "arts-focused",
    "inconsistent",
    "help-seeking",
    "independent",
)

BASE_SETTINGS = {
    "learning_velocity": "average",
    "difficulty_preference": "balanced",
    "session_frequency": "medium",
    "consistency_level": "moderate",
    "help_seeking_behavior": "moderate",
}

PROFILE_SETTINGS: Dict[str, Dict[str, str]] = {
    "balanced": {},
    "high-achiever": {
        "learning_velocity": "fast",
        "difficulty_preference": "challenging",
        "session_frequency": "high",
        "consistency_level": "consistent",
        "help_seeking_behavior": "independent",
    },
    "struggling": {
        "learning_velocity": "slow",
        "difficulty_preference": "conservative",
        "session_frequency": "low",
        "consistency_level": "inconsistent",
        "help_seeking_behavior": "frequent",
    },
    "stem-focused": {
        "learning_velocity": "fast",
        "difficulty_preference": "challenging",
        "session_frequency": "high",
        "consistency_level": "consistent",
    },
    "arts-focused": {
        "consistency_level": "consistent",
    },
    "inconsistent": {
        "consistency_level": "inconsistent",
    },
    "help-seeking": {
        "learning_velocity": "slow",
        "difficulty_preference": "conservative",
        "help_seeking_behavior": "frequent",
    },
    "independent": {
        "learning_velocity": "fast",
        "difficulty_preference": "challenging",
        "consistency_level": "consistent",
        "help_seeking_behavior": "independent",
    },
}

STEM_BOOSTS = {"mathematics": 0.9, "science": 0.9, "computer-science": 0.8}
ARTS_BOOSTS = {"visual-arts": 0.9, "music": 0.9, "english-language-arts": 0.8, "drama-theater": 0.8}


def _subject_preferences(
    profile_type: str,
    subject_ids: Sequence[str],
    rng: random.Random,
) -> Dict[str, float]:
    if profile_type == "high-achiever":
        return {sid: 0.8 for sid in subject_ids}
    if profile_type == "struggling":
        return {sid: 0.3 for sid in subject_ids}
    if profile_type == "inconsistent":
        return {sid: rng.random() for sid in subject_ids}

    preferences = {sid: 0.5 for sid in subject_ids}
    if profile_type == "stem-focused":
        preferences.update(STEM_BOOSTS)
    elif profile_type == "arts-focused":
        preferences.update(ARTS_BOOSTS)
    return preferences


def build_profile(
    learner_id: str,
    profile_type: str = "balanced",
    time_range_months: int = 6,
    subject_ids: Optional[Sequence[str]] = None,
    rng: Optional[random.Random] = None,
) -> LearnerProfile:
    """Build a LearnerProfile for one of the PROFILE_TYPES archetypes."""

    normalized = profile_type.strip().lower()
    if normalized not in PROFILE_SETTINGS:
        raise ValueError(f"Unsupported profile type '{profile_type}'. Expected one of: {', '.join(PROFILE_TYPES)}.")

    settings = dict(BASE_SETTINGS)
    settings.update(PROFILE_SETTINGS[normalized])
    preferences = _subject_preferences(normalized, list(subject_ids or DEFAULT_SUBJECT_IDS), rng or random.Random())

    return LearnerProfile(
        learner_id=learner_id,
        time_range_months=time_range_months,
        subject_preferences=preferences,
        **settings,
    )
