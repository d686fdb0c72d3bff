# ABOUTME: Derives a learner's behavior weights from the profile and grade subjects.
# ABOUTME: Produces per-subject engagement, difficulty tiers, and help-seeking odds.

from __future__ import annotations

import random
from typing import Sequence

from .schemas import (
    ADVANCED,
    BEGINNER,
    INTERMEDIATE,
    HelpRequestPattern,
    LearnerProfile,
    LearningPattern,
    Subject,
)

BASELINE_ENGAGEMENT = 0.5
ENGAGEMENT_JITTER = 0.15
MIN_ENGAGEMENT = 0.1
MAX_ENGAGEMENT = 1.0

HELP_FREQUENCY = {"independent": 0.1, "moderate": 0.3, "frequent": 0.6}
HELP_TIME_IN_SESSION = (0.3, 0.6, 0.8)
LOW_ENGAGEMENT_THRESHOLD = 0.5

# (low, high) uniform ranges, in resource-type order.
RESOURCE_PREFERENCE_RANGES = (
    ("VIDEO", 0.4, 0.8),
    ("ARTICLE", 0.3, 0.6),
    ("INTERACTIVE", 0.3, 0.8),
    ("WORKSHEET", 0.2, 0.5),
    ("GAME", 0.3, 0.9),
    ("BOOK", 0.3, 0.7),
    ("EXTERNAL_LINK", 0.2, 0.5),
)
TIME_OF_DAY_RANGES = (
    ("morning", 0.3, 0.7),
    ("afternoon", 0.4, 0.9),
    ("evening", 0.2, 0.5),
)


def subject_difficulty(difficulty_preference: str, engagement: float) -> str:
    if difficulty_preference == "challenging" and engagement > 0.7:
        return ADVANCED
    if difficulty_preference == "conservative" or engagement < 0.4:
        return BEGINNER
    return INTERMEDIATE


def synthesize_learning_pattern(
    profile: LearnerProfile,
    subjects: Sequence[Subject],
    rng: random.Random,
) -> LearningPattern:
    """
    Derive engagement, pacing, and help-seeking weights for one learner.

    Every subject gets an engagement score, falling back to a 0.5 baseline when
    the profile states no preference for it.
    """

    engagement = []
    for subject in subjects:
        base = profile.preference_for(subject.id)
        if base is None:
            base = BASELINE_ENGAGEMENT
        jittered = base + rng.uniform(-ENGAGEMENT_JITTER, ENGAGEMENT_JITTER)
        engagement.append((subject.id, max(MIN_ENGAGEMENT, min(MAX_ENGAGEMENT, jittered))))

    time_of_day = tuple((slot, rng.uniform(low, high)) for slot, low, high in TIME_OF_DAY_RANGES)

    session_length = (
        ("short", 0.3 if profile.learning_velocity == "fast" else 0.6),
        ("medium", 0.5),
        ("long", 0.3 if profile.learning_velocity == "slow" else 0.6),
    )

    difficulty = tuple(
        (subject_id, subject_difficulty(profile.difficulty_preference, score)) for subject_id, score in engagement
    )

    resources = tuple((kind, rng.uniform(low, high)) for kind, low, high in RESOURCE_PREFERENCE_RANGES)

    help_patterns = HelpRequestPattern(
        frequency=HELP_FREQUENCY[profile.help_seeking_behavior],
        topic_types=tuple(subject_id for subject_id, score in engagement if score < LOW_ENGAGEMENT_THRESHOLD),
        time_in_session=HELP_TIME_IN_SESSION,
    )

    return LearningPattern(
        subject_engagement=tuple(engagement),
        time_of_day_preferences=time_of_day,
        session_length_preferences=session_length,
        difficulty_progression=difficulty,
        resource_type_preferences=resources,
        help_request_patterns=help_patterns,
    )
