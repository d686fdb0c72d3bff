# ABOUTME: Defines the records produced by one synthetic learning-history pass.
# ABOUTME: Centralizes learner profile, catalog, pattern, and output entity types.

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

LEARNING_VELOCITIES = ("slow", "average", "fast")
DIFFICULTY_PREFERENCES = ("conservative", "balanced", "challenging")
SESSION_FREQUENCIES = ("low", "medium", "high")
CONSISTENCY_LEVELS = ("inconsistent", "moderate", "consistent")
HELP_SEEKING_BEHAVIORS = ("independent", "moderate", "frequent")

BEGINNER = "BEGINNER"
INTERMEDIATE = "INTERMEDIATE"
ADVANCED = "ADVANCED"
DIFFICULTY_TIERS = (BEGINNER, INTERMEDIATE, ADVANCED)

NOT_STARTED = "NOT_STARTED"
IN_PROGRESS = "IN_PROGRESS"
COMPLETED = "COMPLETED"
PROGRESS_STATUSES = (NOT_STARTED, IN_PROGRESS, COMPLETED)

ACTIVITY_TYPES = ("lesson", "practice", "quiz", "project", "review")
RESOURCE_TYPES = ("VIDEO", "ARTICLE", "INTERACTIVE", "WORKSHEET", "GAME", "BOOK", "EXTERNAL_LINK")
INTERACTION_TYPES = ("view", "click", "scroll", "pause", "replay")
CONTENT_TYPES = ("video", "text", "interactive", "image", "audio")
HELP_CATEGORIES = ("concept", "technical", "navigation", "content")

WeightPairs = Tuple[Tuple[str, float], ...]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _check_choice(name: str, value: str, allowed: Sequence[str]) -> None:
    if value not in allowed:
        raise ValueError(f"Unsupported {name} '{value}'. Expected one of: {', '.join(allowed)}.")


def _lookup(pairs: WeightPairs, key: str, default: Optional[float] = None) -> Optional[float]:
    for pair_key, value in pairs:
        if pair_key == key:
            return value
    return default


@dataclass(frozen=True)
class LearnerProfile:
    """Behavioral configuration of one synthetic learner."""

    learner_id: str
    time_range_months: int
    learning_velocity: str = "average"
    subject_preferences: Union[Mapping[str, float], WeightPairs] = ()
    difficulty_preference: str = "balanced"
    session_frequency: str = "medium"
    consistency_level: str = "moderate"
    help_seeking_behavior: str = "moderate"

    def __post_init__(self) -> None:
        _check_choice("learning_velocity", self.learning_velocity, LEARNING_VELOCITIES)
        _check_choice("difficulty_preference", self.difficulty_preference, DIFFICULTY_PREFERENCES)
        _check_choice("session_frequency", self.session_frequency, SESSION_FREQUENCIES)
        _check_choice("consistency_level", self.consistency_level, CONSISTENCY_LEVELS)
        _check_choice("help_seeking_behavior", self.help_seeking_behavior, HELP_SEEKING_BEHAVIORS)
        if int(self.time_range_months) < 1:
            raise ValueError(f"time_range_months must be at least 1, got {self.time_range_months}.")

        raw = self.subject_preferences
        items = raw.items() if isinstance(raw, Mapping) else raw
        # Frozen dataclass: normalize in place via object.__setattr__.
        object.__setattr__(
            self,
            "subject_preferences",
            tuple((str(key), _clamp(float(score), 0.0, 1.0)) for key, score in items),
        )
        object.__setattr__(self, "time_range_months", int(self.time_range_months))

    def preference_for(self, subject_id: str) -> Optional[float]:
        return _lookup(self.subject_preferences, subject_id)


@dataclass(frozen=True)
class Subject:
    id: str
    display_name: str
    name: Optional[str] = None
    grade_level: Optional[str] = None
    difficulty: str = INTERMEDIATE


@dataclass(frozen=True)
class Topic:
    id: str
    subject_id: str
    display_name: str
    difficulty: str = INTERMEDIATE
    grade_level: Optional[str] = None


@dataclass(frozen=True)
class HelpRequestPattern:
    frequency: float
    topic_types: Tuple[str, ...]
    time_in_session: Tuple[float, ...]


@dataclass(frozen=True)
class LearningPattern:
    """Derived behavior weights; built once per generation call."""

    subject_engagement: WeightPairs
    time_of_day_preferences: WeightPairs
    session_length_preferences: WeightPairs
    difficulty_progression: Tuple[Tuple[str, str], ...]
    resource_type_preferences: WeightPairs
    help_request_patterns: HelpRequestPattern

    def engagement_for(self, subject_id: str, default: float = 0.5) -> float:
        return _lookup(self.subject_engagement, subject_id, default)

    def difficulty_for(self, subject_id: str) -> str:
        for key, tier in self.difficulty_progression:
            if key == subject_id:
                return tier
        return INTERMEDIATE


@dataclass(frozen=True)
class StudyPlan:
    id: str
    learner_id: str
    title: str
    description: str
    subject: str
    subject_id: str
    grade_level: str
    difficulty: str
    estimated_hours: int
    status: str
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class Activity:
    id: str
    plan_id: str
    title: str
    description: str
    activity_type: str
    difficulty: str
    estimated_minutes: int
    order: int
    is_required: bool
    topic_id: str
    subject_id: str
    created_at: datetime


@dataclass(frozen=True)
class ProgressRecord:
    id: str
    learner_id: str
    activity_id: str
    status: str
    score: int
    time_spent: int  # minutes
    attempts: int
    started_at: datetime
    completed_at: Optional[datetime]
    topic_id: str
    subject_id: str
    activity_title: str


@dataclass(frozen=True)
class ContentInteraction:
    id: str
    learner_id: str
    content_id: str
    content_title: str
    content_type: str
    activity_id: str
    interaction_type: str
    duration: int  # seconds
    completed: bool
    created_at: datetime


@dataclass(frozen=True)
class ResourceUsage:
    id: str
    learner_id: str
    resource_id: str
    resource_title: str
    resource_type: str
    resource_url: str
    topic_id: str
    duration: int  # seconds
    completed: bool
    rating: Optional[int]
    timestamp: datetime


@dataclass(frozen=True)
class HelpRequest:
    id: str
    learner_id: str
    progress_record_id: str
    question: str
    category: str
    priority: str
    status: str
    created_at: datetime
    resolved_at: datetime


@dataclass(frozen=True)
class Achievement:
    id: str
    learner_id: str
    achievement_type: str
    title: str
    description: str
    points: int
    earned_at: datetime
    metadata: Tuple[Tuple[str, Union[str, int]], ...] = ()

    def metadata_dict(self) -> Dict[str, Union[str, int]]:
        return dict(self.metadata)


@dataclass(frozen=True)
class LearningHistory:
    """Everything one generation pass returns; callers decide on persistence."""

    profile: LearnerProfile
    grade_level: str
    pattern: LearningPattern
    window_start: datetime
    window_end: datetime
    study_plans: List[StudyPlan]
    activities: List[Activity]
    progress_records: List[ProgressRecord]
    content_interactions: List[ContentInteraction]
    resource_usage: List[ResourceUsage]
    help_requests: List[HelpRequest]
    achievements: List[Achievement]

    def collections(self) -> Dict[str, list]:
        return {
            "study_plans": self.study_plans,
            "activities": self.activities,
            "progress_records": self.progress_records,
            "content_interactions": self.content_interactions,
            "resource_usage": self.resource_usage,
            "help_requests": self.help_requests,
            "achievements": self.achievements,
        }
