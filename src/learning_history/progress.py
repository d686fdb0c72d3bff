# ABOUTME: Simulates scored attempts for each activity along the session timeline.
# ABOUTME: Converts velocity and subject engagement into scores, statuses, and durations.

from __future__ import annotations

import math
import random
from datetime import datetime, timedelta
from typing import List, Sequence

from .schemas import (
    COMPLETED,
    IN_PROGRESS,
    NOT_STARTED,
    Activity,
    LearnerProfile,
    LearningPattern,
    ProgressRecord,
)

VELOCITY_MULTIPLIER = {"slow": 0.7, "average": 0.8, "fast": 0.9}


class GenerationThresholds:
    COMPLETION_SCORE = 70
    IN_PROGRESS_SCORE = 50
    MAX_ATTEMPTS = 3
    ATTEMPT_BONUS = 10
    MAX_ATTEMPT_BONUS = 20
    SCORE_NOISE = 10.0
    MIN_ATTEMPT_PROBABILITY = 0.2
    TIME_SPENT_RANGE = (0.7, 1.3)
    HELP_SCORE_CEILING = 80
    HIGH_PRIORITY_SCORE = 50


def calculate_base_performance(learning_velocity: str, engagement: float, attempt: int) -> float:
    """Expected score before noise; retries earn up to a 20 point bonus."""

    multiplier = VELOCITY_MULTIPLIER.get(learning_velocity, VELOCITY_MULTIPLIER["average"])
    bonus = min(attempt * GenerationThresholds.ATTEMPT_BONUS, GenerationThresholds.MAX_ATTEMPT_BONUS)
    return multiplier * engagement * 100 + bonus


def attempt_probability(engagement: float) -> float:
    floor = GenerationThresholds.MIN_ATTEMPT_PROBABILITY
    return floor + (1.0 - floor) * engagement


def progress_status(score: float, is_final_attempt: bool) -> str:
    if score >= GenerationThresholds.COMPLETION_SCORE or is_final_attempt:
        return COMPLETED
    if score >= GenerationThresholds.IN_PROGRESS_SCORE:
        return IN_PROGRESS
    return NOT_STARTED


def simulate_progress(
    profile: LearnerProfile,
    activities: Sequence[Activity],
    pattern: LearningPattern,
    timeline: Sequence[datetime],
    rng: random.Random,
) -> List[ProgressRecord]:
    """
    Walk activities in (plan creation, order) sequence and record attempts.

    Every attempt consumes the next session timestamp; generation ends when the
    timeline runs out. An activity stops producing attempts at its first
    completion.
    """

    records: List[ProgressRecord] = []
    session_index = 0
    ordered = sorted(activities, key=lambda a: (a.created_at, a.order))

    for activity in ordered:
        if session_index >= len(timeline):
            break

        engagement = pattern.engagement_for(activity.subject_id)
        if rng.random() > attempt_probability(engagement):
            continue

        attempts = rng.randint(1, GenerationThresholds.MAX_ATTEMPTS)
        for attempt in range(attempts):
            if session_index >= len(timeline):
                break

            started_at = timeline[session_index]
            noise = rng.uniform(-GenerationThresholds.SCORE_NOISE, GenerationThresholds.SCORE_NOISE)
            raw_score = calculate_base_performance(profile.learning_velocity, engagement, attempt) + noise
            score = int(round(max(0.0, min(100.0, raw_score))))
            status = progress_status(score, attempt == attempts - 1)

            low, high = GenerationThresholds.TIME_SPENT_RANGE
            time_spent = max(1, math.floor(activity.estimated_minutes * rng.uniform(low, high)))

            records.append(
                ProgressRecord(
                    id=f"mock-progress-{activity.id}-{attempt}",
                    learner_id=profile.learner_id,
                    activity_id=activity.id,
                    status=status,
                    score=score,
                    time_spent=time_spent,
                    attempts=attempt + 1,
                    started_at=started_at,
                    completed_at=started_at + timedelta(minutes=time_spent) if status == COMPLETED else None,
                    topic_id=activity.topic_id,
                    subject_id=activity.subject_id,
                    activity_title=activity.title,
                )
            )
            session_index += 1

            if status == COMPLETED:
                break

    return records
