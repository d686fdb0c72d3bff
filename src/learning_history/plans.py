# ABOUTME: Builds study plans and their activities from engagement-weighted subject picks.
# ABOUTME: Spreads plan creation across the window and marks only the latest plan active.

from __future__ import annotations

import random
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Sequence, Tuple, TypeVar

from .schemas import (
    ACTIVITY_TYPES,
    COMPLETED,
    IN_PROGRESS,
    Activity,
    LearnerProfile,
    LearningPattern,
    StudyPlan,
    Subject,
    Topic,
)

T = TypeVar("T")

MIN_PLANS = 2
MAX_PLANS = 4
MIN_ACTIVITIES = 5
MAX_ACTIVITIES = 12
REQUIRED_ACTIVITY_RATE = 0.8


def weighted_choice(pairs: Sequence[Tuple[T, float]], rng: random.Random) -> T:
    """
    Pick one item from ordered (item, weight) pairs.

    The final item absorbs any remaining probability mass left by rounding.
    """

    if not pairs:
        raise ValueError("weighted_choice needs at least one (item, weight) pair.")

    total = sum(weight for _, weight in pairs)
    remaining = rng.random() * total
    for item, weight in pairs:
        remaining -= weight
        if remaining <= 0:
            return item
    return pairs[-1][0]


def _build_activities(
    plan: StudyPlan,
    subject: Subject,
    topics: Sequence[Topic],
    rng: random.Random,
) -> List[Activity]:
    count = rng.randint(MIN_ACTIVITIES, MAX_ACTIVITIES)
    sample = rng.sample(list(topics), min(count, len(topics)))

    activities: List[Activity] = []
    for order in range(count):
        topic = sample[order % len(sample)]
        activities.append(
            Activity(
                id=f"mock-activity-{plan.id}-{order}",
                plan_id=plan.id,
                title=f"{topic.display_name} Activity {order + 1}",
                description=f"Learn about {topic.display_name}",
                activity_type=rng.choice(ACTIVITY_TYPES),
                difficulty=topic.difficulty,
                estimated_minutes=rng.randint(15, 44),
                order=order,
                is_required=rng.random() < REQUIRED_ACTIVITY_RATE,
                topic_id=topic.id,
                subject_id=subject.id,
                created_at=plan.created_at,
            )
        )
    return activities


def build_study_plans(
    profile: LearnerProfile,
    grade_level: str,
    subjects: Sequence[Subject],
    topics_by_subject: Dict[str, List[Topic]],
    pattern: LearningPattern,
    rng: random.Random,
    window_start: datetime,
    window_end: datetime,
) -> Tuple[List[StudyPlan], List[Activity]]:
    """
    Draw 2-4 subjects by engagement and build one plan per draw.

    Draws landing on a subject without topics are skipped. Plans are created in
    draw order, evenly spaced from the start of the window.
    """

    if not subjects:
        return [], []

    weights = [(subject, pattern.engagement_for(subject.id)) for subject in subjects]
    plan_count = rng.randint(MIN_PLANS, MAX_PLANS)
    span = window_end - window_start

    plans: List[StudyPlan] = []
    activities: List[Activity] = []
    for draw in range(plan_count):
        subject = weighted_choice(weights, rng)
        topics = topics_by_subject.get(subject.id, [])
        if not topics:
            continue

        created_at = window_start + span * (draw / plan_count)
        plan = StudyPlan(
            id=f"mock-plan-{profile.learner_id}-{draw}",
            learner_id=profile.learner_id,
            title=f"{subject.display_name} Learning Plan {draw + 1}",
            description=f"Comprehensive learning plan for {subject.display_name}",
            subject=subject.name or subject.id,
            subject_id=subject.id,
            grade_level=grade_level,
            difficulty=pattern.difficulty_for(subject.id),
            estimated_hours=rng.randint(10, 29),
            status=COMPLETED,
            is_active=False,
            created_at=created_at,
        )
        plans.append(plan)
        activities.extend(_build_activities(plan, subject, topics, rng))

    if plans:
        plans[-1] = replace(plans[-1], status=IN_PROGRESS, is_active=True)
    return plans, activities
