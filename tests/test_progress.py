# ABOUTME: Tests the attempt simulator that turns activities into progress records.
# ABOUTME: Pins random sources so score, status, and session thresholds are checkable.

import random
from datetime import datetime, timedelta, timezone

import pytest

from src.learning_history.progress import (
    attempt_probability,
    calculate_base_performance,
    progress_status,
    simulate_progress,
)
from src.learning_history.schemas import (
    COMPLETED,
    IN_PROGRESS,
    NOT_STARTED,
    Activity,
    HelpRequestPattern,
    LearnerProfile,
    LearningPattern,
)

CREATED = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _pattern(engagement: float) -> LearningPattern:
    return LearningPattern(
        subject_engagement=(("math", engagement),),
        time_of_day_preferences=(),
        session_length_preferences=(),
        difficulty_progression=(("math", "INTERMEDIATE"),),
        resource_type_preferences=(),
        help_request_patterns=HelpRequestPattern(frequency=0.1, topic_types=(), time_in_session=(0.3, 0.6, 0.8)),
    )


def _activities(count: int):
    return [
        Activity(
            id=f"act-{i}",
            plan_id="plan-0",
            title=f"Fractions Activity {i + 1}",
            description="Learn about Fractions",
            activity_type="quiz",
            difficulty="BEGINNER",
            estimated_minutes=30,
            order=i,
            is_required=True,
            topic_id="fractions",
            subject_id="math",
            created_at=CREATED,
        )
        for i in range(count)
    ]


def _timeline(count: int):
    return [CREATED + timedelta(days=i) for i in range(count)]


def _profile(velocity: str) -> LearnerProfile:
    return LearnerProfile(learner_id="child-1", time_range_months=6, learning_velocity=velocity)


def test_base_performance_scales_with_velocity_and_retries():
    fast = calculate_base_performance("fast", 0.8, 0)
    average = calculate_base_performance("average", 0.8, 0)
    slow = calculate_base_performance("slow", 0.8, 0)
    assert fast == pytest.approx(72.0)
    assert slow < average < fast
    assert calculate_base_performance("average", 0.8, 2) == pytest.approx(average + 20)
    # Retry bonus caps at 20 points.
    assert calculate_base_performance("average", 0.8, 5) == pytest.approx(average + 20)


def test_attempt_probability_range():
    assert attempt_probability(0.0) == pytest.approx(0.2)
    assert attempt_probability(1.0) == pytest.approx(1.0)


@pytest.mark.parametrize(
    "score, final, expected",
    [
        (70, False, COMPLETED),
        (69, False, IN_PROGRESS),
        (50, False, IN_PROGRESS),
        (49, False, NOT_STARTED),
        (10, True, COMPLETED),
    ],
)
def test_progress_status_thresholds(score, final, expected):
    assert progress_status(score, final) == expected


def test_fully_engaged_fast_learner_completes_every_activity_first_try():
    records = simulate_progress(_profile("fast"), _activities(6), _pattern(1.0), _timeline(20), random.Random(0))
    assert [r.activity_id for r in records] == [f"act-{i}" for i in range(6)]
    for record, session in zip(records, _timeline(6)):
        assert record.status == COMPLETED
        assert record.attempts == 1
        assert 80 <= record.score <= 100
        assert record.started_at == session
        assert record.completed_at == session + timedelta(minutes=record.time_spent)
        assert 21 <= record.time_spent <= 39


def test_struggling_learner_only_completes_on_final_attempt():
    records = simulate_progress(_profile("slow"), _activities(30), _pattern(0.1), _timeline(200), random.Random(4))
    assert records
    by_activity = {}
    for record in records:
        by_activity.setdefault(record.activity_id, []).append(record)

    for attempts in by_activity.values():
        assert [r.attempts for r in attempts] == list(range(1, len(attempts) + 1))
        assert all(r.status == NOT_STARTED for r in attempts[:-1])
        assert attempts[-1].status == COMPLETED
        assert all(r.score < 50 for r in attempts)
        assert len(attempts) <= 3


def test_low_engagement_skips_some_activities():
    records = simulate_progress(_profile("slow"), _activities(40), _pattern(0.1), _timeline(500), random.Random(2))
    attempted = {r.activity_id for r in records}
    assert 0 < len(attempted) < 40


def test_simulation_stops_when_sessions_run_out():
    timeline = _timeline(3)
    records = simulate_progress(_profile("fast"), _activities(10), _pattern(1.0), timeline, random.Random(1))
    assert len(records) == 3
    assert [r.started_at for r in records] == timeline


def test_scores_and_time_spent_stay_in_range():
    for seed in range(20):
        records = simulate_progress(
            _profile("average"), _activities(12), _pattern(0.6), _timeline(100), random.Random(seed)
        )
        for record in records:
            assert 0 <= record.score <= 100
            assert record.time_spent > 0
            assert (record.completed_at is not None) == (record.status == COMPLETED)


def test_activities_walk_in_creation_then_order_sequence():
    later = [
        Activity(**{**a.__dict__, "id": f"late-{a.order}", "plan_id": "plan-1", "created_at": CREATED + timedelta(days=30)})
        for a in _activities(2)
    ]
    activities = later + list(reversed(_activities(3)))
    records = simulate_progress(_profile("fast"), activities, _pattern(1.0), _timeline(10), random.Random(3))
    assert [r.activity_id for r in records] == ["act-0", "act-1", "act-2", "late-0", "late-1"]
