# ABOUTME: End-to-end tests for one learning-history generation pass.
# ABOUTME: Covers referential closure, window bounds, error handling, and behavioral trends.

import random
from statistics import mean

import pytest

from src.learning_history.catalog import InMemoryCatalog, LearnerNotFoundError
from src.learning_history.generator import generate_learning_history
from src.learning_history.schemas import LearnerProfile


def _profile(**overrides) -> LearnerProfile:
    settings = {
        "learner_id": "child-1",
        "time_range_months": 3,
        "subject_preferences": {"math": 0.6, "science": 0.6},
    }
    settings.update(overrides)
    return LearnerProfile(**settings)


def _all_timestamps(history):
    stamps = [p.created_at for p in history.study_plans]
    stamps += [a.created_at for a in history.activities]
    for record in history.progress_records:
        stamps.append(record.started_at)
        if record.completed_at is not None:
            stamps.append(record.completed_at)
    stamps += [i.created_at for i in history.content_interactions]
    stamps += [u.timestamp for u in history.resource_usage]
    for request in history.help_requests:
        stamps += [request.created_at, request.resolved_at]
    stamps += [a.earned_at for a in history.achievements]
    return stamps


def test_unknown_learner_raises_before_generating(catalog, now):
    with pytest.raises(LearnerNotFoundError) as excinfo:
        generate_learning_history(_profile(learner_id="ghost"), catalog, random.Random(0), now=now)
    assert excinfo.value.learner_id == "ghost"
    assert "ghost" in str(excinfo.value)


def test_catalog_errors_propagate_unchanged(now):
    class BrokenCatalog:
        def grade_for_learner(self, learner_id):
            return "5"

        def subjects_for_grade(self, grade):
            raise ConnectionError("catalog offline")

        def topics_for_subject(self, grade, subject_id):
            return []

    with pytest.raises(ConnectionError, match="catalog offline"):
        generate_learning_history(_profile(), BrokenCatalog(), random.Random(0), now=now)


@pytest.mark.parametrize("seed", range(8))
def test_generated_history_is_referentially_closed(catalog, now, seed):
    history = generate_learning_history(_profile(), catalog, random.Random(seed), now=now)

    plan_ids = {p.id for p in history.study_plans}
    activity_ids = {a.id for a in history.activities}
    record_ids = {r.id for r in history.progress_records}

    assert all(a.plan_id in plan_ids for a in history.activities)
    assert all(r.activity_id in activity_ids for r in history.progress_records)
    assert all(h.progress_record_id in record_ids for h in history.help_requests)
    assert all(i.activity_id in activity_ids for i in history.content_interactions)


@pytest.mark.parametrize("seed", range(8))
def test_records_and_timestamps_stay_in_bounds(catalog, now, seed):
    history = generate_learning_history(_profile(), catalog, random.Random(seed), now=now)

    for record in history.progress_records:
        assert 0 <= record.score <= 100
        assert record.time_spent > 0
    for _, score in history.pattern.subject_engagement:
        assert 0.1 <= score <= 1.0
    assert all(history.window_start <= ts <= now for ts in _all_timestamps(history))
    assert history.window_end == now


def test_same_seed_reproduces_history(catalog, now):
    a = generate_learning_history(_profile(), catalog, random.Random(21), now=now)
    b = generate_learning_history(_profile(), catalog, random.Random(21), now=now)
    assert a == b


def test_fast_learners_outscore_slow_learners(catalog, now):
    def scores(velocity):
        collected = []
        for seed in range(15):
            history = generate_learning_history(
                _profile(learning_velocity=velocity), catalog, random.Random(seed), now=now
            )
            collected += [r.score for r in history.progress_records]
        return collected

    assert mean(scores("fast")) > mean(scores("slow"))


def test_frequent_help_seekers_ask_more_often(catalog, now):
    def ratio(behavior):
        requests = records = 0
        for seed in range(15):
            history = generate_learning_history(
                _profile(help_seeking_behavior=behavior, learning_velocity="slow"),
                catalog,
                random.Random(seed),
                now=now,
            )
            requests += len(history.help_requests)
            records += len(history.progress_records)
        return requests / records

    assert ratio("frequent") >= ratio("independent")


def test_high_achieving_math_learner_scenario(now):
    catalog = InMemoryCatalog.from_dict(
        {
            "learners": {"child-1": "3"},
            "grades": {
                "3": {
                    "subjects": [
                        {
                            "id": "math",
                            "display_name": "Mathematics",
                            "topics": [{"id": "multiplication", "display_name": "Multiplication"}],
                        }
                    ]
                }
            },
        }
    )
    profile = LearnerProfile(
        learner_id="child-1",
        time_range_months=1,
        learning_velocity="fast",
        subject_preferences={"math": 0.9},
        difficulty_preference="challenging",
        session_frequency="high",
        consistency_level="consistent",
        help_seeking_behavior="independent",
    )

    history = generate_learning_history(profile, catalog, random.Random(12), now=now)

    assert history.study_plans
    assert all(p.subject_id == "math" for p in history.study_plans)
    assert all(p.difficulty == "ADVANCED" for p in history.study_plans)
    assert history.progress_records
    assert len(history.help_requests) / len(history.progress_records) <= 0.25


def test_default_clock_and_rng_are_used_when_omitted(catalog):
    history = generate_learning_history(_profile(time_range_months=1), catalog)
    assert history.window_start < history.window_end
    assert history.grade_level == "5"
