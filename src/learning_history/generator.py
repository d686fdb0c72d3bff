# ABOUTME: Runs one end-to-end synthetic learning-history pass for a single learner.
# ABOUTME: Resolves catalog data, then chains pattern, timeline, plans, progress, and satellites.

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Dict, List, Optional

from .achievements import generate_achievements
from .catalog import CurriculumCatalog, LearnerNotFoundError
from .engagement import generate_content_interactions, generate_resource_usage
from .help_requests import generate_help_requests
from .patterns import synthesize_learning_pattern
from .plans import build_study_plans
from .progress import simulate_progress
from .schemas import LearnerProfile, LearningHistory, Topic
from .timeline import generate_session_timeline, history_window

logger = logging.getLogger(__name__)


def generate_learning_history(
    profile: LearnerProfile,
    catalog: CurriculumCatalog,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> LearningHistory:
    """
    Generate a self-consistent study history for `profile`.

    Parameters
    ----------
    profile : LearnerProfile
        Behavior settings of the learner being simulated.
    catalog : CurriculumCatalog
        Source of the learner's grade plus the grade's subjects and topics.
    rng : random.Random, optional
        Random source for every draw; pass a seeded instance for repeatable output.
    now : datetime, optional
        End of the history window. Defaults to the current UTC time.

    Raises
    ------
    LearnerNotFoundError
        When the catalog has no grade for `profile.learner_id`. Nothing is generated.
    """

    rng = rng or random.Random()
    window_start, window_end = history_window(profile.time_range_months, now)

    grade = catalog.grade_for_learner(profile.learner_id)
    if grade is None:
        raise LearnerNotFoundError(profile.learner_id)

    logger.info("Generating learning history for learner %s (grade %s)", profile.learner_id, grade)

    subjects = catalog.subjects_for_grade(grade)
    topics_by_subject: Dict[str, List[Topic]] = {
        subject.id: catalog.topics_for_subject(grade, subject.id) for subject in subjects
    }
    topics = {topic.id: topic for subject_topics in topics_by_subject.values() for topic in subject_topics}

    pattern = synthesize_learning_pattern(profile, subjects, rng)
    timeline = generate_session_timeline(
        profile.time_range_months,
        profile.session_frequency,
        profile.consistency_level,
        rng,
        now=window_end,
    )
    plans, activities = build_study_plans(
        profile, grade, subjects, topics_by_subject, pattern, rng, window_start, window_end
    )
    records = simulate_progress(profile, activities, pattern, timeline, rng)
    interactions = generate_content_interactions(records, rng)
    usage = generate_resource_usage(records, topics, pattern, rng)
    help_requests = generate_help_requests(records, pattern, rng)
    achievements = generate_achievements(profile.learner_id, records, subjects)

    logger.info(
        "Generated %d plans, %d activities, %d progress records, %d interactions, %d resource uses, "
        "%d help requests, %d achievements for learner %s",
        len(plans),
        len(activities),
        len(records),
        len(interactions),
        len(usage),
        len(help_requests),
        len(achievements),
        profile.learner_id,
    )

    return LearningHistory(
        profile=profile,
        grade_level=grade,
        pattern=pattern,
        window_start=window_start,
        window_end=window_end,
        study_plans=plans,
        activities=activities,
        progress_records=records,
        content_interactions=interactions,
        resource_usage=usage,
        help_requests=help_requests,
        achievements=achievements,
    )
