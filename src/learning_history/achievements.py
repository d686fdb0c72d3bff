# ABOUTME: Awards achievements by scanning completed progress records after generation.
# ABOUTME: Covers first completion, per-subject milestones, and high-score streaks.

from __future__ import annotations

from typing import List, Sequence

from .schemas import COMPLETED, Achievement, ProgressRecord, Subject

SUBJECT_MILESTONE = 5
HIGH_SCORE = 90
HIGH_SCORE_COUNT = 3


def generate_achievements(
    learner_id: str,
    records: Sequence[ProgressRecord],
    subjects: Sequence[Subject],
) -> List[Achievement]:
    """
    Derive achievements from completed records, in the order they were earned.

    Each award takes its timestamp from the completion that unlocked it.
    """

    completed = [r for r in records if r.status == COMPLETED]
    achievements: List[Achievement] = []
    if not completed:
        return achievements

    first = completed[0]
    achievements.append(
        Achievement(
            id=f"achievement-first-{learner_id}",
            learner_id=learner_id,
            achievement_type="FIRST_COMPLETION",
            title="First Steps",
            description="Completed your first learning activity!",
            points=10,
            earned_at=first.completed_at,
            metadata=(("activity_title", first.activity_title),),
        )
    )

    for subject in subjects:
        subject_records = [r for r in completed if r.subject_id == subject.id]
        if len(subject_records) < SUBJECT_MILESTONE:
            continue
        achievements.append(
            Achievement(
                id=f"achievement-subject-{subject.id}-{learner_id}",
                learner_id=learner_id,
                achievement_type="SUBJECT_PROGRESS",
                title=f"{subject.display_name} Explorer",
                description=f"Completed {SUBJECT_MILESTONE} activities in {subject.display_name}!",
                points=50,
                earned_at=subject_records[SUBJECT_MILESTONE - 1].completed_at,
                metadata=(("subject", subject.display_name), ("count", len(subject_records))),
            )
        )

    high_scores = [r for r in completed if r.score >= HIGH_SCORE]
    if len(high_scores) >= HIGH_SCORE_COUNT:
        achievements.append(
            Achievement(
                id=f"achievement-high-score-{learner_id}",
                learner_id=learner_id,
                achievement_type="HIGH_PERFORMANCE",
                title="Excellence Achiever",
                description=f"Scored {HIGH_SCORE}% or higher on {HIGH_SCORE_COUNT} activities!",
                points=75,
                earned_at=high_scores[HIGH_SCORE_COUNT - 1].completed_at,
                metadata=(
                    ("count", len(high_scores)),
                    ("average_score", round(sum(r.score for r in high_scores) / len(high_scores))),
                ),
            )
        )

    return achievements
