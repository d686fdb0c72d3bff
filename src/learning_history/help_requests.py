# ABOUTME: Generates help requests for struggling attempts according to help-seeking odds.
# ABOUTME: Prioritizes requests by score and times them inside the study session.

from __future__ import annotations

import random
from datetime import timedelta
from typing import List, Sequence

from .progress import GenerationThresholds
from .schemas import HELP_CATEGORIES, HelpRequest, LearningPattern, ProgressRecord

QUESTION_TEMPLATES = (
    "I'm having trouble understanding {title}",
    "Can you explain more about {title}?",
    "I'm stuck on this part of {title}",
    "How do I solve this problem in {title}?",
    "I need help with {title}",
)
MAX_RESOLUTION_MINUTES = 10


def help_priority(score: int) -> str:
    return "HIGH" if score < GenerationThresholds.HIGH_PRIORITY_SCORE else "MEDIUM"


def generate_help_requests(
    records: Sequence[ProgressRecord],
    pattern: LearningPattern,
    rng: random.Random,
) -> List[HelpRequest]:
    help_pattern = pattern.help_request_patterns
    requests: List[HelpRequest] = []
    for record in records:
        wants_help = rng.random() < help_pattern.frequency
        if not wants_help or record.score >= GenerationThresholds.HELP_SCORE_CEILING:
            continue

        # Requests land at one of the learner's typical points in the session.
        fraction = rng.choice(help_pattern.time_in_session) if help_pattern.time_in_session else 0.5
        created_at = record.started_at + timedelta(minutes=fraction * record.time_spent)
        resolved_at = created_at + timedelta(minutes=rng.random() * MAX_RESOLUTION_MINUTES)

        requests.append(
            HelpRequest(
                id=f"mock-help-{record.id}",
                learner_id=record.learner_id,
                progress_record_id=record.id,
                question=rng.choice(QUESTION_TEMPLATES).format(title=record.activity_title),
                category=rng.choice(HELP_CATEGORIES),
                priority=help_priority(record.score),
                status="RESOLVED",
                created_at=created_at,
                resolved_at=resolved_at,
            )
        )
    return requests
