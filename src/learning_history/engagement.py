# ABOUTME: Generates content interactions and resource usage around progress records.
# ABOUTME: Uses the learner's resource-type weights to decide which resources get opened.

from __future__ import annotations

import random
from datetime import timedelta
from typing import Dict, List, Sequence

from .schemas import (
    CONTENT_TYPES,
    INTERACTION_TYPES,
    ContentInteraction,
    LearningPattern,
    ProgressRecord,
    ResourceUsage,
    Topic,
)

INTERACTION_SPACING = timedelta(minutes=5)
INTERACTION_COMPLETION_RATE = 0.8
RESOURCE_COMPLETION_RATE = 0.7
RATING_RATE = 0.5
RESOURCE_URL = "https://example.com/resource/{topic_id}/{resource_type}"


def generate_content_interactions(
    records: Sequence[ProgressRecord],
    rng: random.Random,
) -> List[ContentInteraction]:
    interactions: List[ContentInteraction] = []
    for record in records:
        for i in range(rng.randint(1, 3)):
            content_id = f"mock-content-{record.activity_id}-{i}"
            interactions.append(
                ContentInteraction(
                    id=f"mock-interaction-{record.id}-{i}",
                    learner_id=record.learner_id,
                    content_id=content_id,
                    content_title=f"Content for {record.activity_title}",
                    content_type=rng.choice(CONTENT_TYPES),
                    activity_id=record.activity_id,
                    interaction_type=rng.choice(INTERACTION_TYPES),
                    duration=rng.randint(60, 359),
                    completed=rng.random() < INTERACTION_COMPLETION_RATE,
                    created_at=record.started_at + INTERACTION_SPACING * i,
                )
            )
    return interactions


def generate_resource_usage(
    records: Sequence[ProgressRecord],
    topics: Dict[str, Topic],
    pattern: LearningPattern,
    rng: random.Random,
) -> List[ResourceUsage]:
    """
    Emit one usage per resource type whose preference weight beats a uniform roll.

    Records whose topic is missing from `topics` produce no usage.
    """

    usage: List[ResourceUsage] = []
    for record in records:
        topic = topics.get(record.topic_id)
        if topic is None:
            continue

        for resource_type, weight in pattern.resource_type_preferences:
            if rng.random() >= weight:
                continue
            resource_id = f"mock-resource-{topic.id}-{resource_type}"
            offset = timedelta(minutes=rng.random() * record.time_spent)
            usage.append(
                ResourceUsage(
                    id=f"mock-usage-{record.id}-{resource_type}",
                    learner_id=record.learner_id,
                    resource_id=resource_id,
                    resource_title=f"{resource_type} Resource for {topic.display_name}",
                    resource_type=resource_type,
                    resource_url=RESOURCE_URL.format(topic_id=topic.id, resource_type=resource_type),
                    topic_id=topic.id,
                    duration=rng.randint(120, 719),
                    completed=rng.random() < RESOURCE_COMPLETION_RATE,
                    rating=rng.randint(3, 5) if rng.random() < RATING_RATE else None,
                    timestamp=record.started_at + offset,
                )
            )
    return usage
