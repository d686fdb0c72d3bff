# ABOUTME: Generates histories for a whole demo cohort of learners in one call.
# ABOUTME: Rotates profile archetypes and gives every learner an independent random source.

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from .catalog import InMemoryCatalog
from .config import CohortConfig, CohortLearner
from .generator import generate_learning_history
from .profiles import PROFILE_TYPES, build_profile
from .schemas import LearningHistory

logger = logging.getLogger(__name__)


def learner_rng(seed: int, learner_id: str) -> random.Random:
    """Seed a per-learner generator so results do not depend on roster order."""

    return random.Random(f"{seed}:{learner_id}")


def assign_profile_types(learners: Sequence[CohortLearner]) -> List[str]:
    """Use each learner's explicit type, otherwise rotate through PROFILE_TYPES."""

    return [
        learner.profile_type or PROFILE_TYPES[index % len(PROFILE_TYPES)]
        for index, learner in enumerate(learners)
    ]


def generate_cohort(
    catalog: InMemoryCatalog,
    config: CohortConfig,
    now: Optional[datetime] = None,
) -> Dict[str, LearningHistory]:
    """Grades listed in the config are registered on a copy; the caller's catalog is left untouched."""

    catalog = catalog.copy()
    subject_ids = catalog.all_subject_ids()
    histories: Dict[str, LearningHistory] = {}

    for learner, profile_type in zip(config.learners, assign_profile_types(config.learners)):
        if learner.grade is not None:
            catalog.register_learner(learner.learner_id, learner.grade)

        rng = learner_rng(config.seed, learner.learner_id)
        profile = build_profile(
            learner.learner_id,
            profile_type,
            time_range_months=config.time_range_months,
            subject_ids=subject_ids,
            rng=rng,
        )
        logger.debug("Learner %s uses profile type %s", learner.learner_id, profile_type)
        histories[learner.learner_id] = generate_learning_history(profile, catalog, rng=rng, now=now)

    return histories
