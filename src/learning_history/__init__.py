# ABOUTME: Exposes the synthetic learning-history generator entrypoints.
# ABOUTME: Groups profile presets, catalog access, generation, and export helpers.

from .catalog import InMemoryCatalog, LearnerNotFoundError
from .generator import generate_learning_history
from .profiles import PROFILE_TYPES, build_profile
from .schemas import LearnerProfile, LearningHistory
from .export import history_to_frames, summarize_history, write_history

__all__ = [
    "InMemoryCatalog",
    "LearnerNotFoundError",
    "generate_learning_history",
    "PROFILE_TYPES",
    "build_profile",
    "LearnerProfile",
    "LearningHistory",
    "history_to_frames",
    "summarize_history",
    "write_history",
]
