# ABOUTME: Loads YAML run configs for cohort generation into frozen dataclasses.
# ABOUTME: Keeps file paths, seeds, and learner rosters out of the CLI signatures.

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

from .profiles import PROFILE_TYPES

EXPORT_FORMATS = ("parquet", "json")


@dataclass(frozen=True)
class CohortLearner:
    learner_id: str
    profile_type: Optional[str] = None
    grade: Optional[str] = None


@dataclass(frozen=True)
class CohortConfig:
    """Configuration for a multi-learner demo run."""

    catalog_path: Path
    output_dir: Path = Path("reports/mock_history")
    seed: int = 42
    time_range_months: int = 6
    output_format: str = "parquet"
    learners: List[CohortLearner] = field(default_factory=list)


def load_cohort_config(config_path: Path) -> CohortConfig:
    with open(config_path, encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}

    if "catalog_path" not in cfg:
        raise ValueError(f"Cohort config {config_path} is missing 'catalog_path'.")

    output_format = cfg.get("output_format", "parquet")
    if output_format not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported output_format '{output_format}'. Expected one of: {', '.join(EXPORT_FORMATS)}.")

    # Relative paths resolve against the config file's directory.
    base = Path(config_path).parent
    catalog_path = Path(cfg["catalog_path"])
    if not catalog_path.is_absolute():
        catalog_path = base / catalog_path

    learners = []
    for entry in cfg.get("learners", []):
        profile_type = entry.get("profile_type")
        if profile_type is not None and str(profile_type).strip().lower() not in PROFILE_TYPES:
            raise ValueError(
                f"Learner {entry.get('learner_id')} has unsupported profile_type '{profile_type}'. "
                f"Expected one of: {', '.join(PROFILE_TYPES)}."
            )
        learners.append(
            CohortLearner(
                learner_id=str(entry["learner_id"]),
                profile_type=profile_type,
                grade=str(entry["grade"]) if entry.get("grade") is not None else None,
            )
        )

    return CohortConfig(
        catalog_path=catalog_path,
        output_dir=Path(cfg.get("output_dir", "reports/mock_history")),
        seed=int(cfg.get("seed", 42)),
        time_range_months=int(cfg.get("time_range_months", 6)),
        output_format=output_format,
        learners=learners,
    )
