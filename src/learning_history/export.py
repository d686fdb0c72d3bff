# ABOUTME: Converts generated learning histories into dataframes and on-disk artifacts.
# ABOUTME: Writes one parquet or JSON file per collection plus a summary document.

from __future__ import annotations

import json
from dataclasses import asdict, fields
from pathlib import Path
from typing import Dict, Iterable, Mapping

import pandas as pd

from .config import EXPORT_FORMATS
from .schemas import (
    COMPLETED,
    Achievement,
    Activity,
    ContentInteraction,
    HelpRequest,
    LearningHistory,
    ProgressRecord,
    ResourceUsage,
    StudyPlan,
)

RECORD_TYPES = {
    "study_plans": StudyPlan,
    "activities": Activity,
    "progress_records": ProgressRecord,
    "content_interactions": ContentInteraction,
    "resource_usage": ResourceUsage,
    "help_requests": HelpRequest,
    "achievements": Achievement,
}


def _records_to_frame(name: str, items: Iterable) -> pd.DataFrame:
    rows = [asdict(item) for item in items]
    if not rows:
        return pd.DataFrame(columns=[f.name for f in fields(RECORD_TYPES[name])])

    df = pd.DataFrame(rows)
    if "metadata" in df.columns:
        # Mixed-type dicts do not map cleanly onto parquet structs.
        df["metadata"] = df["metadata"].apply(lambda value: json.dumps(dict(value), sort_keys=True))
    return df


def history_to_frames(history: LearningHistory) -> Dict[str, pd.DataFrame]:
    return {name: _records_to_frame(name, items) for name, items in history.collections().items()}


def summarize_history(history: LearningHistory) -> Dict[str, object]:
    """Headline counts and rates for one learner's generated history."""

    records = history.progress_records
    scores = [r.score for r in records]
    completed = sum(1 for r in records if r.status == COMPLETED)
    summary: Dict[str, object] = {
        "learner_id": history.profile.learner_id,
        "grade_level": history.grade_level,
        "window_start": history.window_start.isoformat(),
        "window_end": history.window_end.isoformat(),
    }
    summary.update({name: len(items) for name, items in history.collections().items()})
    summary["mean_score"] = round(sum(scores) / len(scores), 2) if scores else 0.0
    summary["completion_rate"] = round(completed / len(records), 4) if records else 0.0
    summary["help_request_ratio"] = round(len(history.help_requests) / len(records), 4) if records else 0.0
    return summary


def summaries_frame(histories: Mapping[str, LearningHistory]) -> pd.DataFrame:
    return pd.DataFrame([summarize_history(history) for history in histories.values()])


def write_history(history: LearningHistory, output_dir: Path, fmt: str = "parquet") -> Dict[str, Path]:
    """
    Write every collection of `history` under `output_dir/<learner_id>/`.

    Returns the written paths keyed by collection name (plus "summary").
    """

    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format '{fmt}'. Expected one of: {', '.join(EXPORT_FORMATS)}.")

    learner_dir = Path(output_dir) / history.profile.learner_id
    learner_dir.mkdir(parents=True, exist_ok=True)

    written: Dict[str, Path] = {}
    for name, df in history_to_frames(history).items():
        path = learner_dir / f"{name}.{fmt}"
        if fmt == "parquet":
            df.to_parquet(path, index=False)
        else:
            df.to_json(path, orient="records", date_format="iso", indent=2)
        written[name] = path

    summary_path = learner_dir / "summary.json"
    summary_path.write_text(json.dumps(summarize_history(history), indent=2), encoding="utf-8")
    written["summary"] = summary_path
    return written
