# ABOUTME: Validates dataframe conversion, summaries, and on-disk export of histories.
# ABOUTME: Writes parquet and JSON artifacts into temporary directories.

import json
import random
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from src.learning_history.catalog import InMemoryCatalog
from src.learning_history.export import history_to_frames, summarize_history, summaries_frame, write_history
from src.learning_history.generator import generate_learning_history
from src.learning_history.schemas import LearnerProfile

from conftest import CATALOG_PAYLOAD

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


class HistoryExportTest(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.output_dir = Path(self.tmpdir.name)
        catalog = InMemoryCatalog.from_dict(CATALOG_PAYLOAD)
        profile = LearnerProfile(
            learner_id="child-1",
            time_range_months=4,
            learning_velocity="fast",
            subject_preferences={"math": 0.9, "science": 0.8, "art": 0.1},
            session_frequency="high",
            consistency_level="consistent",
        )
        self.history = generate_learning_history(profile, catalog, random.Random(17), now=NOW)

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def test_history_to_frames_has_one_row_per_record(self) -> None:
        frames = history_to_frames(self.history)
        self.assertEqual(
            [
                "study_plans",
                "activities",
                "progress_records",
                "content_interactions",
                "resource_usage",
                "help_requests",
                "achievements",
            ],
            list(frames),
        )
        self.assertEqual(len(self.history.progress_records), len(frames["progress_records"]))
        self.assertIn("score", frames["progress_records"].columns)
        self.assertIn("plan_id", frames["activities"].columns)
        for value in frames["achievements"].get("metadata", []):
            self.assertIsInstance(json.loads(value), dict)

    def test_summary_matches_collections(self) -> None:
        summary = summarize_history(self.history)
        records = self.history.progress_records
        self.assertEqual("child-1", summary["learner_id"])
        self.assertEqual(len(records), summary["progress_records"])
        self.assertEqual(len(self.history.help_requests), summary["help_requests"])
        self.assertAlmostEqual(sum(r.score for r in records) / len(records), summary["mean_score"], places=2)
        self.assertTrue(0.0 <= summary["completion_rate"] <= 1.0)

        frame = summaries_frame({"child-1": self.history})
        self.assertEqual(["child-1"], frame["learner_id"].tolist())

    def test_write_history_parquet(self) -> None:
        written = write_history(self.history, self.output_dir, "parquet")
        self.assertEqual(self.output_dir / "child-1" / "progress_records.parquet", written["progress_records"])
        df = pd.read_parquet(written["progress_records"])
        self.assertEqual(len(self.history.progress_records), len(df))
        summary = json.loads(written["summary"].read_text(encoding="utf-8"))
        self.assertEqual(len(self.history.activities), summary["activities"])

    def test_write_history_json(self) -> None:
        written = write_history(self.history, self.output_dir, "json")
        rows = json.loads(written["study_plans"].read_text(encoding="utf-8"))
        self.assertEqual(len(self.history.study_plans), len(rows))
        self.assertEqual(sum(1 for row in rows if row["is_active"]), 1)

    def test_write_history_rejects_unknown_format(self) -> None:
        with self.assertRaises(ValueError):
            write_history(self.history, self.output_dir, "xml")
