# ABOUTME: Shares a small curriculum catalog and a fixed clock across generator tests.
# ABOUTME: Keeps every test independent of wall-clock time and bundled YAML data.

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.learning_history.catalog import InMemoryCatalog


CATALOG_PAYLOAD = {
    "learners": {"child-1": "5"},
    "grades": {
        "5": {
            "subjects": [
                {
                    "id": "math",
                    "display_name": "Mathematics",
                    "topics": [
                        {"id": "fractions", "display_name": "Fractions", "difficulty": "BEGINNER"},
                        {"id": "decimals", "display_name": "Decimals", "difficulty": "INTERMEDIATE"},
                        {"id": "volume", "display_name": "Volume", "difficulty": "ADVANCED"},
                    ],
                },
                {
                    "id": "science",
                    "display_name": "Science",
                    "topics": [
                        {"id": "ecosystems", "display_name": "Ecosystems", "difficulty": "INTERMEDIATE"},
                        {"id": "matter", "display_name": "Matter", "difficulty": "BEGINNER"},
                    ],
                },
                {"id": "art", "display_name": "Art", "topics": []},
            ]
        }
    },
}


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def catalog() -> InMemoryCatalog:
    return InMemoryCatalog.from_dict(CATALOG_PAYLOAD)
