# ABOUTME: Provides the curriculum catalog lookups the history generator reads from.
# ABOUTME: Ships a dict-backed catalog that can be loaded from YAML reference data.

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping, Optional, Protocol

import yaml

from .schemas import INTERMEDIATE, Subject, Topic


class LearnerNotFoundError(LookupError):
    """Raised when a learner id cannot be resolved to a grade level."""

    def __init__(self, learner_id: str):
        super().__init__(f"Learner not found: {learner_id}")
        self.learner_id = learner_id


class CurriculumCatalog(Protocol):
    def grade_for_learner(self, learner_id: str) -> Optional[str]:
        ...

    def subjects_for_grade(self, grade: str) -> List[Subject]:
        ...

    def topics_for_subject(self, grade: str, subject_id: str) -> List[Topic]:
        ...


class InMemoryCatalog:
    """
    Catalog snapshot held in plain dictionaries.

    Expected payload layout (also the YAML layout)::

        learners:
          child-1: "5"
        grades:
          "5":
            subjects:
              - id: mathematics
                display_name: Mathematics
                topics:
                  - id: fractions
                    display_name: Fractions
                    difficulty: BEGINNER
    """

    def __init__(
        self,
        learners: Optional[Mapping[str, str]] = None,
        subjects: Optional[Mapping[str, List[Subject]]] = None,
        topics: Optional[Mapping[tuple, List[Topic]]] = None,
    ):
        self._learners: Dict[str, str] = dict(learners or {})
        self._subjects: Dict[str, List[Subject]] = {k: list(v) for k, v in (subjects or {}).items()}
        self._topics: Dict[tuple, List[Topic]] = {k: list(v) for k, v in (topics or {}).items()}

    @classmethod
    def from_dict(cls, payload: Mapping) -> "InMemoryCatalog":
        learners = {str(k): str(v) for k, v in (payload.get("learners") or {}).items()}
        subjects: Dict[str, List[Subject]] = {}
        topics: Dict[tuple, List[Topic]] = {}

        for grade, grade_cfg in (payload.get("grades") or {}).items():
            grade = str(grade)
            subjects[grade] = []
            for subject_cfg in (grade_cfg or {}).get("subjects", []):
                subject = Subject(
                    id=str(subject_cfg["id"]),
                    display_name=subject_cfg.get("display_name", subject_cfg["id"]),
                    name=subject_cfg.get("name", subject_cfg["id"]),
                    grade_level=grade,
                    difficulty=subject_cfg.get("difficulty", INTERMEDIATE),
                )
                subjects[grade].append(subject)
                topics[(grade, subject.id)] = [
                    Topic(
                        id=str(topic_cfg["id"]),
                        subject_id=subject.id,
                        display_name=topic_cfg.get("display_name", topic_cfg["id"]),
                        difficulty=topic_cfg.get("difficulty", INTERMEDIATE),
                        grade_level=grade,
                    )
                    for topic_cfg in subject_cfg.get("topics", [])
                ]

        return cls(learners=learners, subjects=subjects, topics=topics)

    @classmethod
    def from_yaml(cls, path: Path) -> "InMemoryCatalog":
        with open(path, encoding="utf-8") as f:
            payload = yaml.safe_load(f) or {}
        return cls.from_dict(payload)

    def copy(self) -> "InMemoryCatalog":
        return InMemoryCatalog(self._learners, self._subjects, self._topics)

    def register_learner(self, learner_id: str, grade: str) -> None:
        self._learners[learner_id] = str(grade)

    def grade_for_learner(self, learner_id: str) -> Optional[str]:
        return self._learners.get(learner_id)

    def subjects_for_grade(self, grade: str) -> List[Subject]:
        return list(self._subjects.get(str(grade), []))

    def topics_for_subject(self, grade: str, subject_id: str) -> List[Topic]:
        return list(self._topics.get((str(grade), subject_id), []))

    def grades(self) -> List[str]:
        return list(self._subjects)

    def all_subject_ids(self) -> List[str]:
        seen: List[str] = []
        for grade_subjects in self._subjects.values():
            for subject in grade_subjects:
                if subject.id not in seen:
                    seen.append(subject.id)
        return seen
