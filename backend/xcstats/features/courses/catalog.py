"""Course catalog loader - reads courses.yaml and provides course lookup."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .models import Course
from .normalization import miles_to_meters, rating_from_difficulty

logger = logging.getLogger(__name__)


class CourseCatalog:
    """
    Loads and provides access to the course catalog from YAML.

    The catalog is the explicit course lookup handed to whoever joins
    results to courses. It holds no matching heuristics.

    Expected layout of content_dir/courses/courses.yaml:

        courses:
          - id: "fcp"
            name: "Fossil Creek Park"
            distance_meters: 5000
            difficulty_multiplier: 1.12
            normalization_rating: 1.0634   # optional

    distance_miles may be given instead of distance_meters.
    """

    def __init__(self, content_dir: Path):
        self.content_dir = content_dir
        self._courses: list[Course] | None = None

    @property
    def path(self) -> Path:
        return self.content_dir / "courses" / "courses.yaml"

    def load(self) -> list[Course]:
        """Load catalog from courses.yaml."""
        if not self.path.exists():
            logger.info(f"Course catalog not found at {self.path}")
            self._courses = []
            return []

        with open(self.path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        courses = [_course_from_entry(c) for c in data.get("courses", [])]
        self._courses = courses
        logger.info(f"Loaded {len(courses)} courses from {self.path}")
        return courses

    @property
    def courses(self) -> list[Course]:
        if self._courses is None:
            self.load()
        return self._courses or []

    def get_course(self, course_id: str) -> Course | None:
        return next((c for c in self.courses if c.id == course_id), None)

    def rated(self) -> list[Course]:
        return [c for c in self.courses if c.has_rating]

    def unrated(self) -> list[Course]:
        return [c for c in self.courses if not c.has_rating]


def _course_from_entry(entry: dict) -> Course:
    """
    Build a Course from one YAML entry.

    With `derive_rating: true` the rating is computed from difficulty
    and distance instead of being read from the file.
    """
    distance = entry.get("distance_meters")
    if distance is None and entry.get("distance_miles") is not None:
        distance = miles_to_meters(entry["distance_miles"])

    rating = entry.get("normalization_rating")
    if rating is None and entry.get("derive_rating"):
        rating = rating_from_difficulty(entry["difficulty_multiplier"], distance)

    return Course(
        id=str(entry["id"]),
        name=entry["name"],
        distance_meters=distance,
        difficulty_multiplier=entry.get("difficulty_multiplier"),
        normalization_rating=rating,
    )
