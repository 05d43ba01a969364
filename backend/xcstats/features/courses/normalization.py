"""
Course normalization.

Converts a raw finish time on a course into an XC-equivalent time
that can be compared with times from other courses:

    normalized = raw_time_seconds * course.normalization_rating

The difficulty multiplier is a separate descriptive number (hardness
relative to a flat mile) and is never used in place of the rating.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from xcstats.shared.constants import (
    MAX_DIFFICULTY,
    METERS_PER_MILE,
    REFERENCE_DISTANCE_METERS,
)
from xcstats.shared.errors import MissingRatingError

from .models import Course

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizationIssue:
    """A result left out of a cross-course comparison."""

    result_id: str
    athlete_id: str
    course_id: str
    course_name: str
    reason: str

    def to_dict(self) -> dict:
        return {
            "result_id": self.result_id,
            "athlete_id": self.athlete_id,
            "course_id": self.course_id,
            "course_name": self.course_name,
            "reason": self.reason,
        }


def normalize(raw_time_seconds: float, course: Course) -> float:
    """
    Convert a raw time on `course` into an XC-equivalent time.

    Raises:
        MissingRatingError: If the course has no normalization rating.
            Callers must treat this as "cannot compare", not as 1.0.
    """
    if course.normalization_rating is None:
        raise MissingRatingError(course)
    return raw_time_seconds * course.normalization_rating


def normalize_result(result) -> float:
    """XC-equivalent time of a Result on its own course."""
    return normalize(result.time_seconds, result.course)


def partition_normalizable(results: Iterable) -> tuple[list[tuple], list[NormalizationIssue]]:
    """
    Split results into (result, normalized_time) pairs and issues.

    Unratable results are collected, never raised, so one bad course
    does not abort the rest of the batch.
    """
    normalized: list[tuple] = []
    issues: list[NormalizationIssue] = []

    for result in results:
        try:
            normalized.append((result, normalize_result(result)))
        except MissingRatingError as e:
            issues.append(
                NormalizationIssue(
                    result_id=result.id,
                    athlete_id=result.athlete.id,
                    course_id=e.course.id,
                    course_name=e.course.name,
                    reason="missing_rating",
                )
            )

    if issues:
        courses = sorted({i.course_name for i in issues})
        logger.warning(
            f"{len(issues)} result(s) excluded from normalization, unrated courses: {courses}"
        )

    return normalized, issues


def rating_from_difficulty(difficulty_multiplier: float, distance_meters: float) -> float:
    """
    Derive a normalization rating from course difficulty and distance.

    rating = difficulty * 4747 / distance_meters, rounded to 7 places.
    """
    if distance_meters <= 0:
        raise ValueError("Distance must be greater than 0")
    if difficulty_multiplier < 0 or difficulty_multiplier > MAX_DIFFICULTY:
        raise ValueError(f"Difficulty rating must be between 0 and {MAX_DIFFICULTY:g}")

    rating = difficulty_multiplier * REFERENCE_DISTANCE_METERS / distance_meters
    return round(rating, 7)


def difficulty_label(difficulty_multiplier: float | None) -> str:
    """Human label for a course difficulty multiplier."""
    if difficulty_multiplier is None or difficulty_multiplier < 0:
        return "Unknown"
    if difficulty_multiplier >= 1.0:
        return "Very Hard"
    if difficulty_multiplier >= 0.5:
        return "Moderate"
    return "Easy"


def meters_to_miles(meters: float) -> float:
    return round(meters / METERS_PER_MILE, 2)


def miles_to_meters(miles: float) -> int:
    return round(miles * METERS_PER_MILE)
