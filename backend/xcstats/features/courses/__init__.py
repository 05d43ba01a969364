"""
Courses feature module - course model, normalization, catalog.

Usage:
    from xcstats.features.courses import Course, normalize
"""

from .models import Course
from .normalization import (
    NormalizationIssue,
    normalize,
    normalize_result,
    partition_normalizable,
    rating_from_difficulty,
    difficulty_label,
    meters_to_miles,
    miles_to_meters,
)
from .catalog import CourseCatalog

__all__ = [
    "Course",
    "NormalizationIssue",
    "normalize",
    "normalize_result",
    "partition_normalizable",
    "rating_from_difficulty",
    "difficulty_label",
    "meters_to_miles",
    "miles_to_meters",
    "CourseCatalog",
]
