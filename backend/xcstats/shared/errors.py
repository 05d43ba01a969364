"""
Engine exceptions.

Per-item errors (MissingRatingError) are collected by callers and
returned next to successful results. Whole-batch errors
(DuplicateResultError) abort the computation for that batch.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from xcstats.features.courses.models import Course


class EngineError(Exception):
    """Base scoring engine error."""
    pass


class MissingRatingError(EngineError):
    """Course has no normalization rating, so its times cannot be compared."""

    def __init__(self, course: Course):
        self.course = course
        super().__init__(
            f"Course {course.id} ({course.name}) has no normalization rating"
        )


class DuplicateResultError(EngineError):
    """The same athlete appears twice in one race within an input batch."""

    def __init__(self, athlete_id: str, race_id: str, result_ids: Sequence[str] = ()):
        self.athlete_id = athlete_id
        self.race_id = race_id
        self.result_ids = list(result_ids)
        super().__init__(
            f"Duplicate result for athlete {athlete_id} in race {race_id}"
            f" (results: {', '.join(self.result_ids) or 'unknown'})"
        )


class InsufficientDataError(EngineError):
    """Computation was requested over an empty or under-populated input."""
    pass
