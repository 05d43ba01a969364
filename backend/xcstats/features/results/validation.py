"""Batch-level checks on result collections."""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Sequence

from xcstats.shared.constants import Gender
from xcstats.shared.errors import DuplicateResultError

from .models import Result


def ensure_unique_pairs(results: Iterable[Result]) -> list[Result]:
    """
    Fail loudly if any (athlete, race) pair occurs twice in the batch.

    Returns the results as a list so callers can iterate again.

    Raises:
        DuplicateResultError: Naming the first offending pair.
    """
    batch = list(results)
    seen: dict[tuple[str, str], list[str]] = defaultdict(list)
    for r in batch:
        seen[r.pair_key].append(r.id)

    for (athlete_id, race_id), result_ids in seen.items():
        if len(result_ids) > 1:
            raise DuplicateResultError(athlete_id, race_id, result_ids)

    return batch


def filter_gender(results: Iterable[Result], gender: Gender) -> list[Result]:
    """Results of athletes of the given gender (athlete's own field)."""
    return [r for r in results if r.athlete.gender == gender]


def group_by_athlete(results: Sequence[Result]) -> dict[str, list[Result]]:
    groups: dict[str, list[Result]] = defaultdict(list)
    for r in results:
        groups[r.athlete.id].append(r)
    return dict(groups)


def group_by_race(results: Sequence[Result]) -> dict[str, list[Result]]:
    groups: dict[str, list[Result]] = defaultdict(list)
    for r in results:
        groups[r.race.id].append(r)
    return dict(groups)


def result_sort_key(result: Result, time: float) -> tuple[float, float, str]:
    """
    Deterministic ordering for equal times.

    Primary key is the compared time (normalized or raw), then the raw
    time, then the result id.
    """
    return (time, result.time_seconds, str(result.id))
