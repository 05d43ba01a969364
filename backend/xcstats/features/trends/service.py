"""
Improvement trends.

Compares an athlete's best XC-equivalent time before a cutoff date
with their best since, and ranks the biggest improvers ("big movers")
separately for boys and girls.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Sequence

from xcstats.features.courses.normalization import partition_normalizable
from xcstats.features.results.models import Result
from xcstats.features.results.validation import (
    ensure_unique_pairs,
    filter_gender,
    group_by_athlete,
    result_sort_key,
)
from xcstats.shared.constants import Gender, MAX_PLAUSIBLE_TIME_SECONDS

from .models import BigMovers, DatedTime, ImprovementReport, Mover, Performance

logger = logging.getLogger(__name__)


def improvement(history: Sequence[DatedTime], cutoff_date: date) -> ImprovementReport | None:
    """
    Improvement of the best time since cutoff_date over the best before it.

    Args:
        history: An athlete's dated XC-equivalent times, any order.
        cutoff_date: First day of the "recent" window.

    Returns:
        None when either window is empty: no claim can be made, which
        is not the same as zero improvement.
    """
    before = [h.normalized_time for h in history if h.result_date < cutoff_date]
    recent = [h.normalized_time for h in history if h.result_date >= cutoff_date]

    if not before or not recent:
        return None

    old_pr = min(before)
    new_pr = min(recent)
    improved = new_pr < old_pr

    return ImprovementReport(
        cutoff_date=cutoff_date,
        old_pr=old_pr,
        new_pr=new_pr,
        improved=improved,
        improvement_pct=(old_pr - new_pr) / old_pr * 100 if improved else None,
        races_before=len(before),
        races_since=len(recent),
    )


def history_from_results(results: Iterable[Result]) -> list[DatedTime]:
    """Dated XC-equivalent times, oldest first. Unrated courses are skipped."""
    normalized, _ = partition_normalizable(results)
    history = [
        DatedTime(result_date=r.race_date, normalized_time=t, result_id=r.id)
        for r, t in normalized
    ]
    return sorted(history, key=lambda h: (h.result_date, h.normalized_time))


def big_movers(results: Iterable[Result], cutoff_date: date, limit: int = 5) -> BigMovers:
    """
    Top improvers across cutoff_date, split by gender.

    Each list filters on the athlete's own gender field, so a mixed
    input never leaks boys into the girls' list or the other way round.
    """
    batch = ensure_unique_pairs(results)
    normalized, excluded = partition_normalizable(batch)
    normalized_by_id = {r.id: t for r, t in normalized}

    movers: list[Mover] = []
    for athlete_results in group_by_athlete([r for r, _ in normalized]).values():
        history = [
            DatedTime(result_date=r.race_date, normalized_time=normalized_by_id[r.id], result_id=r.id)
            for r in athlete_results
        ]
        report = improvement(history, cutoff_date)
        if report is None or not report.improved:
            continue

        athlete = athlete_results[0].athlete
        latest = max(athlete_results, key=lambda r: (r.race_date, r.id))
        movers.append(
            Mover(
                athlete_id=athlete.id,
                athlete_name=athlete.full_name,
                gender=athlete.gender,
                school_name=latest.team.name if latest.team else None,
                report=report,
            )
        )

    def top(gender: Gender) -> list[Mover]:
        pool = [m for m in movers if m.gender == gender]
        pool.sort(key=lambda m: (-m.report.improvement_pct, m.athlete_id))
        return pool[:limit]

    result = BigMovers(
        cutoff_date=cutoff_date,
        boys=top(Gender.MALE),
        girls=top(Gender.FEMALE),
        excluded=excluded,
    )
    logger.debug(
        f"Big movers since {cutoff_date}: {len(movers)} improvers, "
        f"{len(result.boys)} boys / {len(result.girls)} girls listed"
    )
    return result


def recent_top_performances(
    results: Iterable[Result],
    since: date,
    limit: int = 5,
) -> dict[Gender, list[Performance]]:
    """
    Fastest raw times at meets on or after `since`, per gender.

    Times of an hour or more are treated as data errors and skipped.
    """
    recent = [
        r for r in ensure_unique_pairs(results)
        if r.race_date >= since and r.time_seconds < MAX_PLAUSIBLE_TIME_SECONDS
    ]

    performances: dict[Gender, list[Performance]] = {}
    for gender in Gender:
        ordered = sorted(
            filter_gender(recent, gender),
            key=lambda r: result_sort_key(r, r.time_seconds),
        )
        performances[gender] = [
            Performance(
                result_id=r.id,
                athlete_id=r.athlete.id,
                athlete_name=r.athlete.full_name,
                gender=r.athlete.gender,
                time_seconds=r.time_seconds,
                course_name=r.course.name,
                meet_name=r.meet.name,
                race_date=r.race_date,
            )
            for r in ordered[:limit]
        ]
    return performances
