"""
Records and personal bests.

Read-only reductions over a collection of results:
- personal_bests: fastest raw time per course for an athlete
- xc_records: school records by XC-equivalent time, overall and per grade
- course_records: school records on each course by raw time
- leaderboard: top-N by XC-equivalent time, explicit per-athlete mode
- team_bests: best five-runner combined times, per course
- season_summary: an athlete's season by XC-equivalent time

None of these mutate their input, so calling them again on the same
results gives the same answer.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Sequence

from xcstats.features.courses.normalization import normalize, partition_normalizable
from xcstats.features.results.models import Result
from xcstats.features.results.validation import (
    ensure_unique_pairs,
    filter_gender,
    group_by_race,
    result_sort_key,
)
from xcstats.shared.athletic_year import competition_grade, is_high_school_grade
from xcstats.shared.constants import Gender, LeaderboardMode, TEAM_SCORERS
from xcstats.shared.errors import InsufficientDataError

from .models import (
    CoursePersonalBest,
    GradeRecords,
    RecordEntry,
    RecordSet,
    RecordSubject,
    SeasonSummary,
    TeamPerformance,
    TeamRunner,
)

logger = logging.getLogger(__name__)


def grade_of(result: Result) -> int:
    """Competition grade of the athlete at the time of the result."""
    return competition_grade(result.athlete.graduation_year, result.race_date)


def record_entry(result: Result, normalized_time: float | None = None) -> RecordEntry:
    """Snapshot a result with the context that travels with a record."""
    return RecordEntry(
        result_id=result.id,
        athlete_id=result.athlete.id,
        athlete_name=result.athlete.full_name,
        graduation_year=result.athlete.graduation_year,
        time_seconds=result.time_seconds,
        normalized_time=normalized_time,
        course_id=result.course.id,
        course_name=result.course.name,
        meet_id=result.meet.id,
        meet_name=result.meet.name,
        race_id=result.race.id,
        race_name=result.race.display_name,
        race_date=result.race_date,
        grade=grade_of(result),
    )


def _fastest(pairs: Iterable[tuple[Result, float]]) -> tuple[Result, float] | None:
    return min(pairs, key=lambda pair: result_sort_key(*pair), default=None)


def _raw_pairs(results: Iterable[Result]) -> list[tuple[Result, float]]:
    return [(r, r.time_seconds) for r in results]


def _same_course_normalized(result: Result) -> float | None:
    if not result.course.has_rating:
        return None
    return normalize(result.time_seconds, result.course)


# =============================================================================
# Athlete records
# =============================================================================

def personal_bests(results: Iterable[Result]) -> list[CoursePersonalBest]:
    """Fastest raw time on each course the athlete has raced, by course name."""
    by_course: dict[str, list[Result]] = defaultdict(list)
    for r in ensure_unique_pairs(results):
        by_course[r.course.id].append(r)

    bests = []
    for course_results in by_course.values():
        result, _ = _fastest(_raw_pairs(course_results))
        bests.append(
            CoursePersonalBest(
                course_id=result.course.id,
                course_name=result.course.name,
                distance_meters=result.course.distance_meters,
                best=record_entry(result, _same_course_normalized(result)),
            )
        )

    return sorted(bests, key=lambda pb: (pb.course_name, pb.course_id))


def all_course_best(results: Iterable[Result]) -> RecordEntry | None:
    """Fastest XC-equivalent time across rated courses, None if none are rated."""
    normalized, _ = partition_normalizable(ensure_unique_pairs(results))
    best = _fastest(normalized)
    if best is None:
        return None
    return record_entry(*best)


def season_of(result: Result) -> int:
    """Season a result counts toward, falling back to the meet's calendar year."""
    if result.season_year is not None:
        return result.season_year
    return result.race_date.year


def season_summary(results: Iterable[Result], season_year: int) -> SeasonSummary | None:
    """
    Race count, best, average and first-to-last change for one season.

    Uses XC-equivalent times, so unrated results are left out. Returns
    None when the season has no rated results.
    """
    season = [r for r in ensure_unique_pairs(results) if season_of(r) == season_year]
    normalized, _ = partition_normalizable(season)
    if not normalized:
        return None

    normalized.sort(key=lambda pair: (pair[0].race_date, pair[0].id))
    times = [t for _, t in normalized]
    return SeasonSummary(
        season_year=season_year,
        races=len(times),
        best_time=min(times),
        average_time=sum(times) / len(times),
        first_time=times[0],
        last_time=times[-1],
    )


# =============================================================================
# School records
# =============================================================================

def _grade_records(
    pairs: Sequence[tuple[Result, float]],
    normalized_of,
) -> GradeRecords:
    records = GradeRecords()
    best = _fastest(pairs)
    if best is None:
        return records

    result, _ = best
    records.overall = record_entry(result, normalized_of(best))

    by_grade: dict[int, list[tuple[Result, float]]] = defaultdict(list)
    for pair in pairs:
        grade = grade_of(pair[0])
        if is_high_school_grade(grade):
            by_grade[grade].append(pair)

    for grade, grade_pairs in by_grade.items():
        fastest = _fastest(grade_pairs)
        records.by_grade[grade] = record_entry(fastest[0], normalized_of(fastest))

    return records


def xc_records(results: Iterable[Result], gender: Gender) -> tuple[GradeRecords, list]:
    """
    School XC records across all rated courses.

    Returns:
        (GradeRecords by XC-equivalent time, results excluded for
        missing course ratings)
    """
    pool = filter_gender(ensure_unique_pairs(results), gender)
    normalized, excluded = partition_normalizable(pool)
    return _grade_records(normalized, lambda pair: pair[1]), excluded


def course_records(results: Iterable[Result], gender: Gender) -> dict[str, GradeRecords]:
    """
    School records on each course by raw time, keyed by course id.

    Unrated courses still get course records.
    """
    pool = filter_gender(ensure_unique_pairs(results), gender)
    by_course: dict[str, list[Result]] = defaultdict(list)
    for r in pool:
        by_course[r.course.id].append(r)

    return {
        course_id: _grade_records(
            _raw_pairs(course_results),
            lambda pair: _same_course_normalized(pair[0]),
        )
        for course_id, course_results in sorted(by_course.items())
    }


def leaderboard(
    results: Iterable[Result],
    limit: int,
    mode: LeaderboardMode,
) -> list[RecordEntry]:
    """
    Top `limit` performances by XC-equivalent time.

    `mode` has no default: ALL_RESULTS lets an athlete appear several
    times, BEST_PER_ATHLETE keeps only each athlete's fastest.
    Results on unrated courses are left out.
    """
    mode = LeaderboardMode(mode)
    if limit < 1:
        raise ValueError(f"Leaderboard limit must be positive: {limit}")

    normalized, _ = partition_normalizable(ensure_unique_pairs(results))
    ordered = sorted(normalized, key=lambda pair: result_sort_key(*pair))

    if mode == LeaderboardMode.BEST_PER_ATHLETE:
        seen: set[str] = set()
        unique = []
        for pair in ordered:
            if pair[0].athlete.id in seen:
                continue
            seen.add(pair[0].athlete.id)
            unique.append(pair)
        ordered = unique

    return [record_entry(r, t) for r, t in ordered[:limit]]


def team_bests(
    results: Iterable[Result],
    limit: int,
    course_id: str | None = None,
) -> list[TeamPerformance]:
    """
    Best combined top-five raw times per (school, race).

    Races where a school had fewer than five finishers do not count.
    With course_id, only races on that course are considered.
    """
    batch = ensure_unique_pairs(results)
    if course_id is not None:
        batch = [r for r in batch if r.course.id == course_id]

    performances = []
    for race_results in group_by_race(batch).values():
        by_team: dict[str, list[Result]] = defaultdict(list)
        for r in race_results:
            if r.team is not None:
                by_team[r.team.id].append(r)

        for runners in by_team.values():
            if len(runners) < TEAM_SCORERS:
                continue
            top = sorted(runners, key=lambda r: result_sort_key(r, r.time_seconds))[:TEAM_SCORERS]
            first = top[0]
            performances.append(
                TeamPerformance(
                    school_id=first.team.id,
                    school_name=first.team.name,
                    race_id=first.race.id,
                    race_name=first.race.display_name,
                    gender=first.race.gender,
                    course_id=first.course.id,
                    course_name=first.course.name,
                    meet_name=first.meet.name,
                    race_date=first.race_date,
                    team_time=sum(r.time_seconds for r in top),
                    runners=[
                        TeamRunner(
                            athlete_id=r.athlete.id,
                            athlete_name=r.athlete.full_name,
                            time_seconds=r.time_seconds,
                            place_overall=r.place_overall,
                        )
                        for r in top
                    ],
                )
            )

    performances.sort(key=lambda p: (p.team_time, p.race_date, p.race_id, p.school_id))
    return performances[:limit]


def team_bests_by_course(results: Iterable[Result], limit: int) -> dict[str, list[TeamPerformance]]:
    """Team bests per course, keyed by course id. Courses without a full team are left out."""
    batch = ensure_unique_pairs(results)
    course_ids = sorted({r.course.id for r in batch})
    by_course = {course_id: team_bests(batch, limit, course_id=course_id) for course_id in course_ids}
    return {course_id: bests for course_id, bests in by_course.items() if bests}


# =============================================================================
# Entry point
# =============================================================================

def compute_records(
    results: Iterable[Result],
    subject: RecordSubject,
    leaderboard_size: int = 10,
    team_bests_limit: int = 10,
) -> RecordSet:
    """
    Compute every record for an athlete or for a school and gender.

    Raises:
        DuplicateResultError: Same athlete twice in one race.
        InsufficientDataError: No results belong to the subject.
    """
    batch = ensure_unique_pairs(results)

    if subject.kind == "athlete":
        pool = [r for r in batch if r.athlete.id == subject.id]
    elif subject.kind == "school":
        if subject.gender is None:
            raise ValueError("School records need a gender")
        pool = [
            r for r in batch
            if r.team is not None and r.team.id == subject.id and r.gender == subject.gender
        ]
    else:
        raise ValueError(f"Unknown record subject: {subject.kind}")

    if not pool:
        raise InsufficientDataError(f"No results for {subject.kind} {subject.id}")

    _, excluded = partition_normalizable(pool)
    record_set = RecordSet(subject=subject, result_count=len(pool), excluded=excluded)

    if subject.kind == "athlete":
        record_set.personal_bests = personal_bests(pool)
        record_set.all_course_best = all_course_best(pool)
        seasons = sorted({season_of(r) for r in pool}, reverse=True)
        record_set.season_summaries = [
            summary for summary in (season_summary(pool, year) for year in seasons)
            if summary is not None
        ]
        record_set.leaderboard = leaderboard(pool, leaderboard_size, LeaderboardMode.ALL_RESULTS)
    else:
        record_set.xc_records, _ = xc_records(pool, subject.gender)
        record_set.course_records = course_records(pool, subject.gender)
        record_set.leaderboard = leaderboard(pool, leaderboard_size, LeaderboardMode.ALL_RESULTS)
        record_set.best_per_athlete = leaderboard(
            pool, leaderboard_size, LeaderboardMode.BEST_PER_ATHLETE
        )
        record_set.team_bests = team_bests_by_course(pool, team_bests_limit)

    logger.debug(
        f"Records for {subject.kind} {subject.id}: {len(pool)} results, "
        f"{len(excluded)} excluded from XC comparison"
    )
    return record_set
