"""
Team Scoring Service

Scores one race under cross-country rules:
- Overall placement by XC-equivalent time
- Complete teams (5+ finishers) vs incomplete teams
- Team places and roles (counting 1-5, displacer 6-7, non-counting 8+)
- Scoring places for qualifiers only (team places 1-7 of complete teams),
  equal to their overall place
- Team score = sum of the five counting scoring places

Tie-breaks:
- Equal normalized times: raw time, then result id. Places stay
  distinct and consecutive.
- Equal team scores: sixth runner's scoring place (lower wins, a team
  without a sixth runner loses), then school name, then school id.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from typing import Iterable, Sequence

from xcstats.features.courses.normalization import partition_normalizable
from xcstats.features.results.models import Result, School
from xcstats.features.results.validation import (
    ensure_unique_pairs,
    group_by_race,
    result_sort_key,
)
from xcstats.shared.constants import (
    Gender,
    TeamRole,
    TEAM_MAX_RUNNERS_SCORED,
    TEAM_SCORERS,
)

from .models import IncompleteTeam, RaceScoring, RunnerPlacement, TeamStanding

logger = logging.getLogger(__name__)


def team_role(team_place: int) -> TeamRole:
    """Role of a complete team's runner by their team place."""
    if team_place <= TEAM_SCORERS:
        return TeamRole.COUNTING
    if team_place <= TEAM_MAX_RUNNERS_SCORED:
        return TeamRole.DISPLACER
    return TeamRole.NON_COUNTING


def score_race(results: Iterable[Result]) -> RaceScoring:
    """
    Score all results of one race.

    Args:
        results: Every result of a single race, in any order.

    Returns:
        RaceScoring with standings, incomplete teams, every placed
        runner in overall order, and results that could not be scored.

    Raises:
        DuplicateResultError: Same athlete twice in the race.
        ValueError: Results span more than one race.
    """
    batch = ensure_unique_pairs(results)
    race_ids = {r.race.id for r in batch}
    if len(race_ids) > 1:
        raise ValueError(f"score_race expects one race, got {len(race_ids)}: {sorted(race_ids)}")
    race_id = next(iter(race_ids), None)

    normalized, unscored = partition_normalizable(batch)
    ordered = sorted(normalized, key=lambda pair: result_sort_key(*pair))

    # Team membership in overall order, so list index = team place - 1
    members: dict[str, list[Result]] = defaultdict(list)
    schools: dict[str, School] = {}
    for result, _ in ordered:
        team = result.team
        if team is None:
            continue
        members[team.id].append(result)
        schools[team.id] = team

    complete = {sid for sid, runners in members.items() if len(runners) >= TEAM_SCORERS}
    team_places = {
        r.id: place
        for runners in members.values()
        for place, r in enumerate(runners, start=1)
    }

    # Qualifiers score with their overall place
    scoring_places: dict[str, int] = {}
    for overall_place, (result, _) in enumerate(ordered, start=1):
        team = result.team
        if team is None or team.id not in complete:
            continue
        if team_places[result.id] <= TEAM_MAX_RUNNERS_SCORED:
            scoring_places[result.id] = overall_place

    placements: dict[str, RunnerPlacement] = {}
    individuals: list[RunnerPlacement] = []
    for overall_place, (result, normalized_time) in enumerate(ordered, start=1):
        team = result.team
        team_place = team_places.get(result.id)
        if team is not None and team.id in complete:
            role = team_role(team_place)
        else:
            role = TeamRole.INCOMPLETE

        placement = RunnerPlacement(
            result_id=result.id,
            athlete_id=result.athlete.id,
            athlete_name=result.athlete.full_name,
            school_id=team.id if team else None,
            school_name=team.name if team else None,
            time_seconds=result.time_seconds,
            normalized_time=normalized_time,
            overall_place=overall_place,
            team_place=team_place,
            scoring_place=scoring_places.get(result.id),
            role=role,
        )
        placements[result.id] = placement
        individuals.append(placement)

    standings = _rank_teams(
        [
            (schools[sid], [placements[r.id] for r in members[sid]])
            for sid in complete
        ]
    )

    incomplete_teams = [
        IncompleteTeam(
            school=schools[sid],
            runners=[placements[r.id] for r in runners],
        )
        for sid, runners in members.items()
        if sid not in complete
    ]
    incomplete_teams.sort(key=lambda t: (t.runners[0].overall_place, t.school.id))

    logger.debug(
        f"Scored race {race_id}: {len(individuals)} placed, "
        f"{len(standings)} complete teams, {len(incomplete_teams)} incomplete, "
        f"{len(unscored)} unscored"
    )

    return RaceScoring(
        race_id=race_id,
        standings=standings,
        incomplete_teams=incomplete_teams,
        individuals=individuals,
        unscored=unscored,
    )


def _rank_teams(teams: Sequence[tuple[School, list[RunnerPlacement]]]) -> list[TeamStanding]:
    """Order complete teams by score with the sixth-runner tie-break."""
    scored = []
    for school, runners in teams:
        score = sum(r.scoring_place for r in runners[:TEAM_SCORERS])
        sixth = runners[TEAM_SCORERS].scoring_place if len(runners) > TEAM_SCORERS else None
        scored.append((school, runners, score, sixth))

    scored.sort(
        key=lambda t: (
            t[2],
            t[3] if t[3] is not None else math.inf,
            t[0].name,
            t[0].id,
        )
    )

    standings: list[TeamStanding] = []
    for rank, (school, runners, score, sixth) in enumerate(scored, start=1):
        tiebreak = None
        if standings and standings[-1].score == score:
            if standings[-1].sixth_runner_place != sixth:
                tiebreak = "sixth_runner"
            else:
                tiebreak = "name_order"
        standings.append(
            TeamStanding(
                rank=rank,
                school=school,
                score=score,
                runners=runners,
                sixth_runner_place=sixth,
                tiebreak=tiebreak,
            )
        )
    return standings


def score_meet(results: Iterable[Result]) -> list[RaceScoring]:
    """
    Score every race of a meet independently.

    Ordered by race gender (boys first), category, then race id.
    """
    batch = ensure_unique_pairs(results)
    by_race = group_by_race(batch)

    def race_order(race_results: list[Result]) -> tuple:
        race = race_results[0].race
        return (race.gender != Gender.MALE, race.category, race.id)

    return [score_race(rs) for rs in sorted(by_race.values(), key=race_order)]


def combined_placements(results: Iterable[Result]) -> dict[Gender, list[RunnerPlacement]]:
    """
    One overall ordering per gender across all races of a meet.

    Every race of a meet is run on the meet's course, so raw times
    order correctly even for unrated courses. No team scoring here.

    Raises:
        ValueError: Results span more than one meet.
    """
    batch = ensure_unique_pairs(results)
    meet_ids = {r.meet.id for r in batch}
    if len(meet_ids) > 1:
        raise ValueError(
            f"combined_placements expects one meet, got {len(meet_ids)}: {sorted(meet_ids)}"
        )
    combined: dict[Gender, list[RunnerPlacement]] = {}

    for gender in Gender:
        pool = sorted(
            (r for r in batch if r.athlete.gender == gender),
            key=lambda r: result_sort_key(r, r.time_seconds),
        )
        combined[gender] = [
            RunnerPlacement(
                result_id=r.id,
                athlete_id=r.athlete.id,
                athlete_name=r.athlete.full_name,
                school_id=r.team.id if r.team else None,
                school_name=r.team.name if r.team else None,
                time_seconds=r.time_seconds,
                normalized_time=None,
                overall_place=place,
            )
            for place, r in enumerate(pool, start=1)
        ]

    return combined
