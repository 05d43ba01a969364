"""Data models for team scoring (dataclasses, no DB dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field

from xcstats.features.courses.normalization import NormalizationIssue
from xcstats.features.results.models import School
from xcstats.shared.constants import TeamRole, TEAM_SCORERS


@dataclass(frozen=True)
class RunnerPlacement:
    """One runner's placing within a scored race."""

    result_id: str
    athlete_id: str
    athlete_name: str
    school_id: str | None
    school_name: str | None
    time_seconds: float
    normalized_time: float | None
    overall_place: int  # 1-based over every placed runner
    team_place: int | None = None  # 1-based within own school
    scoring_place: int | None = None  # only for qualifying runners
    role: TeamRole | None = None

    @property
    def is_qualifier(self) -> bool:
        return self.scoring_place is not None

    def to_dict(self) -> dict:
        return {
            "result_id": self.result_id,
            "athlete_id": self.athlete_id,
            "athlete_name": self.athlete_name,
            "school_id": self.school_id,
            "school_name": self.school_name,
            "time_seconds": self.time_seconds,
            "normalized_time": (
                round(self.normalized_time, 2) if self.normalized_time is not None else None
            ),
            "overall_place": self.overall_place,
            "team_place": self.team_place,
            "scoring_place": self.scoring_place,
            "role": self.role.value if self.role else None,
        }


@dataclass
class TeamStanding:
    """A complete team's result in one race."""

    rank: int
    school: School
    score: int
    runners: list[RunnerPlacement]  # team-place order
    sixth_runner_place: int | None = None
    tiebreak: str | None = None  # rule that separated it from the team above

    @property
    def counting(self) -> list[RunnerPlacement]:
        return self.runners[:TEAM_SCORERS]

    @property
    def displacers(self) -> list[RunnerPlacement]:
        return [r for r in self.runners if r.role == TeamRole.DISPLACER]

    @property
    def team_time_seconds(self) -> float:
        return sum(r.time_seconds for r in self.counting)

    def to_dict(self) -> dict:
        return {
            "rank": self.rank,
            "school_id": self.school.id,
            "school_name": self.school.name,
            "score": self.score,
            "scoring_places": [r.scoring_place for r in self.counting],
            "sixth_runner_place": self.sixth_runner_place,
            "tiebreak": self.tiebreak,
            "team_time_seconds": round(self.team_time_seconds, 2),
            "runners": [r.to_dict() for r in self.runners],
        }


@dataclass
class IncompleteTeam:
    """A school with fewer than five finishers. Not ranked."""

    school: School
    runners: list[RunnerPlacement]

    def to_dict(self) -> dict:
        return {
            "school_id": self.school.id,
            "school_name": self.school.name,
            "finishers": len(self.runners),
            "runners": [r.to_dict() for r in self.runners],
        }


@dataclass
class RaceScoring:
    """Complete result of scoring one race."""

    race_id: str | None
    standings: list[TeamStanding] = field(default_factory=list)
    incomplete_teams: list[IncompleteTeam] = field(default_factory=list)
    individuals: list[RunnerPlacement] = field(default_factory=list)  # overall order
    unscored: list[NormalizationIssue] = field(default_factory=list)

    @property
    def has_team_scores(self) -> bool:
        return bool(self.standings)

    def standing_for(self, school_id: str) -> TeamStanding | None:
        return next((s for s in self.standings if s.school.id == school_id), None)

    def to_dict(self) -> dict:
        return {
            "race_id": self.race_id,
            "standings": [s.to_dict() for s in self.standings],
            "incomplete_teams": [t.to_dict() for t in self.incomplete_teams],
            "individuals": [r.to_dict() for r in self.individuals],
            "unscored": [i.to_dict() for i in self.unscored],
        }
