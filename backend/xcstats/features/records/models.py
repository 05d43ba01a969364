"""Data models for records and personal bests (dataclasses, no DB dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from xcstats.features.courses.normalization import NormalizationIssue
from xcstats.shared.constants import Gender, HIGH_SCHOOL_GRADES, TEAM_SCORERS
from xcstats.shared.formatters import format_time


@dataclass(frozen=True)
class RecordEntry:
    """A single record-holding performance with its context."""

    result_id: str
    athlete_id: str
    athlete_name: str
    graduation_year: int
    time_seconds: float
    normalized_time: float | None
    course_id: str
    course_name: str
    meet_id: str
    meet_name: str
    race_id: str
    race_name: str
    race_date: date
    grade: int  # by athletic year, may fall outside 9-12

    def to_dict(self) -> dict:
        return {
            "result_id": self.result_id,
            "athlete_id": self.athlete_id,
            "athlete_name": self.athlete_name,
            "graduation_year": self.graduation_year,
            "time_seconds": self.time_seconds,
            "time_display": format_time(self.time_seconds),
            "normalized_time": (
                round(self.normalized_time, 2) if self.normalized_time is not None else None
            ),
            "course_id": self.course_id,
            "course_name": self.course_name,
            "meet_id": self.meet_id,
            "meet_name": self.meet_name,
            "race_id": self.race_id,
            "race_name": self.race_name,
            "race_date": self.race_date.isoformat(),
            "grade": self.grade,
        }


@dataclass
class GradeRecords:
    """Overall record plus the best performance for each grade 9-12."""

    overall: RecordEntry | None = None
    by_grade: dict[int, RecordEntry | None] = field(
        default_factory=lambda: {g: None for g in HIGH_SCHOOL_GRADES}
    )

    @property
    def is_empty(self) -> bool:
        return self.overall is None

    def to_dict(self) -> dict:
        return {
            "overall": self.overall.to_dict() if self.overall else None,
            "grades": {
                str(g): (e.to_dict() if e else None) for g, e in self.by_grade.items()
            },
        }


@dataclass(frozen=True)
class CoursePersonalBest:
    """An athlete's fastest raw time on one course."""

    course_id: str
    course_name: str
    distance_meters: float | None
    best: RecordEntry

    def to_dict(self) -> dict:
        return {
            "course_id": self.course_id,
            "course_name": self.course_name,
            "distance_meters": self.distance_meters,
            "best_time_seconds": self.best.time_seconds,
            "meet_name": self.best.meet_name,
            "race_date": self.best.race_date.isoformat(),
            "result_id": self.best.result_id,
        }


@dataclass(frozen=True)
class TeamRunner:
    """One of the five runners making up a team performance."""

    athlete_id: str
    athlete_name: str
    time_seconds: float
    place_overall: int | None = None


@dataclass
class TeamPerformance:
    """A school's top-five combined time in one race."""

    school_id: str
    school_name: str
    race_id: str
    race_name: str
    gender: Gender
    course_id: str
    course_name: str
    meet_name: str
    race_date: date
    team_time: float
    runners: list[TeamRunner] = field(default_factory=list)

    @property
    def average_time(self) -> float:
        return self.team_time / TEAM_SCORERS

    def to_dict(self) -> dict:
        return {
            "school_id": self.school_id,
            "school_name": self.school_name,
            "race_id": self.race_id,
            "race_name": self.race_name,
            "gender": self.gender.value,
            "course_id": self.course_id,
            "course_name": self.course_name,
            "meet_name": self.meet_name,
            "race_date": self.race_date.isoformat(),
            "team_time": round(self.team_time, 2),
            "average_time": round(self.average_time, 2),
            "runners": [
                {
                    "athlete_id": r.athlete_id,
                    "athlete_name": r.athlete_name,
                    "time_seconds": r.time_seconds,
                    "place_overall": r.place_overall,
                }
                for r in self.runners
            ],
        }


@dataclass(frozen=True)
class SeasonSummary:
    """An athlete's season by XC-equivalent time, races in date order."""

    season_year: int
    races: int
    best_time: float
    average_time: float
    first_time: float
    last_time: float

    @property
    def improvement(self) -> float | None:
        """Seconds gained from the first race to the last, None with one race."""
        if self.races < 2:
            return None
        return self.first_time - self.last_time

    def to_dict(self) -> dict:
        return {
            "season_year": self.season_year,
            "races": self.races,
            "best_time": round(self.best_time, 2),
            "best_time_display": format_time(self.best_time),
            "average_time": round(self.average_time, 2),
            "improvement": (
                round(self.improvement, 2) if self.improvement is not None else None
            ),
        }


@dataclass(frozen=True)
class RecordSubject:
    """Whose records to compute: one athlete, or one school and gender."""

    kind: str  # "athlete" / "school"
    id: str
    gender: Gender | None = None

    @classmethod
    def athlete(cls, athlete_id: str) -> RecordSubject:
        return cls(kind="athlete", id=athlete_id)

    @classmethod
    def school(cls, school_id: str, gender: Gender) -> RecordSubject:
        return cls(kind="school", id=school_id, gender=gender)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "id": self.id,
            "gender": self.gender.value if self.gender else None,
        }


@dataclass
class RecordSet:
    """All records derived for one subject."""

    subject: RecordSubject
    result_count: int
    # Athlete subjects
    personal_bests: list[CoursePersonalBest] = field(default_factory=list)
    all_course_best: RecordEntry | None = None
    season_summaries: list[SeasonSummary] = field(default_factory=list)  # newest first
    # School subjects
    xc_records: GradeRecords | None = None
    course_records: dict[str, GradeRecords] = field(default_factory=dict)
    best_per_athlete: list[RecordEntry] = field(default_factory=list)
    team_bests: dict[str, list[TeamPerformance]] = field(default_factory=dict)  # by course id
    # Both
    leaderboard: list[RecordEntry] = field(default_factory=list)
    excluded: list[NormalizationIssue] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "subject": self.subject.to_dict(),
            "result_count": self.result_count,
            "personal_bests": [pb.to_dict() for pb in self.personal_bests],
            "all_course_best": self.all_course_best.to_dict() if self.all_course_best else None,
            "season_summaries": [s.to_dict() for s in self.season_summaries],
            "xc_records": self.xc_records.to_dict() if self.xc_records else None,
            "course_records": {cid: rec.to_dict() for cid, rec in self.course_records.items()},
            "best_per_athlete": [e.to_dict() for e in self.best_per_athlete],
            "team_bests": {
                cid: [t.to_dict() for t in bests] for cid, bests in self.team_bests.items()
            },
            "leaderboard": [e.to_dict() for e in self.leaderboard],
            "excluded": [i.to_dict() for i in self.excluded],
        }
