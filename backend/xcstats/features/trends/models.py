"""Data models for improvement trends (dataclasses, no DB dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from xcstats.features.courses.normalization import NormalizationIssue
from xcstats.shared.constants import Gender
from xcstats.shared.formatters import format_percent


@dataclass(frozen=True)
class DatedTime:
    """One XC-equivalent time with the date it was run."""

    result_date: date
    normalized_time: float
    result_id: str | None = None


@dataclass(frozen=True)
class ImprovementReport:
    """
    Best time before a cutoff vs best time since.

    improvement_pct is None when the recent best is not faster;
    regressions are never reported as negative improvement.
    """

    cutoff_date: date
    old_pr: float
    new_pr: float
    improved: bool
    improvement_pct: float | None
    races_before: int
    races_since: int

    def to_dict(self) -> dict:
        return {
            "cutoff_date": self.cutoff_date.isoformat(),
            "old_pr": round(self.old_pr, 2),
            "new_pr": round(self.new_pr, 2),
            "improved": self.improved,
            "improvement_display": format_percent(self.improvement_pct),
            "improvement_pct": (
                round(self.improvement_pct, 2) if self.improvement_pct is not None else None
            ),
            "races_before": self.races_before,
            "races_since": self.races_since,
        }


@dataclass(frozen=True)
class Mover:
    """An athlete whose recent best beats their earlier best."""

    athlete_id: str
    athlete_name: str
    gender: Gender
    school_name: str | None
    report: ImprovementReport

    def to_dict(self) -> dict:
        return {
            "athlete_id": self.athlete_id,
            "athlete_name": self.athlete_name,
            "gender": self.gender.value,
            "school_name": self.school_name,
            **self.report.to_dict(),
        }


@dataclass
class BigMovers:
    """Top improvers split by the athletes' own gender."""

    cutoff_date: date
    boys: list[Mover] = field(default_factory=list)
    girls: list[Mover] = field(default_factory=list)
    excluded: list[NormalizationIssue] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "cutoff_date": self.cutoff_date.isoformat(),
            "boys": [m.to_dict() for m in self.boys],
            "girls": [m.to_dict() for m in self.girls],
            "excluded": [i.to_dict() for i in self.excluded],
        }


@dataclass(frozen=True)
class Performance:
    """A recent fast raw time, for "top performances" lists."""

    result_id: str
    athlete_id: str
    athlete_name: str
    gender: Gender
    time_seconds: float
    course_name: str
    meet_name: str
    race_date: date

    def to_dict(self) -> dict:
        return {
            "result_id": self.result_id,
            "athlete_id": self.athlete_id,
            "athlete_name": self.athlete_name,
            "gender": self.gender.value,
            "time_seconds": self.time_seconds,
            "course_name": self.course_name,
            "meet_name": self.meet_name,
            "race_date": self.race_date.isoformat(),
        }
