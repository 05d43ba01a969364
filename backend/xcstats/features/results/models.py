"""
Pre-joined result records (dataclasses, no DB dependency).

The persistence layer joins Result -> Athlete -> School and
Result -> Race -> Meet -> Course before handing rows to the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from xcstats.features.courses.models import Course
from xcstats.shared.constants import Gender, MeetType


@dataclass(frozen=True)
class School:
    """A school fielding a team."""

    id: str
    name: str


@dataclass(frozen=True)
class Athlete:
    """A competitor. `school` is the current school only."""

    id: str
    first_name: str
    last_name: str
    gender: Gender
    graduation_year: int
    school: School | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class Meet:
    """A meet held on one course. Several meets can share a date and course."""

    id: str
    name: str
    meet_date: date
    course: Course
    meet_type: MeetType = MeetType.REGULAR


@dataclass(frozen=True)
class Race:
    """Gender- and category-scoped subdivision of a meet ("Boys Varsity")."""

    id: str
    meet: Meet
    gender: Gender
    category: str = "Varsity"
    name: str | None = None

    @property
    def course(self) -> Course:
        return self.meet.course

    @property
    def race_date(self) -> date:
        return self.meet.meet_date

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        label = "Boys" if self.gender == Gender.MALE else "Girls"
        return f"{label} {self.category}"


@dataclass(frozen=True)
class Result:
    """
    One athlete's finish in one race.

    `school` is an optional point-in-time school reference. When set it
    wins over the athlete's current school for team attribution, so a
    transferred athlete's old results stay with their old team.
    """

    id: str
    athlete: Athlete
    race: Race
    time_seconds: float
    place_overall: int | None = None
    season_year: int | None = None
    school: School | None = None

    def __post_init__(self):
        if self.time_seconds is None or self.time_seconds <= 0:
            raise ValueError(
                f"Result {self.id} needs a positive finish time, got {self.time_seconds!r}"
            )

    @property
    def course(self) -> Course:
        return self.race.course

    @property
    def meet(self) -> Meet:
        return self.race.meet

    @property
    def race_date(self) -> date:
        return self.race.race_date

    @property
    def gender(self) -> Gender:
        return self.athlete.gender

    @property
    def team(self) -> School | None:
        return self.school or self.athlete.school

    @property
    def pair_key(self) -> tuple[str, str]:
        return (self.athlete.id, self.race.id)
