"""
Result row schemas.

Pydantic models for pre-joined result rows posted to the API, and
the conversion into engine dataclasses.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from xcstats.features.courses import Course, CourseCatalog
from xcstats.features.results import Athlete, Meet, Race, Result, School
from xcstats.shared.constants import Gender, MeetType
from xcstats.shared.formatters import parse_time


class ResultRowSchema(BaseModel):
    """One result joined with its athlete, school, race, meet and course."""
    result_id: str
    time_seconds: float = Field(gt=0)
    place_overall: Optional[int] = Field(default=None, ge=1)
    season_year: Optional[int] = None

    # Athlete
    athlete_id: str
    first_name: str
    last_name: str
    gender: Gender
    graduation_year: int

    # Current school, and optionally the school at the time of the result
    school_id: Optional[str] = None
    school_name: Optional[str] = None
    result_school_id: Optional[str] = None
    result_school_name: Optional[str] = None

    # Race
    race_id: str
    race_gender: Gender
    race_category: str = "Varsity"
    race_name: Optional[str] = None

    # Meet
    meet_id: str
    meet_name: str
    meet_date: date
    meet_type: MeetType = MeetType.REGULAR

    # Course (name omitted = look it up in the course catalog)
    course_id: str
    course_name: Optional[str] = None
    distance_meters: Optional[float] = Field(default=None, gt=0)
    difficulty_multiplier: Optional[float] = None
    normalization_rating: Optional[float] = Field(default=None, gt=0)

    @field_validator("time_seconds", mode="before")
    @classmethod
    def parse_time_string(cls, v):
        """Accept 'MM:SS.ss' strings as well as seconds."""
        if isinstance(v, str):
            return parse_time(v)
        return v


class ResultBatchRequest(BaseModel):
    """A batch of result rows."""
    results: List[ResultRowSchema] = Field(default_factory=list)


class ResultBuilder:
    """
    Turns rows into Result dataclasses.

    Rows sharing an id share one Course/Meet/Race/School/Athlete object;
    the first row seen for an id wins.
    """

    def __init__(self, catalog: Optional[CourseCatalog] = None):
        self.catalog = catalog
        self._courses: dict[str, Course] = {}
        self._meets: dict[str, Meet] = {}
        self._races: dict[str, Race] = {}
        self._schools: dict[str, School] = {}
        self._athletes: dict[str, Athlete] = {}

    def build(self, rows: List[ResultRowSchema]) -> list[Result]:
        return [self._result(row) for row in rows]

    def _result(self, row: ResultRowSchema) -> Result:
        point_in_time = None
        if row.result_school_id:
            point_in_time = self._school(row.result_school_id, row.result_school_name)

        return Result(
            id=row.result_id,
            athlete=self._athlete(row),
            race=self._race(row),
            time_seconds=row.time_seconds,
            place_overall=row.place_overall,
            season_year=row.season_year,
            school=point_in_time,
        )

    def _course(self, row: ResultRowSchema) -> Course:
        if row.course_id in self._courses:
            return self._courses[row.course_id]

        if row.course_name is None:
            course = self.catalog.get_course(row.course_id) if self.catalog else None
            if course is None:
                raise ValueError(f"Unknown course {row.course_id} and no course details given")
        else:
            course = Course(
                id=row.course_id,
                name=row.course_name,
                distance_meters=row.distance_meters,
                difficulty_multiplier=row.difficulty_multiplier,
                normalization_rating=row.normalization_rating,
            )
        self._courses[row.course_id] = course
        return course

    def _meet(self, row: ResultRowSchema) -> Meet:
        if row.meet_id not in self._meets:
            self._meets[row.meet_id] = Meet(
                id=row.meet_id,
                name=row.meet_name,
                meet_date=row.meet_date,
                course=self._course(row),
                meet_type=row.meet_type,
            )
        return self._meets[row.meet_id]

    def _race(self, row: ResultRowSchema) -> Race:
        if row.race_id not in self._races:
            self._races[row.race_id] = Race(
                id=row.race_id,
                meet=self._meet(row),
                gender=row.race_gender,
                category=row.race_category,
                name=row.race_name,
            )
        return self._races[row.race_id]

    def _school(self, school_id: str, name: Optional[str]) -> School:
        if school_id not in self._schools:
            self._schools[school_id] = School(id=school_id, name=name or school_id)
        return self._schools[school_id]

    def _athlete(self, row: ResultRowSchema) -> Athlete:
        if row.athlete_id not in self._athletes:
            school = self._school(row.school_id, row.school_name) if row.school_id else None
            self._athletes[row.athlete_id] = Athlete(
                id=row.athlete_id,
                first_name=row.first_name,
                last_name=row.last_name,
                gender=row.gender,
                graduation_year=row.graduation_year,
                school=school,
            )
        return self._athletes[row.athlete_id]


def build_results(rows: List[ResultRowSchema], catalog: Optional[CourseCatalog] = None) -> list[Result]:
    """Convert posted rows into engine Result records."""
    return ResultBuilder(catalog).build(rows)
