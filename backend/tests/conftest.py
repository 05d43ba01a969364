"""
Shared test data builders.

Builders are plain functions exposed through fixtures so tests can
assemble races without a database.
"""

from datetime import date
from itertools import count

import pytest

from xcstats.features.courses import Course
from xcstats.features.results import Athlete, Meet, Race, Result, School
from xcstats.shared.constants import Gender


RATED_COURSE = Course(
    id="fossil-creek",
    name="Fossil Creek Park",
    distance_meters=5000,
    difficulty_multiplier=1.05,
    normalization_rating=1.0,
)

HARD_COURSE = Course(
    id="edora",
    name="Edora Park",
    distance_meters=5000,
    difficulty_multiplier=1.2,
    normalization_rating=0.9,
)

UNRATED_COURSE = Course(
    id="city-park",
    name="City Park 4K",
    distance_meters=4000,
    difficulty_multiplier=0.98,
)

_ids = count(1)


def make_school(school_id: str, name: str | None = None) -> School:
    return School(id=school_id, name=name or f"{school_id.title()} High School")


def make_athlete(
    athlete_id: str | None = None,
    school: School | None = None,
    gender: Gender = Gender.MALE,
    graduation_year: int = 2026,
    first_name: str | None = None,
    last_name: str = "Runner",
) -> Athlete:
    athlete_id = athlete_id or f"a{next(_ids)}"
    return Athlete(
        id=athlete_id,
        first_name=first_name or athlete_id,
        last_name=last_name,
        gender=gender,
        graduation_year=graduation_year,
        school=school,
    )


def make_race(
    race_id: str = "r1",
    course: Course = RATED_COURSE,
    meet_date: date = date(2024, 9, 14),
    gender: Gender = Gender.MALE,
    meet_id: str | None = None,
) -> Race:
    meet = Meet(
        id=meet_id or f"m-{race_id}",
        name=f"Meet {race_id}",
        meet_date=meet_date,
        course=course,
    )
    return Race(id=race_id, meet=meet, gender=gender)


def make_result(
    athlete: Athlete,
    race: Race,
    time_seconds: float,
    result_id: str | None = None,
    school: School | None = None,
) -> Result:
    return Result(
        id=result_id or f"res{next(_ids)}",
        athlete=athlete,
        race=race,
        time_seconds=time_seconds,
        season_year=race.race_date.year,
        school=school,
    )


def make_team(
    school: School,
    race: Race,
    times: list[float],
    gender: Gender = Gender.MALE,
) -> list[Result]:
    """One result per time, each for a new athlete of `school`."""
    results = []
    for i, t in enumerate(times, start=1):
        athlete = make_athlete(f"{school.id}-{race.id}-{i}", school=school, gender=gender)
        results.append(make_result(athlete, race, t, result_id=f"{school.id}-{race.id}-res{i}"))
    return results


@pytest.fixture
def race():
    return make_race()
