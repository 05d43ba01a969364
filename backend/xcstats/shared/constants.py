"""
Constants for cross-country scoring.

Single source of truth for gender tags, team roles and the
numbers fixed by cross-country scoring rules.
"""

from enum import Enum


class Gender(str, Enum):
    """
    Canonical competitor gender.

    Ingestion maps "Boys"/"Girls" and friends to these tags.
    The engine only ever compares against the enum.
    """
    MALE = "M"
    FEMALE = "F"


class MeetType(str, Enum):
    """Meet type tag."""
    REGULAR = "regular"
    INVITATIONAL = "invitational"
    CHAMPIONSHIP = "championship"
    OTHER = "other"


class TeamRole(str, Enum):
    """
    Scoring role of a runner within their team for one race.

    - COUNTING: team places 1-5, their places make the team score
    - DISPLACER: team places 6-7, push opposing scorers back
    - NON_COUNTING: team place 8 and beyond
    - INCOMPLETE: member of a team with fewer than 5 finishers
    """
    COUNTING = "counting"
    DISPLACER = "displacer"
    NON_COUNTING = "non_counting"
    INCOMPLETE = "incomplete"


class LeaderboardMode(str, Enum):
    """How a top-N leaderboard treats athletes with several results."""
    ALL_RESULTS = "all_results"
    BEST_PER_ATHLETE = "best_per_athlete"


# === Team scoring ===
TEAM_SCORERS = 5              # Runners whose places make the score
TEAM_MAX_RUNNERS_SCORED = 7   # Scorers + displacers

# === Grades ===
MIN_GRADE = 9
MAX_GRADE = 12
HIGH_SCHOOL_GRADES: tuple[int, ...] = tuple(range(MIN_GRADE, MAX_GRADE + 1))

# Athletic year runs July 1 - June 30
ATHLETIC_YEAR_START_MONTH = 7

# === Courses ===
# Rating = difficulty * REFERENCE_DISTANCE_METERS / distance_meters
REFERENCE_DISTANCE_METERS = 4747
METERS_PER_MILE = 1609.34
MAX_DIFFICULTY = 100.0

# Times at or above this are treated as data errors on leaderboards
MAX_PLAUSIBLE_TIME_SECONDS = 3600
