"""
Shared utilities (NOT business logic).

Usage:
    from xcstats.shared import Gender, competition_grade
    from xcstats.shared.formatters import format_time
"""
from .constants import (
    Gender,
    MeetType,
    TeamRole,
    LeaderboardMode,
    TEAM_SCORERS,
    TEAM_MAX_RUNNERS_SCORED,
    MIN_GRADE,
    MAX_GRADE,
    HIGH_SCHOOL_GRADES,
)
from .errors import (
    EngineError,
    MissingRatingError,
    DuplicateResultError,
    InsufficientDataError,
)
from .athletic_year import (
    school_year_ending,
    competition_grade,
    is_high_school_grade,
)
from .formatters import format_time, parse_time, format_percent

__all__ = [
    # constants
    "Gender",
    "MeetType",
    "TeamRole",
    "LeaderboardMode",
    "TEAM_SCORERS",
    "TEAM_MAX_RUNNERS_SCORED",
    "MIN_GRADE",
    "MAX_GRADE",
    "HIGH_SCHOOL_GRADES",
    # errors
    "EngineError",
    "MissingRatingError",
    "DuplicateResultError",
    "InsufficientDataError",
    # athletic year
    "school_year_ending",
    "competition_grade",
    "is_high_school_grade",
    # formatters
    "format_time",
    "parse_time",
    "format_percent",
]
