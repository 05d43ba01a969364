"""
Records module - personal bests, school records, leaderboards, team bests.

Usage:
    from xcstats.features.records import compute_records, RecordSubject
"""

from .models import (
    RecordEntry,
    GradeRecords,
    CoursePersonalBest,
    TeamRunner,
    TeamPerformance,
    SeasonSummary,
    RecordSubject,
    RecordSet,
)
from .service import (
    grade_of,
    record_entry,
    personal_bests,
    all_course_best,
    season_of,
    season_summary,
    xc_records,
    course_records,
    leaderboard,
    team_bests,
    team_bests_by_course,
    compute_records,
)

__all__ = [
    # Models
    "RecordEntry",
    "GradeRecords",
    "CoursePersonalBest",
    "TeamRunner",
    "TeamPerformance",
    "SeasonSummary",
    "RecordSubject",
    "RecordSet",
    # Service
    "grade_of",
    "record_entry",
    "personal_bests",
    "all_course_best",
    "season_of",
    "season_summary",
    "xc_records",
    "course_records",
    "leaderboard",
    "team_bests",
    "team_bests_by_course",
    "compute_records",
]
