"""
Athletic year and competition grade.

The school year spans July 1 - June 30. A meet in the fall belongs
to the school year that ends the following June.

    >>> school_year_ending(date(2024, 11, 4))
    2025
    >>> competition_grade(2026, date(2024, 11, 4))
    11
"""

from datetime import date

from .constants import ATHLETIC_YEAR_START_MONTH, MIN_GRADE, MAX_GRADE


def school_year_ending(result_date: date) -> int:
    """Calendar year in which the school year containing result_date ends."""
    if result_date.month >= ATHLETIC_YEAR_START_MONTH:
        return result_date.year + 1
    return result_date.year


def competition_grade(graduation_year: int, result_date: date) -> int:
    """
    Grade an athlete competed in on result_date.

    Not clamped: a result recorded in middle school yields 7 or 8,
    and callers decide what to do with out-of-range grades.
    """
    return 12 - (graduation_year - school_year_ending(result_date))


def is_high_school_grade(grade: int) -> bool:
    return MIN_GRADE <= grade <= MAX_GRADE
