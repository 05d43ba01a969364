"""Results feature module - pre-joined result records and batch checks."""

from .models import School, Athlete, Meet, Race, Result
from .validation import (
    ensure_unique_pairs,
    filter_gender,
    group_by_athlete,
    group_by_race,
    result_sort_key,
)

__all__ = [
    "School",
    "Athlete",
    "Meet",
    "Race",
    "Result",
    "ensure_unique_pairs",
    "filter_gender",
    "group_by_athlete",
    "group_by_race",
    "result_sort_key",
]
