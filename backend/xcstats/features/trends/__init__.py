"""
Trends module - improvement over time and big movers.

Usage:
    from xcstats.features.trends import improvement, big_movers
"""

from .models import DatedTime, ImprovementReport, Mover, BigMovers, Performance
from .service import improvement, history_from_results, big_movers, recent_top_performances

__all__ = [
    # Models
    "DatedTime",
    "ImprovementReport",
    "Mover",
    "BigMovers",
    "Performance",
    # Service
    "improvement",
    "history_from_results",
    "big_movers",
    "recent_top_performances",
]
