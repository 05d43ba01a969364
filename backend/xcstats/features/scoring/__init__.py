"""
Team scoring module.

Usage:
    from xcstats.features.scoring import score_race

Components:
- score_race: one race, team standings with displacement
- score_meet: every race of a meet
- combined_placements: per-gender overall order across a meet's races
"""

from .models import RunnerPlacement, TeamStanding, IncompleteTeam, RaceScoring
from .service import score_race, score_meet, combined_placements, team_role

__all__ = [
    # Models
    "RunnerPlacement",
    "TeamStanding",
    "IncompleteTeam",
    "RaceScoring",
    # Service
    "score_race",
    "score_meet",
    "combined_placements",
    "team_role",
]
