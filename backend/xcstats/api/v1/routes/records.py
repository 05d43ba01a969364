"""
Records API Routes

Endpoints for athlete personal bests and school records.
"""

from fastapi import APIRouter, Query

from xcstats.api.v1.errors import engine_errors
from xcstats.api.v1.routes.courses import get_catalog
from xcstats.config import settings
from xcstats.features.records import RecordSubject, compute_records
from xcstats.schemas.results import ResultBatchRequest, build_results
from xcstats.shared.constants import Gender

router = APIRouter()


@router.post("/athlete/{athlete_id}")
async def athlete_records(athlete_id: str, request: ResultBatchRequest):
    """Personal bests and leaderboard for one athlete."""
    with engine_errors():
        results = build_results(request.results, get_catalog())
        record_set = compute_records(
            results,
            RecordSubject.athlete(athlete_id),
            leaderboard_size=settings.leaderboard_size,
            team_bests_limit=settings.team_bests_limit,
        )
    return record_set.to_dict()


@router.post("/school/{school_id}")
async def school_records(
    school_id: str,
    request: ResultBatchRequest,
    gender: Gender = Query(..., description="M or F"),
):
    """School XC records, course records, leaderboards and team bests."""
    with engine_errors():
        results = build_results(request.results, get_catalog())
        record_set = compute_records(
            results,
            RecordSubject.school(school_id, gender),
            leaderboard_size=settings.leaderboard_size,
            team_bests_limit=settings.team_bests_limit,
        )
    return record_set.to_dict()
