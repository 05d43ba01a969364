"""
Scoring API Routes

Endpoints for race and meet team scoring.
"""

from fastapi import APIRouter

from xcstats.api.v1.errors import engine_errors
from xcstats.api.v1.routes.courses import get_catalog
from xcstats.features.scoring import score_race, score_meet, combined_placements
from xcstats.schemas.results import ResultBatchRequest, build_results

router = APIRouter()


@router.post("/race")
async def score_single_race(request: ResultBatchRequest):
    """Score every result of one race."""
    with engine_errors():
        results = build_results(request.results, get_catalog())
        return score_race(results).to_dict()


@router.post("/meet")
async def score_whole_meet(request: ResultBatchRequest):
    """Score each race of a meet independently."""
    with engine_errors():
        results = build_results(request.results, get_catalog())
        return {"races": [s.to_dict() for s in score_meet(results)]}


@router.post("/meet/combined")
async def combined_meet_results(request: ResultBatchRequest):
    """Overall order per gender across all races of a meet."""
    with engine_errors():
        results = build_results(request.results, get_catalog())
        combined = combined_placements(results)
    return {
        gender.value: [p.to_dict() for p in placements]
        for gender, placements in combined.items()
    }
