"""
Trends API Routes

Endpoints for improvement reports, big movers and top performances.
"""

from datetime import date, timedelta
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from xcstats.api.v1.errors import engine_errors
from xcstats.api.v1.routes.courses import get_catalog
from xcstats.config import settings
from xcstats.features.trends import (
    DatedTime,
    improvement,
    big_movers,
    recent_top_performances,
)
from xcstats.schemas.results import ResultRowSchema, build_results

router = APIRouter()


# === Pydantic schemas ===


class DatedTimeSchema(BaseModel):
    result_date: date
    normalized_time: float = Field(gt=0)
    result_id: Optional[str] = None


class ImprovementRequest(BaseModel):
    history: List[DatedTimeSchema]
    cutoff_date: date


class BigMoversRequest(BaseModel):
    results: List[ResultRowSchema] = Field(default_factory=list)
    cutoff_date: Optional[date] = None  # default: today minus the configured window
    limit: Optional[int] = Field(default=None, ge=1)


class TopPerformancesRequest(BaseModel):
    results: List[ResultRowSchema] = Field(default_factory=list)
    since: Optional[date] = None
    limit: Optional[int] = Field(default=None, ge=1)


# === Endpoints ===


@router.post("/improvement")
async def improvement_report(request: ImprovementRequest):
    """Best time since the cutoff vs best time before it. `report` is null without data."""
    history = [
        DatedTime(result_date=h.result_date, normalized_time=h.normalized_time, result_id=h.result_id)
        for h in request.history
    ]
    report = improvement(history, request.cutoff_date)
    return {"report": report.to_dict() if report else None}


@router.post("/big-movers")
async def big_movers_report(request: BigMoversRequest):
    """Top improvers, boys and girls listed separately."""
    cutoff = request.cutoff_date or date.today() - timedelta(days=settings.big_movers_window_days)
    with engine_errors():
        results = build_results(request.results, get_catalog())
        movers = big_movers(results, cutoff, request.limit or settings.big_movers_limit)
    return movers.to_dict()


@router.post("/top-performances")
async def top_performances(request: TopPerformancesRequest):
    """Fastest recent raw times per gender."""
    since = request.since or date.today() - timedelta(days=settings.recent_performance_days)
    with engine_errors():
        results = build_results(request.results, get_catalog())
        performances = recent_top_performances(results, since, request.limit or settings.big_movers_limit)
    return {
        gender.value: [p.to_dict() for p in items]
        for gender, items in performances.items()
    }
