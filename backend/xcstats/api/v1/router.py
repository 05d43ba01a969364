"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from xcstats.api.v1.routes import courses, scoring, records, trends

api_router = APIRouter()

api_router.include_router(courses.router, prefix="/courses", tags=["Courses"])
api_router.include_router(scoring.router, prefix="/scoring", tags=["Scoring"])
api_router.include_router(records.router, prefix="/records", tags=["Records"])
api_router.include_router(trends.router, prefix="/trends", tags=["Trends"])
