"""
Courses API Routes

Endpoints for the course catalog and rating derivation.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from xcstats.config import settings
from xcstats.features.courses import CourseCatalog, rating_from_difficulty, difficulty_label
from xcstats.shared.constants import MAX_DIFFICULTY

router = APIRouter()

# Singleton catalog (loaded once, cached)
_catalog = CourseCatalog(settings.content_dir)


def get_catalog() -> CourseCatalog:
    return _catalog


# === Pydantic schemas ===


class CourseSchema(BaseModel):
    id: str
    name: str
    distance_meters: Optional[float] = None
    distance_miles: Optional[float] = None
    difficulty_multiplier: Optional[float] = None
    difficulty_label: str
    normalization_rating: Optional[float] = None


class RatingRequest(BaseModel):
    difficulty_multiplier: float = Field(ge=0, le=MAX_DIFFICULTY)
    distance_meters: float = Field(gt=0)


class RatingResponse(BaseModel):
    normalization_rating: float
    difficulty_label: str


# === Endpoints ===


@router.get("", response_model=list[CourseSchema])
async def list_courses(rated_only: bool = False):
    """Get course catalog."""
    courses = _catalog.rated() if rated_only else _catalog.courses
    return [CourseSchema(**c.to_dict()) for c in courses]


@router.get("/{course_id}", response_model=CourseSchema)
async def get_course(course_id: str):
    """Get single course details."""
    course = _catalog.get_course(course_id)
    if not course:
        raise HTTPException(status_code=404, detail=f"Course not found: {course_id}")
    return CourseSchema(**course.to_dict())


@router.post("/rating", response_model=RatingResponse)
async def derive_rating(request: RatingRequest):
    """Derive a normalization rating from difficulty and distance."""
    try:
        rating = rating_from_difficulty(request.difficulty_multiplier, request.distance_meters)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return RatingResponse(
        normalization_rating=rating,
        difficulty_label=difficulty_label(request.difficulty_multiplier),
    )
