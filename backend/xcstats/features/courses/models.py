"""Course model (dataclass, no DB dependency)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Course:
    """A cross-country course."""

    id: str
    name: str
    distance_meters: float | None = None
    difficulty_multiplier: float | None = None  # vs flat track mile, display only
    normalization_rating: float | None = None  # raw time -> XC-equivalent time

    @property
    def has_rating(self) -> bool:
        return self.normalization_rating is not None

    @property
    def distance_miles(self) -> float | None:
        from .normalization import meters_to_miles
        if self.distance_meters is None:
            return None
        return meters_to_miles(self.distance_meters)

    @property
    def difficulty_label(self) -> str:
        from .normalization import difficulty_label
        return difficulty_label(self.difficulty_multiplier)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "distance_meters": self.distance_meters,
            "distance_miles": self.distance_miles,
            "difficulty_multiplier": self.difficulty_multiplier,
            "difficulty_label": self.difficulty_label,
            "normalization_rating": self.normalization_rating,
        }
