from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .dish import Dish
from .meal import MealSlot


class RecommendedDish(Dish):
    """Dish snapshot plus the per-request annotation. Never persisted."""

    recommendation_score: float
    is_favorite: bool = False
    reason: str | None = None


class RecommendationSet(BaseModel):
    meal_type: MealSlot
    date: dt.date
    recommendations: list[RecommendedDish] = []
    total_found: int = 0
    reason: str | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
