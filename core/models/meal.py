from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MealSlot(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"


class MealLogEntry(BaseModel):
    """A dish a user ate on a calendar day for one meal slot."""

    id: int | None = None
    user_id: int
    dish_id: int
    date: dt.date
    meal_type: MealSlot
    notes: str | None = None
    rating: int = Field(0, ge=0, le=5)   # 0 = not rated

    model_config = ConfigDict(
        frozen=True,
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
