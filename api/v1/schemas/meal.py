from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.models import MealSlot


class MealLogIn(BaseModel):
    dish_id: int
    date: dt.date
    meal_type: MealSlot
    notes: str | None = None
    rating: int = Field(0, ge=0, le=5)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MealLogOut(MealLogIn):
    id: int
    user_id: int

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )
