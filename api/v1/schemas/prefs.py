from __future__ import annotations
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.models import SpiceLevel


class UserPrefsIn(BaseModel):
    dietary_preferences: List[str] = Field(default_factory=list, examples=[["vegetarian"]])
    favorite_regions: List[str] = Field(default_factory=list, examples=[["South Indian"]])
    spice_level: SpiceLevel | None = SpiceLevel.medium

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserPrefsOut(UserPrefsIn):
    user_id: int
    favorite_dish_ids: List[int] = []
