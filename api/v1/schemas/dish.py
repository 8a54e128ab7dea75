from __future__ import annotations
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from core.models import DishType, Nutrition, SpiceLevel


class DishIn(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    type: DishType
    cuisine: str
    image: str | None = None
    ingredients: List[str] = Field(..., min_length=1)
    calories: int = Field(0, ge=0)
    nutrition: Nutrition = Nutrition()
    dietary_tags: List[str] = []
    spice_level: SpiceLevel | None = None
    difficulty: str | None = Field(None, pattern="^(easy|medium|hard)$")
    prep_time: int = Field(0, ge=0)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DishOut(DishIn):
    id: int

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    # nullable columns on stored rows
    @field_validator("calories", "prep_time", mode="before")
    @classmethod
    def _int_or_zero(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("nutrition", mode="before")
    @classmethod
    def _nutrition(cls, v: Any) -> Any:
        return v or Nutrition()

    @field_validator("dietary_tags", mode="before")
    @classmethod
    def _tags(cls, v: Any) -> Any:
        return v or []

    @field_validator("spice_level", mode="before")
    @classmethod
    def _spice(cls, v: Any) -> SpiceLevel | None:
        return SpiceLevel.parse(v)
