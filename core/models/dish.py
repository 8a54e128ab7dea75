from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class SpiceLevel(str, Enum):
    """Heat scale, totally ordered: mild < medium < hot < extra-hot."""

    mild = "mild"
    medium = "medium"
    hot = "hot"
    extra_hot = "extra-hot"

    @property
    def rank(self) -> int:
        return _SPICE_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SpiceLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, SpiceLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, SpiceLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, SpiceLevel):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def parse(cls, value: Any) -> "SpiceLevel | None":
        """Lenient lookup: unknown or blank values map to ``None``."""
        if value is None or isinstance(value, SpiceLevel):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


_SPICE_RANK = {level: i for i, level in enumerate(SpiceLevel)}


class DishType(str, Enum):
    veg = "Veg"
    non_veg = "Non-Veg"


class Nutrition(BaseModel):
    protein: int = 0
    carbs: int = 0
    fat: int = 0

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @field_validator("protein", "carbs", "fat", mode="before")
    @classmethod
    def _none_is_zero(cls, v: Any) -> Any:
        return 0 if v is None else v


class Dish(BaseModel):
    """
    Catalog entry as the recommender sees it.

    Optional fields carry their defaults here so scoring never has to
    null-check: missing calories are 0, missing tags are empty, an unknown
    spice level or dish type is ``None``.
    """

    id: int
    name: str
    cuisine: str = ""
    type: DishType | None = None
    calories: int = 0
    dietary_tags: tuple[str, ...] = ()
    spice_level: SpiceLevel | None = None
    difficulty: str | None = None
    prep_time: int = 0
    image: str | None = None
    nutrition: Nutrition = Nutrition()

    model_config = ConfigDict(
        frozen=True,
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("cuisine", mode="before")
    @classmethod
    def _cuisine(cls, v: Any) -> Any:
        return v or ""

    @field_validator("calories", "prep_time", mode="before")
    @classmethod
    def _int_or_zero(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("dietary_tags", mode="before")
    @classmethod
    def _tags(cls, v: Any) -> Any:
        if not v:
            return ()
        return tuple(t.strip() for t in v if isinstance(t, str) and t.strip())

    @field_validator("spice_level", mode="before")
    @classmethod
    def _spice(cls, v: Any) -> SpiceLevel | None:
        return SpiceLevel.parse(v)

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, v: Any) -> DishType | None:
        if v is None or isinstance(v, DishType):
            return v
        try:
            return DishType(v)
        except ValueError:
            return None

    @field_validator("nutrition", mode="before")
    @classmethod
    def _nutrition(cls, v: Any) -> Any:
        return v or Nutrition()
