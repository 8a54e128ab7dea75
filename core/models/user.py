from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from .dish import SpiceLevel


class UserPreferenceProfile(BaseModel):
    """Read-only snapshot of what a user likes; one per user."""

    user_id: int
    dietary_preferences: frozenset[str] = frozenset()
    favorite_regions: frozenset[str] = frozenset()
    spice_level: SpiceLevel | None = None
    favorite_dish_ids: frozenset[int] = frozenset()

    model_config = ConfigDict(
        frozen=True,
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator(
        "dietary_preferences", "favorite_regions", "favorite_dish_ids", mode="before"
    )
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        return v or frozenset()

    @field_validator("spice_level", mode="before")
    @classmethod
    def _spice(cls, v: Any) -> SpiceLevel | None:
        return SpiceLevel.parse(v)

    def is_favorite(self, dish_id: int) -> bool:
        return dish_id in self.favorite_dish_ids
