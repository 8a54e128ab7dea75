"""
Shared fixtures: an in-memory stand-in for the persistence layer and a
jitter source pinned to zero, so engine tests need no database.
"""
from __future__ import annotations

from datetime import date
from typing import Callable, Collection, Iterable

import pytest

from core.models import Dish, MealLogEntry, UserPreferenceProfile
from core.recommendation import RecommendationEngine


class ZeroJitter:
    def random(self) -> float:
        return 0.0


class FixedJitter:
    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


class FakeStore:
    def __init__(
        self,
        profiles: Iterable[UserPreferenceProfile] = (),
        dishes: Iterable[Dish] = (),
        meals: Iterable[MealLogEntry] = (),
        fail_on: str | None = None,
    ) -> None:
        self.profiles = {p.user_id: p for p in profiles}
        self.dishes = list(dishes)
        self.meals = list(meals)
        self.fail_on = fail_on
        self.calls: list[tuple] = []

    def _maybe_fail(self, name: str) -> None:
        if self.fail_on == name:
            raise ConnectionError(f"{name} unavailable")

    async def get_user_profile(self, user_id: int) -> UserPreferenceProfile | None:
        self.calls.append(("get_user_profile", user_id))
        self._maybe_fail("get_user_profile")
        return self.profiles.get(user_id)

    async def get_recent_meal_log(
        self, user_id: int, since: date, until: date
    ) -> list[MealLogEntry]:
        self.calls.append(("get_recent_meal_log", user_id, since, until))
        self._maybe_fail("get_recent_meal_log")
        return [
            m for m in self.meals
            if m.user_id == user_id and since <= m.date <= until
        ]

    async def list_dishes(
        self, limit: int, exclude_ids: Collection[int] | None = None
    ) -> list[Dish]:
        self.calls.append(("list_dishes", limit, frozenset(exclude_ids or ())))
        self._maybe_fail("list_dishes")
        excluded = set(exclude_ids or ())
        return [d for d in self.dishes if d.id not in excluded][:limit]


@pytest.fixture
def make_engine() -> Callable[..., tuple[RecommendationEngine, FakeStore]]:
    def _make(*, rng=None, **store_kwargs) -> tuple[RecommendationEngine, FakeStore]:
        store = FakeStore(**store_kwargs)
        return RecommendationEngine(store, rng=rng or ZeroJitter()), store

    return _make


@pytest.fixture
def zero_rng() -> ZeroJitter:
    return ZeroJitter()


@pytest.fixture
def fixed_rng() -> Callable[[float], FixedJitter]:
    return FixedJitter
