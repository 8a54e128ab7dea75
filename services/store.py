"""
services/store.py
────────────────────────────────────────────────────────────────────────
SQLAlchemy implementation of `core.recommendation.RecommendationStore`.

Rows are mapped to the immutable pydantic domain models, so nothing the
engine receives is attached to the session.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Collection, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.models import Dish, MealLogEntry, UserPreferenceProfile
from services import db as tables

_LOG = logging.getLogger(__name__)


class SqlRecommendationStore:
    def __init__(self, session: AsyncSession) -> None:
        self._db = session

    async def get_user_profile(self, user_id: int) -> UserPreferenceProfile | None:
        user = await self._db.get(tables.User, user_id)
        if user is None:
            return None

        row = await self._db.get(tables.UserProfile, user_id)
        if row is None:
            # user exists but never saved preferences
            return UserPreferenceProfile(user_id=user_id)

        return UserPreferenceProfile(
            user_id=user_id,
            dietary_preferences=row.dietary_preferences,
            favorite_regions=row.favorite_regions,
            spice_level=row.spice_level,
            favorite_dish_ids=row.favorite_dish_ids,
        )

    async def get_recent_meal_log(
        self, user_id: int, since: date, until: date
    ) -> List[MealLogEntry]:
        res = await self._db.execute(
            select(tables.MealLog)
            .where(tables.MealLog.user_id == user_id)
            .where(tables.MealLog.date >= since, tables.MealLog.date <= until)
        )
        return [MealLogEntry.model_validate(m) for m in res.scalars().all()]

    async def list_dishes(
        self, limit: int, exclude_ids: Collection[int] | None = None
    ) -> List[Dish]:
        q = select(tables.Dish).order_by(tables.Dish.id).limit(limit)
        if exclude_ids:
            q = q.where(tables.Dish.id.not_in(list(exclude_ids)))
        res = await self._db.execute(q)
        rows = res.scalars().all()
        _LOG.debug("list_dishes limit=%d excluded=%d → %d rows",
                   limit, len(exclude_ids or ()), len(rows))
        return [Dish.model_validate(r) for r in rows]
