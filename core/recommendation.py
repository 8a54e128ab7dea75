"""
core/recommendation.py
────────────────────────────────────────────────────────────────────────
Personalised dish recommendations for one meal slot.

Pipeline (one pass, no writes):

  1. load the user's preference profile           → NotFoundError if absent
  2. recently-eaten set = dishes logged in the last N days
  3. candidate pool     = catalog minus recently-eaten, capped
       └─ empty? fallback pool = unfiltered catalog, every score fixed at 1
  4. score each candidate (`core.scoring`), stable sort desc, keep top K
  5. annotate: rounded score, favourite flag, reason

All public I/O happens through `RecommendationEngine.recommend(...)`.
"""
from __future__ import annotations

import logging
import random
from datetime import date, datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Awaitable, Collection, List, Protocol, Tuple, TypeVar

from core.errors import NotFoundError, RecommendationError, UpstreamReadError
from core.models import (
    Dish,
    MealLogEntry,
    MealSlot,
    RecommendationSet,
    RecommendedDish,
    UserPreferenceProfile,
)
from core.scoring import RandomSource, ScoringWeights, score_terms, jitter

_LOG = logging.getLogger(__name__)

T = TypeVar("T")

LOOKBACK_DAYS = 7
CANDIDATE_LIMIT = 100
FALLBACK_LIMIT = 20
MAX_RESULTS = 12
FALLBACK_SCORE = 1.0


class RecommendationStore(Protocol):
    """Read-only view of persistence the engine depends on."""

    async def get_user_profile(self, user_id: int) -> UserPreferenceProfile | None: ...

    async def get_recent_meal_log(
        self, user_id: int, since: date, until: date
    ) -> List[MealLogEntry]: ...

    async def list_dishes(
        self, limit: int, exclude_ids: Collection[int] | None = None
    ) -> List[Dish]: ...


class RecommendationEngine:
    def __init__(
        self,
        store: RecommendationStore,
        weights: ScoringWeights | None = None,
        rng: RandomSource | None = None,
        *,
        lookback_days: int = LOOKBACK_DAYS,
        candidate_limit: int = CANDIDATE_LIMIT,
        fallback_limit: int = FALLBACK_LIMIT,
        max_results: int = MAX_RESULTS,
    ) -> None:
        self._store = store
        self._weights = weights or ScoringWeights()
        self._rng = rng or random.Random()
        self._lookback_days = lookback_days
        self._candidate_limit = candidate_limit
        self._fallback_limit = fallback_limit
        self._max_results = max_results

    @classmethod
    def from_settings(
        cls,
        store: RecommendationStore,
        rng: RandomSource | None = None,
        cfg: Any = None,
    ) -> "RecommendationEngine":
        if cfg is None:
            from config import settings as cfg
        return cls(
            store,
            ScoringWeights.from_settings(cfg),
            rng,
            lookback_days=cfg.rec_lookback_days,
            candidate_limit=cfg.rec_candidate_limit,
            fallback_limit=cfg.rec_fallback_limit,
            max_results=cfg.rec_max_results,
        )

    async def recommend(
        self,
        user_id: int,
        meal_type: MealSlot | str,
        day: date,
        as_of: date | None = None,
    ) -> RecommendationSet:
        slot = MealSlot(meal_type)
        as_of = as_of or datetime.now(timezone.utc).date()

        profile = await self._read("user profile", self._store.get_user_profile(user_id))
        if profile is None:
            raise NotFoundError(f"user {user_id} not found")

        history, candidates, fallback = await self._candidate_pool(user_id, as_of)

        if fallback:
            scored = [(dish, FALLBACK_SCORE, "Popular dish to try") for dish in candidates]
        else:
            scored = [self._score(dish, profile, slot) for dish in candidates]

        # sorted() is stable, so equal scores keep catalog order
        ranked = sorted(scored, key=lambda item: item[1], reverse=True)[: self._max_results]

        recs = [
            RecommendedDish(
                **dish.model_dump(),
                recommendation_score=_round_half_up(score),
                is_favorite=profile.is_favorite(dish.id),
                reason=reason,
            )
            for dish, score, reason in ranked
        ]
        _LOG.debug(
            "user=%s slot=%s history=%d candidates=%d fallback=%s returned=%d",
            user_id, slot.value, len(history), len(candidates), fallback, len(recs),
        )

        return RecommendationSet(
            meal_type=slot,
            date=day,
            recommendations=recs,
            total_found=len(recs),
            reason=_summary(slot, history),
        )

    # ─────────────────────────── candidates ───────────────────────── #
    async def _candidate_pool(
        self, user_id: int, as_of: date
    ) -> Tuple[List[MealLogEntry], List[Dish], bool]:
        # `lookback_days` calendar days, as_of included
        since = as_of - timedelta(days=self._lookback_days - 1)
        history = await self._read(
            "meal log", self._store.get_recent_meal_log(user_id, since, as_of)
        )
        recently_eaten = {entry.dish_id for entry in history}

        candidates = await self._read(
            "dish catalog",
            self._store.list_dishes(self._candidate_limit, exclude_ids=recently_eaten),
        )
        if candidates:
            return history, candidates, False

        _LOG.warning(
            "user=%s: all candidates eaten in the last %d days, using unfiltered catalog",
            user_id, self._lookback_days,
        )
        candidates = await self._read(
            "dish catalog", self._store.list_dishes(self._fallback_limit)
        )
        if not candidates:
            _LOG.warning("dish catalog is empty – returning no recommendations")
        return history, candidates, True

    # ──────────────────────────── scoring ─────────────────────────── #
    def _score(
        self, dish: Dish, profile: UserPreferenceProfile, slot: MealSlot
    ) -> Tuple[Dish, float, str]:
        terms = score_terms(dish, profile, slot, self._weights)
        score = sum(terms.values()) + jitter(self._rng, self._weights)
        return dish, score, _reason(dish, terms)

    @staticmethod
    async def _read(what: str, pending: Awaitable[T]) -> T:
        try:
            return await pending
        except RecommendationError:
            raise
        except Exception as exc:
            _LOG.exception("%s read failed", what)
            raise UpstreamReadError("recommendation computation failed") from exc


# ──────────────────────────────── Helpers ────────────────────────────────

def _reason(dish: Dish, terms: dict[str, float]) -> str:
    if terms["favorite"]:
        return "One of your favourites"
    if terms["region"]:
        return f"You enjoy {dish.cuisine} cuisine"
    return "Trying something new based on your dietary patterns"


def _summary(slot: MealSlot, history: List[MealLogEntry]) -> str:
    if history:
        return f"Recommendations for {slot.value} based on your recent meal history"
    return f"Popular {slot.value} recommendations to get you started"


def _round_half_up(score: float) -> float:
    """One decimal place, halves away from zero (8.25 → 8.3)."""
    return float(Decimal(str(score)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
