"""
core/scoring.py
────────────────────────────────────────────────────────────────────────
Additive preference score for one dish in one meal slot.

Every term is independent and non-negative, so a dish's score is

    base + region + dietary tags + vegetarian + favourite
         + calorie fit + spice fit + jitter

and can be unit-tested term by term. The jitter is drawn from an injected
random source so callers can pin it (tests) or leave it truly random
(production).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Protocol, Tuple

from core.models import Dish, DishType, MealSlot, UserPreferenceProfile

VEGETARIAN = "vegetarian"

# inclusive kcal bounds per slot
CALORIE_RANGES: Mapping[MealSlot, Tuple[int, int]] = MappingProxyType({
    MealSlot.breakfast: (200, 500),
    MealSlot.lunch:     (300, 700),
    MealSlot.dinner:    (400, 800),
    MealSlot.snack:     (100, 400),
})


class RandomSource(Protocol):
    def random(self) -> float: ...


@dataclass(frozen=True)
class ScoringWeights:
    base: float = 1.0
    region: float = 5.0
    dietary_tag: float = 3.0
    vegetarian: float = 3.0
    favorite: float = 10.0
    calorie_fit: float = 2.0
    spice_fit: float = 2.0
    jitter_max: float = 0.5
    calorie_ranges: Mapping[MealSlot, Tuple[int, int]] = field(
        default_factory=lambda: CALORIE_RANGES
    )

    @classmethod
    def from_settings(cls, cfg: Any = None) -> "ScoringWeights":
        if cfg is None:
            from config import settings as cfg
        return cls(
            base=cfg.rec_weight_base,
            region=cfg.rec_weight_region,
            dietary_tag=cfg.rec_weight_dietary_tag,
            vegetarian=cfg.rec_weight_vegetarian,
            favorite=cfg.rec_weight_favorite,
            calorie_fit=cfg.rec_weight_calorie_fit,
            spice_fit=cfg.rec_weight_spice_fit,
            jitter_max=cfg.rec_jitter_max,
            calorie_ranges=MappingProxyType({
                MealSlot.breakfast: tuple(cfg.rec_calories_breakfast),
                MealSlot.lunch:     tuple(cfg.rec_calories_lunch),
                MealSlot.dinner:    tuple(cfg.rec_calories_dinner),
                MealSlot.snack:     tuple(cfg.rec_calories_snack),
            }),
        )


DEFAULT_WEIGHTS = ScoringWeights()


# ──────────────────────────── terms ───────────────────────────────── #
def score_terms(
    dish: Dish,
    profile: UserPreferenceProfile,
    slot: MealSlot,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> Dict[str, float]:
    """Deterministic part of the score, keyed by term name."""
    terms = {
        "base": weights.base,
        "region": 0.0,
        "dietary_tags": 0.0,
        "vegetarian": 0.0,
        "favorite": 0.0,
        "calorie_fit": 0.0,
        "spice_fit": 0.0,
    }

    if profile.favorite_regions and dish.cuisine in profile.favorite_regions:
        terms["region"] = weights.region

    if dish.dietary_tags:
        overlap = sum(1 for t in dish.dietary_tags if t in profile.dietary_preferences)
        terms["dietary_tags"] = weights.dietary_tag * overlap

    if VEGETARIAN in profile.dietary_preferences and dish.type is DishType.veg:
        terms["vegetarian"] = weights.vegetarian

    if profile.is_favorite(dish.id):
        terms["favorite"] = weights.favorite

    lo, hi = weights.calorie_ranges[slot]
    if lo <= dish.calories <= hi:
        terms["calorie_fit"] = weights.calorie_fit

    if (
        profile.spice_level is not None
        and dish.spice_level is not None
        and dish.spice_level <= profile.spice_level
    ):
        terms["spice_fit"] = weights.spice_fit

    return terms


def jitter(rng: RandomSource, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    """Uniform in [0, jitter_max)."""
    return rng.random() * weights.jitter_max

