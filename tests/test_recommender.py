"""
End-to-end (no DB) – RecommendationEngine against the in-memory store.
"""
from __future__ import annotations

import asyncio
from datetime import date, timedelta

import pytest

from core.errors import NotFoundError, UpstreamReadError
from core.models import Dish, MealLogEntry, MealSlot, UserPreferenceProfile

TODAY = date(2024, 3, 15)

SOUTH_FAN = UserPreferenceProfile(
    user_id=1,
    favorite_regions={"South Indian"},
    dietary_preferences=set(),
    spice_level="medium",
)

DOSA = Dish(id=1, name="Masala Dosa", cuisine="South Indian", type="Veg", calories=350)
RAJMA = Dish(id=2, name="Rajma Chawal", cuisine="North Indian", type="Veg", calories=350)


def _catalogue(n: int, start: int = 100) -> list[Dish]:
    return [
        Dish(id=start + i, name=f"Dish {i}", cuisine="Continental", type="Veg", calories=0)
        for i in range(n)
    ]


def _ate(dish_id: int, days_ago: int, user_id: int = 1) -> MealLogEntry:
    return MealLogEntry(
        user_id=user_id,
        dish_id=dish_id,
        date=TODAY - timedelta(days=days_ago),
        meal_type=MealSlot.lunch,
    )


def _run(engine, user_id=1, slot="lunch", day=TODAY):
    return asyncio.run(engine.recommend(user_id, slot, day, as_of=TODAY))


# ── scenario A ───────────────────────────────────────────────────────
def test_region_match_ranks_first(make_engine):
    engine, _ = make_engine(profiles=[SOUTH_FAN], dishes=[RAJMA, DOSA])
    out = _run(engine)

    assert [r.id for r in out.recommendations] == [DOSA.id, RAJMA.id]
    assert [r.recommendation_score for r in out.recommendations] == [8.0, 3.0]
    assert out.meal_type is MealSlot.lunch
    assert out.date == TODAY
    assert out.total_found == 2


# ── candidate selection ──────────────────────────────────────────────
def test_recently_eaten_dishes_are_excluded(make_engine):
    engine, store = make_engine(
        profiles=[SOUTH_FAN], dishes=[DOSA, RAJMA], meals=[_ate(DOSA.id, 2)]
    )
    out = _run(engine)

    assert [r.id for r in out.recommendations] == [RAJMA.id]
    assert ("list_dishes", 100, frozenset({DOSA.id})) in store.calls


def test_lookback_window_is_seven_days(make_engine):
    engine, store = make_engine(
        profiles=[SOUTH_FAN],
        dishes=[DOSA, RAJMA],
        meals=[_ate(DOSA.id, 6), _ate(RAJMA.id, 7)],
    )
    out = _run(engine)

    assert [r.id for r in out.recommendations] == [RAJMA.id]
    assert ("get_recent_meal_log", 1, TODAY - timedelta(days=6), TODAY) in store.calls


def test_other_users_history_is_ignored(make_engine):
    engine, _ = make_engine(
        profiles=[SOUTH_FAN], dishes=[DOSA], meals=[_ate(DOSA.id, 1, user_id=2)]
    )
    out = _run(engine)
    assert [r.id for r in out.recommendations] == [DOSA.id]
    assert out.recommendations[0].recommendation_score == 8.0


def test_candidate_pool_capped_at_100(make_engine):
    engine, store = make_engine(profiles=[SOUTH_FAN], dishes=_catalogue(150))
    _run(engine)
    limits = [c[1] for c in store.calls if c[0] == "list_dishes"]
    assert limits == [100]


# ── fallback ─────────────────────────────────────────────────────────
def test_fallback_when_everything_was_eaten(make_engine):
    fan = SOUTH_FAN.model_copy(update={"favorite_dish_ids": frozenset({DOSA.id})})
    engine, store = make_engine(
        profiles=[fan],
        dishes=[RAJMA, DOSA],
        meals=[_ate(DOSA.id, 1), _ate(RAJMA.id, 3)],
    )
    out = _run(engine)

    assert [r.id for r in out.recommendations] == [RAJMA.id, DOSA.id]
    assert {r.recommendation_score for r in out.recommendations} == {1.0}
    assert {r.reason for r in out.recommendations} == {"Popular dish to try"}
    assert [r.is_favorite for r in out.recommendations] == [False, True]
    assert ("list_dishes", 20, frozenset()) in store.calls


def test_fallback_fetches_twenty_and_returns_twelve(make_engine):
    dishes = _catalogue(30)
    engine, store = make_engine(
        profiles=[SOUTH_FAN],
        dishes=dishes,
        meals=[_ate(d.id, 0) for d in dishes],
    )
    out = _run(engine)
    assert out.total_found == 12
    assert all(r.recommendation_score == 1.0 for r in out.recommendations)


def test_empty_catalog_is_not_an_error(make_engine):
    engine, _ = make_engine(profiles=[SOUTH_FAN], dishes=[])
    out = _run(engine)
    assert out.recommendations == []
    assert out.total_found == 0


# ── ranking / truncation ─────────────────────────────────────────────
def test_results_truncated_to_twelve(make_engine):
    engine, _ = make_engine(profiles=[SOUTH_FAN], dishes=_catalogue(40))
    out = _run(engine)
    assert len(out.recommendations) == 12
    assert out.total_found == 12


def test_ties_keep_catalog_order(make_engine):
    dishes = _catalogue(5)
    engine, _ = make_engine(profiles=[SOUTH_FAN], dishes=dishes)
    out = _run(engine)
    assert [r.id for r in out.recommendations] == [d.id for d in dishes]


def test_scores_sorted_descending(make_engine):
    fan = SOUTH_FAN.model_copy(update={"favorite_dish_ids": frozenset({103})})
    engine, _ = make_engine(profiles=[fan], dishes=[RAJMA, *_catalogue(5), DOSA])
    out = _run(engine)
    scores = [r.recommendation_score for r in out.recommendations]
    assert scores == sorted(scores, reverse=True)
    assert out.recommendations[0].id == 103


def test_idempotent_with_jitter_pinned(make_engine):
    engine, _ = make_engine(profiles=[SOUTH_FAN], dishes=[RAJMA, DOSA, *_catalogue(20)])
    first, second = _run(engine), _run(engine)
    assert first.model_dump() == second.model_dump()


def test_score_rounded_to_one_decimal(make_engine, fixed_rng):
    engine, _ = make_engine(profiles=[SOUTH_FAN], dishes=[DOSA], rng=fixed_rng(0.6))
    out = _run(engine)
    # 8 + 0.3 jitter
    assert out.recommendations[0].recommendation_score == 8.3


def test_score_halves_round_up(make_engine, fixed_rng):
    engine, _ = make_engine(profiles=[SOUTH_FAN], dishes=[DOSA], rng=fixed_rng(0.5))
    out = _run(engine)
    # 8 + 0.25 jitter
    assert out.recommendations[0].recommendation_score == 8.3


# ── annotation ───────────────────────────────────────────────────────
def test_is_favorite_matches_profile(make_engine):
    fan = SOUTH_FAN.model_copy(update={"favorite_dish_ids": frozenset({RAJMA.id})})
    engine, _ = make_engine(profiles=[fan], dishes=[DOSA, RAJMA])
    out = _run(engine)
    flags = {r.id: r.is_favorite for r in out.recommendations}
    assert flags == {DOSA.id: False, RAJMA.id: True}
    assert out.recommendations[0].id == RAJMA.id
    assert out.recommendations[0].reason == "One of your favourites"


def test_summary_reason_depends_on_history(make_engine):
    engine, _ = make_engine(profiles=[SOUTH_FAN], dishes=[DOSA])
    assert _run(engine).reason == "Popular lunch recommendations to get you started"

    engine, _ = make_engine(
        profiles=[SOUTH_FAN], dishes=[DOSA, RAJMA], meals=[_ate(RAJMA.id, 1)]
    )
    assert _run(engine).reason == (
        "Recommendations for lunch based on your recent meal history"
    )


def test_inputs_are_not_mutated(make_engine):
    engine, store = make_engine(profiles=[SOUTH_FAN], dishes=[DOSA, RAJMA])
    before = [d.model_dump() for d in store.dishes]
    _run(engine)
    assert [d.model_dump() for d in store.dishes] == before
    assert store.profiles[1] == SOUTH_FAN


# ── failures ─────────────────────────────────────────────────────────
def test_unknown_user_raises_not_found(make_engine):
    engine, store = make_engine(profiles=[SOUTH_FAN], dishes=[DOSA])
    with pytest.raises(NotFoundError):
        _run(engine, user_id=404)
    assert [c[0] for c in store.calls] == ["get_user_profile"]


@pytest.mark.parametrize(
    "failing", ["get_user_profile", "get_recent_meal_log", "list_dishes"]
)
def test_store_failures_become_upstream_errors(make_engine, failing):
    engine, _ = make_engine(profiles=[SOUTH_FAN], dishes=[DOSA], fail_on=failing)
    with pytest.raises(UpstreamReadError) as exc_info:
        _run(engine)
    assert isinstance(exc_info.value.__cause__, ConnectionError)


def test_unknown_meal_type_rejected(make_engine):
    engine, _ = make_engine(profiles=[SOUTH_FAN], dishes=[DOSA])
    with pytest.raises(ValueError):
        _run(engine, slot="brunch")
