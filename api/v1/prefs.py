from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from services.db import Dish, User, UserProfile, get_session
from api.v1.schemas.prefs import UserPrefsIn, UserPrefsOut

router = APIRouter()


# ───────────────────────── helpers ──────────────────────────
def _serialize(row: UserProfile) -> UserPrefsOut:
    """Convert SQLAlchemy row ➜ Pydantic schema."""
    return UserPrefsOut(
        user_id=row.user_id,
        dietary_preferences=row.dietary_preferences or [],
        favorite_regions=row.favorite_regions or [],
        spice_level=row.spice_level,
        favorite_dish_ids=row.favorite_dish_ids or [],
    )


async def _profile_or_404(db: AsyncSession, user_id: int) -> UserProfile:
    if await db.get(User, user_id) is None:
        raise HTTPException(404, "User not found")
    prefs = await db.get(UserProfile, user_id)
    if prefs is None:
        prefs = UserProfile(
            user_id=user_id,
            dietary_preferences=[],
            favorite_regions=[],
            favorite_dish_ids=[],
        )
        db.add(prefs)
    return prefs


# ───────────────────────── read ─────────────────────────────
@router.get(
    "/{user_id}/preferences",
    response_model=UserPrefsOut,
    status_code=status.HTTP_200_OK,
)
async def get_preferences(
    user_id: int,
    db: AsyncSession = Depends(get_session),
) -> UserPrefsOut:
    prefs = await db.get(UserProfile, user_id)
    if prefs is None:
        raise HTTPException(404, "preferences not set")
    return _serialize(prefs)


# ───────────────────────── upsert ───────────────────────────
@router.put(
    "/{user_id}/preferences",
    response_model=UserPrefsOut,
    status_code=status.HTTP_200_OK,
)
async def upsert_preferences(
    user_id: int,
    body: UserPrefsIn,
    db: AsyncSession = Depends(get_session),
) -> UserPrefsOut:
    prefs = await _profile_or_404(db, user_id)
    prefs.dietary_preferences = sorted(set(body.dietary_preferences))
    prefs.favorite_regions = sorted(set(body.favorite_regions))
    prefs.spice_level = body.spice_level.value if body.spice_level else None

    await db.commit()
    await db.refresh(prefs)
    return _serialize(prefs)


# ───────────────────────── favourites ───────────────────────
@router.post(
    "/{user_id}/favorites/{dish_id}",
    response_model=UserPrefsOut,
    status_code=status.HTTP_200_OK,
)
async def add_favorite(
    user_id: int,
    dish_id: int,
    db: AsyncSession = Depends(get_session),
) -> UserPrefsOut:
    if await db.get(Dish, dish_id) is None:
        raise HTTPException(404, "Dish not found")
    prefs = await _profile_or_404(db, user_id)
    if dish_id not in (prefs.favorite_dish_ids or []):
        # reassign so the JSON column is flagged dirty
        prefs.favorite_dish_ids = [*(prefs.favorite_dish_ids or []), dish_id]

    await db.commit()
    await db.refresh(prefs)
    return _serialize(prefs)


@router.delete(
    "/{user_id}/favorites/{dish_id}",
    response_model=UserPrefsOut,
    status_code=status.HTTP_200_OK,
)
async def remove_favorite(
    user_id: int,
    dish_id: int,
    db: AsyncSession = Depends(get_session),
) -> UserPrefsOut:
    prefs = await _profile_or_404(db, user_id)
    prefs.favorite_dish_ids = [d for d in (prefs.favorite_dish_ids or []) if d != dish_id]

    await db.commit()
    await db.refresh(prefs)
    return _serialize(prefs)
