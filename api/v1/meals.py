# api/v1/meals.py
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.deps import current_user_id
from api.v1.schemas import MealLogIn, MealLogOut
from services.db import Dish, MealLog, get_session

router = APIRouter()


@router.post(
    "",
    response_model=MealLogOut,
    status_code=status.HTTP_201_CREATED,
    summary="Log a dish eaten by the current user",
)
async def log_meal(
    body: MealLogIn,
    user_id: int = Depends(current_user_id),
    db: AsyncSession = Depends(get_session),
) -> MealLogOut:
    if await db.get(Dish, body.dish_id) is None:
        raise HTTPException(status_code=404, detail="Dish not found")

    meal = MealLog(
        user_id=user_id,
        dish_id=body.dish_id,
        date=body.date,
        meal_type=body.meal_type.value,
        notes=body.notes,
        rating=body.rating,
    )
    db.add(meal)
    await db.commit()
    await db.refresh(meal)
    return MealLogOut.model_validate(meal)


@router.get(
    "",
    response_model=list[MealLogOut],
    summary="List the current user's meals between two dates (inclusive)",
)
async def list_meals(
    start: date = Query(...),
    end: date = Query(...),
    user_id: int = Depends(current_user_id),
    db: AsyncSession = Depends(get_session),
) -> list[MealLogOut]:
    if end < start:
        raise HTTPException(status_code=422, detail="end must not be before start")
    res = await db.execute(
        select(MealLog)
        .where(MealLog.user_id == user_id)
        .where(MealLog.date >= start, MealLog.date <= end)
        .order_by(MealLog.date, MealLog.id)
    )
    return [MealLogOut.model_validate(m) for m in res.scalars().all()]


@router.delete(
    "/{meal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete one of the current user's logged meals",
)
async def delete_meal(
    meal_id: int,
    user_id: int = Depends(current_user_id),
    db: AsyncSession = Depends(get_session),
) -> Response:
    meal = await db.get(MealLog, meal_id)
    if meal is None or meal.user_id != user_id:
        raise HTTPException(status_code=404, detail="Meal not found")
    await db.delete(meal)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
