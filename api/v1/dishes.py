# api/v1/dishes.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from services.db import Dish, get_session
from api.v1.schemas import DishIn, DishOut

router = APIRouter()


@router.post(
    "",
    response_model=DishOut,
    status_code=status.HTTP_201_CREATED,
    summary="Add a dish to the catalog",
)
async def create_dish(
    body: DishIn,
    db: AsyncSession = Depends(get_session),
) -> DishOut:
    dish = Dish(**body.model_dump(mode="json"))
    db.add(dish)
    await db.commit()
    await db.refresh(dish)
    return DishOut.model_validate(dish)


@router.get(
    "",
    response_model=list[DishOut],
    summary="List catalog dishes in storage order",
)
async def list_dishes(
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_session),
) -> list[DishOut]:
    res = await db.execute(select(Dish).order_by(Dish.id).limit(limit))
    return [DishOut.model_validate(d) for d in res.scalars().all()]


@router.get("/{dish_id}", response_model=DishOut)
async def fetch_dish(
    dish_id: int,
    db: AsyncSession = Depends(get_session),
) -> DishOut:
    dish = await db.get(Dish, dish_id)
    if dish is None:
        raise HTTPException(status_code=404, detail="Dish not found")
    return DishOut.model_validate(dish)
