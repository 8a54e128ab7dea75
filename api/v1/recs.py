# api/v1/recs.py
from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.v1.deps import current_user_id, get_engine
from api.v1.schemas import RecResponse
from core.errors import NotFoundError, UpstreamReadError
from core.models import MealSlot
from core.recommendation import RecommendationEngine

router = APIRouter()
_LOG = logging.getLogger(__name__)


@router.get("", response_model=RecResponse, status_code=status.HTTP_200_OK)
async def recommend(
    meal_type: MealSlot = Query(..., alias="mealType"),
    day: date = Query(..., alias="date", description="YYYY-MM-DD"),
    user_id: int = Depends(current_user_id),
    engine: RecommendationEngine = Depends(get_engine),
) -> RecResponse:
    """
    Up to 12 dishes for `mealType`, skipping anything eaten in the last
    week; falls back to an unpersonalised list when that leaves nothing.
    """
    try:
        result = await engine.recommend(user_id, meal_type, day)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    except UpstreamReadError as exc:
        _LOG.error("recommendations failed for user %s: %s", user_id, exc.__cause__)
        raise HTTPException(status_code=500, detail="Recommendation computation failed")

    return RecResponse.model_validate(result.model_dump())
