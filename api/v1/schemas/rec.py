# api/v1/schemas/rec.py
from __future__ import annotations

from core.models import RecommendationSet, RecommendedDish


class RecommendationOut(RecommendedDish):
    """One scored dish as returned to the client (camelCase keys)."""


class RecResponse(RecommendationSet):
    recommendations: list[RecommendationOut] = []
