# api/v1/deps.py
from __future__ import annotations

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core.recommendation import RecommendationEngine
from services.auth import verify_token
from services.db import get_session
from services.store import SqlRecommendationStore

_bearer = HTTPBearer(auto_error=False)


def current_user_id(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> int:
    """Resolve the caller from `Authorization: Bearer <jwt>`; 401 otherwise."""
    if creds is None:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Authentication required")
    try:
        return verify_token(creds.credentials)
    except jwt.PyJWTError:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid or expired token")


def get_engine(db: AsyncSession = Depends(get_session)) -> RecommendationEngine:
    return RecommendationEngine.from_settings(SqlRecommendationStore(db))
