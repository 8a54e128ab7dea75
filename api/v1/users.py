from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth import create_token
from services.db import User, get_session
from api.v1.schemas import TokenOut, UserCreate, UserOut

router = APIRouter()


# ───────────────────────── create ──────────────────────────
@router.post(
    "",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate,
    db: AsyncSession = Depends(get_session),
) -> UserOut:
    email = body.email.lower()
    taken = (
        await db.execute(select(User.id).where(User.email == email))
    ).scalar_one_or_none()
    if taken is not None:
        raise HTTPException(status_code=409, detail="User already exists")

    user = User(name=body.name.strip(), email=email)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return UserOut.model_validate(user, from_attributes=True)


# ───────────────────────── fetch one ────────────────────────
@router.get("/{user_id}", response_model=UserOut)
async def fetch_user(
    user_id: int,
    db: AsyncSession = Depends(get_session),
) -> UserOut:
    usr = await db.get(User, user_id)
    if usr is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserOut.model_validate(usr, from_attributes=True)


# ───────────────────────── demo login ───────────────────────
@router.post("/{user_id}/token", response_model=TokenOut)
async def issue_token(
    user_id: int,
    db: AsyncSession = Depends(get_session),
) -> TokenOut:
    """Bearer token for an existing user (no password check – demo only)."""
    if await db.get(User, user_id) is None:
        raise HTTPException(status_code=404, detail="User not found")
    return TokenOut(access_token=create_token(user_id))
