"""
services/db.py
────────────────────────────────────────────────────────────────────────
* Async SQLAlchemy v2 setup
* Models for users, preference profiles, the dish catalog and meal logs
* Session helpers used by routers and scripts
"""
from __future__ import annotations

from contextlib import asynccontextmanager
import datetime as dt
from typing import AsyncGenerator, AsyncIterator

from sqlalchemy import JSON, Date, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncAttrs,
    AsyncEngine,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from config import settings

# ───────── connection helper ────────────────────────────────────────
_ENGINE: AsyncEngine | None = None


async def _create_engine() -> AsyncEngine:
    # 1) plain TCP URL
    if settings.database_url:
        return create_async_engine(settings.database_url, pool_pre_ping=True)

    # 2) Cloud SQL connector (only if URL not supplied)
    if not settings.cloud_sql_instance:
        raise RuntimeError(
            "Set either DATABASE_URL or CLOUD_SQL_CONNECTION_NAME env var"
        )

    # lazy import here
    try:
        from google.cloud.sql.connector import Connector, IPTypes  # type: ignore
    except ImportError as exc:
        raise RuntimeError(
            "cloud-sql-python-connector missing. Run:\n"
            "pip install 'cloud-sql-python-connector[asyncpg]>=1.4.0'"
        ) from exc

    connector = Connector(refresh_strategy="lazy")

    async def _getconn():  # type: ignore[name-defined]
        return await connector.connect_async(
            settings.cloud_sql_instance,
            "asyncpg",
            user=settings.db_user,
            password=settings.db_pass,
            db=settings.db_name,
            ip_type=IPTypes.PRIVATE,
        )

    return create_async_engine(
        "postgresql+asyncpg://",
        async_creator=_getconn,
        pool_pre_ping=True,
    )


async def engine() -> AsyncEngine:
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = await _create_engine()
    return _ENGINE


# ───────── declarative base ──────────────────────────────────────────
Base = declarative_base(cls=AsyncAttrs)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(50))
    email: Mapped[str] = mapped_column(String, unique=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, server_default=func.now())


class UserProfile(Base):
    __tablename__ = "user_profiles"

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), primary_key=True)
    dietary_preferences: Mapped[list] = mapped_column(JSON, default=list)
    favorite_regions: Mapped[list] = mapped_column(JSON, default=list)
    spice_level: Mapped[str | None] = mapped_column(String)
    favorite_dish_ids: Mapped[list] = mapped_column(JSON, default=list)
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )


class Dish(Base):
    __tablename__ = "dishes"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String)
    type: Mapped[str] = mapped_column(String)            # Veg / Non-Veg
    cuisine: Mapped[str] = mapped_column(String)
    image: Mapped[str | None] = mapped_column(String)
    ingredients: Mapped[list] = mapped_column(JSON, default=list)
    calories: Mapped[int | None] = mapped_column(Integer)
    nutrition: Mapped[dict | None] = mapped_column(JSON)  # protein / carbs / fat
    dietary_tags: Mapped[list] = mapped_column(JSON, default=list)
    spice_level: Mapped[str | None] = mapped_column(String)
    difficulty: Mapped[str | None] = mapped_column(String)
    prep_time: Mapped[int | None] = mapped_column(Integer)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, server_default=func.now())


class MealLog(Base):
    __tablename__ = "meal_logs"

    id:         Mapped[int]        = mapped_column(primary_key=True)
    user_id:    Mapped[int]        = mapped_column(ForeignKey("users.id"), index=True)
    dish_id:    Mapped[int]        = mapped_column(ForeignKey("dishes.id"))
    date:       Mapped[dt.date]    = mapped_column(Date, index=True)
    meal_type:  Mapped[str]        = mapped_column(String)
    notes:      Mapped[str | None] = mapped_column(Text)
    rating:     Mapped[int]        = mapped_column(Integer, default=0)
    created_at: Mapped[dt.datetime]   = mapped_column(DateTime, server_default=func.now())


# ───────── session helpers ───────────────────────────────────────────

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    eng = await engine()
    async_session = async_sessionmaker(eng, expire_on_commit=False)
    async with async_session() as session:
        yield session


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """`async with session_scope() as db:` for scripts outside FastAPI."""
    eng = await engine()
    async with async_sessionmaker(eng, expire_on_commit=False)() as session:
        yield session


async def create_tables() -> None:
    eng = await engine()
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
