"""
Centralised settings loader (pydantic-settings).

Every value can be overridden through the environment or a local `.env`
file; field names map to upper-case env vars (`DATABASE_URL`,
`REC_WEIGHT_FAVORITE`, ...).
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime / DB / auth ─────────────────────────────────────────
    env_name: str = "local"
    log_level: str = "INFO"
    database_url: str | None = None
    cloud_sql_instance: str | None = Field(None, alias="CLOUD_SQL_CONNECTION_NAME")
    db_user: str | None = None
    db_pass: str | None = None
    db_name: str | None = None
    jwt_secret: str = "changeme"
    jwt_ttl_minutes: int = 60

    # ─── recommendation engine tuning ───────────────────────────────
    rec_lookback_days: int = 7
    rec_candidate_limit: int = 100
    rec_fallback_limit: int = 20
    rec_max_results: int = 12

    rec_weight_base: float = 1
    rec_weight_region: float = 5
    rec_weight_dietary_tag: float = 3
    rec_weight_vegetarian: float = 3
    rec_weight_favorite: float = 10
    rec_weight_calorie_fit: float = 2
    rec_weight_spice_fit: float = 2
    rec_jitter_max: float = 0.5

    # inclusive kcal bounds per meal slot, e.g. REC_CALORIES_LUNCH=[300, 700]
    rec_calories_breakfast: tuple[int, int] = (200, 500)
    rec_calories_lunch: tuple[int, int] = (300, 700)
    rec_calories_dinner: tuple[int, int] = (400, 800)
    rec_calories_snack: tuple[int, int] = (100, 400)

    # allow other teammates’ env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
