from datetime import datetime, timedelta, timezone

import jwt

from config import settings

_ALGO = "HS256"


def create_token(user_id: int, ttl_minutes: int | None = None) -> str:
    ttl = settings.jwt_ttl_minutes if ttl_minutes is None else ttl_minutes
    exp = datetime.now(timezone.utc) + timedelta(minutes=ttl)
    payload = {"sub": str(user_id), "exp": exp}
    return jwt.encode(payload, settings.jwt_secret, algorithm=_ALGO)


def verify_token(token: str) -> int:
    """Return the user id in `token`; raises `jwt.PyJWTError` if invalid or expired."""
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[_ALGO])
    try:
        return int(payload["sub"])
    except (KeyError, ValueError) as exc:
        raise jwt.InvalidTokenError("token subject is not a user id") from exc
