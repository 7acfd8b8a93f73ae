"""Security helpers for issuing and reading bearer tokens."""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from bookyoon_notifications.config import get_settings

ALGORITHM = "HS256"

logger = logging.getLogger(__name__)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def login_from_token(token: str | None) -> str | None:
    """Return the login carried by ``token`` or ``None`` when it cannot be trusted."""

    if not token:
        return None
    try:
        payload = decode_access_token(token)
    except ValueError:
        logger.warning("Ignoring an invalid or expired bearer token")
        return None

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.strip():
        logger.warning("Bearer token does not carry a usable subject claim")
        return None
    return subject.strip()


__all__ = ["ALGORITHM", "create_access_token", "decode_access_token", "login_from_token"]
