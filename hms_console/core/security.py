from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from hms_console.core.config import settings


def create_access_token(
    subject: str,
    role: str | None = None,
    user_type: str | None = None,
    expires_delta: timedelta | None = None,
    **claims: Any,
) -> tuple[str, datetime]:
    """Encode a session token the way the identity service issues them.

    HMS staff accounts carry ``role``; regular accounts carry ``userType``.
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode: dict[str, Any] = {"sub": subject, "exp": expire, **claims}
    if role is not None:
        to_encode["role"] = role
    if user_type is not None:
        to_encode["userType"] = user_type
    encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)
    return encoded_jwt, expire


def decode_access_token(token: str) -> dict[str, Any]:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        return payload
    except JWTError as exc:
        raise ValueError("Invalid token") from exc
