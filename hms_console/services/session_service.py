from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import Request

from hms_console.core.config import settings
from hms_console.core.security import decode_access_token
from hms_console.models.session import SessionState, SessionUser

logger = logging.getLogger(__name__)


class SessionProvider:
    """Resolves the operator session from the token issued by the identity service.

    The token travels in the session cookie (browser console) or as a bearer
    header (other shells). This provider never issues or refreshes tokens.
    """

    def __init__(self, cookie_name: str = settings.session_cookie_name) -> None:
        self.cookie_name = cookie_name

    def extract_token(self, request: Request) -> Optional[str]:
        header = request.headers.get("Authorization", "")
        scheme, _, credentials = header.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
        cookie = request.cookies.get(self.cookie_name)
        return cookie or None

    def user_from_claims(self, payload: dict[str, Any]) -> Optional[SessionUser]:
        user_id = payload.get("sub")
        if not user_id:
            return None
        return SessionUser(
            user_id=str(user_id),
            name=payload.get("name"),
            email=payload.get("email"),
            role=payload.get("role"),
            user_type=payload.get("userType", payload.get("user_type")),
        )

    def resolve(self, request: Request) -> SessionState:
        token = self.extract_token(request)
        if not token:
            return SessionState.anonymous()

        try:
            payload = decode_access_token(token)
        except ValueError:
            logger.warning("Rejected session token on %s", request.url.path)
            return SessionState.anonymous()

        user = self.user_from_claims(payload)
        if user is None:
            logger.warning("Session token without subject on %s", request.url.path)
            return SessionState.anonymous()
        return SessionState.for_user(user)
