from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from ..core.constants import DEFAULT_TOKEN_HOURS
from ..core.enums import TokenType
from ..core.exceptions import AuthenticationError

ALGORITHM = "HS256"


class TokenService:
    """Mint and verify the bearer tokens used by the JSON API."""

    def __init__(
        self,
        secret: str,
        *,
        expires_hours: int = DEFAULT_TOKEN_HOURS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._expires = timedelta(hours=int(expires_hours))
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def lifetime(self) -> timedelta:
        return self._expires

    def _encode(self, payload: dict, expires: Optional[timedelta] = None) -> str:
        now = self._clock()
        claims = dict(payload)
        claims["iat"] = now
        claims["exp"] = now + (expires or self._expires)
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def issue_admin_token(
        self,
        *,
        admin_id: int,
        email: str,
        expires: Optional[timedelta] = None,
    ) -> str:
        return self._encode(
            {
                "sub": str(admin_id),
                "type": TokenType.ADMIN.value,
                "email": email,
                "companyId": str(admin_id),
            },
            expires,
        )

    def issue_web_token(self, *, session_id: str, teacher_id: int, company_id: Optional[str]) -> str:
        return self._encode(
            {
                "sessionId": session_id,
                "type": TokenType.WEB.value,
                "teacherId": str(teacher_id),
                "companyId": company_id,
            }
        )

    def decode(self, token: str) -> dict:
        try:
            return jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Unauthorized - Token expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Unauthorized - Invalid token")
