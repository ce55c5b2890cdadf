from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from teacher_attendance.auth.tokens import TokenService
from teacher_attendance.core.exceptions import AuthenticationError


def test_admin_token_carries_company_claims():
    svc = TokenService("secret")
    claims = svc.decode(svc.issue_admin_token(admin_id=5, email="a@example.com"))

    assert claims["sub"] == "5"
    assert claims["type"] == "admin"
    assert claims["companyId"] == "5"
    assert claims["email"] == "a@example.com"


def test_web_token_carries_session_and_teacher():
    svc = TokenService("secret")
    claims = svc.decode(svc.issue_web_token(session_id="abc", teacher_id=9, company_id="5"))

    assert claims["type"] == "web"
    assert claims["sessionId"] == "abc"
    assert claims["teacherId"] == "9"
    assert claims["companyId"] == "5"


def test_expired_token_is_rejected():
    past = datetime.now(timezone.utc) - timedelta(days=2)
    svc = TokenService("secret", clock=lambda: past)
    token = svc.issue_admin_token(admin_id=1, email="a@example.com")

    with pytest.raises(AuthenticationError, match="expired"):
        TokenService("secret").decode(token)


def test_token_signed_with_other_secret_is_rejected():
    token = jwt.encode({"sub": "1", "type": "admin"}, "other-secret", algorithm="HS256")

    with pytest.raises(AuthenticationError, match="Invalid token"):
        TokenService("secret").decode(token)


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        TokenService("")
