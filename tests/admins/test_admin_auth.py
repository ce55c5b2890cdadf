from __future__ import annotations

import pytest

from teacher_attendance.admins.service import AdminAuthService
from teacher_attendance.core.exceptions import AuthenticationError, NotFoundError, ValidationError


@pytest.fixture
def svc(admins_repo, tokens):
    return AdminAuthService(admins_repo, tokens)


def _register(svc, **overrides):
    data = dict(email="Owner@Example.com", password="secret1", name="Owner", company_name="Bright Tutors")
    data.update(overrides)
    return svc.register(**data)


def test_register_returns_admin_and_token(svc, tokens):
    admin, token = _register(svc)

    assert admin.email == "owner@example.com"
    assert "password_hash" not in admin.to_dict()
    assert admin.to_dict()["companyId"] == str(admin.admin_id)
    assert tokens.decode(token)["sub"] == str(admin.admin_id)


def test_register_validation(svc):
    with pytest.raises(ValidationError, match="at least 6"):
        _register(svc, password="12345")
    _register(svc)
    with pytest.raises(ValidationError, match="already exists"):
        _register(svc, email="owner@example.com")


def test_login(svc):
    admin, _ = _register(svc)

    logged_in, token = svc.login(email="OWNER@example.com", password="secret1")
    assert logged_in.admin_id == admin.admin_id and token

    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        svc.login(email="owner@example.com", password="wrong-pass")
    with pytest.raises(AuthenticationError):
        svc.login(email="nobody@example.com", password="secret1")
    with pytest.raises(ValidationError):
        svc.login(email="", password="")


def test_change_password(svc):
    admin, _ = _register(svc)

    with pytest.raises(ValidationError, match="Current password and new password are required"):
        svc.change_password(admin.admin_id, current_password="", new_password="abcdef")
    with pytest.raises(ValidationError, match="at least 6 characters"):
        svc.change_password(admin.admin_id, current_password="secret1", new_password="abc")
    with pytest.raises(AuthenticationError, match="Current password is incorrect"):
        svc.change_password(admin.admin_id, current_password="nope!!", new_password="abcdef")
    with pytest.raises(NotFoundError, match="Admin not found"):
        svc.change_password(404, current_password="secret1", new_password="abcdef")

    svc.change_password(admin.admin_id, current_password="secret1", new_password="abcdef")
    svc.login(email="owner@example.com", password="abcdef")


def test_update_profile_only_touches_given_fields(svc):
    admin, _ = _register(svc)

    updated = svc.update_profile(admin.admin_id, {"companyName": "Brighter Tutors"})

    assert updated.company_name == "Brighter Tutors"
    assert updated.name == "Owner"


def test_unreadable_hash_is_a_wrong_password(svc, admins_repo):
    admin, _ = _register(svc)
    admins_repo.update_password(admin.admin_id, "md5$salt$deadbeef")

    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        svc.login(email="owner@example.com", password="secret1")
    with pytest.raises(AuthenticationError, match="Current password is incorrect"):
        svc.change_password(admin.admin_id, current_password="secret1", new_password="abcdef")
