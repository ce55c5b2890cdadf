from __future__ import annotations

import logging
from typing import Any, Mapping

from werkzeug.security import check_password_hash, generate_password_hash

from ..auth.tokens import TokenService
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import DEFAULT_ADMIN_PREFERENCES, MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import Admin
from .preferences import merge_preferences, with_defaults
from .repository import AdminRepository

logger = logging.getLogger(__name__)


def _password_matches(password_hash: str, password: Any) -> bool:
    try:
        return check_password_hash(password_hash, str(password))
    except ValueError:
        # e.g. placeholder or corrupted hashes
        return False


class AdminAuthService:
    """Use case: admin registration, login, profile and password management."""

    def __init__(self, admins: AdminRepository, tokens: TokenService):
        self._admins = admins
        self._tokens = tokens

    def _token_for(self, admin: Admin) -> str:
        return self._tokens.issue_admin_token(admin_id=admin.admin_id, email=admin.email)

    def get_admin(self, admin_id: Any) -> Admin:
        try:
            admin = self._admins.get_by_id(int(admin_id))
        except (TypeError, ValueError):
            admin = None
        if not admin:
            raise NotFoundError("Admin not found")
        return admin

    def register(self, *, email: Any, password: Any, name: Any, company_name: Any) -> tuple[Admin, str]:
        email = require_non_empty(email, "email").lower()
        name = require_non_empty(name, "name")
        company_name = require_non_empty(company_name, "companyName")
        require_min_length(password, "password", MIN_PASSWORD_LENGTH)

        if self._admins.get_by_email(email):
            raise ValidationError("An admin with this email already exists")

        admin_id = self._admins.create(
            email=email,
            password_hash=generate_password_hash(password),
            name=name,
            company_name=company_name,
        )
        admin = self.get_admin(admin_id)
        logger.info("Registered admin %s for company %r", admin.admin_id, company_name)
        return admin, self._token_for(admin)

    def login(self, *, email: Any, password: Any) -> tuple[Admin, str]:
        if not email or not password:
            raise ValidationError("Email and password are required")

        admin = self._admins.get_by_email(str(email).strip().lower())
        if not admin:
            raise AuthenticationError("Invalid email or password")

        if not _password_matches(admin.password_hash, password):
            logger.info("Failed admin login for %s", admin.email)
            raise AuthenticationError("Invalid email or password")

        return admin, self._token_for(admin)

    def update_profile(self, admin_id: Any, changes: Mapping[str, Any]) -> Admin:
        admin = self.get_admin(admin_id)
        fields: dict[str, Any] = {}
        if "name" in changes:
            fields["name"] = require_non_empty(changes["name"], "name")
        if "companyName" in changes:
            fields["company_name"] = require_non_empty(changes["companyName"], "companyName")
        self._admins.update_profile(admin.admin_id, fields)
        return self.get_admin(admin.admin_id)

    def change_password(self, admin_id: Any, *, current_password: Any, new_password: Any) -> None:
        if not current_password or not new_password:
            raise ValidationError("Current password and new password are required")
        if not isinstance(new_password, str) or len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"New password must be at least {MIN_PASSWORD_LENGTH} characters long")

        admin = self.get_admin(admin_id)
        if not _password_matches(admin.password_hash, current_password):
            raise AuthenticationError("Current password is incorrect")

        self._admins.update_password(admin.admin_id, generate_password_hash(new_password))
        logger.info("Admin %s changed password", admin.admin_id)

    def get_preferences(self, admin_id: Any) -> dict:
        return with_defaults(self.get_admin(admin_id).preferences)

    def update_preferences(self, admin_id: Any, changes: Mapping[str, Any]) -> dict:
        admin = self.get_admin(admin_id)
        merged = merge_preferences(admin.preferences, changes)
        self._admins.save_preferences(admin.admin_id, merged)
        return merged

    def reset_preferences(self, admin_id: Any) -> dict:
        admin = self.get_admin(admin_id)
        self._admins.save_preferences(admin.admin_id, DEFAULT_ADMIN_PREFERENCES)
        return dict(DEFAULT_ADMIN_PREFERENCES)
