"""Shared helpers for the JSON controllers.

Every route answers ``{"error": "..."}`` on failure. Domain exceptions map to
their status code; anything else is logged and hidden behind the route's
generic failure message.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, Optional

from flask import g, jsonify, request

from ..auth.tokens import TokenService
from ..core.enums import TokenType
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def error_response(message: str, status: int):
    return jsonify({"error": message}), status


def api_errors(failure_message: str) -> Callable:
    """Translate exceptions raised by a view into JSON error responses."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except DomainError as e:
                for error_cls, status in _STATUS_BY_ERROR:
                    if isinstance(e, error_cls):
                        return error_response(str(e), status)
                logger.warning("Unmapped domain error in %s: %s", request.path, e)
                return error_response(str(e), 400)
            except Exception:
                logger.exception("%s (%s %s)", failure_message, request.method, request.path)
                return error_response(failure_message, 500)

        return wrapper

    return decorator


def json_object() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def json_payload() -> Any:
    data = request.get_json(silent=True)
    if data is None:
        raise ValidationError("Request body must be valid JSON")
    return data


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        return None
    token = header[len("Bearer "):].strip()
    return token or None


def current_claims() -> dict:
    return g.token_claims


def auth_guards(tokens: TokenService):
    """Build the ``token_required`` and ``admin_required`` decorators.

    Both run inside ``api_errors`` so failures come back as JSON 401/403.
    """

    def _load_claims() -> dict:
        token = bearer_token()
        if not token:
            raise AuthenticationError("Unauthorized - No token provided")
        return tokens.decode(token)

    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.token_claims = _load_claims()
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            claims = _load_claims()
            if claims.get("type") != TokenType.ADMIN.value:
                raise AuthorizationError("Admin access required")
            g.token_claims = claims
            return view(*args, **kwargs)

        return wrapper

    return token_required, admin_required


def require_own_company(company_id: Optional[str]) -> str:
    """Reject callers whose token belongs to another company."""
    own = current_claims().get("companyId")
    if not own or str(company_id) != str(own):
        raise AuthorizationError("Access to another company is not allowed")
    return str(own)
