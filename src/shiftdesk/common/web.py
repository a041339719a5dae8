"""Helpers shared by the Flask controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import jsonify, session

from ..core.exceptions import (
    AuthorizationError,
    DomainError,
    PersistenceFailure,
    PolicyViolation,
    ValidationError,
)

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "System error, please refresh and try again"


def current_user_id() -> str:
    return str(session["user_id"])


def login_required(view):
    @wraps(view)
    async def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please log in to continue"}), 401
        return await view(*args, **kwargs)

    return wrapper


def error_response(exc: Optional[Exception]):
    if isinstance(exc, PolicyViolation):
        return jsonify({"success": False, "message": str(exc), "remaining_minutes": exc.remaining_minutes}), 409
    if isinstance(exc, AuthorizationError):
        return jsonify({"success": False, "message": str(exc)}), 403
    if isinstance(exc, ValidationError):
        return jsonify({"success": False, "message": str(exc)}), 400
    if isinstance(exc, PersistenceFailure):
        return jsonify({"success": False, "message": GENERIC_FAILURE}), 500
    if isinstance(exc, DomainError):
        return jsonify({"success": False, "message": str(exc)}), 400
    return jsonify({"success": False, "message": GENERIC_FAILURE}), 500


def json_errors(view):
    """Map domain errors to JSON responses; unexpected errors become a generic 500."""

    @wraps(view)
    async def wrapper(*args, **kwargs):
        try:
            return await view(*args, **kwargs)
        except PersistenceFailure as e:
            logger.exception("storage failure in %s", view.__name__)
            return error_response(e)
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            logger.exception("unexpected error in %s", view.__name__)
            return error_response(e)

    return wrapper
