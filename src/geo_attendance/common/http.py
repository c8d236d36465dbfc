"""JSON envelope helpers shared by the controllers.

Success: ``{"success": true, "data": ..., <extra>}``
Failure: ``{"success": false, "message": ..., "data"?: ..., "error"?: ...}``
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import current_app, jsonify, request

from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def success(data: Any = None, *, message: Optional[str] = None, status: int = 200, **extra: Any):
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    body["data"] = data
    body.update(extra)
    return jsonify(body), status


def failure(message: str, *, status: int = 400, data: Any = None, error: Optional[str] = None, **extra: Any):
    body: dict[str, Any] = {"success": False, "message": message}
    if data is not None:
        body["data"] = data
    if error is not None:
        body["error"] = error
    body.update(extra)
    return jsonify(body), status


def json_body() -> dict:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def domain_failure(exc: DomainError):
    return failure(exc.message, status=exc.status_code, data=exc.data)


def internal_failure(message: str, exc: Exception):
    """Log the full error server-side and answer with an opaque 500."""
    logger.exception("%s %s failed", request.method, request.path)
    detail = str(exc) if current_app.config.get("DEBUG") else None
    return failure(message, status=500, error=detail)


def token_required(verifier):
    """Resolve the bearer token and pass the identity to the view as `current`."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                current = verifier.verify_header(request.headers.get("Authorization"))
            except DomainError as e:
                return domain_failure(e)
            except Exception as e:
                return internal_failure("Authentication failed", e)
            return view(current, *args, **kwargs)

        return wrapper

    return decorator
