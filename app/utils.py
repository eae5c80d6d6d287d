"""
Helpers shared by the web subsystems.
"""

import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Callable, Iterable, Optional

from flask import request, jsonify


def get_client_ip() -> str:
    """Get client IP address.

    Raw forwarding headers are never read here: ProxyFix has already
    replaced ``remote_addr`` with the address reported by the trusted proxy.
    """
    return request.remote_addr or "unknown"


def get_owner_key() -> str:
    """Logged-in uid cookie, or the client IP for anonymous visitors."""
    uid = request.cookies.get("uid")
    return uid if uid else f"ip:{get_client_ip()}"


def admin_required(admin_user_ids: Iterable[str]) -> Callable:
    """Decorator factory restricting a route to configured admin uids."""
    admins = set(admin_user_ids)

    def decorator(f: Callable) -> Callable:
        @wraps(f)
        def decorated_function(*args, **kwargs):
            uid = request.cookies.get("uid")
            if not uid or uid not in admins:
                return jsonify({
                    "error": "Forbidden",
                    "message": "Admin access required."
                }), 403
            return f(*args, **kwargs)
        return decorated_function
    return decorator


@contextmanager
def timed_operation(logger: logging.Logger, action: str, level: Optional[int] = logging.INFO):
    """Log start and duration of a scoped operation."""
    logger.log(level, f"{action} started")
    started_at = time.perf_counter()
    try:
        yield
    finally:
        duration_ms = (time.perf_counter() - started_at) * 1000
        logger.log(level, f"{action} completed in {duration_ms:.0f} ms")
