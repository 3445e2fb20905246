# core/rate_limiter.py

from typing import Dict, Optional, Tuple
from fastapi import Request
from collections import defaultdict
import time

from core.errors import RateLimitError
from core.logging_config import logger


# Simple in-memory sliding-window limiter (per process)
_rate_limit_store: Dict[str, list] = defaultdict(list)


def check_rate_limit(
    identifier: str,
    max_requests: int = 10,
    window_seconds: int = 60,
) -> Tuple[bool, int]:
    """
    Record a hit for `identifier` and report whether it is still allowed.

    Returns:
        Tuple of (allowed: bool, remaining: int)
    """
    now = time.time()
    window_start = now - window_seconds

    hits = [ts for ts in _rate_limit_store[identifier] if ts > window_start]

    if len(hits) >= max_requests:
        _rate_limit_store[identifier] = hits
        return False, 0

    hits.append(now)
    _rate_limit_store[identifier] = hits
    return True, max_requests - len(hits)


def get_rate_limit_identifier(request: Request, user_id: Optional[str] = None) -> str:
    """
    Key hits by user (email or id) when known, else by client IP.
    Honours X-Forwarded-For from the proxy in front of the API.
    """
    if user_id:
        return f"user:{user_id}"

    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return f"ip:{forwarded_for.split(',')[0].strip()}"

    return f"ip:{request.client.host if request.client else 'unknown'}"


def require_rate_limit(
    request: Request,
    identifier: Optional[str] = None,
    max_requests: int = 10,
    window_seconds: int = 60,
):
    """Raise RateLimitError (429) once the identifier exhausts its window."""
    identifier = identifier or get_rate_limit_identifier(request)
    allowed, _ = check_rate_limit(identifier, max_requests, window_seconds)

    if not allowed:
        logger.warning(f"Rate limit exceeded for {identifier} on {request.url.path}")
        raise RateLimitError(
            f"Rate limit exceeded. Maximum {max_requests} requests per {window_seconds} seconds.",
            retry_after=window_seconds,
        )


def reset_rate_limits():
    _rate_limit_store.clear()
