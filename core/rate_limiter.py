# core/rate_limiter.py

from typing import Dict, Optional, Tuple
from fastapi import HTTPException, Request
from collections import defaultdict
import time


# In-memory sliding-window limiter, per process
_rate_limit_store: Dict[str, list] = defaultdict(list)


def check_rate_limit(
    identifier: str,
    max_requests: int = 10,
    window_seconds: int = 60,
) -> Tuple[bool, int]:
    """
    Check if a request should be rate limited.

    Args:
        identifier: Unique identifier (IP address, email, etc.)
        max_requests: Maximum number of requests allowed
        window_seconds: Time window in seconds

    Returns:
        Tuple of (allowed: bool, remaining: int)
    """
    now = time.time()
    window_start = now - window_seconds

    requests = [ts for ts in _rate_limit_store[identifier] if ts > window_start]

    if len(requests) >= max_requests:
        _rate_limit_store[identifier] = requests
        return False, 0

    requests.append(now)
    _rate_limit_store[identifier] = requests

    return True, max_requests - len(requests)


def prune_rate_limits(window_seconds: int) -> int:
    """
    Drops identifiers with no request inside the window.
    Returns how many were dropped.
    """
    window_start = time.time() - window_seconds
    stale = [
        identifier
        for identifier, timestamps in _rate_limit_store.items()
        if not any(ts > window_start for ts in timestamps)
    ]
    for identifier in stale:
        del _rate_limit_store[identifier]
    return len(stale)


def get_rate_limit_identifier(request: Request, email: Optional[str] = None) -> str:
    """
    Prefers the login email if available, otherwise the client IP.
    """
    if email:
        return f"login:{email}"

    client_ip = request.client.host if request.client else "unknown"

    # Behind a proxy the first forwarded address is the original client
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()

    return f"ip:{client_ip}"


def require_rate_limit(
    request: Request,
    identifier: Optional[str] = None,
    max_requests: int = 10,
    window_seconds: int = 60
) -> int:
    """
    Raises HTTPException 429 if the identifier is over its limit.
    Returns the remaining allowance otherwise.
    """
    if identifier is None:
        identifier = get_rate_limit_identifier(request)

    allowed, remaining = check_rate_limit(identifier, max_requests, window_seconds)

    if not allowed:
        raise HTTPException(
            status_code=429,
            detail=f"Rate limit exceeded. Maximum {max_requests} requests per {window_seconds} seconds.",
            headers={
                "X-RateLimit-Limit": str(max_requests),
                "X-RateLimit-Window": str(window_seconds),
                "Retry-After": str(window_seconds),
            }
        )

    return remaining


def clear_rate_limits():
    _rate_limit_store.clear()
