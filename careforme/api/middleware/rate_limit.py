"""Rate limiting middleware for API endpoints."""
from functools import wraps
from typing import Callable, Optional, Tuple
from collections import defaultdict
import time

from flask import g, jsonify, make_response, request

from careforme.api.deps import get_services
from careforme.core.exceptions import RateLimitError
from careforme.core.logging import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """Simple in-memory sliding-window rate limiter."""

    def __init__(self, requests_per_minute: int = 60):
        self.requests_per_minute = requests_per_minute
        self.requests = defaultdict(list)
        self._cleanup_interval = 300  # seconds
        self._last_cleanup = time.time()

    def is_allowed(self, key: str) -> Tuple[bool, Optional[int]]:
        """Check if request is allowed for the given key.

        Returns:
            Tuple of (is_allowed, retry_after_seconds)
        """
        now = time.time()
        minute_ago = now - 60

        if now - self._last_cleanup > self._cleanup_interval:
            self._cleanup()

        self.requests[key] = [
            timestamp for timestamp in self.requests[key]
            if timestamp > minute_ago
        ]

        if len(self.requests[key]) >= self.requests_per_minute:
            oldest_request = min(self.requests[key])
            retry_after = int(oldest_request + 60 - now) + 1
            return False, retry_after

        self.requests[key].append(now)
        return True, None

    def remaining(self, key: str) -> int:
        return max(0, self.requests_per_minute - len(self.requests[key]))

    def _cleanup(self):
        """Drop keys with no request in the last minute."""
        now = time.time()
        minute_ago = now - 60

        stale = [
            key for key, timestamps in self.requests.items()
            if not timestamps or max(timestamps) < minute_ago
        ]
        for key in stale:
            del self.requests[key]

        self._last_cleanup = now

        if stale:
            logger.info(f"Cleaned up {len(stale)} rate limit entries")


def get_rate_limiter() -> RateLimiter:
    """The limiter of the current app, created on first use."""
    services = get_services()
    if services.rate_limiter is None:
        services.rate_limiter = RateLimiter(services.config.rate_limit_per_minute)
    return services.rate_limiter


def get_rate_limit_key() -> str:
    """Signed-in admins are limited per uid, everyone else per address."""
    session = g.get("session")
    if session is not None:
        return f"uid:{session.uid}"
    return f"ip:{request.remote_addr}"


def rate_limit(f: Callable) -> Callable:
    """Decorator applying the app's rate limit to an endpoint."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not get_services().config.enable_rate_limiting:
            return f(*args, **kwargs)

        limiter = get_rate_limiter()
        key = get_rate_limit_key()
        is_allowed, retry_after = limiter.is_allowed(key)

        if not is_allowed:
            logger.warning(
                "Rate limit exceeded",
                extra={
                    "key": key,
                    "path": request.path,
                    "method": request.method,
                    "retry_after": retry_after
                }
            )

            response = jsonify(RateLimitError(retry_after=retry_after).to_dict())
            response.status_code = 429
            response.headers["Retry-After"] = str(retry_after)
            response.headers["X-RateLimit-Limit"] = str(limiter.requests_per_minute)
            response.headers["X-RateLimit-Remaining"] = "0"
            response.headers["X-RateLimit-Reset"] = str(int(time.time()) + retry_after)
            return response

        response = make_response(f(*args, **kwargs))
        response.headers["X-RateLimit-Limit"] = str(limiter.requests_per_minute)
        response.headers["X-RateLimit-Remaining"] = str(limiter.remaining(key))
        response.headers["X-RateLimit-Reset"] = str(int(time.time()) + 60)
        return response

    return decorated_function
