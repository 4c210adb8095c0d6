"""Authentication middleware for API endpoints."""
from functools import wraps
from typing import Callable, Optional

from flask import g, request

from careforme.api.deps import get_services
from careforme.core.exceptions import AuthenticationError
from careforme.core.logging import get_logger

logger = get_logger(__name__)


def bearer_token() -> Optional[str]:
    """The token of an ``Authorization: Bearer <token>`` header, if any."""
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def require_session(f: Callable) -> Callable:
    """Decorator requiring a valid Firebase ID token.

    The verified session is stored in ``g.session``.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = bearer_token()

        if not token:
            logger.warning(
                "Missing authentication token",
                extra={
                    "path": request.path,
                    "method": request.method,
                    "remote_addr": request.remote_addr
                }
            )
            raise AuthenticationError("Authentication token required")

        g.session = get_services().auth_service.verify(token)

        logger.info(
            "Session authenticated",
            extra={
                "uid": g.session.uid,
                "path": request.path,
                "method": request.method
            }
        )

        return f(*args, **kwargs)

    return decorated_function
