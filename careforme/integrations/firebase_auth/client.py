"""Firebase Authentication REST client (email/password sign-in)."""
import requests
from typing import Any, Dict, Optional

from careforme.core.config import get_config
from careforme.core.exceptions import AuthenticationError, ConfigurationError, ExternalServiceError
from careforme.core.logging import get_logger

logger = get_logger(__name__)

# Identity Toolkit error code -> message shown to the admin
ERROR_MESSAGES = {
    "EMAIL_NOT_FOUND": "Invalid email or password",
    "INVALID_PASSWORD": "Invalid email or password",
    "INVALID_LOGIN_CREDENTIALS": "Invalid email or password",
    "INVALID_EMAIL": "The email address is badly formatted",
    "USER_DISABLED": "This account has been disabled",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many failed attempts, try again later",
}


class FirebaseAuthClient:
    """Client for the Identity Toolkit ``accounts:*`` endpoints."""

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None, timeout: Optional[float] = None):
        config = get_config()
        self.api_key = api_key or config.firebase_web_api_key
        self.base_url = (base_url or config.firebase_auth_base_url).rstrip("/")
        self.timeout = timeout or config.request_timeout_seconds
        self.session = requests.Session()

    def sign_in_with_password(self, email: str, password: str) -> Dict[str, Any]:
        """Exchange email and password for an ID token.

        Returns:
            The Identity Toolkit response (``localId``, ``email``,
            ``idToken``, ``refreshToken``, ``expiresIn``).
        """
        if not self.api_key:
            raise ConfigurationError("FIREBASE_WEB_API_KEY is not configured", setting="FIREBASE_WEB_API_KEY")

        try:
            response = self.session.post(
                f"{self.base_url}/accounts:signInWithPassword",
                params={"key": self.api_key},
                json={"email": email, "password": password, "returnSecureToken": True},
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Sign-in request failed: {e}")
            raise ExternalServiceError("Firebase Auth", f"Sign-in request failed: {e}")

        if response.status_code == 200:
            return response.json()

        code = self._error_code(response)
        if code in ERROR_MESSAGES or response.status_code == 400:
            logger.warning(
                "Sign-in rejected",
                extra={"status_code": response.status_code, "error_code": code}
            )
            raise AuthenticationError(ERROR_MESSAGES.get(code, "Invalid email or password"))

        logger.error(
            f"Sign-in failed with status {response.status_code}",
            extra={"status_code": response.status_code, "response_text": response.text[:500]}
        )
        raise ExternalServiceError(
            "Firebase Auth",
            f"Unexpected status {response.status_code}",
            {"status_code": response.status_code}
        )

    @staticmethod
    def _error_code(response: requests.Response) -> str:
        """Extract e.g. ``INVALID_PASSWORD`` from an error body."""
        try:
            message = response.json().get("error", {}).get("message", "")
        except ValueError:
            return ""
        # Messages look like "TOO_MANY_ATTEMPTS_TRY_LATER : Access ... disabled"
        return message.split(":", 1)[0].strip()
