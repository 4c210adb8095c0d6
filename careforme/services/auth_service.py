"""Admin authentication on top of Firebase Authentication."""
from typing import Optional

from firebase_admin import auth as firebase_auth

from careforme.core.config import get_config
from careforme.core.exceptions import AuthenticationError, ExternalServiceError, ValidationError
from careforme.core.logging import get_logger
from careforme.integrations.firebase_auth.client import FirebaseAuthClient
from careforme.models.session import Session
from careforme.services.session import SessionProvider

logger = get_logger(__name__)


class AuthService:
    """Sign-in, sign-out, token verification and password changes."""

    def __init__(
        self,
        auth_client: Optional[FirebaseAuthClient] = None,
        session_provider: Optional[SessionProvider] = None,
        admin_auth=None,
        min_password_length: Optional[int] = None
    ):
        self.auth_client = auth_client or FirebaseAuthClient()
        self.session_provider = session_provider
        self.admin_auth = admin_auth or firebase_auth
        self.min_password_length = min_password_length or get_config().min_password_length

    def login(self, email: str, password: str) -> Session:
        """Authenticate an admin; the session is published only when a provider is attached."""
        if not isinstance(email, str) or not isinstance(password, str):
            raise ValidationError("Email and password must be strings")
        email = email.strip()
        if not email or not password:
            raise ValidationError("Email and password are required")

        try:
            result = self.auth_client.sign_in_with_password(email, password)
        except AuthenticationError:
            logger.warning("Login failed", extra={"email": email})
            raise

        expires_in = result.get("expiresIn")
        session = Session(
            uid=result["localId"],
            email=result.get("email", email),
            id_token=result.get("idToken"),
            refresh_token=result.get("refreshToken"),
            expires_in=int(expires_in) if expires_in else None
        )
        if self.session_provider is not None:
            self.session_provider.publish(session)

        logger.info("Login successful", extra={"uid": session.uid})
        return session

    def logout(self, session: Optional[Session] = None) -> None:
        """Revoke the admin's refresh tokens and clear the current session."""
        if session is None and self.session_provider is not None:
            session = self.session_provider.current
        if session is not None:
            try:
                self.admin_auth.revoke_refresh_tokens(session.uid)
            except Exception as e:
                logger.error(f"Failed to revoke refresh tokens: {e}", extra={"uid": session.uid})

        if self.session_provider is not None:
            self.session_provider.publish(None)
        logger.info("Logged out", extra={"uid": session.uid if session else None})

    def verify(self, id_token: str) -> Session:
        """Turn a Firebase ID token into a Session."""
        if not id_token:
            raise AuthenticationError("Authentication token required")
        try:
            claims = self.admin_auth.verify_id_token(id_token, check_revoked=True)
        except Exception as e:
            logger.warning(f"Token verification failed: {e}")
            raise AuthenticationError("Invalid or expired authentication token")

        return Session(uid=claims["uid"], email=claims.get("email", ""), id_token=id_token)

    def change_password(self, session: Session, new_password: str, confirm_password: str) -> None:
        """Validate and apply a new password for the signed-in admin."""
        if not new_password or len(new_password) < self.min_password_length:
            raise ValidationError(
                f"Password must be at least {self.min_password_length} characters long",
                field="newPassword"
            )
        if new_password != confirm_password:
            raise ValidationError("Passwords do not match", field="confirmPassword")

        try:
            self.admin_auth.update_user(session.uid, password=new_password)
        except Exception as e:
            logger.error(f"Failed to change password: {e}", extra={"uid": session.uid})
            raise ExternalServiceError("Firebase Auth", "Failed to change password")

        logger.info("Password changed", extra={"uid": session.uid})
