"""Firebase utilities for the application."""
import firebase_admin
from firebase_admin import credentials, firestore
from google.cloud.firestore_v1 import Client
from careforme.core.config import get_config
from careforme.core.exceptions import ConfigurationError
from careforme.core.logging import get_logger

logger = get_logger(__name__)


def initialize_firebase(config=None) -> None:
    """Initialize Firebase Admin SDK if not already initialized.

    Uses the service-account file when one is configured, otherwise falls
    back to Application Default Credentials.
    """
    if firebase_admin._apps:
        return

    config = config or get_config()
    try:
        if config.firebase_credentials_path:
            cred = credentials.Certificate(config.firebase_credentials_path)
        else:
            cred = credentials.ApplicationDefault()
        firebase_admin.initialize_app(cred)
        logger.info("Firebase initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize Firebase: {e}")
        raise ConfigurationError(
            "Firebase could not be initialized",
            details={"reason": str(e)}
        )


def get_firestore_client(config=None) -> Client:
    """Get Firestore client instance."""
    initialize_firebase(config)
    return firestore.client()
