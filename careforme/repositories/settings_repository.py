"""Repository for per-admin notification settings in Firestore."""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from careforme.core.config import get_config
from careforme.core.exceptions import ExternalServiceError
from careforme.core.logging import get_logger
from careforme.utils.firebase import get_firestore_client

logger = get_logger(__name__)

SETTINGS_FIELDS = ("notificationEmail", "notifyOnNewDoctors")


class SettingsRepository:
    """Notification preferences keyed by admin uid."""

    def __init__(self, db=None, collection_name: Optional[str] = None):
        self.db = db or get_firestore_client()
        self.collection_name = collection_name or get_config().settings_collection
        self.collection = self.db.collection(self.collection_name)

    @staticmethod
    def defaults(email: str = "") -> Dict[str, Any]:
        return {"notificationEmail": email, "notifyOnNewDoctors": True}

    def get(self, uid: str, email: str = "") -> Dict[str, Any]:
        """Stored settings merged over the defaults."""
        settings = self.defaults(email)
        try:
            doc = self.collection.document(uid).get()
        except Exception as e:
            logger.error(f"Error getting settings: {e}", extra={"uid": uid})
            raise ExternalServiceError("Firestore", f"Failed to get settings: {e}")

        if doc.exists:
            stored = doc.to_dict() or {}
            settings.update({key: stored[key] for key in SETTINGS_FIELDS if key in stored})
        return settings

    def save(self, uid: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Merge-write the given settings and return what was written."""
        payload = {key: data[key] for key in SETTINGS_FIELDS if key in data}
        payload["updatedAt"] = datetime.now(timezone.utc).isoformat()
        try:
            self.collection.document(uid).set(payload, merge=True)
        except Exception as e:
            logger.error(f"Error saving settings: {e}", extra={"uid": uid})
            raise ExternalServiceError("Firestore", f"Failed to save settings: {e}")

        logger.info("Saved notification settings", extra={"uid": uid})
        return payload
