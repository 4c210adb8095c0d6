"""Repository for doctor records in Firestore."""
from typing import Any, Dict, List, Optional

from google.api_core import exceptions as google_exceptions

from careforme.core.config import get_config
from careforme.core.exceptions import ExternalServiceError, ResourceNotFoundError
from careforme.core.logging import get_logger
from careforme.utils.firebase import get_firestore_client

logger = get_logger(__name__)


class DoctorRepository:
    """Collection-level access to the doctors collection.

    Documents are returned as plain dictionaries with the document id under
    ``id``; turning them into records is the normalizer's job.
    """

    def __init__(self, db=None, collection_name: Optional[str] = None):
        self.db = db or get_firestore_client()
        self.collection_name = collection_name or get_config().doctors_collection
        self.collection = self.db.collection(self.collection_name)

    def list(self) -> List[Dict[str, Any]]:
        """Fetch every document in the collection."""
        try:
            documents = []
            for doc in self.collection.stream():
                data = doc.to_dict() or {}
                data["id"] = doc.id
                documents.append(data)

            logger.info(f"Fetched {len(documents)} doctors")
            return documents

        except Exception as e:
            logger.error(f"Error listing doctors: {e}")
            raise ExternalServiceError("Firestore", f"Failed to list doctors: {e}")

    def get(self, doctor_id: str) -> Optional[Dict[str, Any]]:
        """Fetch one document, or None when it does not exist."""
        try:
            doc = self.collection.document(doctor_id).get()
            if not doc.exists:
                return None

            data = doc.to_dict() or {}
            data["id"] = doc.id
            return data

        except Exception as e:
            logger.error(f"Error getting doctor {doctor_id}: {e}", extra={"doctor_id": doctor_id})
            raise ExternalServiceError("Firestore", f"Failed to get doctor: {e}", {"doctor_id": doctor_id})

    def add(self, data: Dict[str, Any]) -> str:
        """Create a document and return the store-assigned id."""
        try:
            payload = {key: value for key, value in data.items() if key != "id"}
            _, doc_ref = self.collection.add(payload)

            logger.info(f"Created doctor: {doc_ref.id}", extra={"doctor_id": doc_ref.id})
            return doc_ref.id

        except Exception as e:
            logger.error(f"Error creating doctor: {e}")
            raise ExternalServiceError("Firestore", f"Failed to create doctor: {e}")

    def update(self, doctor_id: str, patch: Dict[str, Any]) -> None:
        """Apply a partial update; fails when the document does not exist."""
        try:
            self.collection.document(doctor_id).update(patch)
            logger.info(
                f"Updated doctor: {doctor_id}",
                extra={"doctor_id": doctor_id, "fields": sorted(patch)}
            )

        except google_exceptions.NotFound:
            logger.warning(f"Doctor not found for update: {doctor_id}", extra={"doctor_id": doctor_id})
            raise ResourceNotFoundError("Doctor", doctor_id)
        except Exception as e:
            logger.error(f"Error updating doctor {doctor_id}: {e}", extra={"doctor_id": doctor_id})
            raise ExternalServiceError("Firestore", f"Failed to update doctor: {e}", {"doctor_id": doctor_id})

    def delete(self, doctor_id: str) -> None:
        """Hard-delete a document. Deleting a missing document succeeds."""
        try:
            self.collection.document(doctor_id).delete()
            logger.info(f"Deleted doctor: {doctor_id}", extra={"doctor_id": doctor_id})

        except Exception as e:
            logger.error(f"Error deleting doctor {doctor_id}: {e}", extra={"doctor_id": doctor_id})
            raise ExternalServiceError("Firestore", f"Failed to delete doctor: {e}", {"doctor_id": doctor_id})

    def put(self, doctor_id: str, data: Dict[str, Any]) -> None:
        """Create or overwrite the document with a caller-chosen id."""
        try:
            payload = {key: value for key, value in data.items() if key != "id"}
            self.collection.document(doctor_id).set(payload)
            logger.info(f"Wrote doctor: {doctor_id}", extra={"doctor_id": doctor_id})

        except Exception as e:
            logger.error(f"Error writing doctor {doctor_id}: {e}", extra={"doctor_id": doctor_id})
            raise ExternalServiceError("Firestore", f"Failed to write doctor: {e}", {"doctor_id": doctor_id})
