"""In-memory doctor list owned by one view, with confirm-then-commit writes."""
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional, Set

from careforme.core.exceptions import (
    BusinessLogicError, CareForMeException, ExternalServiceError, ResourceNotFoundError
)
from careforme.core.logging import get_logger
from careforme.models.analytics import DirectorySummary, GroupCount
from careforme.models.doctor import DoctorRecord
from careforme.services import aggregation
from careforme.services.filters import DoctorFilter
from careforme.services.normalizer import normalize_record
from careforme.services.session import SessionProvider

logger = get_logger(__name__)


class DoctorDirectoryView:
    """Holds the records one view renders and mutates them only after the
    store has confirmed a write.

    The store is any object exposing ``list()``, ``get(id)``,
    ``update(id, patch)`` and ``delete(id)`` over plain dictionaries.
    """

    def __init__(self, store, session_provider: Optional[SessionProvider] = None):
        self.store = store
        self._records: List[DoctorRecord] = []
        self._generation = 0
        self._pending: Set[str] = set()
        self._unsubscribe = None
        if session_provider is not None:
            self._unsubscribe = session_provider.subscribe(self._on_session_change)

    def __enter__(self) -> "DoctorDirectoryView":
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()

    @property
    def records(self) -> List[DoctorRecord]:
        return list(self._records)

    def dispose(self) -> None:
        """Detach from the session provider."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_session_change(self, session) -> None:
        if session is None:
            self._records = []
            self._generation += 1  # in-flight fetches belong to the old session

    # Fetching

    def begin_fetch(self) -> int:
        """Start a fetch and return its generation number."""
        self._generation += 1
        return self._generation

    def complete_fetch(self, generation: int, documents: Iterable[Dict[str, Any]]) -> bool:
        """Install fetched documents unless a newer fetch has started since."""
        if generation != self._generation:
            logger.info(
                "Discarding stale fetch",
                extra={"generation": generation, "latest_generation": self._generation}
            )
            return False
        self._records = [normalize_record(doc, doc.get("id")) for doc in documents]
        return True

    def load(self, documents: Iterable[Dict[str, Any]]) -> None:
        """Replace the held records without going through the store."""
        self.complete_fetch(self.begin_fetch(), documents)

    def refresh(self) -> List[DoctorRecord]:
        """Fetch the full list from the store.

        On failure the held records are left as they were.
        """
        generation = self.begin_fetch()
        try:
            documents = self.store.list()
        except CareForMeException:
            raise
        except Exception as e:
            logger.error(f"Error fetching doctors: {e}")
            raise ExternalServiceError("Firestore", f"Failed to fetch doctors: {e}")

        self.complete_fetch(generation, documents)
        return self.records

    # Derived views

    def find(self, doctor_id: str) -> Optional[DoctorRecord]:
        for record in self._records:
            if record.id == doctor_id:
                return record
        return None

    def filtered(self, criteria: Optional[DoctorFilter] = None) -> List[DoctorRecord]:
        return (criteria or DoctorFilter()).apply(self._records)

    def summary(self) -> DirectorySummary:
        return aggregation.summarize(self._records)

    def group(self, key: str, limit: Optional[int] = None) -> List[GroupCount]:
        groups = aggregation.group_counts(self._records, key)
        return groups[:limit] if limit else groups

    # Writes

    def _claim(self, doctor_id: str, action: str) -> None:
        if doctor_id in self._pending:
            raise BusinessLogicError(
                "Another operation on this doctor is still in progress",
                details={"doctor_id": doctor_id, "action": action}
            )
        self._pending.add(doctor_id)

    def _resolve(self, doctor_id: str) -> DoctorRecord:
        record = self.find(doctor_id)
        if record is not None:
            return record

        document = self.store.get(doctor_id)
        if document is None:
            raise ResourceNotFoundError("Doctor", doctor_id)
        record = normalize_record(document, doctor_id)
        self._records.append(record)
        return record

    def toggle_suspension(self, doctor_id: str) -> DoctorRecord:
        """Flip ``suspended`` in the store, then locally.

        Returns:
            The updated local record.
        """
        self._claim(doctor_id, "toggle_suspension")
        try:
            record = self._resolve(doctor_id)
            new_state = not record.suspended

            try:
                self.store.update(doctor_id, {"suspended": new_state})
            except (ResourceNotFoundError, ExternalServiceError):
                raise
            except Exception as e:
                logger.error(
                    f"Error updating doctor suspension status: {e}",
                    extra={"doctor_id": doctor_id}
                )
                raise ExternalServiceError(
                    "Firestore", "Failed to update doctor suspension status", {"doctor_id": doctor_id}
                )

            updated = replace(record, suspended=new_state)
            self._records = [updated if item.id == doctor_id else item for item in self._records]

            logger.info(
                f"Doctor {'suspended' if new_state else 'unsuspended'}",
                extra={"doctor_id": doctor_id}
            )
            return updated
        finally:
            self._pending.discard(doctor_id)

    def delete(self, doctor_id: str) -> None:
        """Delete in the store, then drop the record from the local list.

        A store-side not-found counts as success.
        """
        self._claim(doctor_id, "delete")
        try:
            try:
                self.store.delete(doctor_id)
            except ResourceNotFoundError:
                logger.info("Doctor already deleted", extra={"doctor_id": doctor_id})
            except ExternalServiceError:
                raise
            except Exception as e:
                logger.error(f"Error deleting doctor: {e}", extra={"doctor_id": doctor_id})
                raise ExternalServiceError("Firestore", "Failed to delete doctor", {"doctor_id": doctor_id})

            self._records = [record for record in self._records if record.id != doctor_id]
            logger.info("Doctor deleted", extra={"doctor_id": doctor_id})
        finally:
            self._pending.discard(doctor_id)
