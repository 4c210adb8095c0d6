"""Service for creating, reading and updating doctor records."""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from dateutil import parser as date_parser

from careforme.core.exceptions import (
    CareForMeException, ExternalServiceError, ResourceNotFoundError, ValidationError
)
from careforme.core.logging import get_logger
from careforme.models.doctor import (
    FIELD_MAP, NUMERIC_FIELDS, REQUIRED_FIELDS, SPECIALTIES, WEEKDAYS, DoctorRecord
)
from careforme.services.filters import DoctorFilter
from careforme.services.normalizer import normalize_record
from careforme.utils.validators import is_blank, validate_email, validate_phone

logger = get_logger(__name__)

# Dropped from incoming payloads; createdAt is only settable on create
CREATE_IGNORED_FIELDS = ("id",)
UPDATE_IGNORED_FIELDS = ("id", "createdAt")


class DoctorService:
    """CRUD operations over the doctor store."""

    def __init__(self, store):
        self.store = store

    def list_doctors(self, criteria: Optional[DoctorFilter] = None) -> List[DoctorRecord]:
        """List every doctor matching ``criteria``."""
        try:
            documents = self.store.list()
        except CareForMeException:
            raise
        except Exception as e:
            logger.error(f"Error fetching doctors: {e}")
            raise ExternalServiceError("Firestore", f"Failed to fetch doctors: {e}")

        records = [normalize_record(doc, doc.get("id")) for doc in documents]
        return (criteria or DoctorFilter()).apply(records)

    def get_doctor(self, doctor_id: str) -> DoctorRecord:
        document = self.store.get(doctor_id)
        if document is None:
            raise ResourceNotFoundError("Doctor", doctor_id)
        return normalize_record(document, doctor_id)

    def create_doctor(self, payload: Dict[str, Any]) -> DoctorRecord:
        """Validate ``payload`` and add it to the store.

        Args:
            payload: Store-shaped (camelCase) doctor fields

        Returns:
            The stored record with its assigned id
        """
        data = self._clean(payload, CREATE_IGNORED_FIELDS)
        missing = [field for field in REQUIRED_FIELDS if is_blank(data.get(field))]
        if missing:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing)}",
                field=missing[0],
                details={"missing": missing}
            )
        self._validate(data)
        self._validate_created_at(data.get("createdAt"))

        record = normalize_record(data)
        if not record.created_at:
            record.created_at = datetime.now(timezone.utc).isoformat()
        document = record.to_dict()

        doctor_id = self.store.add(document)
        record.id = doctor_id

        logger.info("Doctor created", extra={"doctor_id": doctor_id})
        return record

    def update_doctor(self, doctor_id: str, patch: Dict[str, Any]) -> DoctorRecord:
        """Apply a partial update and return the resulting record."""
        data = self._clean(patch, UPDATE_IGNORED_FIELDS)
        if not data:
            raise ValidationError("No fields to update")

        blank = [field for field in REQUIRED_FIELDS if field in data and is_blank(data[field])]
        if blank:
            raise ValidationError(
                f"Required fields cannot be empty: {', '.join(blank)}",
                field=blank[0],
                details={"empty": blank}
            )
        self._validate(data)

        current = self.store.get(doctor_id)
        if current is None:
            raise ResourceNotFoundError("Doctor", doctor_id)

        merged = normalize_record({**current, **data}, doctor_id)
        stored = merged.to_dict()
        changes = {key: stored[key] for key in data}

        self.store.update(doctor_id, changes)

        logger.info(
            "Doctor updated",
            extra={"doctor_id": doctor_id, "fields": sorted(changes)}
        )
        return merged

    @staticmethod
    def _clean(payload: Optional[Dict[str, Any]], ignored: Tuple[str, ...]) -> Dict[str, Any]:
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")

        data = {key: value for key, value in payload.items() if key not in ignored}
        unknown = sorted(key for key in data if key not in FIELD_MAP)
        if unknown:
            raise ValidationError(
                f"Unknown fields: {', '.join(unknown)}",
                details={"unknown": unknown}
            )

        for key, value in data.items():
            if isinstance(value, str):
                data[key] = value.strip()
        return data

    @staticmethod
    def _validate_created_at(value: Any) -> None:
        """A supplied creation time must be an ISO-8601 string."""
        if value is None or value == "":
            return
        if not isinstance(value, str):
            raise ValidationError("createdAt must be an ISO-8601 string", field="createdAt")
        try:
            date_parser.isoparse(value)
        except (ValueError, OverflowError):
            raise ValidationError(f"Invalid createdAt: {value}", field="createdAt")

    @staticmethod
    def _validate(data: Dict[str, Any]) -> None:
        """Field-level checks for whatever keys ``data`` carries."""
        if "specialty" in data and data["specialty"] not in SPECIALTIES:
            raise ValidationError(f"Invalid specialty: {data['specialty']}", field="specialty")

        if "email" in data and not validate_email(data["email"]):
            raise ValidationError("Invalid email address", field="email")

        if "phone" in data and not validate_phone(data["phone"]):
            raise ValidationError("Invalid phone number", field="phone")

        for field in NUMERIC_FIELDS + ("reviewCount",):
            value = data.get(field)
            if value is None or value == "":
                continue
            if isinstance(value, bool):
                raise ValidationError(f"{field} must be a number", field=field)
            try:
                float(value)
            except (TypeError, ValueError):
                raise ValidationError(f"{field} must be a number", field=field)

        rating = data.get("rating")
        if rating not in (None, ""):
            if not 0 <= float(rating) <= 5:
                logger.warning("Rating outside 0-5 accepted", extra={"rating": rating})

        if "availableDays" in data:
            days = data["availableDays"]
            if not isinstance(days, list):
                raise ValidationError("availableDays must be a list", field="availableDays")
            invalid = [day for day in days if day not in WEEKDAYS]
            if invalid:
                raise ValidationError(
                    f"Invalid weekdays: {', '.join(map(str, invalid))}",
                    field="availableDays"
                )

        for field in ("isAvailable", "suspended"):
            if field in data and not isinstance(data[field], bool):
                raise ValidationError(f"{field} must be true or false", field=field)
