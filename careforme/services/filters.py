"""Search and categorical filtering of doctor records."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Union

from careforme.core.exceptions import ValidationError
from careforme.models.doctor import DoctorRecord


class _AnyValue:
    """Sentinel meaning "no filter"; never equal to a real value, "" included."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ANY"

    def __reduce__(self):
        return (_AnyValue, ())


ANY = _AnyValue()

# Query-string spelling of the sentinel
ALL_TOKEN = "all"


class AvailabilityFilter(str, Enum):
    """Availability states selectable in the doctors list."""
    ALL = "all"
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    SUSPENDED = "suspended"


@dataclass(frozen=True)
class DoctorFilter:
    """Search term plus categorical filters, combined with logical AND."""
    search_term: str = ""
    specialty: Union[str, _AnyValue] = ANY
    availability: AvailabilityFilter = AvailabilityFilter.ALL
    city: Union[str, _AnyValue] = ANY

    def __post_init__(self):
        if not isinstance(self.availability, AvailabilityFilter):
            object.__setattr__(self, "availability", AvailabilityFilter(self.availability))

    def matches_search(self, record: DoctorRecord) -> bool:
        term = (self.search_term or "").strip().lower()
        if not term:
            return True
        return any(term in value.lower() for value in (record.name, record.email, record.city))

    def matches_specialty(self, record: DoctorRecord) -> bool:
        return self.specialty is ANY or record.specialty == self.specialty

    def matches_city(self, record: DoctorRecord) -> bool:
        return self.city is ANY or record.city == self.city

    def matches_availability(self, record: DoctorRecord) -> bool:
        # Suspension wins: a suspended record never counts as (un)available.
        if self.availability == AvailabilityFilter.AVAILABLE:
            return record.is_available and not record.suspended
        if self.availability == AvailabilityFilter.UNAVAILABLE:
            return not record.is_available and not record.suspended
        if self.availability == AvailabilityFilter.SUSPENDED:
            return record.suspended
        return True

    def matches(self, record: DoctorRecord) -> bool:
        """Return True when the record satisfies every criterion."""
        return (
            self.matches_search(record)
            and self.matches_specialty(record)
            and self.matches_availability(record)
            and self.matches_city(record)
        )

    def apply(self, records: Iterable[DoctorRecord]) -> List[DoctorRecord]:
        """Return the matching records in their original order."""
        return [record for record in records if self.matches(record)]

    @property
    def is_empty(self) -> bool:
        return (
            not (self.search_term or "").strip()
            and self.specialty is ANY
            and self.availability == AvailabilityFilter.ALL
            and self.city is ANY
        )

    def to_dict(self) -> dict:
        """Echo the active criteria back to API clients."""
        return {
            "search": self.search_term,
            "specialty": None if self.specialty is ANY else self.specialty,
            "availability": self.availability.value,
            "city": None if self.city is ANY else self.city,
        }

    @classmethod
    def from_query(cls, args: Mapping[str, Any]) -> "DoctorFilter":
        """Build a filter from query-string parameters.

        A missing parameter or the literal ``all`` selects "no filter" for
        specialty and city; an explicitly empty value filters on "".
        """
        search_term = args.get("q") or args.get("search") or ""

        availability_raw = (args.get("availability") or ALL_TOKEN).strip().lower()
        try:
            availability = AvailabilityFilter(availability_raw)
        except ValueError:
            raise ValidationError(
                f"Invalid availability filter: {availability_raw}",
                field="availability",
                details={"allowed": [item.value for item in AvailabilityFilter]}
            )

        return cls(
            search_term=search_term,
            specialty=_categorical(args, "specialty"),
            availability=availability,
            city=_categorical(args, "city"),
        )


def _categorical(args: Mapping[str, Any], name: str) -> Union[str, _AnyValue]:
    if name not in args:
        return ANY
    value = args.get(name)
    if value is None or value.strip().lower() == ALL_TOKEN:
        return ANY
    return value
