"""Derived directory analytics value objects."""
from dataclasses import dataclass
from typing import Dict, Any, Optional

from careforme.models.doctor import DoctorRecord


@dataclass(frozen=True)
class GroupCount:
    """Number of records sharing one grouping value."""
    name: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to chart-ready dictionary."""
        return {"name": self.name, "value": self.count}


@dataclass(frozen=True)
class MonthlyCount:
    """Registrations in one calendar month."""
    month: str  # "Jan" .. "Dec"
    count: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to chart-ready dictionary."""
        return {"name": self.month, "value": self.count}


@dataclass
class DirectorySummary:
    """Summary statistics over a full (unfiltered) doctor list."""
    total: int
    active: int
    unavailable: int
    suspended: int
    average_rating: Optional[float]  # None when there are no records
    total_reviews: int
    specialty_count: int
    city_count: int
    top_rated: Optional[DoctorRecord] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "totalDoctors": self.total,
            "activeDoctors": self.active,
            "unavailableDoctors": self.unavailable,
            "suspendedDoctors": self.suspended,
            "averageRating": round(self.average_rating, 1) if self.average_rating is not None else None,
            "totalReviews": self.total_reviews,
            "specialtyCount": self.specialty_count,
            "cityCount": self.city_count,
            "topRatedDoctor": self.top_rated.to_api_dict() if self.top_rated else None
        }
