"""Doctor directory record model."""
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any


SPECIALTIES = (
    "Cardiology",
    "Dermatology",
    "Endocrinology",
    "Gastroenterology",
    "General Practice",
    "Neurology",
    "Obstetrics & Gynecology",
    "Ophthalmology",
    "Orthopedics",
    "Pediatrics",
    "Psychiatry",
    "Urology",
)

WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# Group label for records whose grouping field is empty
UNSPECIFIED = "Unspecified"

# Stored (camelCase) document key -> DoctorRecord attribute
FIELD_MAP: Dict[str, str] = {
    "name": "name",
    "specialty": "specialty",
    "city": "city",
    "address": "address",
    "email": "email",
    "phone": "phone",
    "latitude": "latitude",
    "longitude": "longitude",
    "profilePicture": "profile_picture",
    "bio": "bio",
    "rating": "rating",
    "reviewCount": "review_count",
    "availableDays": "available_days",
    "isAvailable": "is_available",
    "suspended": "suspended",
    "createdAt": "created_at",
}

REQUIRED_FIELDS = ("name", "specialty", "city", "address", "email", "phone")
TEXT_FIELDS = REQUIRED_FIELDS + ("profilePicture", "bio")
NUMERIC_FIELDS = ("latitude", "longitude", "rating")


@dataclass
class DoctorRecord:
    """One entry of the provider directory."""
    id: Optional[str] = None

    # Required on creation
    name: str = ""
    specialty: str = ""
    city: str = ""
    address: str = ""
    email: str = ""
    phone: str = ""

    # Location
    latitude: float = 0.0
    longitude: float = 0.0

    # Profile
    profile_picture: str = ""
    bio: str = ""

    # Ratings & Reviews
    rating: float = 0.0
    review_count: int = 0

    # Availability
    available_days: List[str] = field(default_factory=list)
    is_available: bool = True
    suspended: bool = False

    # Set once at creation, ISO-8601
    created_at: str = ""

    @property
    def status(self) -> str:
        """Display status; suspension takes precedence over availability."""
        if self.suspended:
            return "Suspended"
        return "Available" if self.is_available else "Unavailable"

    @property
    def is_active(self) -> bool:
        """Available and not suspended."""
        return self.is_available and not self.suspended

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored document shape (without id)."""
        return {
            store_key: (list(getattr(self, attr)) if attr == "available_days" else getattr(self, attr))
            for store_key, attr in FIELD_MAP.items()
        }

    def to_api_dict(self) -> Dict[str, Any]:
        """Stored document shape plus id and derived status."""
        data = {"id": self.id}
        data.update(self.to_dict())
        data["status"] = self.status
        return data
