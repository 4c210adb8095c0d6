"""Authenticated admin session model."""
from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class Session:
    """Currently authenticated admin."""
    uid: str
    email: str
    id_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: Dict[str, Any] = {"uid": self.uid, "email": self.email}
        if self.id_token:
            data["idToken"] = self.id_token
        if self.refresh_token:
            data["refreshToken"] = self.refresh_token
        if self.expires_in is not None:
            data["expiresIn"] = self.expires_in
        return data
