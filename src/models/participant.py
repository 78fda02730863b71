"""Participant data model for event registration."""
from dataclasses import dataclass
from typing import Any, Dict

from src.utils.date_utils import parse_iso_timestamp


@dataclass
class Participant:
    """One registration record."""

    id: int
    name: str
    email: str
    contact: str
    event: str
    registration_date: str  # display string, e.g. "Jan 1, 2024, 10:00 AM"
    timestamp: str  # ISO 8601 UTC, used for ordering only
    notes: str = ""

    def __post_init__(self):
        """Validate participant data."""
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise ValueError(f"Participant ID must be an integer: {self.id!r}")

        if self.notes is None:
            self.notes = ""

        try:
            parse_iso_timestamp(self.timestamp)
        except ValueError as e:
            raise ValueError(f"Invalid timestamp format: {self.timestamp}") from e

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the persisted store's field names."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "contact": self.contact,
            "event": self.event,
            "notes": self.notes,
            "registrationDate": self.registration_date,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """
        Rebuild a participant from its persisted form.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a field fails validation
        """
        return cls(
            id=data["id"],
            name=data["name"],
            email=data["email"],
            contact=data["contact"],
            event=data["event"],
            registration_date=data["registrationDate"],
            timestamp=data["timestamp"],
            notes=data.get("notes") or "",
        )
