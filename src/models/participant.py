"""Participant data model for race registration."""
from dataclasses import dataclass
from typing import Any, Dict

TSHIRT_SIZES = ["XS", "S", "M", "L", "XL", "XXL"]
TSHIRT_NOT_APPLICABLE = "N/A"


@dataclass
class ParticipantInput:
    """One person's registration details."""

    full_name: str
    email: str
    phone_number: str
    tshirt_size: str = TSHIRT_NOT_APPLICABLE

    def __post_init__(self):
        """Validate participant data."""
        if not self.full_name or not self.full_name.strip():
            raise ValueError("Full name cannot be empty")

        if self.tshirt_size != TSHIRT_NOT_APPLICABLE and self.tshirt_size not in TSHIRT_SIZES:
            raise ValueError(f"T-shirt size must be one of {TSHIRT_SIZES}, got: {self.tshirt_size}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the checkout page's field names."""
        return {
            "fullName": self.full_name,
            "email": self.email,
            "phoneNumber": self.phone_number,
            "tshirtSize": self.tshirt_size,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParticipantInput":
        return cls(
            full_name=data["fullName"],
            email=data["email"],
            phone_number=data["phoneNumber"],
            tshirt_size=data.get("tshirtSize") or TSHIRT_NOT_APPLICABLE,
        )
