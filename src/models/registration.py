"""Registration data model."""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from src.models.participant import ParticipantInput


@dataclass
class Registration:
    """One submitted sign-up covering a participant and an optional friend."""

    id: str
    category: str
    participant: ParticipantInput
    add_friend: bool = False
    friend_participant: Optional[ParticipantInput] = None
    include_tshirt: bool = True
    total_price: Optional[float] = None

    def __post_init__(self):
        """Validate registration invariants."""
        if not self.id or not str(self.id).strip():
            raise ValueError("Registration ID cannot be empty")

        if not self.category or not self.category.strip():
            raise ValueError("Category cannot be empty")

        if self.participant is None:
            raise ValueError("Main participant is required")

        if self.add_friend and self.friend_participant is None:
            raise ValueError("Friend participant is required when add_friend is set")

        if not self.add_friend and self.friend_participant is not None:
            raise ValueError("Friend participant given but add_friend is not set")

    @property
    def display_price(self) -> float:
        """Price shown in summaries; unset prices count as 0."""
        return self.total_price or 0

    @property
    def headcount(self) -> int:
        """Number of people covered by this registration."""
        return 2 if self.add_friend else 1

    def with_id(self, registration_id: str) -> "Registration":
        """Return a copy of this registration under another ID."""
        return Registration(
            id=registration_id,
            category=self.category,
            participant=self.participant,
            add_friend=self.add_friend,
            friend_participant=self.friend_participant,
            include_tshirt=self.include_tshirt,
            total_price=self.total_price,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON shape read by the checkout page."""
        return {
            "id": self.id,
            "category": self.category,
            "participant": self.participant.to_dict(),
            "addFriend": self.add_friend,
            "friendParticipant": (
                self.friend_participant.to_dict() if self.friend_participant else None
            ),
            "includeTshirt": self.include_tshirt,
            "totalPrice": self.total_price,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Registration":
        friend_data = data.get("friendParticipant")
        return cls(
            id=str(data["id"]),
            category=data["category"],
            participant=ParticipantInput.from_dict(data["participant"]),
            add_friend=bool(data.get("addFriend", friend_data is not None)),
            friend_participant=ParticipantInput.from_dict(friend_data) if friend_data else None,
            include_tshirt=bool(data.get("includeTshirt", True)),
            total_price=data.get("totalPrice"),
        )
