"""Registration service for turning validated form data into records."""
import logging
import uuid
from typing import Mapping, Optional

from src.models.category import CATEGORY_FEES, TSHIRT_FEE
from src.models.participant import TSHIRT_NOT_APPLICABLE, ParticipantInput
from src.models.registration import Registration
from src.utils.validation import CATEGORY_FIELD, FRIEND_PREFIX, MAIN_PREFIX, field_key

logger = logging.getLogger(__name__)


def generate_registration_id() -> str:
    """Generate a new unique registration ID."""
    return str(uuid.uuid4())


def calculate_total_price(category: str, add_friend: bool, include_tshirt: bool) -> float:
    """
    Calculate the price of a registration.

    Args:
        category: Race category key
        add_friend: Whether a second participant is included
        include_tshirt: Whether each participant gets a t-shirt

    Returns:
        (entry fee + t-shirt fee) per participant, summed. Unknown
        categories have no entry fee.
    """
    fee = CATEGORY_FEES.get(category)
    if fee is None:
        logger.warning("No entry fee configured for category %s", category)
        fee = 0

    per_person = fee + (TSHIRT_FEE if include_tshirt else 0)
    participants = 2 if add_friend else 1
    return float(per_person * participants)


def build_participant(
    form: Mapping[str, Optional[str]],
    prefix: str,
    include_tshirt: bool
) -> ParticipantInput:
    """Build one participant from the prefixed form fields."""
    tshirt_size = form.get(field_key(prefix, "tshirtSize")) if include_tshirt else None
    return ParticipantInput(
        full_name=(form.get(field_key(prefix, "fullName")) or "").strip(),
        email=(form.get(field_key(prefix, "email")) or "").strip(),
        phone_number=form.get(field_key(prefix, "phoneNumber")) or "",
        tshirt_size=tshirt_size or TSHIRT_NOT_APPLICABLE,
    )


def build_registration(
    form: Mapping[str, Optional[str]],
    add_friend: bool,
    include_tshirt: bool,
    registration_id: Optional[str] = None
) -> Registration:
    """
    Build a registration from an already validated form snapshot.

    Args:
        form: Field key to raw value
        add_friend: Whether friend fields are included
        include_tshirt: Whether t-shirt sizes apply; sizes become "N/A" otherwise
        registration_id: ID to use; a new one is generated when omitted

    Returns:
        Registration with computed total price

    Raises:
        ValueError: If the snapshot breaks a model invariant
    """
    category = form.get(CATEGORY_FIELD) or ""
    return Registration(
        id=registration_id or generate_registration_id(),
        category=category,
        participant=build_participant(form, MAIN_PREFIX, include_tshirt),
        add_friend=add_friend,
        friend_participant=(
            build_participant(form, FRIEND_PREFIX, include_tshirt) if add_friend else None
        ),
        include_tshirt=include_tshirt,
        total_price=calculate_total_price(category, add_friend, include_tshirt),
    )


def registration_to_form(registration: Registration) -> dict:
    """Flatten a registration back into form values for editing."""
    values = {CATEGORY_FIELD: registration.category}
    participants = [(MAIN_PREFIX, registration.participant)]
    if registration.friend_participant is not None:
        participants.append((FRIEND_PREFIX, registration.friend_participant))

    for prefix, participant in participants:
        values[field_key(prefix, "fullName")] = participant.full_name
        values[field_key(prefix, "email")] = participant.email
        values[field_key(prefix, "phoneNumber")] = participant.phone_number
        if registration.include_tshirt and participant.tshirt_size != TSHIRT_NOT_APPLICABLE:
            values[field_key(prefix, "tshirtSize")] = participant.tshirt_size

    return values
