"""Form validation rules for race registration."""
import re
from typing import Dict, List, Mapping, Optional, Tuple

from src.utils.exceptions import FieldValidationError

MAIN_PREFIX = "main"
FRIEND_PREFIX = "friend"

PARTICIPANT_FIELDS = ["fullName", "email", "phoneNumber", "tshirtSize"]
CATEGORY_FIELD = "category"
FRIEND_SUMMARY_FIELD = "friendParticipant"

MAIN_FIELDS = [f"{MAIN_PREFIX}{name}" for name in PARTICIPANT_FIELDS]
FRIEND_FIELDS = [f"{FRIEND_PREFIX}{name}" for name in PARTICIPANT_FIELDS]
TSHIRT_FIELDS = [f"{MAIN_PREFIX}tshirtSize", f"{FRIEND_PREFIX}tshirtSize"]

FULL_NAME_REQUIRED = "Full name is required."
INVALID_EMAIL = "Invalid email address."
INVALID_PHONE = "Phone number must be 7-10 digits."
TSHIRT_REQUIRED = "Please select a T-shirt size."
CATEGORY_REQUIRED = "Please select a race category."
FRIEND_DETAILS_REQUIRED = "Friend's details are required if 'Add a Friend' is checked."

PHONE_MIN_LENGTH = 7
PHONE_MAX_LENGTH = 10

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def field_key(prefix: str, name: str) -> str:
    """Build a form field key such as ``mainemail`` or ``friendfullName``."""
    return f"{prefix}{name}"


def is_valid_email(email: str) -> bool:
    """Check for a ``local@domain.tld`` shape."""
    return bool(_EMAIL_PATTERN.match(email))


def validate_full_name(name: Optional[str]) -> Tuple[bool, str]:
    """
    Validate participant full name.

    Returns:
        (True, "") if valid, (False, "Full name is required.") if empty
    """
    if not name or not name.strip():
        return False, FULL_NAME_REQUIRED
    return True, ""


def validate_email(email: Optional[str]) -> Tuple[bool, str]:
    """Validate email address shape."""
    if not email or not is_valid_email(email):
        return False, INVALID_EMAIL
    return True, ""


def validate_phone_number(phone: Optional[str]) -> Tuple[bool, str]:
    """
    Validate phone number.

    Only the length is checked (7-10 characters inclusive); the characters
    themselves are not restricted to digits.
    """
    if not phone or len(phone) < PHONE_MIN_LENGTH or len(phone) > PHONE_MAX_LENGTH:
        return False, INVALID_PHONE
    return True, ""


def validate_tshirt_size(size: Optional[str], include_tshirt: bool) -> Tuple[bool, str]:
    """
    Validate t-shirt size.

    Args:
        size: Selected size (may be empty)
        include_tshirt: Whether a t-shirt is part of the registration

    Returns:
        (False, "Please select a T-shirt size.") only when a t-shirt is
        included and no size was chosen
    """
    if include_tshirt and not size:
        return False, TSHIRT_REQUIRED
    return True, ""


def validate_category(category: Optional[str]) -> Tuple[bool, str]:
    """Validate race category selection."""
    if not category:
        return False, CATEGORY_REQUIRED
    return True, ""


def validate_field(field: str, value: Optional[str], include_tshirt: bool = True) -> Optional[str]:
    """
    Validate a single form field.

    Args:
        field: Field key, e.g. ``mainfullName`` or ``category``
        value: Current raw value
        include_tshirt: Whether t-shirt sizes are required

    Returns:
        Error message, or None if the field is valid. Unknown keys are valid.
    """
    if field == CATEGORY_FIELD:
        is_valid, message = validate_category(value)
    else:
        for prefix in (MAIN_PREFIX, FRIEND_PREFIX):
            if field.startswith(prefix):
                name = field[len(prefix):]
                break
        else:
            return None

        if name == "fullName":
            is_valid, message = validate_full_name(value)
        elif name == "email":
            is_valid, message = validate_email(value)
        elif name == "phoneNumber":
            is_valid, message = validate_phone_number(value)
        elif name == "tshirtSize":
            is_valid, message = validate_tshirt_size(value, include_tshirt)
        else:
            return None

    return None if is_valid else message


def validate_submission(
    form: Mapping[str, Optional[str]],
    add_friend: bool,
    include_tshirt: bool
) -> Dict[str, str]:
    """
    Validate a full form snapshot.

    Args:
        form: Field key to raw value
        add_friend: Whether friend fields are part of the submission
        include_tshirt: Whether t-shirt sizes are required

    Returns:
        Field key to error message; empty when everything passes. When any
        friend field fails, ``friendParticipant`` carries a summary message.
    """
    errors: Dict[str, str] = {}

    for field in MAIN_FIELDS + [CATEGORY_FIELD]:
        error = validate_field(field, form.get(field), include_tshirt)
        if error:
            errors[field] = error

    if add_friend:
        for field in FRIEND_FIELDS:
            error = validate_field(field, form.get(field), include_tshirt)
            if error:
                errors[field] = error

        if any(key.startswith(FRIEND_PREFIX) for key in errors):
            errors[FRIEND_SUMMARY_FIELD] = FRIEND_DETAILS_REQUIRED

    return errors


def validation_errors(errors: Mapping[str, str]) -> List[FieldValidationError]:
    """Convert an error map into FieldValidationError instances."""
    return [FieldValidationError(key, message) for key, message in errors.items()]
