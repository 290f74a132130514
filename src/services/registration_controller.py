"""Page-level controller for the race registration form."""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from src.models.participant import TSHIRT_SIZES
from src.models.registration import Registration
from src.services.checkout_service import save_checkout_participants
from src.services.participant_store import ParticipantStore
from src.services.registration_service import build_registration, registration_to_form
from src.services.storage_service import KeyValueStore
from src.utils.exceptions import FieldValidationError
from src.utils.validation import (
    FRIEND_DETAILS_REQUIRED,
    FRIEND_FIELDS,
    FRIEND_SUMMARY_FIELD,
    TSHIRT_FIELDS,
    TSHIRT_REQUIRED,
    validate_field,
    validate_submission,
    validation_errors,
)

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str, str], None]

VALIDATION_FAILED_MESSAGE = "Validation failed. Please check your inputs."
REGISTRATION_SUCCESS_MESSAGE = (
    "Registration successful! You will receive a confirmation email shortly."
)


@dataclass
class SubmissionMessage:
    """Outcome banner shown under the form."""

    success: bool
    message: str


def log_notifier(level: str, title: str, description: str) -> None:
    """Default notifier that only logs."""
    logger.info("[%s] %s: %s", level, title, description)


class RegistrationController:
    """
    Owns the registration form state and reacts to UI events.

    One method per event handler. The store and checkout storage are
    injected; ``sleep`` and ``notify`` can be replaced in tests.
    """

    def __init__(
        self,
        store: ParticipantStore,
        checkout_storage: KeyValueStore,
        notify: Notifier = log_notifier,
        submission_delay: float = 1.5,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.store = store
        self.checkout_storage = checkout_storage
        self.notify = notify
        self.submission_delay = submission_delay
        self._sleep = sleep

        self.values: Dict[str, str] = {}
        self.errors: Dict[str, str] = {}
        self.add_friend = False
        self.include_tshirt = True
        self.is_pending = False
        self.show_form = False
        self.submission_message: Optional[SubmissionMessage] = None

    @property
    def is_editing(self) -> bool:
        return self.store.current is not None

    def field_errors(self) -> List[FieldValidationError]:
        return validation_errors(self.errors)

    def open_new_form(self) -> None:
        """Show an empty form for a new registration."""
        self.store.reset_current()
        self._reset_form()
        self.show_form = True

    def start_edit(self, registration: Registration) -> None:
        """Show the form pre-populated with an existing registration."""
        self.store.set_current(registration)
        self._reset_form()
        self.values = registration_to_form(registration)
        self.add_friend = registration.add_friend
        self.include_tshirt = registration.include_tshirt
        self.show_form = True

    def close_form(self) -> None:
        self.show_form = False
        self.store.reset_current()

    def on_field_change(self, key: str, value: str) -> None:
        """Store a field value and re-validate only that field."""
        self.values[key] = value
        error = validate_field(key, value, self.include_tshirt)
        if error:
            self.errors[key] = error
        else:
            self.errors.pop(key, None)

    def on_include_tshirt_change(self, checked: bool) -> None:
        self.include_tshirt = bool(checked)
        if not self.include_tshirt:
            for key in TSHIRT_FIELDS:
                self.errors.pop(key, None)

    def on_add_friend_change(self, checked: bool) -> None:
        self.add_friend = bool(checked)
        if not self.add_friend:
            for key in FRIEND_FIELDS + [FRIEND_SUMMARY_FIELD]:
                self.errors.pop(key, None)

    def clear_form(self) -> None:
        """Reset values, errors, the add-friend flag and the banner."""
        self._reset_form()
        self.notify("info", "Form Cleared", "The form has been reset.")

    def _reset_form(self) -> None:
        self.values = {}
        self.errors = {}
        self.add_friend = False
        self.submission_message = None

    def _unknown_size_errors(self) -> Dict[str, str]:
        """Flag t-shirt sizes outside TSHIRT_SIZES; ParticipantInput rejects them."""
        if not self.include_tshirt:
            return {}

        keys = [TSHIRT_FIELDS[0]] + ([TSHIRT_FIELDS[1]] if self.add_friend else [])
        errors = {}
        for key in keys:
            size = self.values.get(key)
            if size and size not in TSHIRT_SIZES:
                errors[key] = TSHIRT_REQUIRED
        if TSHIRT_FIELDS[1] in errors:
            errors[FRIEND_SUMMARY_FIELD] = FRIEND_DETAILS_REQUIRED
        return errors

    def submit(self) -> Dict[str, str]:
        """
        Validate and store the current form.

        Returns:
            Error map; empty when the registration was stored. Form values
            are kept on failure so only the offending fields need fixing.
        """
        if self.is_pending:
            logger.debug("Submission ignored, previous one still pending")
            return dict(self.errors)

        self.errors = {}
        self.submission_message = None
        self.is_pending = True
        try:
            errors = validate_submission(self.values, self.add_friend, self.include_tshirt)
            errors.update(self._unknown_size_errors())
            if errors:
                self.errors = errors
                self.submission_message = SubmissionMessage(False, VALIDATION_FAILED_MESSAGE)
                self.notify(
                    "error",
                    "Registration Failed",
                    "Please correct the errors in the form.",
                )
                logger.warning("Registration validation failed for fields: %s", sorted(errors))
                return errors

            current = self.store.current
            registration = build_registration(
                self.values,
                self.add_friend,
                self.include_tshirt,
                registration_id=current.id if current else None,
            )

            if self.submission_delay:
                self._sleep(self.submission_delay)

            if current is not None:
                self.store.update_by_id(current.id, registration)
            else:
                self.store.add(registration)
                self.notify(
                    "success",
                    "Registration Submitted",
                    "Your registration has been submitted successfully.",
                )

            self.store.reset_current()
            self._reset_form()
            self.submission_message = SubmissionMessage(True, REGISTRATION_SUCCESS_MESSAGE)
            self.show_form = False
            return {}
        finally:
            self.is_pending = False

    def go_to_checkout(self) -> str:
        """Hand the stored registrations to checkout and return its path."""
        return save_checkout_participants(self.checkout_storage, self.store.registrations)
