"""Unit tests for RegistrationController."""
import json

import pytest
from unittest.mock import MagicMock

from src.services.checkout_service import CHECKOUT_PATH, CHECKOUT_STORAGE_KEY
from src.services.participant_store import ParticipantStore
from src.services.registration_controller import (
    REGISTRATION_SUCCESS_MESSAGE,
    VALIDATION_FAILED_MESSAGE,
    RegistrationController,
)
from src.services.storage_service import MemoryKeyValueStore
from src.utils.validation import (
    FRIEND_DETAILS_REQUIRED,
    FULL_NAME_REQUIRED,
    INVALID_EMAIL,
    TSHIRT_REQUIRED,
)

MAIN_VALUES = {
    "mainfullName": "Ahmed Hassan",
    "mainemail": "ahmed@example.com",
    "mainphoneNumber": "7771234",
    "maintshirtSize": "M",
    "category": "half-marathon-21km",
}

FRIEND_VALUES = {
    "friendfullName": "Aishath Ali",
    "friendemail": "aishath@example.com",
    "friendphoneNumber": "7654321",
    "friendtshirtSize": "S",
}


@pytest.fixture
def notify():
    return MagicMock()


@pytest.fixture
def sleep():
    return MagicMock()


@pytest.fixture
def controller(notify, sleep):
    return RegistrationController(
        store=ParticipantStore(),
        checkout_storage=MemoryKeyValueStore(),
        notify=notify,
        submission_delay=1.5,
        sleep=sleep,
    )


def fill(controller, values):
    for key, value in values.items():
        controller.on_field_change(key, value)


class TestFieldEvents:
    """Test per-field change handlers."""

    def test_field_change_sets_and_clears_error(self, controller):
        controller.on_field_change("mainfullName", "  ")
        assert controller.errors == {"mainfullName": FULL_NAME_REQUIRED}

        controller.on_field_change("mainfullName", "Ahmed")
        assert controller.errors == {}
        assert controller.values["mainfullName"] == "Ahmed"

    def test_tshirt_errors_dropped_when_unchecked(self, controller):
        controller.on_field_change("maintshirtSize", "")
        controller.on_field_change("friendtshirtSize", "")
        controller.on_field_change("mainemail", "bad")

        controller.on_include_tshirt_change(False)

        assert controller.include_tshirt is False
        assert controller.errors == {"mainemail": INVALID_EMAIL}

    def test_tshirt_field_valid_after_unchecking(self, controller):
        controller.on_include_tshirt_change(False)
        controller.on_field_change("maintshirtSize", "")
        assert controller.errors == {}

    def test_friend_errors_dropped_when_unchecked(self, controller):
        controller.on_add_friend_change(True)
        controller.errors = {
            "friendemail": INVALID_EMAIL,
            "friendParticipant": FRIEND_DETAILS_REQUIRED,
            "mainemail": INVALID_EMAIL,
        }

        controller.on_add_friend_change(False)

        assert controller.add_friend is False
        assert controller.errors == {"mainemail": INVALID_EMAIL}


class TestSubmit:
    """Test submit()."""

    def test_invalid_submit_keeps_values(self, controller, notify, sleep):
        controller.open_new_form()
        fill(controller, {**MAIN_VALUES, "mainemail": "not-an-email"})

        errors = controller.submit()

        assert errors == {"mainemail": INVALID_EMAIL}
        assert controller.errors == errors
        assert controller.values["mainfullName"] == "Ahmed Hassan"
        assert controller.store.count == 0
        assert controller.show_form is True
        assert controller.is_pending is False
        assert controller.submission_message.success is False
        assert controller.submission_message.message == VALIDATION_FAILED_MESSAGE
        notify.assert_called_once_with(
            "error", "Registration Failed", "Please correct the errors in the form."
        )
        sleep.assert_not_called()

    def test_valid_submit_adds_registration(self, controller, notify, sleep):
        controller.open_new_form()
        fill(controller, MAIN_VALUES)

        errors = controller.submit()

        assert errors == {}
        assert controller.store.count == 1
        registration = controller.store.registrations[0]
        assert registration.participant.full_name == "Ahmed Hassan"
        assert registration.total_price == 450.0
        assert controller.values == {}
        assert controller.show_form is False
        assert controller.submission_message.message == REGISTRATION_SUCCESS_MESSAGE
        sleep.assert_called_once_with(1.5)
        notify.assert_called_once_with(
            "success",
            "Registration Submitted",
            "Your registration has been submitted successfully.",
        )

    def test_submit_with_friend(self, controller):
        controller.open_new_form()
        controller.on_add_friend_change(True)
        fill(controller, {**MAIN_VALUES, **FRIEND_VALUES})

        assert controller.submit() == {}

        registration = controller.store.registrations[0]
        assert registration.friend_participant.full_name == "Aishath Ali"

    def test_friend_missing_fields_reported(self, controller):
        controller.on_add_friend_change(True)
        fill(controller, MAIN_VALUES)

        errors = controller.submit()

        assert errors["friendParticipant"] == FRIEND_DETAILS_REQUIRED
        assert errors["friendtshirtSize"] == TSHIRT_REQUIRED
        assert controller.store.count == 0

    def test_pending_submit_is_ignored(self, controller):
        fill(controller, MAIN_VALUES)
        controller.is_pending = True

        controller.submit()

        assert controller.store.count == 0

    def test_zero_delay_skips_sleep(self, controller, sleep):
        controller.submission_delay = 0
        fill(controller, MAIN_VALUES)

        controller.submit()

        sleep.assert_not_called()

    def test_unlisted_tshirt_size_reported_inline(self, controller, notify):
        """A size outside the size list is an inline error, not an exception."""
        fill(controller, {**MAIN_VALUES, "maintshirtSize": "medium"})
        assert controller.errors == {}

        errors = controller.submit()

        assert errors == {"maintshirtSize": TSHIRT_REQUIRED}
        assert controller.store.count == 0
        assert controller.values["maintshirtSize"] == "medium"
        assert controller.submission_message.message == VALIDATION_FAILED_MESSAGE
        notify.assert_called_once_with(
            "error", "Registration Failed", "Please correct the errors in the form."
        )

    def test_unlisted_friend_size_adds_friend_summary(self, controller):
        controller.on_add_friend_change(True)
        fill(controller, {**MAIN_VALUES, **FRIEND_VALUES, "friendtshirtSize": "huge"})

        errors = controller.submit()

        assert errors == {
            "friendtshirtSize": TSHIRT_REQUIRED,
            "friendParticipant": FRIEND_DETAILS_REQUIRED,
        }

    def test_unlisted_size_ignored_without_tshirt(self, controller):
        controller.on_include_tshirt_change(False)
        fill(controller, {**MAIN_VALUES, "maintshirtSize": "medium"})

        assert controller.submit() == {}
        assert controller.store.registrations[0].participant.tshirt_size == "N/A"


class TestEditFlow:
    """Test editing an existing registration."""

    def test_edit_preserves_id_and_count(self, controller, notify):
        fill(controller, MAIN_VALUES)
        controller.submit()
        original = controller.store.registrations[0]
        notify.reset_mock()

        controller.start_edit(original)
        assert controller.is_editing is True
        assert controller.values["mainfullName"] == "Ahmed Hassan"
        assert controller.show_form is True

        controller.on_field_change("mainfullName", "Ahmed H. Hassan")
        assert controller.submit() == {}

        assert controller.store.count == 1
        updated = controller.store.registrations[0]
        assert updated.id == original.id
        assert updated.participant.full_name == "Ahmed H. Hassan"
        assert controller.store.current is None
        notify.assert_not_called()

    def test_start_edit_restores_flags(self, controller):
        controller.on_include_tshirt_change(False)
        controller.on_add_friend_change(True)
        fill(controller, {**MAIN_VALUES, **FRIEND_VALUES})
        controller.submit()
        registration = controller.store.registrations[0]

        controller.on_include_tshirt_change(True)
        controller.start_edit(registration)

        assert controller.add_friend is True
        assert controller.include_tshirt is False
        assert controller.values["friendfullName"] == "Aishath Ali"

    def test_close_form_resets_selection(self, controller):
        fill(controller, MAIN_VALUES)
        controller.submit()

        controller.start_edit(controller.store.registrations[0])
        controller.close_form()

        assert controller.show_form is False
        assert controller.store.current is None

    def test_open_new_form_clears_edit_state(self, controller):
        fill(controller, MAIN_VALUES)
        controller.submit()
        controller.start_edit(controller.store.registrations[0])

        controller.open_new_form()

        assert controller.is_editing is False
        assert controller.values == {}


class TestClearAndCheckout:
    """Test clear_form() and go_to_checkout()."""

    def test_clear_form(self, controller, notify):
        controller.on_add_friend_change(True)
        controller.on_field_change("mainemail", "bad")

        controller.clear_form()

        assert controller.values == {}
        assert controller.errors == {}
        assert controller.add_friend is False
        assert controller.submission_message is None
        notify.assert_called_once_with("info", "Form Cleared", "The form has been reset.")

    def test_go_to_checkout_writes_blob(self, controller):
        fill(controller, MAIN_VALUES)
        controller.submit()

        path = controller.go_to_checkout()

        assert path == CHECKOUT_PATH
        payload = json.loads(controller.checkout_storage.get(CHECKOUT_STORAGE_KEY))
        assert len(payload) == 1
        assert payload[0]["participant"]["fullName"] == "Ahmed Hassan"
        assert payload[0]["category"] == "half-marathon-21km"

    def test_field_errors_as_exceptions(self, controller):
        controller.on_field_change("mainemail", "bad")

        errors = controller.field_errors()

        assert [(e.field_key, e.message) for e in errors] == [("mainemail", INVALID_EMAIL)]
