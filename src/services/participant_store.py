"""In-memory collection of registrations for the current page session."""
import logging
from typing import Callable, List, Optional

from src.models.registration import Registration
from src.utils.exceptions import DuplicateRegistrationError

logger = logging.getLogger(__name__)

Listener = Callable[[List[Registration]], None]


class ParticipantStore:
    """
    Ordered registrations plus the one currently selected for editing.

    Insertion order is display order. Listeners added with ``subscribe``
    receive a copy of the ordered list after every change to it.
    """

    def __init__(self, registrations: Optional[List[Registration]] = None):
        self._registrations: List[Registration] = []
        self._current: Optional[Registration] = None
        self._listeners: List[Listener] = []

        for registration in registrations or []:
            self._append(registration)

    @property
    def registrations(self) -> List[Registration]:
        return list(self._registrations)

    @property
    def current(self) -> Optional[Registration]:
        return self._current

    @property
    def count(self) -> int:
        """Number of registrations (the participant count shown in the UI)."""
        return len(self._registrations)

    @property
    def headcount(self) -> int:
        """Number of people, counting friends."""
        return sum(r.headcount for r in self._registrations)

    def __len__(self) -> int:
        return len(self._registrations)

    def __iter__(self):
        return iter(list(self._registrations))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        snapshot = self.registrations
        for listener in list(self._listeners):
            listener(snapshot)

    def _index_of(self, registration_id: str) -> int:
        for index, registration in enumerate(self._registrations):
            if registration.id == registration_id:
                return index
        return -1

    def _append(self, registration: Registration) -> None:
        if self._index_of(registration.id) != -1:
            raise DuplicateRegistrationError(f"Registration ID already exists: {registration.id}")
        self._registrations.append(registration)

    def get_by_id(self, registration_id: str) -> Optional[Registration]:
        index = self._index_of(registration_id)
        return self._registrations[index] if index != -1 else None

    def add(self, registration: Registration) -> None:
        """
        Append a newly validated registration.

        Raises:
            DuplicateRegistrationError: If the ID is already stored
        """
        self._append(registration)
        logger.info("Added registration %s (%s)", registration.id, registration.category)
        self._emit()

    def update_by_id(self, registration_id: str, new_data: Registration) -> bool:
        """
        Replace a stored registration's data, keeping its ID and position.

        Args:
            registration_id: ID of the registration to replace
            new_data: Replacement data; its own ID is ignored

        Returns:
            True if updated, False if no registration has that ID
        """
        index = self._index_of(registration_id)
        if index == -1:
            logger.warning("Update skipped, registration %s not found", registration_id)
            return False

        self._registrations[index] = new_data.with_id(registration_id)
        if self._current is not None and self._current.id == registration_id:
            self._current = self._registrations[index]

        logger.info("Updated registration %s", registration_id)
        self._emit()
        return True

    def remove_by_id(self, registration_id: str) -> bool:
        """Remove a registration; returns False if it wasn't stored."""
        index = self._index_of(registration_id)
        if index == -1:
            return False

        removed = self._registrations.pop(index)
        if self._current is not None and self._current.id == removed.id:
            self._current = None

        logger.info("Removed registration %s", registration_id)
        self._emit()
        return True

    def set_current(self, registration: Optional[Registration]) -> None:
        """Select a registration for editing, or clear the selection with None."""
        self._current = registration

    def reset_current(self) -> None:
        self.set_current(None)

    def total_price(self) -> float:
        """Sum of display prices for checkout."""
        return sum(r.display_price for r in self._registrations)
