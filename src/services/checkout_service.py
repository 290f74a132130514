"""Hand-off of stored registrations to the checkout page."""
import json
import logging
from typing import Iterable, List

from src.models.registration import Registration
from src.services.storage_service import KeyValueStore

logger = logging.getLogger(__name__)

CHECKOUT_STORAGE_KEY = "checkoutParticipants"
CHECKOUT_PATH = "/payments"


def save_checkout_participants(store: KeyValueStore, registrations: Iterable[Registration]) -> str:
    """
    Serialize registrations under the checkout key.

    Args:
        store: Key-value store shared with the checkout page
        registrations: Registrations in display order

    Returns:
        The checkout path to navigate to
    """
    payload = [r.to_dict() for r in registrations]
    store.put(CHECKOUT_STORAGE_KEY, json.dumps(payload, ensure_ascii=False))
    logger.info("Handed %d registrations to checkout", len(payload))
    return CHECKOUT_PATH


def load_checkout_participants(store: KeyValueStore) -> List[Registration]:
    """
    Read registrations written by ``save_checkout_participants``.

    Returns:
        Registrations in stored order; empty list when nothing was handed over

    Raises:
        json.JSONDecodeError: If the stored blob is malformed
    """
    blob = store.get(CHECKOUT_STORAGE_KEY)
    if not blob:
        return []
    return [Registration.from_dict(item) for item in json.loads(blob)]


def checkout_total(registrations: Iterable[Registration]) -> float:
    """Sum display prices of the handed-over registrations."""
    return sum(r.display_price for r in registrations)
