"""Race registration page: participant summary plus the form panel."""
import html
import logging
from typing import Optional

import streamlit as st

from src.models.category import get_category_display_name
from src.models.registration import Registration
from src.services.participant_store import ParticipantStore
from src.services.registration_controller import RegistrationController
from src.services.settings_service import get_settings
from src.services.storage_service import JsonFileKeyValueStore
from src.ui.html_utils import html_block, pill
from src.ui.registration_form import bump_form_generation, render_registration_form

logger = logging.getLogger(__name__)

CONTROLLER_KEY = "registration_controller"
NOTIFICATIONS_KEY = "registration_notifications"
EXPANDED_KEY = "registration_expanded_ids"

TOAST_ICONS = {
    "success": "✅",
    "error": "❌",
    "info": "ℹ️",
}


def _queue_notification(level: str, title: str, description: str) -> None:
    """Keep notifications until the next render so st.rerun doesn't drop them."""
    st.session_state.setdefault(NOTIFICATIONS_KEY, []).append((level, title, description))


def _flush_notifications() -> None:
    for level, title, description in st.session_state.pop(NOTIFICATIONS_KEY, []):
        st.toast(f"**{title}** {description}", icon=TOAST_ICONS.get(level, "ℹ️"))


def get_controller() -> RegistrationController:
    """Get the page controller, creating it on first use in this session."""
    if CONTROLLER_KEY not in st.session_state:
        settings = get_settings()
        st.session_state[CONTROLLER_KEY] = RegistrationController(
            store=ParticipantStore(),
            checkout_storage=JsonFileKeyValueStore(settings.checkout_file),
            notify=_queue_notification,
            submission_delay=settings.submission_delay,
        )
    return st.session_state[CONTROLLER_KEY]


def _participant_label(count: int) -> str:
    return f"{count} {'Participant' if count == 1 else 'Participants'}"


def _render_participant_avatar(name: str, size: int = 48) -> str:
    """Build HTML for a circular initial avatar."""
    initial = html.escape(name.strip()[:1].upper()) if name and name.strip() else "?"
    return html_block(f"""
        <div style="width: {size}px; height: {size}px; border-radius: 50%;
                    background: linear-gradient(90deg, #1e3a8a 0%, #1e40af 100%);
                    display: flex; align-items: center; justify-content: center;
                    color: white; font-weight: 700; font-size: {size * 2 // 5}px;">
            {initial}
        </div>
    """)


def _render_price_badge(amount: float, currency: str) -> str:
    """Build HTML for the price pill shown next to a registration."""
    return pill(f"{currency} {amount:g}", background="#dcfce7", color="#166534")


def _tshirt_summary(registration: Registration) -> str:
    if not registration.include_tshirt:
        return "No"
    return f"Yes ({registration.participant.tshirt_size})"


def _toggle_expanded(registration_id: str) -> None:
    expanded = st.session_state.setdefault(EXPANDED_KEY, set())
    if registration_id in expanded:
        expanded.remove(registration_id)
    else:
        expanded.add(registration_id)


def _render_registration_card(controller: RegistrationController, registration: Registration, currency: str) -> None:
    """Render one registration row with edit, remove and expand actions."""
    participant = registration.participant
    expanded = registration.id in st.session_state.get(EXPANDED_KEY, set())

    with st.container(border=True):
        cols = st.columns([1, 5, 1, 1, 1], gap="small")
        with cols[0]:
            st.markdown(_render_participant_avatar(participant.full_name), unsafe_allow_html=True)
        with cols[1]:
            st.markdown(f"**{participant.full_name}**")
            st.markdown(
                pill(get_category_display_name(registration.category), background="#dbeafe", color="#1e40af")
                + " "
                + _render_price_badge(registration.display_price, currency),
                unsafe_allow_html=True,
            )
        with cols[2]:
            if st.button("✏️", key=f"registration_edit_{registration.id}", help="Edit"):
                controller.start_edit(registration)
                bump_form_generation()
                st.rerun()
        with cols[3]:
            if st.button("🗑️", key=f"registration_remove_{registration.id}", help="Remove"):
                controller.store.remove_by_id(registration.id)
                st.rerun()
        with cols[4]:
            if st.button("−" if expanded else "+", key=f"registration_expand_{registration.id}"):
                _toggle_expanded(registration.id)
                st.rerun()

        if expanded:
            detail_cols = st.columns(2, gap="small")
            with detail_cols[0]:
                st.caption("Email")
                st.write(participant.email)
                st.caption("Category")
                st.write(get_category_display_name(registration.category))
            with detail_cols[1]:
                st.caption("Phone")
                st.write(participant.phone_number)
                st.caption("T-shirt")
                st.write(_tshirt_summary(registration))

            friend = registration.friend_participant
            if friend is not None:
                st.caption("Friend")
                st.write(f"{friend.full_name} · {friend.email} · {friend.phone_number}")

            st.caption("Subtotal")
            st.markdown(f"**{currency} {registration.display_price:g}**")


def _render_summary(controller: RegistrationController, currency: str) -> Optional[str]:
    """Render registered participants; returns checkout path when requested."""
    store = controller.store

    if store.count == 0:
        st.markdown("### No Participants Yet")
        st.write(
            "Ready to start your racing journey? Add your first participant "
            "using the registration form."
        )
        return None

    header_cols = st.columns([3, 1])
    with header_cols[0]:
        st.markdown("### Registered Participants")
    with header_cols[1]:
        st.markdown(f"**{_participant_label(store.count)}**")

    checkout_path = None
    if st.button(
        f"🛒 Go to Checkout ({_participant_label(store.count)})",
        key="registration_checkout",
        width="stretch",
        type="primary",
    ):
        checkout_path = controller.go_to_checkout()

    for registration in store:
        _render_registration_card(controller, registration, currency)

    return checkout_path


def _render_form_panel(controller: RegistrationController) -> None:
    if not controller.show_form:
        st.markdown("### Add New Registration")
        st.write("Click the button below to register a new participant for the race")
        if st.button("➕", key="registration_open_form", width="stretch"):
            controller.open_new_form()
            bump_form_generation()
            st.rerun()
        return

    header_cols = st.columns([5, 1])
    with header_cols[0]:
        st.markdown(
            "### Edit Participant" if controller.is_editing else "### New Participant Registration"
        )
    with header_cols[1]:
        if st.button("✖", key="registration_close_form"):
            controller.close_form()
            st.rerun()

    if render_registration_form(controller):
        st.rerun()


def render_registration_page() -> None:
    """Render the registration page."""
    controller = get_controller()
    currency = get_settings().currency

    _flush_notifications()

    st.markdown("<h1 style='text-align: center;'>Race Registration</h1>", unsafe_allow_html=True)
    st.markdown(
        "<p style='text-align: center;'>Join thousands of runners in our premier racing events. "
        "Register now to secure your spot!</p>",
        unsafe_allow_html=True,
    )

    left, right = st.columns(2, gap="large")
    with left:
        checkout_path = _render_summary(controller, currency)
    with right:
        _render_form_panel(controller)

    if checkout_path:
        logger.info("Navigating to %s", checkout_path)
        st.session_state.current_page = "checkout"
        st.rerun()
