"""Checkout summary page reading the registrations handed over by the form."""
import streamlit as st

from src.models.category import get_category_display_name
from src.services.checkout_service import checkout_total, load_checkout_participants
from src.services.settings_service import get_settings
from src.services.storage_service import JsonFileKeyValueStore


def render_checkout_page() -> None:
    """Render the order summary. Payment itself happens elsewhere."""
    settings = get_settings()
    registrations = load_checkout_participants(JsonFileKeyValueStore(settings.checkout_file))

    st.markdown("## 🛒 Checkout")

    if not registrations:
        st.info("No registrations to check out.")
    else:
        rows = [
            {
                "Participant": r.participant.full_name,
                "Friend": r.friend_participant.full_name if r.friend_participant else "",
                "Category": get_category_display_name(r.category),
                "T-shirt": "Yes" if r.include_tshirt else "No",
                f"Subtotal ({settings.currency})": r.display_price,
            }
            for r in registrations
        ]
        st.dataframe(rows, width="stretch", hide_index=True)
        st.markdown(f"### Total: {settings.currency} {checkout_total(registrations):g}")

    if st.button("← Back to Registration", key="checkout_back"):
        st.session_state.current_page = "register"
        st.rerun()
