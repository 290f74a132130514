"""Registration form UI component."""
import streamlit as st

from src.models.category import RACE_CATEGORIES, get_category_display_name
from src.models.participant import TSHIRT_SIZES
from src.services.registration_controller import RegistrationController
from src.utils.validation import (
    CATEGORY_FIELD,
    FRIEND_PREFIX,
    FRIEND_SUMMARY_FIELD,
    MAIN_PREFIX,
    field_key,
)

FORM_GENERATION_KEY = "registration_form_generation"

TEXT_FIELDS = [
    ("fullName", "Full Name", "Ahmed Hassan"),
    ("email", "Email", "ahmedhassan@example.com"),
    ("phoneNumber", "Phone Number", "+960-0000000"),
]


def bump_form_generation() -> None:
    """Force fresh widgets on the next render (values come from the controller)."""
    st.session_state[FORM_GENERATION_KEY] = st.session_state.get(FORM_GENERATION_KEY, 0) + 1


def _widget_key(field: str) -> str:
    generation = st.session_state.get(FORM_GENERATION_KEY, 0)
    return f"registration_form_{generation}_{field}"


def _on_widget_change(controller: RegistrationController, field: str) -> None:
    """Forward a widget change to the controller."""
    controller.on_field_change(field, st.session_state.get(_widget_key(field)) or "")


def _render_error(controller: RegistrationController, field: str) -> None:
    error = controller.errors.get(field)
    if error:
        st.markdown(
            f"<p style='color: #ef4444; font-size: 0.875rem; margin-top: -8px;'>{error}</p>",
            unsafe_allow_html=True,
        )


def _render_participant_fields(controller: RegistrationController, prefix: str, title: str) -> None:
    """Render name/email/phone/t-shirt inputs for one participant."""
    st.markdown(f"#### {title}")
    cols = st.columns(2, gap="small")

    for index, (name, label, placeholder) in enumerate(TEXT_FIELDS):
        field = field_key(prefix, name)
        with cols[index % 2]:
            st.text_input(
                label,
                value=controller.values.get(field, ""),
                key=_widget_key(field),
                placeholder=placeholder,
                on_change=_on_widget_change,
                args=(controller, field),
            )
            _render_error(controller, field)

    if controller.include_tshirt:
        field = field_key(prefix, "tshirtSize")
        options = [""] + TSHIRT_SIZES
        current = controller.values.get(field, "")
        with cols[1]:
            st.selectbox(
                "T-shirt Size",
                options=options,
                index=options.index(current) if current in options else 0,
                format_func=lambda v: v or "Select size",
                key=_widget_key(field),
                on_change=_on_widget_change,
                args=(controller, field),
            )
            _render_error(controller, field)


def _render_category_section(controller: RegistrationController) -> None:
    st.markdown("#### Race Category")
    options = [""] + list(RACE_CATEGORIES)
    current = controller.values.get(CATEGORY_FIELD, "")
    if current and current not in options:
        # Registrations stored under the older vocabulary stay editable
        options.append(current)

    st.selectbox(
        "Select Race Category",
        options=options,
        index=options.index(current) if current in options else 0,
        format_func=lambda v: get_category_display_name(v) if v else "Choose your race category",
        key=_widget_key(CATEGORY_FIELD),
        on_change=_on_widget_change,
        args=(controller, CATEGORY_FIELD),
    )
    _render_error(controller, CATEGORY_FIELD)

    st.checkbox(
        "Include T-shirt",
        value=controller.include_tshirt,
        key=_widget_key("includeTshirt"),
        on_change=lambda: controller.on_include_tshirt_change(
            st.session_state.get(_widget_key("includeTshirt"), False)
        ),
    )


def render_registration_form(controller: RegistrationController) -> bool:
    """
    Render the full registration form.

    Args:
        controller: Controller holding the form state

    Returns:
        True if a registration was stored during this run
    """
    _render_participant_fields(controller, MAIN_PREFIX, "Your Details")
    _render_category_section(controller)

    st.checkbox(
        "Add a Friend",
        value=controller.add_friend,
        key=_widget_key("addFriend"),
        on_change=lambda: controller.on_add_friend_change(
            st.session_state.get(_widget_key("addFriend"), False)
        ),
    )

    if controller.add_friend:
        _render_participant_fields(controller, FRIEND_PREFIX, "Friend's Details")

    _render_error(controller, FRIEND_SUMMARY_FIELD)

    action_cols = st.columns(2, gap="small")
    with action_cols[0]:
        if st.button(
            "Clear Form",
            key="registration_form_clear",
            width="stretch",
            disabled=controller.is_pending,
        ):
            controller.clear_form()
            bump_form_generation()
            st.rerun()

    with action_cols[1]:
        submitted = st.button(
            "Processing..." if controller.is_pending else "Check Out",
            key="registration_form_submit",
            width="stretch",
            type="primary",
            disabled=controller.is_pending,
        )

    if submitted:
        with st.spinner("Processing..."):
            errors = controller.submit()
        if not errors:
            bump_form_generation()
            return True
        # Widgets above already rendered; rerun so inline errors show up
        st.rerun()

    message = controller.submission_message
    if message is not None:
        if message.success:
            st.success(message.message)
        else:
            st.error(message.message)

    return False
