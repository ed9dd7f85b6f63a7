# app/account_ui.py
import streamlit as st

from app.context import cards_repo, profiles_repo, require_session
from app.error_ui import show_error_ui
from app.navigation import APPLICATIONS, SETTINGS, go_to
from backend.models import Profile
from backend.validation import validate_new_card


def _load_profile() -> Profile:
    session = require_session()
    try:
        return profiles_repo().get_profile()
    except Exception as e:
        show_error_ui("load profile", e)
        return Profile(id=session.user_id)


# -----------------------------
# Account overview
# -----------------------------
def render_overview():
    session = require_session()
    st.title("Account Overview")
    st.caption("Manage your account settings and view your applications")

    with st.spinner("Loading profile..."):
        profile = _load_profile()

    col1, col2, col3 = st.columns(3)
    with col1:
        with st.container(border=True):
            st.subheader("Profile Information")
            st.write(f"**Name:** {profile.display_name}")
            st.write(f"**Email:** {session.email}")
            st.write(f"**Phone:** {profile.phone or 'Not set'}")
            if st.button("Edit profile", key="overview_settings"):
                go_to(SETTINGS)
    with col2:
        with st.container(border=True):
            st.subheader("Payment Methods")
            st.write("Manage your saved payment methods")
            if st.button("View saved cards →", key="overview_cards"):
                go_to(SETTINGS)
    with col3:
        with st.container(border=True):
            st.subheader("Applications")
            st.write("View and manage your loan applications")
            if st.button("View applications →", key="overview_apps"):
                go_to(APPLICATIONS)


# -----------------------------
# Settings
# -----------------------------
def _render_profile_form():
    st.subheader("Profile")
    profile = _load_profile()

    with st.form("profile_form"):
        col1, col2 = st.columns(2)
        with col1:
            first_name = st.text_input("First name", value=profile.first_name)
        with col2:
            last_name = st.text_input("Last name", value=profile.last_name)
        phone = st.text_input("Phone", value=profile.phone)
        submitted = st.form_submit_button("Save profile", type="primary")

    if submitted:
        try:
            profiles_repo().update_profile(first_name, last_name, phone)
        except Exception as e:
            show_error_ui("save profile", e)
            return
        st.success("Profile saved.")


def _render_saved_cards():
    st.subheader("Payment Methods")
    repo = cards_repo()

    try:
        cards = repo.list_cards()
    except Exception as e:
        show_error_ui("load saved cards", e)
        return

    if not cards:
        st.info("No saved cards yet.")

    for card in cards:
        col_label, col_default, col_delete = st.columns([4, 1, 1])
        col_label.write(card.label)
        with col_default:
            if not card.is_default and st.button("Make default", key=f"default_{card.id}"):
                try:
                    repo.set_default_card(card.id)
                except Exception as e:
                    show_error_ui("set default card", e)
                else:
                    st.rerun()
        with col_delete:
            if st.button("Delete", key=f"delete_{card.id}"):
                try:
                    repo.delete_card(card.id)
                except Exception as e:
                    show_error_ui("delete card", e)
                else:
                    st.rerun()

    with st.expander("Add a card"):
        with st.form("add_card_form", clear_on_submit=True):
            values = {
                "card_number": st.text_input("Card number", max_chars=19, placeholder="16 digits"),
                "card_name": st.text_input("Name on card"),
                "expiry_date": st.text_input("Expiry date", max_chars=5, placeholder="MM/YY"),
                "cvv": st.text_input("CVV", type="password", max_chars=4),
            }
            submitted = st.form_submit_button("Save card", type="primary")

        if submitted:
            errors = validate_new_card(values)
            if errors:
                for field, msg in errors.items():
                    st.error(f"{field.replace('_', ' ').capitalize()}: {msg}")
                return
            try:
                repo.add_card(values)
            except Exception as e:
                show_error_ui("save card", e)
                return
            st.rerun()


def render_settings():
    st.title("Account Settings")
    _render_profile_form()
    st.divider()
    _render_saved_cards()
