# app/frontend.py
import streamlit as st

from app import account_ui, applications_ui, apply_ui, auth_ui, home_ui
from app.navigation import (
    ACCOUNT,
    APPLICATIONS,
    APPLY,
    HOME,
    MEMBER_PAGES,
    PROTECTED_PAGES,
    PUBLIC_PAGES,
    SETTINGS,
    SIGN_IN,
    SIGN_UP,
    current_page,
    go_to,
)
from backend.auth_service import current_session, is_authenticated

__all__ = ["main"]

APP_NAME = "LendBridge"

RENDERERS = {
    HOME: home_ui.render,
    SIGN_IN: auth_ui.render_sign_in,
    SIGN_UP: auth_ui.render_sign_up,
    APPLY: apply_ui.render,
    APPLICATIONS: applications_ui.render,
    ACCOUNT: account_ui.render_overview,
    SETTINGS: account_ui.render_settings,
}


def _render_sidebar(page: str):
    session = current_session(st.session_state)
    with st.sidebar:
        st.header(f"🤝 {APP_NAME}")
        if session:
            st.caption(f"Signed in as {session.email}")

        for name in MEMBER_PAGES if session else PUBLIC_PAGES:
            kind = "primary" if name == page else "secondary"
            if st.button(name, key=f"nav_{name}", type=kind):
                go_to(name)

        if session:
            st.divider()
            if st.button("Sign Out", key="nav_sign_out"):
                auth_ui.handle_sign_out()


def main():
    auth_ui.check_user_once()

    page = current_page()
    if page not in RENDERERS:
        page = HOME
    signed_in = is_authenticated(st.session_state)
    # Sign-in/up screens make no sense once signed in
    if signed_in and page in (SIGN_IN, SIGN_UP):
        page = HOME

    _render_sidebar(page)

    if page in PROTECTED_PAGES and not signed_in:
        auth_ui.render_sign_in(f"Please sign in to continue to {page}.")
        return

    RENDERERS[page]()
