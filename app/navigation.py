# app/navigation.py
import streamlit as st

HOME = "Home"
SIGN_IN = "Sign In"
SIGN_UP = "Get Started"
APPLY = "Apply Now"
APPLICATIONS = "My Applications"
ACCOUNT = "Account Overview"
SETTINGS = "Settings"

PUBLIC_PAGES = [HOME, SIGN_IN, SIGN_UP]
MEMBER_PAGES = [HOME, APPLY, APPLICATIONS, ACCOUNT, SETTINGS]
PROTECTED_PAGES = {APPLY, APPLICATIONS, ACCOUNT, SETTINGS}

PAGE_KEY = "page"


def current_page() -> str:
    return st.session_state.get(PAGE_KEY) or HOME


def go_to(page: str, **state) -> None:
    """Switch page, stash any hand-off values (e.g. apply_role), and rerun."""
    st.session_state[PAGE_KEY] = page
    for k, v in state.items():
        st.session_state[k] = v
    st.rerun()
