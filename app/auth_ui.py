# app/auth_ui.py
import streamlit as st

from app.error_ui import show_error_ui
from app.navigation import HOME, SIGN_IN, SIGN_UP, current_page, go_to
from backend.auth_service import AuthError, check_user, current_session, sign_in, sign_out, sign_up, store_session
from backend.config import load_settings
from backend.password_policy import REQUIREMENT_LABELS, password_requirements, password_strength, validate_password
from backend.supabase_client import public_client


# -----------------------------
# Session
# -----------------------------
def check_user_once():
    """Startup session check, once per browser session."""
    if st.session_state.get("auth_checked"):
        return
    if current_session(st.session_state) is not None:
        try:
            check_user(public_client(), st.session_state)
        except Exception as e:
            show_error_ui("session check", e)
    st.session_state["auth_checked"] = True


def handle_sign_out():
    sign_out(public_client(), st.session_state)
    go_to(HOME)


# -----------------------------
# Password rules
# -----------------------------
def _render_password_rules(password: str):
    """
    Live checklist + strength bar.
    """
    req = password_requirements(password)
    score, label = password_strength(password)

    st.caption("Password requirements:")
    for k, text in REQUIREMENT_LABELS.items():
        st.write(("✅" if req[k] else "❌") + f" {text}")

    st.progress(score / 100.0, text=f"Strength: {label} ({score}/100)")


# -----------------------------
# Screens
# -----------------------------
def render_sign_in(message: str = ""):
    st.title("Sign in")
    if message:
        st.info(message)

    with st.form("sign_in_form"):
        email = st.text_input("Email", key="login_email")
        password = st.text_input("Password", type="password", key="login_password")
        submitted = st.form_submit_button("Sign in", type="primary")

    st.caption("New here?")
    if st.button("Create an account", key="to_sign_up"):
        go_to(SIGN_UP)

    if not submitted:
        return

    if not email or not password:
        st.error("Email and password are required.")
        return

    try:
        session = sign_in(public_client(), email, password)
    except AuthError as e:
        st.error(str(e))
        return
    except Exception as e:
        show_error_ui("sign in", e)
        return

    store_session(st.session_state, session)
    # Protected pages render this screen in place; stay on them after sign-in
    if current_page() == SIGN_IN:
        go_to(HOME)
    st.rerun()


def render_sign_up():
    st.title("Create your account")

    email = st.text_input("Email", key="signup_email")
    col1, col2 = st.columns(2)
    with col1:
        password = st.text_input("Password", type="password", key="signup_password")
    with col2:
        password2 = st.text_input("Confirm password", type="password", key="signup_password2")

    # Outside a form so the checklist updates as the user types
    _render_password_rules(password)

    if st.button("Create account", type="primary", key="signup_btn"):
        if not email:
            st.error("Email is required.")
            return

        policy_err = validate_password(password)
        if policy_err:
            st.error(policy_err)
            return

        if password != password2:
            st.error("Passwords do not match. Please type them exactly the same.")
            return

        redirect_to = load_settings().app_url
        try:
            signed_in = sign_up(public_client(), email, password, redirect_to)
        except AuthError as e:
            st.error(str(e))
            return
        except Exception as e:
            show_error_ui("sign up", e)
            return

        if signed_in:
            st.success("Account created. Sign in to continue.")
        else:
            st.success(
                "Account created. Check your email for a confirmation link. "
                f"After confirming, return to {redirect_to} and sign in."
            )

    st.caption("Already have an account?")
    if st.button("Sign in instead", key="to_sign_in"):
        go_to(SIGN_IN)
