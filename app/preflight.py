# app/preflight.py
import streamlit as st

from backend.config import APP_URL_KEY, SUPABASE_ANON_KEY_KEY, SUPABASE_URL_KEY, get_secret

REQUIRED_AT_BOOT = [
    SUPABASE_URL_KEY,
    SUPABASE_ANON_KEY_KEY,
]

# Email confirmation links redirect here; without it they point at localhost
RECOMMENDED_AT_BOOT = [
    APP_URL_KEY,
]


def _missing(keys):
    return [k for k in keys if not get_secret(k)]


def run():
    missing_boot = _missing(REQUIRED_AT_BOOT)
    if missing_boot:
        st.error(
            "Missing required secrets: " + ", ".join(missing_boot) + "\n\n"
            "Add them to .env, the environment, or Streamlit Cloud → App Settings → Secrets.\n\n"
            "Until these are set, sign-in and applications will not work."
        )
        st.stop()

    missing_recommended = _missing(RECOMMENDED_AT_BOOT)
    if missing_recommended:
        st.warning(
            "Recommended secret not set: APP_URL\n\n"
            "Sign-up confirmation emails link back to this app. Set APP_URL to the deployed URL, "
            "for example https://lendbridge.streamlit.app, and allow-list it in "
            "Supabase Auth → URL Configuration."
        )
