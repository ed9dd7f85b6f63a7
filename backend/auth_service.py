# backend/auth_service.py
"""
Sign in / sign up / sign out against Supabase Auth.

Functions take the session mapping explicitly (st.session_state in the app,
a plain dict in tests) so nothing here depends on a running Streamlit script.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, MutableMapping, Optional

from backend.error_handler import error_message
from backend.logging_config import get_logger

logger = get_logger(__name__)

ACCESS_TOKEN_KEY = "sb_access_token"
REFRESH_TOKEN_KEY = "sb_refresh_token"
USER_ID_KEY = "sb_user_id"
USER_EMAIL_KEY = "sb_user_email"

# Everything a signed-in user accumulates; sign-out drops all of it
SESSION_KEYS = [
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    USER_ID_KEY,
    USER_EMAIL_KEY,
    "auth_checked",
    "wizard",
    "page",
]


class AuthError(RuntimeError):
    pass


@dataclass(frozen=True)
class AuthSession:
    user_id: str
    email: str
    access_token: str
    refresh_token: str = ""


def _field(obj: Any, name: str) -> Any:
    # gotrue returns pydantic models; older clients returned dicts
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def sign_in(client, email: str, password: str) -> AuthSession:
    email = (email or "").strip()
    if not email or not password:
        raise AuthError("Email and password are required.")

    resp = client.auth.sign_in_with_password({"email": email, "password": password})
    session = _field(resp, "session")
    user = _field(resp, "user")

    if not session:
        raise AuthError(
            "Sign-in did not return a session. If you just signed up, "
            "you may need to confirm your email first."
        )
    if not user:
        raise AuthError("Sign in failed: no user returned.")

    logger.info("user %s signed in", _field(user, "id"))
    return AuthSession(
        user_id=str(_field(user, "id")),
        email=_field(user, "email") or email,
        access_token=_field(session, "access_token"),
        refresh_token=_field(session, "refresh_token") or "",
    )


def sign_up(client, email: str, password: str, redirect_to: str) -> bool:
    """
    Register a new account. Returns True when the provider issued a session
    right away (email confirmation disabled), False when the user must
    confirm their email first.
    """
    resp = client.auth.sign_up(
        {
            "email": email.strip(),
            "password": password,
            "options": {"email_redirect_to": redirect_to},
        }
    )
    if not _field(resp, "user"):
        raise AuthError("Sign up failed: no user returned.")
    return bool(_field(resp, "session"))


def store_session(state: MutableMapping, session: AuthSession) -> None:
    state[ACCESS_TOKEN_KEY] = session.access_token
    state[REFRESH_TOKEN_KEY] = session.refresh_token
    state[USER_ID_KEY] = session.user_id
    state[USER_EMAIL_KEY] = session.email


def current_session(state: MutableMapping) -> Optional[AuthSession]:
    token = state.get(ACCESS_TOKEN_KEY)
    user_id = state.get(USER_ID_KEY)
    if not (token and user_id):
        return None
    return AuthSession(
        user_id=user_id,
        email=state.get(USER_EMAIL_KEY) or "",
        access_token=token,
        refresh_token=state.get(REFRESH_TOKEN_KEY) or "",
    )


def is_authenticated(state: MutableMapping) -> bool:
    return current_session(state) is not None


def clear_session(state: MutableMapping) -> None:
    for k in SESSION_KEYS:
        state.pop(k, None)


def _is_rejection(exc: Exception) -> bool:
    # Auth API errors carry the HTTP status; transport failures carry none
    status = getattr(exc, "status", None)
    return isinstance(status, int) and 400 <= status < 500


def check_user(client, state: MutableMapping) -> Optional[AuthSession]:
    """
    Startup session check: confirm the stored token is still accepted.
    A token the provider rejects clears the session. When the provider
    cannot be reached the session is kept and the failure only logged.
    """
    session = current_session(state)
    if session is None:
        return None

    try:
        resp = client.auth.get_user(session.access_token)
    except Exception as e:
        if not _is_rejection(e):
            logger.warning("session check failed, keeping session: %s", error_message(e))
            return session
        logger.warning("stored session rejected: %s", error_message(e))
        clear_session(state)
        return None

    user = _field(resp, "user")
    if not user:
        clear_session(state)
        return None

    state[USER_EMAIL_KEY] = _field(user, "email") or session.email
    return current_session(state)


def sign_out(client, state: MutableMapping) -> None:
    """Ask the provider to end the session; local state is cleared regardless."""
    session = current_session(state)
    try:
        if session is not None:
            if session.refresh_token:
                client.auth.set_session(session.access_token, session.refresh_token)
            client.auth.sign_out()
    except Exception as e:
        logger.warning("provider sign-out failed: %s", error_message(e))
    finally:
        clear_session(state)
    if session is not None:
        logger.info("user %s signed out", session.user_id)
