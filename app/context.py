# app/context.py
"""Per-run accessors for the signed-in user's session and data repositories."""
import streamlit as st

from backend.applications import ApplicationsRepository
from backend.auth_service import AuthSession, current_session
from backend.cards import SavedCardsRepository
from backend.profiles import ProfilesRepository
from backend.supabase_client import authed_client


def require_session() -> AuthSession:
    session = current_session(st.session_state)
    if session is None:
        raise RuntimeError("Not authenticated.")
    return session


def _client():
    return authed_client(require_session().access_token)


def applications_repo() -> ApplicationsRepository:
    return ApplicationsRepository(_client(), require_session().user_id)


def cards_repo() -> SavedCardsRepository:
    return SavedCardsRepository(_client(), require_session().user_id)


def profiles_repo() -> ProfilesRepository:
    return ProfilesRepository(_client(), require_session().user_id)
