# backend/supabase_client.py
from __future__ import annotations

from typing import Optional

from supabase import Client, create_client

from backend.config import Settings, load_settings


def public_client(settings: Optional[Settings] = None) -> Client:
    settings = settings or load_settings()
    return create_client(settings.supabase_url, settings.supabase_anon_key)


def authed_client(access_token: str, settings: Optional[Settings] = None) -> Client:
    """
    Create a Supabase client whose table queries run as the signed-in user,
    so PostgREST calls respect RLS with the user's JWT.
    """
    if not access_token:
        raise RuntimeError("Not authenticated (missing access token).")
    sb = public_client(settings)
    sb.postgrest.auth(access_token)
    return sb
