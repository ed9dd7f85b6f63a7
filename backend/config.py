# backend/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import streamlit as st
from dotenv import load_dotenv

# Local development convenience; Streamlit Cloud uses st.secrets instead
load_dotenv()

SUPABASE_URL_KEY = "SUPABASE_URL"
SUPABASE_ANON_KEY_KEY = "SUPABASE_ANON_KEY"
APP_URL_KEY = "APP_URL"
LOG_LEVEL_KEY = "LOG_LEVEL"

DEFAULT_APP_URL = "http://localhost:8501"


class ConfigError(RuntimeError):
    pass


def get_secret(name: str, default: Optional[str] = None) -> Optional[str]:
    """
    Safe secret fetch:
    - env var wins
    - then st.secrets if present
    - never throws if secrets.toml is missing locally
    """
    v = os.getenv(name)
    if v:
        return v
    try:
        return st.secrets.get(name, default)
    except Exception:
        # StreamlitSecretNotFoundError when no secrets.toml exists
        return default


@dataclass(frozen=True)
class Settings:
    supabase_url: str
    supabase_anon_key: str
    app_url: str = DEFAULT_APP_URL
    log_level: str = "INFO"


def load_settings() -> Settings:
    url = get_secret(SUPABASE_URL_KEY)
    anon = get_secret(SUPABASE_ANON_KEY_KEY)
    if not url or not anon:
        raise ConfigError("Missing SUPABASE_URL / SUPABASE_ANON_KEY")

    return Settings(
        supabase_url=url,
        supabase_anon_key=anon,
        app_url=(get_secret(APP_URL_KEY) or DEFAULT_APP_URL).rstrip("/"),
        log_level=(get_secret(LOG_LEVEL_KEY) or "INFO").upper(),
    )
