# streamlit_app.py
# Entry point: `streamlit run streamlit_app.py`
import streamlit as st

st.set_page_config(page_title="LendBridge", page_icon="🤝", layout="wide")

from app.preflight import run as preflight_run  # noqa: E402

# Missing Supabase secrets stop the script here with a readable message,
# before any module that builds a client is imported
preflight_run()

from app.frontend import main  # noqa: E402
from backend.config import load_settings  # noqa: E402
from backend.logging_config import setup_logging  # noqa: E402

setup_logging(load_settings().log_level)
main()
