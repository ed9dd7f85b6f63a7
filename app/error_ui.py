# User-friendly error display for Streamlit
from typing import Optional

import streamlit as st

from backend.error_handler import log_error


def show_error_ui(operation: str, exc: BaseException, context: Optional[dict] = None) -> str:
    """Log a failed remote call and render its message. Returns the message."""
    message = log_error(operation, exc, context)
    st.error(f"{operation.capitalize()} failed: {message}")
    return message
