# app/applications_ui.py
import streamlit as st

from app.context import applications_repo
from app.navigation import APPLY, go_to
from backend.applications import applications_frame
from backend.error_handler import log_error


def render():
    st.title("Your Applications")

    flash = st.session_state.pop("flash", None)
    if flash:
        st.success(flash)

    with st.spinner("Loading applications..."):
        try:
            apps = applications_repo().list_applications()
        except Exception as e:
            apps = None
            error = log_error("load applications", e)

    if apps is None:
        st.error(f"Error: {error}")
        if st.button("Retry"):
            st.rerun()
        return

    if not apps:
        st.info("You have not submitted any applications yet.")
        if st.button("Apply Now", type="primary"):
            go_to(APPLY)
        return

    lenders = sum(1 for a in apps if a.application_type == "lender")
    col1, col2, col3 = st.columns(3)
    col1.metric("Applications", len(apps))
    col2.metric("As lender", lenders)
    col3.metric("As borrower", len(apps) - lenders)

    st.dataframe(applications_frame(apps), hide_index=True)
