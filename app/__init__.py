"""
Streamlit UI package.

Page modules render with Streamlit and delegate every remote call to backend.*.
Entry point is streamlit_app.py at the repo root.
"""
