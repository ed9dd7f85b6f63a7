# app/home_ui.py
import streamlit as st

from app.navigation import APPLY, go_to

HOW_IT_WORKS = [
    ("1. Create an account", "Sign up with your email and confirm it in a couple of minutes."),
    ("2. Choose your role", "Invest as a lender or apply for funding as a borrower."),
    ("3. Set your terms", "Pick the amount, term and interest rate that work for you."),
    ("4. Get matched", "We connect lenders and borrowers directly, with no bank in the middle."),
]

BENEFITS = [
    ("🔒 Bank-Level Security", "Your investments are protected with the highest security standards."),
    ("📈 High Returns", "Earn up to 12% annual returns on your investments."),
    ("⚡ Quick Process", "Get funded within 24 hours of approval."),
]

STATS = [
    ("Total funded", "$25M+"),
    ("Active members", "12,000+"),
    ("Average lender return", "9.8%"),
    ("Default rate", "< 2%"),
]


def _hero():
    st.title("Peer-to-Peer Lending Made Simple")
    st.markdown(
        "Connect borrowers with lenders directly. Get better rates, faster approvals, "
        "and a more transparent lending experience."
    )
    col1, col2, _ = st.columns([1, 1, 2])
    with col1:
        if st.button("Start Investing →", type="primary", key="hero_invest"):
            go_to(APPLY, apply_role="lender")
    with col2:
        if st.button("Get a Loan →", key="hero_borrow"):
            go_to(APPLY, apply_role="borrower")


def _how_it_works():
    st.header("How it Works")
    cols = st.columns(len(HOW_IT_WORKS))
    for col, (title, text) in zip(cols, HOW_IT_WORKS):
        with col:
            st.subheader(title)
            st.write(text)


def _benefits():
    st.header("Benefits")
    cols = st.columns(len(BENEFITS))
    for col, (title, text) in zip(cols, BENEFITS):
        with col:
            st.markdown(f"#### {title}")
            st.write(text)


def _stats():
    st.header("Statistics")
    cols = st.columns(len(STATS))
    for col, (label, value) in zip(cols, STATS):
        col.metric(label, value)


def render():
    _hero()
    st.divider()
    _how_it_works()
    st.divider()
    _benefits()
    st.divider()
    _stats()
