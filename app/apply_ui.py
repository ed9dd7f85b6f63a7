# app/apply_ui.py
from typing import Any, Dict, List

import streamlit as st

from app.context import applications_repo, cards_repo
from app.error_ui import show_error_ui
from app.navigation import APPLICATIONS, go_to
from backend.models import SavedCard
from backend.wizard import LoanWizard

WIZARD_KEY = "wizard"

PURPOSES = ["", "Debt consolidation", "Home improvement", "Business", "Education", "Medical", "Other"]


def _wizard() -> LoanWizard:
    if WIZARD_KEY not in st.session_state:
        st.session_state[WIZARD_KEY] = LoanWizard()
    return st.session_state[WIZARD_KEY]


def _field_error(wizard: LoanWizard, name: str):
    msg = wizard.errors.get(name)
    if msg:
        st.caption(f":red[{msg}]")


# -----------------------------
# Role selection
# -----------------------------
def _render_role_selection(wizard: LoanWizard):
    st.title("Choose Your Role")
    col1, col2 = st.columns(2)
    with col1:
        with st.container(border=True):
            st.subheader("👥 Lender")
            st.write("Invest your money and earn interest by lending to verified borrowers")
            st.caption("Average returns: 8-15% APR")
            if st.button("Continue as Lender", type="primary", key="role_lender"):
                wizard.select_role("lender")
                st.rerun()
    with col2:
        with st.container(border=True):
            st.subheader("🙋 Borrower")
            st.write("Get funded quickly with competitive interest rates")
            st.caption("Rates starting from 6% APR")
            if st.button("Continue as Borrower", type="primary", key="role_borrower"):
                wizard.select_role("borrower")
                st.rerun()


def _render_progress(wizard: LoanWizard):
    steps = wizard.steps
    st.progress((wizard.current_step + 1) / len(steps))
    cols = st.columns(len(steps))
    for i, (col, name) in enumerate(zip(cols, steps)):
        label = f"{i + 1}. {name}"
        col.markdown(f"**{label}**" if i <= wizard.current_step else f":gray[{label}]")


# -----------------------------
# Steps
# -----------------------------
def _terms_step(wizard: LoanWizard) -> Dict[str, Any]:
    v = wizard.values
    lender = wizard.role == "lender"
    st.subheader("Investment Terms" if lender else "Loan Terms")

    out: Dict[str, Any] = {}
    out["loan_amount"] = st.number_input(
        "Investment amount ($)" if lender else "Loan amount ($)",
        min_value=0.0,
        step=500.0,
        value=v["loan_amount"],
        placeholder="5,000 minimum" if lender else "1,000 minimum",
        key="wz_loan_amount",
    )
    _field_error(wizard, "loan_amount")

    out["loan_term"] = st.number_input(
        "Term (months)", min_value=0, step=1, value=v["loan_term"], placeholder="6 minimum", key="wz_loan_term"
    )
    _field_error(wizard, "loan_term")

    out["interest_rate"] = st.number_input(
        "Interest rate (%)",
        min_value=0.0,
        max_value=100.0,
        step=0.5,
        value=v["interest_rate"],
        placeholder="1 - 30",
        key="wz_interest_rate",
    )
    _field_error(wizard, "interest_rate")

    if not lender:
        current = v["purpose"] if v["purpose"] in PURPOSES else ""
        out["purpose"] = st.selectbox(
            "Purpose of the loan",
            PURPOSES,
            index=PURPOSES.index(current),
            format_func=lambda p: p or "Select a purpose...",
            key="wz_purpose",
        )
        _field_error(wizard, "purpose")
    return out


def _personal_step(wizard: LoanWizard) -> Dict[str, Any]:
    v = wizard.values
    st.subheader("Personal Information")

    out: Dict[str, Any] = {}
    col1, col2 = st.columns(2)
    with col1:
        out["first_name"] = st.text_input("First name", value=v["first_name"], key="wz_first_name")
        _field_error(wizard, "first_name")
    with col2:
        out["last_name"] = st.text_input("Last name", value=v["last_name"], key="wz_last_name")
        _field_error(wizard, "last_name")

    out["email"] = st.text_input("Email", value=v["email"], key="wz_email")
    _field_error(wizard, "email")
    out["phone"] = st.text_input("Phone", value=v["phone"], key="wz_phone")
    _field_error(wizard, "phone")
    out["address"] = st.text_area("Address", value=v["address"], key="wz_address")
    _field_error(wizard, "address")
    return out


def _payment_step(wizard: LoanWizard, cards: List[SavedCard]) -> Dict[str, Any]:
    v = wizard.values
    st.subheader("Payment Details")

    out: Dict[str, Any] = {}
    if cards:
        by_id = {c.id: c for c in cards}
        options = [""] + list(by_id)
        current = v["saved_card"] if v["saved_card"] in by_id else ""
        out["saved_card"] = st.selectbox(
            "Saved card",
            options,
            index=options.index(current),
            format_func=lambda cid: by_id[cid].label if cid else "Use a new card",
            key="wz_saved_card",
        )
        st.caption("Leave the fields below empty when paying with a saved card.")
    else:
        out["saved_card"] = ""

    out["card_number"] = st.text_input(
        "Card number", value=v["card_number"], max_chars=19, placeholder="16 digits", key="wz_card_number"
    )
    _field_error(wizard, "card_number")
    out["card_name"] = st.text_input("Name on card", value=v["card_name"], key="wz_card_name")
    _field_error(wizard, "card_name")

    col1, col2 = st.columns(2)
    with col1:
        out["expiry_date"] = st.text_input(
            "Expiry date", value=v["expiry_date"], max_chars=5, placeholder="MM/YY", key="wz_expiry_date"
        )
        _field_error(wizard, "expiry_date")
    with col2:
        out["cvv"] = st.text_input("CVV", value=v["cvv"], type="password", max_chars=4, key="wz_cvv")
        _field_error(wizard, "cvv")

    out["save_card"] = st.checkbox("Save this card for future payments", value=bool(v["save_card"]), key="wz_save_card")
    return out


def _load_cards() -> List[SavedCard]:
    try:
        return cards_repo().list_cards()
    except Exception as e:
        show_error_ui("load saved cards", e)
        return []


# -----------------------------
# Page
# -----------------------------
def render():
    wizard = _wizard()

    preselected = st.session_state.pop("apply_role", None)
    if preselected and preselected != wizard.role:
        wizard.reset()
        wizard.select_role(preselected)

    if wizard.role is None:
        _render_role_selection(wizard)
        return

    st.title(wizard.title)
    _render_progress(wizard)

    if wizard.submission_error:
        st.error(wizard.submission_error)

    cards = _load_cards() if wizard.is_last_step else []

    with st.form(f"wizard_step_{wizard.current_step}"):
        if wizard.current_step == 0:
            values = _terms_step(wizard)
        elif wizard.current_step == 1:
            values = _personal_step(wizard)
        else:
            values = _payment_step(wizard, cards)

        col_prev, _, col_next = st.columns([1, 2, 1])
        with col_prev:
            go_back = wizard.current_step > 0 and st.form_submit_button("← Previous")
        with col_next:
            go_forward = st.form_submit_button(
                "Submit Application" if wizard.is_last_step else "Next →", type="primary"
            )

    if st.button("Start over", key="wizard_reset"):
        wizard.reset()
        st.rerun()

    if go_back:
        wizard.update(values)
        wizard.previous()
        st.rerun()

    if not go_forward:
        return

    wizard.update(values)
    if not wizard.is_last_step:
        wizard.next()
        st.rerun()

    with st.spinner("Submitting application..."):
        app = wizard.submit(applications_repo(), cards_repo())
    if app is None:
        st.rerun()

    wizard.reset()
    go_to(APPLICATIONS, flash=f"{app.type_label} application submitted.")
