# tests/test_wizard.py
import pytest

from backend.applications import ApplicationsRepository
from backend.cards import SavedCardsRepository
from backend.wizard import LoanWizard


@pytest.fixture
def repos(supabase):
    return ApplicationsRepository(supabase, "user-1"), SavedCardsRepository(supabase, "user-1")


def test_steps_follow_role():
    wizard = LoanWizard()
    wizard.select_role("lender")
    assert wizard.steps == ["Investment Terms", "Personal Information", "Payment Details"]
    assert wizard.title == "Investment Application"

    wizard.select_role("borrower")
    assert wizard.steps[0] == "Loan Terms"
    assert wizard.title == "Loan Application"


def test_rejects_unknown_role():
    with pytest.raises(ValueError):
        LoanWizard().select_role("banker")


def test_validate_requires_role():
    with pytest.raises(RuntimeError):
        LoanWizard().next()


def test_does_not_advance_on_invalid_step():
    wizard = LoanWizard()
    wizard.select_role("borrower")
    wizard.update({"loan_amount": 500})

    assert wizard.next() is False
    assert wizard.current_step == 0
    assert wizard.errors["loan_amount"] == "Minimum loan amount is $1,000"


def test_advances_through_steps(terms_values, personal_values):
    wizard = LoanWizard()
    wizard.select_role("borrower")

    wizard.update(terms_values)
    assert wizard.next() is True
    assert wizard.current_step == 1
    assert wizard.errors == {}

    # Personal step is still empty
    assert wizard.next() is False
    assert wizard.current_step == 1

    wizard.update(personal_values)
    assert wizard.next() is True
    assert wizard.current_step == 2
    assert wizard.is_last_step


def test_next_on_last_step_does_not_advance(complete_values):
    wizard = LoanWizard(role="lender", current_step=2)
    wizard.update(complete_values)
    assert wizard.next() is True
    assert wizard.current_step == 2


def test_previous_stops_at_first_step():
    wizard = LoanWizard(role="lender", current_step=1, errors={"email": "Required"})
    wizard.previous()
    assert wizard.current_step == 0
    assert wizard.errors == {}
    wizard.previous()
    assert wizard.current_step == 0


def test_submit_only_from_last_step(repos):
    wizard = LoanWizard(role="lender", current_step=1)
    with pytest.raises(RuntimeError):
        wizard.submit(*repos)


def test_submit_stores_application(supabase, repos, complete_values):
    wizard = LoanWizard(role="borrower", current_step=2)
    wizard.update(complete_values)

    app = wizard.submit(*repos)

    assert app is not None
    assert app.application_type == "borrower"
    assert wizard.submission_error is None
    assert [c.table for c in supabase.calls] == ["applications"]
    # Full card details do not linger after submission
    assert wizard.values["card_number"] == ""
    assert wizard.values["cvv"] == ""


def test_submit_invalid_payment_does_not_call_backend(supabase, repos, complete_values):
    wizard = LoanWizard(role="borrower", current_step=2)
    wizard.update(dict(complete_values, cvv="1"))

    assert wizard.submit(*repos) is None
    assert wizard.errors == {"cvv": "Invalid CVV"}
    assert supabase.calls == []


def test_submit_failure_keeps_message(supabase, repos, complete_values):
    supabase.fail_on[("applications", "insert")] = "new row violates row-level security policy"
    wizard = LoanWizard(role="lender", current_step=2)
    wizard.update(complete_values)

    assert wizard.submit(*repos) is None
    assert wizard.submission_error == "new row violates row-level security policy"
    assert wizard.current_step == 2


def test_submit_with_earlier_step_broken(repos, complete_values):
    wizard = LoanWizard(role="borrower", current_step=2)
    wizard.update(dict(complete_values, email="nope"))

    assert wizard.submit(*repos) is None
    assert wizard.errors == {"email": "Invalid email"}
    assert wizard.submission_error == "Please review the highlighted fields."
    assert wizard.current_step == 1


def test_submit_returns_to_first_broken_step(supabase, repos, complete_values):
    wizard = LoanWizard(role="lender", current_step=2)
    wizard.update(dict(complete_values, loan_amount=100, email="nope"))

    assert wizard.submit(*repos) is None
    assert wizard.current_step == 0
    assert wizard.errors == {"loan_amount": "Minimum investment amount is $5,000"}
    assert supabase.calls == []


def test_reset(complete_values):
    wizard = LoanWizard(role="lender", current_step=2, submission_error="boom")
    wizard.update(complete_values)
    wizard.reset()

    assert wizard.role is None
    assert wizard.current_step == 0
    assert wizard.values["loan_amount"] is None
    assert wizard.submission_error is None
