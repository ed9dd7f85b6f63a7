# tests/test_applications.py
import pytest
from pydantic import ValidationError

from backend.applications import (
    DISPLAY_COLUMNS,
    ApplicationsRepository,
    application_row,
    applications_frame,
    submit_application,
)
from backend.cards import SavedCardsRepository
from backend.error_handler import BackendError
from backend.models import Application


@pytest.fixture
def apps_repo(supabase):
    return ApplicationsRepository(supabase, "user-1")


@pytest.fixture
def cards(supabase):
    return SavedCardsRepository(supabase, "user-1")


def test_list_applications_newest_first(supabase, apps_repo):
    supabase.tables["applications"] = [
        {"id": "old", "user_id": "user-1", "application_type": "lender", "created_at": "2024-01-01T00:00:00+00:00"},
        {"id": "new", "user_id": "user-1", "application_type": "borrower", "created_at": "2024-03-01T00:00:00+00:00"},
        {"id": "other", "user_id": "user-2", "application_type": "borrower", "created_at": "2024-02-01T00:00:00+00:00"},
    ]
    apps = apps_repo.list_applications()
    assert [a.id for a in apps] == ["new", "old"]
    assert apps[0].status == "pending"


def test_application_row_rejects_unknown_role():
    with pytest.raises(ValueError):
        application_row("user-1", "banker", {})


def test_submit_without_saving_card(supabase, apps_repo, cards, complete_values):
    app = submit_application(apps_repo, cards, "borrower", complete_values)

    assert [c.table for c in supabase.calls] == ["applications"]
    row = supabase.tables["applications"][0]
    assert row["user_id"] == "user-1"
    assert row["application_type"] == "borrower"
    assert row["loan_amount"] == 12000
    assert row["loan_term"] == 24
    assert row["interest_rate"] == 7.5
    assert row["payment_method_id"] is None
    assert "card_number" not in row and "cvv" not in row
    assert app.email == "jane.doe@lendbridge.io"


def test_submit_saves_card_first_when_asked(supabase, apps_repo, cards, complete_values):
    supabase.tables["saved_cards"] = []
    submit_application(apps_repo, cards, "lender", dict(complete_values, save_card=True))

    assert [(c.table, c.op) for c in supabase.calls] == [("saved_cards", "insert"), ("applications", "insert")]
    card = supabase.tables["saved_cards"][0]
    assert card["card_last_four"] == "4242"
    assert card["is_default"] is False


def test_submit_with_saved_card(supabase, apps_repo, cards, complete_values):
    values = dict(complete_values, saved_card="card-9", card_number="", cvv="", save_card=True)
    submit_application(apps_repo, cards, "borrower", values)

    assert [c.table for c in supabase.calls] == ["applications"]
    assert supabase.tables["applications"][0]["payment_method_id"] == "card-9"


def test_submit_rejects_invalid_values(supabase, apps_repo, cards, complete_values):
    with pytest.raises(ValidationError):
        submit_application(apps_repo, cards, "lender", dict(complete_values, loan_amount=1000))
    assert supabase.calls == []


def test_card_failure_stops_submission(supabase, apps_repo, cards, complete_values):
    supabase.fail_on[("saved_cards", "insert")] = "permission denied"
    with pytest.raises(Exception, match="permission denied"):
        submit_application(apps_repo, cards, "borrower", dict(complete_values, save_card=True))
    assert "applications" not in supabase.tables


def test_insert_without_rows(supabase, apps_repo, complete_values):
    supabase.empty_inserts = True
    with pytest.raises(BackendError):
        apps_repo.create_application("borrower", complete_values)


def test_applications_frame():
    apps = [
        Application.from_row(
            {
                "id": "1",
                "application_type": "lender",
                "loan_amount": 25000,
                "loan_term": 36,
                "interest_rate": 8.25,
                "created_at": "2024-05-02T13:45:00.123456+00:00",
            }
        ),
        Application.from_row({"id": "2", "application_type": "borrower", "loan_amount": "1500.5", "status": "approved"}),
    ]
    df = applications_frame(apps)

    assert list(df.columns) == DISPLAY_COLUMNS
    assert df.iloc[0].to_dict() == {
        "Type": "Lender",
        "Amount": "$25,000",
        "Term": "36 months",
        "Rate": "8.25%",
        "Status": "Pending",
        "Date": "2024-05-02",
    }
    assert df.iloc[1]["Amount"] == "$1,500.50"
    assert df.iloc[1]["Status"] == "Approved"
    assert df.iloc[1]["Date"] == "—"


def test_applications_frame_empty():
    df = applications_frame([])
    assert df.empty
    assert list(df.columns) == DISPLAY_COLUMNS
