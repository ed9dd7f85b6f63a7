# backend/applications.py
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from backend.cards import SavedCardsRepository
from backend.error_handler import BackendError
from backend.formatting import fmt_date, fmt_money, fmt_rate, fmt_term
from backend.logging_config import get_logger
from backend.models import ROLES, Application
from backend.validation import parse_step

logger = get_logger(__name__)

TABLE = "applications"

DISPLAY_COLUMNS = ["Type", "Amount", "Term", "Rate", "Status", "Date"]


def _whole(v: Optional[float]) -> Any:
    if v is None:
        return None
    return int(v) if float(v).is_integer() else v


def application_row(user_id: str, role: str, values: Mapping[str, Any]) -> Dict[str, Any]:
    if role not in ROLES:
        raise ValueError(f"Unknown application type: {role!r}")
    return {
        "user_id": user_id,
        "application_type": role,
        "loan_amount": _whole(values.get("loan_amount")),
        "loan_term": _whole(values.get("loan_term")),
        "interest_rate": values.get("interest_rate"),
        "purpose": values.get("purpose") or "",
        "first_name": values.get("first_name"),
        "last_name": values.get("last_name"),
        "email": values.get("email"),
        "phone": values.get("phone"),
        "address": values.get("address"),
        "payment_method_id": values.get("saved_card") or None,
    }


class ApplicationsRepository:
    def __init__(self, client, user_id: str):
        self.client = client
        self.user_id = user_id

    def list_applications(self) -> List[Application]:
        resp = (
            self.client.table(TABLE)
            .select("*")
            .eq("user_id", self.user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [Application.from_row(r) for r in (resp.data or [])]

    def create_application(self, role: str, values: Mapping[str, Any]) -> Application:
        resp = self.client.table(TABLE).insert([application_row(self.user_id, role, values)]).execute()
        data = resp.data or []
        if not data:
            raise BackendError("Application insert returned no rows.")
        app = Application.from_row(data[0])
        logger.info("created %s application %s for user %s", role, app.id, self.user_id)
        return app


def submit_application(
    applications: ApplicationsRepository,
    cards: SavedCardsRepository,
    role: str,
    values: Mapping[str, Any],
) -> Application:
    """
    Store a completed wizard.

    Every step is re-validated first (raises pydantic.ValidationError).
    A newly entered card is saved, never as default, only when the applicant
    asked for it and did not pick a saved card.
    """
    terms, personal, payment = (parse_step(role, step, values) for step in range(3))
    cleaned: Dict[str, Any] = {**terms.model_dump(), **personal.model_dump(), **payment.model_dump()}

    if not payment.saved_card and payment.save_card:
        cards.add_card(cleaned, is_default=False)

    return applications.create_application(role, cleaned)


def applications_frame(apps: List[Application]) -> pd.DataFrame:
    rows = [
        {
            "Type": a.type_label,
            "Amount": fmt_money(a.loan_amount),
            "Term": fmt_term(a.loan_term),
            "Rate": fmt_rate(a.interest_rate),
            "Status": a.status.title(),
            "Date": fmt_date(a.created_at),
        }
        for a in apps
    ]
    return pd.DataFrame(rows, columns=DISPLAY_COLUMNS)
