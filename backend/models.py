# backend/models.py
"""
Records mirrored from the hosted store.

Rows come back from PostgREST as dicts; from_row() tolerates missing columns
so older rows and partial selects still render.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

ROLES = ("lender", "borrower")


def _num(v: Any) -> Optional[float]:
    if v is None or v == "":
        return None
    return float(v)


@dataclass
class Application:
    id: str
    application_type: str
    loan_amount: Optional[float]
    loan_term: Optional[int]
    interest_rate: Optional[float]
    purpose: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    payment_method_id: Optional[str] = None
    status: str = "pending"
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Application":
        term = row.get("loan_term")
        return cls(
            id=str(row.get("id") or ""),
            application_type=row.get("application_type") or "",
            loan_amount=_num(row.get("loan_amount")),
            loan_term=int(term) if term not in (None, "") else None,
            interest_rate=_num(row.get("interest_rate")),
            purpose=row.get("purpose") or "",
            first_name=row.get("first_name") or "",
            last_name=row.get("last_name") or "",
            email=row.get("email") or "",
            phone=row.get("phone") or "",
            address=row.get("address") or "",
            payment_method_id=row.get("payment_method_id"),
            status=row.get("status") or "pending",
            created_at=row.get("created_at"),
        )

    @property
    def type_label(self) -> str:
        return "Lender" if self.application_type == "lender" else "Borrower"


@dataclass
class SavedCard:
    id: str
    card_last_four: str
    card_brand: str
    card_holder_name: str
    expiry_date: str
    is_default: bool = False

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "SavedCard":
        return cls(
            id=str(row.get("id") or ""),
            card_last_four=row.get("card_last_four") or "",
            card_brand=row.get("card_brand") or "Unknown",
            card_holder_name=row.get("card_holder_name") or "",
            expiry_date=row.get("expiry_date") or "",
            is_default=bool(row.get("is_default")),
        )

    @property
    def label(self) -> str:
        text = f"{self.card_brand} •••• {self.card_last_four} (exp {self.expiry_date})"
        return f"{text} - default" if self.is_default else text


@dataclass
class Profile:
    id: str
    first_name: str = ""
    last_name: str = ""
    phone: str = ""

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Profile":
        return cls(
            id=str(row.get("id") or ""),
            first_name=row.get("first_name") or "",
            last_name=row.get("last_name") or "",
            phone=row.get("phone") or "",
        )

    @property
    def display_name(self) -> str:
        if self.first_name:
            return f"{self.first_name} {self.last_name}".strip()
        return "Not set"
