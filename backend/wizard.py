# backend/wizard.py
"""
Multi-step application wizard.

Role selection comes first, then three steps: terms, personal information,
payment. The wizard only moves forward when the current step validates and
only submits from the last step. It holds no UI; the Streamlit page keeps one
instance in session state and renders from it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from backend.applications import ApplicationsRepository, submit_application
from backend.cards import SavedCardsRepository
from backend.error_handler import log_error
from backend.models import ROLES, Application
from backend.validation import errors_by_field, validate_step

INITIAL_VALUES: Dict[str, Any] = {
    "loan_amount": None,
    "loan_term": None,
    "interest_rate": None,
    "purpose": "",
    "first_name": "",
    "last_name": "",
    "email": "",
    "phone": "",
    "address": "",
    "saved_card": "",
    "card_number": "",
    "card_name": "",
    "expiry_date": "",
    "cvv": "",
    "save_card": False,
}

# Fields that never outlive a submission or a reset
_SECRET_FIELDS = ("card_number", "cvv")


def get_steps(role: Optional[str]) -> List[str]:
    return [
        "Investment Terms" if role == "lender" else "Loan Terms",
        "Personal Information",
        "Payment Details",
    ]


def get_title(role: Optional[str]) -> str:
    return "Investment Application" if role == "lender" else "Loan Application"


@dataclass
class LoanWizard:
    role: Optional[str] = None
    current_step: int = 0
    values: Dict[str, Any] = field(default_factory=lambda: dict(INITIAL_VALUES))
    errors: Dict[str, str] = field(default_factory=dict)
    submission_error: Optional[str] = None

    @property
    def steps(self) -> List[str]:
        return get_steps(self.role)

    @property
    def title(self) -> str:
        return get_title(self.role)

    @property
    def is_last_step(self) -> bool:
        return self.current_step == len(self.steps) - 1

    def select_role(self, role: str) -> None:
        if role not in ROLES:
            raise ValueError(f"Unknown role: {role!r}")
        self.role = role
        self.current_step = 0
        self.errors = {}
        self.submission_error = None

    def update(self, values: Mapping[str, Any]) -> None:
        self.values.update(values)

    def validate(self) -> Dict[str, str]:
        if self.role is None:
            raise RuntimeError("Select a role before filling in the application.")
        self.errors = validate_step(self.role, self.current_step, self.values)
        return self.errors

    def next(self) -> bool:
        """
        Validate the current step and advance when it passes.
        Returns True when the step validated. On the last step nothing
        advances; a True result means the application is ready to submit.
        """
        if self.validate():
            return False
        if not self.is_last_step:
            self.current_step += 1
        return True

    def previous(self) -> None:
        if self.current_step > 0:
            self.current_step -= 1
        self.errors = {}

    def reset(self) -> None:
        self.role = None
        self.current_step = 0
        self.values = dict(INITIAL_VALUES)
        self.errors = {}
        self.submission_error = None

    def submit(self, applications: ApplicationsRepository, cards: SavedCardsRepository) -> Optional[Application]:
        """
        Submit from the last step. Returns the stored application, or None
        when the step is invalid or the backend call failed; in the latter
        case submission_error holds the message to show.
        """
        if not self.is_last_step:
            raise RuntimeError("The application can only be submitted from the last step.")
        if not self.next():
            return None

        self.submission_error = None
        try:
            app = submit_application(applications, cards, self.role, self.values)
        except ValidationError as exc:
            # An earlier step was edited into an invalid state; go back to it
            self.errors = errors_by_field(exc)
            for step in range(len(self.steps)):
                step_errors = validate_step(self.role, step, self.values)
                if step_errors:
                    self.current_step = step
                    self.errors = step_errors
                    break
            self.submission_error = "Please review the highlighted fields."
            return None
        except Exception as e:
            self.submission_error = log_error("submit application", e, {"role": self.role})
            return None

        for k in _SECRET_FIELDS:
            self.values[k] = ""
        return app
