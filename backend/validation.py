# backend/validation.py
"""
Per-step validation for the application wizard.

Each wizard step has a pydantic model. Form values arrive as the raw strings
and numbers Streamlit widgets produce; models coerce them and report one
human-readable message per field. The applicant's role (lender/borrower) is
passed as validation context because the terms rules depend on it.
"""
from __future__ import annotations

import math
import re
from typing import Any, Dict, Mapping, Optional, Type

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

MIN_INVESTMENT_AMOUNT = 5000
MIN_LOAN_AMOUNT = 1000
MIN_TERM_MONTHS = 6
MIN_RATE = 1
MAX_RATE = 30

_RX_CARD_NUMBER = re.compile(r"^\d{16}$")
_RX_EXPIRY = re.compile(r"^(\d{2})/(\d{2})$")
_RX_CVV = re.compile(r"^\d{3,4}$")


def _required() -> PydanticCustomError:
    return PydanticCustomError("required", "Required")


def _invalid(kind: str, message: str) -> PydanticCustomError:
    return PydanticCustomError(kind, message)


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


def _role(info: ValidationInfo) -> Optional[str]:
    return (info.context or {}).get("role")


class _StepModel(BaseModel):
    # validate_default so "Required" fires for fields the form never sent
    model_config = ConfigDict(validate_default=True, extra="ignore", str_strip_whitespace=True)


class TermsStep(_StepModel):
    loan_amount: Optional[float] = None
    loan_term: Optional[float] = None
    interest_rate: Optional[float] = None
    purpose: Optional[str] = None

    @field_validator("loan_amount", "loan_term", "interest_rate", mode="before")
    @classmethod
    def _coerce_number(cls, v: Any) -> Optional[float]:
        v = _blank_to_none(v)
        if v is None:
            return None
        if isinstance(v, bool):
            raise _invalid("number", "Must be a number")
        try:
            num = float(str(v).replace(",", "").lstrip("$"))
        except ValueError:
            raise _invalid("number", "Must be a number")
        if not math.isfinite(num):
            raise _invalid("number", "Must be a number")
        return num

    @field_validator("loan_amount")
    @classmethod
    def _check_amount(cls, v: Optional[float], info: ValidationInfo) -> float:
        if v is None:
            raise _required()
        if _role(info) == "lender":
            if v < MIN_INVESTMENT_AMOUNT:
                raise _invalid("min_amount", "Minimum investment amount is $5,000")
        elif v < MIN_LOAN_AMOUNT:
            raise _invalid("min_amount", "Minimum loan amount is $1,000")
        return v

    @field_validator("loan_term")
    @classmethod
    def _check_term(cls, v: Optional[float]) -> float:
        if v is None:
            raise _required()
        if v < MIN_TERM_MONTHS:
            raise _invalid("min_term", "Minimum term is 6 months")
        return v

    @field_validator("interest_rate")
    @classmethod
    def _check_rate(cls, v: Optional[float]) -> float:
        if v is None:
            raise _required()
        if v < MIN_RATE:
            raise _invalid("min_rate", "Minimum rate is 1%")
        if v > MAX_RATE:
            raise _invalid("max_rate", "Maximum rate is 30%")
        return v

    @field_validator("purpose")
    @classmethod
    def _check_purpose(cls, v: Optional[str], info: ValidationInfo) -> str:
        if _role(info) == "borrower" and not v:
            raise _required()
        return v or ""


class PersonalInfoStep(_StepModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @field_validator("first_name", "last_name", "phone", "address")
    @classmethod
    def _check_required(cls, v: Optional[str]) -> str:
        if not v:
            raise _required()
        return v

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: Optional[str]) -> str:
        if not v:
            raise _required()
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError:
            raise _invalid("email", "Invalid email")
        return v


class _CardFields(_StepModel):
    """
    Card details. Every card rule is skipped when a saved card was chosen;
    saved_card is declared first so its value is in info.data for the rest.
    """

    saved_card: Optional[str] = None
    card_number: Optional[str] = None
    card_name: Optional[str] = None
    expiry_date: Optional[str] = None
    cvv: Optional[str] = None

    @field_validator("card_number", mode="before")
    @classmethod
    def _strip_separators(cls, v: Any) -> Any:
        if isinstance(v, str):
            return re.sub(r"[\s-]", "", v)
        return v

    @field_validator("card_number")
    @classmethod
    def _check_card_number(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if info.data.get("saved_card"):
            return v
        if not v:
            raise _required()
        if not _RX_CARD_NUMBER.match(v):
            raise _invalid("card_number", "Invalid card number")
        return v

    @field_validator("card_name")
    @classmethod
    def _check_card_name(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if info.data.get("saved_card"):
            return v
        if not v:
            raise _required()
        return v

    @field_validator("expiry_date")
    @classmethod
    def _check_expiry(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if info.data.get("saved_card"):
            return v
        if not v:
            raise _required()
        m = _RX_EXPIRY.match(v)
        if not m or not 1 <= int(m.group(1)) <= 12:
            raise _invalid("expiry_date", "Invalid expiry date")
        return v

    @field_validator("cvv")
    @classmethod
    def _check_cvv(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if info.data.get("saved_card"):
            return v
        if not v:
            raise _required()
        if not _RX_CVV.match(v):
            raise _invalid("cvv", "Invalid CVV")
        return v


class PaymentStep(_CardFields):
    save_card: bool = False

    @field_validator("save_card", mode="before")
    @classmethod
    def _coerce_flag(cls, v: Any) -> Any:
        return False if v is None or v == "" else v


class NewCardForm(_CardFields):
    """Card entered on the payment methods screen; always a new card."""

    @field_validator("saved_card")
    @classmethod
    def _no_saved_card(cls, v: Optional[str]) -> None:
        return None


STEP_MODELS: tuple = (TermsStep, PersonalInfoStep, PaymentStep)


def errors_by_field(exc: ValidationError) -> Dict[str, str]:
    """First message per field, keyed by field name."""
    errors: Dict[str, str] = {}
    for err in exc.errors():
        loc = err.get("loc") or ()
        field = str(loc[0]) if loc else "__root__"
        errors.setdefault(field, err.get("msg", "Invalid value"))
    return errors


def step_model(step: int) -> Type[_StepModel]:
    if not 0 <= step < len(STEP_MODELS):
        raise ValueError(f"Unknown wizard step: {step}")
    return STEP_MODELS[step]


def parse_step(role: Optional[str], step: int, values: Mapping[str, Any]) -> _StepModel:
    """Validated, coerced model for one step. Raises pydantic.ValidationError."""
    return step_model(step).model_validate(dict(values), context={"role": role})


def validate_step(role: Optional[str], step: int, values: Mapping[str, Any]) -> Dict[str, str]:
    """Field errors for one step; an empty dict means the step is valid."""
    try:
        parse_step(role, step, values)
    except ValidationError as exc:
        return errors_by_field(exc)
    return {}


def validate_new_card(values: Mapping[str, Any]) -> Dict[str, str]:
    try:
        NewCardForm.model_validate(dict(values))
    except ValidationError as exc:
        return errors_by_field(exc)
    return {}
