# backend/formatting.py
from datetime import datetime
from typing import Any

MISSING = "—"


def fmt_money(v: Any) -> str:
    try:
        if v is None or v == "":
            return MISSING
        amount = float(v)
    except (TypeError, ValueError):
        return str(v)
    if amount.is_integer():
        return f"${amount:,.0f}"
    return f"${amount:,.2f}"


def fmt_date(v: Any) -> str:
    if not v:
        return MISSING
    if isinstance(v, datetime):
        return v.date().isoformat()
    text = str(v)
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        # Unparseable timestamps still show their date part
        return text[:10]


def fmt_term(v: Any) -> str:
    if v is None or v == "":
        return MISSING
    months = int(v) if float(v).is_integer() else float(v)
    return f"{months} month" if months == 1 else f"{months} months"


def fmt_rate(v: Any) -> str:
    if v is None or v == "":
        return MISSING
    rate = float(v)
    return f"{rate:g}%"
