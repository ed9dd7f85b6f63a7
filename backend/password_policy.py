# backend/password_policy.py
import re
from typing import Optional, Tuple

PASSWORD_MIN_LEN = 8

_RX_LOWER = re.compile(r"[a-z]")
_RX_UPPER = re.compile(r"[A-Z]")
_RX_DIGIT = re.compile(r"\d")

REQUIREMENT_LABELS = {
    "min_len": f"At least {PASSWORD_MIN_LEN} characters",
    "lower": "Contains a lowercase letter (a-z)",
    "upper": "Contains an uppercase letter (A-Z)",
    "digit": "Contains a number (0-9)",
}

_MISSING_PHRASES = {
    "min_len": f"at least {PASSWORD_MIN_LEN} characters",
    "lower": "a lowercase letter",
    "upper": "an uppercase letter",
    "digit": "a number",
}


def password_requirements(password: str) -> dict:
    pw = password or ""
    return {
        "min_len": len(pw) >= PASSWORD_MIN_LEN,
        "lower": bool(_RX_LOWER.search(pw)),
        "upper": bool(_RX_UPPER.search(pw)),
        "digit": bool(_RX_DIGIT.search(pw)),
    }


def strength_label(score: int) -> str:
    if score < 35:
        return "Weak"
    if score < 60:
        return "Fair"
    if score < 80:
        return "Good"
    return "Strong"


def password_strength(password: str) -> Tuple[int, str]:
    """
    Returns (score_0_to_100, label).
    Heuristic meter: 25 for length, 15 per character class, up to 15 bonus
    for length beyond the minimum, 15 for any symbol.
    """
    pw = password or ""
    req = password_requirements(pw)

    score = 0
    if req["min_len"]:
        score += 25
    for k in ("lower", "upper", "digit"):
        if req[k]:
            score += 15
    if re.search(r"[^A-Za-z0-9]", pw):
        score += 15
    score += min(15, max(0, len(pw) - PASSWORD_MIN_LEN))

    # Short passwords never rate above Weak
    if not req["min_len"]:
        score = min(score, 34)

    score = max(0, min(100, score))
    return score, strength_label(score)


def validate_password(password: str) -> Optional[str]:
    """
    Returns error string if invalid, else None.
    """
    req = password_requirements(password)
    missing = [_MISSING_PHRASES[k] for k, ok in req.items() if not ok]
    if not missing:
        return None
    return "Password must contain " + ", ".join(missing) + "."
