# tests/test_password_policy.py
from backend.password_policy import password_requirements, password_strength, validate_password


def test_requirements():
    assert password_requirements("abc") == {"min_len": False, "lower": True, "upper": False, "digit": False}
    assert all(password_requirements("Abcdefg1").values())


def test_validate_password_names_every_gap():
    assert validate_password("Abcdefg1") is None
    assert validate_password("abc") == (
        "Password must contain at least 8 characters, an uppercase letter, a number."
    )
    assert validate_password(None) is not None


def test_strength():
    assert password_strength("") == (0, "Weak")
    assert password_strength("Abc1!")[1] == "Weak"
    assert password_strength("Abcdefg1") == (70, "Good")
    assert password_strength("Abcdefgh1!xyz") == (90, "Strong")
