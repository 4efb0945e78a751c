import pytest

from app.core.security import get_password_hash, password_policy_errors, verify_password


def test_hash_roundtrip():
    hashed = get_password_hash("secret1!")
    assert hashed != "secret1!"
    assert verify_password("secret1!", hashed)
    assert not verify_password("secret2", hashed)


def test_verify_against_garbage_hash_is_false():
    assert verify_password("secret1!", "not-a-hash") is False


@pytest.mark.parametrize(
    "password, expected",
    [
        ("secret1!", []),
        # Non-ASCII letters count as non-alphanumeric.
        ("secret1é", []),
        ("abc1!", ["Passwords must be at least 6 characters."]),
        ("secret1", ["Passwords must have at least one non alphanumeric character."]),
        ("abcdefg!", ["Passwords must have at least one digit ('0'-'9')."]),
        ("ABCDEF1!", ["Passwords must have at least one lowercase ('a'-'z')."]),
        (
            "AB",
            [
                "Passwords must be at least 6 characters.",
                "Passwords must have at least one non alphanumeric character.",
                "Passwords must have at least one digit ('0'-'9').",
                "Passwords must have at least one lowercase ('a'-'z').",
            ],
        ),
    ],
)
def test_password_policy(password, expected):
    assert password_policy_errors(password) == expected
