import base64

from ubicair import config
from ubicair.models import UserProfile
from ubicair.validation import (
    photo_data_uri,
    profile_changes,
    validate_login,
    validate_photo,
    validate_profile,
    validate_signup,
)


def test_login_requires_both_fields():
    assert validate_login("", "") == {
        "email": "Email is required",
        "password": "Password is required",
    }
    assert validate_login("ana@example.com", "x") == {}


def test_signup_valid():
    assert validate_signup("Ana", "ana@example.com", "secret1", "secret1") == {}


def test_signup_collects_every_error():
    errors = validate_signup(" ", "not-an-email", "abc", "abd")
    assert errors == {
        "name": "Name is required",
        "email": "Invalid email",
        "password": "Password must be at least 6 characters",
        "confirm_password": "Passwords do not match",
    }


def test_signup_password_boundary():
    assert "password" in validate_signup("Ana", "a@b.co", "12345", "12345")
    assert validate_signup("Ana", "a@b.co", "123456", "123456") == {}


def test_profile_ignores_password_unless_changing():
    assert validate_profile("Ana", "ana@example.com") == {}
    assert validate_profile("Ana", "ana@example.com", False, "x", "y") == {}


def test_profile_password_change_checked():
    errors = validate_profile("Ana", "ana@example.com", True, "abc", "abc")
    assert errors == {"new_password": "Password must be at least 6 characters"}

    errors = validate_profile("Ana", "ana@example.com", True, "secret1", "secret2")
    assert errors == {"confirm_password": "Passwords do not match"}


def test_profile_email_required():
    assert validate_profile("Ana", "") == {"email": "Email is required"}


def test_photo_too_large():
    errors = validate_photo(config.PHOTO_MAX_BYTES + 1, "image/png")
    assert errors == {"photo": "The image cannot exceed 5MB"}


def test_photo_must_be_image():
    assert validate_photo(1024, "application/pdf") == {"photo": "The file must be an image"}
    assert validate_photo(1024, None) == {"photo": "The file must be an image"}


def test_photo_ok_at_limit():
    assert validate_photo(config.PHOTO_MAX_BYTES, "image/jpeg") == {}


def test_photo_data_uri():
    uri = photo_data_uri(b"\x89PNG", "image/png")
    assert uri == "data:image/png;base64," + base64.b64encode(b"\x89PNG").decode()


def test_profile_changes_only_sends_differences():
    current = UserProfile(name="Ana", email="ana@example.com")
    assert profile_changes(current, "Ana", "ana@example.com") == {}
    assert profile_changes(current, "Ana María", "ana@example.com") == {"nombre": "Ana María"}
    assert profile_changes(current, "Ana", "new@example.com", photo="data:x", new_password="secret1") == {
        "email": "new@example.com",
        "foto": "data:x",
        "password": "secret1",
    }
