"""Client-side checks for the signup and profile forms.

Each validator returns a dict of field -> message; an empty dict means the
form can be submitted.
"""

import base64
import re

from ubicair import config

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")


def _check_email(email, errors):
    if not (email or "").strip():
        errors["email"] = "Email is required"
    elif not EMAIL_RE.search(email):
        errors["email"] = "Invalid email"


def _check_password(password, confirm, errors, field="password"):
    if not password:
        errors[field] = "Password is required"
    elif len(password) < config.PASSWORD_MIN_LENGTH:
        errors[field] = f"Password must be at least {config.PASSWORD_MIN_LENGTH} characters"
    if password != confirm:
        errors["confirm_password"] = "Passwords do not match"


def validate_login(email, password):
    errors = {}
    if not (email or "").strip():
        errors["email"] = "Email is required"
    if not password:
        errors["password"] = "Password is required"
    return errors


def validate_signup(name, email, password, confirm_password):
    errors = {}
    if not (name or "").strip():
        errors["name"] = "Name is required"
    _check_email(email, errors)
    _check_password(password, confirm_password, errors)
    return errors


def validate_profile(name, email, change_password=False, new_password="", confirm_password=""):
    errors = {}
    if not (name or "").strip():
        errors["name"] = "Name is required"
    _check_email(email, errors)
    if change_password:
        _check_password(new_password, confirm_password, errors, field="new_password")
    return errors


def validate_photo(size, mime_type):
    """Profile photos must be images no larger than 5 MB."""
    errors = {}
    if size > config.PHOTO_MAX_BYTES:
        errors["photo"] = "The image cannot exceed 5MB"
    elif not (mime_type or "").startswith("image/"):
        errors["photo"] = "The file must be an image"
    return errors


def photo_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def profile_changes(current, name, email, photo=None, new_password=None):
    """Only the fields that differ from ``current`` go to the backend."""
    changes = {}
    if name != current.name:
        changes["nombre"] = name
    if email != current.email:
        changes["email"] = email
    if photo:
        changes["foto"] = photo
    if new_password:
        changes["password"] = new_password
    return changes
