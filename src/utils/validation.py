"""Data validation utilities."""
import re
from typing import Dict, Tuple

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED_FIELDS = ("name", "email", "contact", "event")


def is_valid_email(email: str) -> bool:
    """
    Check that an email has the local@domain.tld shape.

    Args:
        email: Email address to check

    Returns:
        True if there is a non-whitespace local part, a single '@'
        and a domain containing a dot
    """
    if not isinstance(email, str):
        return False
    return EMAIL_PATTERN.match(email) is not None


def validate_email(email: str) -> Tuple[bool, str]:
    """
    Validate participant email.

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (True, "") if valid
        - (False, "Please enter a valid email address.") otherwise
    """
    if not is_valid_email(email):
        return False, "Please enter a valid email address."
    return True, ""


def validate_required_fields(fields: Dict[str, str]) -> Tuple[bool, str]:
    """
    Validate that every required registration field is filled in.

    Args:
        fields: Form values keyed by field name

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (True, "") if name, email, contact and event are non-empty
        - (False, "Please fill in all required fields.") otherwise
    """
    for field_name in REQUIRED_FIELDS:
        value = fields.get(field_name)
        if not value or not str(value).strip():
            return False, "Please fill in all required fields."
    return True, ""


def normalize_email(email: str) -> str:
    """
    Normalize email for duplicate comparison.

    Behavior:
        - Trims leading/trailing whitespace
        - Converts to lowercase
        - Example: " Alice@Example.COM " → "alice@example.com"
    """
    return email.strip().lower()
