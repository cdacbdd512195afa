"""
Validation of incoming form submissions.

Only two rules exist: every required field must be a non‑blank string,
and the email must look like ``local@domain.tld``.  Fields are checked
in a fixed order and the first failure is reported, so the caller
always receives a single message naming one field.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Tuple

from clinic_api.app.core.errors import ValidationFailure

APPOINTMENT = "appointment"
CONTACT = "contact"

REQUIRED_FIELDS: Dict[str, Tuple[str, ...]] = {
    APPOINTMENT: ("name", "email", "phone", "doctor", "date", "time"),
    CONTACT: ("name", "email", "message"),
}

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None


def validate(kind: str, payload: Any) -> None:
    """Check ``payload`` against the rules of record ``kind``.

    Raises ``ValidationFailure`` with the first failing rule, e.g.
    ``"phone is required"`` or ``"Invalid email format"``.  Raises
    ``ValueError`` for an unknown ``kind``.  A missing body (``None``)
    is checked as an empty object, so the first required field is
    reported.  The email is matched as sent; surrounding whitespace
    makes it invalid even though stored emails are trimmed.
    """
    try:
        required = REQUIRED_FIELDS[kind]
    except KeyError:
        raise ValueError(f"Unknown record kind: {kind!r}") from None

    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationFailure("Request body must be a JSON object")

    for field_name in required:
        value = payload.get(field_name)
        if value is None:
            raise ValidationFailure(f"{field_name} is required")
        if not isinstance(value, str):
            raise ValidationFailure(f"{field_name} must be a string")
        if not value.strip():
            raise ValidationFailure(f"{field_name} is required")

    if not is_valid_email(payload["email"]):
        raise ValidationFailure("Invalid email format")
