"""Contact form validation."""

import re
from typing import Dict

from shopper_site.models.contact import ContactSubmission

# Field name used for the hidden honeypot input
HONEYPOT_FIELD = "company"

NAME_MIN, NAME_MAX = 2, 80
MESSAGE_MIN, MESSAGE_MAX = 10, 2000

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]{2,}$")


def validate_contact(submission: ContactSubmission) -> Dict[str, str]:
    """Return a mapping of field name → error code; empty when the submission is valid."""
    errors: Dict[str, str] = {}
    name = submission.name.strip()
    email = submission.email.strip()
    message = submission.message.strip()

    if submission.company.strip():
        errors[HONEYPOT_FIELD] = "bot_detected"
    if not NAME_MIN <= len(name) <= NAME_MAX:
        errors["name"] = "name_length"
    if not _EMAIL_RE.match(email):
        errors["email"] = "email_invalid"
    if not MESSAGE_MIN <= len(message) <= MESSAGE_MAX:
        errors["message"] = "message_length"
    return errors


def public_errors(errors: Dict[str, str]) -> Dict[str, str]:
    """Field errors safe to show the client (the honeypot is never disclosed)."""
    return {field: code for field, code in errors.items() if field != HONEYPOT_FIELD}
