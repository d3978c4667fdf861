"""Input validation shared by the auth and task services.

Every check raises ValidationError with a message naming the field and the
rule it broke.
"""

import re
from datetime import datetime, timezone

from taskboard.errors import ValidationError
from taskboard.models.task_model import PRIORITIES, STATUSES
from taskboard.utils.passwords import MAX_PASSWORD_BYTES

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


def require_fields(**fields):
    missing = [name for name, value in fields.items() if value is None or (isinstance(value, str) and not value.strip())]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def _string(name, value):
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string")
    return value


def normalize_email(email):
    email = _string("email", email).strip().lower()
    if not EMAIL_RE.match(email):
        raise ValidationError("email must be a valid email address")
    return email


def validate_password(password, min_length):
    _string("password", password)
    if len(password) < min_length:
        raise ValidationError(f"password must be at least {min_length} characters")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return password


def validate_name(name):
    return _string("name", name).strip()


def validate_title(title):
    if title is None:
        raise ValidationError("title is required")
    title = _string("title", title).strip()
    if not title:
        raise ValidationError("title is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"title must be at most {TITLE_MAX_LENGTH} characters")
    return title


def validate_description(description):
    """Trimmed description, or None when empty."""
    if description is None:
        return None
    description = _string("description", description).strip()
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(f"description must be at most {DESCRIPTION_MAX_LENGTH} characters")
    return description or None


def validate_priority(priority):
    if priority not in PRIORITIES:
        raise ValidationError(f"priority must be one of: {', '.join(PRIORITIES)}")
    return priority


def validate_status(status):
    if status not in STATUSES:
        raise ValidationError(f"status must be one of: {', '.join(STATUSES)}")
    return status


def parse_due_date(value):
    """Parse an ISO 8601 date or timestamp into a naive UTC datetime."""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError("dueDate must be an ISO 8601 date string")
    try:
        due = datetime.fromisoformat(value.strip())
        if due.tzinfo is not None:
            due = due.astimezone(timezone.utc).replace(tzinfo=None)
    except (ValueError, OverflowError):
        raise ValidationError("dueDate must be an ISO 8601 date string")
    return due
