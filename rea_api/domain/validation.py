from __future__ import annotations

import re

from rea_api.domain.constants import EMAIL_PATTERN
from rea_api.domain.models import SubmissionRecord, ValidationErrorItem, ValidationStatus

EMAIL_LOCATION = "$.registered_email_address"
STATEMENT_LOCATION = "$.accept_appropriate_email_address_statement"

BLANK_EMAIL_MESSAGE = "registered_email_address must not be blank"
INVALID_EMAIL_MESSAGE = "registered_email_address must have a valid email format"
STATEMENT_NOT_ACCEPTED_MESSAGE = "accept_appropriate_email_address_statement must be true"

_EMAIL_RE = re.compile(EMAIL_PATTERN)


def is_valid_email(value: str) -> bool:
    return _EMAIL_RE.fullmatch(value) is not None


def validate_submission(record: SubmissionRecord) -> ValidationStatus:
    """Project a stored submission onto its validation status.

    Pure and total: every record yields a status, nothing is raised.
    """
    errors: list[ValidationErrorItem] = []

    email = record.registered_email_address
    if not isinstance(email, str) or not email.strip():
        errors.append(ValidationErrorItem(error=BLANK_EMAIL_MESSAGE, location=EMAIL_LOCATION))
    elif not is_valid_email(email):
        errors.append(ValidationErrorItem(error=INVALID_EMAIL_MESSAGE, location=EMAIL_LOCATION))

    if record.accept_appropriate_email_address_statement is not True:
        errors.append(ValidationErrorItem(error=STATEMENT_NOT_ACCEPTED_MESSAGE, location=STATEMENT_LOCATION))

    return ValidationStatus(is_valid=not errors, errors=tuple(errors))
