from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class SubmissionRecord:
    """Stored registered email address submission.

    Only the user-supplied fields are known before the workflow runs; the
    rest is filled in by the store (id) and by metadata stamping.
    """

    registered_email_address: str | None
    accept_appropriate_email_address_statement: bool = False
    id: str | None = None
    transaction_id: str | None = None
    links: dict[str, str] = field(default_factory=dict)
    etag: str | None = None
    created_at: datetime | None = None
    created_by_user_id: str | None = None
    http_request_id: str | None = None


@dataclass(frozen=True)
class TransactionResource:
    kind: str
    links: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Transaction:
    id: str
    company_number: str | None = None
    status: str | None = None
    resources: dict[str, TransactionResource] = field(default_factory=dict)


@dataclass(frozen=True)
class ValidationErrorItem:
    error: str
    location: str
    location_type: str = "json-path"
    type: str = "ch:validation"


@dataclass(frozen=True)
class ValidationStatus:
    is_valid: bool
    errors: tuple[ValidationErrorItem, ...] = ()


@dataclass(frozen=True)
class FilingItem:
    kind: str
    description: str
    submission_id: str
    data: dict[str, object]
