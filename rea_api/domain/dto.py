from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from rea_api.domain.error_taxonomy import ErrorCode
from rea_api.domain.models import Transaction


@dataclass(frozen=True)
class RegisteredEmailAddressInput:
    registered_email_address: str
    accept_appropriate_email_address_statement: bool = False


@dataclass(frozen=True)
class RegisteredEmailAddressOutput:
    id: str | None
    registered_email_address: str | None
    accept_appropriate_email_address_statement: bool
    links: dict[str, str] = field(default_factory=dict)
    etag: str | None = None
    created_at: datetime | None = None
    created_by_user_id: str | None = None


@dataclass(frozen=True)
class CreateSubmissionCommand:
    transaction: Transaction
    payload: RegisteredEmailAddressInput
    request_id: str
    user_id: str


@dataclass(frozen=True)
class CreateSubmissionResult:
    submission: RegisteredEmailAddressOutput | None = None
    error_code: ErrorCode | None = None
    detail: str = ""

    @property
    def success(self) -> bool:
        return self.error_code is None
