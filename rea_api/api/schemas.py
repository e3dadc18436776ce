from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from rea_api.domain.validation import BLANK_EMAIL_MESSAGE, INVALID_EMAIL_MESSAGE, is_valid_email


SUBMISSION_ID_PATTERN = r"^rea_[0-9A-HJKMNP-TV-Z]{26}$"


class ErrorResponse(BaseModel):
    detail: str


class HealthResponse(BaseModel):
    status: str
    service: str


class RegisteredEmailAddressRequest(BaseModel):
    registered_email_address: str
    accept_appropriate_email_address_statement: bool = False

    @field_validator("registered_email_address")
    @classmethod
    def _check_email(cls, value: str) -> str:
        if not value.strip():
            raise ValueError(BLANK_EMAIL_MESSAGE)
        if not is_valid_email(value):
            raise ValueError(INVALID_EMAIL_MESSAGE)
        return value


class RegisteredEmailAddressResponse(BaseModel):
    id: str = Field(pattern=SUBMISSION_ID_PATTERN)
    registered_email_address: str
    accept_appropriate_email_address_statement: bool
    links: dict[str, str]
    etag: str | None = None
    created_at: datetime | None = None
    created_by_user_id: str | None = None


class RegisteredEmailAddressValueResponse(BaseModel):
    registered_email_address: str


class ValidationErrorResponse(BaseModel):
    error: str
    location: str
    location_type: str
    type: str


class ValidationStatusResponse(BaseModel):
    is_valid: bool
    errors: list[ValidationErrorResponse]


class FilingResponse(BaseModel):
    kind: str
    description: str
    submission_id: str
    data: dict[str, object]
