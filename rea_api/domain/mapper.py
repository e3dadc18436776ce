from __future__ import annotations

from rea_api.domain.dto import RegisteredEmailAddressInput, RegisteredEmailAddressOutput
from rea_api.domain.models import SubmissionRecord


def to_record(payload: RegisteredEmailAddressInput) -> SubmissionRecord:
    return SubmissionRecord(
        registered_email_address=payload.registered_email_address,
        accept_appropriate_email_address_statement=payload.accept_appropriate_email_address_statement,
    )


def to_response(record: SubmissionRecord) -> RegisteredEmailAddressOutput:
    return RegisteredEmailAddressOutput(
        id=record.id,
        registered_email_address=record.registered_email_address,
        accept_appropriate_email_address_statement=record.accept_appropriate_email_address_statement,
        links=dict(record.links),
        etag=record.etag,
        created_at=record.created_at,
        created_by_user_id=record.created_by_user_id,
    )
