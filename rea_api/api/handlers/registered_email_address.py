from __future__ import annotations

from dataclasses import dataclass

from rea_api.api.handlers.deps import ApiDeps
from rea_api.api.schemas import (
    RegisteredEmailAddressRequest,
    RegisteredEmailAddressResponse,
    RegisteredEmailAddressValueResponse,
)
from rea_api.domain.dto import CreateSubmissionCommand, RegisteredEmailAddressInput, RegisteredEmailAddressOutput
from rea_api.domain.error_taxonomy import ErrorCode
from rea_api.domain.models import Transaction
from rea_api.domain.use_cases.registered_email_address import (
    create_registered_email_address,
    get_registered_email_address,
)

COMPONENT_ID_CREATE = "api.create_registered_email_address"
COMPONENT_ID_GET = "api.get_registered_email_address"


@dataclass(frozen=True)
class CreateHandlerOutcome:
    response: RegisteredEmailAddressResponse | None = None
    error_code: ErrorCode | None = None
    detail: str = ""


def _to_response_model(output: RegisteredEmailAddressOutput) -> RegisteredEmailAddressResponse:
    return RegisteredEmailAddressResponse(
        id=output.id or "",
        registered_email_address=output.registered_email_address or "",
        accept_appropriate_email_address_statement=output.accept_appropriate_email_address_statement,
        links=dict(output.links),
        etag=output.etag,
        created_at=output.created_at,
        created_by_user_id=output.created_by_user_id,
    )


async def create_registered_email_address_handler(
    deps: ApiDeps,
    *,
    transaction: Transaction,
    request: RegisteredEmailAddressRequest,
    request_id: str,
    user_id: str,
) -> CreateHandlerOutcome:
    result = await create_registered_email_address(
        CreateSubmissionCommand(
            transaction=transaction,
            payload=RegisteredEmailAddressInput(
                registered_email_address=request.registered_email_address,
                accept_appropriate_email_address_statement=request.accept_appropriate_email_address_statement,
            ),
            request_id=request_id,
            user_id=user_id,
        ),
        repository=deps.repository,
        transactions=deps.transactions,
    )
    if result.submission is None:
        return CreateHandlerOutcome(error_code=result.error_code or "internal_error", detail=result.detail)
    return CreateHandlerOutcome(response=_to_response_model(result.submission))


async def get_registered_email_address_handler(
    deps: ApiDeps,
    *,
    transaction_id: str,
    request_id: str,
) -> RegisteredEmailAddressValueResponse:
    email = await get_registered_email_address(
        transaction_id=transaction_id,
        request_id=request_id,
        repository=deps.repository,
    )
    return RegisteredEmailAddressValueResponse(registered_email_address=email)
