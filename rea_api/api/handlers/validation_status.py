from __future__ import annotations

from rea_api.api.handlers.deps import ApiDeps
from rea_api.api.schemas import ValidationErrorResponse, ValidationStatusResponse
from rea_api.domain.use_cases.registered_email_address import get_validation_status

COMPONENT_ID = "api.get_validation_status"


async def get_validation_status_handler(
    deps: ApiDeps,
    *,
    transaction_id: str,
    request_id: str,
) -> ValidationStatusResponse:
    status = await get_validation_status(
        transaction_id=transaction_id,
        request_id=request_id,
        repository=deps.repository,
    )
    return ValidationStatusResponse(
        is_valid=status.is_valid,
        errors=[
            ValidationErrorResponse(
                error=item.error,
                location=item.location,
                location_type=item.location_type,
                type=item.type,
            )
            for item in status.errors
        ],
    )
