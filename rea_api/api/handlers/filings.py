from __future__ import annotations

from rea_api.api.handlers.deps import ApiDeps
from rea_api.api.schemas import FilingResponse
from rea_api.domain.models import Transaction
from rea_api.domain.use_cases.registered_email_address import build_filings

COMPONENT_ID = "api.get_filings"


async def get_filings_handler(deps: ApiDeps, *, transaction: Transaction, request_id: str) -> list[FilingResponse]:
    items = await build_filings(transaction=transaction, request_id=request_id, repository=deps.repository)
    return [
        FilingResponse(
            kind=item.kind,
            description=item.description,
            submission_id=item.submission_id,
            data=dict(item.data),
        )
        for item in items
    ]
