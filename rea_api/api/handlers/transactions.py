from __future__ import annotations

from rea_api.api.handlers.deps import ApiDeps
from rea_api.domain.models import Transaction

COMPONENT_ID = "api.resolve_transaction"


async def resolve_transaction_handler(deps: ApiDeps, *, transaction_id: str, request_id: str) -> Transaction:
    """Load the transaction the request is scoped to.

    TransactionNotFoundError and TransactionGatewayError propagate to the
    route, which maps them to 404 and 502.
    """
    return await deps.transactions.get_transaction(transaction_id=transaction_id, request_id=request_id)
