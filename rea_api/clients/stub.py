from __future__ import annotations

from dataclasses import dataclass, field, replace

from rea_api.domain.errors import TransactionGatewayError, TransactionNotFoundError
from rea_api.domain.models import Transaction, TransactionResource


@dataclass
class StubTransactionGateway:
    """In-memory transactions service.

    Unknown transaction ids are created on first read as open transactions,
    which keeps local runs usable without the real service.
    """

    transactions: dict[str, Transaction] = field(default_factory=dict)
    updates: list[tuple[str, dict[str, TransactionResource]]] = field(default_factory=list)
    auto_create: bool = True
    fail_updates: bool = False

    async def get_transaction(self, *, transaction_id: str, request_id: str) -> Transaction:
        del request_id
        transaction = self.transactions.get(transaction_id)
        if transaction is None:
            if not self.auto_create:
                raise TransactionNotFoundError(f"transaction is not found: {transaction_id}")
            transaction = Transaction(id=transaction_id, status="open")
            self.transactions[transaction_id] = transaction
        return transaction

    async def read_resources(
        self,
        *,
        transaction: Transaction,
        request_id: str,
    ) -> dict[str, TransactionResource]:
        current = await self.get_transaction(transaction_id=transaction.id, request_id=request_id)
        return dict(current.resources)

    async def update_resources(
        self,
        *,
        transaction: Transaction,
        resources: dict[str, TransactionResource],
        request_id: str,
    ) -> None:
        if self.fail_updates:
            raise TransactionGatewayError(f"failed to update transaction: {transaction.id}")
        current = await self.get_transaction(transaction_id=transaction.id, request_id=request_id)
        self.transactions[transaction.id] = replace(current, resources=dict(resources))
        self.updates.append((transaction.id, dict(resources)))
