from __future__ import annotations

from typing import Protocol, runtime_checkable

from rea_api.domain.models import SubmissionRecord, Transaction, TransactionResource


@runtime_checkable
class SubmissionRepository(Protocol):
    """Record store for registered email address submissions.

    `insert` assigns the id and must reject a second record for the same
    transaction id with DuplicateSubmissionError. Infrastructure failures
    surface as SubmissionStoreError.
    """

    async def insert(self, record: SubmissionRecord) -> SubmissionRecord: ...

    async def save(self, record: SubmissionRecord) -> SubmissionRecord: ...

    async def find_by_transaction_id(self, transaction_id: str) -> SubmissionRecord | None: ...


@runtime_checkable
class TransactionGateway(Protocol):
    """Narrow client for the external transactions service."""

    async def get_transaction(self, *, transaction_id: str, request_id: str) -> Transaction: ...

    async def read_resources(
        self,
        *,
        transaction: Transaction,
        request_id: str,
    ) -> dict[str, TransactionResource]: ...

    async def update_resources(
        self,
        *,
        transaction: Transaction,
        resources: dict[str, TransactionResource],
        request_id: str,
    ) -> None: ...
