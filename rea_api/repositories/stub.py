from __future__ import annotations

from dataclasses import dataclass, field, replace

from rea_api.domain.errors import DuplicateSubmissionError, SubmissionStoreError
from rea_api.domain.ids import new_submission_id
from rea_api.domain.models import SubmissionRecord


@dataclass
class InMemorySubmissionRepository:
    """Non-network record store with the same uniqueness rules as Postgres."""

    rows: dict[str, SubmissionRecord] = field(default_factory=dict)
    by_transaction: dict[str, str] = field(default_factory=dict)
    inserts: int = 0
    saves: int = 0

    async def insert(self, record: SubmissionRecord) -> SubmissionRecord:
        if record.transaction_id is None:
            raise SubmissionStoreError("submission must reference a transaction")
        if record.transaction_id in self.by_transaction:
            raise DuplicateSubmissionError(
                f"Transaction id: {record.transaction_id} has an existing Registered Email Address submission"
            )
        submission_id = new_submission_id()
        created = replace(record, id=submission_id)
        self.rows[submission_id] = created
        self.by_transaction[record.transaction_id] = submission_id
        self.inserts += 1
        return created

    async def save(self, record: SubmissionRecord) -> SubmissionRecord:
        if record.id is None or record.id not in self.rows:
            raise SubmissionStoreError(f"submission is not found: {record.id}")
        if record.transaction_id != self.rows[record.id].transaction_id:
            raise SubmissionStoreError(f"submission transaction id is immutable: {record.id}")
        self.rows[record.id] = record
        self.saves += 1
        return record

    async def find_by_transaction_id(self, transaction_id: str) -> SubmissionRecord | None:
        submission_id = self.by_transaction.get(transaction_id)
        if submission_id is None:
            return None
        return self.rows[submission_id]

    def count_for_transaction(self, transaction_id: str) -> int:
        return sum(1 for row in self.rows.values() if row.transaction_id == transaction_id)
