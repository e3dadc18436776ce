from __future__ import annotations

from dataclasses import dataclass

from rea_api.domain.contracts import SubmissionRepository, TransactionGateway


@dataclass(frozen=True)
class ApiDeps:
    repository: SubmissionRepository
    transactions: TransactionGateway
