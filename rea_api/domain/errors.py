from __future__ import annotations


class DomainError(Exception):
    pass


class DomainValidationError(DomainError):
    pass


class DuplicateSubmissionError(DomainError):
    pass


class SubmissionNotFoundError(DomainError):
    pass


class DomainDependencyError(DomainError):
    pass


class SubmissionStoreError(DomainDependencyError):
    pass


class TransactionGatewayError(DomainDependencyError):
    pass


class TransactionNotFoundError(TransactionGatewayError):
    pass
