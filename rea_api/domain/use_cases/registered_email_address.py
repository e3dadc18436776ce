from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime
import logging

from rea_api.domain.constants import (
    CLOSED_TRANSACTION_STATUSES,
    FILING_DESCRIPTION,
    FILING_KIND,
    LINK_RESOURCE,
    LINK_SELF,
    LINK_VALIDATION_STATUS,
    TRANSACTION_URI_PATTERN,
    VALIDATION_STATUS_URI_SUFFIX,
)
from rea_api.domain.contracts import SubmissionRepository, TransactionGateway
from rea_api.domain.dto import CreateSubmissionCommand, CreateSubmissionResult
from rea_api.domain.errors import (
    DomainValidationError,
    DuplicateSubmissionError,
    SubmissionNotFoundError,
    SubmissionStoreError,
    TransactionGatewayError,
)
from rea_api.domain.ids import new_etag
from rea_api.domain.mapper import to_record, to_response
from rea_api.domain.models import FilingItem, SubmissionRecord, Transaction, TransactionResource, ValidationStatus
from rea_api.domain.validation import validate_submission

COMPONENT_ID_CREATE = "domain.registered_email_address.create"
COMPONENT_ID_VALIDATION_STATUS = "domain.registered_email_address.validation_status"
COMPONENT_ID_GET = "domain.registered_email_address.get"
COMPONENT_ID_FILINGS = "domain.registered_email_address.filings"

logger = logging.getLogger("rea_api.workflow")


def submission_uri(*, transaction_id: str, submission_id: str) -> str:
    return TRANSACTION_URI_PATTERN.format(transaction_id=transaction_id, submission_id=submission_id)


def build_transaction_resource(uri: str) -> TransactionResource:
    return TransactionResource(
        kind=FILING_KIND,
        links={
            LINK_RESOURCE: uri,
            LINK_VALIDATION_STATUS: uri + VALIDATION_STATUS_URI_SUFFIX,
        },
    )


def has_existing_submission(resources: dict[str, TransactionResource]) -> bool:
    return any(resource.kind == FILING_KIND for resource in resources.values())


def _not_found_message(transaction_id: str) -> str:
    return f"Registered Email Address for TransactionId : {transaction_id} Not Found"


async def create_registered_email_address(
    cmd: CreateSubmissionCommand,
    *,
    repository: SubmissionRepository,
    transactions: TransactionGateway,
) -> CreateSubmissionResult:
    """Create the submission for a transaction and link it onto the transaction.

    Failures come back as `error_code` on the result; the caller maps each
    code to a transport outcome. Nothing is rolled back if the transaction
    update fails after the record was stored.
    """
    transaction_id = cmd.transaction.id
    log_extra = {"request_id": cmd.request_id, "transaction_id": transaction_id}
    logger.debug("create registered email address submission", extra=log_extra)

    try:
        resources = await transactions.read_resources(transaction=cmd.transaction, request_id=cmd.request_id)
        if has_existing_submission(resources):
            raise DuplicateSubmissionError(
                f"Transaction id: {transaction_id} has an existing Registered Email Address submission"
            )

        record = replace(to_record(cmd.payload), transaction_id=transaction_id, etag=new_etag())
        created = await repository.insert(record)
        if created.id is None:
            raise SubmissionStoreError("store did not assign a submission id")

        uri = submission_uri(transaction_id=transaction_id, submission_id=created.id)
        stored = await repository.save(
            replace(
                created,
                links={LINK_SELF: uri},
                created_at=datetime.now(UTC),
                http_request_id=cmd.request_id,
                created_by_user_id=cmd.user_id,
            )
        )

        merged = dict(resources)
        merged[uri] = build_transaction_resource(uri)
        await transactions.update_resources(
            transaction=cmd.transaction,
            resources=merged,
            request_id=cmd.request_id,
        )
    except DuplicateSubmissionError as exc:
        logger.info(str(exc), extra=log_extra)
        return CreateSubmissionResult(error_code="duplicate_submission", detail=str(exc))
    except SubmissionStoreError as exc:
        logger.error("submission store failure: %s", exc, extra=log_extra)
        return CreateSubmissionResult(error_code="store_unavailable", detail=str(exc))
    except TransactionGatewayError as exc:
        logger.error("transaction update failure: %s", exc, extra=log_extra)
        return CreateSubmissionResult(error_code="transaction_gateway_failed", detail=str(exc))
    except Exception as exc:
        logger.exception("unexpected failure creating submission", extra=log_extra)
        return CreateSubmissionResult(error_code="internal_error", detail=str(exc))

    logger.info(
        "Registered Email address Submission created",
        extra={**log_extra, "submission_id": stored.id},
    )
    return CreateSubmissionResult(submission=to_response(stored))


async def _find_submission(
    *,
    transaction_id: str,
    request_id: str,
    repository: SubmissionRepository,
) -> SubmissionRecord:
    message = _not_found_message(transaction_id)
    try:
        record = await repository.find_by_transaction_id(transaction_id)
    except Exception as exc:
        logger.error(
            "%s: %s",
            message,
            exc,
            extra={"request_id": request_id, "transaction_id": transaction_id},
        )
        raise SubmissionNotFoundError(message) from exc
    if record is None:
        raise SubmissionNotFoundError(message)
    return record


async def get_validation_status(
    *,
    transaction_id: str,
    request_id: str,
    repository: SubmissionRepository,
) -> ValidationStatus:
    record = await _find_submission(transaction_id=transaction_id, request_id=request_id, repository=repository)
    return validate_submission(record)


async def get_registered_email_address(
    *,
    transaction_id: str,
    request_id: str,
    repository: SubmissionRepository,
) -> str:
    record = await _find_submission(transaction_id=transaction_id, request_id=request_id, repository=repository)
    logger.debug(
        "Registered Email Address found for Transaction %s.",
        transaction_id,
        extra={"request_id": request_id, "transaction_id": transaction_id},
    )
    return record.registered_email_address or ""


async def build_filings(
    *,
    transaction: Transaction,
    request_id: str,
    repository: SubmissionRepository,
) -> list[FilingItem]:
    """Build the filing payload handed to the filing processor.

    Only closed transactions produce filings.
    """
    if transaction.status not in CLOSED_TRANSACTION_STATUSES:
        raise DomainValidationError(f"Transaction id: {transaction.id} is not closed")
    record = await _find_submission(transaction_id=transaction.id, request_id=request_id, repository=repository)
    return [
        FilingItem(
            kind=FILING_KIND,
            description=FILING_DESCRIPTION,
            submission_id=record.id or "",
            data={
                "registered_email_address": record.registered_email_address,
                "accept_appropriate_email_address_statement": record.accept_appropriate_email_address_statement,
            },
        )
    ]
