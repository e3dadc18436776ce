from __future__ import annotations

from collections.abc import Mapping
from typing import Literal

# Canonical error vocabulary shared by the workflow and the HTTP boundary.
ErrorCode = Literal[
    "validation_error",
    "duplicate_submission",
    "submission_not_found",
    "transaction_not_found",
    "store_unavailable",
    "transaction_gateway_failed",
    "internal_error",
]

CANONICAL_ERROR_CODES: tuple[ErrorCode, ...] = (
    "validation_error",
    "duplicate_submission",
    "submission_not_found",
    "transaction_not_found",
    "store_unavailable",
    "transaction_gateway_failed",
    "internal_error",
)

# One transport outcome per error code.
HTTP_STATUS_BY_ERROR_CODE: Mapping[ErrorCode, int] = {
    "validation_error": 422,
    "duplicate_submission": 409,
    "submission_not_found": 404,
    "transaction_not_found": 404,
    "store_unavailable": 503,
    "transaction_gateway_failed": 502,
    "internal_error": 500,
}

# Codes whose detail is safe to show to API callers. Infrastructure failures
# are reported with a generic message instead.
USER_FACING_ERROR_CODES: frozenset[ErrorCode] = frozenset(
    {
        "validation_error",
        "duplicate_submission",
        "submission_not_found",
        "transaction_not_found",
    }
)

GENERIC_ERROR_DETAIL = "Error Creating registered email address Submission"
GENERIC_READ_ERROR_DETAIL = "Error retrieving registered email address"


def is_canonical_error_code(code: str) -> bool:
    return code in CANONICAL_ERROR_CODES


def resolve_error_code(code: str) -> ErrorCode:
    if is_canonical_error_code(code):
        return code  # type: ignore[return-value]
    return "internal_error"


def http_status_for(code: str) -> int:
    return HTTP_STATUS_BY_ERROR_CODE[resolve_error_code(code)]


def public_detail(code: str, detail: str, *, generic_detail: str = GENERIC_ERROR_DETAIL) -> str:
    if resolve_error_code(code) in USER_FACING_ERROR_CODES:
        return detail
    return generic_detail
