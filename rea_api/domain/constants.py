from __future__ import annotations

FILING_KIND = "registered-email-address"
FILING_DESCRIPTION = "Registered Email Address"

LINK_SELF = "self"
LINK_RESOURCE = "resource"
LINK_VALIDATION_STATUS = "validation_status"

TRANSACTION_URI_PATTERN = "/transactions/{transaction_id}/registered-email-address/{submission_id}"
VALIDATION_STATUS_URI_SUFFIX = "/validation-status"

EMAIL_PATTERN = r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~\-]+@([^.@][^@\s]+)$"

REQUEST_ID_HEADER = "X-Request-Id"
IDENTITY_HEADER = "ERIC-Identity"

# Transaction statuses for which filings may be generated.
CLOSED_TRANSACTION_STATUSES = ("closed", "closed_pending_payment")
