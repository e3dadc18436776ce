from __future__ import annotations

from fastapi.testclient import TestClient
import pytest

from rea_api.api.handlers.deps import ApiDeps
from rea_api.api.http_app import build_app
from rea_api.clients.stub import StubTransactionGateway
from rea_api.domain.error_taxonomy import GENERIC_ERROR_DETAIL, GENERIC_READ_ERROR_DETAIL
from rea_api.domain.models import Transaction
from rea_api.repositories.stub import InMemorySubmissionRepository
from tests.unit.workflow_fakes import FailingSaveRepository, UnreachableTransactionGateway

HEADERS = {"X-Request-Id": "req-1", "ERIC-Identity": "user-1"}
VALID_BODY = {"registered_email_address": "a@b.com", "accept_appropriate_email_address_statement": True}


def _client(
    repository: InMemorySubmissionRepository | None = None,
    gateway: StubTransactionGateway | None = None,
) -> tuple[TestClient, InMemorySubmissionRepository, StubTransactionGateway]:
    repository = repository or InMemorySubmissionRepository()
    gateway = gateway or StubTransactionGateway()
    app = build_app(run_id="integration-api", api_deps=ApiDeps(repository=repository, transactions=gateway))
    return TestClient(app), repository, gateway


@pytest.mark.integration
def test_create_then_validation_status() -> None:
    client, repository, gateway = _client()

    with client:
        create_response = client.post("/transactions/T1/registered-email-address", json=VALID_BODY, headers=HEADERS)
        status_response = client.get("/transactions/T1/registered-email-address/validation-status", headers=HEADERS)
        email_response = client.get("/transactions/T1/registered-email-address", headers=HEADERS)

    assert create_response.status_code == 201
    body = create_response.json()
    assert body["id"].startswith("rea_")
    assert body["links"]["self"] == f"/transactions/T1/registered-email-address/{body['id']}"
    assert body["created_at"]
    assert body["created_by_user_id"] == "user-1"
    assert create_response.headers["Location"] == body["links"]["self"]

    assert status_response.status_code == 200
    assert status_response.json() == {"is_valid": True, "errors": []}
    assert email_response.json() == {"registered_email_address": "a@b.com"}
    assert repository.count_for_transaction("T1") == 1
    assert len(gateway.updates) == 1


@pytest.mark.integration
def test_second_create_is_conflict() -> None:
    client, repository, _ = _client()

    with client:
        first = client.post("/transactions/T1/registered-email-address", json=VALID_BODY, headers=HEADERS)
        second = client.post("/transactions/T1/registered-email-address", json=VALID_BODY, headers=HEADERS)

    assert first.status_code == 201
    assert second.status_code == 409
    assert "existing Registered Email Address submission" in second.json()["detail"]
    assert repository.count_for_transaction("T1") == 1


@pytest.mark.integration
@pytest.mark.parametrize(
    "body",
    [
        {"registered_email_address": "not-an-email", "accept_appropriate_email_address_statement": False},
        {"registered_email_address": "", "accept_appropriate_email_address_statement": True},
        {"registered_email_address": "a@b.com\n", "accept_appropriate_email_address_statement": True},
        {"accept_appropriate_email_address_statement": True},
    ],
)
def test_invalid_input_is_rejected_before_workflow(body: dict[str, object]) -> None:
    client, repository, gateway = _client()

    with client:
        response = client.post("/transactions/T1/registered-email-address", json=body, headers=HEADERS)

    assert response.status_code == 422
    assert repository.inserts == 0
    assert gateway.updates == []


@pytest.mark.integration
def test_create_requires_identity_header() -> None:
    client, repository, _ = _client()

    with client:
        response = client.post(
            "/transactions/T1/registered-email-address",
            json=VALID_BODY,
            headers={"X-Request-Id": "req-1"},
        )

    assert response.status_code == 401
    assert repository.inserts == 0


@pytest.mark.integration
def test_unknown_transaction_is_not_found() -> None:
    client, _, _ = _client(gateway=StubTransactionGateway(auto_create=False))

    with client:
        response = client.post("/transactions/T404/registered-email-address", json=VALID_BODY, headers=HEADERS)

    assert response.status_code == 404


@pytest.mark.integration
def test_infrastructure_failures_map_to_generic_errors() -> None:
    store_client, _, _ = _client(repository=FailingSaveRepository())
    gateway_client, _, _ = _client(gateway=StubTransactionGateway(fail_updates=True))

    with store_client:
        store_response = store_client.post(
            "/transactions/T1/registered-email-address", json=VALID_BODY, headers=HEADERS
        )
    with gateway_client:
        gateway_response = gateway_client.post(
            "/transactions/T1/registered-email-address", json=VALID_BODY, headers=HEADERS
        )

    assert store_response.status_code == 503
    assert store_response.json() == {"detail": GENERIC_ERROR_DETAIL}
    assert gateway_response.status_code == 502
    assert gateway_response.json() == {"detail": GENERIC_ERROR_DETAIL}


@pytest.mark.integration
def test_validation_status_without_submission_is_not_found() -> None:
    client, _, _ = _client()

    with client:
        response = client.get("/transactions/T9/registered-email-address/validation-status", headers=HEADERS)

    assert response.status_code == 404
    assert response.json() == {"detail": "Registered Email Address for TransactionId : T9 Not Found"}


@pytest.mark.integration
def test_filings_for_closed_transaction() -> None:
    client, _, gateway = _client()

    with client:
        client.post("/transactions/T1/registered-email-address", json=VALID_BODY, headers=HEADERS)
        open_response = client.get("/private/transactions/T1/registered-email-address/filings", headers=HEADERS)
        current = gateway.transactions["T1"]
        gateway.transactions["T1"] = Transaction(id="T1", status="closed", resources=current.resources)
        closed_response = client.get("/private/transactions/T1/registered-email-address/filings", headers=HEADERS)

    assert open_response.status_code == 422
    assert closed_response.status_code == 200
    filings = closed_response.json()
    assert len(filings) == 1
    assert filings[0]["kind"] == "registered-email-address"
    assert filings[0]["data"]["registered_email_address"] == "a@b.com"


@pytest.mark.integration
def test_filings_lookup_failure_reports_a_read_error() -> None:
    client, _, _ = _client(gateway=UnreachableTransactionGateway())

    with client:
        response = client.get("/private/transactions/T1/registered-email-address/filings", headers=HEADERS)

    assert response.status_code == 502
    assert response.json() == {"detail": GENERIC_READ_ERROR_DETAIL}
    assert "503" not in response.json()["detail"]


@pytest.mark.integration
def test_health_and_missing_dependencies() -> None:
    with TestClient(build_app(run_id="integration-api")) as client:
        health = client.get("/health")
        create = client.post("/transactions/T1/registered-email-address", json=VALID_BODY, headers=HEADERS)

    assert health.json() == {"status": "ok", "service": "registered-email-address-api"}
    assert create.status_code == 503
