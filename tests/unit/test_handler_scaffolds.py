import asyncio

from pydantic import ValidationError
import pytest

from rea_api.api.handlers import filings, registered_email_address, transactions, validation_status
from rea_api.api.handlers.deps import ApiDeps
from rea_api.api.handlers.registered_email_address import (
    create_registered_email_address_handler,
    get_registered_email_address_handler,
)
from rea_api.api.handlers.transactions import resolve_transaction_handler
from rea_api.api.handlers.validation_status import get_validation_status_handler
from rea_api.api.schemas import RegisteredEmailAddressRequest
from rea_api.clients.stub import StubTransactionGateway
from rea_api.repositories.stub import InMemorySubmissionRepository


@pytest.mark.unit
def test_api_handler_component_ids_are_stable() -> None:
    assert registered_email_address.COMPONENT_ID_CREATE == "api.create_registered_email_address"
    assert registered_email_address.COMPONENT_ID_GET == "api.get_registered_email_address"
    assert validation_status.COMPONENT_ID == "api.get_validation_status"
    assert filings.COMPONENT_ID == "api.get_filings"
    assert transactions.COMPONENT_ID == "api.resolve_transaction"


@pytest.mark.unit
def test_handlers_execute_create_and_read_flow() -> None:
    deps = ApiDeps(repository=InMemorySubmissionRepository(), transactions=StubTransactionGateway())

    async def _run() -> None:
        transaction = await resolve_transaction_handler(deps, transaction_id="T1", request_id="r")
        outcome = await create_registered_email_address_handler(
            deps,
            transaction=transaction,
            request=RegisteredEmailAddressRequest(
                registered_email_address="Test@Test.com",
                accept_appropriate_email_address_statement=True,
            ),
            request_id="r",
            user_id="u",
        )
        assert outcome.response is not None
        assert outcome.error_code is None

        duplicate = await create_registered_email_address_handler(
            deps,
            transaction=transaction,
            request=RegisteredEmailAddressRequest(registered_email_address="Test@Test.com"),
            request_id="r",
            user_id="u",
        )
        assert duplicate.response is None
        assert duplicate.error_code == "duplicate_submission"

        email = await get_registered_email_address_handler(deps, transaction_id="T1", request_id="r")
        assert email.registered_email_address == "Test@Test.com"

        status = await get_validation_status_handler(deps, transaction_id="T1", request_id="r")
        assert status.is_valid is True

    asyncio.run(_run())


@pytest.mark.unit
def test_request_schema_rejects_malformed_email() -> None:
    with pytest.raises(ValidationError) as exc_info:
        RegisteredEmailAddressRequest(registered_email_address="not-an-email")

    assert "registered_email_address must have a valid email format" in str(exc_info.value)
