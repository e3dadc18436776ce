import pytest

from rea_api.domain.dto import RegisteredEmailAddressInput
from rea_api.domain.mapper import to_record, to_response


@pytest.mark.unit
def test_round_trip_preserves_user_fields_and_leaves_metadata_unset() -> None:
    payload = RegisteredEmailAddressInput(
        registered_email_address="a@b.com",
        accept_appropriate_email_address_statement=True,
    )

    output = to_response(to_record(payload))

    assert output.registered_email_address == "a@b.com"
    assert output.accept_appropriate_email_address_statement is True
    assert output.id is None
    assert output.links == {}
    assert output.etag is None
    assert output.created_at is None
    assert output.created_by_user_id is None


@pytest.mark.unit
def test_to_record_does_not_assign_identity() -> None:
    record = to_record(RegisteredEmailAddressInput(registered_email_address="x@y.org"))

    assert record.id is None
    assert record.transaction_id is None
    assert record.accept_appropriate_email_address_statement is False
