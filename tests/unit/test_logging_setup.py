import json
import logging

import pytest

from rea_api.logging_setup import JsonFormatter


@pytest.mark.unit
def test_json_formatter_includes_context_fields() -> None:
    record = logging.LogRecord("rea_api.workflow", logging.INFO, __file__, 1, "created %s", ("x",), None)
    record.request_id = "req-1"
    record.transaction_id = "T1"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "created x"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "req-1"
    assert payload["transaction_id"] == "T1"
    assert "submission_id" not in payload
