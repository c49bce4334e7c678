import json
import logging
from types import SimpleNamespace

from starlette.requests import Request
from starlette.responses import Response

from app.crudkit.core.context import CrudState
from app.crudkit.middleware.observability import build_request_log_payload


def test_build_request_log_payload():
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/records",
        "headers": [],
        "route": SimpleNamespace(path="/records"),
    }
    request = Request(scope)
    request.state.trace_id = "trace-1"
    request.state.crud = CrudState(loaded_values={"sort": "name", "dir": "asc"})
    request.state.error_code = None
    response = Response(status_code=302)

    payload = build_request_log_payload(
        request=request,
        response=response,
        latency_ms=12.3456,
    )

    assert payload["trace_id"] == "trace-1"
    assert payload["route"] == "/records"
    assert payload["method"] == "GET"
    assert payload["status_code"] == 302
    assert payload["latency_ms"] == 12.35
    assert payload["restored_keys"] == ["dir", "sort"]
    assert payload["error_code"] is None


def test_request_log_payload_without_crud_state():
    request = Request({"type": "http", "method": "GET", "path": "/health", "headers": []})

    payload = build_request_log_payload(request=request, response=None, latency_ms=1.0)

    assert payload["route"] == "/health"
    assert payload["status_code"] == 500
    assert payload["restored_keys"] == []


def test_restored_values_are_logged(client, caplog):
    client.get("/records?sort=email", follow_redirects=False)

    with caplog.at_level(logging.DEBUG, logger="crudkit"):
        caplog.clear()
        client.get("/records", follow_redirects=False)

    events = [json.loads(record.getMessage()) for record in caplog.records if record.name.startswith("crudkit")]
    names = [event["event"] for event in events]
    assert "crud_state_restored" in names
    assert "crud_redirect" in names
    request_event = next(event for event in events if event["event"] == "http_request")
    assert request_event["status_code"] == 302
    assert request_event["restored_keys"] == ["dir", "sort"]
