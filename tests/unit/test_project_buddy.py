"""Unit tests for the Project Buddy client: mock transport; success, HTTP errors, network errors."""
import json

import httpx
import pytest

from tools.project_buddy import (
    ENDPOINTS,
    REQUEST_TIMEOUT_SEC,
    ProjectBuddyAPIError,
    post_to_project_buddy,
)


def _recording_transport(status_code=200, **response_kwargs):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status_code, **response_kwargs)

    return httpx.MockTransport(handler), seen


def test_endpoints():
    assert ENDPOINTS == {"location": "/api/locations", "project-maturity": "/api/project-maturity"}
    assert REQUEST_TIMEOUT_SEC == 10.0


def test_post_success_strips_none_and_sets_headers():
    transport, seen = _recording_transport(201, json={"id": 42})
    body = {"addresses": [{"address": "A", "price": None}], "sessionId": None, "nested": {"x": None}}

    out = post_to_project_buddy("http://buddy.test", "/api/locations", body, transport=transport)

    assert out == {"id": 42}
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "http://buddy.test/api/locations"
    assert request.headers["content-type"] == "application/json"
    assert request.headers["accept"] == "application/json"
    assert json.loads(request.content) == {"addresses": [{"address": "A"}], "nested": {}}


def test_post_keeps_base_path_prefix():
    transport, seen = _recording_transport(200, json={})
    post_to_project_buddy("http://buddy.test/v1", "/api/project-maturity", {}, transport=transport)
    assert str(seen[0].url) == "http://buddy.test/v1/api/project-maturity"


def test_post_empty_success_body():
    transport, _ = _recording_transport(204)
    assert post_to_project_buddy("http://buddy.test", "/api/locations", {}, transport=transport) is None


def test_http_error_with_json_body():
    transport, _ = _recording_transport(422, json={"error": "bad address"})
    with pytest.raises(ProjectBuddyAPIError) as exc_info:
        post_to_project_buddy("http://buddy.test", "/api/locations", {}, transport=transport)
    payload = exc_info.value.payload
    assert payload.status == 422
    assert payload.code == "ERR_BAD_REQUEST"
    assert payload.data == {"error": "bad address"}
    assert json.loads(payload.message) == {"error": "bad address"}


def test_http_error_with_text_body():
    transport, _ = _recording_transport(503, text="unavailable")
    with pytest.raises(ProjectBuddyAPIError) as exc_info:
        post_to_project_buddy("http://buddy.test", "/api/locations", {}, transport=transport)
    payload = exc_info.value.payload
    assert payload.status == 503
    assert payload.code == "ERR_BAD_RESPONSE"
    assert "503" in payload.message
    assert payload.data == "unavailable"


def test_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProjectBuddyAPIError) as exc_info:
        post_to_project_buddy("http://buddy.test", "/api/locations", {}, transport=httpx.MockTransport(handler))
    payload = exc_info.value.payload
    assert payload.code == "ERR_NETWORK"
    assert "connection refused" in payload.message
    assert payload.status is None


def test_timeout_is_a_transport_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(ProjectBuddyAPIError) as exc_info:
        post_to_project_buddy("http://buddy.test", "/api/locations", {}, transport=httpx.MockTransport(handler))
    assert exc_info.value.payload.code == "ECONNABORTED"
    assert exc_info.value.payload.to_dict() == {"message": "timed out", "code": "ECONNABORTED"}
