import logging

import httpx
import pytest

import cmsops.core.client as client_module
from cmsops.core.client import ApiClient
from cmsops.core.config import Settings
from cmsops.core.errors import NETWORK_ERROR_MESSAGE, ApiError, ErrorKind

SETTINGS = Settings(api_base_url="https://backend.test/api/v1")


def _client(handler) -> ApiClient:
    return ApiClient(SETTINGS, transport=httpx.MockTransport(handler))


def test_get_unwraps_envelope_and_hits_base_url():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"success": True, "data": [{"_id": "1"}]})

    with _client(handler) as client:
        assert client.get("contact/getcontacts") == [{"_id": "1"}]

    assert seen == ["https://backend.test/api/v1/contact/getcontacts"]


def test_post_sends_json_body():
    bodies: list[bytes] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(request.content)
        return httpx.Response(201, json={"success": True, "data": {"_id": "9"}})

    with _client(handler) as client:
        assert client.post("membership/addMembership", {"name": "ACM"}) == {"_id": "9"}

    assert b'"name"' in bodies[0]


def test_network_failure_is_normalized():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with _client(handler) as client:
        with pytest.raises(ApiError) as info:
            client.get("contact/getcontacts")

    assert info.value.kind == ErrorKind.NETWORK
    assert info.value.message == NETWORK_ERROR_MESSAGE
    assert info.value.status is None


def test_validation_response_is_normalized():
    payload = {
        "success": False,
        "errorType": "VALIDATION",
        "details": ["Path `email` is required."],
    }

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json=payload)

    with _client(handler) as client:
        with pytest.raises(ApiError) as info:
            client.post("contact/addcontact", {"firstName": "A"})

    assert info.value.details == ["Path `email` is required."]
    assert info.value.message == "Path `email` is required."
    assert isinstance(info.value.original_error, httpx.HTTPStatusError)


def test_success_false_on_200_raises_envelope_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": False, "message": "Nope"})

    with _client(handler) as client:
        with pytest.raises(ApiError, match="Nope"):
            client.get("logo/getlogo")


def test_empty_body_returns_none():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    with _client(handler) as client:
        assert client.delete("logo/deletelogo/1") is None


def test_requests_and_responses_are_logged(caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": True, "data": []})

    caplog.set_level(logging.INFO, logger="cmsops.core.client")
    with _client(handler) as client:
        client.get("blog/getallblogs")

    messages = [r.getMessage() for r in caplog.records]
    assert any("GET" in m and "/api/v1/blog/getallblogs" in m for m in messages)
    assert any("200" in m and "/api/v1/blog/getallblogs" in m for m in messages)


def test_logging_failure_does_not_block_the_error(monkeypatch):
    class _BrokenLogger:
        def info(self, *args, **kwargs):
            raise RuntimeError("log sink down")

    monkeypatch.setattr(client_module, "logger", _BrokenLogger())

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    with _client(handler) as client:
        with pytest.raises(ApiError) as info:
            client.get("logo/getlogoById/missing")

    assert info.value.status == 404
    assert info.value.message == "Resource not found."
