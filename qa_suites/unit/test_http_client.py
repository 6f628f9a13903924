import httpx
import pytest
from loguru import logger

from qa_suites.api_testing.framework.http_client import HttpClient, HttpClientError
from qa_tools.common import RunContext


BASE_URL = "https://api.test"


def _client(config, handler, **kwargs) -> HttpClient:
    return HttpClient(BASE_URL, config=config, transport=httpx.MockTransport(handler), **kwargs)


def test_redact_headers_masks_sensitive_values():
    client = object.__new__(HttpClient)  # bypass __init__
    masked = client._redact_headers(
        {
            "Authorization": "secret-token",
            "x-api-key": "apikey",
            "Cookie": "session=abc",
            "X-Other": "keep",
        }
    )
    assert masked["Authorization"] == "***MASKED***"
    assert masked["x-api-key"] == "***MASKED***"
    assert masked["Cookie"] == "***MASKED***"
    assert masked["X-Other"] == "keep"


def test_redact_body_masks_sensitive_fields():
    client = object.__new__(HttpClient)
    payload = {
        "password": "p1",
        "nested": {"token": "tok", "keep": "value"},
        "items": [{"api_key": "k1"}, {"regular": "ok"}],
    }
    redacted = client._redact_body(payload)

    assert redacted["password"] == "***MASKED***"
    assert redacted["nested"]["token"] == "***MASKED***"
    assert redacted["nested"]["keep"] == "value"
    assert redacted["items"][0]["api_key"] == "***MASKED***"
    assert redacted["items"][1]["regular"] == "ok"
    # original is untouched
    assert payload["password"] == "p1"


def test_build_curl_includes_method_headers_and_body():
    client = object.__new__(HttpClient)
    curl = client._build_curl("POST", f"{BASE_URL}/login", {"x-api-key": "***MASKED***"}, {"email": "a@b.c"})

    assert curl.startswith("curl -X POST")
    assert "-H 'x-api-key: ***MASKED***'" in curl
    assert '-d \'{"email": "a@b.c"}\'' in curl
    assert curl.endswith(f"'{BASE_URL}/login'")


def test_request_outside_context_manager_raises(fast_config):
    client = _client(fast_config, lambda request: httpx.Response(200))

    with pytest.raises(HttpClientError):
        client.get("/users")


def test_json_response_becomes_api_response(fast_config):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/users/1"
        assert request.headers["accept"] == "application/json"
        # GET carries no body, so no Content-Type either
        assert "content-type" not in request.headers
        return httpx.Response(200, json={"id": 1, "name": "Leanne"})

    with _client(fast_config, handler) as client:
        response = client.get("/users/1")

    assert response.status == 200
    assert response.ok
    assert response.data == {"id": 1, "name": "Leanne"}
    assert response.json() == response.data
    assert response.method == "GET"
    assert response.url == f"{BASE_URL}/users/1"
    assert response.response_time >= 0
    assert response.headers["content-type"] == "application/json"


@pytest.mark.parametrize("status", [400, 401, 404, 500])
def test_error_status_is_returned_not_raised(fast_config, status):
    with _client(fast_config, lambda request: httpx.Response(status, json={"error": "nope"})) as client:
        response = client.get("/anything")

    assert response.status == status
    assert not response.ok
    assert response.data == {"error": "nope"}


def test_empty_body_becomes_empty_dict(fast_config):
    with _client(fast_config, lambda request: httpx.Response(204)) as client:
        response = client.delete("/users/2")

    assert response.status == 204
    assert response.data == {}


def test_non_json_body_kept_as_text(fast_config):
    with _client(fast_config, lambda request: httpx.Response(200, text="plain text")) as client:
        response = client.get("/health")

    assert response.data == "plain text"


def test_json_body_and_params_are_sent(fast_config):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["content_type"] = request.headers.get("content-type")
        seen["query"] = dict(request.url.params)
        seen["body"] = request.content
        return httpx.Response(201, json={"id": 101})

    with _client(fast_config, handler) as client:
        response = client.post("/posts", json={"title": "t"}, params={"draft": "1"})

    assert response.status == 201
    assert seen["content_type"] == "application/json"
    assert seen["query"] == {"draft": "1"}
    assert b'"title"' in seen["body"]


def test_client_and_request_headers_are_merged(fast_config):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.headers)
        return httpx.Response(200, json={})

    with _client(fast_config, handler, headers={"x-api-key": "k"}) as client:
        client.get("/users", headers={"X-Trace": "abc"})

    assert seen["x-api-key"] == "k"
    assert seen["x-trace"] == "abc"


def test_429_is_retried_until_success(fast_config):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) < 3:
            return httpx.Response(429, headers={"Retry-After": "0"})
        return httpx.Response(200, json={"ok": True})

    with _client(fast_config, handler) as client:
        response = client.get("/limited")

    assert len(calls) == 3
    assert response.status == 200


def test_persistent_429_returns_last_response(make_config):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(429, json={"error": "rate limited"})

    with _client(make_config({"api.retry_count": 2}), handler) as client:
        response = client.get("/limited")

    assert len(calls) == 2
    assert response.status == 429


def test_network_error_retried_then_reraised(fast_config):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with _client(fast_config, handler) as client:
        with pytest.raises(httpx.ConnectError):
            client.get("/down")

    assert len(calls) == 3


def test_network_error_recovers_on_retry(fast_config):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            raise httpx.ReadTimeout("slow", request=request)
        return httpx.Response(200, json=[1, 2])

    with _client(fast_config, handler) as client:
        response = client.get("/flaky")

    assert len(calls) == 2
    assert response.data == [1, 2]


def test_retry_after_is_capped(make_config):
    client = _client(make_config({"api.retry_max_wait": 2.0, "api.retry_backoff": 0.5}), lambda r: httpx.Response(200))

    assert client._parse_retry_after(httpx.Response(429, headers={"Retry-After": "30"})) == 2.0
    assert client._parse_retry_after(httpx.Response(429, headers={"Retry-After": "1"})) == 1.0
    # unparseable header falls back to the base backoff
    assert client._parse_retry_after(httpx.Response(429)) == 0.5


def test_backoff_grows_exponentially_and_caps(make_config):
    client = _client(make_config({"api.retry_max_wait": 3.0, "api.retry_backoff": 0.5}), lambda r: httpx.Response(200))

    assert [client._calculate_backoff(n) for n in range(4)] == [0.5, 1.0, 2.0, 3.0]


def test_request_and_response_lines_carry_run_context(fast_config):
    context = RunContext(name="test_users")
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")

    try:
        with _client(fast_config, lambda request: httpx.Response(404, json={}), run_context=context) as client:
            client.get("/users/999")
    finally:
        logger.remove(handler_id)

    lines = [r for r in records if "Request to" in r["message"] or "Response:" in r["message"]]
    assert [r["level"].name for r in lines] == ["INFO", "ERROR"]
    assert all(r["extra"]["run_id"] == context.run_id for r in lines)
    assert all(r["extra"]["worker"] == context.worker for r in lines)
