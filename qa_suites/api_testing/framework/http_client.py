"""
================================================================================
HTTP Client with Allure Integration
================================================================================

Transport used by every API client.

Features:
    - Automatic retry with exponential backoff on network errors
    - Rate limit (429) handling with Retry-After parsing
    - Allure reporting with redacted headers/body and a cURL command
    - Typed, timed ApiResponse envelope; status codes never raise

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
import time
from typing import Any, Dict, Optional

import allure
import httpx
from loguru import logger

from qa_tools.common import ConfigLoader, RunContext, log_request, log_response
from qa_tools.report_tools import attach_json, attach_text

from .models import ApiResponse


# Default retry settings
DEFAULT_RETRY_COUNT = 3
DEFAULT_RETRY_BACKOFF = 0.5
DEFAULT_RETRY_MAX_WAIT = 5.0

DEFAULT_HEADERS: Dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

SENSITIVE_HEADERS = {"authorization", "x-api-key", "x-app-auth", "cookie", "set-cookie"}
SENSITIVE_BODY_TOKENS = ("password", "secret", "token", "api_key", "authorization", "session")
MASK = "***MASKED***"


class HttpClientError(Exception):
    """Base exception for HTTP client errors."""
    pass


class HttpClient:
    """
    httpx-backed client that turns every exchange into an ApiResponse.

    Non-2xx responses are returned, not raised, so tests can assert on 4xx/5xx
    paths directly. Network failures are retried and re-raised once retries
    are exhausted. A 429 is retried after Retry-After; if it persists the last
    429 response is returned.

    Usage:
        >>> with HttpClient("https://jsonplaceholder.typicode.com") as client:
        ...     response = client.request("GET", "/users/1")
        ...     response.status
        200
    """

    def __init__(
        self,
        base_url: str,
        config: Optional[ConfigLoader] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
        run_context: Optional[RunContext] = None,
    ) -> None:
        """
        Initialize HTTP client.

        Args:
            base_url: Service root every relative path is joined to
            config: Configuration loader. Creates new one if None.
            headers: Headers sent with every request (merged over DEFAULT_HEADERS)
            transport: Optional httpx transport (e.g. httpx.MockTransport in unit tests)
            run_context: Per-test context whose bound logger is used
        """
        if config is None:
            config = ConfigLoader()

        self.config = config
        self.base_url = base_url.rstrip("/")
        self.timeout = float(config.get("api.timeout", 30))
        self.retry_count = max(1, int(config.get("api.retry_count", DEFAULT_RETRY_COUNT)))
        self.retry_backoff = float(config.get("api.retry_backoff", DEFAULT_RETRY_BACKOFF))
        self.retry_max_wait = float(config.get("api.retry_max_wait", DEFAULT_RETRY_MAX_WAIT))
        self.headers: Dict[str, str] = {**DEFAULT_HEADERS, **(headers or {})}
        self.transport = transport
        self.log = run_context.log if run_context is not None else logger

        self.session: Optional[httpx.Client] = None

    def __enter__(self) -> "HttpClient":
        """Enter context manager - initialize HTTP session."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager - close HTTP session."""
        self.close()

    def open(self) -> None:
        if self.session is None:
            self.session = httpx.Client(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                transport=self.transport,
            )

    def close(self) -> None:
        if self.session:
            self.session.close()
            self.session = None

    def request(
        self,
        method: str,
        url: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> ApiResponse:
        """
        Execute HTTP request with retry and Allure logging.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, PATCH)
            url: Request URL (relative to base_url)
            json: JSON body
            params: Query parameters
            headers: Per-request headers (merged over client headers)
            **kwargs: Additional arguments passed to httpx.Client.request

        Returns:
            ApiResponse for the final attempt

        Raises:
            HttpClientError: When used outside a context manager
            httpx.TimeoutException / httpx.NetworkError: When network retries are exhausted
        """
        if self.session is None:
            raise HttpClientError(
                "HttpClient must be used within a context manager. "
                "Use 'with HttpClient(base_url) as client:'"
            )

        method = method.upper()
        merged_headers = {**self.headers, **(headers or {})}
        if json is None:
            merged_headers.pop("Content-Type", None)

        log_request(method, f"{self.base_url}{url}", json, log=self.log)

        for attempt in range(self.retry_count):
            started = time.perf_counter()
            try:
                raw = self.session.request(
                    method,
                    url,
                    json=json,
                    params=params,
                    headers=merged_headers,
                    **kwargs,
                )
            except (httpx.TimeoutException, httpx.NetworkError) as e:
                if attempt < self.retry_count - 1:
                    wait_time = self._calculate_backoff(attempt)
                    self.log.warning(
                        f"Network error: {e}. Retrying in {wait_time}s. "
                        f"Attempt {attempt + 1}/{self.retry_count}"
                    )
                    time.sleep(wait_time)
                    continue
                self.log.error(f"All retries exhausted. Last error: {e}")
                raise

            elapsed_ms = (time.perf_counter() - started) * 1000
            response = self._to_api_response(method, raw, elapsed_ms)

            if raw.status_code == 429 and attempt < self.retry_count - 1:
                retry_after = self._parse_retry_after(raw)
                self.log.warning(
                    f"Rate limited (429). Waiting {retry_after}s before retry. "
                    f"Attempt {attempt + 1}/{self.retry_count}"
                )
                time.sleep(retry_after)
                continue

            log_response(response.status, url, response.response_time, response.data, log=self.log)
            self._log_to_allure(method, url, merged_headers, json, params, response)
            return response

        # retry_count >= 1, so the loop always returns or raises
        raise HttpClientError("Request loop exited without a response")

    def get(self, url: str, **kwargs: Any) -> ApiResponse:
        """Execute GET request."""
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> ApiResponse:
        """Execute POST request."""
        return self.request("POST", url, **kwargs)

    def put(self, url: str, **kwargs: Any) -> ApiResponse:
        """Execute PUT request."""
        return self.request("PUT", url, **kwargs)

    def patch(self, url: str, **kwargs: Any) -> ApiResponse:
        """Execute PATCH request."""
        return self.request("PATCH", url, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> ApiResponse:
        """Execute DELETE request."""
        return self.request("DELETE", url, **kwargs)

    @staticmethod
    def _to_api_response(method: str, raw: httpx.Response, elapsed_ms: float) -> ApiResponse:
        """Shape an httpx response into the envelope; empty bodies become {}."""
        if not raw.content:
            data: Any = {}
        else:
            try:
                data = raw.json()
            except ValueError:
                data = raw.text

        return ApiResponse(
            data=data,
            status=raw.status_code,
            headers=dict(raw.headers),
            response_time=elapsed_ms,
            url=str(raw.request.url),
            method=method,
        )

    def _parse_retry_after(self, response: httpx.Response) -> float:
        """
        Parse Retry-After header (seconds) from a 429 response.

        Returns:
            Wait time in seconds (capped at retry_max_wait)
        """
        retry_after = response.headers.get("Retry-After", "")

        try:
            wait_time = float(retry_after)
        except ValueError:
            wait_time = self.retry_backoff

        return min(wait_time, self.retry_max_wait)

    def _calculate_backoff(self, attempt: int) -> float:
        """
        Calculate exponential backoff wait time.

        Formula: base * (2 ^ attempt), capped at max_wait
        """
        wait_time = self.retry_backoff * (2 ** attempt)
        return min(wait_time, self.retry_max_wait)

    def _log_to_allure(
        self,
        method: str,
        url: str,
        headers: Dict[str, Any],
        body: Any,
        params: Optional[Dict[str, Any]],
        response: ApiResponse,
    ) -> None:
        """Attach request/response details and a cURL command to the Allure step."""
        full_url = response.url or f"{self.base_url}/{url.lstrip('/')}"
        status_emoji = "✅" if response.status < 400 else "❌"
        step_title = f"{status_emoji} {method} {url} → {response.status}"

        with allure.step(step_title):
            attach_text(full_url, name="🔗 Request URL")

            safe_headers = self._redact_headers(headers)
            if safe_headers:
                attach_json(safe_headers, name="📤 Request Headers")

            safe_body = self._redact_body(body)
            if safe_body:
                attach_json(safe_body, name="📤 Request Body")

            if params:
                attach_json(params, name="📤 Query Params")

            attach_text(
                self._build_curl(method, full_url, safe_headers, safe_body),
                name="🔧 cURL Command",
            )
            attach_text(
                f"{status_emoji} {response.status} ({response.response_time:.0f}ms)",
                name="📥 Response Status",
            )
            if isinstance(response.data, (dict, list)):
                attach_json(response.data, name="📥 Response Body")
            else:
                attach_text(str(response.data) or "<empty>", name="📥 Response Body")

    def _redact_headers(self, headers: Dict[str, Any]) -> Dict[str, Any]:
        """Mask sensitive header values before logging."""
        masked = {}
        for key, value in headers.items():
            if key.lower() in SENSITIVE_HEADERS:
                masked[key] = MASK
            else:
                masked[key] = value
        return masked

    def _redact_body(self, payload: Any) -> Any:
        """Recursively mask sensitive fields in request bodies."""
        if isinstance(payload, dict):
            redacted = {}
            for key, value in payload.items():
                if any(token in key.lower() for token in SENSITIVE_BODY_TOKENS):
                    redacted[key] = MASK
                else:
                    redacted[key] = self._redact_body(value)
            return redacted
        if isinstance(payload, list):
            return [self._redact_body(item) for item in payload]
        return payload

    def _build_curl(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Any,
    ) -> str:
        """Build a copy-paste cURL command; headers are expected pre-redacted."""
        parts = [f"curl -X {method}"]

        for key, value in headers.items():
            parts.append(f"-H '{key}: {value}'")

        if body:
            parts.append(f"-d '{json.dumps(body, ensure_ascii=False)}'")

        parts.append(f"'{url}'")

        return " \\\n  ".join(parts)


__all__ = [
    "HttpClient",
    "HttpClientError",
    "DEFAULT_HEADERS",
]
