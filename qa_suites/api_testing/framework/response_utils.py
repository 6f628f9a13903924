"""
================================================================================
Response Utilities
================================================================================

Helpers for turning an ApiResponse into data or a test verdict.

Clients never raise on status codes; extract_data is the opt-in point where a
4xx/5xx becomes an exception (HttpStatusError).

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Mapping

from qa_tools.validation import ValidationUtils

from .http_client import HttpClientError
from .models import ApiResponse


class HttpStatusError(HttpClientError):
    """Raised by ResponseUtils.extract_data for a status >= 400."""

    def __init__(self, response: ApiResponse):
        self.response = response
        self.status = response.status
        super().__init__(
            f"API request failed with status {response.status}: "
            f"{json.dumps(response.data, default=str)}"
        )


class ResponseUtils:
    """Stateless response helpers."""

    @staticmethod
    def extract_data(response: ApiResponse) -> Any:
        """
        Return response.data for a successful call.

        Raises:
            HttpStatusError: If status >= 400
        """
        if response.status >= 400:
            raise HttpStatusError(response)
        return response.data

    @staticmethod
    def is_success_response(response: ApiResponse) -> bool:
        return 200 <= response.status < 300

    @staticmethod
    def assert_status(response: ApiResponse, expected_status: int) -> None:
        if response.status != expected_status:
            raise AssertionError(
                f"Expected status {expected_status}, got {response.status}: {response.data!r}"
            )

    @staticmethod
    def assert_response_time(response: ApiResponse, max_time: float = 5000) -> None:
        if response.response_time >= max_time:
            raise AssertionError(
                f"Response time {response.response_time:.2f}ms exceeded {max_time}ms"
            )

    @staticmethod
    def assert_response_structure(data: Mapping[str, Any], required_fields: Iterable[str]) -> None:
        missing = [name for name in required_fields if name not in data]
        if missing:
            raise AssertionError(f"Response is missing required fields: {missing}")

    @staticmethod
    def assert_schema(data: Mapping[str, Any], schema: Mapping[str, Mapping[str, Any]]) -> None:
        result = ValidationUtils.validate_schema(data, schema)
        if not result.is_valid:
            raise AssertionError(f"Schema validation failed: {', '.join(result.errors)}")

    @staticmethod
    def extract_pagination_info(body: Mapping[str, Any]) -> Dict[str, int]:
        """Normalize snake_case (ReqRes) or camelCase pagination keys."""
        return {
            "current_page": body.get("page") or 1,
            "total_pages": body.get("total_pages") or body.get("totalPages") or 1,
            "total_items": body.get("total") or body.get("totalItems") or 0,
            "items_per_page": body.get("per_page") or body.get("itemsPerPage") or 10,
        }

    @staticmethod
    def extract_error(response: ApiResponse) -> str:
        data = response.data
        if isinstance(data, dict) and data.get("error"):
            error = data["error"]
            return error if isinstance(error, str) else json.dumps(error, default=str)
        return f"HTTP {response.status} Error"


__all__ = [
    "ResponseUtils",
    "HttpStatusError",
]
