"""
================================================================================
API Clients
================================================================================

Service clients for the public demo APIs used by the suites.

Clients:
    - UsersClient: JSONPlaceholder /users
    - PostsClient: JSONPlaceholder /posts and /comments
    - ReqResClient: ReqRes users, auth and resources

Every call returns an ApiResponse and never raises on a non-2xx status.
The validate_* helpers are test assertions; they raise AssertionError.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Collection, Dict, Iterable, Optional, Union

import httpx

from qa_tools.common import ConfigLoader, RunContext

from .http_client import HttpClient
from .models import ApiResponse, PaginatedResponse, Post, ReqResUser, User


DEFAULT_MAX_RESPONSE_TIME_MS = 5000

USER_REQUIRED_FIELDS = ["id", "name", "username", "email", "address", "phone", "website", "company"]
USER_ADDRESS_FIELDS = ["street", "city", "zipcode"]
USER_GEO_FIELDS = ["lat", "lng"]
USER_COMPANY_FIELDS = ["name", "catchPhrase", "bs"]
POST_REQUIRED_FIELDS = ["id", "title", "body", "userId"]
REQRES_USER_FIELDS = ["id", "email", "first_name", "last_name", "avatar"]
PAGINATION_FIELDS = ["page", "per_page", "total", "total_pages", "data"]


class BaseApiClient:
    """
    Common request verbs and validation helpers.

    Subclasses set SERVICE, the config section holding their base_url.

    Usage:
        >>> with UsersClient() as users:
        ...     response = users.get_user_by_id(1)
        ...     users.validate_status(response, 200)
    """

    SERVICE: str = ""
    DEFAULT_BASE_URL: str = ""

    def __init__(
        self,
        base_url: Optional[str] = None,
        config: Optional[ConfigLoader] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
        run_context: Optional[RunContext] = None,
    ) -> None:
        self.config = config or ConfigLoader()
        self.base_url = base_url or self.config.get(
            f"api.{self.SERVICE}.base_url", self.DEFAULT_BASE_URL
        )
        self.run_context = run_context
        self.http = HttpClient(
            self.base_url,
            config=self.config,
            headers=headers,
            transport=transport,
            run_context=run_context,
        )

    def __enter__(self) -> "BaseApiClient":
        self.http.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self.http.close()

    # =========================================================================
    # HTTP verbs
    # =========================================================================

    def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> ApiResponse:
        return self.http.get(path, params=params, headers=headers)

    def post(
        self,
        path: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> ApiResponse:
        return self.http.post(path, json=body, params=params, headers=headers)

    def put(
        self,
        path: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> ApiResponse:
        return self.http.put(path, json=body, params=params, headers=headers)

    def patch(
        self,
        path: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> ApiResponse:
        return self.http.patch(path, json=body, params=params, headers=headers)

    def delete(
        self,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> ApiResponse:
        return self.http.delete(path, params=params, headers=headers)

    # =========================================================================
    # Validation helpers
    # =========================================================================

    @staticmethod
    def validate_status(
        response: ApiResponse,
        expected: Union[int, Collection[int]],
    ) -> None:
        """Assert the status is `expected` (or one of them)."""
        accepted = {expected} if isinstance(expected, int) else set(expected)
        if response.status not in accepted:
            raise AssertionError(
                f"Expected status {sorted(accepted)}, got {response.status} "
                f"for {response.method} {response.url}"
            )

    @staticmethod
    def validate_response_structure(data: Any, required_fields: Iterable[str]) -> None:
        """
        Assert every field is present as a key of data.

        Presence is what counts; a field holding None or "" passes.
        """
        if not isinstance(data, dict):
            raise AssertionError(f"Expected an object, got {type(data).__name__}: {data!r}")
        missing = [name for name in required_fields if name not in data]
        if missing:
            raise AssertionError(f"Response is missing required fields: {missing}")

    def validate_response_time(
        self,
        response: ApiResponse,
        max_ms: Optional[float] = None,
    ) -> None:
        """Assert the response arrived in under max_ms (default api.max_response_time_ms)."""
        if max_ms is None:
            max_ms = float(self.config.get("api.max_response_time_ms", DEFAULT_MAX_RESPONSE_TIME_MS))
        if response.response_time >= max_ms:
            raise AssertionError(
                f"Response time {response.response_time:.2f}ms exceeded {max_ms}ms"
            )


class UsersClient(BaseApiClient):
    """JSONPlaceholder users endpoint."""

    SERVICE = "jsonplaceholder"
    DEFAULT_BASE_URL = "https://jsonplaceholder.typicode.com"

    def get_all_users(self) -> ApiResponse:
        return self.get("/users")

    def get_user_by_id(self, user_id: int) -> ApiResponse:
        return self.get(f"/users/{user_id}")

    def create_user(self, user_data: Dict[str, Any]) -> ApiResponse:
        return self.post("/users", user_data)

    def update_user(self, user_id: int, user_data: Dict[str, Any]) -> ApiResponse:
        return self.put(f"/users/{user_id}", user_data)

    def patch_user(self, user_id: int, user_data: Dict[str, Any]) -> ApiResponse:
        return self.patch(f"/users/{user_id}", user_data)

    def delete_user(self, user_id: int) -> ApiResponse:
        return self.delete(f"/users/{user_id}")

    def get_user_posts(self, user_id: int) -> ApiResponse:
        return self.get(f"/users/{user_id}/posts")

    def get_user_albums(self, user_id: int) -> ApiResponse:
        return self.get(f"/users/{user_id}/albums")

    def get_user_todos(self, user_id: int) -> ApiResponse:
        return self.get(f"/users/{user_id}/todos")

    def validate_user_structure(self, user: User) -> None:
        """Assert top-level, address, geo and company fields are present."""
        self.validate_response_structure(user, USER_REQUIRED_FIELDS)

        address = user.get("address")
        if address:
            self.validate_response_structure(address, USER_ADDRESS_FIELDS + ["geo"])
            self.validate_response_structure(address["geo"], USER_GEO_FIELDS)

        company = user.get("company")
        if company:
            self.validate_response_structure(company, USER_COMPANY_FIELDS)


class PostsClient(BaseApiClient):
    """JSONPlaceholder posts and comments endpoints."""

    SERVICE = "jsonplaceholder"
    DEFAULT_BASE_URL = "https://jsonplaceholder.typicode.com"

    def get_all_posts(self) -> ApiResponse:
        return self.get("/posts")

    def get_post_by_id(self, post_id: int) -> ApiResponse:
        return self.get(f"/posts/{post_id}")

    def create_post(self, post_data: Dict[str, Any]) -> ApiResponse:
        return self.post("/posts", post_data)

    def update_post(self, post_id: int, post_data: Dict[str, Any]) -> ApiResponse:
        return self.put(f"/posts/{post_id}", post_data)

    def patch_post(self, post_id: int, post_data: Dict[str, Any]) -> ApiResponse:
        return self.patch(f"/posts/{post_id}", post_data)

    def delete_post(self, post_id: int) -> ApiResponse:
        return self.delete(f"/posts/{post_id}")

    def get_post_comments(self, post_id: int) -> ApiResponse:
        return self.get(f"/posts/{post_id}/comments")

    def get_comments_by_post_id(self, post_id: int) -> ApiResponse:
        return self.get("/comments", params={"postId": post_id})

    def validate_post_structure(self, post: Post) -> None:
        self.validate_response_structure(post, POST_REQUIRED_FIELDS)


class ReqResClient(BaseApiClient):
    """
    ReqRes users, authentication and resources.

    ReqRes now rejects anonymous traffic with 401; the key from
    api.reqres.api_key (env API_REQRES_API_KEY) is sent as x-api-key.
    """

    SERVICE = "reqres"
    DEFAULT_BASE_URL = "https://reqres.in/api"

    def __init__(
        self,
        base_url: Optional[str] = None,
        config: Optional[ConfigLoader] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
        run_context: Optional[RunContext] = None,
    ) -> None:
        config = config or ConfigLoader()
        merged: Dict[str, str] = {}
        api_key = config.get("api.reqres.api_key")
        if api_key:
            merged["x-api-key"] = str(api_key)
        merged.update(headers or {})
        super().__init__(
            base_url=base_url,
            config=config,
            headers=merged,
            transport=transport,
            run_context=run_context,
        )

    def get_users(self, page: int = 1) -> ApiResponse:
        return self.get("/users", params={"page": page})

    def get_user(self, user_id: int) -> ApiResponse:
        return self.get(f"/users/{user_id}")

    def create_user(self, user_data: Dict[str, Any]) -> ApiResponse:
        return self.post("/users", user_data)

    def update_user(self, user_id: int, user_data: Dict[str, Any]) -> ApiResponse:
        return self.put(f"/users/{user_id}", user_data)

    def patch_user(self, user_id: int, user_data: Dict[str, Any]) -> ApiResponse:
        return self.patch(f"/users/{user_id}", user_data)

    def delete_user(self, user_id: int) -> ApiResponse:
        return self.delete(f"/users/{user_id}")

    def login(self, credentials: Dict[str, Any]) -> ApiResponse:
        return self.post("/login", credentials)

    def register(self, user_data: Dict[str, Any]) -> ApiResponse:
        return self.post("/register", user_data)

    def get_delayed_users(self, delay: int = 3) -> ApiResponse:
        return self.get("/users", params={"delay": delay})

    def get_resources(self) -> ApiResponse:
        return self.get("/unknown")

    def get_resource(self, resource_id: int) -> ApiResponse:
        return self.get(f"/unknown/{resource_id}")

    def validate_reqres_user_structure(self, user: ReqResUser) -> None:
        self.validate_response_structure(user, REQRES_USER_FIELDS)

    def validate_paginated_response(self, response: PaginatedResponse) -> None:
        self.validate_response_structure(response, PAGINATION_FIELDS)
        if not isinstance(response["data"], list):
            raise AssertionError(
                f"Paginated 'data' must be a list, got {type(response['data']).__name__}"
            )


__all__ = [
    "BaseApiClient",
    "UsersClient",
    "PostsClient",
    "ReqResClient",
    "USER_REQUIRED_FIELDS",
    "POST_REQUIRED_FIELDS",
    "REQRES_USER_FIELDS",
]
