"""
================================================================================
API Data Models
================================================================================

Response envelope returned by every client call, plus TypedDict shapes for the
JSONPlaceholder and ReqRes resources used in the suites.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, TypedDict


@dataclass(frozen=True)
class ApiResponse:
    """
    Immutable result of one HTTP call.

    Attributes:
        data: Parsed JSON body; raw text if the body is not JSON; {} if empty
        status: HTTP status code
        headers: Response headers (lower-cased keys)
        response_time: Round trip time in milliseconds
        url: Final request URL
        method: HTTP method used
    """
    data: Any
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    response_time: float = 0.0
    url: str = ""
    method: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        return self.data


# =============================================================================
# JSONPlaceholder resources
# =============================================================================

class Geo(TypedDict):
    lat: str
    lng: str


class Address(TypedDict):
    street: str
    suite: str
    city: str
    zipcode: str
    geo: Geo


class Company(TypedDict):
    name: str
    catchPhrase: str
    bs: str


class User(TypedDict, total=False):
    id: int
    name: str
    username: str
    email: str
    address: Address
    phone: str
    website: str
    company: Company


class Post(TypedDict, total=False):
    id: int
    userId: int
    title: str
    body: str


class Comment(TypedDict, total=False):
    id: int
    postId: int
    name: str
    email: str
    body: str


# =============================================================================
# ReqRes resources
# =============================================================================

class ReqResUser(TypedDict):
    id: int
    email: str
    first_name: str
    last_name: str
    avatar: str


class PaginatedResponse(TypedDict):
    page: int
    per_page: int
    total: int
    total_pages: int
    data: List[Dict[str, Any]]


class AuthRequest(TypedDict, total=False):
    email: str
    password: str


__all__ = [
    "ApiResponse",
    "Geo",
    "Address",
    "Company",
    "User",
    "Post",
    "Comment",
    "ReqResUser",
    "PaginatedResponse",
    "AuthRequest",
]
