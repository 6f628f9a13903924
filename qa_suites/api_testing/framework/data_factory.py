"""
================================================================================
Test Data Factory
================================================================================

Factory classes producing request payloads and fixture objects for the
JSONPlaceholder and ReqRes suites.

Features:
- Deterministic defaults with per-factory counters
- Shallow **overrides merged last, so overrides always win
- Invalid payloads for negative tests
- Random/time helpers (DataHelper) for unique values

================================================================================
"""

from typing import Any, Dict, List, Optional
from datetime import datetime, timedelta, timezone
from uuid import uuid4
import json
import random
import string

from .models import Address, AuthRequest, Comment, Company, Post, User


# ================================================================================
# Random Helpers
# ================================================================================

class DataHelper:
    """
    Random and time-based value helpers.

    All methods are static; seed the `random` module for reproducible output.
    """

    @staticmethod
    def random_string(length: int = 10) -> str:
        """Generate random alphanumeric string."""
        chars = string.ascii_letters + string.digits
        return ''.join(random.choice(chars) for _ in range(length))

    @staticmethod
    def random_number(minimum: int = 1, maximum: int = 1000) -> int:
        """Random integer in [minimum, maximum]."""
        return random.randint(minimum, maximum)

    @staticmethod
    def random_email(domain: str = "example.com") -> str:
        timestamp = int(datetime.now().timestamp() * 1000)
        suffix = DataHelper.random_string(6).lower()
        return f"test{timestamp}{suffix}@{domain}"

    @staticmethod
    def random_phone_number() -> str:
        """Phone in +1-AAA-EEE-NNNN form."""
        area = DataHelper.random_number(200, 999)
        exchange = DataHelper.random_number(200, 999)
        number = DataHelper.random_number(1000, 9999)
        return f"+1-{area}-{exchange}-{number}"

    @staticmethod
    def unique_id(prefix: str = "") -> str:
        timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
        return f"{prefix}{timestamp}_{uuid4().hex[:8]}"

    @staticmethod
    def past_date(days_ago: int = 30) -> str:
        return (datetime.now(timezone.utc) - timedelta(days=days_ago)).isoformat()

    @staticmethod
    def future_date(days_from_now: int = 30) -> str:
        return (datetime.now(timezone.utc) + timedelta(days=days_from_now)).isoformat()

    @staticmethod
    def create_large_payload(size_in_kb: int = 100) -> Dict[str, List[str]]:
        """Build {"data": [...]} whose JSON encoding is at least size_in_kb KiB."""
        target = size_in_kb * 1024
        chunk = "A" * 1000
        payload: Dict[str, List[str]] = {"data": []}
        while len(json.dumps(payload)) < target:
            payload["data"].append(chunk)
        return payload

    @staticmethod
    def deep_merge(target: Dict[str, Any], source: Dict[str, Any]) -> Dict[str, Any]:
        """Recursive merge; nested dicts are merged, everything else is replaced."""
        result = dict(target)
        for key, value in source.items():
            if isinstance(value, dict) and isinstance(result.get(key), dict):
                result[key] = DataHelper.deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    @staticmethod
    def pick(obj: Dict[str, Any], keys: List[str]) -> Dict[str, Any]:
        return {key: obj[key] for key in keys if key in obj}

    @staticmethod
    def omit(obj: Dict[str, Any], keys: List[str]) -> Dict[str, Any]:
        return {key: value for key, value in obj.items() if key not in keys}


# ================================================================================
# Factory Base
# ================================================================================

class DataFactoryBase:
    """
    Base class for data factories.

    Each instance keeps its own counter, so two tests building users in
    parallel never share numbering state.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Args:
            seed: Random seed for reproducible DataHelper output
        """
        if seed is not None:
            random.seed(seed)
        self._counter = 0

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    @staticmethod
    def _timestamp() -> int:
        return int(datetime.now().timestamp() * 1000)

    @staticmethod
    def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
        data = dict(defaults)
        data.update(overrides)
        return data


# ================================================================================
# User Factory
# ================================================================================

class UserFactory(DataFactoryBase):
    """JSONPlaceholder users and ReqRes user requests."""

    def create_user(self, **overrides) -> User:
        """
        Create a complete JSONPlaceholder-shaped user.

        Args:
            **overrides: Fields replacing the defaults (shallow)

        Returns:
            User dictionary
        """
        n = self._next()
        defaults = {
            "id": n,
            "name": f"Test User {n}",
            "username": f"testuser{n}",
            "email": f"testuser{n}@example.com",
            "phone": f"+1-555-010-{n % 10000:04d}",
            "website": f"testuser{n}.com",
            "address": self.create_address(),
            "company": self.create_company(),
        }
        return self._merge(defaults, overrides)

    def create_user_request(self, **overrides) -> Dict[str, Any]:
        ts = self._timestamp()
        defaults = {
            "name": f"API Test User {ts}",
            "job": "Quality Assurance Engineer",
            "email": f"apitest{ts}@example.com",
        }
        return self._merge(defaults, overrides)

    def update_user_request(self, **overrides) -> Dict[str, Any]:
        ts = self._timestamp()
        defaults = {
            "name": f"Updated User {ts}",
            "job": "Senior QA Engineer",
            "email": f"updated{ts}@example.com",
        }
        return self._merge(defaults, overrides)

    def create_address(self, **overrides) -> Address:
        defaults = {
            "street": "123 Test Street",
            "suite": "Suite 100",
            "city": "Test City",
            "zipcode": "12345-6789",
            "geo": {"lat": "40.7128", "lng": "-74.0060"},
        }
        return self._merge(defaults, overrides)

    def create_company(self, **overrides) -> Company:
        defaults = {
            "name": "Test Corporation",
            "catchPhrase": "Quality through automation",
            "bs": "automated testing solutions",
        }
        return self._merge(defaults, overrides)

    def create_users(self, count: int, **overrides) -> List[User]:
        """Create count users named "Bulk User N"; overrides apply to each."""
        users = []
        for index in range(1, count + 1):
            fields = {
                "name": f"Bulk User {index}",
                "email": f"bulkuser{index}@example.com",
            }
            fields.update(overrides)
            users.append(self.create_user(**fields))
        return users

    def create_invalid_user(self) -> Dict[str, Any]:
        """Empty name, malformed email and too-short phone."""
        return {
            "name": "",
            "email": "invalid-email",
            "phone": "123",
        }


# ================================================================================
# Post / Comment Factories
# ================================================================================

class PostFactory(DataFactoryBase):
    """JSONPlaceholder posts."""

    def create_post(self, **overrides) -> Post:
        n = self._next()
        defaults = {
            "id": n,
            "title": f"Test Post {n}",
            "body": f"This is a test post created for API testing purposes. Post number {n}.",
            "userId": 1,
        }
        return self._merge(defaults, overrides)

    def create_post_request(self, **overrides) -> Dict[str, Any]:
        defaults = {
            "title": f"API Test Post {self._timestamp()}",
            "body": f"This post was created via API testing at {datetime.now().isoformat()}",
            "userId": 1,
        }
        return self._merge(defaults, overrides)

    def update_post_request(self, **overrides) -> Dict[str, Any]:
        defaults = {
            "title": f"Updated Post {self._timestamp()}",
            "body": f"This post was updated via API testing at {datetime.now().isoformat()}",
        }
        return self._merge(defaults, overrides)

    def create_posts(self, count: int, user_id: int = 1) -> List[Post]:
        return [
            self.create_post(
                title=f"Bulk Post {index}",
                body=f"This is bulk post number {index} for testing.",
                userId=user_id,
            )
            for index in range(1, count + 1)
        ]

    def create_invalid_post(self) -> Dict[str, Any]:
        """Empty title/body and a non-existent user."""
        return {"title": "", "body": "", "userId": 0}


class CommentFactory(DataFactoryBase):
    """JSONPlaceholder comments."""

    def create_comment(self, **overrides) -> Comment:
        n = self._next()
        defaults = {
            "id": n,
            "name": f"Test Comment {n}",
            "email": f"commenter{n}@example.com",
            "body": f"This is a test comment created for API testing. Comment number {n}.",
            "postId": 1,
        }
        return self._merge(defaults, overrides)

    def create_comments(self, count: int, post_id: int = 1) -> List[Comment]:
        return [
            self.create_comment(
                name=f"Comment {index} on Post {post_id}",
                email=f"commenter{index}@example.com",
                body=f"This is comment number {index} on post {post_id}.",
                postId=post_id,
            )
            for index in range(1, count + 1)
        ]


# ================================================================================
# Auth Factory
# ================================================================================

class AuthFactory(DataFactoryBase):
    """ReqRes login/register payloads (the documented demo accounts)."""

    def create_login_request(self, **overrides) -> AuthRequest:
        return self._merge({"email": "eve.holt@reqres.in", "password": "cityslicka"}, overrides)

    def create_register_request(self, **overrides) -> AuthRequest:
        return self._merge({"email": "eve.holt@reqres.in", "password": "pistol"}, overrides)

    def create_invalid_login_request(self) -> Dict[str, Any]:
        # password deliberately missing
        return {"email": "peter@klaven"}

    def create_invalid_register_request(self) -> Dict[str, Any]:
        return {"email": "sydney@fife"}

    def create_test_accounts(self) -> List[AuthRequest]:
        return [
            {"email": "eve.holt@reqres.in", "password": "cityslicka"},
            {"email": "george.bluth@reqres.in", "password": "testpass123"},
            {"email": "janet.weaver@reqres.in", "password": "securepass456"},
        ]


# ================================================================================
# Composite Factory
# ================================================================================

class DataFactory:
    """
    Main entry point bundling all factories.

    Usage:
        factory = DataFactory()
        user = factory.users.create_user(name="Jane")
        post = factory.posts.create_post_request(userId=user["id"])
    """

    def __init__(self, seed: Optional[int] = None):
        if seed is not None:
            random.seed(seed)
        self.users = UserFactory()
        self.posts = PostFactory()
        self.comments = CommentFactory()
        self.auth = AuthFactory()
        self.helper = DataHelper


__all__ = [
    "DataFactory",
    "DataFactoryBase",
    "DataHelper",
    "UserFactory",
    "PostFactory",
    "CommentFactory",
    "AuthFactory",
]
