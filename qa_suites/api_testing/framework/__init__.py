"""
================================================================================
API Testing Framework
================================================================================

API automation framework components.

Modules:
    - http_client: httpx client with retry and Allure logging
    - api_clients: JSONPlaceholder and ReqRes service clients
    - models: ApiResponse envelope and resource shapes
    - data_factory: Request/fixture payload factories
    - response_utils: Response extraction and assertion helpers

Author: Automation Team
License: MIT
================================================================================
"""

from .api_clients import BaseApiClient, PostsClient, ReqResClient, UsersClient
from .data_factory import (
    AuthFactory,
    CommentFactory,
    DataFactory,
    DataHelper,
    PostFactory,
    UserFactory,
)
from .http_client import HttpClient, HttpClientError
from .models import ApiResponse
from .response_utils import HttpStatusError, ResponseUtils

__all__ = [
    "ApiResponse",
    "BaseApiClient",
    "UsersClient",
    "PostsClient",
    "ReqResClient",
    "HttpClient",
    "HttpClientError",
    "HttpStatusError",
    "ResponseUtils",
    "DataFactory",
    "DataHelper",
    "UserFactory",
    "PostFactory",
    "CommentFactory",
    "AuthFactory",
]
