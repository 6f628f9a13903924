"""
Fixtures for the offline framework tests.

Nothing here touches the network or launches a browser.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Generator

import pytest

from qa_tools.common import ConfigLoader


class DummyConfig:
    """Stand-in for ConfigLoader backed by a flat {dotted.key: value} dict."""

    def __init__(self, values: Dict[str, Any]):
        self.values = values

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)


FAST_API_CONFIG = {
    "api.timeout": 5,
    "api.retry_count": 3,
    "api.retry_backoff": 0,
    "api.retry_max_wait": 0,
    "api.max_response_time_ms": 5000,
    "api.jsonplaceholder.base_url": "https://jsonplaceholder.test",
    "api.reqres.base_url": "https://reqres.test/api",
    "api.reqres.api_key": "unit-test-key",
}


@pytest.fixture(autouse=True)
def _isolated_config_singleton() -> Generator[None, None, None]:
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


@pytest.fixture
def fast_config() -> DummyConfig:
    """Config with zero backoff so retry paths do not sleep."""
    return DummyConfig(dict(FAST_API_CONFIG))


@pytest.fixture
def make_config() -> Callable[..., DummyConfig]:
    """Usage: make_config({"api.retry_count": 1})"""
    def factory(overrides: Dict[str, Any] = None) -> DummyConfig:
        values = dict(FAST_API_CONFIG)
        values.update(overrides or {})
        return DummyConfig(values)

    return factory
