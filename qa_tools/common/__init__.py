"""
================================================================================
QA Tools Common Utilities
================================================================================

Exports:
    - ConfigLoader: Singleton YAML + environment configuration
    - init_logger / set_log_level: Loguru setup, once per process
    - log_request / log_response: Leveled HTTP log helpers
    - RunContext: Per-test logger binding and metrics

Usage:
    from qa_tools.common import ConfigLoader, init_logger

    init_logger()
    base_url = ConfigLoader().get("api.reqres.base_url")

================================================================================
"""

from qa_tools.common.config_loader import ConfigLoader, ConfigurationError
from qa_tools.common.log_utils import (
    init_logger,
    log_request,
    log_response,
    set_log_level,
)
from qa_tools.common.run_context import RunContext

__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "init_logger",
    "set_log_level",
    "log_request",
    "log_response",
    "RunContext",
]
