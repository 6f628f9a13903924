"""
================================================================================
Logging Utilities
================================================================================

Centralized Loguru setup plus request/response log helpers shared by the API
clients and page objects.

Usage:
    from qa_tools.common import init_logger, log_response

    init_logger()
    log_response(200, "/users/1", 123.4)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from qa_tools.common.config_loader import ConfigLoader
from qa_tools.validation.validation_utils import sanitize_for_logging


DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_logger_initialized = False


def init_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Runs once per process; later calls are no-ops unless force is set.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_string: Log format string. Uses DEFAULT_FORMAT if not provided.
        log_file: Optional file path to write logs to. Defaults to config value.
        force: Re-apply configuration even if already initialized.
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    config = ConfigLoader()
    level = (level or config.get("logging.level", "INFO")).upper()
    format_string = format_string or config.get("logging.format", DEFAULT_FORMAT)

    logger.remove()
    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    log_file = log_file or config.get("logging.file")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation=config.get("logging.rotation", "10 MB"),
            retention=config.get("logging.retention", "7 days"),
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized (level={level})")


def set_log_level(level: str) -> None:
    """Re-configure the process-wide sinks at a new level."""
    init_logger(level=level, force=True)


def log_request(method: str, url: str, body: Any = None, log: Any = None) -> None:
    """
    Log an outgoing request; the payload goes out at DEBUG, sanitized.

    log is an optional bound logger (RunContext.log) used instead of the global one.
    """
    log = logger if log is None else log
    log.info(f"➡️ {method.upper()} Request to {url}")
    if body is not None:
        log.debug(f"Request payload: {_dump(sanitize_for_logging(body))}")


def log_response(
    status: int,
    url: str = "",
    response_time: float = 0.0,
    data: Any = None,
    log: Any = None,
) -> str:
    """
    Log a response at a level derived from its status.

    2xx logs at INFO, >= 400 at ERROR (with the sanitized body), anything
    else at WARNING.

    Returns:
        The level name used
    """
    log = logger if log is None else log
    suffix = f" {url}" if url else ""
    if 200 <= status < 300:
        level = "INFO"
        log.info(f"✅ Response: {status}{suffix} ({response_time:.2f}ms)")
    elif status >= 400:
        level = "ERROR"
        detail = f" | {_dump(sanitize_for_logging(data))}" if data else ""
        log.error(f"❌ Response: {status}{suffix} ({response_time:.2f}ms){detail}")
    else:
        level = "WARNING"
        log.warning(f"⚠️ Response: {status}{suffix} ({response_time:.2f}ms)")
    return level


def _dump(data: Any) -> str:
    try:
        return json.dumps(data, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return str(data)


__all__ = [
    "init_logger",
    "set_log_level",
    "log_request",
    "log_response",
    "sanitize_for_logging",
    "DEFAULT_FORMAT",
]
