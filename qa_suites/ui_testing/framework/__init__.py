"""
================================================================================
UI Testing Framework
================================================================================

Modules:
    - page_base: BasePage interaction handle and page error types
    - browser_manager: Browser/context lifecycle and device emulation
    - page_helpers: CommonActions and PageHelpers

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserManager
from .page_base import DEFAULT_TIMEOUT_MS, BasePage, ElementNotReadyError, NavigationError, PageError
from .page_helpers import CommonActions, PageHelpers

__all__ = [
    "BasePage",
    "BrowserManager",
    "CommonActions",
    "DEFAULT_TIMEOUT_MS",
    "ElementNotReadyError",
    "NavigationError",
    "PageError",
    "PageHelpers",
]
