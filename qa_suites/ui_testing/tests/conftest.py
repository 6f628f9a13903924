"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI tests, providing fixtures for browser
management, page objects, and test setup/teardown.

Key Features:
- One browser per session, one fresh context + page per test
- Page Object fixtures bound to configured base URLs
- Screenshot capture on failure (saved and attached to Allure)

All async fixtures run on the session event loop, so tests must use
`pytest.mark.asyncio(loop_scope="session")`.

================================================================================
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from loguru import logger
from playwright.async_api import BrowserContext, Error as PlaywrightError, Page

from qa_tools.common import ConfigLoader
from qa_suites.ui_testing.framework import DEFAULT_TIMEOUT_MS, BasePage, BrowserManager, CommonActions, PageHelpers
from qa_suites.ui_testing.pages import (
    DropdownPage,
    LoginPage,
    PlaywrightDocsPage,
    PlaywrightHomePage,
    TableDataPage,
)
from qa_suites.ui_testing.pages.site_data import PLAYWRIGHT_BASE_URL, THE_INTERNET_BASE_URL


# ================================================================================
# Configuration Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def ui_config() -> ConfigLoader:
    return ConfigLoader()


@pytest.fixture(scope="session")
def playwright_base_url(ui_config: ConfigLoader) -> str:
    return ui_config.get("ui.playwright_base_url", PLAYWRIGHT_BASE_URL)


@pytest.fixture(scope="session")
def the_internet_base_url(ui_config: ConfigLoader) -> str:
    return ui_config.get("ui.the_internet_base_url", THE_INTERNET_BASE_URL)


@pytest.fixture(scope="session")
def ui_timeout(ui_config: ConfigLoader) -> float:
    """Wait bound in milliseconds (ui.timeout) shared by the page and the page objects."""
    return float(ui_config.get("ui.timeout", DEFAULT_TIMEOUT_MS))


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def browser_manager(ui_config: ConfigLoader) -> AsyncGenerator[BrowserManager, None]:
    """
    Session-scoped browser manager fixture.

    Provides a single launched browser for all tests in the session,
    reducing browser launch overhead.
    """
    manager = BrowserManager(config=ui_config)
    await manager.start()
    yield manager
    await manager.close()


@pytest_asyncio.fixture(loop_scope="session")
async def context(browser_manager: BrowserManager) -> AsyncGenerator[BrowserContext, None]:
    """
    Function-scoped browser context fixture.

    Creates a new browser context for each test, providing isolation.
    """
    context = await browser_manager.new_context()
    yield context
    await browser_manager.release(context)


@pytest_asyncio.fixture(loop_scope="session")
async def page(request, context: BrowserContext, ui_timeout: float) -> AsyncGenerator[Page, None]:
    """
    Function-scoped page fixture.

    Takes a full-page screenshot before closing when the test body failed.
    """
    page = await context.new_page()
    page.set_default_timeout(ui_timeout)
    yield page

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        try:
            await BasePage(page).screenshot(f"failure_{request.node.name}", full_page=True)
        except PlaywrightError as e:
            logger.warning(f"Failed to capture screenshot on failure: {e.message}")
    await page.close()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(page: Page, the_internet_base_url: str, ui_timeout: float) -> LoginPage:
    return LoginPage(page, the_internet_base_url, timeout=ui_timeout)


@pytest.fixture
def table_data_page(page: Page, the_internet_base_url: str, ui_timeout: float) -> TableDataPage:
    return TableDataPage(page, the_internet_base_url, timeout=ui_timeout)


@pytest.fixture
def dropdown_page(page: Page, the_internet_base_url: str, ui_timeout: float) -> DropdownPage:
    return DropdownPage(page, the_internet_base_url, timeout=ui_timeout)


@pytest.fixture
def home_page(page: Page, playwright_base_url: str, ui_timeout: float) -> PlaywrightHomePage:
    return PlaywrightHomePage(page, playwright_base_url, timeout=ui_timeout)


@pytest.fixture
def docs_page(page: Page, playwright_base_url: str, ui_timeout: float) -> PlaywrightDocsPage:
    return PlaywrightDocsPage(page, playwright_base_url, timeout=ui_timeout)


@pytest.fixture
def page_helpers(page: Page, ui_timeout: float) -> PageHelpers:
    return PageHelpers(page, BasePage(page, default_timeout=ui_timeout))


@pytest.fixture
def common_actions(page: Page) -> CommonActions:
    return CommonActions(page)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Expose each phase's report on the item (item.rep_setup / rep_call / rep_teardown).

    The page fixture reads rep_call during teardown to decide whether to
    capture a failure screenshot.
    """
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)
