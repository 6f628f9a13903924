"""
================================================================================
Base Page
================================================================================

Interaction handle composed into every page object.

Provides:
    - URL resolution and navigation with NavigationError on failure
    - Wait-then-act element interactions (ElementNotReadyError on timeout)
    - Polling assertions delegated to Playwright's expect
    - Screenshot capture with Allure attachment

Page objects hold a BasePage (`self.base`) rather than subclassing it.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page, expect
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from qa_tools.report_tools import attach_png


# Default output directory for screenshots (repo root / reports / screenshots)
SCREENSHOT_DIR = Path(__file__).parent.parent.parent.parent / "reports" / "screenshots"

DEFAULT_TIMEOUT_MS = 30000

# A locator reference is either a selector string or an already-built Locator
Target = Union[str, Locator]


class PageError(Exception):
    """Base exception for page interaction failures."""
    pass


class NavigationError(PageError):
    """Raised when a navigation fails, times out or returns an error status."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None):
        self.url = url
        self.status = status
        super().__init__(f"Navigation to {url} failed: {reason}")


class ElementNotReadyError(PageError):
    """Raised when an element does not reach the wanted state in time."""

    def __init__(self, target: str, state: str, timeout: float):
        self.target = target
        self.state = state
        self.timeout = timeout
        super().__init__(f"Element '{target}' not {state} within {timeout:.0f}ms")


class BasePage:
    """
    Stateless facade over a Playwright page.

    Usage:
        class LoginPage:
            def __init__(self, page: Page, base_url: str):
                self.base = BasePage(page, base_url)
                self.username_input = "#username"

            async def fill_username(self, value: str):
                await self.base.fill(self.username_input, value)
    """

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        default_timeout: float = DEFAULT_TIMEOUT_MS,
        screenshot_dir: Optional[Path] = None,
    ):
        """
        Args:
            page: Playwright Page object (owned by the test)
            base_url: Root relative URLs are resolved against
            default_timeout: Wait bound in milliseconds
            screenshot_dir: Where screenshot() writes PNGs
        """
        self.page = page
        self.base_url = base_url.rstrip("/")
        self.default_timeout = default_timeout
        self.screenshot_dir = Path(screenshot_dir) if screenshot_dir else SCREENSHOT_DIR

    def locator(self, target: Target) -> Locator:
        """Resolve a selector string lazily against the page."""
        if isinstance(target, str):
            return self.page.locator(target)
        return target

    @staticmethod
    def describe(target: Target) -> str:
        return target if isinstance(target, str) else str(target)

    # =========================================================================
    # Navigation
    # =========================================================================

    def resolve_url(self, url: str = "") -> str:
        """Absolute http(s) URLs pass through; anything else joins base_url."""
        if url.startswith(("http://", "https://")):
            return url
        if not url:
            return self.base_url
        return f"{self.base_url}/{url.lstrip('/')}"

    async def navigate(self, url: str = "", wait_until: str = "load") -> None:
        """
        Load a URL.

        Args:
            url: Absolute URL or path relative to base_url
            wait_until: 'load', 'domcontentloaded', 'networkidle' or 'commit'

        Raises:
            NavigationError: On an error status, a timeout or a browser error
        """
        full_url = self.resolve_url(url)
        with allure.step(f"Navigate to {full_url}"):
            try:
                response = await self.page.goto(
                    full_url,
                    wait_until=wait_until,
                    timeout=self.default_timeout,
                )
            except PlaywrightTimeoutError as e:
                raise NavigationError(
                    full_url, f"timed out after {self.default_timeout:.0f}ms"
                ) from e
            except PlaywrightError as e:
                raise NavigationError(full_url, e.message) from e

            if response is not None and response.status >= 400:
                raise NavigationError(
                    full_url, f"HTTP {response.status}", status=response.status
                )
            logger.debug(f"Navigated to: {full_url}")

    async def wait_for_page_load(
        self,
        state: str = "networkidle",
        timeout: Optional[float] = None,
    ) -> None:
        await self.page.wait_for_load_state(state, timeout=timeout or self.default_timeout)

    async def get_title(self) -> str:
        return await self.page.title()

    @property
    def current_url(self) -> str:
        return self.page.url

    async def refresh(self) -> None:
        await self.page.reload()

    async def go_back(self) -> None:
        await self.page.go_back()

    async def go_forward(self) -> None:
        await self.page.go_forward()

    async def pause(self, ms: float) -> None:
        await self.page.wait_for_timeout(ms)

    # =========================================================================
    # Element Interactions
    # =========================================================================

    async def wait_for_element(
        self,
        target: Target,
        state: str = "visible",
        timeout: Optional[float] = None,
    ) -> Locator:
        """
        Wait for element to reach a state.

        Args:
            target: Selector or Locator
            state: 'visible', 'hidden', 'attached' or 'detached'
            timeout: Milliseconds; defaults to default_timeout

        Returns:
            The resolved Locator

        Raises:
            ElementNotReadyError: If the state is not reached in time
        """
        timeout = timeout if timeout is not None else self.default_timeout
        loc = self.locator(target)
        try:
            await loc.wait_for(state=state, timeout=timeout)
        except PlaywrightTimeoutError as e:
            raise ElementNotReadyError(self.describe(target), state, timeout) from e
        return loc

    async def click(self, target: Target, timeout: Optional[float] = None) -> None:
        with allure.step(f"Click: {self.describe(target)}"):
            loc = await self.wait_for_element(target, timeout=timeout)
            await loc.click()

    async def fill(
        self,
        target: Target,
        value: str,
        timeout: Optional[float] = None,
        secret: bool = False,
    ) -> None:
        """Wait, clear, then fill. Secret values are masked in the Allure step."""
        shown = "*" * len(value) if secret else value
        with allure.step(f"Fill {self.describe(target)}: {shown}"):
            loc = await self.wait_for_element(target, timeout=timeout)
            await loc.clear()
            await loc.fill(value)

    async def select_option(
        self,
        target: Target,
        option: Union[int, str],
        timeout: Optional[float] = None,
    ) -> List[str]:
        """Select by index when option is an int, by visible label otherwise."""
        with allure.step(f"Select {option!r} in {self.describe(target)}"):
            loc = await self.wait_for_element(target, timeout=timeout)
            if isinstance(option, int) and not isinstance(option, bool):
                return await loc.select_option(index=option)
            return await loc.select_option(label=option)

    async def get_text(self, target: Target, timeout: Optional[float] = None) -> str:
        """Text content of the element, "" when it has none."""
        loc = await self.wait_for_element(target, timeout=timeout)
        return await loc.text_content() or ""

    async def get_attribute(
        self,
        target: Target,
        name: str,
        timeout: Optional[float] = None,
    ) -> str:
        """Attribute value, "" when the attribute is absent."""
        loc = await self.wait_for_element(target, timeout=timeout)
        return await loc.get_attribute(name) or ""

    async def is_visible(self, target: Target) -> bool:
        return await self.locator(target).is_visible()

    async def is_enabled(self, target: Target) -> bool:
        return await self.locator(target).is_enabled()

    async def scroll_into_view(self, target: Target) -> None:
        await self.locator(target).scroll_into_view_if_needed()

    # =========================================================================
    # Assertions
    # =========================================================================

    async def assert_title(self, expected: str, timeout: Optional[float] = None) -> None:
        """Title contains expected, case-insensitively."""
        pattern = re.compile(re.escape(expected), re.IGNORECASE)
        await expect(self.page).to_have_title(pattern, timeout=timeout or self.default_timeout)

    async def assert_text(
        self,
        target: Target,
        expected: str,
        timeout: Optional[float] = None,
    ) -> None:
        await expect(self.locator(target)).to_contain_text(
            expected, timeout=timeout or self.default_timeout
        )

    async def assert_visible(self, target: Target, timeout: Optional[float] = None) -> None:
        await expect(self.locator(target)).to_be_visible(timeout=timeout or self.default_timeout)

    async def assert_hidden(self, target: Target, timeout: Optional[float] = None) -> None:
        await expect(self.locator(target)).to_be_hidden(timeout=timeout or self.default_timeout)

    async def assert_enabled(self, target: Target, timeout: Optional[float] = None) -> None:
        await expect(self.locator(target)).to_be_enabled(timeout=timeout or self.default_timeout)

    async def assert_disabled(self, target: Target, timeout: Optional[float] = None) -> None:
        await expect(self.locator(target)).to_be_disabled(timeout=timeout or self.default_timeout)

    async def assert_url_contains(self, fragment: str, timeout: Optional[float] = None) -> None:
        await expect(self.page).to_have_url(
            re.compile(re.escape(fragment)), timeout=timeout or self.default_timeout
        )

    # =========================================================================
    # Screenshot
    # =========================================================================

    async def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Returns:
            Path to saved screenshot
        """
        self.screenshot_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.screenshot_dir / f"{name}_{timestamp}.png"

        await self.page.screenshot(path=str(filepath), full_page=full_page)

        if attach_to_allure:
            attach_png(filepath, name=name)

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath


__all__ = [
    "BasePage",
    "DEFAULT_TIMEOUT_MS",
    "PageError",
    "NavigationError",
    "ElementNotReadyError",
    "Target",
]
