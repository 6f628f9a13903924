"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - One browser per session, one isolated context per test
    - chromium / firefox / webkit selection
    - Device emulation from Playwright's descriptor registry
    - Launch/context options from config (ui.* keys)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
)

from qa_tools.common import ConfigLoader


SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


class BrowserManager:
    """
    Manages the browser instance and per-test contexts.

    Usage:
        async with BrowserManager(browser_type="firefox") as manager:
            page = await manager.new_page()
            await page.goto("https://playwright.dev")

        # Mobile emulation
        async with BrowserManager() as manager:
            page = await manager.new_page(device="iPhone 13")
    """

    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": ["--ignore-certificate-errors"],
    }

    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1280, "height": 720},
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        headless: Optional[bool] = None,
        browser_type: Optional[str] = None,
        slow_mo: Optional[float] = None,
        config: Optional[ConfigLoader] = None,
    ):
        """
        Initialize browser manager. Unset arguments fall back to config.

        Args:
            headless: Run browser in headless mode (ui.headless)
            browser_type: 'chromium', 'firefox' or 'webkit' (ui.browser)
            slow_mo: Delay between operations in ms (ui.slow_mo)
            config: Configuration loader
        """
        config = config or ConfigLoader()
        self.headless = config.get("ui.headless", True) if headless is None else headless
        self.browser_type = browser_type or config.get("ui.browser", "chromium")
        self.slow_mo = float(config.get("ui.slow_mo", 0) if slow_mo is None else slow_mo)

        if self.browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(
                f"Unsupported browser '{self.browser_type}', "
                f"expected one of {SUPPORTED_BROWSERS}"
            )

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    async def __aenter__(self) -> "BrowserManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def start(self) -> None:
        """Start Playwright and launch browser."""
        self._playwright = await async_playwright().start()
        browser_launcher = getattr(self._playwright, self.browser_type)

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": self.headless,
            "slow_mo": self.slow_mo,
        }

        self._browser = await browser_launcher.launch(**launch_options)
        logger.debug(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless})"
        )

    async def close(self) -> None:
        """Close all contexts, then the browser and Playwright."""
        for context in self._contexts:
            try:
                await context.close()
            except PlaywrightError as e:
                logger.warning(f"Context close failed: {e.message}")
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    def device_options(self, device: str) -> Dict[str, Any]:
        """Context options for a named device ("iPhone 13", "Pixel 5", ...)."""
        if not self._playwright:
            raise RuntimeError("Browser not started. Call start() first.")
        try:
            descriptor = dict(self._playwright.devices[device])
        except KeyError as e:
            raise ValueError(f"Unknown device descriptor: {device}") from e
        # firefox rejects is_mobile
        if self.browser_type == "firefox":
            descriptor.pop("is_mobile", None)
        descriptor.pop("default_browser_type", None)
        return descriptor

    async def new_context(
        self,
        device: Optional[str] = None,
        **options: Any,
    ) -> BrowserContext:
        """
        Create new isolated browser context.

        Args:
            device: Optional device descriptor name to emulate
            **options: Additional context options (override defaults/device)

        Returns:
            New BrowserContext
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context_options = dict(self.DEFAULT_CONTEXT_OPTIONS)
        if device:
            context_options.update(self.device_options(device))
        context_options.update(options)

        context = await self._browser.new_context(**context_options)
        self._contexts.append(context)
        return context

    async def new_page(
        self,
        context: Optional[BrowserContext] = None,
        device: Optional[str] = None,
        **context_options: Any,
    ) -> Page:
        """Create new page in new or existing context."""
        if context is None:
            context = await self.new_context(device=device, **context_options)

        return await context.new_page()

    async def release(self, context: BrowserContext) -> None:
        """Close one context and stop tracking it."""
        if context in self._contexts:
            self._contexts.remove(context)
        await context.close()

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser


__all__ = [
    "BrowserManager",
    "SUPPORTED_BROWSERS",
]
