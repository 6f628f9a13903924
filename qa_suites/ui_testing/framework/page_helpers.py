# ================================================================================
# Page Helpers Module
# ================================================================================
#
# Cross-page utilities that do not belong to any single page object.
#
#   - CommonActions: browser-level actions (scrolling, viewport, network
#     blocking, storage clearing, timestamped screenshots)
#   - PageHelpers: multi-element checks and assertions, form helpers,
#     action-then-verify flows
#
# Usage:
#   helpers = PageHelpers(page)
#   await helpers.assert_element_count("#table1 tbody tr", 4)
#   await CommonActions(page).emulate_mobile()
#
# ================================================================================

import asyncio
import re
from datetime import datetime
from pathlib import Path
from typing import Awaitable, Callable, Dict, Iterable, List, Optional

import allure
from loguru import logger
from playwright.async_api import Page, Route, expect

from qa_tools.report_tools import attach_png
from qa_tools.retry import retry_async

from .page_base import SCREENSHOT_DIR, BasePage


MOBILE_VIEWPORT = {"width": 375, "height": 667}
MOBILE_USER_AGENT = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 14_7_1 like Mac OS X) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Mobile/15E148"
)

_STABLE_JS = """
(selector) => {
    const element = document.querySelector(selector);
    if (!element) return false;
    const first = element.getBoundingClientRect();
    return new Promise(resolve => {
        setTimeout(() => {
            const second = element.getBoundingClientRect();
            resolve(first.top === second.top && first.left === second.left);
        }, 100);
    });
}
"""


class CommonActions:
    """Browser-level actions on one page."""

    def __init__(self, page: Page, screenshot_dir: Optional[Path] = None):
        self.page = page
        self.screenshot_dir = Path(screenshot_dir) if screenshot_dir else SCREENSHOT_DIR

    async def wait_for_network_idle(self, timeout: float = 30000) -> None:
        await self.page.wait_for_load_state("networkidle", timeout=timeout)

    async def take_timestamped_screenshot(self, name: str) -> Path:
        """Full-page PNG named <name>-<iso timestamp>.png, attached to Allure."""
        self.screenshot_dir.mkdir(parents=True, exist_ok=True)
        timestamp = re.sub(r"[:.]", "-", datetime.now().isoformat())
        path = self.screenshot_dir / f"{name}-{timestamp}.png"
        await self.page.screenshot(path=str(path), full_page=True)
        attach_png(path, name=name)
        return path

    async def scroll_to_top(self) -> None:
        await self.page.evaluate("() => window.scrollTo(0, 0)")

    async def scroll_to_bottom(self) -> None:
        await self.page.evaluate("() => window.scrollTo(0, document.body.scrollHeight)")

    async def clear_browser_data(self) -> None:
        await self.page.context.clear_cookies()
        await self.page.context.clear_permissions()

    async def set_viewport_size(self, width: int, height: int) -> None:
        await self.page.set_viewport_size({"width": width, "height": height})

    async def emulate_mobile(self) -> None:
        """
        Shrink the viewport to 375x667 and send an iPhone user agent.

        For full emulation (touch, DPR) open the page with
        BrowserManager.new_page(device=...) instead.
        """
        await self.page.set_viewport_size(MOBILE_VIEWPORT)
        await self.page.set_extra_http_headers({"User-Agent": MOBILE_USER_AGENT})

    async def block_resources(self, resource_types: Iterable[str]) -> None:
        """Abort every request whose resource type is listed (e.g. "image", "font")."""
        blocked = set(resource_types)

        async def handler(route: Route) -> None:
            if route.request.resource_type in blocked:
                await route.abort()
            else:
                await route.continue_()

        await self.page.route("**/*", handler)
        logger.debug(f"Blocking resource types: {sorted(blocked)}")

    async def wait_for_element_stable(self, selector: str, timeout: float = 10000) -> None:
        """Wait until the element's bounding box stops moving between two frames 100ms apart."""
        await self.page.wait_for_function(_STABLE_JS, arg=selector, timeout=timeout)


class PageHelpers:
    """
    Assertion and form helpers working on raw selectors.

    Args:
        page: Playwright Page object
        base: Optional BasePage to reuse its default timeout and waits
    """

    def __init__(self, page: Page, base: Optional[BasePage] = None):
        self.page = page
        self.base = base or BasePage(page)

    async def assert_url_contains(self, expected_path: str) -> None:
        await self.base.assert_url_contains(expected_path)

    async def assert_page_title(self, expected_title: str) -> None:
        await self.base.assert_title(expected_title)

    async def wait_for_multiple_elements(self, selectors: Iterable[str]) -> None:
        await asyncio.gather(*(self.base.wait_for_element(s) for s in selectors))

    async def element_exists(self, selector: str) -> bool:
        return await self.page.locator(selector).count() > 0

    async def get_multiple_elements_text(self, selector: str) -> List[str]:
        """Stripped, non-empty text of every match."""
        texts = await self.page.locator(selector).all_text_contents()
        return [text.strip() for text in texts if text and text.strip()]

    async def assert_css_property(self, selector: str, prop: str, expected_value: str) -> None:
        actual = await self.page.locator(selector).evaluate(
            "(el, prop) => getComputedStyle(el).getPropertyValue(prop)", prop
        )
        if actual != expected_value:
            raise AssertionError(
                f"CSS {prop} of {selector}: expected {expected_value!r}, got {actual!r}"
            )

    async def assert_element_count(self, selector: str, expected_count: int) -> None:
        await expect(self.page.locator(selector)).to_have_count(expected_count)

    async def perform_action_and_verify_url_change(
        self,
        action: Callable[[], Awaitable[None]],
        expected_url_pattern: str,
    ) -> None:
        await action()
        await self.assert_url_contains(expected_url_pattern)

    async def fill_form(self, form_data: Dict[str, str]) -> None:
        """Fill each {selector: value} pair in order."""
        with allure.step(f"Fill form ({len(form_data)} fields)"):
            for selector, value in form_data.items():
                await self.base.fill(selector, value)

    async def get_form_values(self, field_selectors: Dict[str, str]) -> Dict[str, str]:
        """Map {name: selector} to {name: current input value}."""
        values: Dict[str, str] = {}
        for key, selector in field_selectors.items():
            values[key] = await self.page.locator(selector).input_value()
        return values

    async def wait_for_element_to_disappear(self, selector: str, timeout: float = 10000) -> None:
        await self.base.wait_for_element(selector, state="detached", timeout=timeout)

    async def verify_multiple_assertions(
        self,
        assertions: Iterable[Callable[[], Awaitable[None]]],
    ) -> None:
        """Run assertion coroutines concurrently; the first failure propagates."""
        await asyncio.gather(*(assertion() for assertion in assertions))

    async def screenshot_on_failure(
        self,
        condition: Callable[[], Awaitable[bool]],
        screenshot_name: str,
    ) -> bool:
        """Evaluate condition; capture a screenshot when it is falsy. Returns the result."""
        result = await condition()
        if not result:
            await self.base.screenshot(f"failure-{screenshot_name}", full_page=True)
        return result

    async def retry_action(
        self,
        action: Callable[[], Awaitable[None]],
        max_attempts: int = 3,
        delay_ms: float = 1000,
    ) -> None:
        """Fixed-delay retry of a UI action; the last error propagates."""
        await retry_async(
            action,
            max_attempts=max_attempts,
            initial_delay=delay_ms / 1000,
            backoff_factor=1.0,
        )


__all__ = [
    "CommonActions",
    "PageHelpers",
]
