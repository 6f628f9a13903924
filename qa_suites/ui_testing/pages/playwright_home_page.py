"""
================================================================================
Playwright Home Page Object (Async / Playwright)
================================================================================

Landing page of playwright.dev: hero heading, top navigation, feature blurbs
and the DocSearch modal.

================================================================================
"""

from __future__ import annotations

from typing import List

import allure
from playwright.async_api import Page

from qa_suites.ui_testing.framework.page_base import DEFAULT_TIMEOUT_MS, BasePage
from qa_suites.ui_testing.pages.site_data import EXPECTED_MESSAGES, PLAYWRIGHT_BASE_URL


class PlaywrightHomePage:
    """playwright.dev home page object (async)."""

    def __init__(
        self,
        page: Page,
        base_url: str = PLAYWRIGHT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_MS,
    ):
        self.page = page
        self.base = BasePage(page, base_url, default_timeout=timeout)

        self.main_heading = page.locator("h1").first
        self.docs_link = page.locator("text=Docs").first
        self.get_started_button = page.locator("text=Get started").first
        self.github_link = page.locator('[aria-label="GitHub repository"], [aria-label="GitHub"]').first
        self.navigation_menu = page.locator('nav[aria-label="Main"], nav[role="navigation"]').first
        self.search_button = page.locator('button.DocSearch-Button, [aria-label="Search"]').first
        self.search_input = page.locator("input.DocSearch-Input")
        self.features_section = page.locator("text=Cross-browser").first
        self.code_example = page.locator("pre").first
        self.navigation_links = page.locator("nav a")

    @allure.step("Open playwright.dev home page")
    async def navigate_to_home_page(self) -> "PlaywrightHomePage":
        await self.base.navigate("/")
        await self.base.wait_for_page_load()
        return self

    @allure.step("Click Docs link")
    async def click_docs_link(self) -> None:
        await self.base.click(self.docs_link)

    @allure.step("Click Get started")
    async def click_get_started(self) -> None:
        await self.base.click(self.get_started_button)

    async def click_github_link(self) -> None:
        await self.base.click(self.github_link)

    async def get_main_heading_text(self) -> str:
        return (await self.base.get_text(self.main_heading)).strip()

    async def is_features_section_visible(self) -> bool:
        return await self.base.is_visible(self.features_section)

    async def is_code_example_visible(self) -> bool:
        return await self.base.is_visible(self.code_example)

    async def get_code_example_text(self) -> str:
        return await self.base.get_text(self.code_example)

    @allure.step("Verify home page is loaded")
    async def assert_home_page_loaded(self) -> None:
        await self.base.assert_title(EXPECTED_MESSAGES["playwright_title"])
        await self.base.assert_visible(self.main_heading)
        await self.base.assert_text(self.main_heading, "Playwright")

    @allure.step("Verify top navigation")
    async def assert_navigation_present(self) -> None:
        await self.base.assert_visible(self.docs_link)
        await self.base.assert_visible(self.github_link)
        await self.base.assert_visible(self.navigation_menu)

    @allure.step("Search for '{search_term}'")
    async def search_content(self, search_term: str) -> bool:
        """
        Open DocSearch and type the term.

        Returns:
            False when the search button is not rendered (e.g. narrow viewports)
        """
        if not await self.base.is_visible(self.search_button):
            return False
        await self.base.click(self.search_button)
        await self.base.fill(self.search_input, search_term)
        return True

    async def get_navigation_links(self) -> List[str]:
        texts = await self.navigation_links.all_text_contents()
        return [text.strip() for text in texts if text and text.strip()]


__all__ = ["PlaywrightHomePage"]
