"""
================================================================================
Playwright Docs Page Object (Async / Playwright)
================================================================================

Any page under playwright.dev/docs: sidebar, breadcrumbs, table of contents,
code blocks and previous/next pagination.

================================================================================
"""

from __future__ import annotations

from typing import List
from urllib.parse import urlparse

import allure
from playwright.async_api import Page

from qa_suites.ui_testing.framework.page_base import DEFAULT_TIMEOUT_MS, BasePage
from qa_suites.ui_testing.pages.site_data import PLAYWRIGHT_BASE_URL


class PlaywrightDocsPage:
    """playwright.dev documentation page object (async)."""

    def __init__(
        self,
        page: Page,
        base_url: str = PLAYWRIGHT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_MS,
    ):
        self.page = page
        self.base = BasePage(page, base_url, default_timeout=timeout)

        self.page_heading = page.locator("h1").first
        self.docs_sidebar = page.locator('[aria-label="Docs sidebar"]')
        self.breadcrumbs = page.locator('[aria-label="Breadcrumbs"]')
        self.content_area = page.locator("main")
        self.search_button = page.locator('button.DocSearch-Button, [aria-label="Search"]').first
        self.search_input = page.locator("input.DocSearch-Input")
        self.next_page_link = page.locator("a.pagination-nav__link--next")
        self.previous_page_link = page.locator("a.pagination-nav__link--prev")
        self.toc_sidebar = page.locator('.table-of-contents, [data-testid="table-of-contents"]').first
        self.code_blocks = page.locator("pre code")
        self.edit_page_link = page.locator("text=Edit this page")

    @allure.step("Open docs section '{section}'")
    async def navigate_to_docs_section(self, section: str) -> "PlaywrightDocsPage":
        """A section starting with "/" is a path; otherwise it is /docs/<section>."""
        path = section if section.startswith("/") else f"/docs/{section}"
        await self.base.navigate(path)
        await self.base.wait_for_page_load()
        return self

    @allure.step("Click sidebar item '{item_text}'")
    async def click_sidebar_item(self, item_text: str) -> None:
        item = self.docs_sidebar.locator("a").filter(has_text=item_text).first
        await self.base.click(item)

    @allure.step("Search docs for '{search_term}'")
    async def search_docs(self, search_term: str) -> bool:
        """Open DocSearch, type the term and submit. False if search is not rendered."""
        if not await self.base.is_visible(self.search_button):
            return False
        await self.base.click(self.search_button)
        await self.base.fill(self.search_input, search_term)
        await self.page.keyboard.press("Enter")
        return True

    async def click_next_page(self) -> bool:
        if not await self.base.is_visible(self.next_page_link):
            return False
        await self.base.click(self.next_page_link)
        return True

    async def click_previous_page(self) -> bool:
        if not await self.base.is_visible(self.previous_page_link):
            return False
        await self.base.click(self.previous_page_link)
        return True

    async def click_toc_item(self, heading: str) -> None:
        item = self.toc_sidebar.locator("a").filter(has_text=heading).first
        await self.base.click(item)

    async def get_page_heading(self) -> str:
        return (await self.base.get_text(self.page_heading)).strip()

    async def get_sidebar_nav_items(self) -> List[str]:
        texts = await self.docs_sidebar.locator("a").all_text_contents()
        return [text.strip() for text in texts if text and text.strip()]

    async def get_code_examples(self) -> List[str]:
        texts = await self.code_blocks.all_text_contents()
        return [text.strip() for text in texts if text and text.strip()]

    async def are_breadcrumbs_visible(self) -> bool:
        return await self.base.is_visible(self.breadcrumbs)

    async def is_toc_visible(self) -> bool:
        return await self.base.is_visible(self.toc_sidebar)

    async def is_edit_page_link_visible(self) -> bool:
        return await self.base.is_visible(self.edit_page_link)

    @allure.step("Verify docs page is loaded")
    async def assert_docs_page_loaded(self) -> None:
        await self.base.assert_visible(self.page_heading)
        await self.base.assert_visible(self.content_area)
        await self.base.assert_visible(self.docs_sidebar)

    async def assert_search_available(self) -> None:
        await self.base.assert_visible(self.search_button)

    async def assert_navigation_present(self) -> None:
        # pagination links are absent on first/last pages, so only the sidebar is required
        await self.base.assert_visible(self.docs_sidebar)

    async def scroll_to_heading(self, heading_text: str) -> None:
        heading = self.page.locator("h1, h2, h3, h4, h5, h6").filter(has_text=heading_text).first
        await self.base.scroll_into_view(heading)

    def get_current_docs_path(self) -> str:
        return urlparse(self.base.current_url).path


__all__ = ["PlaywrightDocsPage"]
