"""the-internet.herokuapp.com /dropdown page object."""

from __future__ import annotations

import allure
from playwright.async_api import Page

from qa_suites.ui_testing.framework.page_base import DEFAULT_TIMEOUT_MS, BasePage
from qa_suites.ui_testing.pages.site_data import THE_INTERNET_BASE_URL


class DropdownPage:
    """Single <select> with "Option 1" / "Option 2" behind a disabled placeholder."""

    PATH = "/dropdown"

    def __init__(
        self,
        page: Page,
        base_url: str = THE_INTERNET_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_MS,
    ):
        self.page = page
        self.base = BasePage(page, base_url, default_timeout=timeout)

        self.dropdown = "#dropdown"

    @allure.step("Open dropdown page")
    async def navigate(self) -> "DropdownPage":
        await self.base.navigate(self.PATH)
        await self.base.wait_for_element(self.dropdown)
        return self

    async def select_by_label(self, label: str) -> None:
        await self.base.select_option(self.dropdown, label)

    async def select_by_index(self, index: int) -> None:
        await self.base.select_option(self.dropdown, index)

    async def get_selected_value(self) -> str:
        return await self.page.locator(self.dropdown).input_value()


__all__ = ["DropdownPage"]
