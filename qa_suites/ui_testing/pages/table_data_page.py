"""
the-internet.herokuapp.com "Sortable Data Tables" page object.

Reached from the site's landing page menu; only #table1 is modelled.
"""

from __future__ import annotations

from typing import List

import allure
from loguru import logger
from playwright.async_api import Page

from qa_suites.ui_testing.framework.page_base import DEFAULT_TIMEOUT_MS, BasePage
from qa_suites.ui_testing.pages.site_data import THE_INTERNET_BASE_URL


class TableDataPage:
    """Sortable data tables page object (async)."""

    def __init__(
        self,
        page: Page,
        base_url: str = THE_INTERNET_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_MS,
    ):
        self.page = page
        self.base = BasePage(page, base_url, default_timeout=timeout)

        self.sortable_tables_menu_item = page.locator("text=Sortable Data Tables")
        self.table = page.locator("#table1")
        self.table_headers = self.table.locator("thead th")
        self.rows = self.table.locator("tbody tr")

    @allure.step("Open the-internet landing page")
    async def navigate_main_page(self) -> "TableDataPage":
        await self.base.navigate("/")
        await self.base.wait_for_page_load()
        return self

    @allure.step("Open Sortable Data Tables from the menu")
    async def navigate_to_table_data_page(self) -> "TableDataPage":
        await self.base.click(self.sortable_tables_menu_item)
        await self.base.wait_for_element(self.table)
        return self

    async def is_table_visible(self) -> bool:
        return await self.base.is_visible(self.table)

    async def get_table_headers(self) -> List[str]:
        headers = await self.table_headers.all_text_contents()
        return [header.strip() for header in headers]

    async def count_table_headers(self) -> int:
        count = await self.table_headers.count()
        logger.debug(f"Table header count: {count}")
        return count

    async def get_table_rows_data(self) -> List[List[str]]:
        """Cell texts of every body row, in row order."""
        rows_data: List[List[str]] = []
        for row in await self.rows.all():
            cells = await row.locator("td").all_text_contents()
            rows_data.append([cell.strip() for cell in cells])
        return rows_data


__all__ = ["TableDataPage"]
