"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

the-internet.herokuapp.com form authentication page (/login) and the secure
area it redirects to.

================================================================================
"""

from __future__ import annotations

from typing import Dict, Optional

import allure
from playwright.async_api import Page

from qa_suites.ui_testing.framework.page_base import DEFAULT_TIMEOUT_MS, BasePage, ElementNotReadyError
from qa_suites.ui_testing.pages.site_data import EXPECTED_MESSAGES, THE_INTERNET_BASE_URL


class LoginPage:
    """Login page object (async)."""

    PATH = "/login"

    def __init__(
        self,
        page: Page,
        base_url: str = THE_INTERNET_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_MS,
    ):
        self.page = page
        self.base = BasePage(page, base_url, default_timeout=timeout)

        self.username_input = "#username"
        self.password_input = "#password"
        self.login_button = 'button[type="submit"]'
        self.error_message = ".flash.error"
        self.success_message = ".flash.success"
        self.page_title = "h2"
        self.logout_link = 'a[href="/logout"]'

    @allure.step("Open login page")
    async def navigate_to_login_page(self) -> "LoginPage":
        await self.base.navigate(self.PATH)
        await self.base.wait_for_page_load()
        return self

    async def fill_username(self, username: str) -> None:
        await self.base.fill(self.username_input, username)

    async def fill_password(self, password: str) -> None:
        await self.base.fill(self.password_input, password, secret=True)

    async def click_login_button(self) -> None:
        await self.base.click(self.login_button)

    @allure.step("Login (username={username})")
    async def login(self, username: str, password: str) -> None:
        await self.fill_username(username)
        await self.fill_password(password)
        await self.click_login_button()

    @allure.step("Logout")
    async def click_logout_link(self) -> None:
        await self.base.click(self.logout_link)

    async def get_error_message(self) -> str:
        return (await self.base.get_text(self.error_message)).strip()

    async def get_success_message(self) -> str:
        return (await self.base.get_text(self.success_message)).strip()

    async def get_page_title_text(self) -> str:
        return (await self.base.get_text(self.page_title)).strip()

    async def is_login_successful(self, timeout: float = 5000) -> bool:
        try:
            await self.base.wait_for_element(self.success_message, timeout=timeout)
        except ElementNotReadyError:
            return False
        return await self.base.is_visible(self.success_message)

    async def is_login_failed(self, timeout: float = 5000) -> bool:
        try:
            await self.base.wait_for_element(self.error_message, timeout=timeout)
        except ElementNotReadyError:
            return False
        return await self.base.is_visible(self.error_message)

    async def is_logout_link_visible(self) -> bool:
        return await self.base.is_visible(self.logout_link)

    async def is_on_secure_area(self) -> bool:
        heading = await self.base.get_text(self.page_title)
        return "secure area" in heading.lower()

    @allure.step("Verify login page is loaded")
    async def assert_login_page_loaded(self) -> None:
        await self.base.assert_visible(self.username_input)
        await self.base.assert_visible(self.password_input)
        await self.base.assert_visible(self.login_button)
        await self.base.assert_text(self.page_title, "Login Page")

    @allure.step("Verify login succeeded")
    async def assert_login_success(self) -> None:
        await self.base.assert_visible(self.success_message)
        await self.base.assert_text(self.success_message, EXPECTED_MESSAGES["login_success"])
        await self.base.assert_visible(self.logout_link)

    @allure.step("Verify login failed")
    async def assert_login_failure(self, expected_message: Optional[str] = None) -> None:
        await self.base.assert_visible(self.error_message)
        if expected_message:
            await self.base.assert_text(self.error_message, expected_message)

    async def clear_form(self) -> None:
        await self.page.locator(self.username_input).clear()
        await self.page.locator(self.password_input).clear()

    async def get_form_values(self) -> Dict[str, str]:
        return {
            "username": await self.page.locator(self.username_input).input_value(),
            "password": await self.page.locator(self.password_input).input_value(),
        }


__all__ = ["LoginPage"]
