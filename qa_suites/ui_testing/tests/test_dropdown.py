"""Dropdown selection UI tests (Async / Playwright)."""

import allure
import pytest

from qa_suites.ui_testing.pages import DropdownPage


pytestmark = [
    pytest.mark.asyncio(loop_scope="session"),
    pytest.mark.requires_external,
]


@allure.epic("UI Testing")
@allure.feature("Form Controls")
class TestDropdown:

    @allure.story("Select")
    @allure.title("Select option by visible label")
    @pytest.mark.P1
    async def test_select_by_label(self, dropdown_page: DropdownPage):
        await dropdown_page.navigate()

        await dropdown_page.select_by_label("Option 2")

        assert await dropdown_page.get_selected_value() == "2"

    @allure.story("Select")
    @allure.title("Select option by index")
    @pytest.mark.P2
    async def test_select_by_index(self, dropdown_page: DropdownPage):
        await dropdown_page.navigate()

        # index 0 is the disabled placeholder
        await dropdown_page.select_by_index(1)

        assert await dropdown_page.get_selected_value() == "1"

    @allure.story("Select")
    @allure.title("Placeholder is selected before any interaction")
    @pytest.mark.P3
    async def test_default_selection(self, dropdown_page: DropdownPage):
        await dropdown_page.navigate()

        assert await dropdown_page.get_selected_value() == ""
