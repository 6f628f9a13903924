from .dropdown_page import DropdownPage
from .login_page import LoginPage
from .playwright_docs_page import PlaywrightDocsPage
from .playwright_home_page import PlaywrightHomePage
from .table_data_page import TableDataPage

__all__ = [
    "DropdownPage",
    "LoginPage",
    "PlaywrightDocsPage",
    "PlaywrightHomePage",
    "TableDataPage",
]
