"""
Static data for the public demo sites driven by the UI suite.

Base URLs here are defaults; conftest fixtures read ui.playwright_base_url and
ui.the_internet_base_url from config and pass them to the page objects.
"""

from typing import Dict, List

PLAYWRIGHT_BASE_URL = "https://playwright.dev"
THE_INTERNET_BASE_URL = "https://the-internet.herokuapp.com"

TEST_URLS: Dict[str, Dict[str, str]] = {
    "playwright": {
        "home": f"{PLAYWRIGHT_BASE_URL}/",
        "docs": f"{PLAYWRIGHT_BASE_URL}/docs/intro",
    },
    "the_internet": {
        "base": THE_INTERNET_BASE_URL,
        "login": f"{THE_INTERNET_BASE_URL}/login",
        "dropdown": f"{THE_INTERNET_BASE_URL}/dropdown",
        "file_upload": f"{THE_INTERNET_BASE_URL}/upload",
        "tables": f"{THE_INTERNET_BASE_URL}/tables",
    },
}

VALID_CREDENTIALS: Dict[str, str] = {
    "username": "tomsmith",
    "password": "SuperSecretPassword!",
}

INVALID_CREDENTIALS: List[Dict[str, str]] = [
    {"username": "invalid", "password": "invalid"},
    {"username": "", "password": ""},
    {"username": "tomsmith", "password": "wrongpassword"},
]

EXPECTED_MESSAGES: Dict[str, str] = {
    "login_success": "You logged into a secure area!",
    "logout_success": "You logged out of the secure area!",
    "invalid_username": "Your username is invalid!",
    "invalid_password": "Your password is invalid!",
    "playwright_title": "Playwright",
}

TABLE_HEADERS: List[str] = ["Last Name", "First Name", "Email", "Due", "Web Site", "Action"]

# milliseconds
TIMEOUTS: Dict[str, int] = {
    "short": 5000,
    "medium": 10000,
    "long": 30000,
}
