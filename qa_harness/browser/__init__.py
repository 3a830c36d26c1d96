"""Browser interaction module."""

from qa_harness.browser.actions import Locator, PageActions, by_id, css, xpath
from qa_harness.browser.driver import open_browser
from qa_harness.browser.pages import (
    GenericPage,
    GitHubHomePage,
    LoginPage,
    ProductsPage,
    SeleniumHomePage,
    Verifiable,
)
from qa_harness.browser.registry import PageRegistry, PageRoute
from qa_harness.browser.screenshots import ScreenshotRecorder

__all__ = [
    "GenericPage",
    "GitHubHomePage",
    "Locator",
    "LoginPage",
    "PageActions",
    "PageRegistry",
    "PageRoute",
    "ProductsPage",
    "ScreenshotRecorder",
    "SeleniumHomePage",
    "Verifiable",
    "by_id",
    "css",
    "open_browser",
    "xpath",
]
