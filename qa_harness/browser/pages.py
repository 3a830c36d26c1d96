"""Page objects: locators plus a ``verify`` that records checks."""

import logging
from dataclasses import dataclass
from typing import Protocol

from qa_harness.browser.actions import Locator, PageActions, by_id, css
from qa_harness.browser.screenshots import ScreenshotRecorder
from qa_harness.errors import ElementNotFoundError
from qa_harness.models.result import TestResult
from qa_harness.models.test_data import TestUser, WebsiteTestData

log = logging.getLogger(__name__)


class Verifiable(Protocol):
    """A page that can verify itself against a test data record."""

    def verify(self, data: WebsiteTestData) -> TestResult: ...


def text_or_empty(actions: PageActions, locator: Locator) -> str:
    try:
        return actions.get_text(locator)
    except ElementNotFoundError as e:
        log.info("Could not read text: %s", e)
        return ""


def check_title(result: TestResult, actions: PageActions, expected: str) -> None:
    actual = actions.title()
    result.add_test(
        "Page Title Check",
        expected.lower() in actual.lower(),
        f"Expected: title contains '{expected}', Actual: '{actual}'",
    )


def check_visible(
    result: TestResult, actions: PageActions, name: str, locator: Locator
) -> None:
    visible = actions.is_visible(locator)
    result.add_test(
        f"{name} Check",
        visible,
        f"Expected: {name} visible, Actual: {'visible' if visible else 'not visible'}",
    )


@dataclass(frozen=True, kw_only=True)
class GitHubHomePage:
    """github.com landing page."""

    MAIN_HEADING = css("h1")
    SIGN_UP_BUTTON = css("a[href^='/signup']")
    SIGN_IN_BUTTON = css("a[href='/login']")
    LOGO = css(".octicon-mark-github")

    actions: PageActions
    screenshots: ScreenshotRecorder | None = None

    def verify(self, data: WebsiteTestData) -> TestResult:
        result = TestResult(
            test_name="GitHub HomePage Verification", context=data.test_name
        )

        check_title(result, self.actions, data.expected_title or "GitHub")

        heading = text_or_empty(self.actions, self.MAIN_HEADING)
        result.add_test(
            "Main Heading Check",
            bool(heading),
            f"Expected: non-empty heading, Actual: '{heading}'",
        )

        check_visible(result, self.actions, "Sign Up Button", self.SIGN_UP_BUTTON)
        if data.button_text:
            label = text_or_empty(self.actions, self.SIGN_UP_BUTTON)
            result.add_test(
                "Button Text Check",
                data.button_text.lower() in label.lower(),
                f"Expected: '{data.button_text}', Actual: '{label}'",
            )
        check_visible(result, self.actions, "Sign In Button", self.SIGN_IN_BUTTON)
        check_visible(result, self.actions, "GitHub Logo", self.LOGO)

        if self.screenshots is not None:
            self.screenshots.capture(self.actions.driver, f"{data.test_name}_github")
        log.info("GitHub HomePage: %s", result.overall_result())
        return result


@dataclass(frozen=True, kw_only=True)
class SeleniumHomePage:
    """selenium.dev landing page."""

    MAIN_TITLE = css("h1, .hero-title, .main-title")
    MAIN_CONTENT = css("main, .content, .main-content")
    DOWNLOAD_LINK = css("a[href*='download'], a[href*='getting-started']")
    DOCUMENTATION_LINK = css("a[href*='documentation']")

    actions: PageActions
    screenshots: ScreenshotRecorder | None = None

    def verify(self, data: WebsiteTestData) -> TestResult:
        result = TestResult(
            test_name="Selenium HomePage Verification", context=data.test_name
        )

        check_title(result, self.actions, data.expected_title or "Selenium")

        title = text_or_empty(self.actions, self.MAIN_TITLE)
        result.add_test(
            "Main Title Check",
            bool(title),
            f"Expected: non-empty main title, Actual: '{title}'",
        )
        check_visible(result, self.actions, "Main Content", self.MAIN_CONTENT)
        check_visible(result, self.actions, "Download Link", self.DOWNLOAD_LINK)
        check_visible(
            result, self.actions, "Documentation Link", self.DOCUMENTATION_LINK
        )

        if self.screenshots is not None:
            self.screenshots.capture(self.actions.driver, f"{data.test_name}_selenium")
        log.info("Selenium HomePage: %s", result.overall_result())
        return result


@dataclass(frozen=True, kw_only=True)
class GenericPage:
    """Any page without dedicated locators: title and load checks only."""

    actions: PageActions
    screenshots: ScreenshotRecorder | None = None

    def verify(self, data: WebsiteTestData) -> TestResult:
        result = TestResult(test_name="Generic Page Test", context=data.test_name)

        actual = self.actions.title()
        expected = data.expected_title
        result.add_test(
            "Page Title Verification",
            expected is None or expected.lower() in actual.lower(),
            f"Expected: '{expected}', Actual: '{actual}'",
        )
        result.add_test(
            "Page Load Success",
            bool(self.actions.current_url()),
            f"Loaded: {self.actions.current_url()}",
        )

        if self.screenshots is not None:
            self.screenshots.capture(self.actions.driver, data.test_name)
        return result


@dataclass(frozen=True, kw_only=True)
class ProductsPage:
    """SauceDemo inventory page shown after a successful login."""

    TITLE = css(".title")
    INVENTORY_ITEMS = css(".inventory_item")
    CART_BADGE = css(".shopping_cart_badge")

    actions: PageActions

    def is_displayed(self) -> bool:
        return self.actions.is_visible(self.TITLE)

    def heading(self) -> str:
        return text_or_empty(self.actions, self.TITLE)

    def product_count(self) -> int:
        return len(self.actions.driver.find_elements(*self.INVENTORY_ITEMS))


@dataclass(frozen=True, kw_only=True)
class LoginPage:
    """SauceDemo login form."""

    USERNAME_INPUT = by_id("user-name")
    PASSWORD_INPUT = by_id("password")
    LOGIN_BUTTON = by_id("login-button")
    ERROR_MESSAGE = css("[data-test='error']")

    actions: PageActions
    screenshots: ScreenshotRecorder | None = None

    def login(self, user: TestUser) -> ProductsPage:
        log.info("Attempting login with username: %s", user.username)
        self.actions.type(self.USERNAME_INPUT, user.username)
        self.actions.type(self.PASSWORD_INPUT, user.password)
        self.actions.click(self.LOGIN_BUTTON)
        return ProductsPage(actions=self.actions)

    def error_message(self) -> str:
        return text_or_empty(self.actions, self.ERROR_MESSAGE)

    def verify(self, data: WebsiteTestData) -> TestResult:
        result = TestResult(test_name="Login Page Verification", context=data.test_name)
        check_title(result, self.actions, data.expected_title or "Swag Labs")
        check_visible(result, self.actions, "Username Input", self.USERNAME_INPUT)
        check_visible(result, self.actions, "Password Input", self.PASSWORD_INPUT)
        check_visible(result, self.actions, "Login Button", self.LOGIN_BUTTON)
        return result

    def verify_login(self, user: TestUser) -> TestResult:
        """Log in and check the outcome matches the user's expectation."""
        result = TestResult(test_name="Login Scenario", context=user.user_type)
        products = self.login(user)

        if user.should_be_locked_out:
            message = self.error_message()
            result.add_test(
                "Locked Out Error Check",
                "locked out" in message.lower(),
                f"Expected: locked out error, Actual: '{message}'",
            )
        else:
            heading = products.heading()
            result.add_test(
                "Products Page Check",
                heading == "Products",
                f"Expected: 'Products', Actual: '{heading}'",
            )

        if self.screenshots is not None:
            self.screenshots.capture(self.actions.driver, f"login_{user.username}")
        return result
