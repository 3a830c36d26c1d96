"""Tests for page objects."""

from unittest.mock import Mock

import pytest
from selenium.common.exceptions import NoSuchElementException

from qa_harness.browser.actions import PageActions
from qa_harness.browser.pages import (
    GenericPage,
    GitHubHomePage,
    LoginPage,
    SeleniumHomePage,
)
from qa_harness.browser.screenshots import ScreenshotRecorder
from qa_harness.models.result import TestResult
from qa_harness.models.test_data import TestUser, WebsiteTestData


def make_driver(title: str, text: str = "") -> Mock:
    driver = Mock()
    element = driver.find_element.return_value
    element.is_displayed.return_value = True
    element.is_enabled.return_value = True
    element.text = text
    driver.title = title
    driver.current_url = "https://example.test/"
    return driver


def make_actions(driver: Mock) -> PageActions:
    return PageActions(driver=driver, timeout=0.05, poll_frequency=0.01)


def descriptions(result: TestResult) -> list[str]:
    return [test.description for test in result.tests]


class TestGitHubHomePage:
    """Tests for GitHubHomePage."""

    def test_all_checks_pass(self) -> None:
        """Every check passes when the page renders as expected."""
        driver = make_driver("GitHub: Let's build from here", text="Sign up")
        screenshots = Mock(spec=ScreenshotRecorder)
        page = GitHubHomePage(actions=make_actions(driver), screenshots=screenshots)
        data = WebsiteTestData(
            test_name="GH_Test",
            website="github",
            expected_title="GitHub",
            button_text="Sign up",
        )

        result = page.verify(data)

        assert result.test_name == "GitHub HomePage Verification"
        assert result.context == "GH_Test"
        assert descriptions(result) == [
            "Page Title Check",
            "Main Heading Check",
            "Sign Up Button Check",
            "Button Text Check",
            "Sign In Button Check",
            "GitHub Logo Check",
        ]
        assert result.all_tests_passed() is True
        screenshots.capture.assert_called_once_with(driver, "GH_Test_github")

    def test_skips_button_text_check_without_expectation(self) -> None:
        """No button text check is recorded when none is expected."""
        driver = make_driver("GitHub", text="Sign up")
        page = GitHubHomePage(actions=make_actions(driver))

        result = page.verify(WebsiteTestData(test_name="GH", website="github"))

        assert "Button Text Check" not in descriptions(result)
        assert result.total_tests == 5

    def test_missing_elements_fail_checks(self) -> None:
        """Absent elements become failed checks, not exceptions."""
        driver = make_driver("GitHub")
        driver.find_element.side_effect = NoSuchElementException("missing")
        page = GitHubHomePage(actions=make_actions(driver))

        result = page.verify(WebsiteTestData(test_name="GH", website="github"))

        assert result.passed_count == 1
        assert result.failed_count == 4
        assert result.all_tests_passed() is False

    def test_title_mismatch(self) -> None:
        """The title check compares case-insensitively."""
        driver = make_driver("Some Other Site", text="x")
        page = GitHubHomePage(actions=make_actions(driver))

        result = page.verify(
            WebsiteTestData(test_name="GH", website="github", expected_title="github")
        )

        title_check = result.tests[0]
        assert title_check.passed is False
        assert "Actual: 'Some Other Site'" in title_check.details


class TestSeleniumHomePage:
    """Tests for SeleniumHomePage."""

    def test_checks(self) -> None:
        """Records title, content and link checks."""
        driver = make_driver("Selenium", text="Selenium automates browsers")
        page = SeleniumHomePage(actions=make_actions(driver))

        result = page.verify(WebsiteTestData(test_name="SE", website="selenium"))

        assert descriptions(result) == [
            "Page Title Check",
            "Main Title Check",
            "Main Content Check",
            "Download Link Check",
            "Documentation Link Check",
        ]
        assert result.all_tests_passed() is True


class TestGenericPage:
    """Tests for GenericPage."""

    def test_without_expected_title(self) -> None:
        """Any title passes when none is expected."""
        page = GenericPage(actions=make_actions(make_driver("Whatever")))

        result = page.verify(WebsiteTestData(test_name="EX", website="example"))

        assert result.test_name == "Generic Page Test"
        assert descriptions(result) == ["Page Title Verification", "Page Load Success"]
        assert result.all_tests_passed() is True

    def test_with_wrong_title(self) -> None:
        """A missing title fragment fails the title check only."""
        page = GenericPage(actions=make_actions(make_driver("Whatever")))

        result = page.verify(
            WebsiteTestData(test_name="EX", website="example", expected_title="Maven")
        )

        assert result.passed_count == 1
        assert result.failed_count == 1


class TestLoginPage:
    """Tests for LoginPage."""

    def test_verify_form(self) -> None:
        """The login form exposes its inputs and button."""
        page = LoginPage(actions=make_actions(make_driver("Swag Labs")))

        result = page.verify(WebsiteTestData(test_name="SD", website="saucedemo"))

        assert result.all_tests_passed() is True
        assert result.total_tests == 4

    def test_login_fills_form(self) -> None:
        """login types both credentials and submits."""
        driver = make_driver("Swag Labs")
        element = driver.find_element.return_value
        page = LoginPage(actions=make_actions(driver))

        page.login(TestUser(username="standard_user", password="secret_sauce"))

        element.send_keys.assert_any_call("standard_user")
        element.send_keys.assert_any_call("secret_sauce")
        element.click.assert_called_once()

    def test_verify_login_standard_user(self) -> None:
        """A standard user lands on the products page."""
        page = LoginPage(actions=make_actions(make_driver("Swag Labs", "Products")))

        result = page.verify_login(
            TestUser(username="standard_user", password="secret_sauce")
        )

        assert descriptions(result) == ["Products Page Check"]
        assert result.all_tests_passed() is True

    @pytest.mark.parametrize(
        ("message", "passed"),
        [
            ("Epic sadface: Sorry, this user has been locked out.", True),
            ("Epic sadface: Username is required", False),
        ],
    )
    def test_verify_login_locked_out_user(self, message: str, passed: bool) -> None:
        """A locked out user must see the locked out error."""
        page = LoginPage(actions=make_actions(make_driver("Swag Labs", message)))

        result = page.verify_login(
            TestUser(
                username="locked_out_user",
                password="secret_sauce",
                user_type="locked",
                should_be_locked_out=True,
            )
        )

        assert descriptions(result) == ["Locked Out Error Check"]
        assert result.context == "locked"
        assert result.all_tests_passed() is passed
