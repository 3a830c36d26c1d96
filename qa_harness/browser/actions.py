"""Element interactions with a bounded explicit wait."""

import logging
from dataclasses import dataclass, field

from selenium.common.exceptions import TimeoutException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions
from selenium.webdriver.support.wait import WebDriverWait

from qa_harness.errors import ElementNotFoundError, ElementTimeoutError

log = logging.getLogger(__name__)

type Locator = tuple[str, str]

DEFAULT_TIMEOUT = 10.0


def css(selector: str) -> Locator:
    return (By.CSS_SELECTOR, selector)


def xpath(expression: str) -> Locator:
    return (By.XPATH, expression)


def by_id(element_id: str) -> Locator:
    return (By.ID, element_id)


def describe(locator: Locator) -> str:
    by, value = locator
    return f"{by}={value!r}"


@dataclass(frozen=True, kw_only=True)
class PageActions:
    """Waits for elements before interacting with them.

    ``click`` and ``type`` raise ``ElementTimeoutError`` when the element is
    not interactable within the timeout, ``get_text`` raises
    ``ElementNotFoundError`` when it never becomes visible, and
    ``is_visible`` returns False instead of raising.
    """

    driver: WebDriver = field(repr=False)
    timeout: float = DEFAULT_TIMEOUT
    poll_frequency: float = 0.5

    def _wait(self) -> WebDriverWait:
        return WebDriverWait(
            self.driver, self.timeout, poll_frequency=self.poll_frequency
        )

    def _clickable(self, locator: Locator) -> WebElement:
        try:
            element: WebElement = self._wait().until(
                expected_conditions.element_to_be_clickable(locator)
            )
        except TimeoutException as e:
            raise ElementTimeoutError(
                f"Element {describe(locator)} not interactable "
                f"within {self.timeout}s"
            ) from e
        return element

    def open(self, url: str) -> None:
        log.info("Navigating to: %s", url)
        self.driver.get(url)

    def title(self) -> str:
        return self.driver.title

    def current_url(self) -> str:
        return self.driver.current_url

    def click(self, locator: Locator) -> None:
        self._clickable(locator).click()
        log.debug("Clicked %s", describe(locator))

    def type(self, locator: Locator, text: str) -> None:
        element = self._clickable(locator)
        element.clear()
        element.send_keys(text)
        log.debug("Typed into %s", describe(locator))

    def get_text(self, locator: Locator) -> str:
        try:
            element = self._wait().until(
                expected_conditions.visibility_of_element_located(locator)
            )
        except TimeoutException as e:
            raise ElementNotFoundError(
                f"Element {describe(locator)} not found within {self.timeout}s"
            ) from e
        text: str = element.text
        log.debug("Read text from %s: %s", describe(locator), text)
        return text

    def is_visible(self, locator: Locator) -> bool:
        try:
            self._wait().until(
                expected_conditions.visibility_of_element_located(locator)
            )
        except TimeoutException:
            log.debug("Element %s not visible", describe(locator))
            return False
        return True

    def title_contains(self, fragment: str) -> bool:
        """Wait for the title to contain ``fragment``, case-insensitively."""
        expected = fragment.lower()
        try:
            self._wait().until(lambda driver: expected in driver.title.lower())
        except TimeoutException:
            return False
        return True
