"""Chrome WebDriver lifecycle."""

import logging
from collections.abc import Generator
from contextlib import contextmanager

from selenium import webdriver
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.remote.webdriver import WebDriver

from qa_harness.config import HarnessConfig

log = logging.getLogger(__name__)


def chrome_options(config: HarnessConfig) -> Options:
    options = Options()
    options.add_argument("--start-maximized")
    options.add_argument("--disable-blink-features=AutomationControlled")
    if config.headless:
        options.add_argument("--headless=new")
    return options


@contextmanager
def open_browser(config: HarnessConfig) -> Generator[WebDriver]:
    """Start Chrome for the configured environment and always quit it."""
    driver = webdriver.Chrome(options=chrome_options(config))
    log.info(
        "WebDriver initialized for environment=%s headless=%s",
        config.environment,
        config.headless,
    )
    try:
        yield driver
    finally:
        driver.quit()
        log.info("WebDriver closed")
