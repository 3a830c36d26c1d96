"""Numbered screenshot capture."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webdriver import WebDriver

log = logging.getLogger(__name__)


def screenshot_filename(counter: int, name: str) -> str:
    return f"screenshot_{counter:03d}_{re.sub(r'[^a-zA-Z0-9]', '_', name)}.png"


@dataclass(kw_only=True)
class ScreenshotRecorder:
    """Saves screenshots as ``screenshot_<NNN>_<name>.png`` in one directory."""

    directory: Path
    enabled: bool = True
    _counter: int = field(default=0, init=False, repr=False)

    def capture(self, driver: WebDriver, name: str) -> Path | None:
        """Save a screenshot, returning its path or None when not captured."""
        if not self.enabled:
            return None

        self._counter += 1
        path = self.directory / screenshot_filename(self._counter, name)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(driver.get_screenshot_as_png())
        except (OSError, WebDriverException) as e:
            log.warning("Could not take screenshot %s: %s", path.name, e)
            return None

        log.info("Screenshot saved: %s", path)
        return path
