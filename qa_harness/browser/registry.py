"""URL-based dispatch from a target URL to its page object."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from qa_harness.browser.actions import PageActions
from qa_harness.browser.pages import (
    GenericPage,
    GitHubHomePage,
    LoginPage,
    SeleniumHomePage,
    Verifiable,
)
from qa_harness.browser.screenshots import ScreenshotRecorder

log = logging.getLogger(__name__)

type PageFactory = Callable[[PageActions, ScreenshotRecorder | None], Verifiable]


@dataclass(frozen=True, kw_only=True)
class PageRoute:
    """Maps URLs containing ``url_fragment`` to a page type."""

    url_fragment: str
    name: str
    factory: PageFactory


DEFAULT_ROUTES: Sequence[PageRoute] = (
    PageRoute(
        url_fragment="github.com",
        name="GitHub HomePage",
        factory=lambda a, s: GitHubHomePage(actions=a, screenshots=s),
    ),
    PageRoute(
        url_fragment="selenium.dev",
        name="Selenium HomePage",
        factory=lambda a, s: SeleniumHomePage(actions=a, screenshots=s),
    ),
    PageRoute(
        url_fragment="saucedemo.com",
        name="SauceDemo Login Page",
        factory=lambda a, s: LoginPage(actions=a, screenshots=s),
    ),
)

GENERIC_PAGE_NAME = "Generic Page"


@dataclass(frozen=True, kw_only=True)
class PageRegistry:
    """Creates the page object for a URL; unknown URLs get a generic page."""

    actions: PageActions
    screenshots: ScreenshotRecorder | None = None
    routes: Sequence[PageRoute] = field(default=DEFAULT_ROUTES)

    def _route(self, url: str) -> PageRoute | None:
        return next((r for r in self.routes if r.url_fragment in url), None)

    def page_for_url(self, url: str) -> Verifiable:
        route = self._route(url)
        if route is None:
            return GenericPage(actions=self.actions, screenshots=self.screenshots)
        return route.factory(self.actions, self.screenshots)

    def page_type_name(self, url: str) -> str:
        route = self._route(url)
        return GENERIC_PAGE_NAME if route is None else route.name

    def navigate(self, url: str) -> Verifiable:
        """Open ``url`` and return its page object."""
        self.actions.open(url)
        log.info("Opened %s as %s", url, self.page_type_name(url))
        return self.page_for_url(url)
