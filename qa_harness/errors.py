"""Error kinds and the Ok/Err outcome type used at collaborator boundaries."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar

from selenium.common.exceptions import (
    NoSuchElementException,
    TimeoutException,
    WebDriverException,
)
from urllib3.exceptions import HTTPError as TransportError


class ErrorKind(StrEnum):
    """Category of a collaborator failure."""

    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    PARSE_ERROR = "parse_error"
    NETWORK_ERROR = "network_error"


class HarnessError(Exception):
    """Base for failures raised by browser, data, and network collaborators."""

    kind: ClassVar[ErrorKind]


class ElementNotFoundError(HarnessError):
    """Raised when an element is not found within the wait timeout."""

    kind = ErrorKind.NOT_FOUND


class ElementTimeoutError(HarnessError):
    """Raised when an element exists but is not interactable in time."""

    kind = ErrorKind.TIMEOUT


class DataParseError(HarnessError):
    """Raised when a test data or config source is malformed."""

    kind = ErrorKind.PARSE_ERROR


class NetworkError(HarnessError):
    """Raised when a webhook or HTTP endpoint cannot be reached."""

    kind = ErrorKind.NETWORK_ERROR


@dataclass(frozen=True)
class Ok[T]:
    """Successful outcome."""

    value: T


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying the error kind and message."""

    kind: ErrorKind
    message: str

    def describe(self) -> str:
        """Render as ``kind: message``."""
        return f"{self.kind}: {self.message}"


type Outcome[T] = Ok[T] | Err


def capture[T](fn: Callable[..., T], *args: object) -> Outcome[T]:
    """Call ``fn`` and map known collaborator failures into ``Err``.

    Connection failures between Selenium and its driver (``OSError`` and
    urllib3 errors) count as network errors. Other exceptions propagate.
    """
    try:
        return Ok(fn(*args))
    except HarnessError as exc:
        return Err(exc.kind, str(exc))
    except TimeoutException as exc:
        return Err(ErrorKind.TIMEOUT, exc.msg or str(exc))
    except NoSuchElementException as exc:
        return Err(ErrorKind.NOT_FOUND, exc.msg or str(exc))
    except WebDriverException as exc:
        return Err(ErrorKind.NETWORK_ERROR, exc.msg or str(exc))
    except TimeoutError as exc:
        return Err(ErrorKind.TIMEOUT, str(exc) or type(exc).__name__)
    except (OSError, TransportError) as exc:
        return Err(ErrorKind.NETWORK_ERROR, str(exc) or type(exc).__name__)
