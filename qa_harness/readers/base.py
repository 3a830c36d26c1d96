"""Abstract base class for test data readers."""

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from qa_harness.errors import DataParseError
from qa_harness.models.test_data import LinkData, WebsiteTestData

log = logging.getLogger(__name__)

FIELD_BY_HEADER: Mapping[str, str] = {
    "testname": "test_name",
    "website": "website",
    "websiteurl": "website_url",
    "url": "website_url",
    "expectedtitle": "expected_title",
    "buttontext": "button_text",
    "environment": "environment",
    "priority": "priority",
}


def normalize_header(header: str) -> str | None:
    """Map a column header to a WebsiteTestData field name.

    Matching ignores case and punctuation, so ``TestName``, ``test_name``
    and ``Test Name`` are equivalent. Unknown headers map to None.
    """
    key = re.sub(r"[^a-z0-9]", "", header.lower())
    return FIELD_BY_HEADER.get(key)


def record_from_row(
    headers: Sequence[str | None],
    values: Sequence[Any],
    source: Path,
    row_number: int,
) -> WebsiteTestData:
    """Build a record from one tabular row.

    Blank cells are dropped so model defaults apply.

    Raises:
        DataParseError: If the row fails validation

    """
    data = {
        field: value
        for field, value in zip(headers, values, strict=False)
        if field is not None and value is not None and str(value).strip()
    }
    try:
        return WebsiteTestData.model_validate(data)
    except ValidationError as e:
        raise DataParseError(f"{source}: invalid row {row_number}: {e}") from e


def record_from_mapping(item: Any, source: Path, index: int) -> WebsiteTestData:
    """Build a record from a JSON/YAML object.

    Objects in the legacy ``{name, url, expectedTitle}`` shape are converted.

    Raises:
        DataParseError: If the object is not a mapping or fails validation

    """
    if not isinstance(item, Mapping):
        raise DataParseError(f"{source}: entry {index} is not an object")

    try:
        if "name" in item and "url" in item and "website" not in item:
            return LinkData.model_validate(item).to_website_test_data()
        return WebsiteTestData.model_validate(item)
    except ValidationError as e:
        raise DataParseError(f"{source}: invalid entry {index}: {e}") from e


class DataReader(ABC):
    """Reads website test data records from one file format."""

    @abstractmethod
    def read(self, path: Path) -> Sequence[WebsiteTestData]:
        """Read all records from the file, in file order.

        Args:
            path: Path to the data file

        Returns:
            Records in the order they appear in the file

        Raises:
            FileNotFoundError: If the file does not exist
            DataParseError: If the file is malformed or a row is invalid

        """

    def validate(self, path: Path) -> bool:
        """Check that the file can be read and holds at least one record."""
        try:
            records = self.read(path)
        except (FileNotFoundError, DataParseError) as e:
            log.warning("Data source validation failed for %s: %s", path, e)
            return False

        if not records:
            log.warning("Data source %s contains no records", path)
            return False

        return True
