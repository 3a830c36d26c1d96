"""Excel (.xlsx) test data reader."""

import logging
from collections.abc import Sequence
from datetime import date, datetime
from pathlib import Path
from typing import Any
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from qa_harness.errors import DataParseError
from qa_harness.models.test_data import WebsiteTestData
from qa_harness.readers.base import DataReader, normalize_header, record_from_row

log = logging.getLogger(__name__)

EXPECTED_HEADERS = (
    "TestName",
    "Website",
    "ExpectedTitle",
    "ButtonText",
    "Environment",
    "Priority",
)


def cell_text(value: Any) -> str:
    """Render a cell value the way it reads in the spreadsheet."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime | date):
        return value.isoformat()
    return str(value).strip()


class ExcelReader(DataReader):
    """Reads records from the first sheet of a workbook with a header row."""

    def _rows(self, path: Path) -> list[list[str]]:
        if not path.exists():
            raise FileNotFoundError(f"Data file not found: {path}")

        try:
            workbook = load_workbook(path, read_only=True, data_only=True)
        except (InvalidFileException, BadZipFile, KeyError) as e:
            raise DataParseError(f"Invalid workbook {path}: {e}") from e

        try:
            sheet = workbook.worksheets[0]
            return [
                [cell_text(value) for value in row]
                for row in sheet.iter_rows(values_only=True)
            ]
        finally:
            workbook.close()

    def read(self, path: Path) -> Sequence[WebsiteTestData]:
        rows = self._rows(path)
        if not rows:
            raise DataParseError(f"{path}: missing header row")

        headers = [normalize_header(header) for header in rows[0]]
        records = [
            record_from_row(headers, row, path, row_number)
            for row_number, row in enumerate(rows[1:], start=2)
            if any(row)
        ]

        log.info("Loaded %d record(s) from %s", len(records), path)
        return records

    def validate(self, path: Path) -> bool:
        """Also require the canonical header columns, in order."""
        try:
            rows = self._rows(path)
        except (FileNotFoundError, DataParseError) as e:
            log.warning("Data source validation failed for %s: %s", path, e)
            return False

        header = tuple(rows[0][: len(EXPECTED_HEADERS)]) if rows else ()
        for expected, actual in zip(EXPECTED_HEADERS, header, strict=False):
            if expected.lower() != actual.lower():
                log.warning(
                    "Expected header '%s' but found '%s' in %s",
                    expected,
                    actual,
                    path,
                )
                return False
        if len(header) < len(EXPECTED_HEADERS):
            log.warning("Missing header columns in %s", path)
            return False

        return super().validate(path)
