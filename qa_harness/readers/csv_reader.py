"""CSV test data reader."""

import csv
import logging
from collections.abc import Sequence
from pathlib import Path

from qa_harness.errors import DataParseError
from qa_harness.models.test_data import WebsiteTestData
from qa_harness.readers.base import DataReader, normalize_header, record_from_row

log = logging.getLogger(__name__)


class CsvReader(DataReader):
    """Reads records from a CSV file with a header row."""

    def read(self, path: Path) -> Sequence[WebsiteTestData]:
        if not path.exists():
            raise FileNotFoundError(f"Data file not found: {path}")

        with path.open(newline="", encoding="utf-8") as handle:
            try:
                rows = list(csv.reader(handle))
            except csv.Error as e:
                raise DataParseError(f"Invalid CSV in {path}: {e}") from e
            except UnicodeDecodeError as e:
                raise DataParseError(f"{path} is not valid UTF-8: {e}") from e

        if not rows:
            raise DataParseError(f"{path}: missing header row")

        headers = [normalize_header(header) for header in rows[0]]
        records = [
            record_from_row(headers, row, path, row_number)
            for row_number, row in enumerate(rows[1:], start=2)
            if any(cell.strip() for cell in row)
        ]

        log.info("Loaded %d record(s) from %s", len(records), path)
        return records
