"""JSON test data reader."""

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from qa_harness.errors import DataParseError
from qa_harness.models.test_data import WebsiteTestData
from qa_harness.readers.base import DataReader, record_from_mapping

log = logging.getLogger(__name__)


class JsonReader(DataReader):
    """Reads records from a JSON array of objects."""

    def read(self, path: Path) -> Sequence[WebsiteTestData]:
        if not path.exists():
            raise FileNotFoundError(f"Data file not found: {path}")

        try:
            content = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise DataParseError(f"Invalid JSON in {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise DataParseError(f"{path} is not valid UTF-8: {e}") from e

        if not isinstance(content, list):
            raise DataParseError(f"{path}: expected a JSON array")

        records = [
            record_from_mapping(item, path, index)
            for index, item in enumerate(content)
        ]

        log.info("Loaded %d record(s) from %s", len(records), path)
        return records
