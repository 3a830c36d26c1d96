"""YAML test data reader."""

import logging
from collections.abc import Sequence
from pathlib import Path

import yaml

from qa_harness.errors import DataParseError
from qa_harness.models.test_data import WebsiteTestData
from qa_harness.readers.base import DataReader, record_from_mapping

log = logging.getLogger(__name__)


class YamlReader(DataReader):
    """Reads records from a YAML list, or a mapping with a ``tests`` list."""

    def read(self, path: Path) -> Sequence[WebsiteTestData]:
        if not path.exists():
            raise FileNotFoundError(f"Data file not found: {path}")

        try:
            content = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise DataParseError(f"Invalid YAML in {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise DataParseError(f"{path} is not valid UTF-8: {e}") from e

        if isinstance(content, dict):
            content = content.get("tests")
        if not isinstance(content, list):
            raise DataParseError(f"{path}: expected a list of test records")

        records = [
            record_from_mapping(item, path, index)
            for index, item in enumerate(content)
        ]

        log.info("Loaded %d record(s) from %s", len(records), path)
        return records
