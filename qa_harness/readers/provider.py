"""Test data provider combining records from several sources."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from qa_harness.models.test_data import WebsiteTestData
from qa_harness.readers.loading import reader_for_path

log = logging.getLogger(__name__)

SMOKE_PRIORITY = "high"


@dataclass(frozen=True, kw_only=True)
class TestDataProvider:
    """Loads and filters website test data from one or more files."""

    __test__ = False

    sources: Sequence[Path]

    def load_all(self) -> Sequence[WebsiteTestData]:
        """Load every source in order and concatenate the records."""
        records: list[WebsiteTestData] = []
        for source in self.sources:
            log.info("Loading test data from %s", source)
            records.extend(reader_for_path(source).read(source))

        log.info(
            "Loaded %d test case(s) from %d source(s)", len(records), len(self.sources)
        )
        return records

    def for_environment(self, environment: str) -> Sequence[WebsiteTestData]:
        log.info("Selecting test data for environment: %s", environment)
        return [r for r in self.load_all() if r.environment == environment]

    def by_priority(self, priority: str) -> Sequence[WebsiteTestData]:
        log.info("Selecting test data for priority: %s", priority)
        return [r for r in self.load_all() if r.priority == priority]

    def smoke(self) -> Sequence[WebsiteTestData]:
        """High-priority records for smoke runs."""
        return self.by_priority(SMOKE_PRIORITY)

    def validate_sources(self) -> bool:
        """Check that every source is present and well formed."""
        if not self.sources:
            log.warning("No data sources configured")
            return False

        valid = all(
            reader_for_path(source).validate(source) for source in self.sources
        )
        log.info("Data source validation: %s", "PASSED" if valid else "FAILED")
        return valid
