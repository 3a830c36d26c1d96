"""Tests for reader loading and the test data provider."""

from pathlib import Path

import pytest

from qa_harness.readers import (
    CsvReader,
    ExcelReader,
    JsonReader,
    ReaderNotFoundError,
    TestDataProvider,
    YamlReader,
    load_reader,
    reader_for_path,
)


class TestLoadReader:
    """Tests for load_reader."""

    @pytest.mark.parametrize(
        ("key", "reader_cls"),
        [
            ("csv", CsvReader),
            (".json", JsonReader),
            ("XLSX", ExcelReader),
            ("yaml", YamlReader),
            ("yml", YamlReader),
        ],
    )
    def test_loads_registered_readers(self, key: str, reader_cls: type) -> None:
        """Readers are found by extension, with or without the dot."""
        assert isinstance(load_reader(key), reader_cls)

    def test_unknown_extension(self) -> None:
        """Unknown extensions list the available readers."""
        with pytest.raises(ReaderNotFoundError) as exc_info:
            load_reader("txt")

        assert "Unsupported file type 'txt'" in str(exc_info.value)
        assert "csv" in str(exc_info.value)

    def test_reader_for_path(self) -> None:
        """The reader is chosen from the file suffix."""
        assert isinstance(reader_for_path(Path("data/tests.csv")), CsvReader)


@pytest.fixture
def sources(tmp_path: Path) -> list[Path]:
    csv_path = tmp_path / "tests.csv"
    csv_path.write_text(
        "TestName,Website,Environment,Priority\n"
        "GH,github,dev,high\n"
        "SE,selenium,staging,medium\n"
    )
    yaml_path = tmp_path / "more.yaml"
    yaml_path.write_text(
        "- test_name: MV\n"
        "  website: maven\n"
        "  environment: dev\n"
        "  priority: low\n"
        "- test_name: JU\n"
        "  website: junit\n"
        "  environment: prod\n"
        "  priority: high\n"
    )
    return [csv_path, yaml_path]


class TestTestDataProvider:
    """Tests for TestDataProvider."""

    def test_load_all_concatenates_in_source_order(self, sources: list[Path]) -> None:
        """Records from every source, in source then file order."""
        provider = TestDataProvider(sources=sources)

        assert [r.test_name for r in provider.load_all()] == ["GH", "SE", "MV", "JU"]

    def test_for_environment(self, sources: list[Path]) -> None:
        """Filters by environment."""
        provider = TestDataProvider(sources=sources)

        assert [r.test_name for r in provider.for_environment("dev")] == ["GH", "MV"]

    def test_by_priority(self, sources: list[Path]) -> None:
        """Filters by priority."""
        provider = TestDataProvider(sources=sources)

        assert [r.test_name for r in provider.by_priority("low")] == ["MV"]

    def test_smoke_selects_high_priority(self, sources: list[Path]) -> None:
        """Smoke runs use the high priority records."""
        provider = TestDataProvider(sources=sources)

        assert [r.test_name for r in provider.smoke()] == ["GH", "JU"]

    def test_validate_sources(self, sources: list[Path], tmp_path: Path) -> None:
        """Validation fails when any source is missing or nothing is configured."""
        assert TestDataProvider(sources=sources).validate_sources() is True
        assert TestDataProvider(sources=[]).validate_sources() is False
        assert (
            TestDataProvider(
                sources=[*sources, tmp_path / "absent.json"]
            ).validate_sources()
            is False
        )
