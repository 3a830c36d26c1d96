"""Loading of data readers from entry points."""

from importlib.metadata import entry_points
from pathlib import Path

from qa_harness.readers.base import DataReader

ENTRY_POINT_GROUP = "qa_harness.readers"


class ReaderNotFoundError(Exception):
    """Raised when no reader is registered for a file type."""


def load_reader(key: str) -> DataReader:
    """Load a data reader by file extension.

    Args:
        key: The extension as registered in pyproject.toml
             (e.g., "csv", "json", "xlsx")

    Returns:
        A reader instance

    Raises:
        ReaderNotFoundError: If no reader with the given key is found

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)
    normalized = key.lower().lstrip(".")

    for entry in entries:
        if entry.name == normalized:
            reader_cls: type[DataReader] = entry.load()
            return reader_cls()

    available = sorted(e.name for e in entries)
    raise ReaderNotFoundError(
        f"Unsupported file type '{key}'. Available readers: {available}"
    )


def reader_for_path(path: Path) -> DataReader:
    """Load the reader matching a file's extension."""
    return load_reader(path.suffix)
