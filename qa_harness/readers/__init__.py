"""Test data readers module."""

from qa_harness.readers.base import DataReader
from qa_harness.readers.csv_reader import CsvReader
from qa_harness.readers.excel_reader import ExcelReader
from qa_harness.readers.json_reader import JsonReader
from qa_harness.readers.loading import (
    ReaderNotFoundError,
    load_reader,
    reader_for_path,
)
from qa_harness.readers.provider import TestDataProvider
from qa_harness.readers.yaml_reader import YamlReader

__all__ = [
    "CsvReader",
    "DataReader",
    "ExcelReader",
    "JsonReader",
    "ReaderNotFoundError",
    "TestDataProvider",
    "YamlReader",
    "load_reader",
    "reader_for_path",
]
