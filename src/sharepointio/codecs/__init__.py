"""Format adapters and their option types."""

from __future__ import annotations

from .base import Codec
from .fast import FastCsvCodec, FastReadOptions, FastWriteOptions
from .rarchive import RDataCodec, RdsCodec
from .table import CsvCodec, CsvReadOptions, CsvWriteOptions
from .workbook import WorkbookCodec, WorkbookReadOptions, WorkbookWriteOptions

__all__ = [
    "Codec",
    "CsvCodec",
    "CsvReadOptions",
    "CsvWriteOptions",
    "FastCsvCodec",
    "FastReadOptions",
    "FastWriteOptions",
    "WorkbookCodec",
    "WorkbookReadOptions",
    "WorkbookWriteOptions",
    "RdsCodec",
    "RDataCodec",
]
