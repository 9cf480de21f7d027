"""Delimited-text tables via pandas."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Collection, Mapping, Optional, Sequence

import pandas as pd

from .base import Codec


# Cells treated as missing in numeric columns regardless of keep_default_na.
MISSING_NUMBER_CELLS: tuple[str, ...] = ("", "NA", "NaN", "nan", "N/A", "NULL", "null")

_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?|[+-]?inf")
# "007" or "-01" is an identifier, not a number.
_LEADING_ZERO = re.compile(r"[+-]?0\d")
_BOOLEAN_CELLS = ("True", "False", "TRUE", "FALSE", "true", "false")


@dataclass(frozen=True)
class CsvReadOptions:
    """
    Options for read_table.

    header: True if the first row holds column names.
    keep_default_na: If True, pandas' default missing-value markers ("",
        "NA", "NaN", ...) also apply to text columns. By default text cells
        are returned exactly as written; numeric columns always treat those
        markers as missing.
    na_values: Extra strings recognised as missing in every column.
    dtype: Column type(s) forwarded to pandas.read_csv. A single dtype turns
        off text column detection.
    """

    sep: str = ","
    header: bool = True
    encoding: str = "utf-8"
    keep_default_na: bool = False
    na_values: Optional[Sequence[str]] = None
    dtype: Any = None
    usecols: Optional[Sequence[str]] = None
    skiprows: Optional[int] = None
    nrows: Optional[int] = None


@dataclass(frozen=True)
class CsvWriteOptions:
    """Options for write_table. The row index is not written unless index=True."""

    sep: str = ","
    na_rep: str = ""
    encoding: str = "utf-8"
    header: bool = True
    index: bool = False
    date_format: Optional[str] = None
    float_format: Optional[str] = None


class CsvCodec(Codec):
    label = "CSV"
    suffix = ".csv"

    def __init__(
        self,
        read_options: Optional[CsvReadOptions] = None,
        write_options: Optional[CsvWriteOptions] = None,
    ) -> None:
        self.read_options = read_options or CsvReadOptions()
        self.write_options = write_options or CsvWriteOptions()

    def decode(self, local_path: str) -> pd.DataFrame:
        """
        Read local_path into a DataFrame.

        The file is scanned once as raw text to find text columns (any cell
        that is not a plain number, boolean or missing marker, such as "001").
        Those columns are read as strings so that values like "001", "NA" or
        "" survive; the remaining columns keep pandas' type inference.
        """
        opts = self.read_options
        common: dict[str, Any] = {
            "sep": opts.sep,
            "header": 0 if opts.header else None,
            "encoding": opts.encoding,
            "usecols": list(opts.usecols) if opts.usecols is not None else None,
            "skiprows": opts.skiprows,
            "nrows": opts.nrows,
        }
        extra_na = list(opts.na_values) if opts.na_values is not None else []

        if opts.dtype is not None and not isinstance(opts.dtype, Mapping):
            return pd.read_csv(
                local_path,
                dtype=opts.dtype,
                keep_default_na=opts.keep_default_na,
                na_values=extra_na or None,
                **common,
            )

        raw = pd.read_csv(local_path, dtype=str, keep_default_na=False, na_filter=False, **common)
        text = set(text_columns(raw, (*MISSING_NUMBER_CELLS, *extra_na)))

        dtype: dict[Any, Any] = {name: str for name in text}
        dtype.update(opts.dtype or {})
        na_values = {
            name: extra_na if name in text else [*MISSING_NUMBER_CELLS, *extra_na]
            for name in raw.columns
        }
        return pd.read_csv(
            local_path,
            dtype=dtype,
            keep_default_na=opts.keep_default_na,
            na_values=na_values,
            **common,
        )

    def encode(self, value: Any, local_path: str) -> None:
        if not isinstance(value, pd.DataFrame):
            raise TypeError(f"write_table expects a pandas DataFrame, got {type(value).__name__}")

        opts = self.write_options
        value.to_csv(
            local_path,
            sep=opts.sep,
            na_rep=opts.na_rep,
            encoding=opts.encoding,
            header=opts.header,
            index=opts.index,
            date_format=opts.date_format,
            float_format=opts.float_format,
        )


def text_columns(raw: pd.DataFrame, missing: Collection[str]) -> list[Any]:
    """Return the columns of an all-string frame holding at least one non-numeric cell."""
    found = []
    for name in raw.columns:
        cells = raw[name]
        cells = cells[~cells.isin(list(missing)) & ~cells.isin(list(_BOOLEAN_CELLS))]
        if cells.empty:
            continue
        numeric = cells.str.fullmatch(_NUMBER.pattern, flags=re.IGNORECASE) & ~cells.str.match(
            _LEADING_ZERO.pattern
        )
        if not numeric.all():
            found.append(name)
    return found
