"""Spreadsheet workbooks via pandas (openpyxl for .xlsx, xlrd for legacy .xls)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union

import pandas as pd

from sharepointio.util.paths import file_extension

from .base import Codec


@dataclass(frozen=True)
class WorkbookReadOptions:
    """
    Options for read_workbook.

    sheet: Sheet index (0-based) or name.
    start_row: 1-based row where reading starts (the header row if header=True).
    header: True if the first read row holds column names.
    all_sheets: Return every sheet as {sheet name: DataFrame}; `sheet` is ignored.
    """

    sheet: Union[int, str] = 0
    start_row: int = 1
    header: bool = True
    usecols: Optional[Union[str, Sequence[str]]] = None
    all_sheets: bool = False

    def __post_init__(self) -> None:
        if self.start_row < 1:
            raise ValueError("start_row is 1-based and must be >= 1")


@dataclass(frozen=True)
class WorkbookWriteOptions:
    """sheet is only used for a single DataFrame; mappings name their own sheets."""

    sheet: str = "Sheet1"
    header: bool = True
    index: bool = False


class WorkbookCodec(Codec):
    label = "Excel"
    suffix = ".xlsx"
    write_extensions = ("xlsx",)

    def __init__(
        self,
        read_options: Optional[WorkbookReadOptions] = None,
        write_options: Optional[WorkbookWriteOptions] = None,
    ) -> None:
        self.read_options = read_options or WorkbookReadOptions()
        self.write_options = write_options or WorkbookWriteOptions()

    def staging_suffix(self, path: str) -> str:
        # Keep the legacy format's suffix so pandas picks the xlrd engine.
        if file_extension(path) == "xls":
            return ".xls"
        return self.suffix

    def decode(self, local_path: str) -> Union[pd.DataFrame, dict[str, pd.DataFrame]]:
        opts = self.read_options
        usecols = opts.usecols
        if usecols is not None and not isinstance(usecols, str):
            usecols = list(usecols)

        return pd.read_excel(
            local_path,
            sheet_name=None if opts.all_sheets else opts.sheet,
            skiprows=opts.start_row - 1,
            header=0 if opts.header else None,
            usecols=usecols,
        )

    def encode(self, value: Any, local_path: str) -> None:
        opts = self.write_options
        sheets = _sheets_for(value, opts.sheet)

        with pd.ExcelWriter(local_path, engine="openpyxl") as writer:
            for sheet_name, frame in sheets.items():
                frame.to_excel(
                    writer,
                    sheet_name=sheet_name,
                    header=opts.header,
                    index=opts.index,
                )


def _sheets_for(value: Any, default_sheet: str) -> dict[str, pd.DataFrame]:
    if isinstance(value, pd.DataFrame):
        return {default_sheet: value}

    if not isinstance(value, Mapping) or not value:
        raise TypeError(
            "write_workbook expects a DataFrame or a non-empty mapping of sheet name to DataFrame"
        )

    sheets: dict[str, pd.DataFrame] = {}
    for name, frame in value.items():
        if not isinstance(name, str) or not name:
            raise TypeError("sheet names must be non-empty strings")
        if not isinstance(frame, pd.DataFrame):
            raise TypeError(f"sheet {name!r} is not a DataFrame")
        sheets[name] = frame
    return sheets
