"""High-throughput delimited-text tables via pyarrow.csv."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

import pandas as pd
import pyarrow as pa
from pyarrow import csv as pacsv

from .base import Codec


@dataclass(frozen=True)
class FastReadOptions:
    """
    Options for read_table_fast.

    as_arrow: Return the pyarrow.Table instead of converting to pandas.
    """

    delimiter: str = ","
    column_names: Optional[Sequence[str]] = None
    skip_rows: int = 0
    include_columns: Optional[Sequence[str]] = None
    null_values: Optional[Sequence[str]] = None
    encoding: str = "utf8"
    as_arrow: bool = False


@dataclass(frozen=True)
class FastWriteOptions:
    delimiter: str = ","
    include_header: bool = True
    batch_size: Optional[int] = None


class FastCsvCodec(Codec):
    label = "CSV"
    suffix = ".csv"

    def __init__(
        self,
        read_options: Optional[FastReadOptions] = None,
        write_options: Optional[FastWriteOptions] = None,
    ) -> None:
        self.read_options = read_options or FastReadOptions()
        self.write_options = write_options or FastWriteOptions()

    def decode(self, local_path: str) -> pd.DataFrame | pa.Table:
        opts = self.read_options
        table = pacsv.read_csv(
            local_path,
            read_options=pacsv.ReadOptions(
                column_names=list(opts.column_names) if opts.column_names else None,
                skip_rows=opts.skip_rows,
                encoding=opts.encoding,
            ),
            parse_options=pacsv.ParseOptions(delimiter=opts.delimiter),
            convert_options=pacsv.ConvertOptions(
                include_columns=list(opts.include_columns) if opts.include_columns else None,
                null_values=list(opts.null_values) if opts.null_values is not None else None,
            ),
        )
        if opts.as_arrow:
            return table
        return table.to_pandas()

    def encode(self, value: Any, local_path: str) -> None:
        if isinstance(value, pd.DataFrame):
            table = pa.Table.from_pandas(value, preserve_index=False)
        elif isinstance(value, pa.Table):
            table = value
        else:
            raise TypeError(
                "write_table_fast expects a pandas DataFrame or pyarrow Table, "
                f"got {type(value).__name__}"
            )

        opts = self.write_options
        pacsv.write_csv(
            table,
            local_path,
            write_options=pacsv.WriteOptions(
                include_header=opts.include_header,
                batch_size=opts.batch_size,
                delimiter=opts.delimiter,
            ),
        )
