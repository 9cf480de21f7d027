"""R object archives (.rds single object, .RData/.rda named objects) via rdata."""

from __future__ import annotations

from typing import Any, Mapping

import pandas as pd
import rdata

from .base import Codec


def to_r_compatible(value: Any) -> Any:
    """
    Return value with pandas string columns converted to object dtype.

    rdata writes text from object arrays only; the dedicated string dtype
    (the pandas 3 default for text) is not understood by its converter.
    """
    if isinstance(value, pd.DataFrame):
        text = {name: object for name, dtype in value.dtypes.items() if isinstance(dtype, pd.StringDtype)}
        return value.astype(text) if text else value
    if isinstance(value, pd.Series) and isinstance(value.dtype, pd.StringDtype):
        return value.astype(object)
    return value


class RdsCodec(Codec):
    """One R object per file."""

    label = "RDS"
    suffix = ".rds"
    read_extensions = ("rds",)
    write_extensions = ("rds",)

    def decode(self, local_path: str) -> Any:
        return rdata.read_rds(local_path)

    def encode(self, value: Any, local_path: str) -> None:
        rdata.write_rds(local_path, to_r_compatible(value))


class RDataCodec(Codec):
    """
    Several named R objects per file.

    Decoding returns a plain {name: value} dict; the caller decides where
    to bind the names.
    """

    label = "R data"
    suffix = ".RData"
    read_extensions = ("RData", "rda")
    write_extensions = ("RData", "rda")

    def decode(self, local_path: str) -> dict[str, Any]:
        return dict(rdata.read_rda(local_path))

    def encode(self, value: Any, local_path: str) -> None:
        if not isinstance(value, Mapping):
            raise TypeError("objects must be a mapping of name to value")
        rdata.write_rda(local_path, {name: to_r_compatible(obj) for name, obj in value.items()})
