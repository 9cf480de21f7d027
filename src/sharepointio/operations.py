"""Read/write orchestration: resolve -> stage -> transfer -> adapt -> clean up."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import pandas as pd

from sharepointio.codecs import (
    Codec,
    CsvCodec,
    CsvReadOptions,
    CsvWriteOptions,
    FastCsvCodec,
    FastReadOptions,
    FastWriteOptions,
    RDataCodec,
    RdsCodec,
    WorkbookCodec,
    WorkbookReadOptions,
    WorkbookWriteOptions,
)
from sharepointio.errors import (
    DecodeError,
    EncodeError,
    InvalidArgumentError,
    SharePointIOError,
    TransferError,
)
from sharepointio.guard import check_and_gate, ensure_parent_folder
from sharepointio.models import WriteResult
from sharepointio.util.paths import split_remote_path, validate_remote_path
from sharepointio.util.staging import staged_file

logger = logging.getLogger(__name__)

_DRIVE_PRIMITIVES: tuple[str, ...] = ("get_item", "download_file", "upload_file")


def validate_drive(drive: Any) -> Any:
    """Return drive unchanged if it provides the transfer primitives."""
    if drive is None:
        raise InvalidArgumentError("SharePoint drive object not found")
    missing = [name for name in _DRIVE_PRIMITIVES if not callable(getattr(drive, name, None))]
    if missing:
        raise InvalidArgumentError(
            "drive must be a drive handle returned by get_drive",
            details={"missing": missing},
        )
    return drive


def _error_details(exc: Exception) -> dict[str, Any]:
    if isinstance(exc, SharePointIOError):
        return dict(exc.details)
    # Local staging I/O (disk full, permissions) while the primitive ran.
    return {"errno": getattr(exc, "errno", None)}


# ----------------------------
# Generic orchestrators
# ----------------------------
def read_remote(path: str, drive: Any, codec: Codec) -> Any:
    """
    Download path into a staged file and decode it with codec.

    Raises:
        InvalidArgumentError: bad path, drive, or extension (before any download).
        TransferError: the download failed.
        DecodeError: the codec could not decode the downloaded file.
    """
    validate_remote_path(path)
    validate_drive(drive)
    codec.check_read_path(path)

    with staged_file(codec.staging_suffix(path)) as local_path:
        logger.info("Downloading %s from SharePoint: %s", codec.label, path)
        try:
            drive.download_file(path, local_path)
        except (SharePointIOError, OSError) as exc:
            raise TransferError(
                f"Error downloading file: {exc}",
                details={"path": path, **_error_details(exc)},
                cause=exc,
            ) from exc

        try:
            value = codec.decode(local_path)
        except Exception as exc:
            raise DecodeError(
                f"Error reading {codec.label}: {exc}",
                details={"path": path},
                cause=exc,
            ) from exc

    logger.info("%s file successfully loaded", codec.label)
    return value


def write_remote(
    value: Any,
    path: str,
    drive: Any,
    codec: Codec,
    *,
    overwrite: bool = False,
) -> WriteResult:
    """
    Encode value into a staged file and upload it to path.

    The parent folder must already exist; it is never created.

    Raises:
        InvalidArgumentError: bad path, drive, or extension.
        ConflictError: path exists and overwrite is False (nothing is uploaded).
        EncodeError: the codec could not encode value.
        MissingFolderError: the parent folder of path does not exist.
        TransferError: the upload failed.
    """
    validate_remote_path(path)
    validate_drive(drive)
    codec.check_write_path(path)

    exists = check_and_gate(drive, path, overwrite)

    with staged_file(codec.staging_suffix(path)) as local_path:
        try:
            codec.encode(value, local_path)
        except Exception as exc:
            raise EncodeError(
                f"Error writing to {codec.label}: {exc}",
                details={"path": path},
                cause=exc,
            ) from exc

        folder_path, file_name = split_remote_path(path)
        folder = ensure_parent_folder(drive, folder_path)

        logger.info("Writing %s to SharePoint: %s", codec.label, path)
        try:
            item = drive.upload_file(local_path, file_name, folder=folder)
        except (SharePointIOError, OSError) as exc:
            raise TransferError(
                f"Failed to write {codec.label} file to SharePoint: {exc}",
                details={"path": path, **_error_details(exc)},
                cause=exc,
            ) from exc

    status = "overwritten" if exists else "created"
    if exists:
        logger.info("Existing file was overwritten successfully: %s", path)
    else:
        logger.info("%s file was written successfully: %s", codec.label, path)
    return WriteResult(path=path, status=status, item=item)


# ----------------------------
# Delimited text
# ----------------------------
def read_table(
    path: str,
    drive: Any,
    options: Optional[CsvReadOptions] = None,
) -> pd.DataFrame:
    """Read a CSV file from the drive into a DataFrame."""
    return read_remote(path, drive, CsvCodec(read_options=options))


def write_table(
    data: pd.DataFrame,
    path: str,
    drive: Any,
    overwrite: bool = False,
    options: Optional[CsvWriteOptions] = None,
) -> WriteResult:
    """Write a DataFrame to a CSV file on the drive (row index omitted by default)."""
    return write_remote(data, path, drive, CsvCodec(write_options=options), overwrite=overwrite)


def read_table_fast(
    path: str,
    drive: Any,
    options: Optional[FastReadOptions] = None,
) -> Any:
    """Read a large CSV with the multithreaded pyarrow reader."""
    return read_remote(path, drive, FastCsvCodec(read_options=options))


def write_table_fast(
    data: Any,
    path: str,
    drive: Any,
    overwrite: bool = False,
    options: Optional[FastWriteOptions] = None,
) -> WriteResult:
    return write_remote(data, path, drive, FastCsvCodec(write_options=options), overwrite=overwrite)


# ----------------------------
# Workbooks
# ----------------------------
def read_workbook(
    path: str,
    drive: Any,
    options: Optional[WorkbookReadOptions] = None,
) -> Any:
    """Read one sheet (or all sheets, see WorkbookReadOptions.all_sheets) of a workbook."""
    return read_remote(path, drive, WorkbookCodec(read_options=options))


def write_workbook(
    data: Any,
    path: str,
    drive: Any,
    overwrite: bool = False,
    options: Optional[WorkbookWriteOptions] = None,
) -> WriteResult:
    """
    Write a DataFrame, or a mapping of sheet name to DataFrame, to an .xlsx file.
    """
    return write_remote(data, path, drive, WorkbookCodec(write_options=options), overwrite=overwrite)


# ----------------------------
# R object archives
# ----------------------------
def read_object(path: str, drive: Any) -> Any:
    """Read the single object stored in an .rds file."""
    return read_remote(path, drive, RdsCodec())


def write_object(obj: Any, path: str, drive: Any, overwrite: bool = False) -> WriteResult:
    return write_remote(obj, path, drive, RdsCodec(), overwrite=overwrite)


def load_objects(path: str, drive: Any) -> dict[str, Any]:
    """Return the named objects of an .RData/.rda file as a dict."""
    return read_remote(path, drive, RDataCodec())


def save_objects(
    objects: Mapping[str, Any],
    path: str,
    drive: Any,
    overwrite: bool = False,
) -> WriteResult:
    """Save a mapping of name to value as an .RData/.rda file."""
    if not isinstance(objects, Mapping) or not objects:
        raise InvalidArgumentError("objects must be a non-empty mapping of name to value")
    bad_names = [k for k in objects if not isinstance(k, str) or not k]
    if bad_names:
        raise InvalidArgumentError(
            "object names must be non-empty strings",
            details={"names": [repr(k) for k in bad_names]},
        )
    return write_remote(dict(objects), path, drive, RDataCodec(), overwrite=overwrite)
