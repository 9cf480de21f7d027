"""sharepointio public API."""

from __future__ import annotations

import logging

from sharepointio.auth import ConnectionConfig, MsalClient
from sharepointio.codecs import (
    CsvReadOptions,
    CsvWriteOptions,
    FastReadOptions,
    FastWriteOptions,
    WorkbookReadOptions,
    WorkbookWriteOptions,
)
from sharepointio.connection import connect, connect_with_config, get_drive
from sharepointio.controller import SharePointDrive, SharePointSite
from sharepointio.errors import (
    ApiError,
    AuthError,
    ConfigurationError,
    ConflictError,
    DecodeError,
    EncodeError,
    InvalidArgumentError,
    MissingFolderError,
    NetworkError,
    NotFoundError,
    PermissionError,
    SecurityPolicyError,
    SharePointIOError,
    TransferError,
)
from sharepointio.models import DriveItem, WriteResult
from sharepointio.operations import (
    load_objects,
    read_object,
    read_table,
    read_table_fast,
    read_workbook,
    save_objects,
    write_object,
    write_table,
    write_table_fast,
    write_workbook,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Connection
    "connect",
    "connect_with_config",
    "get_drive",
    "ConnectionConfig",
    "MsalClient",
    "SharePointSite",
    "SharePointDrive",
    # Read / write
    "read_table",
    "write_table",
    "read_table_fast",
    "write_table_fast",
    "read_workbook",
    "write_workbook",
    "read_object",
    "write_object",
    "load_objects",
    "save_objects",
    # Options / Models
    "CsvReadOptions",
    "CsvWriteOptions",
    "FastReadOptions",
    "FastWriteOptions",
    "WorkbookReadOptions",
    "WorkbookWriteOptions",
    "DriveItem",
    "WriteResult",
    # Errors
    "SharePointIOError",
    "ConfigurationError",
    "SecurityPolicyError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "MissingFolderError",
    "TransferError",
    "DecodeError",
    "EncodeError",
    "AuthError",
    "PermissionError",
    "NetworkError",
    "ApiError",
]
