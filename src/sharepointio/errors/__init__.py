"""Public error exports for sharepointio."""

from __future__ import annotations

from .exceptions import (
    ApiError,
    AuthError,
    ConfigurationError,
    ConflictError,
    DecodeError,
    EncodeError,
    HttpErrorInfo,
    InvalidArgumentError,
    MissingFolderError,
    NetworkError,
    NotFoundError,
    PermissionError,
    SecurityPolicyError,
    SharePointIOError,
    TransferError,
    map_http_error,
)

__all__ = [
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
    "HttpErrorInfo",
    "map_http_error",
]
