"""Exception hierarchy and HTTP error mapping for sharepointio."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class SharePointIOError(Exception):
    """
    Base exception for sharepointio.

    Attributes:
        details: Optional structured information (e.g., remote path, HTTP status).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class ConfigurationError(SharePointIOError):
    """Raised when required connection parameters are missing or invalid."""


class SecurityPolicyError(SharePointIOError):
    """Raised when a caller tries to override the fixed authorization scope."""


class InvalidArgumentError(SharePointIOError):
    """Raised for a malformed path, missing handle, or wrong file extension."""


class NotFoundError(SharePointIOError):
    """Raised when a site, drive, or item is not found (HTTP 404)."""


class ConflictError(SharePointIOError):
    """Raised when the write target exists and overwrite is not permitted."""


class MissingFolderError(SharePointIOError):
    """Raised when the parent folder of a write target does not exist."""


class TransferError(SharePointIOError):
    """Raised when a download or upload fails in the transfer layer."""


class DecodeError(SharePointIOError):
    """Raised when a staged file cannot be decoded by its format codec."""


class EncodeError(SharePointIOError):
    """Raised when a value cannot be encoded into a staged file."""


class AuthError(SharePointIOError):
    """Raised when token acquisition fails or Graph rejects the token (HTTP 401)."""


class PermissionError(SharePointIOError):
    """Raised when access is denied (HTTP 403)."""


class NetworkError(SharePointIOError):
    """Raised when network/timeout issues prevent the request."""


class ApiError(SharePointIOError):
    """Raised for unclassified Graph errors (5xx, unknown 4xx, etc.)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to sharepointio exceptions."""

    status_code: int
    code: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> SharePointIOError:
    """
    Map a Microsoft Graph HTTP error to a sharepointio exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> PermissionError
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "code": info.code,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
