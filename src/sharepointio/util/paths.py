"""Remote path helpers for drive-relative paths."""

from __future__ import annotations

from typing import Iterable
from urllib.parse import quote

from sharepointio.errors import InvalidArgumentError

SEPARATOR: str = "/"


def validate_remote_path(path: object) -> str:
    """Return path unchanged if it is a single non-empty string naming an item."""
    if not isinstance(path, str) or not path.strip():
        raise InvalidArgumentError(
            "path must be a single non-empty string",
            details={"path": path},
        )
    if not path.rsplit(SEPARATOR, 1)[-1].strip():
        raise InvalidArgumentError(
            "path must end with a file or folder name",
            details={"path": path},
        )
    return path


def split_remote_path(path: str) -> tuple[str, str]:
    """
    Split a remote path into (parent_folder_path, leaf_name).

    A path without a separator is a root-level leaf:

        >>> split_remote_path("data.csv")
        ('', 'data.csv')
        >>> split_remote_path("reports/monthly/data.csv")
        ('reports/monthly', 'data.csv')
    """
    validate_remote_path(path)
    if SEPARATOR not in path:
        return "", path

    parts = path.split(SEPARATOR)
    return SEPARATOR.join(parts[:-1]), parts[-1]


def file_extension(path: str) -> str:
    """Return the lowercase extension of the leaf name, without the dot."""
    _, leaf = split_remote_path(path)
    if "." not in leaf:
        return ""
    return leaf.rsplit(".", 1)[1].lower()


def check_extension(path: str, allowed: Iterable[str], label: str) -> str:
    """
    Ensure path has one of the allowed extensions (case-insensitive).

    Returns:
        The matched extension in lowercase.

    Raises:
        InvalidArgumentError: if the extension is not in the allow-list.
    """
    allowed_lower = tuple(ext.lower() for ext in allowed)
    ext = file_extension(path)
    if ext not in allowed_lower:
        pretty = " or ".join(f".{e}" for e in allowed)
        raise InvalidArgumentError(
            f"{label} file must have {pretty} extension",
            details={"path": path, "extension": ext, "allowed": list(allowed)},
        )
    return ext


def encode_remote_path(path: str) -> str:
    """URL-encode a drive-relative path for Graph path addressing (`root:/{path}`)."""
    return quote(path.strip(SEPARATOR), safe=SEPARATOR)
