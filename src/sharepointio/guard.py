"""Existence/overwrite checks run before every write."""

from __future__ import annotations

import logging
from typing import Any, Optional

from sharepointio.errors import ConflictError, MissingFolderError, SharePointIOError
from sharepointio.models import DriveItem

logger = logging.getLogger(__name__)


def probe(drive: Any, path: str) -> Optional[DriveItem]:
    """
    Return the item at path, or None if it cannot be resolved.

    A failed lookup and a missing item are indistinguishable here: both
    mean the path is free to write.
    """
    try:
        return drive.get_item(path)
    except SharePointIOError as exc:
        logger.debug(
            "Probe did not resolve item",
            extra={"remote_path": path, "error_type": exc.__class__.__name__},
        )
        return None


def check_and_gate(drive: Any, path: str, overwrite: bool) -> bool:
    """
    Return whether path already exists, refusing to continue on a conflict.

    Raises:
        ConflictError: if the item exists and overwrite is False.
    """
    exists = probe(drive, path) is not None
    if exists and not overwrite:
        raise ConflictError(
            f"File already exists: {path}. Set overwrite=True to replace it.",
            details={"path": path},
        )
    return exists


def ensure_parent_folder(drive: Any, parent_path: str) -> Optional[DriveItem]:
    """
    Resolve the destination folder of a write.

    Returns:
        None for the drive root (empty parent_path), else the folder item.

    Raises:
        MissingFolderError: if parent_path does not resolve to a folder.
            Folders are never created here.
    """
    if not parent_path:
        return None

    folder = probe(drive, parent_path)
    if folder is None or not folder.is_folder:
        raise MissingFolderError(
            f"Destination folder doesn't exist: {parent_path}. "
            "Please create the folder structure first.",
            details={"folder_path": parent_path},
        )
    return folder
