"""Public model exports for sharepointio."""

from __future__ import annotations

from .drive_item import DriveItem
from .results import WriteResult, WriteStatus

__all__ = [
    "DriveItem",
    "WriteResult",
    "WriteStatus",
]
