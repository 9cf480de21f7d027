"""Result model for write operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from .drive_item import DriveItem

WriteStatus = Literal["created", "overwritten"]


@dataclass(slots=True, frozen=True)
class WriteResult:
    """
    Outcome of a successful write.

    Failed writes raise instead of returning, so a WriteResult is always truthy.
    """

    path: str
    status: WriteStatus
    item: Optional[DriveItem] = None

    @property
    def overwritten(self) -> bool:
        return self.status == "overwritten"

    def __bool__(self) -> bool:
        return True
