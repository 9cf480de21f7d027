"""Data model for SharePoint drive items."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class DriveItem:
    """
    Metadata of a file or folder in a document library.

    Notes:
        - parent_path is drive-relative ("" for items in the drive root).
        - Only fields selected in controller.fields are populated.
    """

    item_id: str
    name: str
    is_folder: bool

    size: Optional[int] = None
    web_url: Optional[str] = None
    parent_path: str = ""
    etag: Optional[str] = None
    created_time: Optional[datetime] = None
    modified_time: Optional[datetime] = None

    @property
    def path(self) -> str:
        """Drive-relative path of this item."""
        if not self.parent_path:
            return self.name
        return f"{self.parent_path}/{self.name}"
