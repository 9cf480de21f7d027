"""Internal controller exports for sharepointio."""

from __future__ import annotations

from .drive_controller import SharePointDrive, SharePointSite
from .graph_client import GraphClient

__all__ = ["GraphClient", "SharePointSite", "SharePointDrive"]
