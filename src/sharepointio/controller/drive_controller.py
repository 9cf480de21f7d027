"""SharePoint site and drive handles backed by Microsoft Graph (internal use only)."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional
from urllib.parse import unquote

from sharepointio.errors import ApiError, InvalidArgumentError, NotFoundError
from sharepointio.models import DriveItem
from sharepointio.util.paths import encode_remote_path, validate_remote_path
from sharepointio.util.time import parse_rfc3339

from .fields import DRIVE_FIELDS, ITEM_FIELDS, SITE_FIELDS
from .graph_client import GraphClient

logger = logging.getLogger(__name__)

# Graph accepts a single PUT up to 4 MiB; larger files need an upload session.
SIMPLE_UPLOAD_MAX_BYTES: int = 4 * 1024 * 1024
# Upload session chunks must be multiples of 320 KiB.
UPLOAD_CHUNK_BYTES: int = 16 * 320 * 1024

_REPLACE = {"@microsoft.graph.conflictBehavior": "replace"}


class SharePointSite:
    """Site handle: an authenticated connection to one SharePoint site."""

    def __init__(
        self,
        client: GraphClient,
        *,
        site_id: str,
        name: str = "",
        web_url: Optional[str] = None,
    ) -> None:
        self._client = client
        self.site_id = site_id
        self.name = name
        self.web_url = web_url

    @classmethod
    def resolve(cls, client: GraphClient, hostname: str, site_path: str = "") -> "SharePointSite":
        """Look up a site by host name and server-relative path."""
        if site_path:
            path = f"sites/{hostname}:/{encode_remote_path(site_path)}"
        else:
            path = f"sites/{hostname}"
        data = client.get_json(path, params={"$select": SITE_FIELDS})
        return cls(
            client,
            site_id=str(data.get("id", "")),
            name=str(data.get("displayName") or data.get("name") or ""),
            web_url=data.get("webUrl"),
        )

    def list_drives(self) -> list[dict[str, Any]]:
        """Return the raw drive resources (document libraries) of the site."""
        return list(
            self._client.iter_pages(
                f"sites/{self.site_id}/drives",
                params={"$select": DRIVE_FIELDS},
            )
        )

    def get_drive(self, drive_name: str) -> "SharePointDrive":
        """
        Return the document library named drive_name.

        Raises:
            NotFoundError: if the site has no drive with that name.
        """
        if not isinstance(drive_name, str) or not drive_name.strip():
            raise InvalidArgumentError("drive_name must be a non-empty string")

        drives = self.list_drives()
        for data in drives:
            if data.get("name") == drive_name:
                return SharePointDrive(
                    self._client,
                    drive_id=str(data["id"]),
                    name=drive_name,
                    web_url=data.get("webUrl"),
                )

        raise NotFoundError(
            f"Drive not found: {drive_name}",
            details={
                "drive_name": drive_name,
                "available": [d.get("name") for d in drives],
            },
        )

    def __repr__(self) -> str:
        return f"SharePointSite(name={self.name!r}, web_url={self.web_url!r})"


class SharePointDrive:
    """
    Drive handle: one document library of a site.

    Exposes the transfer primitives used by the orchestrators: get_item
    (probe), download_file and upload_file.
    """

    def __init__(
        self,
        client: GraphClient,
        *,
        drive_id: str,
        name: str = "",
        web_url: Optional[str] = None,
    ) -> None:
        self._client = client
        self.drive_id = drive_id
        self.name = name
        self.web_url = web_url

    def get_item(self, path: str) -> DriveItem:
        validate_remote_path(path)
        data = self._client.get_json(
            self._item_path(path),
            params={"$select": ITEM_FIELDS},
        )
        return _item_dict_to_drive_item(data)

    def download_file(self, path: str, local_path: str) -> None:
        validate_remote_path(path)
        self._client.download_to(f"{self._item_path(path)}:/content", local_path)

    def upload_file(
        self,
        local_path: str,
        name: str,
        *,
        folder: Optional[DriveItem] = None,
    ) -> DriveItem:
        """
        Upload local_path as `name` into folder (or the drive root), replacing
        any existing item with the same name.
        """
        if not local_path or not isinstance(local_path, str):
            raise InvalidArgumentError("local_path must be a non-empty string")
        if not name or "/" in name:
            raise InvalidArgumentError("name must be a single path segment", details={"name": name})

        if folder is None:
            target = f"drives/{self.drive_id}/root:/{encode_remote_path(name)}"
        else:
            target = f"drives/{self.drive_id}/items/{folder.item_id}:/{encode_remote_path(name)}"

        size = os.path.getsize(local_path)
        if size <= SIMPLE_UPLOAD_MAX_BYTES:
            with open(local_path, "rb") as f:
                data = self._client.put_content(f"{target}:/content", f.read(), params=_REPLACE)
        else:
            data = self._upload_session(target, local_path, size)

        return _item_dict_to_drive_item(data)

    # ----------------------------
    # Internals
    # ----------------------------
    def _item_path(self, path: str) -> str:
        return f"drives/{self.drive_id}/root:/{encode_remote_path(path)}"

    def _upload_session(self, target: str, local_path: str, size: int) -> dict[str, Any]:
        session = self._client.post_json(
            f"{target}:/createUploadSession",
            {"item": dict(_REPLACE)},
        )
        upload_url = session.get("uploadUrl")
        if not isinstance(upload_url, str) or not upload_url:
            raise ApiError("Graph did not return an uploadUrl", details={"target": target})

        logger.debug("Chunked upload", extra={"size": size, "target": target})
        data: dict[str, Any] = {}
        with open(local_path, "rb") as f:
            start = 0
            while start < size:
                chunk = f.read(UPLOAD_CHUNK_BYTES)
                if not chunk:
                    break
                data = self._client.put_chunk(upload_url, chunk, start=start, total=size)
                start += len(chunk)
        return data

    def __repr__(self) -> str:
        return f"SharePointDrive(name={self.name!r}, web_url={self.web_url!r})"


def _parent_path(reference: Any) -> str:
    if not isinstance(reference, dict):
        return ""
    path = reference.get("path")
    if not isinstance(path, str) or "root:" not in path:
        return ""
    return unquote(path.split("root:", 1)[1]).strip("/")


def _item_dict_to_drive_item(data: dict[str, Any]) -> DriveItem:
    item_id = data.get("id")
    name = data.get("name", "")

    modified_time = None
    created_time = None

    if isinstance(data.get("lastModifiedDateTime"), str):
        try:
            modified_time = parse_rfc3339(data["lastModifiedDateTime"])
        except ValueError:
            modified_time = None

    if isinstance(data.get("createdDateTime"), str):
        try:
            created_time = parse_rfc3339(data["createdDateTime"])
        except ValueError:
            created_time = None

    size = data.get("size")
    etag = data.get("eTag")
    web_url = data.get("webUrl")

    return DriveItem(
        item_id=item_id if isinstance(item_id, str) else "",
        name=name if isinstance(name, str) else "",
        is_folder=isinstance(data.get("folder"), dict),
        size=size if isinstance(size, int) and not isinstance(size, bool) else None,
        web_url=web_url if isinstance(web_url, str) else None,
        parent_path=_parent_path(data.get("parentReference")),
        etag=etag if isinstance(etag, str) else None,
        created_time=created_time,
        modified_time=modified_time,
    )
