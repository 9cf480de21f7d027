"""$select definitions for Microsoft Graph responses."""

from __future__ import annotations

ITEM_FIELDS: str = (
    "id,"
    "name,"
    "size,"
    "webUrl,"
    "eTag,"
    "createdDateTime,"
    "lastModifiedDateTime,"
    "folder,"
    "file,"
    "parentReference"
)

DRIVE_FIELDS: str = "id,name,webUrl,driveType"

SITE_FIELDS: str = "id,name,displayName,webUrl"
