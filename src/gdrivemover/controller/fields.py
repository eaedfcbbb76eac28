"""Field definitions for Google Drive API responses."""

from __future__ import annotations

FILE_FIELDS: str = (
    "id,"
    "name,"
    "mimeType,"
    "size,"
    "quotaBytesUsed,"
    "parents,"
    "owners,"
    "md5Checksum,"
    "originalFilename,"
    "createdTime,"
    "modifiedTime"
)

# Full metadata for single-item fetches.
ALL_FIELDS: str = "*"

CHECKSUM_FIELDS: str = "md5Checksum"

LIST_FIELDS: str = f"nextPageToken,files({FILE_FIELDS})"

PROBE_FIELDS: str = "files(id,name,mimeType,parents)"

PERMISSION_FIELDS: str = "id"
