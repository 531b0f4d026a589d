"""Field masks for Google Drive API responses."""

from __future__ import annotations

FILE_FIELDS: str = (
    "id,"
    "name,"
    "mimeType,"
    "parents,"
    "size,"
    "md5Checksum"
)

PARENTS_FIELDS: str = "parents"
