from __future__ import annotations

import mimetypes
import os
from typing import Optional

FOLDER_MIME: str = "application/vnd.google-apps.folder"
DEFAULT_UPLOAD_MIME: str = "application/octet-stream"


def lookup(extension: str) -> Optional[str]:
    """
    Return the MIME type registered for a file extension, or None if unknown.

    `extension` may be given with or without the leading dot ("txt", ".txt").
    Lookup is case-insensitive.
    """
    if not extension:
        return None
    ext = extension if extension.startswith(".") else f".{extension}"
    mime_type, _ = mimetypes.guess_type(f"file{ext.lower()}", strict=False)
    return mime_type


def resolve_mime_type(name: str) -> Optional[str]:
    """Infer a MIME type from the extension of a file name."""
    _, ext = os.path.splitext(name)
    return lookup(ext)


def is_folder(mime_type: Optional[str]) -> bool:
    return mime_type == FOLDER_MIME
