"""Local content source for uploads."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import BinaryIO

from gdriveupdate.errors import OpenError


@dataclass(slots=True, frozen=True)
class SourceInfo:
    """Name (base name of the path) and size in bytes of a local file."""

    name: str
    size: int


def open_source(path: str) -> tuple[BinaryIO, SourceInfo]:
    """
    Open a local file for upload.

    Raises:
        OpenError: if the path is empty, missing, unreadable or a directory.
    """
    if not path:
        raise OpenError("Failed to open file: path is empty")

    try:
        f = open(path, "rb")
    except OSError as exc:
        raise OpenError(
            f"Failed to open file: {exc}",
            details={"path": path},
            cause=exc,
        ) from exc

    try:
        st = os.fstat(f.fileno())
    except OSError as exc:
        f.close()
        raise OpenError(
            f"Failed to open file: {exc}",
            details={"path": path},
            cause=exc,
        ) from exc

    return f, SourceInfo(name=os.path.basename(path), size=st.st_size)
