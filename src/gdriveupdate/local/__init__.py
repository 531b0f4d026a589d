"""Local file access for gdriveupdate."""

from __future__ import annotations

from .file_source import SourceInfo, open_source

__all__ = ["SourceInfo", "open_source"]
