from .fmt import format_duration, format_size
from .mime import (
    DEFAULT_UPLOAD_MIME,
    FOLDER_MIME,
    is_folder,
    lookup,
    resolve_mime_type,
)
from .rate import calc_rate

__all__ = [
    "calc_rate",
    "format_size",
    "format_duration",
    "DEFAULT_UPLOAD_MIME",
    "FOLDER_MIME",
    "is_folder",
    "lookup",
    "resolve_mime_type",
]
