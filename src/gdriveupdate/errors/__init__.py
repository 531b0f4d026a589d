"""Public error exports for gdriveupdate."""

from __future__ import annotations

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    FetchError,
    GDriveUpdateError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    NotFoundError,
    OpenError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    TransferTimeoutError,
    UpdateFailedError,
    map_http_error,
)

__all__ = [
    "GDriveUpdateError",
    "OpenError",
    "FetchError",
    "TransferTimeoutError",
    "UpdateFailedError",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
]
