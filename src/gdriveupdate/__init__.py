"""gdriveupdate public API."""

from __future__ import annotations

from gdriveupdate.auth import AuthInfo, OAuthClient
from gdriveupdate.errors import (
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
from gdriveupdate.models import (
    MetadataPatch,
    TransferObservation,
    UpdateReport,
    UpdateRequest,
    UpdateResult,
)
from gdriveupdate.plan import ParentDelta, reconcile_parents
from gdriveupdate.stream import (
    CancellationToken,
    ProgressReader,
    ReaderPipeline,
    TimeoutReader,
    build_pipeline,
)
from gdriveupdate.updater import GoogleDriveUpdater
from gdriveupdate.util.rate import calc_rate

__all__ = [
    # High-level
    "GoogleDriveUpdater",
    # Auth
    "AuthInfo",
    "OAuthClient",
    # Models
    "UpdateRequest",
    "MetadataPatch",
    "UpdateResult",
    "UpdateReport",
    "TransferObservation",
    "ParentDelta",
    "reconcile_parents",
    # Streams
    "CancellationToken",
    "ProgressReader",
    "TimeoutReader",
    "ReaderPipeline",
    "build_pipeline",
    "calc_rate",
    # Errors
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
