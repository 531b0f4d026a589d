"""Exception hierarchy and HTTP error mapping for gdriveupdate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class GDriveUpdateError(Exception):
    """
    Base exception for gdriveupdate.

    Attributes:
        details: Optional structured information (e.g., HTTP status, reason).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


# ----------------------------
# Update operation failures
# ----------------------------
class OpenError(GDriveUpdateError):
    """Raised when the local content source cannot be opened or stat'd."""


class FetchError(GDriveUpdateError):
    """Raised when the current parents of the target file cannot be fetched."""


class TransferTimeoutError(GDriveUpdateError):
    """
    Raised when no upload read completed within the inactivity timeout.

    details:
        timeout: configured inactivity timeout in seconds.
        bytes_transferred: bytes read from the source before the stall.
    """


class UpdateFailedError(GDriveUpdateError):
    """Raised when the update call fails for any reason other than a timeout."""


# ----------------------------
# Transport (Drive API) failures
# ----------------------------
class AuthError(GDriveUpdateError):
    """Raised when OAuth / service account authentication fails."""


class PermissionError(GDriveUpdateError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class InvalidArgumentError(GDriveUpdateError):
    """Raised when request arguments are invalid (HTTP 400, bad options, etc.)."""


class NotFoundError(GDriveUpdateError):
    """Raised when a Drive resource is not found (HTTP 404)."""


class ConflictError(GDriveUpdateError):
    """Raised when a conflict occurs (HTTP 409/412)."""


class RateLimitError(GDriveUpdateError):
    """Raised when rate-limited (HTTP 429)."""


class QuotaExceededError(GDriveUpdateError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""


class NetworkError(GDriveUpdateError):
    """Raised when network/socket issues prevent the request."""


class ApiError(GDriveUpdateError):
    """Raised for unclassified API errors (5xx, unknown 4xx, etc.)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to gdriveupdate exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "dailyLimitExceeded",
    "usageLimits",
    "storageQuotaExceeded",
)

_RATE_LIMIT_REASONS: tuple[str, ...] = (
    "rateLimitExceeded",
    "userRateLimitExceeded",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> GDriveUpdateError:
    """
    Map an HTTP error to a gdriveupdate exception.

    Policy:
        - 401 -> AuthError
        - 403 -> RateLimitError for rate-limit reasons, QuotaExceededError
          for quota reasons, PermissionError otherwise
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - 400 -> InvalidArgumentError
        - 5xx / otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        # Drive reports per-user rate limiting as 403, not 429.
        if info.reason in _RATE_LIMIT_REASONS:
            return RateLimitError(message, details=details, cause=cause)
        if _is_quota_reason(info.reason):
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
