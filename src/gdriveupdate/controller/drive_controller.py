"""Google Drive API controller (internal use only)."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, BinaryIO, Callable, Optional, Sequence, TypeVar

from gdriveupdate.auth import AuthInfo, OAuthClient
from gdriveupdate.errors import (
    ApiError,
    AuthError,
    GDriveUpdateError,
    HttpErrorInfo,
    NetworkError,
    RateLimitError,
    map_http_error,
)
from gdriveupdate.models import DEFAULT_CHUNK_SIZE, MetadataPatch, UpdateResult
from gdriveupdate.plan import ParentDelta
from gdriveupdate.stream import CancellationToken
from gdriveupdate.util.mime import DEFAULT_UPLOAD_MIME

from .fields import FILE_FIELDS, PARENTS_FIELDS

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0


class GoogleDriveController:
    """
    Drive API controller (internal only).

    Notes:
        - The Drive `service` object is NOT exposed.
        - `supports_all_drives` is applied to all requests consistently.
        - Transient failures (429, 5xx, socket errors) are retried with
          exponential back-off, but never after the cancellation token fired.
    """

    DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
    ) -> None:
        self._supports_all_drives = supports_all_drives
        self._retry_policy = _RetryPolicy()

        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        client = OAuthClient(auth_info)
        self._service = client.build_drive_service(use_scopes, ensure_valid=True)

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        supports_all_drives: bool = True,
        retry_policy: Optional[_RetryPolicy] = None,
    ) -> "GoogleDriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._supports_all_drives = supports_all_drives
        obj._retry_policy = retry_policy or _RetryPolicy()
        obj._service = service
        return obj

    # ----------------------------
    # Public API
    # ----------------------------
    def get_parents(self, file_id: str) -> set[str]:
        """Return the current parent folder IDs of a file."""
        req = self._service.files().get(
            fileId=file_id,
            fields=PARENTS_FIELDS,
            **self._common_kwargs(),
        )
        data = self._execute(req.execute)
        parents = data.get("parents") or []
        return {p for p in parents if isinstance(p, str)}

    def update(
        self,
        file_id: str,
        patch: MetadataPatch,
        *,
        media: Optional[BinaryIO] = None,
        upload_mime_type: Optional[str] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        parent_delta: Optional[ParentDelta] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> UpdateResult:
        """
        Issue one `files.update` request.

        Metadata, content and parent changes all travel in this single request.
        With `media`, the content is sent as a resumable upload in `chunk_size`
        pieces; the cancellation token is checked between chunks and, when it
        fires, the request's open connections are closed.
        """
        kwargs: dict[str, Any] = {
            "fileId": file_id,
            "body": patch.to_body(),
            "fields": FILE_FIELDS,
        }
        kwargs.update(self._common_kwargs())

        if parent_delta is not None and not parent_delta.is_empty:
            add_parents = parent_delta.add_parents_param()
            remove_parents = parent_delta.remove_parents_param()
            if add_parents:
                kwargs["addParents"] = add_parents
            if remove_parents:
                kwargs["removeParents"] = remove_parents

        if media is None:
            req = self._service.files().update(**kwargs)
            data = self._execute(req.execute, cancel=cancel)
            return _file_dict_to_update_result(data)

        try:
            from googleapiclient.http import MediaIoBaseUpload
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "google-api-python-client is not available",
                cause=exc,
            ) from exc

        kwargs["media_body"] = MediaIoBaseUpload(
            media,
            mimetype=upload_mime_type or DEFAULT_UPLOAD_MIME,
            chunksize=chunk_size,
            resumable=True,
        )
        req = self._service.files().update(**kwargs)

        if cancel is not None:
            http = getattr(req, "http", None)
            cancel.add_callback(lambda: _close_http_connections(http))

        data = None
        while data is None:
            if cancel is not None:
                cancel.raise_if_cancelled()
            status, data = self._execute(req.next_chunk, cancel=cancel)
            if status is not None:
                logger.debug(
                    "Uploaded chunk for %s: %s/%s bytes",
                    file_id,
                    getattr(status, "resumable_progress", "?"),
                    getattr(status, "total_size", "?"),
                )

        return _file_dict_to_update_result(data)

    # ----------------------------
    # Internals
    # ----------------------------
    def _common_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _execute(
        self,
        func: Callable[[], T],
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> T:
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                cancelled = cancel is not None and cancel.is_cancelled
                if (
                    not cancelled
                    and self._should_retry(mapped)
                    and attempt < self._retry_policy.max_retries
                ):
                    logger.debug(
                        "Retrying Drive request in %.1fs after %s: %s",
                        delay,
                        type(mapped).__name__,
                        mapped,
                    )
                    time.sleep(delay)
                    delay *= 2
                    continue
                if mapped is exc:
                    raise
                raise mapped from exc

        raise ApiError("Unexpected retry loop termination")

    def _should_retry(self, exc: Exception) -> bool:
        if isinstance(exc, RateLimitError):
            return True
        if isinstance(exc, NetworkError):
            return True
        if isinstance(exc, ApiError):
            status_code = getattr(exc, "details", {}).get("status_code")
            return isinstance(status_code, int) and 500 <= status_code <= 599
        return False

    def _map_exception(self, exc: Exception) -> Exception:
        if isinstance(exc, GDriveUpdateError):
            return exc

        try:
            from googleapiclient.errors import HttpError
        except Exception:  # pragma: no cover
            HttpError = None  # type: ignore[assignment]

        if HttpError is not None and isinstance(exc, HttpError):
            info = _http_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if isinstance(exc, OSError):
            return NetworkError(f"Network error: {exc}", cause=exc)

        return ApiError(f"Drive API error: {exc}", cause=exc)


def _close_http_connections(http: Any) -> None:
    """Close every open connection of an httplib2 Http (or AuthorizedHttp)."""
    inner = getattr(http, "http", http)
    connections = getattr(inner, "connections", None)
    if not isinstance(connections, dict):
        return
    for key, conn in list(connections.items()):
        try:
            conn.close()
        except OSError as exc:
            logger.debug("Failed to close connection %s: %s", key, exc)


def _file_dict_to_update_result(data: dict[str, Any]) -> UpdateResult:
    file_id = data.get("id")
    name = data.get("name", "")
    mime_type = data.get("mimeType", "")
    parents = data.get("parents", []) or []

    size = None
    if isinstance(data.get("size"), str) and data["size"].isdigit():
        size = int(data["size"])
    elif isinstance(data.get("size"), int):
        size = data["size"]

    md5 = data.get("md5Checksum")

    return UpdateResult(
        file_id=file_id if isinstance(file_id, str) else "",
        name=name if isinstance(name, str) else "",
        mime_type=mime_type if isinstance(mime_type, str) else "",
        parents=list(parents) if isinstance(parents, list) else [],
        size=size,
        md5_checksum=md5 if isinstance(md5, str) else None,
    )


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except ValueError:
            payload = None
        err = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                details["reason_detail"] = errors[0].get("reason")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
