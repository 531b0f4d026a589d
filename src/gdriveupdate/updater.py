"""GoogleDriveUpdater: updates one Drive file's metadata, content and parents."""

from __future__ import annotations

import logging
import sys
import time
from typing import Any, Callable, Optional, Sequence, TextIO

from gdriveupdate.auth import AuthInfo
from gdriveupdate.controller import GoogleDriveController
from gdriveupdate.errors import (
    FetchError,
    GDriveUpdateError,
    TransferTimeoutError,
    UpdateFailedError,
)
from gdriveupdate.local import open_source
from gdriveupdate.models import MetadataPatch, UpdateReport, UpdateRequest
from gdriveupdate.plan import ParentDelta, reconcile_parents
from gdriveupdate.stream import ProgressObserver, ReaderPipeline, build_pipeline
from gdriveupdate.util.fmt import format_size
from gdriveupdate.util.mime import resolve_mime_type
from gdriveupdate.util.rate import calc_rate

logger = logging.getLogger(__name__)


class GoogleDriveUpdater:
    """Apply an UpdateRequest to Drive as a single files.update call."""

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
    ) -> None:
        self._controller = GoogleDriveController(
            auth_info,
            scopes=scopes,
            supports_all_drives=supports_all_drives,
        )
        self._clock: Callable[[], float] = time.monotonic
        self._watchdog = True

    @classmethod
    def from_controller(
        cls,
        controller: Any,
        *,
        clock: Callable[[], float] = time.monotonic,
        watchdog: bool = True,
    ) -> "GoogleDriveUpdater":
        """Create updater with an injected controller (useful for tests)."""
        obj = cls.__new__(cls)
        obj._controller = controller
        obj._clock = clock
        obj._watchdog = watchdog
        return obj

    def update(
        self,
        request: UpdateRequest,
        *,
        out: Optional[TextIO] = None,
        progress: Optional[ProgressObserver] = None,
    ) -> UpdateReport:
        """
        Update the file described by `request`.

        Status lines ("Uploading ...", "Move ...", "Updated ...") are written
        to `out` (default: stdout). `progress` receives (bytes_so_far, total)
        during an upload.

        Raises:
            OpenError: the local file could not be opened (no call was made).
            FetchError: current parents could not be fetched (no call was made).
            TransferTimeoutError: the upload stalled longer than request.timeout.
            UpdateFailedError: the update call failed for any other reason.
        """
        out = out if out is not None else sys.stdout
        patch = request.metadata_patch()
        pipeline: Optional[ReaderPipeline] = None
        upload_mime_type: Optional[str] = None

        try:
            if request.has_content:
                pipeline, patch = self._prepare_upload(request, progress)
                upload_mime_type = patch.mime_type
                print(f"Uploading {request.path}", file=out)

            parent_delta: Optional[ParentDelta] = None
            if request.has_parents:
                parent_delta = self._fetch_parent_delta(request)
            # An empty delta sends no parent instruction at all.
            send_delta = parent_delta if parent_delta is not None and not parent_delta.is_empty else None

            started = self._clock()
            if pipeline is not None:
                pipeline.start()
            try:
                result = self._controller.update(
                    request.file_id,
                    patch,
                    media=pipeline.stream if pipeline is not None else None,
                    upload_mime_type=upload_mime_type,
                    chunk_size=request.chunk_size,
                    parent_delta=send_delta,
                    cancel=pipeline.cancel if pipeline is not None else None,
                )
            except Exception as exc:
                raise _classify_failure(exc, pipeline) from exc
            finished = self._clock()

            report = UpdateReport(
                result=result,
                parent_delta=parent_delta,
                uploaded_path=request.path,
                elapsed=finished - started,
            )
            if report.parents_changed:
                print(
                    f"Move {result.file_id} under new parent {', '.join(result.parents)}",
                    file=out,
                )
            if pipeline is not None:
                size = result.size if result.size is not None else pipeline.observation.bytes_transferred
                report.rate = calc_rate(size, started, finished)
                print(
                    f"Updated {result.file_id} at {format_size(report.rate)}/s, "
                    f"total {format_size(size)}",
                    file=out,
                )
            return report
        finally:
            if pipeline is not None:
                pipeline.close()

    # ----------------------------
    # Internals
    # ----------------------------
    def _prepare_upload(
        self,
        request: UpdateRequest,
        progress: Optional[ProgressObserver],
    ) -> tuple[ReaderPipeline, MetadataPatch]:
        source, info = open_source(request.path)  # type: ignore[arg-type]

        name = request.name if request.name is not None else info.name
        mime_type = request.mime_type if request.mime_type is not None else resolve_mime_type(name)
        patch = MetadataPatch(
            name=name,
            description=request.description,
            mime_type=mime_type,
        )

        pipeline = build_pipeline(
            source,
            total_size=info.size,
            timeout=request.timeout,
            observer=progress,
            clock=self._clock,
            watchdog=self._watchdog,
        )
        logger.debug(
            "Prepared upload of %s (%d bytes, chunk size %d, mime %s)",
            request.path,
            info.size,
            request.chunk_size,
            mime_type,
        )
        return pipeline, patch

    def _fetch_parent_delta(self, request: UpdateRequest) -> ParentDelta:
        try:
            current = self._controller.get_parents(request.file_id)
        except Exception as exc:
            raise FetchError(
                f"Failed to get file's parent: {exc}",
                details={"file_id": request.file_id},
                cause=exc,
            ) from exc

        delta = reconcile_parents(current, request.parents)
        logger.debug(
            "Parent delta for %s: remove=%s add=%s",
            request.file_id,
            sorted(delta.to_remove),
            sorted(delta.to_add),
        )
        return delta


def _classify_failure(
    exc: Exception,
    pipeline: Optional[ReaderPipeline],
) -> GDriveUpdateError:
    """Timeout if the pipeline's token was cancelled by its timeout, otherwise generic."""
    if pipeline is not None and pipeline.cancel.is_cancelled:
        reason = pipeline.cancel.reason
        if isinstance(reason, TransferTimeoutError):
            return TransferTimeoutError(
                f"Failed to upload file: {reason}",
                details={**reason.details, "outcome": "timeout"},
                cause=exc,
            )

    details = dict(exc.details) if isinstance(exc, GDriveUpdateError) else {}
    details["outcome"] = "failed"
    return UpdateFailedError(str(exc), details=details, cause=exc)
