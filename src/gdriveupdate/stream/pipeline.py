"""Composition of the upload stream: source -> progress -> timeout."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import BinaryIO, Callable, Optional

from gdriveupdate.models import TransferObservation

from .cancellation import CancellationToken
from .progress_reader import ProgressObserver, ProgressReader
from .timeout_reader import TimeoutReader


@dataclass(slots=True)
class ReaderPipeline:
    """
    The stream handed to the uploader plus the token consulted by the request.

    `stream` is the outermost (timeout) layer. `cancel` is the same token the
    timeout layer cancels, so it must also be given to the network call.
    """

    stream: TimeoutReader
    cancel: CancellationToken
    observation: TransferObservation

    def start(self) -> None:
        self.stream.start()

    def close(self) -> None:
        self.stream.close()

    def __enter__(self) -> "ReaderPipeline":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def build_pipeline(
    source: BinaryIO,
    *,
    total_size: int,
    timeout: float,
    observer: Optional[ProgressObserver] = None,
    cancel: Optional[CancellationToken] = None,
    clock: Callable[[], float] = time.monotonic,
    watchdog: bool = True,
) -> ReaderPipeline:
    """
    Wrap `source` for upload.

    Progress sits below the timeout layer: bytes are reported as soon as the
    source returns them, and a read aborted by the timeout reports nothing
    beyond what was actually read.
    """
    token = cancel if cancel is not None else CancellationToken()
    now = clock()
    observation = TransferObservation(started=now, last_activity=now, total_size=total_size)

    progress = ProgressReader(source, total_size, observer, observation=observation)
    reader = TimeoutReader(
        progress,  # type: ignore[arg-type]
        timeout,
        token,
        observation=observation,
        clock=clock,
        watchdog=watchdog,
    )
    return ReaderPipeline(stream=reader, cancel=token, observation=observation)
