"""Reader wrapper that reports upload progress."""

from __future__ import annotations

import io
import time
from typing import Any, BinaryIO, Callable, Optional

from gdriveupdate.models import TransferObservation

ProgressObserver = Callable[[int, int], None]


class ProgressReader:
    """
    Wraps a binary stream and reports `(bytes_so_far, total_size)` after
    every read that returned data.

    `bytes_so_far` is the furthest stream position read so far, so it never
    decreases when the uploader seeks back to resend a chunk.
    """

    def __init__(
        self,
        reader: BinaryIO,
        total_size: int = 0,
        observer: Optional[ProgressObserver] = None,
        *,
        observation: Optional[TransferObservation] = None,
    ) -> None:
        self._reader = reader
        self._total_size = max(total_size, 0)
        self._observer = observer
        if observation is None:
            now = time.monotonic()
            observation = TransferObservation(started=now, last_activity=now)
        observation.total_size = self._total_size
        self._observation = observation
        self._position = 0

    @property
    def total_size(self) -> int:
        return self._total_size

    @property
    def bytes_read(self) -> int:
        return self._observation.bytes_transferred

    def read(self, size: int = -1) -> bytes:
        data = self._reader.read(size)
        if data:
            self._position += len(data)
            bytes_so_far = self._observation.advance(self._position)
            if self._observer is not None:
                self._observer(bytes_so_far, self._total_size)
        return data

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        self._position = self._reader.seek(offset, whence)
        return self._position

    def tell(self) -> int:
        return self._reader.tell()

    def seekable(self) -> bool:
        return self._reader.seekable()

    def readable(self) -> bool:
        return True

    def close(self) -> None:
        self._reader.close()

    @property
    def closed(self) -> bool:
        return self._reader.closed

    def __getattr__(self, attr: str) -> Any:
        """Proxy other attributes to the wrapped stream."""
        return getattr(self._reader, attr)
