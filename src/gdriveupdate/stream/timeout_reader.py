"""Reader wrapper that aborts an upload after a period of read inactivity."""

from __future__ import annotations

import io
import logging
import threading
import time
from typing import Any, BinaryIO, Callable, Optional

from gdriveupdate.errors import TransferTimeoutError
from gdriveupdate.models import TransferObservation
from gdriveupdate.util.fmt import format_duration, format_size

from .cancellation import CancellationToken

logger = logging.getLogger(__name__)


class TimeoutReader:
    """
    Wraps a binary stream with an inactivity timeout.

    If no read completes within `timeout` seconds of the previous completed
    read (or of `start()` for the first read), the shared cancellation token
    is cancelled with a TransferTimeoutError and every later read raises it.
    A background watchdog fires the timeout even while the network layer is
    blocked outside of `read()`; a read that itself takes too long is caught
    when it returns.

    Once the source is exhausted (a read returns no data, or every byte of a
    known total has been read) the reader is done: the watchdog stops and no
    timeout can fire while the uploader waits for the server.

    A `timeout` of zero or less disables all of this: reads pass through.
    """

    def __init__(
        self,
        reader: BinaryIO,
        timeout: float,
        cancel: Optional[CancellationToken] = None,
        *,
        observation: Optional[TransferObservation] = None,
        clock: Callable[[], float] = time.monotonic,
        watchdog: bool = True,
    ) -> None:
        self._reader = reader
        self._timeout = timeout
        self._cancel = cancel if cancel is not None else CancellationToken()
        self._clock = clock
        if observation is None:
            now = clock()
            observation = TransferObservation(started=now, last_activity=now)
        self._observation = observation
        self._use_watchdog = watchdog
        self._started = False
        self._done = False
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def enabled(self) -> bool:
        return self._timeout > 0

    @property
    def done(self) -> bool:
        return self._done

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def cancel_token(self) -> CancellationToken:
        return self._cancel

    def start(self) -> None:
        """Start the inactivity clock (and the watchdog). Idempotent."""
        if not self.enabled or self._started:
            return
        self._started = True
        self._observation.touch(self._clock())
        if self._use_watchdog:
            self._thread = threading.Thread(
                target=self._watch,
                name="gdriveupdate-timeout",
                daemon=True,
            )
            self._thread.start()

    def stop(self) -> None:
        """Stop the watchdog. Does not cancel the token."""
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=1.0)
        self._thread = None

    def read(self, size: int = -1) -> bytes:
        if not self.enabled:
            return self._reader.read(size)

        self.start()
        self._cancel.raise_if_cancelled()
        if self._done:
            return self._reader.read(size)

        transferred = self._observation.bytes_transferred
        data = self._reader.read(size)

        now = self._clock()
        if now - self._observation.last_activity > self._timeout:
            self._expire(transferred)
        # The watchdog may have fired while the read was blocked.
        self._cancel.raise_if_cancelled()

        self._observation.touch(now)
        if self._exhausted(size, data):
            self._finish()
        return data

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        return self._reader.seek(offset, whence)

    def tell(self) -> int:
        return self._reader.tell()

    def seekable(self) -> bool:
        return self._reader.seekable()

    def readable(self) -> bool:
        return True

    def close(self) -> None:
        self.stop()
        self._reader.close()

    @property
    def closed(self) -> bool:
        return self._reader.closed

    def __getattr__(self, attr: str) -> Any:
        """Proxy other attributes to the wrapped stream."""
        return getattr(self._reader, attr)

    # ----------------------------
    # Internals
    # ----------------------------
    def _watch(self) -> None:
        while not self._cancel.is_cancelled and not self._done:
            deadline = self._observation.last_activity + self._timeout
            remaining = deadline - self._clock()
            if remaining <= 0:
                if not self._done:
                    self._expire()
                return
            if self._stop.wait(remaining):
                return

    def _exhausted(self, size: int, data: bytes) -> bool:
        if not data and size != 0:
            return True
        total = self._observation.total_size
        return total > 0 and self._observation.bytes_transferred >= total

    def _finish(self) -> None:
        self._done = True
        self._stop.set()
        logger.debug("Upload source exhausted, inactivity timeout disarmed")

    def _expire(self, transferred: Optional[int] = None) -> None:
        if transferred is None:
            transferred = self._observation.bytes_transferred
        err = self._timeout_error(transferred)
        if self._cancel.cancel(err):
            logger.debug(
                "Upload inactivity timeout after %s (%d bytes transferred)",
                format_duration(self._timeout),
                transferred,
            )

    def _timeout_error(self, transferred: int) -> TransferTimeoutError:
        duration = format_duration(self._timeout)
        if transferred == 0:
            message = f"timeout, no data was transferred for {duration}"
        else:
            message = (
                f"timeout, transfer stalled for {duration} "
                f"after {format_size(transferred)} ({transferred} bytes)"
            )
        return TransferTimeoutError(
            message,
            details={"timeout": self._timeout, "bytes_transferred": transferred},
        )
