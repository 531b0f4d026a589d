"""Cancellation token shared by the upload reader chain and the Drive request."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from gdriveupdate.errors import GDriveUpdateError

logger = logging.getLogger(__name__)


class CancellationToken:
    """
    One-shot cancellation signal.

    The first `cancel()` wins; later calls are no-ops. Callbacks registered
    with `add_callback()` run once, on the thread that cancelled (or
    immediately if the token is already cancelled).
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason: Optional[BaseException] = None
        self._callbacks: list[Callable[[], None]] = []

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[BaseException]:
        return self._reason

    def cancel(self, reason: Optional[BaseException] = None) -> bool:
        """Cancel the token. Returns True only for the call that cancelled it."""
        with self._lock:
            if self._event.is_set():
                return False
            self._reason = reason if reason is not None else GDriveUpdateError("Operation cancelled")
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []

        for callback in callbacks:
            _run_callback(callback)
        return True

    def add_callback(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        _run_callback(callback)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set() and self._reason is not None:
            raise self._reason.with_traceback(None)

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._event.wait(timeout)


def _run_callback(callback: Callable[[], None]) -> None:
    # Callbacks run on the watchdog thread; a failing one must not stop the others.
    try:
        callback()
    except Exception:
        logger.exception("Cancellation callback failed")
