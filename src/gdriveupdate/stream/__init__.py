"""Upload stream wrappers for gdriveupdate."""

from __future__ import annotations

from .cancellation import CancellationToken
from .pipeline import ReaderPipeline, build_pipeline
from .progress_reader import ProgressObserver, ProgressReader
from .timeout_reader import TimeoutReader

__all__ = [
    "CancellationToken",
    "ProgressObserver",
    "ProgressReader",
    "TimeoutReader",
    "ReaderPipeline",
    "build_pipeline",
]
