"""Public model exports for gdriveupdate."""

from __future__ import annotations

from .results import TransferObservation, UpdateOutcome, UpdateReport, UpdateResult
from .update_request import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_TIMEOUT,
    MetadataPatch,
    UpdateRequest,
)

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_TIMEOUT",
    "MetadataPatch",
    "UpdateRequest",
    "UpdateResult",
    "UpdateReport",
    "UpdateOutcome",
    "TransferObservation",
]
