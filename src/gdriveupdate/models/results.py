"""Result models for the update operation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

from gdriveupdate.plan import ParentDelta

UpdateOutcome = Literal["success", "timeout", "failed"]


@dataclass(slots=True)
class UpdateResult:
    """File record returned by Drive after the update call."""

    file_id: str
    name: str = ""
    mime_type: str = ""
    parents: list[str] = field(default_factory=list)
    size: Optional[int] = None
    md5_checksum: Optional[str] = None


@dataclass(slots=True)
class TransferObservation:
    """
    State of the active upload, shared by the reader wrappers.

    Clock values are time.monotonic() readings.
    """

    started: float
    last_activity: float
    bytes_transferred: int = 0
    total_size: int = 0

    def advance(self, bytes_so_far: int) -> int:
        """Record progress; `bytes_transferred` never decreases."""
        if bytes_so_far > self.bytes_transferred:
            self.bytes_transferred = bytes_so_far
        return self.bytes_transferred

    def touch(self, now: float) -> None:
        self.last_activity = now


@dataclass(slots=True)
class UpdateReport:
    """What a successful update did, for reporting."""

    result: UpdateResult
    outcome: UpdateOutcome = "success"
    parent_delta: Optional[ParentDelta] = None
    uploaded_path: Optional[str] = None
    elapsed: float = 0.0
    rate: Optional[int] = None

    @property
    def parents_changed(self) -> bool:
        return self.parent_delta is not None and not self.parent_delta.is_empty
