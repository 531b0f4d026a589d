"""Parent-set reconciliation: minimal remove/add delta for a file's parents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(slots=True, frozen=True)
class ParentDelta:
    """
    Parents to detach from (`to_remove`) and attach to (`to_add`) a file.

    The two sets are always disjoint.
    """

    to_remove: frozenset[str] = frozenset()
    to_add: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        if self.to_remove & self.to_add:
            raise ValueError("ParentDelta.to_remove and to_add must be disjoint")

    @property
    def is_empty(self) -> bool:
        return not self.to_remove and not self.to_add

    def remove_parents_param(self) -> str | None:
        """Comma-joined `removeParents` value (sorted), or None when empty."""
        return _join(self.to_remove)

    def add_parents_param(self) -> str | None:
        """Comma-joined `addParents` value (sorted), or None when empty."""
        return _join(self.to_add)


def reconcile_parents(current: Iterable[str], desired: Iterable[str]) -> ParentDelta:
    """
    Compute the parent delta between the file's current and desired parents.

    Inputs are treated as sets: ordering and duplicates do not matter.
    """
    current_set = frozenset(current)
    desired_set = frozenset(desired)
    return ParentDelta(
        to_remove=current_set - desired_set,
        to_add=desired_set - current_set,
    )


def _join(ids: frozenset[str]) -> str | None:
    if not ids:
        return None
    return ",".join(sorted(ids))
