"""Public plan exports for gdriveupdate."""

from __future__ import annotations

from .parent_delta import ParentDelta, reconcile_parents

__all__ = ["ParentDelta", "reconcile_parents"]
