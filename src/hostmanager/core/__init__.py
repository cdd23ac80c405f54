"""Core building blocks: settings, domain errors, results, locks and snapshots."""

from __future__ import annotations

__all__ = ["__doc__"]
