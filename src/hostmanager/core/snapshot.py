"""Point-in-time copies of managed files.

A snapshot is a whole-file byte copy written next to the original as
``<original-path>-<unix-seconds>``. It is flushed and fsynced before
``backup()`` returns, so a mutation may only begin once its pre-image is on
disk. ``revert()`` copies the bytes back verbatim and never raises: its
outcome comes back as a :class:`~hostmanager.core.result.Result` for the
caller to log and attach to the original failure.

Retention
---------
After each backup, snapshots of the same file beyond the newest
``retention`` are deleted (``retention=0`` keeps everything). The snapshot
just created is never a pruning candidate, and a failed delete is only
logged.
"""

from __future__ import annotations

import logging
import os
import re
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .errors import FileError, RevertError
from .result import Result, err, ok


@dataclass(frozen=True, slots=True)
class SnapshotHandle:
    """Reference to one snapshot file.

    Attributes
    ----------
    path : Path
        Location of the snapshot file itself.
    source : Path
        The managed file the snapshot was taken from.
    created_at : int
        Unix timestamp (seconds) embedded in the snapshot filename.
    """

    path: Path
    source: Path
    created_at: int


def snapshot_path(source: Path, timestamp: int) -> Path:
    """Return the snapshot filename for ``source`` taken at ``timestamp``."""
    return source.with_name(f"{source.name}-{timestamp}")


def _write_synced(path: Path, data: bytes) -> None:
    """Replace the contents of ``path`` with ``data`` and fsync it."""
    with path.open("wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())


class SnapshotStore:
    """Create, restore and prune snapshots of single files."""

    def __init__(
        self,
        logger: logging.Logger,
        *,
        retention: int = 0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.log = logger
        self.retention = retention
        self._clock = clock

    def backup(self, source: Path) -> SnapshotHandle:
        """Copy the current bytes of ``source`` into a new snapshot file.

        Raises
        ------
        FileError
            If ``source`` cannot be read or the snapshot cannot be written.
        """
        try:
            data = source.read_bytes()
        except OSError as exc:
            raise FileError(
                f"failed to read {source} for backup: {exc}", path=source, step="backup"
            ) from exc

        created_at = int(self._clock())
        target = snapshot_path(source, created_at)
        try:
            _write_synced(target, data)
        except OSError as exc:
            raise FileError(
                f"failed to create backup file {target}: {exc}", path=source, step="backup"
            ) from exc

        handle = SnapshotHandle(path=target, source=source, created_at=created_at)
        self.log.info("Backup created successfully: %s", target)
        self.prune(source, keep=handle)
        return handle

    def revert(
        self, handle: SnapshotHandle, target: Path | None = None
    ) -> Result[bytes, RevertError]:
        """Write the snapshot's bytes back over ``target`` (default: its source).

        Returns the restored bytes on success. Best effort: failures are
        returned as ``Err(RevertError)``, never raised.
        """
        destination = target if target is not None else handle.source
        try:
            data = handle.path.read_bytes()
        except OSError as exc:
            return err(
                RevertError(
                    f"failed to read backup file {handle.path}: {exc}",
                    path=destination,
                    step="revert",
                )
            )

        try:
            _write_synced(destination, data)
        except OSError as exc:
            return err(
                RevertError(
                    f"failed to restore backup to {destination}: {exc}",
                    path=destination,
                    step="revert",
                )
            )

        self.log.info("Reverted %s from backup %s", destination, handle.path)
        return ok(data)

    def list_snapshots(self, source: Path) -> list[SnapshotHandle]:
        """Return the snapshots of ``source`` found on disk, newest first."""
        pattern = re.compile(rf"{re.escape(source.name)}-(\d+)")
        handles: list[SnapshotHandle] = []
        if not source.parent.is_dir():
            return handles
        for entry in source.parent.iterdir():
            match = pattern.fullmatch(entry.name)
            if match and entry.is_file():
                handles.append(
                    SnapshotHandle(path=entry, source=source, created_at=int(match.group(1)))
                )
        handles.sort(key=lambda h: h.created_at, reverse=True)
        return handles

    def prune(self, source: Path, *, keep: SnapshotHandle | None = None) -> list[Path]:
        """Delete snapshots of ``source`` beyond the newest ``retention``.

        Returns the paths actually removed.
        """
        if self.retention <= 0:
            return []

        candidates = [h for h in self.list_snapshots(source) if keep is None or h.path != keep.path]
        # the kept handle occupies one retention slot
        budget = self.retention - 1 if keep is not None else self.retention
        removed: list[Path] = []
        for handle in candidates[max(budget, 0) :]:
            try:
                handle.path.unlink()
            except OSError as exc:
                self.log.warning("Failed to prune backup %s: %s", handle.path, exc)
                continue
            removed.append(handle.path)

        if removed:
            self.log.debug("Pruned %d old backups of %s", len(removed), source)
        return removed


__all__ = ["SnapshotHandle", "SnapshotStore", "snapshot_path"]
