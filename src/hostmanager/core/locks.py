"""Per-file exclusive access for managed files.

One ``threading.Lock`` exists per resolved path. A mutator holds it for the
whole snapshot, read, apply, persist and revert span, so two requests served
from the HTTP thread pool never interleave on the same file.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path


class PathLocks:
    """Registry handing out one lock per managed file path."""

    def __init__(self) -> None:
        self._global = threading.Lock()
        self._locks: dict[Path, threading.Lock] = {}

    def lock_for(self, path: Path) -> threading.Lock:
        key = Path(path).resolve()
        with self._global:
            if key not in self._locks:
                self._locks[key] = threading.Lock()
            return self._locks[key]

    @contextmanager
    def exclusive(self, path: Path) -> Iterator[None]:
        """Hold the lock for ``path`` for the duration of the ``with`` block."""
        with self.lock_for(path):
            yield


__all__ = ["PathLocks"]
