"""Domain errors raised by the snapshot store and the mutators.

Every error records which managed file it concerns (``path``) and which step
of the operation failed (``step``). When a failed mutation also failed to roll
back, the compensating failure is attached as ``rollback_error`` so callers
can see that the file and live state may have diverged.

The service boundary collapses all of these to a single *internal* status;
the richer classification only feeds logs and tests.
"""

from __future__ import annotations

from pathlib import Path


class HostManagerError(Exception):
    """Base class for classified failures inside the core."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        step: str | None = None,
        rollback_error: RevertError | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.step = step
        self.rollback_error = rollback_error

    @property
    def rollback_failed(self) -> bool:
        """True when the compensating revert for this failure did not complete."""
        return self.rollback_error is not None

    def __str__(self) -> str:
        if self.rollback_error is None:
            return self.message
        return f"{self.message} (rollback failed: {self.rollback_error.message})"


class FileError(HostManagerError):
    """Open/read/write/flush failure on a managed file or a snapshot."""


class DuplicateError(HostManagerError):
    """The DNS server is already listed in the resolver file."""

    def __init__(self, server: str, *, path: Path | None = None) -> None:
        super().__init__(f"DNS server {server} already exists", path=path, step="check")
        self.server = server


class MutationError(HostManagerError):
    """The external hostname primitive failed or ran past its deadline."""


class RevertError(HostManagerError):
    """The compensating revert itself failed. Logged, never propagated alone."""


__all__ = [
    "DuplicateError",
    "FileError",
    "HostManagerError",
    "MutationError",
    "RevertError",
]
