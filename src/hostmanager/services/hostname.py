"""Hostname mutator: live kernel hostname plus its on-disk record.

The host identity lives in two places, the running kernel and the hostname
file, with no primitive that changes both at once. ``set_hostname`` runs a
two-phase change with a compensating action:

1. snapshot the hostname file,
2. apply the new name through the external primitive,
3. persist ``<name>\\n`` to the file,
4. on failure in 2 or 3, restore the file from the snapshot and re-apply the
   restored name so the kernel and the file agree again.

A failed compensation is logged at error level and attached to the raised
error as ``rollback_error``; the caller always sees the original failure.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from pathlib import Path

from hostmanager.core.errors import FileError, HostManagerError, MutationError, RevertError
from hostmanager.core.locks import PathLocks
from hostmanager.core.result import Result, err, ok
from hostmanager.core.snapshot import SnapshotHandle, SnapshotStore

# (hostname, timeout_seconds) -> None, raising MutationError on failure
HostnameSetter = Callable[[str, float | None], None]


class HostnameCommand:
    """Default external primitive: run ``<command> <hostname>`` with a deadline."""

    def __init__(self, command: str = "hostname") -> None:
        self.command = command

    def __call__(self, hostname: str, timeout: float | None) -> None:
        try:
            subprocess.run(
                [self.command, hostname],
                check=True,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise MutationError(
                f"{self.command} timed out after {timeout}s", step="apply"
            ) from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            raise MutationError(f"{self.command} failed: {detail}", step="apply") from exc
        except OSError as exc:
            raise MutationError(f"could not run {self.command}: {exc}", step="apply") from exc


class HostnameMutator:
    """Change the machine hostname with rollback on failure."""

    def __init__(
        self,
        hostname_file: Path,
        store: SnapshotStore,
        logger: logging.Logger,
        *,
        setter: HostnameSetter | None = None,
        locks: PathLocks | None = None,
        timeout: float | None = 10.0,
    ) -> None:
        self.path = Path(hostname_file)
        self.store = store
        self.log = logger
        self.setter: HostnameSetter = setter if setter is not None else HostnameCommand()
        self.locks = locks if locks is not None else PathLocks()
        self.timeout = timeout

    def set_hostname(self, hostname: str, *, timeout: float | None = None) -> None:
        """Apply ``hostname`` to the live system and the hostname file.

        Parameters
        ----------
        hostname:
            New host name. Emptiness is checked by the service boundary.
        timeout:
            Deadline for the external primitive; defaults to ``self.timeout``.

        Raises
        ------
        FileError
            The snapshot could not be taken (nothing changed), or the file
            write failed (state was rolled back).
        MutationError
            The external primitive failed (state was rolled back).
        """
        deadline = timeout if timeout is not None else self.timeout
        self.log.info("Setting hostname: %s", hostname)

        with self.locks.exclusive(self.path):
            handle = self.store.backup(self.path)

            try:
                self.setter(hostname, deadline)
            except MutationError as exc:
                failure = MutationError(
                    f"failed to set hostname: {exc.message}", path=self.path, step="apply"
                )
                raise self._rolled_back(handle, failure) from exc

            try:
                self.path.write_text(f"{hostname}\n", encoding="utf-8")
            except OSError as exc:
                failure = FileError(
                    f"failed to write to {self.path}: {exc}", path=self.path, step="persist"
                )
                raise self._rolled_back(handle, failure) from exc

        self.log.info("Hostname set successfully: %s", hostname)

    def read_hostname(self) -> str:
        """Return the hostname currently recorded in the hostname file."""
        with self.locks.exclusive(self.path):
            try:
                return self.path.read_text(encoding="utf-8").strip()
            except OSError as exc:
                raise FileError(
                    f"failed to read {self.path}: {exc}", path=self.path, step="read"
                ) from exc

    def revert(self, handle: SnapshotHandle) -> Result[str, RevertError]:
        """Restore the file from ``handle`` and re-apply the restored name.

        Idempotent: running it twice leaves the same file bytes and the same
        live hostname. Returns the restored name.
        """
        restored = self.store.revert(handle, self.path)
        if restored.is_err():
            return err(restored.unwrap_err())

        value = restored.unwrap().decode("utf-8", errors="replace").strip()
        if not value:
            return err(
                RevertError(
                    f"backup {handle.path} holds no hostname to re-apply",
                    path=self.path,
                    step="revert",
                )
            )

        try:
            self.setter(value, self.timeout)
        except MutationError as exc:
            return err(
                RevertError(
                    f"failed to re-apply hostname {value}: {exc.message}",
                    path=self.path,
                    step="revert",
                )
            )

        self.log.info("Hostname reverted to %s", value)
        return ok(value)

    def _rolled_back(self, handle: SnapshotHandle, failure: HostManagerError) -> HostManagerError:
        """Run the compensating revert and attach its failure, if any."""
        rollback_error = self.revert(handle).err_or_none()
        if rollback_error is not None:
            self.log.error(
                "Failed to revert hostname after %s failure: %s; live hostname and %s may disagree",
                failure.step,
                rollback_error,
                self.path,
            )
            failure.rollback_error = rollback_error
        return failure


__all__ = ["HostnameCommand", "HostnameMutator", "HostnameSetter"]
