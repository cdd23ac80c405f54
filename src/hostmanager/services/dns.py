"""DNS server list kept in a resolver configuration file.

Only lines whose first whitespace-delimited token is exactly ``nameserver``
are entries; the entry value is the second token. Every other line
(comments, ``search``, ``options`` ...) is preserved untouched and in place.

The file is handled as bytes split on ``\\n`` only. Bytes that are not valid
UTF-8 are carried through with ``surrogateescape``, so lines the mutator does
not touch are written back exactly as they were read.

Mutations follow snapshot-then-write: the whole file is backed up first and,
if the write fails, restored byte for byte from that backup.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TextIO

from hostmanager.core.errors import DuplicateError, FileError
from hostmanager.core.locks import PathLocks
from hostmanager.core.snapshot import SnapshotHandle, SnapshotStore

NAMESERVER = "nameserver"
ENCODING = "utf-8"
ERRORS = "surrogateescape"


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only; a trailing newline does not start an extra line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def parse_entries(lines: Iterable[str]) -> Iterator[str]:
    """Yield nameserver addresses from resolver-file lines, in file order.

    Lines with the keyword but no address are skipped, not reported.
    """
    for line in lines:
        fields = line.split()
        if len(fields) >= 2 and fields[0] == NAMESERVER:
            yield fields[1]


def nameserver_line(server: str) -> str:
    return f"{NAMESERVER} {server}"


class DnsListMutator:
    """List, add and remove ``nameserver`` entries of one resolver file."""

    def __init__(
        self,
        resolv_conf: Path,
        store: SnapshotStore,
        logger: logging.Logger,
        *,
        locks: PathLocks | None = None,
    ) -> None:
        self.path = Path(resolv_conf)
        self.store = store
        self.log = logger
        self.locks = locks if locks is not None else PathLocks()

    # ------------------------------- Reads ----------------------------------

    def list_servers(self) -> list[str]:
        """Return the configured DNS servers in file order."""
        self.log.info("Listing DNS servers")
        with self.locks.exclusive(self.path):
            servers = list(parse_entries(split_lines(self._read_text())))
        self.log.info("Listed %d DNS servers", len(servers))
        return servers

    def _read_text(self) -> str:
        try:
            data = self.path.read_bytes()
        except OSError as exc:
            raise FileError(
                f"failed to read {self.path}: {exc}", path=self.path, step="read"
            ) from exc
        return data.decode(ENCODING, errors=ERRORS)

    def _open(self, mode: str) -> TextIO:
        return self.path.open(mode, encoding=ENCODING, errors=ERRORS, newline="")

    # ------------------------------- Writes ---------------------------------

    def add_server(self, server: str) -> None:
        """Append ``nameserver <server>`` after all existing lines.

        A final line without a newline is terminated first so the new entry
        starts on a line of its own.

        Raises
        ------
        DuplicateError
            ``server`` is already listed; the file is left untouched.
        FileError
            Backup, read or append failed; a failed append is reverted.
        """
        self.log.info("Adding DNS server: %s", server)
        with self.locks.exclusive(self.path):
            handle = self.store.backup(self.path)

            text = self._read_text()
            if server in parse_entries(split_lines(text)):
                raise DuplicateError(server, path=self.path)

            prefix = "\n" if text and not text.endswith("\n") else ""
            try:
                with self._open("a") as f:
                    f.write(prefix + nameserver_line(server) + "\n")
            except OSError as exc:
                raise self._write_failed(handle, exc, "append") from exc

        self.log.info("DNS server added successfully: %s", server)

    def remove_server(self, server: str) -> None:
        """Drop every line that reads exactly ``nameserver <server>`` once trimmed.

        Matching is on the whole trimmed line, so ``nameserver  <server>``
        (two spaces) is kept. Removing an absent server rewrites the file
        unchanged and is not an error. Kept lines are written back with their
        original bytes.
        """
        self.log.info("Removing DNS server: %s", server)
        target = nameserver_line(server)
        with self.locks.exclusive(self.path):
            handle = self.store.backup(self.path)
            kept = [line for line in split_lines(self._read_text()) if line.strip() != target]

            try:
                with self._open("w") as f:
                    for line in kept:
                        f.write(line + "\n")
                    f.flush()
            except OSError as exc:
                raise self._write_failed(handle, exc, "rewrite") from exc

        self.log.info("DNS server removed successfully: %s", server)

    def _write_failed(self, handle: SnapshotHandle, exc: OSError, step: str) -> FileError:
        """Revert from ``handle`` and build the error describing the failed write."""
        rollback_error = self.store.revert(handle, self.path).err_or_none()
        if rollback_error is not None:
            self.log.error(
                "Failed to revert %s after %s failure: %s", self.path, step, rollback_error
            )
        return FileError(
            f"failed to write to {self.path}: {exc}",
            path=self.path,
            step=step,
            rollback_error=rollback_error,
        )


__all__ = ["DnsListMutator", "NAMESERVER", "nameserver_line", "parse_entries", "split_lines"]
