"""The four host operations behind one interface.

``HostManager`` is what the service boundary depends on; tests can hand it
any object with the same methods. ``FileSystemHostManager`` wires the two
mutators to a shared snapshot store and lock registry.
"""

from __future__ import annotations

import logging
from typing import Protocol

from hostmanager.core.locks import PathLocks
from hostmanager.core.settings import Settings
from hostmanager.core.snapshot import SnapshotStore

from .dns import DnsListMutator
from .hostname import HostnameCommand, HostnameMutator, HostnameSetter


class HostManager(Protocol):
    def set_hostname(self, hostname: str, *, timeout: float | None = None) -> None: ...

    def list_dns_servers(self) -> list[str]: ...

    def add_dns_server(self, server: str) -> None: ...

    def remove_dns_server(self, server: str) -> None: ...


class FileSystemHostManager:
    """Host manager operating on the real hostname and resolver files."""

    def __init__(self, hostname: HostnameMutator, dns: DnsListMutator) -> None:
        self.hostname = hostname
        self.dns = dns

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        logger: logging.Logger,
        *,
        setter: HostnameSetter | None = None,
    ) -> FileSystemHostManager:
        """Build both mutators from configuration, sharing one store and lock registry."""
        locks = PathLocks()
        store = SnapshotStore(logger.getChild("snapshot"), retention=settings.snapshot_retention)
        hostname = HostnameMutator(
            settings.hostname_file,
            store,
            logger.getChild("hostname"),
            setter=setter if setter is not None else HostnameCommand(settings.hostname_command),
            locks=locks,
            timeout=settings.hostname_timeout,
        )
        dns = DnsListMutator(settings.resolv_conf, store, logger.getChild("dns"), locks=locks)
        return cls(hostname, dns)

    def set_hostname(self, hostname: str, *, timeout: float | None = None) -> None:
        self.hostname.set_hostname(hostname, timeout=timeout)

    def list_dns_servers(self) -> list[str]:
        return self.dns.list_servers()

    def add_dns_server(self, server: str) -> None:
        self.dns.add_server(server)

    def remove_dns_server(self, server: str) -> None:
        self.dns.remove_server(server)


__all__ = ["FileSystemHostManager", "HostManager"]
