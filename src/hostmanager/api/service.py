"""
Service boundary between the transport and the host manager.

Responsibilities
----------------
- **Validate**: reject empty required fields before any file is touched.
- **Delegate**: call the matching :class:`HostManager` operation.
- **Map**: collapse every domain failure to one of two caller-visible
  categories, ``INVALID_ARGUMENT`` or ``INTERNAL``.

No other logic lives here. The HTTP routes are a thin pass-through on top of
this class, and the mutators stay testable without any transport.
"""

from __future__ import annotations

import logging
from enum import Enum

from hostmanager.core.errors import HostManagerError
from hostmanager.services.manager import HostManager


class StatusCode(str, Enum):
    """Caller-visible failure categories."""

    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    INTERNAL = "INTERNAL"


class ServiceError(Exception):
    """Failure surfaced to the transport with its status category."""

    def __init__(self, code: StatusCode, message: str, *, rollback_failed: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.rollback_failed = rollback_failed

    @classmethod
    def invalid_argument(cls, message: str) -> ServiceError:
        return cls(StatusCode.INVALID_ARGUMENT, message)

    @classmethod
    def internal(cls, error: HostManagerError) -> ServiceError:
        return cls(StatusCode.INTERNAL, str(error), rollback_failed=error.rollback_failed)


class HostManagerService:
    """Adapt external requests to :class:`HostManager` calls."""

    def __init__(self, manager: HostManager, logger: logging.Logger) -> None:
        self.manager = manager
        self.log = logger

    def set_hostname(self, hostname: str, *, timeout: float | None = None) -> None:
        if not hostname.strip():
            raise ServiceError.invalid_argument("hostname is empty")
        try:
            self.manager.set_hostname(hostname, timeout=timeout)
        except HostManagerError as exc:
            raise self._internal("SetHostname", exc) from exc

    def list_dns_servers(self) -> list[str]:
        try:
            return self.manager.list_dns_servers()
        except HostManagerError as exc:
            raise self._internal("ListDNSServers", exc) from exc

    def add_dns_server(self, dns_server: str) -> None:
        if not dns_server:
            raise ServiceError.invalid_argument("dns server is empty")
        try:
            self.manager.add_dns_server(dns_server)
        except HostManagerError as exc:
            raise self._internal("AddDNSServer", exc) from exc

    def remove_dns_server(self, dns_server: str) -> None:
        if not dns_server:
            raise ServiceError.invalid_argument("dns server is empty")
        try:
            self.manager.remove_dns_server(dns_server)
        except HostManagerError as exc:
            raise self._internal("RemoveDNSServer", exc) from exc

    def _internal(self, method: str, error: HostManagerError) -> ServiceError:
        self.log.warning(
            "%s failed at step %s on %s: %s", method, error.step, error.path, error
        )
        return ServiceError.internal(error)


__all__ = ["HostManagerService", "ServiceError", "StatusCode"]
