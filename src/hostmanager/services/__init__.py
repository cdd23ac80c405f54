"""Mutators for the managed files and the host manager that combines them."""

from __future__ import annotations

from .dns import DnsListMutator
from .hostname import HostnameCommand, HostnameMutator
from .manager import FileSystemHostManager, HostManager

__all__ = [
    "DnsListMutator",
    "FileSystemHostManager",
    "HostManager",
    "HostnameCommand",
    "HostnameMutator",
]
