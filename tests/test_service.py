"""Tests for the service boundary: validation and status mapping."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from hostmanager.api.service import HostManagerService, ServiceError, StatusCode
from hostmanager.core.errors import MutationError
from hostmanager.core.settings import Settings
from hostmanager.services.manager import FileSystemHostManager

LOG = logging.getLogger("tests.service")


class ScriptedHostname:
    def __init__(self) -> None:
        self.fail = False
        self.calls: list[str] = []

    def __call__(self, hostname: str, timeout: float | None) -> None:
        self.calls.append(hostname)
        if self.fail:
            raise MutationError("hostname: permission denied")


@pytest.fixture  # type: ignore[misc]
def files(tmp_path: Path) -> tuple[Path, Path]:
    hostname = tmp_path / "hostname"
    hostname.write_text("old-host\n", encoding="utf-8")
    resolv = tmp_path / "resolv.conf"
    resolv.write_text("nameserver 8.8.8.8\nnameserver 1.1.1.1\n", encoding="utf-8")
    return hostname, resolv


@pytest.fixture  # type: ignore[misc]
def setter() -> ScriptedHostname:
    return ScriptedHostname()


@pytest.fixture  # type: ignore[misc]
def service(files: tuple[Path, Path], setter: ScriptedHostname) -> HostManagerService:
    hostname, resolv = files
    settings = Settings(hostname_file=hostname, resolv_conf=resolv, snapshot_retention=5)
    manager = FileSystemHostManager.from_settings(settings, LOG, setter=setter)
    return HostManagerService(manager, LOG)


def snapshot_files(tmp_path: Path) -> list[Path]:
    return [p for p in tmp_path.iterdir() if p.name not in {"hostname", "resolv.conf"}]


@pytest.mark.parametrize(  # type: ignore[misc]
    "method, value",
    [
        ("set_hostname", ""),
        ("set_hostname", "   "),
        ("add_dns_server", ""),
        ("remove_dns_server", ""),
    ],
)
def test_empty_input_is_invalid_and_touches_nothing(
    service: HostManagerService,
    setter: ScriptedHostname,
    tmp_path: Path,
    method: str,
    value: str,
) -> None:
    with pytest.raises(ServiceError) as info:
        getattr(service, method)(value)

    assert info.value.code is StatusCode.INVALID_ARGUMENT
    assert snapshot_files(tmp_path) == []
    assert setter.calls == []


def test_operations_delegate(service: HostManagerService, files: tuple[Path, Path]) -> None:
    hostname, _ = files
    service.set_hostname("new-host")
    service.add_dns_server("9.9.9.9")
    service.remove_dns_server("8.8.8.8")

    assert hostname.read_text(encoding="utf-8") == "new-host\n"
    assert service.list_dns_servers() == ["1.1.1.1", "9.9.9.9"]


def test_duplicate_maps_to_internal(service: HostManagerService) -> None:
    with pytest.raises(ServiceError) as info:
        service.add_dns_server("8.8.8.8")

    assert info.value.code is StatusCode.INTERNAL
    assert "already exists" in info.value.message


def test_mutation_failure_maps_to_internal(
    service: HostManagerService, setter: ScriptedHostname, files: tuple[Path, Path]
) -> None:
    """Scenario: the primitive fails; the caller sees INTERNAL and the file is unchanged."""
    hostname, _ = files
    setter.fail = True

    with pytest.raises(ServiceError) as info:
        service.set_hostname("new-host")

    assert info.value.code is StatusCode.INTERNAL
    assert "permission denied" in info.value.message
    # the re-apply during revert also failed
    assert info.value.rollback_failed
    assert hostname.read_text(encoding="utf-8") == "old-host\n"


def test_read_failure_maps_to_internal(
    service: HostManagerService, files: tuple[Path, Path]
) -> None:
    _, resolv = files
    resolv.unlink()

    with pytest.raises(ServiceError) as info:
        service.list_dns_servers()

    assert info.value.code is StatusCode.INTERNAL


def test_non_utf8_resolver_lists_through_boundary(
    service: HostManagerService, files: tuple[Path, Path]
) -> None:
    _, resolv = files
    resolv.write_bytes(b"# caf\xe9\nnameserver 8.8.8.8\n")

    assert service.list_dns_servers() == ["8.8.8.8"]
