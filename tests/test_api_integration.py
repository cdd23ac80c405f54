# tests/test_api_integration.py
"""
Integration Tests for the Host Manager HTTP API.

Focus
-----
These tests drive the real mutators on temporary files through the HTTP
routes. Only the external hostname primitive is faked.

Scenarios
---------
1. **DNS lifecycle**: list -> add -> remove, order preserved.
2. **Hostname**: success, and rollback when the primitive fails.
3. **Error mapping**: empty input -> 400, domain failure -> 500.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from hostmanager.api.app import create_app
from hostmanager.core.errors import MutationError
from hostmanager.core.settings import Settings
from hostmanager.services.manager import FileSystemHostManager

LOG = logging.getLogger("tests.api")


class FlakyHostname:
    def __init__(self) -> None:
        self.refuse: set[str] = set()
        self.timeouts: list[float | None] = []

    def __call__(self, hostname: str, timeout: float | None) -> None:
        self.timeouts.append(timeout)
        if hostname in self.refuse:
            raise MutationError(f"hostname: could not set {hostname}")


@pytest.fixture  # type: ignore[misc]
def setter() -> FlakyHostname:
    return FlakyHostname()


@pytest.fixture  # type: ignore[misc]
def settings(tmp_path: Path) -> Settings:
    hostname = tmp_path / "hostname"
    hostname.write_text("old-host\n", encoding="utf-8")
    resolv = tmp_path / "resolv.conf"
    resolv.write_text("nameserver 8.8.8.8\nnameserver 1.1.1.1\n", encoding="utf-8")
    return Settings(HOSTMANAGER_ENV="test", hostname_file=hostname, resolv_conf=resolv)


@pytest.fixture  # type: ignore[misc]
def client(settings: Settings, setter: FlakyHostname) -> Generator[TestClient, None, None]:
    manager = FileSystemHostManager.from_settings(settings, LOG, setter=setter)
    app = create_app(settings, manager=manager, logger=LOG)
    with TestClient(app) as c:
        yield c


def test_dns_lifecycle(client: TestClient) -> None:
    resp = client.get("/v1/dns-servers")
    assert resp.status_code == 200
    assert resp.json() == {"dns_servers": ["8.8.8.8", "1.1.1.1"]}

    resp = client.post("/v1/dns-servers", json={"dns_server": "9.9.9.9"})
    assert resp.status_code == 200
    assert resp.json() == {}
    assert client.get("/v1/dns-servers").json()["dns_servers"] == ["8.8.8.8", "1.1.1.1", "9.9.9.9"]

    resp = client.post("/v1/dns-servers:remove", json={"dns_server": "1.1.1.1"})
    assert resp.status_code == 200
    assert client.get("/v1/dns-servers").json()["dns_servers"] == ["8.8.8.8", "9.9.9.9"]


def test_set_hostname(client: TestClient, settings: Settings, setter: FlakyHostname) -> None:
    resp = client.post("/v1/hostname", json={"hostname": "web-01", "timeout_seconds": 2.5})

    assert resp.status_code == 200
    assert settings.hostname_file.read_text(encoding="utf-8") == "web-01\n"
    assert setter.timeouts == [2.5]


def test_set_hostname_failure_is_internal_and_rolled_back(
    client: TestClient, settings: Settings, setter: FlakyHostname
) -> None:
    setter.refuse.add("new-host")

    resp = client.post("/v1/hostname", json={"hostname": "new-host"})

    assert resp.status_code == 500
    body = resp.json()
    assert body["code"] == "INTERNAL"
    assert "could not set new-host" in body["message"]
    assert body["rollback_failed"] is False
    assert settings.hostname_file.read_text(encoding="utf-8") == "old-host\n"


@pytest.mark.parametrize(  # type: ignore[misc]
    "path, payload",
    [
        ("/v1/hostname", {"hostname": ""}),
        ("/v1/hostname", {}),
        ("/v1/dns-servers", {"dns_server": ""}),
        ("/v1/dns-servers:remove", {}),
    ],
)
def test_empty_fields_are_bad_requests(
    client: TestClient, settings: Settings, path: str, payload: dict[str, str]
) -> None:
    resp = client.post(path, json=payload)

    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_ARGUMENT"
    names = {p.name for p in settings.hostname_file.parent.iterdir()}
    assert names == {"hostname", "resolv.conf"}, "no snapshot may be created"


def test_duplicate_dns_server_is_internal(client: TestClient) -> None:
    resp = client.post("/v1/dns-servers", json={"dns_server": "8.8.8.8"})

    assert resp.status_code == 500
    assert resp.json()["code"] == "INTERNAL"
    assert "already exists" in resp.json()["message"]
    assert client.get("/v1/dns-servers").json()["dns_servers"] == ["8.8.8.8", "1.1.1.1"]


def test_malformed_body_is_rejected_by_schema(client: TestClient) -> None:
    resp = client.post("/v1/hostname", json={"hostname": "h", "timeout_seconds": -1})
    assert resp.status_code == 422
