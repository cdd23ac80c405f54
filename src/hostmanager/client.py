# -----------------------------------------------------------------------------
# Small synchronous client for the host manager HTTP API.
#
# It mirrors the four service operations one-to-one and is what the CLI uses
# to talk to a running server. Like the rest of the package it avoids an
# extra HTTP dependency and sends requests with `urllib.request`; tests patch
# `_request()` so no real network I/O happens.
#
# Error responses from the server carry `{"code", "message"}`; they are
# re-raised as `ClientError` with the status category preserved.
# -----------------------------------------------------------------------------
from __future__ import annotations

import json
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


class ClientError(RuntimeError):
    """A request to the host manager API failed."""

    def __init__(self, message: str, *, code: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.status = status


@dataclass(slots=True)
class HostManagerClient:
    """Client for a running host manager API.

    Parameters
    ----------
    base_url:
        Server root, e.g. ``"http://localhost:8080"``.
    timeout_seconds:
        Network timeout for each request.
    """

    base_url: str
    timeout_seconds: float = 10.0

    # --------------------------------------------------------------------- #
    # Public API
    # --------------------------------------------------------------------- #
    def set_hostname(self, hostname: str) -> None:
        self._request("POST", "/v1/hostname", {"hostname": hostname})

    def list_dns_servers(self) -> list[str]:
        response = self._request("GET", "/v1/dns-servers")
        servers = response.get("dns_servers", [])
        if not isinstance(servers, list):
            raise ClientError("Malformed response: dns_servers is not a list")
        return [str(s) for s in servers]

    def add_dns_server(self, server: str) -> None:
        self._request("POST", "/v1/dns-servers", {"dns_server": server})

    def remove_dns_server(self, server: str) -> None:
        self._request("POST", "/v1/dns-servers:remove", {"dns_server": server})

    # --------------------------------------------------------------------- #
    # Transport
    # --------------------------------------------------------------------- #
    def _request(
        self,
        method: str,
        path: str,
        payload: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Perform one HTTP request and decode the JSON response.

        Raises
        ------
        ClientError
            On an HTTP error status (with the server's ``code`` and
            ``message`` when present), a network failure, or a body that is
            not JSON.
        """
        url = self.base_url.rstrip("/") + path
        data = json.dumps(payload).encode("utf-8") if payload is not None else None
        request = urllib.request.Request(
            url=url,
            data=data,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            method=method,
        )

        try:
            with urllib.request.urlopen(request, timeout=self.timeout_seconds) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as exc:
            raise self._http_error(exc) from exc
        except urllib.error.URLError as exc:
            raise ClientError(f"Cannot reach {self.base_url}: {exc.reason}") from exc

        try:
            decoded: dict[str, Any] = json.loads(raw.decode("utf-8") or "{}")
        except json.JSONDecodeError as exc:
            raise ClientError("Failed to decode server response as JSON") from exc
        return decoded

    @staticmethod
    def _http_error(exc: urllib.error.HTTPError) -> ClientError:
        body = exc.read().decode("utf-8", errors="ignore")
        try:
            detail = json.loads(body)
        except json.JSONDecodeError:
            detail = None

        if isinstance(detail, dict) and "message" in detail:
            code = str(detail.get("code", "")) or None
            return ClientError(str(detail["message"]), code=code, status=exc.code)
        return ClientError(f"HTTP error {exc.code}: {exc.reason}", status=exc.code)


__all__ = ["ClientError", "HostManagerClient"]
