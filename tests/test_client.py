"""Tests for the HTTP client used by the CLI.

`urllib.request.urlopen` is patched so no network I/O happens; the tests
check request construction and the mapping of error responses.
"""

from __future__ import annotations

import io
import json
import urllib.error
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from hostmanager.client import ClientError, HostManagerClient


def fake_response(payload: Any) -> MagicMock:
    resp = MagicMock()
    resp.read.return_value = json.dumps(payload).encode("utf-8")
    resp.__enter__.return_value = resp
    return resp


def http_error(code: int, payload: Any) -> urllib.error.HTTPError:
    body = io.BytesIO(json.dumps(payload).encode("utf-8"))
    headers: Any = {}
    return urllib.error.HTTPError("http://test/v1", code, "error", headers, body)


def test_list_dns_servers_decodes_payload() -> None:
    client = HostManagerClient(base_url="http://test:8080/", timeout_seconds=3.0)
    with patch("hostmanager.client.urllib.request.urlopen") as mock_open:
        mock_open.return_value = fake_response({"dns_servers": ["8.8.8.8", "1.1.1.1"]})
        servers = client.list_dns_servers()

    assert servers == ["8.8.8.8", "1.1.1.1"]
    request = mock_open.call_args.args[0]
    assert request.full_url == "http://test:8080/v1/dns-servers"
    assert request.get_method() == "GET"
    assert mock_open.call_args.kwargs["timeout"] == 3.0


def test_add_dns_server_posts_json_body() -> None:
    client = HostManagerClient(base_url="http://test:8080")
    with patch("hostmanager.client.urllib.request.urlopen") as mock_open:
        mock_open.return_value = fake_response({})
        client.add_dns_server("9.9.9.9")

    request = mock_open.call_args.args[0]
    assert request.full_url == "http://test:8080/v1/dns-servers"
    assert request.get_method() == "POST"
    assert json.loads(request.data) == {"dns_server": "9.9.9.9"}


def test_error_response_keeps_status_category() -> None:
    client = HostManagerClient(base_url="http://test:8080")
    error = http_error(400, {"code": "INVALID_ARGUMENT", "message": "hostname is empty"})
    with patch("hostmanager.client.urllib.request.urlopen", side_effect=error):
        with pytest.raises(ClientError) as info:
            client.set_hostname("")

    assert str(info.value) == "hostname is empty"
    assert info.value.code == "INVALID_ARGUMENT"
    assert info.value.status == 400


def test_network_failure_is_client_error() -> None:
    client = HostManagerClient(base_url="http://test:8080")
    error = urllib.error.URLError("connection refused")
    with patch("hostmanager.client.urllib.request.urlopen", side_effect=error):
        with pytest.raises(ClientError) as info:
            client.remove_dns_server("1.1.1.1")

    assert "connection refused" in str(info.value)
    assert info.value.code is None
