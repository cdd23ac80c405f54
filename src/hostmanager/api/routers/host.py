"""
HTTP routes for hostname and DNS server management.

Endpoints
---------
- `POST /v1/hostname`: set the hostname.
- `GET /v1/dns-servers`: list DNS servers in file order.
- `POST /v1/dns-servers`: append a DNS server.
- `POST /v1/dns-servers:remove`: remove a DNS server.

Every handler is a pass-through to :class:`HostManagerService`; failures
raise :class:`ServiceError`, which the application maps to a status code.
Handlers are plain ``def`` so the blocking file I/O runs in the thread pool.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from hostmanager.api.schemas import (
    AddDNSServerRequest,
    EmptyResponse,
    ErrorResponse,
    ListDNSServersResponse,
    RemoveDNSServerRequest,
    SetHostnameRequest,
)
from hostmanager.api.service import HostManagerService

router = APIRouter(
    prefix="/v1",
    tags=["Host"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def get_service(request: Request) -> HostManagerService:
    """Return the service instance attached by the application factory."""
    service: HostManagerService = request.app.state.service
    return service


ServiceDep = Annotated[HostManagerService, Depends(get_service)]


@router.post("/hostname", response_model=EmptyResponse, summary="Set the machine hostname")
def set_hostname(body: SetHostnameRequest, service: ServiceDep) -> EmptyResponse:
    service.set_hostname(body.hostname, timeout=body.timeout_seconds)
    return EmptyResponse()


@router.get("/dns-servers", response_model=ListDNSServersResponse, summary="List DNS servers")
def list_dns_servers(service: ServiceDep) -> ListDNSServersResponse:
    return ListDNSServersResponse(dns_servers=service.list_dns_servers())


@router.post("/dns-servers", response_model=EmptyResponse, summary="Add a DNS server")
def add_dns_server(body: AddDNSServerRequest, service: ServiceDep) -> EmptyResponse:
    service.add_dns_server(body.dns_server)
    return EmptyResponse()


@router.post("/dns-servers:remove", response_model=EmptyResponse, summary="Remove a DNS server")
def remove_dns_server(body: RemoveDNSServerRequest, service: ServiceDep) -> EmptyResponse:
    service.remove_dns_server(body.dns_server)
    return EmptyResponse()


__all__ = ["get_service", "router"]
