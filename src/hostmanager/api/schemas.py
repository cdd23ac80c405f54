"""Request and response messages of the host manager API.

Fields default to the empty string, as in the RPC message definitions, so a
missing field and an empty field reach the service boundary the same way
and are rejected there with ``INVALID_ARGUMENT``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .service import StatusCode


class SetHostnameRequest(BaseModel):
    hostname: str = Field(default="", description="New host name")
    timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Deadline for the hostname command; server default when omitted",
    )


class AddDNSServerRequest(BaseModel):
    dns_server: str = Field(default="", description="Address to append as a nameserver line")


class RemoveDNSServerRequest(BaseModel):
    dns_server: str = Field(default="", description="Address whose nameserver line is dropped")


class ListDNSServersResponse(BaseModel):
    dns_servers: list[str] = Field(default_factory=list, description="Servers in file order")


class EmptyResponse(BaseModel):
    """Success payload of the mutating calls."""


class ErrorResponse(BaseModel):
    code: StatusCode
    message: str
    rollback_failed: bool = Field(
        default=False,
        description="True when the failed change could not be rolled back",
    )


class HealthResponse(BaseModel):
    status: str
    environment: str
    version: str


__all__ = [
    "AddDNSServerRequest",
    "EmptyResponse",
    "ErrorResponse",
    "HealthResponse",
    "ListDNSServersResponse",
    "RemoveDNSServerRequest",
    "SetHostnameRequest",
]
