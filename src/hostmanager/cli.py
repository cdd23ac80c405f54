# src/hostmanager/cli.py
"""
Host Manager Command Line Interface (CLI).

This module implements the terminal interface using `typer` and `rich`.
One command starts the HTTP server; the others call a running server
through :class:`HostManagerClient`.

Usage
-----
    # Run the API server
    $ hostmanager serve --port 8080

    # Talk to it
    $ hostmanager set-hostname web-01
    $ hostmanager list-dns-servers
    $ hostmanager add-dns-server 9.9.9.9
    $ hostmanager remove-dns-server 1.1.1.1 --server-url http://10.0.0.5:8080
"""

from __future__ import annotations

from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from hostmanager.client import ClientError, HostManagerClient
from hostmanager.core.settings import load_settings

load_dotenv()

app = typer.Typer(
    help="Host Manager: set the hostname and manage DNS servers on a machine.",
    rich_markup_mode="markdown",
)
console = Console()


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _client(ctx: typer.Context) -> HostManagerClient:
    client: HostManagerClient = ctx.obj
    return client


def _fail(action: str, exc: ClientError) -> typer.Exit:
    """Print a client failure and return the exit to raise."""
    code = f" [dim]({exc.code})[/dim]" if exc.code else ""
    console.print(f"[bold red]❌ Failed to {action}:[/bold red] {exc}{code}")
    return typer.Exit(code=1)


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.callback()  # type: ignore[misc]
def main(
    ctx: typer.Context,
    server_url: Annotated[
        str | None,
        typer.Option("--server-url", "-s", help="Host manager API address."),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", "-t", min=0.1, help="Request timeout in seconds."),
    ] = None,
) -> None:
    """Configure the API client shared by the client commands."""
    settings = load_settings()
    ctx.obj = HostManagerClient(
        base_url=server_url or settings.server_url,
        timeout_seconds=timeout or settings.request_timeout,
    )


@app.command()  # type: ignore[misc]
def serve(
    host: Annotated[str | None, typer.Option("--host", help="Bind address.")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Bind port.")] = None,
) -> None:
    """Run the host manager HTTP API."""
    from hostmanager.api import server

    server.main(host=host, port=port)


@app.command("set-hostname")  # type: ignore[misc]
def set_hostname(
    ctx: typer.Context,
    hostname: Annotated[str, typer.Argument(help="New hostname.")],
) -> None:
    """Set the hostname on the machine."""
    try:
        _client(ctx).set_hostname(hostname)
    except ClientError as exc:
        raise _fail("set hostname", exc) from exc
    console.print(f"[green]✅ Set hostname[/green] {hostname}")


@app.command("list-dns-servers")  # type: ignore[misc]
def list_dns_servers(ctx: typer.Context) -> None:
    """Show all configured DNS servers, in resolver order."""
    try:
        servers = _client(ctx).list_dns_servers()
    except ClientError as exc:
        raise _fail("list DNS servers", exc) from exc

    if not servers:
        console.print("[dim]No DNS servers configured.[/dim]")
        return

    table = Table(title="DNS servers")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Address", style="cyan")
    for i, server in enumerate(servers, start=1):
        table.add_row(str(i), server)
    console.print(table)


@app.command("add-dns-server")  # type: ignore[misc]
def add_dns_server(
    ctx: typer.Context,
    server: Annotated[str, typer.Argument(help="DNS server address.")],
) -> None:
    """Add a DNS server."""
    try:
        _client(ctx).add_dns_server(server)
    except ClientError as exc:
        raise _fail("add DNS server", exc) from exc
    console.print(f"[green]✅ Added server[/green] {server}")


@app.command("remove-dns-server")  # type: ignore[misc]
def remove_dns_server(
    ctx: typer.Context,
    server: Annotated[str, typer.Argument(help="DNS server address.")],
) -> None:
    """Remove a DNS server."""
    try:
        _client(ctx).remove_dns_server(server)
    except ClientError as exc:
        raise _fail("remove DNS server", exc) from exc
    console.print(f"[green]✅ Removed server[/green] {server}")


if __name__ == "__main__":
    app()
