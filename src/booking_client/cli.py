#!/usr/bin/env python3
import asyncio
import json
from typing import Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from booking_client.api import endpoints
from booking_client.api.client import BookingClient
from booking_client.errors import BookingClientError
from booking_client.storage.config import AppSettings

app = typer.Typer(help="Command-line access to the booking service.")
console = Console()


def get_client() -> BookingClient:
    return BookingClient.from_settings()


def _run(coro):
    try:
        return asyncio.run(coro)
    except BookingClientError as exc:
        rprint(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1)


@app.command()
def login(
    username: str = typer.Option(..., prompt=True, help="Account username"),
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Account password"),
):
    """Log in and store the access/refresh tokens."""

    async def _login():
        async with get_client() as client:
            await client.login(username, password)

    _run(_login())
    rprint(f"[green]Logged in as {username}.[/green]")


@app.command()
def logout():
    """Forget the stored tokens."""
    client = get_client()
    client.logout()
    asyncio.run(client.aclose())
    rprint("Logged out.")


@app.command()
def status():
    """Show the service URL and whether a session is stored."""
    client = get_client()
    base_url = client.session.transport.base_url
    logged_in = client.is_authenticated
    asyncio.run(client.aclose())
    rprint(f"Service: {base_url}")
    if logged_in:
        rprint("[green]Logged in[/green]")
    else:
        rprint("[yellow]Not logged in[/yellow]")


@app.command()
def refresh():
    """Exchange the refresh token for a new access token."""

    async def _refresh():
        async with get_client() as client:
            await client.refresh()

    _run(_refresh())
    rprint("[green]Access token refreshed.[/green]")


@app.command()
def request(
    method: str = typer.Argument(..., help="HTTP method, e.g. GET"),
    path: str = typer.Argument(..., help="Endpoint path or endpoint name, e.g. CENTERS"),
    body: Optional[str] = typer.Option(None, "--json", help="JSON request body"),
):
    """Send an authenticated request and print the response."""
    path = endpoints.ENDPOINTS.get(path.upper(), path)
    try:
        payload = json.loads(body) if body is not None else None
    except ValueError as exc:
        rprint(f"[red]Invalid JSON body:[/red] {exc}")
        raise typer.Exit(code=2)

    async def _request():
        async with get_client() as client:
            return await client.request(method, path, json=payload)

    resp = _run(_request())
    colour = "green" if resp.is_success else "red"
    rprint(f"[{colour}]{resp.status_code} {resp.reason_phrase}[/{colour}]")
    try:
        console.print_json(data=resp.json())
    except ValueError:
        if resp.text:
            console.print(resp.text)
    if not resp.is_success:
        raise typer.Exit(code=1)


@app.command(name="endpoints")
def list_endpoints():
    """List the known service endpoints."""
    table = Table(title=f"Endpoints ({AppSettings.get('base_url')})")
    table.add_column("Name")
    table.add_column("Path")
    for name, value in sorted(endpoints.ENDPOINTS.items()):
        table.add_row(name, value)
    console.print(table)


if __name__ == "__main__":
    app()
