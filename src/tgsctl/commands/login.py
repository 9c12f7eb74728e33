"""
Log in to and out of a tgstation-server
"""

import click
from rich.console import Console

from tgsctl.core.schema import Preferences
from tgsctl.core.session import SessionManager

console = Console()


def get_sessions(ctx: click.Context) -> SessionManager:
    """Build the session manager from the services in ctx.obj"""
    return SessionManager(ctx.obj["persistence"], http_session=ctx.obj.get("http_session"))


@click.command()
@click.option("--server", "-s", "server_url", help="Server URL (defaults to server.url setting)")
@click.option("--username", "-u", prompt=True, help="User name")
@click.option("--password", "-p", prompt=True, hide_input=True, help="Password")
@click.pass_context
def login(ctx, server_url, username, password):
    """
    Log in and remember the session

    Examples:

        \b
        tgsctl login --server https://tgs.example.org -u admin
        tgsctl login -u admin                  # Use server.url setting
    """
    if not server_url:
        prefs = ctx.obj["persistence"].read(Preferences)
        if prefs.server_url is None:
            console.print("[red]Error:[/] No server given")
            console.print("\n[dim]Pass --server or run: tgsctl settings set server.url=<url>[/]")
            raise click.Abort()
        server_url = str(prefs.server_url)

    session = get_sessions(ctx).login(server_url, username, password)

    console.print(f"\n[green]+[/] Logged in to {session.server_url} as {session.username}")
    if session.expires_at:
        console.print(f"  [dim]Expires: {session.expires_at.isoformat()}[/]")
    console.print()


@click.command()
@click.pass_context
def logout(ctx):
    """
    Forget the cached session

    Examples:

        \b
        tgsctl logout
    """
    get_sessions(ctx).logout()
    console.print("\n[green]+[/] Logged out\n")
