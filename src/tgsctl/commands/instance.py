"""
Instance commands
"""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from tgsctl.commands.login import get_sessions
from tgsctl.core.api import InstanceClient
from tgsctl.core.instances import INSTANCE, InstanceManager, InstanceSelector
from tgsctl.core.schema import Preferences

console = Console()


def _instance_client(ctx: click.Context, selector: Optional[InstanceSelector]) -> InstanceClient:
    """Resolve the selected (or default) instance to a client"""
    if selector is None:
        prefs = ctx.obj["persistence"].read(Preferences)
        if not prefs.default_instance:
            console.print("[red]Error:[/] No instance given")
            console.print("\n[dim]Pass an instance or run: tgsctl settings set instance.default=<id|name>[/]")
            raise click.Abort()
        selector = InstanceSelector.parse(prefs.default_instance)

    return InstanceManager(get_sessions(ctx)).request_instance_client(selector)


@click.group()
def instance():
    """
    Manage instances

    Examples:

        \b
        tgsctl instance list                   # List instances
        tgsctl instance server start 1         # Start instance 1
        tgsctl instance server stop main       # Stop instance named main
    """
    pass


@instance.command("list")
@click.pass_context
def instance_list(ctx):
    """List instances on the server"""
    instances = get_sessions(ctx).client().list_instances()

    if not instances:
        console.print("[yellow]No instances found[/]")
        return

    table = Table(show_header=True)
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Online")
    table.add_column("Path", style="dim")

    for info in instances:
        online = "[green]yes[/]" if info.online else "[dim]no[/]"
        table.add_row(str(info.id), info.name, online, info.path or "")

    console.print(table)


@instance.group("server")
def server():
    """Control an instance's game server"""
    pass


@server.command("start")
@click.argument("selector", type=INSTANCE, required=False, metavar="INSTANCE")
@click.pass_context
def server_start(ctx, selector):
    """
    Start the game server

    INSTANCE is an instance id or name (defaults to instance.default).
    """
    client = _instance_client(ctx, selector)
    job = client.dream_daemon.start()
    console.print(f"\n[green]+[/] Start requested for instance {client.instance_id} (job {job.id})\n")


@server.command("stop")
@click.argument("selector", type=INSTANCE, required=False, metavar="INSTANCE")
@click.pass_context
def server_stop(ctx, selector):
    """
    Stop the game server

    INSTANCE is an instance id or name (defaults to instance.default).
    """
    client = _instance_client(ctx, selector)
    client.dream_daemon.stop()
    console.print(f"\n[green]+[/] Stopped instance {client.instance_id}\n")


@server.command("restart")
@click.argument("selector", type=INSTANCE, required=False, metavar="INSTANCE")
@click.pass_context
def server_restart(ctx, selector):
    """
    Restart the game server

    INSTANCE is an instance id or name (defaults to instance.default).
    """
    client = _instance_client(ctx, selector)
    job = client.dream_daemon.restart()
    console.print(f"\n[green]+[/] Restart requested for instance {client.instance_id} (job {job.id})\n")
