"""
Manage tgsctl settings
"""

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from tgsctl.core.persistence import PersistenceManager
from tgsctl.core.schema import Preferences, SessionData

console = Console()


# Setting key -> Preferences field
SETTING_FIELDS = {
    "server.url": "server_url",
    "instance.default": "default_instance",
    "http.timeout": "timeout",
    "http.verifyTls": "verify_tls",
}

DESCRIPTIONS = {
    "server.url": "Server used by 'tgsctl login' when --server is omitted",
    "instance.default": "Instance (id or name) used when a command omits one",
    "http.timeout": "Request timeout in seconds",
    "http.verifyTls": "Verify TLS certificates (true, false)",
}


def _unknown_setting(key: str):
    console.print(f"[red]Error:[/] Unknown setting: {key}")
    console.print(f"\n[dim]Available settings: {', '.join(SETTING_FIELDS.keys())}[/]")
    raise click.Abort()


def _display(value) -> str:
    return "" if value is None else str(value)


@click.group()
def settings():
    """
    Manage tgsctl settings

    Examples:

        \b
        tgsctl settings get                     # Show all settings
        tgsctl settings get server.url          # Get specific setting
        tgsctl settings set http.timeout=60     # Set setting
        tgsctl settings reset                   # Reset to defaults
    """
    pass


@settings.command("get")
@click.argument("key", required=False)
@click.pass_context
def settings_get(ctx, key):
    """
    Get setting value(s)

    Examples:

        \b
        tgsctl settings get                     # Show all settings
        tgsctl settings get server.url          # Get specific setting
    """
    persistence: PersistenceManager = ctx.obj["persistence"]
    prefs = persistence.read(Preferences)

    if key:
        if key not in SETTING_FIELDS:
            _unknown_setting(key)
        value = getattr(prefs, SETTING_FIELDS[key])
        console.print(f"\n[cyan]{key}:[/] {_display(value)}\n")
        return

    defaults = Preferences()

    console.print("\n[cyan]tgsctl Settings:[/]\n")

    table = Table(show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Default", style="dim")

    for setting_key, field in SETTING_FIELDS.items():
        current_value = getattr(prefs, field)
        default_value = getattr(defaults, field)

        value_str = _display(current_value)
        if current_value == default_value:
            value_str = f"[dim]{value_str}[/]"

        table.add_row(setting_key, value_str, _display(default_value))

    console.print(table)
    console.print(f"\n[dim]Settings file: {persistence.resolve_path(Preferences)}[/]\n")


@settings.command("set")
@click.argument("key_value")
@click.pass_context
def settings_set(ctx, key_value):
    """
    Set setting value

    Examples:

        \b
        tgsctl settings set server.url=https://tgs.example.org
        tgsctl settings set instance.default=1
        tgsctl settings set http.verifyTls=false
    """
    if "=" not in key_value:
        console.print("[red]Error:[/] Invalid format. Use: key=value")
        console.print("\n[dim]Example: tgsctl settings set http.timeout=60[/]")
        raise click.Abort()

    key, value = key_value.split("=", 1)
    key = key.strip()
    value = value.strip()

    if key not in SETTING_FIELDS:
        _unknown_setting(key)

    persistence: PersistenceManager = ctx.obj["persistence"]
    prefs = persistence.read(Preferences)

    data = prefs.model_dump()
    data[SETTING_FIELDS[key]] = value or None
    try:
        updated = Preferences.model_validate(data)
    except ValidationError as e:
        message = e.errors()[0]["msg"]
        console.print(f"[red]Error:[/] Invalid value for {key}: {value} ({message})")
        raise click.Abort()

    persistence.write(updated)

    console.print(f"\n[green]+[/] Set {key} = {_display(getattr(updated, SETTING_FIELDS[key]))}\n")


@settings.command("reset")
@click.option("-y", "--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def settings_reset(ctx, yes):
    """
    Reset settings to defaults

    Examples:

        \b
        tgsctl settings reset                   # Reset with confirmation
        tgsctl settings reset --yes             # Reset without confirmation
    """
    if not yes:
        console.print("\n[yellow]This will reset all settings to defaults[/]")
        if not click.confirm("Continue?", default=False):
            console.print("[yellow]Aborted[/]")
            return

    ctx.obj["persistence"].write(Preferences())

    console.print("\n[green]+[/] Settings reset to defaults\n")


@settings.command("list")
def settings_list():
    """List all available settings"""
    console.print("\n[cyan]Available Settings:[/]\n")

    defaults = Preferences()
    for key, field in SETTING_FIELDS.items():
        console.print(f"[cyan]{key}[/]")
        console.print(f"  [dim]Default:[/] {_display(getattr(defaults, field))}")
        console.print(f"  [dim]Description:[/] {DESCRIPTIONS[key]}")
        console.print()


@settings.command("path")
@click.pass_context
def settings_path(ctx):
    """Show where settings and the session are stored"""
    persistence: PersistenceManager = ctx.obj["persistence"]

    for label, value_type in (("Settings", Preferences), ("Session", SessionData)):
        path = persistence.resolve_path(value_type)
        state = "" if path.exists() else " [dim](not written yet)[/]"
        console.print(f"[cyan]{label}:[/] {path}{state}")
