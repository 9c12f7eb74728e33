"""
tgsctl CLI - Main entry point

- Builds the application services and passes them to commands via ctx.obj
- Reports tgsctl errors in one place
- Registers all command modules
"""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from tgsctl import __version__
from tgsctl.core import ApplicationInfo, PersistenceManager, TgsctlError

console_err = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console_err, show_path=False)],
    )


class TgsctlGroup(click.Group):
    """Root group that turns tgsctl errors into a message and exit code 1"""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except TgsctlError as e:
            console_err.print(f"[red]Error:[/] {e}")
            ctx.exit(1)


@click.group(cls=TgsctlGroup, invoke_without_command=True)
@click.option("--version", "-v", is_flag=True, help="Show version and exit")
@click.option("--verbose", "-V", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, version, verbose):
    """
    tgsctl - command line client for tgstation-server

    Examples:

        \b
        tgsctl login --server https://tgs.example.org -u admin
        tgsctl instance list
        tgsctl instance server start 1
        tgsctl instance server start "Main Server"
        tgsctl settings set instance.default=1
    """
    if version:
        print(__version__)
        sys.exit(0)

    configure_logging(verbose)

    ctx.ensure_object(dict)
    if "persistence" not in ctx.obj:
        info = ApplicationInfo()
        info.ensure_base_path()
        ctx.obj["info"] = info
        ctx.obj["persistence"] = PersistenceManager(info)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


from tgsctl.commands import instance, login, settings

main.add_command(login.login)
main.add_command(login.logout)
main.add_command(settings.settings)
main.add_command(instance.instance)


if __name__ == "__main__":
    main()
