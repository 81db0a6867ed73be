import click

from .cli_request import request


@click.group()
@click.version_option(package_name="httpatch")
def cli() -> None:
    """Send HTTP requests from the command line."""


cli.add_command(request)

__all__ = ["cli"]
