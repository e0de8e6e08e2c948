"""
mcassets command-line interface.

The commands mirror the life of a shared assets cache in CI: `sync`
creates or updates it, `restore` makes it available to later jobs,
and `key` tells which cache entry a set of versions maps to.
"""

import click

from .. import __version__
from .key import key_cmd
from .restore import restore_cmd
from .sync import sync_cmd


@click.group(context_settings={"help_option_names": ["-h", "--help"], "max_content_width": 100})
@click.version_option(__version__, message="%(version)s")
def cli() -> None:
    """Create, update and restore a shared Minecraft assets cache."""


@cli.command("version")
def version_cmd() -> None:
    """Print the version number."""
    click.echo(__version__)


cli.add_command(sync_cmd)
cli.add_command(restore_cmd)
cli.add_command(key_cmd)


def main() -> None:
    cli(prog_name="mcassets")
