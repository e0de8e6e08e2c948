"""Key command."""

from __future__ import annotations

from pathlib import Path

import click

from ..blobcache import cache_key
from .options import cache_key_option, collect_versions, versions_options


@click.command("key")
@versions_options
@cache_key_option
def key_cmd(
    versions: tuple[str, ...],
    version_file: Path | None,
    version_regexp: str | None,
    cache_key_prefix: str,
) -> None:
    """Print the cache key for the given versions."""
    selected = collect_versions(versions, version_file, version_regexp)
    if not selected:
        raise click.UsageError("no versions given: use --versions or --version-file")
    click.echo(cache_key(cache_key_prefix, selected))
