"""Restore command."""

from __future__ import annotations

import os
from pathlib import Path

import click

from ..blobcache import DirectoryBlobCache
from ..config import assets_dir_or_default
from .logger import configure_logging
from .options import cache_key_option, data_dir_option

ASSET_ROOT_ENV = "NFRT_ASSET_ROOT"


@click.command("restore")
@data_dir_option
@cache_key_option
@click.option(
    "--cache-dir",
    required=True,
    envvar="MCASSETS_CACHE_DIR",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding the cached assets archives",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def restore_cmd(
    assets_dir: str | None,
    cache_key_prefix: str,
    cache_dir: Path,
    verbose: bool,
) -> None:
    """Restore the newest cached assets and export their location.

    The location is exported as NFRT_ASSET_ROOT by appending to the
    file named by $GITHUB_ENV, or printed when that is not set.
    """
    configure_logging(verbose)
    resolved = assets_dir_or_default(assets_dir)
    blob_cache = DirectoryBlobCache(cache_dir)
    restored = blob_cache.restore(resolved, cache_key_prefix, [f"{cache_key_prefix}-"])
    if restored is None:
        click.echo(f"No cached assets for {cache_key_prefix}.", err=True)
    else:
        click.echo(f"Restored {restored} into {resolved}.", err=True)

    line = f"{ASSET_ROOT_ENV}={resolved.absolute()}"
    env_file = os.getenv("GITHUB_ENV")
    if env_file:
        with open(env_file, "a", encoding="utf-8") as fp:
            fp.write(f"{line}\n")
    else:
        click.echo(line)
