"""Sync command."""

from __future__ import annotations

import asyncio
import time
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from tqdm.contrib.logging import logging_redirect_tqdm

from ..blobcache import BlobCache, DirectoryBlobCache, cache_key
from ..config import DEFAULT_BATCH_SIZE, SyncConfig, assets_dir_or_default
from ..errors import SyncError
from ..models import SyncResult
from ..orchestrator import format_size, sync_versions
from .logger import configure_logging
from .options import (
    cache_dir_option,
    cache_key_option,
    collect_versions,
    data_dir_option,
    versions_options,
)


def _build_table(result: SyncResult) -> Table:
    """Construct a Rich Table summarizing the sync."""
    table = Table()
    table.add_column("Asset Indices", style="cyan")
    table.add_column("Downloaded", justify="right")
    table.add_column("Reused", justify="right")
    table.add_column("Assets Size", justify="right")
    table.add_row(
        ", ".join(result.indices_processed),
        str(result.objects_downloaded),
        str(result.objects_reused),
        format_size(result.total_bytes_on_disk),
    )
    return table


@click.command("sync")
@data_dir_option
@versions_options
@cache_key_option
@cache_dir_option
@click.option(
    "-j",
    "--jobs",
    default=DEFAULT_BATCH_SIZE,
    show_default=True,
    type=click.IntRange(min=1),
    help="Number of parallel downloads",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def sync_cmd(
    assets_dir: str | None,
    versions: tuple[str, ...],
    version_file: Path | None,
    version_regexp: str | None,
    cache_key_prefix: str,
    cache_dir: Path | None,
    jobs: int,
    verbose: bool,
) -> None:
    """Create or update the assets directory for the given versions.

    When --cache-dir is set, the assets directory is first restored from
    the cache and, if it was not an exact match, saved again afterwards.
    """
    configure_logging(verbose)
    resolved = assets_dir_or_default(assets_dir)
    selected = collect_versions(versions, version_file, version_regexp)
    if not selected:
        raise click.UsageError("no versions given: use --versions or --version-file")

    key = cache_key(cache_key_prefix, selected)
    blob_cache: BlobCache | None = (
        DirectoryBlobCache(cache_dir) if cache_dir is not None else None
    )
    if blob_cache is not None:
        restored = blob_cache.restore(resolved, key, [f"{cache_key_prefix}-"])
        if restored == key:
            click.echo(f"Cache {key} already matches the requested versions. Nothing to do.")
            return

    config = SyncConfig(batch_size=jobs)
    t0 = time.monotonic()
    try:
        with logging_redirect_tqdm():
            result = asyncio.run(
                sync_versions(selected, resolved, config=config, show_progress=True)
            )
    except (SyncError, OSError) as exc:
        click.echo(f"error: {exc}", err=True)
        raise SystemExit(1) from exc
    elapsed = time.monotonic() - t0

    Console().print(_build_table(result))
    click.echo(f"Synced {len(result.indices_processed)} asset index(es) in {elapsed:.1f}s.")

    if blob_cache is not None:
        blob_cache.save(resolved, key)
