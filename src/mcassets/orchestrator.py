"""Synchronization of the assets directory for a set of versions."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from .assetindex import load_asset_index
from .config import SyncConfig
from .fetcher import RemoteFetcher
from .models import SyncResult
from .synchronizer import BoundedSynchronizer
from .versions import resolve_asset_indices

log = logging.getLogger("mcassets/orchestrator")


async def sync_versions(
    versions: Iterable[str],
    assets_dir: Path,
    *,
    config: SyncConfig | None = None,
    fetcher: RemoteFetcher | None = None,
    show_progress: bool = False,
) -> SyncResult:
    """
    Create or update an assets directory for the given versions.

    Every object referenced by the asset indices of the given versions
    ends up in `assets_dir/objects`, and every asset index in
    `assets_dir/indexes`. Files already on disk with the correct size
    and checksum are reused.

    Errors are fatal and propagate unchanged. Files written before the
    failure stay on disk, so running again resumes the work.
    """
    config = config if config is not None else SyncConfig()
    versions = list(versions)
    log.info("syncing assets for versions %s... start", ", ".join(versions))

    if fetcher is None:
        async with RemoteFetcher(timeout=config.request_timeout) as owned:
            result = await _sync(versions, assets_dir, config, owned, show_progress)
    else:
        result = await _sync(versions, assets_dir, config, fetcher, show_progress)

    log.info(
        "syncing assets for versions %s... ok (%s)",
        ", ".join(versions),
        format_size(result.total_bytes_on_disk),
    )
    return result


async def _sync(
    versions: list[str],
    assets_dir: Path,
    config: SyncConfig,
    fetcher: RemoteFetcher,
    show_progress: bool,
) -> SyncResult:
    indices = await resolve_asset_indices(
        fetcher, versions, manifest_url=config.version_manifest_url
    )
    log.info("asset index ids found: %s", ", ".join(indices))

    synchronizer = BoundedSynchronizer(fetcher, config)
    result = SyncResult()
    for descriptor in indices.values():
        objects = await load_asset_index(synchronizer, descriptor, assets_dir)
        log.info("updating %d objects for asset index %s", len(objects), descriptor.id)
        stats = await synchronizer.sync(
            synchronizer.object_targets(objects, assets_dir),
            desc=f"index {descriptor.id}",
            show_progress=show_progress,
        )
        log.info(
            "asset index %s: downloaded %d, reused %d",
            descriptor.id,
            stats.downloaded,
            stats.reused,
        )
        result.add_index(descriptor.id, downloaded=stats.downloaded, reused=stats.reused)

    result.total_bytes_on_disk = folder_size(assets_dir)
    return result


def folder_size(root: Path) -> int:
    """Return the overall size in bytes of the regular files below root."""
    if not root.is_dir():
        return 0
    return sum(path.stat().st_size for path in root.rglob("*") if path.is_file())


def format_size(size: int) -> str:
    """Format a byte count for humans."""
    if size < 1024:
        return f"{size} byte"
    if size < 1024 * 1024:
        return f"{size / 1024:.2f} kb"
    return f"{size / 1024 / 1024:.2f} mb"
