"""Loading of asset indices and extraction of their objects."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .errors import ManifestParseError
from .models import AssetIndexDescriptor, AssetIndexDocument, AssetObject, parse_document
from .synchronizer import BoundedSynchronizer, DownloadTarget

log = logging.getLogger("mcassets/assetindex")


def index_target(descriptor: AssetIndexDescriptor, assets_dir: Path) -> DownloadTarget:
    """Return the download target for the asset index file itself."""
    return DownloadTarget(
        path=descriptor.local_path(assets_dir),
        url=descriptor.url,
        checksum=descriptor.sha1,
        size=descriptor.size,
    )


def parse_asset_index(content: bytes | str, *, source: str) -> list[AssetObject]:
    """
    Parse an asset index and return its distinct objects.

    Objects are deduplicated by hash, keeping the first-seen order;
    logical paths are discarded.

    Raises:
        ManifestParseError: if the content is not valid JSON or does
            not contain a well-formed `objects` mapping.
    """
    try:
        data = json.loads(content)
    except ValueError as exc:
        raise ManifestParseError(f"{source}: invalid JSON: {exc}") from exc
    document = parse_document(AssetIndexDocument, data, source=source)
    unique: dict[str, AssetObject] = {}
    for obj in document.objects.values():
        unique.setdefault(obj.hash, obj)
    return list(unique.values())


async def load_asset_index(
    synchronizer: BoundedSynchronizer,
    descriptor: AssetIndexDescriptor,
    assets_dir: Path,
) -> list[AssetObject]:
    """
    Ensure the asset index is on disk and return its distinct objects.

    The index is downloaded (with retries) only when missing or when it
    does not match the expected checksum and size.
    """
    target = index_target(descriptor, assets_dir)
    downloaded = await synchronizer.download_if_changed(target)
    log.info(
        "asset index %s... %s", descriptor.id, "downloaded" if downloaded else "up to date"
    )
    objects = parse_asset_index(target.path.read_bytes(), source=str(target.path))
    log.debug("asset index %s lists %d distinct objects", descriptor.id, len(objects))
    return objects
