"""Resolution of versions to asset indices."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .errors import VersionNotFound
from .fetcher import RemoteFetcher
from .models import AssetIndexDescriptor, VersionManifest, VersionMetadata, parse_document

log = logging.getLogger("mcassets/versions")


async def resolve_asset_indices(
    fetcher: RemoteFetcher,
    versions: Iterable[str],
    *,
    manifest_url: str,
) -> dict[str, AssetIndexDescriptor]:
    """
    Map the given versions to their asset indices.

    We fetch the version manifest once and then the metadata of each
    requested version. Versions sharing an asset index yield a single
    entry, keyed by the asset index id, in first-seen order.

    Raises:
        VersionNotFound: if any version is not in the manifest.
        RemoteFetchError: if a document cannot be fetched or decoded.
        ManifestParseError: if a document lacks the required fields.
    """
    log.info("fetching version manifest %s... start", manifest_url)
    manifest = parse_document(
        VersionManifest,
        await fetcher.fetch_json(manifest_url),
        source=manifest_url,
    )
    log.info("fetching version manifest %s... ok", manifest_url)

    # Validate every version before fetching any metadata
    entries = []
    for version in dict.fromkeys(versions):
        entry = manifest.find(version)
        if entry is None:
            raise VersionNotFound(version)
        entries.append(entry)

    indices: dict[str, AssetIndexDescriptor] = {}
    for entry in entries:
        metadata = parse_document(
            VersionMetadata,
            await fetcher.fetch_json(entry.url),
            source=entry.url,
        )
        descriptor = metadata.assetIndex
        log.info("version %s uses asset index %s", entry.id, descriptor.id)
        indices.setdefault(descriptor.id, descriptor)
    return indices
