"""
Minecraft assets cache.

This library creates and updates an assets directory laid out like the
one the Minecraft launcher creates, downloading the asset indices and
the content-addressed objects for a set of game versions.
"""

from importlib.metadata import PackageNotFoundError, version

from .blobcache import BlobCache, DirectoryBlobCache, cache_key
from .config import SyncConfig, assets_dir_or_default
from .errors import (
    DownloadFailed,
    ManifestParseError,
    RemoteFetchError,
    SyncError,
    VersionNotFound,
)
from .models import AssetIndexDescriptor, AssetObject, SyncResult
from .orchestrator import sync_versions

try:
    __version__ = version("mc-assets-cache")
except PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.0.0"

__all__ = [
    "AssetIndexDescriptor",
    "AssetObject",
    "BlobCache",
    "DirectoryBlobCache",
    "DownloadFailed",
    "ManifestParseError",
    "RemoteFetchError",
    "SyncConfig",
    "SyncError",
    "SyncResult",
    "VersionNotFound",
    "__version__",
    "assets_dir_or_default",
    "cache_key",
    "sync_versions",
]
