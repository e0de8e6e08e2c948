"""Configuration of the assets synchronization."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import Final

VERSION_MANIFEST_URL: Final[str] = (
    "https://piston-meta.mojang.com/mc/game/version_manifest_v2.json"
)
"""Remote document listing all the known versions."""

OBJECT_BASE_URL: Final[str] = "https://resources.download.minecraft.net"
"""Base URL of the content-addressed object store."""

DEFAULT_BATCH_SIZE: Final[int] = 20
DEFAULT_MAX_ATTEMPTS: Final[int] = 5
DEFAULT_RETRY_DELAY: Final[float] = 2.0
DEFAULT_CHECKSUM_ALGORITHM: Final[str] = "sha1"
DEFAULT_REQUEST_TIMEOUT: Final[float] = 30.0


@dataclass(frozen=True, kw_only=True)
class SyncConfig:
    """
    Tunables for a synchronization run.

    Attributes:
        version_manifest_url: URL of the version manifest.
        object_base_url: base URL of the object store.
        batch_size: number of objects downloaded concurrently.
        max_attempts: number of download attempts per object.
        retry_delay: seconds to wait after a failed attempt.
        checksum_algorithm: hashlib algorithm used for objects and indices.
        request_timeout: per-request timeout in seconds.
    """

    version_manifest_url: str = VERSION_MANIFEST_URL
    object_base_url: str = OBJECT_BASE_URL
    batch_size: int = DEFAULT_BATCH_SIZE
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    retry_delay: float = DEFAULT_RETRY_DELAY
    checksum_algorithm: str = DEFAULT_CHECKSUM_ALGORITHM
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def __post_init__(self):
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.retry_delay < 0:
            raise ValueError(f"retry_delay must be >= 0, got {self.retry_delay}")
        if self.checksum_algorithm not in hashlib.algorithms_available:
            raise ValueError(f"Unsupported checksum algorithm: {self.checksum_algorithm}")

    def object_url(self, content_hash: str) -> str:
        """Returns the URL from which to download the given object."""
        base = self.object_base_url.rstrip("/")
        return f"{base}/{content_hash[:2]}/{content_hash}"


def assets_dir_or_default(assets_dir: str | Path | None) -> Path:
    """
    Return assets_dir as a Path if not empty. Otherwise return the
    default value for the assets_dir (i.e., `~/.minecraft/assets`).
    """
    if assets_dir is None:
        return Path.home() / ".minecraft" / "assets"
    return Path(assets_dir)
