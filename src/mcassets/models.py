"""Values flowing through a synchronization run."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

import dacite

from .errors import ManifestParseError

T = TypeVar("T")

_HEX_RE = re.compile(r"^[0-9a-f]{2,}$")


def _check_hex(value: str, what: str) -> None:
    if not _HEX_RE.match(value):
        raise ValueError(f"Invalid {what}: {value!r} (expected lowercase hex)")


@dataclass(frozen=True, kw_only=True)
class AssetIndexDescriptor:
    """
    Reference to an asset index as embedded in the version metadata.

    Attributes:
        id: the asset index identifier (e.g., "17")
        url: where to download the asset index from
        sha1: expected checksum of the asset index file
        size: expected size of the asset index file in bytes
    """

    id: str
    url: str
    sha1: str
    size: int

    def __post_init__(self):
        # The id names a file below indexes/
        if not self.id or ".." in self.id or "/" in self.id or "\\" in self.id:
            raise ValueError(f"Invalid asset index id: {self.id!r}")
        _check_hex(self.sha1, "asset index checksum")
        if self.size < 0:
            raise ValueError(f"Invalid asset index size: {self.size}")

    def local_path(self, assets_dir: Path) -> Path:
        """Returns the path of the asset index inside the assets dir."""
        return assets_dir / "indexes" / f"{self.id}.json"


@dataclass(frozen=True, kw_only=True)
class AssetObject:
    """Content-addressed object listed by an asset index."""

    hash: str
    size: int

    def __post_init__(self):
        _check_hex(self.hash, "object hash")
        if self.size < 0:
            raise ValueError(f"Invalid object size: {self.size}")

    def local_path(self, assets_dir: Path) -> Path:
        """Returns the path of the object inside the assets dir."""
        return assets_dir / "objects" / self.hash[:2] / self.hash


@dataclass(frozen=True, kw_only=True)
class VersionEntry:
    """Entry of the version manifest."""

    id: str
    url: str


@dataclass(frozen=True, kw_only=True)
class VersionManifest:
    """Document listing all the known versions."""

    versions: list[VersionEntry]

    def find(self, version: str) -> VersionEntry | None:
        """Return the entry for the given version or None."""
        for entry in self.versions:
            if entry.id == version:
                return entry
        return None


@dataclass(frozen=True, kw_only=True)
class VersionMetadata:
    """The part of a version metadata document we care about."""

    assetIndex: AssetIndexDescriptor  # noqa: N815


@dataclass(frozen=True, kw_only=True)
class AssetIndexDocument:
    """Asset index mapping logical paths to objects."""

    objects: dict[str, AssetObject]


@dataclass(kw_only=True)
class SyncResult:
    """Outcome of synchronizing a set of versions."""

    indices_processed: list[str] = field(default_factory=list)
    objects_downloaded: int = 0
    objects_reused: int = 0
    total_bytes_on_disk: int = 0

    def add_index(self, index_id: str, *, downloaded: int, reused: int) -> None:
        """Account for a processed asset index."""
        self.indices_processed.append(index_id)
        self.objects_downloaded += downloaded
        self.objects_reused += reused


def parse_document(data_class: type[T], data: Any, *, source: str) -> T:
    """
    Parse a decoded JSON document into the given dataclass.

    Raises:
        ManifestParseError: if the document is not an object, lacks
            required fields, or has fields of the wrong type.
    """
    if not isinstance(data, dict):
        raise ManifestParseError(f"{source}: expected a JSON object")
    try:
        return dacite.from_dict(data_class, data, config=dacite.Config(strict=False))
    except (dacite.DaciteError, ValueError) as exc:
        raise ManifestParseError(f"{source}: {exc}") from exc
