"""Cache of whole assets directories, addressed by key."""

from __future__ import annotations

import hashlib
import logging
import os
import tarfile
from collections.abc import Iterable, Sequence
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Final, Protocol

from filelock import FileLock

ARCHIVE_SUFFIX: Final[str] = ".tar.gz"
LOCK_FILENAME: Final[str] = ".lock"

log = logging.getLogger("mcassets/blobcache")


def cache_key(prefix: str, versions: Iterable[str]) -> str:
    """Return the cache key identifying the given list of versions."""
    digest = hashlib.md5("\n".join(versions).encode("utf-8")).hexdigest()
    return f"{prefix}-{digest}"


class BlobCache(Protocol):
    """
    Key-value store of directory snapshots.

    Methods:
        restore: populate a directory from the exact key or, failing
            that, from the newest entry matching a prefix; return the
            matched key or None.
        save: store a directory under a key; return False if the key
            already exists.
    """

    def restore(self, path: Path, key: str, restore_prefixes: Sequence[str] = ()) -> str | None: ...

    def save(self, path: Path, key: str) -> bool: ...


class DirectoryBlobCache:
    """BlobCache keeping one compressed tarball per key in a local directory."""

    def __init__(self, cache_dir: str | Path) -> None:
        self.cache_dir = Path(cache_dir)

    def archive_path(self, key: str) -> Path:
        """Return the archive path for the given key."""
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid cache key: {key!r}")
        return self.cache_dir / f"{key}{ARCHIVE_SUFFIX}"

    def keys(self) -> list[str]:
        """Return the stored keys, newest first."""
        if not self.cache_dir.is_dir():
            return []
        archives = [p for p in self.cache_dir.iterdir() if p.name.endswith(ARCHIVE_SUFFIX)]
        archives.sort(key=lambda p: p.stat().st_mtime, reverse=True)
        return [p.name[: -len(ARCHIVE_SUFFIX)] for p in archives]

    def _lock(self) -> FileLock:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        return FileLock(self.cache_dir / LOCK_FILENAME)

    def _match(self, key: str, restore_prefixes: Sequence[str]) -> str | None:
        if self.archive_path(key).exists():
            return key
        stored = self.keys()
        for prefix in restore_prefixes:
            for candidate in stored:
                if candidate.startswith(prefix):
                    return candidate
        return None

    def restore(self, path: Path, key: str, restore_prefixes: Sequence[str] = ()) -> str | None:
        with self._lock():
            matched = self._match(key, restore_prefixes)
            if matched is None:
                log.info("restoring %s... no matching cache entry", key)
                return None
            log.info("restoring %s from %s... start", path, matched)
            path.mkdir(parents=True, exist_ok=True)
            with tarfile.open(self.archive_path(matched), "r:gz") as archive:
                archive.extractall(path, filter="data")
            log.info("restoring %s from %s... ok", path, matched)
            return matched

    def save(self, path: Path, key: str) -> bool:
        dest = self.archive_path(key)
        with self._lock():
            if dest.exists():
                log.info("saving %s... key already exists", key)
                return False
            log.info("saving %s as %s... start", path, key)
            with TemporaryDirectory(dir=self.cache_dir) as tmp_dir:
                tmp_file = Path(tmp_dir) / dest.name
                with tarfile.open(tmp_file, "w:gz") as archive:
                    for child in sorted(path.iterdir()):
                        archive.add(child, arcname=child.name)
                os.replace(tmp_file, dest)
            log.info("saving %s as %s... ok", path, key)
            return True
