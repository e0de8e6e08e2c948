"""Bounded-concurrency download of content-addressed files."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from tempfile import TemporaryDirectory

import httpx
from tqdm import tqdm

from .checksum import compute_bytes_checksum, compute_checksum
from .config import SyncConfig
from .errors import DownloadFailed
from .fetcher import RemoteFetcher
from .models import AssetObject

log = logging.getLogger("mcassets/synchronizer")


@dataclass(frozen=True, kw_only=True)
class DownloadTarget:
    """A file we want on disk with the given checksum and size."""

    path: Path
    url: str
    checksum: str
    size: int


@dataclass(frozen=True, kw_only=True)
class BatchStats:
    """Counts of downloaded and reused files."""

    downloaded: int
    reused: int


def is_up_to_date(target: DownloadTarget, algorithm: str) -> bool:
    """
    Return whether the local file already has the expected size and checksum.

    The checksum is only computed when the size matches.
    """
    try:
        size = target.path.stat().st_size
    except FileNotFoundError:
        return False
    if size != target.size:
        return False
    return compute_checksum(target.path, algorithm) == target.checksum


def write_atomically(dest_path: Path, data: bytes) -> None:
    """Write data to dest_path replacing any previous content atomically."""
    dest_path.parent.mkdir(parents=True, exist_ok=True)
    # Write inside a temporary directory next to the destination so
    # `os.replace()` does not cross filesystems.
    with TemporaryDirectory(dir=dest_path.parent) as tmp_dir:
        tmp_file = Path(tmp_dir) / dest_path.name
        tmp_file.write_bytes(data)
        os.replace(tmp_file, dest_path)


class BoundedSynchronizer:
    """
    Downloads files that are missing or corrupted, in fixed-size batches.

    All the files of a batch are fetched concurrently and batches run one
    after the other, so at most `config.batch_size` requests are in flight.
    """

    def __init__(self, fetcher: RemoteFetcher, config: SyncConfig) -> None:
        self.fetcher = fetcher
        self.config = config

    async def download_if_changed(self, target: DownloadTarget) -> bool:
        """
        Make sure the target exists on disk with the expected content.

        Returns True if we downloaded the file and False if the local
        copy was already correct.

        Raises:
            DownloadFailed: when all the attempts fail.
            OSError: on local filesystem errors.
        """
        algorithm = self.config.checksum_algorithm
        if await asyncio.to_thread(is_up_to_date, target, algorithm):
            log.debug("reusing %s", target.path)
            return False

        last_reason = "no attempts made"
        for attempt in range(1, self.config.max_attempts + 1):
            reason = await self._attempt(target)
            if reason is None:
                return True
            last_reason = reason
            log.warning(
                "fetching %s... attempt %d/%d failed: %s",
                target.url,
                attempt,
                self.config.max_attempts,
                reason,
            )
            if attempt < self.config.max_attempts:
                await asyncio.sleep(self.config.retry_delay)
        raise DownloadFailed(target.url, last_reason)

    async def _attempt(self, target: DownloadTarget) -> str | None:
        """Run a single attempt and return the failure reason, if any."""
        try:
            response = await self.fetcher.fetch_bytes(target.url)
        except httpx.RequestError as exc:
            return f"request error: {exc}"
        if not response.ok:
            return f"HTTP error {response.status_code}"
        if len(response.content) != target.size:
            return (
                f"size mismatch: expected {target.size} bytes, got {len(response.content)}"
            )
        checksum = compute_bytes_checksum(response.content, self.config.checksum_algorithm)
        if checksum != target.checksum:
            return f"checksum mismatch: expected {target.checksum}, got {checksum}"
        await asyncio.to_thread(write_atomically, target.path, response.content)
        return None

    async def run_batch(self, targets: list[DownloadTarget]) -> BatchStats:
        """
        Process a batch concurrently, waiting for every member to finish.

        If any member fails, the first failure (in batch order) is raised
        once the whole batch has completed.
        """
        results = await asyncio.gather(
            *(self.download_if_changed(target) for target in targets),
            return_exceptions=True,
        )
        downloaded = 0
        for result in results:
            if isinstance(result, BaseException):
                raise result
            if result:
                downloaded += 1
        return BatchStats(downloaded=downloaded, reused=len(targets) - downloaded)

    async def sync(
        self,
        targets: Iterable[DownloadTarget],
        *,
        desc: str | None = None,
        show_progress: bool = False,
    ) -> BatchStats:
        """Process all the targets in batches, in iteration order."""
        pending = list(targets)
        downloaded = 0
        reused = 0
        size = self.config.batch_size
        with tqdm(
            total=len(pending),
            unit="obj",
            desc=desc,
            leave=True,
            disable=not show_progress,
        ) as pbar:
            for start in range(0, len(pending), size):
                batch = pending[start : start + size]
                stats = await self.run_batch(batch)
                downloaded += stats.downloaded
                reused += stats.reused
                pbar.update(len(batch))
        return BatchStats(downloaded=downloaded, reused=reused)

    def object_targets(
        self, objects: Iterable[AssetObject], assets_dir: Path
    ) -> list[DownloadTarget]:
        """Map asset objects to download targets inside assets_dir."""
        return [
            DownloadTarget(
                path=obj.local_path(assets_dir),
                url=self.config.object_url(obj.hash),
                checksum=obj.hash,
                size=obj.size,
            )
            for obj in objects
        ]
