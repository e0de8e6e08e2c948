"""Checksums of local files."""

from __future__ import annotations

import hashlib
from pathlib import Path

_CHUNK_SIZE = 65536


def compute_checksum(path: Path, algorithm: str) -> str:
    """
    Compute the lowercase hex digest of a file, reading it in chunks.

    Raises:
        OSError: if the file cannot be read.
        ValueError: if the algorithm is not supported.
    """
    digest = hashlib.new(algorithm)
    with open(path, "rb") as fp:
        while chunk := fp.read(_CHUNK_SIZE):
            digest.update(chunk)
    return digest.hexdigest()


def compute_bytes_checksum(data: bytes, algorithm: str) -> str:
    """Compute the lowercase hex digest of an in-memory payload."""
    return hashlib.new(algorithm, data).hexdigest()
