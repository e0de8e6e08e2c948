"""Shared pytest fixtures for mcassets tests."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path

import httpx
import pytest

from mcassets.config import SyncConfig

MANIFEST_URL = "https://meta.example.com/mc/game/version_manifest_v2.json"
OBJECTS_URL = "https://objects.example.com"


def sha1(content: bytes) -> str:
    """Compute SHA1 hex digest for test data."""
    return hashlib.sha1(content).hexdigest()


def object_url(content: bytes) -> str:
    """Return the fake origin URL of an object."""
    digest = sha1(content)
    return f"{OBJECTS_URL}/{digest[:2]}/{digest}"


class FakeOrigin:
    """
    In-memory origin serving the version manifest, the version metadata,
    the asset indices and the objects through an httpx.MockTransport.
    """

    def __init__(self) -> None:
        self.documents: dict[str, bytes] = {}
        self.versions: list[dict[str, str]] = []
        self.failures: dict[str, list[int]] = {}
        self.requests: list[str] = []

    def add_bytes(self, url: str, content: bytes) -> None:
        self.documents[url] = content

    def add_object(self, content: bytes) -> str:
        """Publish an object and return its hash."""
        self.add_bytes(object_url(content), content)
        return sha1(content)

    def add_version(
        self,
        version: str,
        index_id: str,
        objects: dict[str, bytes],
    ) -> dict[str, object]:
        """Publish a version whose asset index lists the given path -> content map."""
        index = {
            "objects": {
                path: {"hash": self.add_object(content), "size": len(content)}
                for path, content in objects.items()
            }
        }
        index_bytes = json.dumps(index).encode()
        index_url = f"https://meta.example.com/indexes/{index_id}.json"
        self.add_bytes(index_url, index_bytes)
        descriptor = {
            "id": index_id,
            "url": index_url,
            "sha1": sha1(index_bytes),
            "size": len(index_bytes),
            "totalSize": sum(len(c) for c in objects.values()),
        }
        meta_url = f"https://meta.example.com/versions/{version}.json"
        self.add_bytes(meta_url, json.dumps({"id": version, "assetIndex": descriptor}).encode())
        self.versions.append({"id": version, "type": "release", "url": meta_url})
        return descriptor

    def fail(self, url: str, *statuses: int) -> None:
        """Answer the next requests to url with the given statuses."""
        self.failures.setdefault(url, []).extend(statuses)

    def object_url(self, content: bytes) -> str:
        return object_url(content)

    def count(self, url: str) -> int:
        return self.requests.count(url)

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        pending = self.failures.get(url)
        if pending:
            return httpx.Response(pending.pop(0))
        if url == MANIFEST_URL:
            return httpx.Response(200, json={"latest": {}, "versions": self.versions})
        if url not in self.documents:
            return httpx.Response(404)
        return httpx.Response(200, content=self.documents[url])

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def origin() -> FakeOrigin:
    """Return an empty fake origin."""
    return FakeOrigin()


@pytest.fixture
def config() -> SyncConfig:
    """Return a configuration pointing at the fake origin without retry delays."""
    return SyncConfig(
        version_manifest_url=MANIFEST_URL,
        object_base_url=OBJECTS_URL,
        retry_delay=0,
    )


@pytest.fixture
def assets_dir(tmp_path: Path) -> Path:
    """Return the assets directory to populate."""
    return tmp_path / "assets"
