"""HTTP access to the remote origin."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from .errors import RemoteFetchError

log = logging.getLogger("mcassets/fetcher")


@dataclass(frozen=True)
class FetchResponse:
    """Raw response to a GET request for an object payload."""

    status_code: int
    content: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class RemoteFetcher:
    """
    Performs GET requests for JSON documents and raw payloads.

    Wraps an httpx.AsyncClient. When no client is given, one is created
    and owned by this fetcher, so use it as an async context manager:

        async with RemoteFetcher() as fetcher:
            doc = await fetcher.fetch_json(url)
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._owned = client is None
        if client is None:
            client = httpx.AsyncClient(
                timeout=timeout,
                follow_redirects=True,
                transport=transport,
            )
        self.client = client

    async def __aenter__(self) -> RemoteFetcher:
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owned:
            await self.client.aclose()

    async def fetch_json(self, url: str) -> Any:
        """
        Fetch and decode a JSON document.

        Raises:
            RemoteFetchError: on transport errors, non-2xx responses,
                or when the body is not valid JSON.
        """
        log.debug("fetching %s... start", url)
        try:
            response = await self.client.get(url)
        except httpx.HTTPError as exc:
            raise RemoteFetchError(f"Failed to fetch JSON file {url}: {exc}") from exc
        if not response.is_success:
            raise RemoteFetchError(
                f"Failed to fetch JSON file {url}: HTTP error {response.status_code}"
            )
        try:
            document = json.loads(response.content)
        except ValueError as exc:
            raise RemoteFetchError(f"Response from {url} was not valid JSON: {exc}") from exc
        log.debug("fetching %s... ok", url)
        return document

    async def fetch_bytes(self, url: str) -> FetchResponse:
        """
        Fetch a raw payload.

        Non-2xx statuses are returned to the caller, which decides
        whether to retry. Request errors propagate as httpx.RequestError.
        """
        response = await self.client.get(url)
        return FetchResponse(status_code=response.status_code, content=response.content)
