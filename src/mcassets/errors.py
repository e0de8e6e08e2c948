"""Errors raised while synchronizing the assets directory."""


class SyncError(RuntimeError):
    """Base class for all the fatal synchronization errors."""


class VersionNotFound(SyncError):
    """The requested version does not exist in the version manifest."""

    def __init__(self, version: str) -> None:
        super().__init__(f"version {version} not found")
        self.version = version


class RemoteFetchError(SyncError):
    """We could not fetch or decode a remote JSON document."""


class ManifestParseError(SyncError):
    """A document does not have the structure we expect."""


class DownloadFailed(SyncError):
    """An object download exhausted all its attempts."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"failed to download {url}: {reason}")
        self.url = url
        self.reason = reason
