"""Custom exception hierarchy for sitesync."""

from __future__ import annotations


class SiteSyncError(Exception):
    """Base exception for all sitesync errors."""


class SiteSyncConfigError(SiteSyncError):
    """Invalid or missing configuration."""


class SiteSyncValidationError(SiteSyncError, ValueError):
    """A write was rejected before touching the cache.

    Raised for unknown content/footer keys, non-string map values and
    record payloads that do not fit the collection's model.
    """


class RemoteStoreError(SiteSyncError):
    """Remote document store failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        path: str = "",
    ) -> None:
        self.status_code = status_code
        self.path = path
        super().__init__(message)


class RemoteUnavailableError(RemoteStoreError):
    """The remote store cannot be reached or is not configured.

    The engine treats this as an operating mode (offline), not a fault.
    """
