"""Remote document store contract.

The engine talks to the remote store only through :class:`RemoteStore`.
Paths are slash-separated and relative to the database root, e.g.
``websiteData/content`` or ``websiteData/categories/items/1718000000000``.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol

import aiohttp

from sitesync.config import SiteSyncConfig
from sitesync.exceptions import RemoteUnavailableError

if TYPE_CHECKING:
    from sitesync._transport import FirestoreRestStore


@dataclasses.dataclass(frozen=True)
class DocumentSnapshot:
    """A point-in-time read of one remote document."""

    path: str
    exists: bool
    fields: dict[str, Any] = dataclasses.field(default_factory=dict)
    update_time: str | None = None

    def data(self) -> dict[str, Any]:
        """Document fields as plain values (empty when missing)."""
        return dict(self.fields)


@dataclasses.dataclass(frozen=True)
class Write:
    """One operation inside an atomic :meth:`RemoteStore.commit`."""

    path: str
    value: dict[str, Any] | None = None
    merge: bool = False

    @property
    def is_delete(self) -> bool:
        return self.value is None

    @classmethod
    def set(cls, path: str, value: Mapping[str, Any], *, merge: bool = False) -> Write:
        return cls(path=path, value=dict(value), merge=merge)

    @classmethod
    def delete(cls, path: str) -> Write:
        return cls(path=path)


class Subscription(Protocol):
    """Handle for a standing document watch."""

    def cancel(self) -> None: ...

    @property
    def active(self) -> bool: ...


SnapshotCallback = Callable[[DocumentSnapshot], None]


class RemoteStore(Protocol):
    """Structural remote store interface used by the engine.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`FirestoreRestStore`) concrete.
    """

    async def get_document(self, path: str) -> DocumentSnapshot: ...

    async def set_document(self, path: str, value: Mapping[str, Any], *, merge: bool = False) -> None: ...

    async def delete_document(self, path: str) -> None: ...

    async def list_collection_items(self, path: str) -> list[dict[str, Any]]: ...

    async def commit(self, writes: Sequence[Write]) -> None: ...

    def subscribe(self, path: str, on_change: SnapshotCallback) -> Subscription: ...

    async def close(self) -> None: ...


async def connect_remote(
    config: SiteSyncConfig,
    session: aiohttp.ClientSession | None = None,
) -> FirestoreRestStore:
    """Build the Firestore REST store for *config*.

    Raises
    ------
    RemoteUnavailableError
        When the remote store is disabled or no project is configured.
    """
    from sitesync._transport import FirestoreRestStore

    if not config.has_remote:
        reason = "no Firestore project configured" if config.remote_enabled else "remote store disabled"
        raise RemoteUnavailableError(reason)
    if session is None:
        return FirestoreRestStore(config, aiohttp.ClientSession(), owns_session=True)
    return FirestoreRestStore(config, session)
