"""High-level async sync engine for the site's content collections."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

import aiohttp

from sitesync._collection import CollectionName, FieldMapCollection, RecordCollection
from sitesync._constants import (
    AGGREGATE_FIELD_TO_CACHE_KEY,
    CACHE_KEY_CATEGORIES,
    CACHE_KEY_CONTENT,
    CACHE_KEY_FOOTER,
    CACHE_KEY_PRODUCTS,
    CACHE_KEY_SLIDES,
    DOC_AGGREGATE,
    DOC_CATEGORIES,
    DOC_CONNECTION_TEST,
    DOC_CONTENT,
    DOC_FOOTER,
    DOC_PRODUCTS,
    DOC_SLIDES,
)
from sitesync._ids import IdGenerator
from sitesync.cache import JsonFileCache, LocalCache
from sitesync.config import SiteSyncConfig
from sitesync.defaults import build_seed_data
from sitesync.exceptions import RemoteUnavailableError
from sitesync.models import Category, FooterContent, Product, SiteContent, Slide
from sitesync.remote import DocumentSnapshot, RemoteStore, Subscription, Write, connect_remote

_logger = logging.getLogger(__name__)

RemoteConnector = Callable[[], Awaitable[RemoteStore]]
ChangeCallback = Callable[[CollectionName], None]


class ConnectionState(StrEnum):
    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    ONLINE = "online"
    OFFLINE = "offline"


@dataclass(frozen=True)
class SiteSnapshot:
    """All five collections as read from the cache at one instant."""

    content: SiteContent
    footer: FooterContent
    categories: list[Category]
    products: list[Product]
    slides: list[Slide]


class SyncEngine:
    """Local-first sync engine between a local cache and a remote store.

    Usage::

        async with SyncEngine(SiteSyncConfig.from_env()) as engine:
            await engine.categories.create({"name": "Glassware"})
            content = engine.get_content()

    Reads always come from the local cache. Writes land in the cache
    first and are then sent to the remote store when online; remote
    failures are logged and never reach the caller.
    """

    def __init__(
        self,
        config: SiteSyncConfig,
        *,
        cache: LocalCache | None = None,
        connector: RemoteConnector | None = None,
        session: aiohttp.ClientSession | None = None,
        on_change: ChangeCallback | None = None,
        id_generator: IdGenerator | None = None,
    ) -> None:
        self._config = config
        self._cache: LocalCache = cache if cache is not None else JsonFileCache(config.resolved_cache_path)
        self._http_session = session
        self._connector: RemoteConnector = connector if connector is not None else self._default_connector
        self._on_change = on_change
        self._ids = id_generator if id_generator is not None else IdGenerator()

        self._state = ConnectionState.UNINITIALIZED
        self._remote: RemoteStore | None = None
        self._subscription: Subscription | None = None
        self._bootstrap_task: asyncio.Task[None] | None = None
        self._seed_pending = False

        self.content = FieldMapCollection(
            self, CollectionName.CONTENT, SiteContent, cache_key=CACHE_KEY_CONTENT, remote_doc=DOC_CONTENT
        )
        self.footer = FieldMapCollection(
            self, CollectionName.FOOTER, FooterContent, cache_key=CACHE_KEY_FOOTER, remote_doc=DOC_FOOTER
        )
        self.categories = RecordCollection(
            self, CollectionName.CATEGORIES, Category, cache_key=CACHE_KEY_CATEGORIES, remote_doc=DOC_CATEGORIES
        )
        self.products = RecordCollection(
            self, CollectionName.PRODUCTS, Product, cache_key=CACHE_KEY_PRODUCTS, remote_doc=DOC_PRODUCTS
        )
        self.slides = RecordCollection(
            self, CollectionName.SLIDES, Slide, cache_key=CACHE_KEY_SLIDES, remote_doc=DOC_SLIDES
        )
        collections: tuple[FieldMapCollection[Any] | RecordCollection[Any], ...] = (
            self.content,
            self.footer,
            self.categories,
            self.products,
            self.slides,
        )
        self._by_name = {c.name: c for c in collections}
        self._by_cache_key = {c.cache_key: c for c in collections}

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> SyncEngine:
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_online(self) -> bool:
        return self._state is ConnectionState.ONLINE

    @property
    def cache(self) -> LocalCache:
        return self._cache

    async def start(self) -> ConnectionState:
        """Seed, connect and pull. Runs once; later calls await the same run."""
        if self._bootstrap_task is None:
            self._bootstrap_task = asyncio.get_running_loop().create_task(self._bootstrap())
        await self._bootstrap_task
        return self._state

    async def reconnect(self) -> ConnectionState:
        """Retry the remote connection after the engine went offline.

        The engine never does this on its own; callers decide when.
        """
        if self._bootstrap_task is not None and not self._bootstrap_task.done():
            await self._bootstrap_task
        if self._state is not ConnectionState.OFFLINE:
            return self._state
        self._bootstrap_task = asyncio.get_running_loop().create_task(self._establish())
        await self._bootstrap_task
        return self._state

    async def close(self) -> None:
        """Stop the live subscription and release the remote store."""
        subscription = self._subscription
        self._subscription = None
        if subscription is not None:
            subscription.cancel()
        remote = self._remote
        self._remote = None
        if remote is not None:
            await self._close_remote(remote)

    # ------------------------------------------------------------------
    # Bootstrap
    # ------------------------------------------------------------------

    def _set_state(self, state: ConnectionState) -> None:
        if state is not self._state:
            _logger.info("Sync engine %s -> %s", self._state, state)
        self._state = state

    async def _bootstrap(self) -> None:
        self._set_state(ConnectionState.CONNECTING)
        if self._seed_if_empty():
            self._seed_pending = True
        await self._establish()

    async def _establish(self) -> None:
        self._set_state(ConnectionState.CONNECTING)
        remote = await self._open_remote()
        if remote is None:
            self._set_state(ConnectionState.OFFLINE)
            return
        self._remote = remote
        self._set_state(ConnectionState.ONLINE)

        if self._seed_pending:
            self._seed_pending = False
            await self._push_seed(remote)
        await self.pull_all()
        self._subscribe(remote)

    async def _default_connector(self) -> RemoteStore:
        return await connect_remote(self._config, self._http_session)

    async def _open_remote(self) -> RemoteStore | None:
        """Connect and probe under one timeout; ``None`` means offline."""
        if not self._config.remote_enabled:
            _logger.info("Remote store disabled; running offline")
            return None

        opened: list[RemoteStore] = []

        async def _connect_and_probe() -> RemoteStore:
            remote = await self._connector()
            opened.append(remote)
            await remote.set_document(
                self._remote_path(DOC_CONNECTION_TEST),
                {"test": True, "timestamp": datetime.now(UTC)},
            )
            return remote

        try:
            return await asyncio.wait_for(_connect_and_probe(), self._config.connect_timeout)
        except RemoteUnavailableError as exc:
            _logger.info("Remote store unavailable (%s); running offline", exc)
        except TimeoutError:
            _logger.warning("Remote store did not answer within %.1fs; running offline", self._config.connect_timeout)
        except Exception:
            _logger.warning("Remote store probe failed; running offline", exc_info=True)
        for remote in opened:
            await self._close_remote(remote)
        return None

    async def _close_remote(self, remote: RemoteStore) -> None:
        try:
            await remote.close()
        except Exception:
            _logger.debug("Closing remote store failed", exc_info=True)

    def _seed_if_empty(self) -> bool:
        """Write defaults into every collection whose cache entry holds no data.

        Collections that already hold data are left alone.
        """
        if not self._config.seed_defaults:
            return False
        seed = build_seed_data()
        defaults: dict[CollectionName, Any] = {
            CollectionName.CONTENT: seed.content,
            CollectionName.FOOTER: seed.footer,
            CollectionName.CATEGORIES: [c.to_wire() for c in seed.categories],
            CollectionName.PRODUCTS: [p.to_wire() for p in seed.products],
            CollectionName.SLIDES: [s.to_wire() for s in seed.slides],
        }
        seeded: list[str] = []
        for name, value in defaults.items():
            collection = self._by_name[name]
            if collection.has_data():
                continue
            collection.replace_all(value)
            seeded.append(name.value)
        if seeded:
            _logger.info("Seeded default site data into the local cache collections=%s", seeded)
        return bool(seeded)

    def _seed_writes(self) -> list[Write]:
        writes = [
            Write.set(self._remote_path(DOC_AGGREGATE), self._aggregate_value()),
            Write.set(self.content.doc_path, self.content.read_raw()),
            Write.set(self.footer.doc_path, self.footer.read_raw()),
        ]
        for collection in (self.categories, self.products, self.slides):
            for item in collection.read_raw():
                body = {key: value for key, value in item.items() if key != "id"}
                writes.append(Write.set(collection.item_path(str(item.get("id"))), body))
        return writes

    async def _push_seed(self, remote: RemoteStore) -> None:
        """Push seeded defaults once, unless the remote already holds data."""
        try:
            aggregate = await remote.get_document(self._remote_path(DOC_AGGREGATE))
            if aggregate.exists:
                _logger.info("Remote store already holds site data; not pushing defaults")
                return
            await remote.commit(self._seed_writes())
            _logger.info("Pushed seeded defaults to the remote store")
        except Exception:
            _logger.warning("Pushing seeded defaults failed", exc_info=True)

    async def pull_all(self) -> None:
        """Replace every collection with its remote value (online only)."""
        if not self.is_online:
            return
        await self.content.read_authoritative()
        await self.footer.read_authoritative()
        await self.categories.read_authoritative()
        await self.products.read_authoritative()
        await self.slides.read_authoritative()
        _logger.debug("Initial pull complete")

    # ------------------------------------------------------------------
    # Live reconciliation
    # ------------------------------------------------------------------

    def _subscribe(self, remote: RemoteStore) -> None:
        try:
            self._subscription = remote.subscribe(self._remote_path(DOC_AGGREGATE), self._on_aggregate_snapshot)
        except Exception:
            _logger.warning("Opening the live subscription failed", exc_info=True)

    def _on_aggregate_snapshot(self, snapshot: DocumentSnapshot) -> None:
        """Overwrite cache entries with the aggregate document's fields.

        Last writer wins: no merge with local edits made since the last
        read.
        """
        if not snapshot.exists:
            return
        applied: list[str] = []
        for field_name, value in snapshot.data().items():
            cache_key = AGGREGATE_FIELD_TO_CACHE_KEY.get(field_name)
            if cache_key is None:
                _logger.debug("Ignoring unknown aggregate field %s", field_name)
                continue
            collection = self._by_cache_key[cache_key]
            if isinstance(collection, RecordCollection) and isinstance(value, list):
                collection.replace_all(value)
            elif isinstance(collection, FieldMapCollection) and isinstance(value, dict):
                collection.replace_all(value)
            else:
                _logger.debug("Ignoring aggregate field %s of type %s", field_name, type(value).__name__)
                continue
            applied.append(field_name)
        if applied:
            _logger.debug("Cache updated from remote aggregate fields=%s", applied)

    # ------------------------------------------------------------------
    # Internal helpers used by collections
    # ------------------------------------------------------------------

    def _remote_path(self, *parts: str) -> str:
        return "/".join([self._config.root_collection.strip("/"), *parts])

    def _online_remote(self) -> RemoteStore | None:
        if self._state is ConnectionState.ONLINE:
            return self._remote
        return None

    def _notify(self, collection: CollectionName) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(collection)
        except Exception:
            _logger.debug("on_change callback failed", exc_info=True)

    def _aggregate_value(self) -> dict[str, Any]:
        return {
            CollectionName.CONTENT.value: self.content.read_raw(),
            CollectionName.FOOTER.value: self.footer.read_raw(),
            CollectionName.CATEGORIES.value: self.categories.read_raw(),
            CollectionName.PRODUCTS.value: self.products.read_raw(),
            CollectionName.SLIDES.value: self.slides.read_raw(),
        }

    async def _remote_write(
        self,
        collection: CollectionName,
        action: str,
        path: str,
        call: Callable[[RemoteStore], Awaitable[None]],
        *,
        written: Any,
    ) -> bool:
        """Best-effort remote mutation followed by the aggregate mirror.

        *written* is the full collection value the caller stored in the
        cache; it is what gets mirrored, even if a snapshot replaced the
        cache entry while the remote call was in flight. Returns whether
        the remote call succeeded. Offline this is a no-op.
        """
        remote = self._online_remote()
        if remote is None:
            return False
        try:
            await call(remote)
        except Exception:
            _logger.warning("Remote %s of %s at %s failed; local cache kept", action, collection, path, exc_info=True)
            return False
        if self._config.mirror_aggregate:
            await self._mirror_aggregate(remote, collection, written)
        return True

    async def _mirror_aggregate(self, remote: RemoteStore, collection: CollectionName, value: Any) -> None:
        try:
            await remote.set_document(self._remote_path(DOC_AGGREGATE), {collection.value: value}, merge=True)
        except Exception:
            _logger.warning("Mirroring %s into the aggregate document failed", collection, exc_info=True)

    # ------------------------------------------------------------------
    # Conveniences
    # ------------------------------------------------------------------

    def get_content(self) -> SiteContent:
        return self.content.read()

    async def update_multiple_content(self, updates: Mapping[str, Any]) -> SiteContent:
        """Merge several content keys at once."""
        return await self.content.update(updates)

    def get_footer_content(self) -> FooterContent:
        return self.footer.read()

    async def update_footer_content(self, updates: Mapping[str, Any]) -> FooterContent:
        return await self.footer.update(updates)

    def snapshot(self) -> SiteSnapshot:
        """Read all five collections from the cache."""
        return SiteSnapshot(
            content=self.content.read(),
            footer=self.footer.read(),
            categories=self.categories.read(),
            products=self.products.read(),
            slides=self.slides.read(),
        )
