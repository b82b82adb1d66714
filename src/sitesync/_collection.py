"""Collection handles owned by :class:`sitesync.engine.SyncEngine`.

Each handle reads and writes one cache entry and mirrors writes to the
remote store through the engine. The cache write always lands first and
synchronously; remote calls are best effort.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import ValidationError

from sitesync._constants import ITEMS_SUBCOLLECTION
from sitesync.exceptions import SiteSyncValidationError
from sitesync.models import FieldMapModel, SiteRecord

if TYPE_CHECKING:
    from sitesync.engine import SyncEngine

_logger = logging.getLogger(__name__)

TRecord = TypeVar("TRecord", bound=SiteRecord)
TMap = TypeVar("TMap", bound=FieldMapModel)


class CollectionName(StrEnum):
    """The five logical collections, named by their aggregate-document field."""

    CONTENT = "content"
    FOOTER = "footerContent"
    CATEGORIES = "categories"
    PRODUCTS = "products"
    SLIDES = "slides"


class _CacheBacked:
    """Shared cache plumbing for both collection kinds."""

    def __init__(
        self,
        engine: SyncEngine,
        name: CollectionName,
        *,
        cache_key: str,
        remote_doc: str,
    ) -> None:
        self._engine = engine
        self.name = name
        self.cache_key = cache_key
        self.remote_doc = remote_doc

    def _load(self) -> Any:
        """Parse the cache entry, or ``None`` when missing or corrupt."""
        text = self._engine._cache.get_item(self.cache_key)
        if text is None:
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            _logger.debug("Malformed cache entry %s; using empty default", self.cache_key)
            return None

    def _store(self, value: Any) -> None:
        self._engine._cache.set_item(self.cache_key, json.dumps(value, ensure_ascii=False))
        self._engine._notify(self.name)

    @property
    def doc_path(self) -> str:
        return self._engine._remote_path(self.remote_doc)


class RecordCollection(_CacheBacked, Generic[TRecord]):
    """A list of records (categories, products or slides).

    Records are kept in insertion order. Ids are strings assigned by
    :meth:`create` and never change.
    """

    def __init__(
        self,
        engine: SyncEngine,
        name: CollectionName,
        model: type[TRecord],
        *,
        cache_key: str,
        remote_doc: str,
    ) -> None:
        super().__init__(engine, name, cache_key=cache_key, remote_doc=remote_doc)
        self.model = model

    @property
    def items_path(self) -> str:
        return self._engine._remote_path(self.remote_doc, ITEMS_SUBCOLLECTION)

    def item_path(self, record_id: str) -> str:
        return f"{self.items_path}/{record_id}"

    def read_raw(self) -> list[dict[str, Any]]:
        """Cached records as wire dicts, unknown keys included."""
        value = self._load()
        if not isinstance(value, list):
            if value is not None:
                _logger.debug("Cache entry %s is not a list; using empty default", self.cache_key)
            return []
        return [item for item in value if isinstance(item, dict)]

    def has_data(self) -> bool:
        """Whether the cache entry is a readable list (an empty list counts)."""
        return isinstance(self._load(), list)

    def _parse(self, items: list[dict[str, Any]]) -> list[TRecord]:
        records: list[TRecord] = []
        for item in items:
            try:
                records.append(self.model.model_validate(item))
            except ValidationError:
                _logger.debug("Skipping invalid %s record id=%s", self.name, item.get("id"), exc_info=True)
        return records

    def replace_all(self, items: list[dict[str, Any]]) -> None:
        """Overwrite the cached list wholesale."""
        self._store(items)

    def read(self) -> list[TRecord]:
        """Current cached records. Never touches the network."""
        return self._parse(self.read_raw())

    def get(self, record_id: str) -> TRecord | None:
        for record in self.read():
            if record.id == record_id:
                return record
        return None

    async def read_authoritative(self) -> list[TRecord]:
        """Fetch the remote item set into the cache when online."""
        remote = self._engine._online_remote()
        if remote is None:
            return self.read()
        try:
            items = await remote.list_collection_items(self.items_path)
        except Exception:
            _logger.warning("Fetching %s from remote failed; using cache", self.name, exc_info=True)
            return self.read()
        self.replace_all(items)
        return self._parse(items)

    def _validated(self, data: Mapping[str, Any]) -> TRecord:
        try:
            return self.model.model_validate(data)
        except ValidationError as exc:
            raise SiteSyncValidationError(f"invalid {self.model.__name__}: {exc}") from exc

    async def create(self, item: TRecord | Mapping[str, Any]) -> TRecord:
        """Add a record with a fresh id and return it as stored."""
        patch = self.model.normalize_patch(item)
        items = self.read_raw()
        taken = {str(existing.get("id", "")) for existing in items}
        for existing_id in taken:
            self._engine._ids.observe(existing_id)
        record_id = self._engine._ids()
        while record_id in taken:
            record_id = self._engine._ids()

        record = self._validated({**patch, "id": record_id})
        items.append(record.to_wire())
        self._store(items)
        _logger.debug("Created %s id=%s", self.name, record_id)

        body = {key: value for key, value in record.to_wire().items() if key != "id"}
        path = self.item_path(record_id)
        await self._engine._remote_write(
            self.name, "create", path, lambda r: r.set_document(path, body), written=items
        )
        return record

    async def update(self, record_id: str, partial: TRecord | Mapping[str, Any]) -> TRecord | None:
        """Merge *partial* into the record with *record_id*.

        An unknown id is not an error: the list is written back unchanged
        and ``None`` is returned.
        """
        patch = self.model.normalize_patch(partial)
        items = self.read_raw()
        updated: TRecord | None = None
        for index, existing in enumerate(items):
            if str(existing.get("id")) != record_id:
                continue
            merged = {**existing, **patch, "id": existing.get("id")}
            updated = self._validated(merged)
            items[index] = {**merged, **updated.to_wire()}
            break
        self._store(items)

        if updated is None:
            _logger.debug("Update of unknown %s id=%s ignored", self.name, record_id)
            return None
        if patch:
            wire = updated.to_wire()
            body = {key: wire.get(key, value) for key, value in patch.items()}
            path = self.item_path(record_id)
            await self._engine._remote_write(
                self.name, "update", path, lambda r: r.set_document(path, body, merge=True), written=items
            )
        return updated

    async def delete(self, record_id: str) -> bool:
        """Remove the record with *record_id*. Returns whether it was cached."""
        items = self.read_raw()
        remaining = [item for item in items if str(item.get("id")) != record_id]
        self._store(remaining)
        removed = len(remaining) != len(items)
        if not removed:
            _logger.debug("Delete of unknown %s id=%s ignored locally", self.name, record_id)

        path = self.item_path(record_id)
        await self._engine._remote_write(
            self.name, "delete", path, lambda r: r.delete_document(path), written=remaining
        )
        return removed


class FieldMapCollection(_CacheBacked, Generic[TMap]):
    """A closed string map (site content or footer fields).

    Updates are shallow merges, ``{**current, **updates}``. Keys outside
    the model's key set are rejected on write and ignored on read.
    """

    def __init__(
        self,
        engine: SyncEngine,
        name: CollectionName,
        model: type[TMap],
        *,
        cache_key: str,
        remote_doc: str,
    ) -> None:
        super().__init__(engine, name, cache_key=cache_key, remote_doc=remote_doc)
        self.model = model

    def read_raw(self) -> dict[str, str]:
        """Cached string values, unknown keys included."""
        value = self._load()
        if not isinstance(value, dict):
            if value is not None:
                _logger.debug("Cache entry %s is not an object; using empty default", self.cache_key)
            return {}
        return {str(key): item for key, item in value.items() if isinstance(item, str)}

    def has_data(self) -> bool:
        return bool(self.read_raw())

    def replace_all(self, values: Mapping[str, Any]) -> None:
        """Overwrite the cached map wholesale."""
        self._store(dict(values))

    def read(self) -> TMap:
        """Current cached map. Never touches the network."""
        return self.model.model_validate(self.read_raw())

    async def read_authoritative(self) -> TMap:
        """Fetch the remote document into the cache when online.

        A missing remote document leaves the cache untouched.
        """
        remote = self._engine._online_remote()
        if remote is None:
            return self.read()
        try:
            snapshot = await remote.get_document(self.doc_path)
        except Exception:
            _logger.warning("Fetching %s from remote failed; using cache", self.name, exc_info=True)
            return self.read()
        if not snapshot.exists:
            _logger.debug("Remote %s document missing; keeping cache", self.name)
            return self.read()
        self.replace_all(snapshot.data())
        return self.read()

    async def update(self, updates: Mapping[str, Any]) -> TMap:
        """Merge *updates* into the map and return the merged result."""
        validated = self.model.validate_updates(updates)
        merged = {**self.read_raw(), **validated}
        self._store(merged)
        _logger.debug("Merged %d %s keys", len(validated), self.name)

        path = self.doc_path
        await self._engine._remote_write(
            self.name, "merge", path, lambda r: r.set_document(path, merged, merge=True), written=merged
        )
        return self.model.model_validate(merged)
