from __future__ import annotations

import asyncio
import copy
import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import pytest

from sitesync import (
    CollectionName,
    ConnectionState,
    ContentKey,
    FooterField,
    IdGenerator,
    MemoryCache,
    RemoteStoreError,
    RemoteUnavailableError,
    SiteContent,
    SiteSyncConfig,
    SiteSyncValidationError,
    SyncEngine,
)
from sitesync.remote import DocumentSnapshot, SnapshotCallback, Write

AGGREGATE = "websiteData/allData"


@dataclass
class FakeSubscription:
    path: str
    callback: SnapshotCallback
    active: bool = True

    def cancel(self) -> None:
        self.active = False


@dataclass
class FakeRemoteStore:
    """In-memory document store that behaves like the Firestore client."""

    documents: dict[str, dict[str, Any]] = field(default_factory=dict)
    calls: list[tuple[str, str]] = field(default_factory=list)
    fail_ops: set[str] = field(default_factory=set)
    write_delay: float = 0.0
    subscriptions: list[FakeSubscription] = field(default_factory=list)
    closed: bool = False
    _version: int = 0

    def _record(self, op: str, path: str) -> None:
        self.calls.append((op, path))
        if op in self.fail_ops:
            raise RemoteStoreError(f"{op} failed", status_code=503, path=path)

    def calls_for(self, op: str) -> list[str]:
        return [path for name, path in self.calls if name == op]

    def _snapshot(self, path: str) -> DocumentSnapshot:
        doc = self.documents.get(path)
        return DocumentSnapshot(
            path=path,
            exists=doc is not None,
            fields=copy.deepcopy(doc or {}),
            update_time=str(self._version),
        )

    def _apply(self, path: str, value: dict[str, Any] | None, merge: bool) -> None:
        if value is None:
            self.documents.pop(path, None)
        elif merge:
            self.documents.setdefault(path, {}).update(copy.deepcopy(value))
        else:
            self.documents[path] = copy.deepcopy(value)
        self._version += 1
        for sub in self.subscriptions:
            if sub.active and sub.path == path:
                sub.callback(self._snapshot(path))

    async def get_document(self, path: str) -> DocumentSnapshot:
        self._record("get", path)
        return self._snapshot(path)

    async def set_document(self, path: str, value: Any, *, merge: bool = False) -> None:
        self._record("merge" if merge else "set", path)
        if self.write_delay:
            await asyncio.sleep(self.write_delay)
        self._apply(path, dict(value), merge)

    async def delete_document(self, path: str) -> None:
        self._record("delete", path)
        if self.write_delay:
            await asyncio.sleep(self.write_delay)
        self._apply(path, None, False)

    async def list_collection_items(self, path: str) -> list[dict[str, Any]]:
        self._record("list", path)
        prefix = f"{path}/"
        return [
            {"id": name[len(prefix) :], **copy.deepcopy(doc)}
            for name, doc in self.documents.items()
            if name.startswith(prefix) and "/" not in name[len(prefix) :]
        ]

    async def commit(self, writes: list[Write]) -> None:
        self._record("commit", str(len(writes)))
        for write in writes:
            self._apply(write.path, write.value, write.merge)

    def subscribe(self, path: str, on_change: SnapshotCallback) -> FakeSubscription:
        sub = FakeSubscription(path=path, callback=on_change)
        self.subscriptions.append(sub)
        on_change(self._snapshot(path))
        return sub

    async def close(self) -> None:
        self.closed = True


def _connector(remote: FakeRemoteStore) -> Callable[[], Any]:
    async def _connect() -> FakeRemoteStore:
        return remote

    return _connect


async def _unavailable() -> FakeRemoteStore:
    raise RemoteUnavailableError("remote SDK not loaded")


@pytest.fixture
def config() -> SiteSyncConfig:
    return SiteSyncConfig(project_id="demo-project", connect_timeout=1.0)


@pytest.fixture
def bare_config() -> SiteSyncConfig:
    return SiteSyncConfig(project_id="demo-project", connect_timeout=1.0, seed_defaults=False)


@pytest.fixture
def remote() -> FakeRemoteStore:
    return FakeRemoteStore()


def _offline_engine(config: SiteSyncConfig, cache: MemoryCache | None = None) -> SyncEngine:
    return SyncEngine(config, cache=cache or MemoryCache(), connector=_unavailable)


# ------------------------------------------------------------------
# Bootstrap and seeding
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_offline_start_seeds_every_content_key_and_footer_field(config: SiteSyncConfig) -> None:
    async with _offline_engine(config) as engine:
        assert engine.state is ConnectionState.OFFLINE

        content = engine.get_content()
        for key in ContentKey:
            assert content.get(key), f"{key} not seeded"
        footer = engine.get_footer_content()
        for footer_field in FooterField:
            assert footer.get(footer_field), f"{footer_field} not seeded"

        categories = engine.categories.read()
        products = engine.products.read()
        slides = engine.slides.read()
        assert len(categories) == 1
        assert len(products) == 1
        assert products[0].category_id == categories[0].id
        assert len(slides) == 1
        assert slides[0].active is True


@pytest.mark.asyncio
async def test_seeding_keeps_cached_content(config: SiteSyncConfig) -> None:
    cache = MemoryCache({"content": json.dumps({"hero-title": "Mine"}), "heroSlides": "[]"})
    async with _offline_engine(config, cache) as engine:
        assert engine.get_content().hero_title == "Mine"
        assert engine.get_content().website_name == ""
        assert engine.get_footer_content().company_name
        assert len(engine.categories.read()) == 1
        # An empty list is data too: every slide was deleted on purpose.
        assert engine.slides.read() == []


@pytest.mark.asyncio
@pytest.mark.parametrize("content_entry", [None, "{}", "{corrupt"])
async def test_seeding_never_overwrites_cached_records(config: SiteSyncConfig, content_entry: str | None) -> None:
    items = {"categories": json.dumps([{"id": "42", "name": "Customer data"}])}
    if content_entry is not None:
        items["content"] = content_entry
    async with _offline_engine(config, MemoryCache(items)) as engine:
        assert [(c.id, c.name) for c in engine.categories.read()] == [("42", "Customer data")]
        assert engine.get_content().hero_title
        assert len(engine.products.read()) == 1


@pytest.mark.asyncio
async def test_online_start_pushes_seed_to_empty_remote(config: SiteSyncConfig, remote: FakeRemoteStore) -> None:
    async with SyncEngine(config, cache=MemoryCache(), connector=_connector(remote)) as engine:
        assert engine.state is ConnectionState.ONLINE
        assert remote.documents["websiteData/connectionTest"]["test"] is True
        assert len(remote.calls_for("commit")) == 1

        aggregate = remote.documents[AGGREGATE]
        assert set(aggregate) == {"content", "footerContent", "categories", "products", "slides"}
        assert remote.documents["websiteData/content"]["hero-title"]
        category_id = engine.categories.read()[0].id
        assert f"websiteData/categories/items/{category_id}" in remote.documents

        # The pull after the push reads the seed back.
        assert engine.get_content().hero_title == remote.documents["websiteData/content"]["hero-title"]
        assert [c.id for c in engine.categories.read()] == [category_id]
        assert remote.subscriptions and remote.subscriptions[0].path == AGGREGATE


@pytest.mark.asyncio
async def test_online_start_pulls_existing_remote_data_instead_of_pushing_seed(
    config: SiteSyncConfig, remote: FakeRemoteStore
) -> None:
    remote.documents.update(
        {
            AGGREGATE: {"content": {"hero-title": "Remote hero"}},
            "websiteData/content": {"hero-title": "Remote hero"},
            "websiteData/footer": {"companyName": "Remote Co"},
            "websiteData/categories/items/100": {"name": "Remote category"},
        }
    )

    async with SyncEngine(config, cache=MemoryCache(), connector=_connector(remote)) as engine:
        assert remote.calls_for("commit") == []
        assert engine.get_content().hero_title == "Remote hero"
        assert engine.get_footer_content().company_name == "Remote Co"
        categories = engine.categories.read()
        assert [(c.id, c.name) for c in categories] == [("100", "Remote category")]
        # Remote pull replaces wholesale: the seeded product is gone.
        assert engine.products.read() == []


@pytest.mark.asyncio
async def test_probe_failure_falls_back_to_offline(config: SiteSyncConfig, remote: FakeRemoteStore) -> None:
    remote.fail_ops = {"set"}
    async with SyncEngine(config, cache=MemoryCache(), connector=_connector(remote)) as engine:
        assert engine.state is ConnectionState.OFFLINE
        assert remote.closed is True
        assert remote.subscriptions == []
        assert engine.categories.read()


@pytest.mark.asyncio
async def test_connect_timeout_falls_back_to_offline(remote: FakeRemoteStore) -> None:
    async def _slow() -> FakeRemoteStore:
        await asyncio.sleep(1.0)
        return remote

    config = SiteSyncConfig(project_id="demo-project", connect_timeout=0.05)
    async with SyncEngine(config, cache=MemoryCache(), connector=_slow) as engine:
        assert engine.state is ConnectionState.OFFLINE


@pytest.mark.asyncio
async def test_remote_disabled_never_calls_connector() -> None:
    called = False

    async def _connect() -> FakeRemoteStore:
        nonlocal called
        called = True
        return FakeRemoteStore()

    config = SiteSyncConfig(project_id="demo-project", remote_enabled=False)
    async with SyncEngine(config, cache=MemoryCache(), connector=_connect) as engine:
        assert engine.state is ConnectionState.OFFLINE
    assert called is False


@pytest.mark.asyncio
async def test_start_runs_bootstrap_once(config: SiteSyncConfig, remote: FakeRemoteStore) -> None:
    connects = 0

    async def _connect() -> FakeRemoteStore:
        nonlocal connects
        connects += 1
        return remote

    engine = SyncEngine(config, cache=MemoryCache(), connector=_connect)
    assert engine.state is ConnectionState.UNINITIALIZED
    states = await asyncio.gather(engine.start(), engine.start())
    assert states == [ConnectionState.ONLINE, ConnectionState.ONLINE]
    assert await engine.start() is ConnectionState.ONLINE
    assert connects == 1
    await engine.close()


@pytest.mark.asyncio
async def test_reconnect_after_offline(config: SiteSyncConfig, remote: FakeRemoteStore) -> None:
    attempts = 0

    async def _flaky() -> FakeRemoteStore:
        nonlocal attempts
        attempts += 1
        if attempts == 1:
            raise RemoteUnavailableError("not yet")
        return remote

    async with SyncEngine(config, cache=MemoryCache(), connector=_flaky) as engine:
        assert engine.state is ConnectionState.OFFLINE
        category = await engine.categories.create({"name": "Offline only"})
        assert f"websiteData/categories/items/{category.id}" not in remote.documents

        assert await engine.reconnect() is ConnectionState.ONLINE
        # Seeded while offline, pushed once on the way online.
        assert len(remote.calls_for("commit")) == 1
        assert remote.subscriptions
        assert await engine.reconnect() is ConnectionState.ONLINE
        assert attempts == 2


@pytest.mark.asyncio
async def test_close_cancels_subscription_and_closes_remote(config: SiteSyncConfig, remote: FakeRemoteStore) -> None:
    async with SyncEngine(config, cache=MemoryCache(), connector=_connector(remote)):
        pass
    assert remote.subscriptions[0].active is False
    assert remote.closed is True


# ------------------------------------------------------------------
# Record collections
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_on_empty_categories(bare_config: SiteSyncConfig) -> None:
    async with _offline_engine(bare_config) as engine:
        assert engine.categories.read() == []
        created = await engine.categories.create({"name": "X"})

        categories = engine.categories.read()
        assert len(categories) == 1
        assert isinstance(categories[0].id, str)
        assert categories[0].id
        assert categories[0].name == "X"
        assert created.to_wire() == categories[0].to_wire()


@pytest.mark.asyncio
async def test_create_read_delete_round_trip(bare_config: SiteSyncConfig) -> None:
    async with _offline_engine(bare_config) as engine:
        data = {
            "categoryId": "cat-1",
            "name": "Centrifuge",
            "description": "Benchtop",
            "specs": "6000 rpm",
            "price": "1200",
            "image": "https://example.com/c.png",
        }
        created = await engine.products.create(data)

        stored = engine.products.get(created.id)
        assert stored is not None
        wire = stored.to_wire()
        assert wire.pop("id") == created.id
        assert wire == data

        assert await engine.products.delete(created.id) is True
        assert engine.products.get(created.id) is None
        assert engine.products.read() == []


@pytest.mark.asyncio
async def test_update_is_idempotent(bare_config: SiteSyncConfig) -> None:
    async with _offline_engine(bare_config) as engine:
        slide = await engine.slides.create({"title": "Hello", "active": True})

        await engine.slides.update(slide.id, {"active": False})
        once = engine.cache.get_item("heroSlides")
        await engine.slides.update(slide.id, {"active": False})

        assert engine.cache.get_item("heroSlides") == once
        assert engine.slides.read()[0].active is False
        assert engine.slides.read()[0].title == "Hello"


@pytest.mark.asyncio
async def test_update_unknown_id_is_silent_no_op(bare_config: SiteSyncConfig, remote: FakeRemoteStore) -> None:
    async with SyncEngine(bare_config, cache=MemoryCache(), connector=_connector(remote)) as engine:
        await engine.categories.create({"name": "Keep"})
        before = engine.categories.read()
        remote.calls.clear()

        assert await engine.categories.update("missing", {"name": "Nope"}) is None

        assert engine.categories.read() == before
        assert remote.calls_for("merge") == []


@pytest.mark.asyncio
async def test_delete_unknown_id_leaves_collection_unchanged(bare_config: SiteSyncConfig) -> None:
    async with _offline_engine(bare_config) as engine:
        await engine.categories.create({"name": "A"})
        await engine.categories.create({"name": "B"})
        before = engine.categories.read()

        assert await engine.categories.delete("does-not-exist") is False

        after = engine.categories.read()
        assert len(after) == len(before)
        assert after == before


@pytest.mark.asyncio
async def test_record_ids_are_immutable_and_unknown_fields_rejected(bare_config: SiteSyncConfig) -> None:
    async with _offline_engine(bare_config) as engine:
        category = await engine.categories.create({"name": "A"})
        updated = await engine.categories.update(category.id, {"id": "other", "name": "B"})
        assert updated is not None
        assert updated.id == category.id
        assert updated.name == "B"

        with pytest.raises(SiteSyncValidationError):
            await engine.categories.update(category.id, {"colour": "red"})
        with pytest.raises(SiteSyncValidationError):
            await engine.slides.create({"active": "sometimes"})


@pytest.mark.asyncio
async def test_same_millisecond_creates_get_distinct_ids(bare_config: SiteSyncConfig) -> None:
    engine = SyncEngine(
        bare_config,
        cache=MemoryCache(),
        connector=_unavailable,
        id_generator=IdGenerator(clock=lambda: 1_700_000_000_000),
    )
    async with engine:
        first = await engine.products.create({"name": "one"})
        second = await engine.products.create({"name": "two"})
    assert first.id == "1700000000000"
    assert second.id == "1700000000001"


@pytest.mark.asyncio
async def test_online_create_update_delete_reach_remote_and_aggregate(
    bare_config: SiteSyncConfig, remote: FakeRemoteStore
) -> None:
    async with SyncEngine(bare_config, cache=MemoryCache(), connector=_connector(remote)) as engine:
        category = await engine.categories.create({"name": "Glassware", "image": "g.png"})
        path = f"websiteData/categories/items/{category.id}"
        assert remote.documents[path] == {"name": "Glassware", "description": "", "image": "g.png"}
        assert remote.documents[AGGREGATE]["categories"] == [category.to_wire()]

        remote.calls.clear()
        await engine.categories.update(category.id, {"description": "Beakers"})
        assert remote.calls[0] == ("merge", path)
        assert remote.documents[path]["description"] == "Beakers"
        assert remote.documents[path]["name"] == "Glassware"

        await engine.categories.delete(category.id)
        assert path not in remote.documents
        assert remote.documents[AGGREGATE]["categories"] == []


@pytest.mark.asyncio
async def test_stale_snapshot_during_write_does_not_erase_it_from_aggregate(
    bare_config: SiteSyncConfig, remote: FakeRemoteStore
) -> None:
    remote.documents[AGGREGATE] = {"categories": []}
    async with SyncEngine(bare_config, cache=MemoryCache(), connector=_connector(remote)) as engine:
        remote.write_delay = 0.01
        task = asyncio.create_task(engine.categories.create({"name": "New"}))
        await asyncio.sleep(0)

        # The watch reports the old aggregate while the item write is in flight.
        stale = DocumentSnapshot(path=AGGREGATE, exists=True, fields={"categories": []}, update_time="stale")
        remote.subscriptions[0].callback(stale)
        assert engine.categories.read() == []

        created = await task

        assert f"websiteData/categories/items/{created.id}" in remote.documents
        assert remote.documents[AGGREGATE]["categories"] == [created.to_wire()]
        assert [c.id for c in engine.categories.read()] == [created.id]


@pytest.mark.asyncio
async def test_remote_failure_while_online_keeps_local_write(
    bare_config: SiteSyncConfig, remote: FakeRemoteStore
) -> None:
    async with SyncEngine(bare_config, cache=MemoryCache(), connector=_connector(remote)) as engine:
        remote.fail_ops = {"set", "merge", "delete"}

        created = await engine.categories.create({"name": "Local only"})
        assert engine.categories.get(created.id) is not None
        assert f"websiteData/categories/items/{created.id}" not in remote.documents

        merged = await engine.update_multiple_content({ContentKey.HERO_TITLE: "Offline edit"})
        assert merged.hero_title == "Offline edit"
        assert engine.state is ConnectionState.ONLINE


@pytest.mark.asyncio
async def test_concurrent_updates_lose_the_earlier_write(bare_config: SiteSyncConfig, remote: FakeRemoteStore) -> None:
    async with SyncEngine(bare_config, cache=MemoryCache(), connector=_connector(remote)) as engine:
        slide = await engine.slides.create({"title": "Base", "subtitle": "Base"})
        base = engine.slides.get(slide.id)
        assert base is not None

        # Both edits start from the same read; each sends the whole record.
        edit_a = base.model_copy(update={"title": "A"})
        edit_b = base.model_copy(update={"subtitle": "B"})
        remote.write_delay = 0.01
        await asyncio.gather(
            engine.slides.update(slide.id, edit_a),
            engine.slides.update(slide.id, edit_b),
        )

        final = engine.slides.get(slide.id)
        assert final is not None
        assert final.subtitle == "B"
        assert final.title == "Base"


# ------------------------------------------------------------------
# Content and footer maps
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_content_updates_merge(bare_config: SiteSyncConfig) -> None:
    async with _offline_engine(bare_config) as engine:
        await engine.update_multiple_content({ContentKey.HERO_TITLE: "a"})
        await engine.update_multiple_content({"hero-subtitle": "b"})

        assert engine.content.read_raw() == {"hero-title": "a", "hero-subtitle": "b"}
        content = engine.get_content()
        assert content.hero_title == "a"
        assert content.hero_subtitle == "b"


@pytest.mark.asyncio
async def test_content_merge_is_sent_to_remote(bare_config: SiteSyncConfig, remote: FakeRemoteStore) -> None:
    async with SyncEngine(bare_config, cache=MemoryCache(), connector=_connector(remote)) as engine:
        await engine.update_footer_content({FooterField.EMAIL: "sales@example.com"})
        await engine.update_footer_content({"phone": "123"})

        assert remote.documents["websiteData/footer"] == {"email": "sales@example.com", "phone": "123"}
        assert remote.documents[AGGREGATE]["footerContent"]["phone"] == "123"


@pytest.mark.asyncio
async def test_unknown_content_key_is_rejected_before_writing(bare_config: SiteSyncConfig) -> None:
    async with _offline_engine(bare_config) as engine:
        await engine.update_multiple_content({"hero-title": "kept"})
        with pytest.raises(SiteSyncValidationError):
            await engine.update_multiple_content({"hero-titel": "typo", "hero-subtitle": "x"})
        with pytest.raises(SiteSyncValidationError):
            await engine.update_footer_content({"email": 42})
        assert engine.content.read_raw() == {"hero-title": "kept"}


@pytest.mark.asyncio
async def test_unknown_cached_content_keys_survive_but_are_not_surfaced(bare_config: SiteSyncConfig) -> None:
    cache = MemoryCache({"content": json.dumps({"legacy-key": "old", "hero-title": "t"})})
    async with _offline_engine(bare_config, cache) as engine:
        await engine.update_multiple_content({"intro-title": "i"})
        assert engine.content.read_raw()["legacy-key"] == "old"
        assert "legacy-key" not in engine.get_content().to_wire()


# ------------------------------------------------------------------
# Cache robustness and offline behaviour
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_malformed_cache_reads_as_empty_defaults(bare_config: SiteSyncConfig) -> None:
    cache = MemoryCache(
        {
            "content": "{not json",
            "footerContent": "[1, 2]",
            "categories": '{"id": "1"}',
            "products": '[{"id": "1", "name": "ok"}, "garbage", {"id": "2", "name": ["bad"]}]',
            "heroSlides": "",
        }
    )
    async with _offline_engine(bare_config, cache) as engine:
        assert engine.get_content() == SiteContent()
        assert engine.get_footer_content().to_wire() == {f.value: "" for f in FooterField}
        assert engine.categories.read() == []
        assert [p.id for p in engine.products.read()] == ["1"]
        assert engine.slides.read() == []


@pytest.mark.asyncio
async def test_offline_operations_complete_without_remote(bare_config: SiteSyncConfig) -> None:
    async with _offline_engine(bare_config) as engine:
        product = await engine.products.create({"name": "P", "categoryId": "nowhere"})
        assert await engine.products.update(product.id, {"price": 10}) is not None
        assert engine.products.read()[0].price == "10"
        assert await engine.products.read_authoritative() == engine.products.read()
        assert await engine.content.read_authoritative() == engine.get_content()
        assert await engine.products.delete(product.id) is True
        assert engine.products.read() == []


@pytest.mark.asyncio
async def test_read_authoritative_failure_falls_back_to_cache(
    bare_config: SiteSyncConfig, remote: FakeRemoteStore
) -> None:
    async with SyncEngine(bare_config, cache=MemoryCache(), connector=_connector(remote)) as engine:
        await engine.categories.create({"name": "Cached"})
        remote.fail_ops = {"list", "get"}
        assert [c.name for c in await engine.categories.read_authoritative()] == ["Cached"]
        assert await engine.content.read_authoritative() == engine.get_content()


# ------------------------------------------------------------------
# Live subscription
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_subscription_overwrites_cache_from_other_session(
    bare_config: SiteSyncConfig, remote: FakeRemoteStore
) -> None:
    changes: list[CollectionName] = []
    engine = SyncEngine(bare_config, cache=MemoryCache(), connector=_connector(remote), on_change=changes.append)
    async with engine:
        await engine.categories.create({"name": "Mine"})
        changes.clear()

        # Another session mirrors its own view of the categories.
        await remote.set_document(
            AGGREGATE,
            {"categories": [{"id": "9", "name": "Theirs"}], "slides": [{"id": "5", "title": "S"}]},
            merge=True,
        )

        assert [(c.id, c.name) for c in engine.categories.read()] == [("9", "Theirs")]
        assert [s.title for s in engine.slides.read()] == ["S"]
        assert json.loads(engine.cache.get_item("heroSlides") or "[]")[0]["id"] == "5"
        assert CollectionName.CATEGORIES in changes
        assert CollectionName.SLIDES in changes


@pytest.mark.asyncio
async def test_subscription_ignores_scalars_and_unknown_fields(
    bare_config: SiteSyncConfig, remote: FakeRemoteStore
) -> None:
    async with SyncEngine(bare_config, cache=MemoryCache(), connector=_connector(remote)) as engine:
        await remote.set_document(
            AGGREGATE,
            {"content": "not an object", "misc": {"a": "b"}, "footerContent": {"email": "x@example.com"}},
        )
        assert engine.content.read_raw() == {}
        assert engine.cache.get_item("misc") is None
        assert engine.get_footer_content().email == "x@example.com"


@pytest.mark.asyncio
async def test_on_change_callback_errors_are_swallowed(bare_config: SiteSyncConfig) -> None:
    def _boom(_collection: CollectionName) -> None:
        raise RuntimeError("projector crashed")

    engine = SyncEngine(bare_config, cache=MemoryCache(), connector=_unavailable, on_change=_boom)
    async with engine:
        created = await engine.categories.create({"name": "Still stored"})
        assert engine.categories.get(created.id) is not None
