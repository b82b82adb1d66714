"""sitesync - Local-first sync engine for a marketing site's content."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("sitesync")
except PackageNotFoundError:
    __version__ = "0+local"
from sitesync._collection import CollectionName, FieldMapCollection, RecordCollection
from sitesync._ids import IdGenerator
from sitesync.cache import JsonFileCache, LocalCache, MemoryCache
from sitesync.config import SiteSyncConfig
from sitesync.engine import ConnectionState, SiteSnapshot, SyncEngine
from sitesync.exceptions import (
    RemoteStoreError,
    RemoteUnavailableError,
    SiteSyncConfigError,
    SiteSyncError,
    SiteSyncValidationError,
)
from sitesync.models import (
    Category,
    ContentKey,
    FooterContent,
    FooterField,
    Product,
    SiteContent,
    Slide,
    category_name_for,
)
from sitesync.remote import DocumentSnapshot, RemoteStore, Subscription, Write, connect_remote

__all__ = [
    "__version__",
    "Category",
    "CollectionName",
    "ConnectionState",
    "ContentKey",
    "DocumentSnapshot",
    "FieldMapCollection",
    "FooterContent",
    "FooterField",
    "IdGenerator",
    "JsonFileCache",
    "LocalCache",
    "MemoryCache",
    "Product",
    "RecordCollection",
    "RemoteStore",
    "RemoteStoreError",
    "RemoteUnavailableError",
    "SiteContent",
    "SiteSnapshot",
    "SiteSyncConfig",
    "SiteSyncConfigError",
    "SiteSyncError",
    "SiteSyncValidationError",
    "Slide",
    "Subscription",
    "SyncEngine",
    "Write",
    "category_name_for",
    "connect_remote",
]
