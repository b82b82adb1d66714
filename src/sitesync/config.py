"""Engine configuration for sitesync."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from sitesync._constants import DEFAULT_DATABASE, FIRESTORE_BASE_URL, ROOT_COLLECTION
from sitesync.exceptions import SiteSyncConfigError

DEFAULT_CACHE_PATH = "~/.sitesync/cache.json"


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise SiteSyncConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class SiteSyncConfig:
    """Engine configuration.

    Parameters
    ----------
    project_id : str or None
        Firestore project id. ``None`` keeps the engine offline.
    api_key : str or None
        Web API key appended as ``key=`` to every REST call.
    auth_token : str or None
        Optional OAuth bearer token for the REST API.
    database : str
        Firestore database id.
    base_url : str
        Firestore REST base URL.
    root_collection : str
        Root collection that holds every site document.
    cache_path : str
        Location of the persistent JSON cache file. ``~`` is expanded.
    connect_timeout : float
        Seconds allowed for connecting and probing the remote store at
        startup before falling back to offline mode.
    request_timeout : float
        Total timeout in seconds for each remote HTTP call.
    watch_interval : float
        Poll interval in seconds for the live aggregate-document watch.
    remote_enabled : bool
        Set to ``False`` to never contact the remote store.
    mirror_aggregate : bool
        Mirror each remote mutation into the aggregate ``allData``
        document so other sessions' subscriptions pick it up.
    seed_defaults : bool
        Seed the default dataset when the cache has no content map.
    """

    project_id: str | None = None
    api_key: str | None = None
    auth_token: str | None = None
    database: str = DEFAULT_DATABASE
    base_url: str = FIRESTORE_BASE_URL
    root_collection: str = ROOT_COLLECTION
    cache_path: str = DEFAULT_CACHE_PATH
    connect_timeout: float = 5.0
    request_timeout: float = 10.0
    watch_interval: float = 2.0
    remote_enabled: bool = True
    mirror_aggregate: bool = True
    seed_defaults: bool = True

    def __post_init__(self) -> None:
        for name in ("connect_timeout", "request_timeout", "watch_interval"):
            value = getattr(self, name)
            if value <= 0:
                raise SiteSyncConfigError(f"{name} must be positive, got {value}")
        if not self.root_collection.strip("/"):
            raise SiteSyncConfigError("root_collection must be non-empty")

    @property
    def resolved_cache_path(self) -> Path:
        return Path(self.cache_path).expanduser()

    @property
    def has_remote(self) -> bool:
        """Whether enough is configured to try the remote store."""
        return self.remote_enabled and bool(self.project_id)

    @classmethod
    def from_env(cls, **overrides: Any) -> SiteSyncConfig:
        """Create configuration from environment variables.

        Reads ``SITESYNC_PROJECT_ID``, ``SITESYNC_API_KEY`` and the other
        ``SITESYNC_*`` variables. Explicit keyword arguments override
        environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        SiteSyncConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "SITESYNC_PROJECT_ID": "project_id",
            "SITESYNC_API_KEY": "api_key",
            "SITESYNC_AUTH_TOKEN": "auth_token",
            "SITESYNC_DATABASE": "database",
            "SITESYNC_BASE_URL": "base_url",
            "SITESYNC_ROOT_COLLECTION": "root_collection",
            "SITESYNC_CACHE_PATH": "cache_path",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_FLOAT_MAP = {
            "SITESYNC_CONNECT_TIMEOUT": "connect_timeout",
            "SITESYNC_REQUEST_TIMEOUT": "request_timeout",
            "SITESYNC_WATCH_INTERVAL": "watch_interval",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        _ENV_BOOL_MAP = {
            "SITESYNC_REMOTE_ENABLED": ("remote_enabled", True),
            "SITESYNC_MIRROR_AGGREGATE": ("mirror_aggregate", True),
            "SITESYNC_SEED_DEFAULTS": ("seed_defaults", True),
        }
        for env_key, (field_name, default) in _ENV_BOOL_MAP.items():
            if field_name not in overrides:
                config_kwargs[field_name] = _env_bool(env.get(env_key), default)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
