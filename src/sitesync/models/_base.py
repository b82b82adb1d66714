"""Base models for cached and remote site data.

Every persisted model inherits from :class:`SiteBaseModel` which
provides:

* ``alias_generator=to_camel`` so the camelCase keys used in the cache
  and the remote store map to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``None`` values so the
  field default is used instead.
* :meth:`SiteBaseModel.to_wire`, the dict that is written to the cache
  and sent to the remote store.

Records (categories, products, slides) inherit from :class:`SiteRecord`
which adds the string ``id``. Field maps (content, footer) inherit from
:class:`FieldMapModel`, a closed record whose keys are enumerated by a
``StrEnum``.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from sitesync.exceptions import SiteSyncValidationError


class SiteBaseModel(BaseModel):
    """Base for every model persisted by sitesync."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if value is not None}

    def to_wire(self) -> dict[str, Any]:
        """Dump with wire (alias) keys, ready for JSON or the remote store."""
        return self.model_dump(by_alias=True, mode="json")


class SiteRecord(SiteBaseModel):
    """A record in one of the list collections."""

    id: str = ""

    @classmethod
    def wire_keys(cls) -> dict[str, str]:
        """Map of accepted input keys (field name or alias) to wire keys."""
        keys: dict[str, str] = {}
        for name, info in cls.model_fields.items():
            alias = info.alias or name
            keys[name] = alias
            keys[alias] = alias
        return keys

    @classmethod
    def normalize_patch(cls, partial: Mapping[str, Any] | SiteRecord) -> dict[str, Any]:
        """Translate a partial update to wire keys.

        Accepts snake_case field names or camelCase wire keys; ``id`` is
        dropped because record ids are immutable. Unknown keys are
        rejected.
        """
        if isinstance(partial, SiteRecord):
            items = partial.model_dump(by_alias=True, mode="json", exclude_unset=True).items()
        else:
            items = partial.items()
        keys = cls.wire_keys()
        patch: dict[str, Any] = {}
        for key, value in items:
            wire_key = keys.get(key)
            if wire_key is None:
                raise SiteSyncValidationError(f"{cls.__name__} has no field {key!r}")
            if wire_key == "id":
                continue
            patch[wire_key] = value
        return patch


class FieldMapModel(SiteBaseModel):
    """A closed string-to-string record (content map, footer fields)."""

    KEYS: ClassVar[type[StrEnum]]
    """Enumeration of the wire keys this map carries."""

    @classmethod
    def validate_updates(cls, updates: Mapping[str, Any]) -> dict[str, str]:
        """Check *updates* against the closed key set.

        Keys may be enum members or their string values. Values must be
        strings. Returns the updates keyed by wire name.
        """
        validated: dict[str, str] = {}
        for key, value in updates.items():
            try:
                wire_key = cls.KEYS(key).value
            except ValueError as exc:
                raise SiteSyncValidationError(f"unknown {cls.__name__} key: {key!r}") from exc
            if not isinstance(value, str):
                raise SiteSyncValidationError(f"{cls.__name__}[{wire_key!r}] must be a string, got {type(value).__name__}")
            validated[wire_key] = value
        return validated

    def get(self, key: StrEnum | str, default: str = "") -> str:
        """Look up a value by wire key."""
        wire_key = self.KEYS(key).value
        for name, info in type(self).model_fields.items():
            if (info.alias or name) == wire_key:
                value: str = getattr(self, name)
                return value
        return default

    def missing_keys(self) -> list[str]:
        """Wire keys whose value is empty."""
        wire = self.to_wire()
        return [key.value for key in self.KEYS if not wire.get(key.value)]
