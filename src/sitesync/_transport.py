"""Firestore REST transport over aiohttp."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

import aiohttp

from sitesync._constants import LIST_PAGE_SIZE, USER_AGENT
from sitesync._firestore import decode_fields, document_id, encode_fields, quote_field_path
from sitesync._redact import redact_for_log
from sitesync.config import SiteSyncConfig
from sitesync.exceptions import RemoteStoreError
from sitesync.remote import DocumentSnapshot, SnapshotCallback, Write

_logger = logging.getLogger(__name__)

_UNSEEN = object()


class PollingSubscription:
    """Document watch driven by an asyncio polling task."""

    def __init__(self, task: asyncio.Task[None]) -> None:
        self._task = task

    @property
    def active(self) -> bool:
        return not self._task.done()

    def cancel(self) -> None:
        self._task.cancel()


class FirestoreRestStore:
    """Remote store backed by the Firestore REST v1 API."""

    def __init__(
        self,
        config: SiteSyncConfig,
        http_session: aiohttp.ClientSession,
        *,
        owns_session: bool = False,
    ) -> None:
        self._config = config
        self._http = http_session
        self._owns_session = owns_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)
        self._database_name = f"projects/{config.project_id}/databases/{config.database}"
        self._documents_name = f"{self._database_name}/documents"
        self._subscriptions: list[PollingSubscription] = []

    # ------------------------------------------------------------------
    # Request plumbing
    # ------------------------------------------------------------------

    def _document_name(self, path: str) -> str:
        return f"{self._documents_name}/{path.strip('/')}"

    def _url(self, resource: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{resource}"

    def _headers(self) -> dict[str, str]:
        headers = {
            "accept": "application/json",
            "content-type": "application/json; charset=UTF-8",
            "user-agent": USER_AGENT,
        }
        if self._config.auth_token:
            headers["authorization"] = f"Bearer {self._config.auth_token}"
        return headers

    def _params(self, extra: Sequence[tuple[str, str]] = ()) -> list[tuple[str, str]]:
        params = list(extra)
        if self._config.api_key:
            params.append(("key", self._config.api_key))
        return params

    async def _request(
        self,
        method: str,
        resource: str,
        *,
        path: str,
        params: Sequence[tuple[str, str]] = (),
        body: Mapping[str, Any] | None = None,
        allow_not_found: bool = False,
    ) -> dict[str, Any] | None:
        """Send one REST call and return the decoded JSON object.

        Returns ``None`` for a 404 when *allow_not_found* is set.
        """
        url = self._url(resource)
        data = json.dumps(body, separators=(",", ":")) if body is not None else None
        _logger.debug("%s %s body=%s", method, url, redact_for_log(body))

        try:
            async with self._http.request(
                method,
                url,
                params=self._params(params),
                data=data,
                headers=self._headers(),
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                status = resp.status
        except aiohttp.ClientError as exc:
            raise RemoteStoreError(f"{method} {path} failed: {exc}", path=path) from exc
        except TimeoutError as exc:
            raise RemoteStoreError(f"{method} {path} timed out", path=path) from exc

        if status == 404 and allow_not_found:
            return None
        if status < 200 or status >= 300:
            raise RemoteStoreError(
                f"HTTP {status} from {method} {path}: {_error_message(text)}",
                status_code=status,
                path=path,
            )
        if not text.strip():
            return {}
        try:
            result = json.loads(text)
        except json.JSONDecodeError as exc:
            raise RemoteStoreError(f"Invalid JSON from {method} {path}: {text[:200]}", path=path) from exc
        if not isinstance(result, dict):
            raise RemoteStoreError(f"Unexpected response shape from {method} {path}", path=path)
        return result

    # ------------------------------------------------------------------
    # RemoteStore operations
    # ------------------------------------------------------------------

    async def get_document(self, path: str) -> DocumentSnapshot:
        doc = await self._request("GET", self._document_name(path), path=path, allow_not_found=True)
        if doc is None:
            return DocumentSnapshot(path=path, exists=False)
        try:
            fields = decode_fields(doc.get("fields") or {})
        except ValueError as exc:
            raise RemoteStoreError(f"Undecodable document {path}: {exc}", path=path) from exc
        return DocumentSnapshot(path=path, exists=True, fields=fields, update_time=doc.get("updateTime"))

    async def set_document(self, path: str, value: Mapping[str, Any], *, merge: bool = False) -> None:
        params: list[tuple[str, str]] = []
        if merge:
            if not value:
                return
            params = [("updateMask.fieldPaths", quote_field_path(str(key))) for key in value]
        await self._request(
            "PATCH",
            self._document_name(path),
            path=path,
            params=params,
            body={"fields": encode_fields(value)},
        )

    async def delete_document(self, path: str) -> None:
        await self._request("DELETE", self._document_name(path), path=path, allow_not_found=True)

    async def list_collection_items(self, path: str) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        page_token: str | None = None
        while True:
            params = [("pageSize", str(LIST_PAGE_SIZE))]
            if page_token:
                params.append(("pageToken", page_token))
            page = await self._request(
                "GET",
                self._document_name(path),
                path=path,
                params=params,
                allow_not_found=True,
            )
            if not page:
                break
            for doc in page.get("documents") or []:
                try:
                    fields = decode_fields(doc.get("fields") or {})
                except ValueError as exc:
                    raise RemoteStoreError(f"Undecodable item under {path}: {exc}", path=path) from exc
                items.append({"id": document_id(str(doc.get("name", ""))), **fields})
            page_token = page.get("nextPageToken")
            if not page_token:
                break
        return items

    async def commit(self, writes: Sequence[Write]) -> None:
        if not writes:
            return
        body = {"writes": [self._encode_write(write) for write in writes]}
        await self._request("POST", f"{self._documents_name}:commit", path=":commit", body=body)

    def _encode_write(self, write: Write) -> dict[str, Any]:
        name = self._document_name(write.path)
        if write.value is None:
            return {"delete": name}
        encoded: dict[str, Any] = {"update": {"name": name, "fields": encode_fields(write.value)}}
        if write.merge:
            encoded["updateMask"] = {"fieldPaths": [quote_field_path(str(key)) for key in write.value]}
        return encoded

    def subscribe(self, path: str, on_change: SnapshotCallback) -> PollingSubscription:
        """Watch *path*, calling *on_change* on the first read and on every change.

        Changes are detected by the document's ``updateTime``. Failed polls
        are logged and retried on the next interval.
        """
        task = asyncio.get_running_loop().create_task(
            self._watch(path, on_change, self._config.watch_interval),
            name=f"sitesync-watch:{path}",
        )
        subscription = PollingSubscription(task)
        self._subscriptions.append(subscription)
        return subscription

    async def _watch(self, path: str, on_change: SnapshotCallback, interval: float) -> None:
        last_seen: object = _UNSEEN
        while True:
            try:
                snapshot = await self.get_document(path)
            except Exception:
                _logger.debug("Watch poll failed path=%s", path, exc_info=True)
            else:
                marker = snapshot.update_time if snapshot.exists else None
                if marker != last_seen:
                    last_seen = marker
                    try:
                        on_change(snapshot)
                    except Exception:
                        _logger.debug("Watch callback failed path=%s", path, exc_info=True)
            await asyncio.sleep(interval)

    async def close(self) -> None:
        for subscription in self._subscriptions:
            subscription.cancel()
        self._subscriptions.clear()
        if self._owns_session and not self._http.closed:
            await self._http.close()


def _error_message(text: str) -> str:
    """Pull ``error.message`` out of a Google API error body."""
    try:
        body = json.loads(text)
    except json.JSONDecodeError:
        return text[:200]
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return str(error["message"])
    return text[:200]
