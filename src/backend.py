"""Persistence client for the CMS admin API.

Sessions only see the ``PersistenceClient`` protocol. ``HttpBackend`` is the
real implementation over ``httpx.AsyncClient``; every transport or HTTP
failure is raised as a ``TransportError`` so callers have a single failure
type to handle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

log = logging.getLogger(__name__)


class TransportError(Exception):
    """Raised when a persistence call fails (network, HTTP status or bad payload)."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"{self.status}: {self.message}"


@dataclass
class FetchResult:
    """Result of fetching one document. ``item`` is None when not found."""

    item: dict[str, Any] | None = None


@dataclass
class SaveResult:
    """Result of an upsert.

    ``id`` is the (possibly new) server identity; ``success`` is the
    user-facing confirmation flag and is independent of ``id``.
    """

    id: str | None = None
    success: bool = False


@dataclass
class DeleteResult:
    success: bool = False


@dataclass
class BackupResult:
    success: bool = False
    log: list[str] = field(default_factory=list)


class PersistenceClient(Protocol):
    """Async CRUD over the remote store. Failures raise TransportError.

    The configuration and image profile fetches return None when the server
    has no such document.
    """

    async def fetch_item(self, item_id: str) -> FetchResult: ...

    async def list_layouts(self) -> list[dict[str, Any]]: ...

    async def save_layout(self, document: dict[str, Any]) -> SaveResult: ...

    async def delete_item(self, item_id: str) -> DeleteResult: ...

    async def fetch_config(self) -> dict[str, Any] | None: ...

    async def save_config(self, cfg: dict[str, Any]) -> SaveResult: ...

    async def fetch_image_profiles(self) -> dict[str, Any] | None: ...

    async def save_image_profiles(self, profiles: dict[str, Any]) -> SaveResult: ...

    async def create_backup(self, target: str) -> BackupResult: ...


class HttpBackend:
    """PersistenceClient talking JSON to the CMS admin API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Create the client.

        Args:
            base_url: API root, e.g. ``http://localhost:3000/api``
            timeout: Per-request timeout in seconds
            token: Optional bearer token sent with every request
            transport: Optional httpx transport (tests use MockTransport)
        """
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpBackend:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        """Send a request and return the decoded JSON object body."""
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            log.warning(f"{method} {url} failed with HTTP {e.response.status_code}")
            raise TransportError(e.response.reason_phrase or "HTTP error", e.response.status_code) from e
        except httpx.HTTPError as e:
            log.warning(f"{method} {url} failed: {e}")
            raise TransportError(str(e) or type(e).__name__) from e

        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError as e:
            raise TransportError("Invalid JSON in response", response.status_code) from e
        if not isinstance(body, dict):
            raise TransportError("Unexpected response payload", response.status_code)
        return body

    async def fetch_item(self, item_id: str) -> FetchResult:
        try:
            body = await self._request("GET", f"/items/{item_id}")
        except TransportError as e:
            if e.status == 404:
                return FetchResult(item=None)
            raise
        return FetchResult(item=body.get("item") or None)

    async def list_layouts(self) -> list[dict[str, Any]]:
        body = await self._request("GET", "/layouts")
        return list(body.get("items") or [])

    async def save_layout(self, document: dict[str, Any]) -> SaveResult:
        body = await self._request("POST", "/layouts", json=document)
        return _save_result(body)

    async def delete_item(self, item_id: str) -> DeleteResult:
        body = await self._request("DELETE", f"/items/{item_id}")
        return DeleteResult(success=bool(body.get("success")))

    async def fetch_config(self) -> dict[str, Any] | None:
        body = await self._request("GET", "/config")
        return body.get("cfg")

    async def save_config(self, cfg: dict[str, Any]) -> SaveResult:
        body = await self._request("POST", "/config", json=cfg)
        return _save_result(body)

    async def fetch_image_profiles(self) -> dict[str, Any] | None:
        body = await self._request("GET", "/imageprofiles")
        return body.get("imgprofiles")

    async def save_image_profiles(self, profiles: dict[str, Any]) -> SaveResult:
        body = await self._request("POST", "/imageprofiles", json=profiles)
        return _save_result(body)

    async def create_backup(self, target: str) -> BackupResult:
        body = await self._request("POST", "/backup", json={"bucket": target})
        return BackupResult(
            success=bool(body.get("success")),
            log=[str(line) for line in body.get("log") or []],
        )


def _save_result(body: dict[str, Any]) -> SaveResult:
    raw_id = body.get("id")
    return SaveResult(
        id=None if raw_id is None else str(raw_id),
        success=bool(body.get("success")),
    )
