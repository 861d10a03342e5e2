"""HTTP record store client for json-server style backends."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from tasktracker.adapters.store.base import Record, RecordStore
from tasktracker.core.logging_safety import loggable_fields, safe_log_identifier
from tasktracker.errors import DataAccessError, RecordConflictError, RecordNotFoundError

logger = logging.getLogger(__name__)


class HttpRecordStore(RecordStore):
    """Talks to ``/<collection>`` and ``/<collection>/<id>`` over HTTP.

    The client is created on demand unless one is injected; injected clients
    are left open on ``aclose``. No request is retried.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def list(self, collection: str, **filters: str) -> list[Record]:
        payload = await self._request("GET", f"/{collection}", params=filters or None)
        if not isinstance(payload, list):
            raise DataAccessError(
                "Record store returned a non-list payload",
                details={"method": "GET", "path": f"/{collection}"},
            )
        return payload

    async def get(self, collection: str, record_id: str) -> Record:
        return await self._request("GET", f"/{collection}/{record_id}")

    async def create(self, collection: str, body: Mapping[str, Any]) -> Record:
        logger.debug("store.create collection=%s fields=%s", collection, loggable_fields(body))
        return await self._request("POST", f"/{collection}", json=dict(body))

    async def update(self, collection: str, record_id: str, patch: Mapping[str, Any]) -> Record:
        logger.debug(
            "store.update collection=%s record_id=%s fields=%s",
            collection,
            safe_log_identifier(record_id, prefix="rid"),
            loggable_fields(patch),
        )
        return await self._request("PATCH", f"/{collection}/{record_id}", json=dict(patch))

    async def delete(self, collection: str, record_id: str) -> bool:
        await self._request("DELETE", f"/{collection}/{record_id}")
        return True

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("store.unreachable method=%s path=%s error=%s", method, path, type(exc).__name__)
            raise DataAccessError(
                "Record store request failed",
                details={"method": method, "path": path},
            ) from exc

        details = {"method": method, "path": path, "status": response.status_code}
        if response.status_code == 404:
            raise RecordNotFoundError("Record not found", details=details)
        if response.status_code == 409:
            raise RecordConflictError("Record already exists", details=details)
        if not response.is_success:
            logger.warning("store.rejected method=%s path=%s status=%s", method, path, response.status_code)
            raise DataAccessError("Record store returned an error status", details=details)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise DataAccessError("Record store returned invalid JSON", details=details) from exc


__all__ = ["HttpRecordStore"]
