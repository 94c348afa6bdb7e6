"""Service layer – thin async client for the Supabase REST and storage APIs.

Every method performs exactly one HTTP round-trip; nothing is retried,
batched, or cached.  Transport failures surface as ``NetworkError`` and
non-2xx responses as ``BackendError`` carrying the backend's own message.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from slp_admin.config import settings
from slp_admin.exceptions import BackendError, NetworkError

logger = logging.getLogger(__name__)


class SupabaseClient:
    """Rows (PostgREST) and objects (storage) behind one API key."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        bucket: str,
        http: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.bucket = bucket
        self._http = http or httpx.AsyncClient(timeout=settings.request_timeout)
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
        }

    async def aclose(self) -> None:
        await self._http.aclose()

    # ──────────────────────────────────────────────
    # Low-level request helper
    # ──────────────────────────────────────────────
    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        *,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        json: Any = None,
        content: bytes | None = None,
    ) -> httpx.Response:
        try:
            response = await self._http.request(
                method,
                f"{self.base_url}{path}",
                params=params,
                headers={**self._headers, **(headers or {})},
                json=json,
                content=content,
            )
        except httpx.TransportError as exc:
            logger.warning("Supabase %s failed: %s", operation, exc)
            raise NetworkError(operation, exc) from exc

        if response.is_error:
            message = _error_message(response)
            logger.warning(
                "Supabase %s rejected (%s): %s",
                operation, response.status_code, message,
            )
            raise BackendError(message, response.status_code)
        return response

    # ──────────────────────────────────────────────
    # Rows
    # ──────────────────────────────────────────────
    async def select(
        self,
        table: str,
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[dict[str, Any]]:
        """Return every row of *table*, optionally ordered by one column."""
        params = {"select": "*"}
        if order_by:
            params["order"] = f"{order_by}.{'asc' if ascending else 'desc'}"
        response = await self._request(
            "GET", f"/rest/v1/{table}", f"load {table}", params=params,
        )
        return _json(response, f"load {table}") or []

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """Insert a single row and return it as stored."""
        response = await self._request(
            "POST",
            f"/rest/v1/{table}",
            f"insert into {table}",
            headers={"Prefer": "return=representation"},
            json=row,
        )
        created = _json(response, f"insert into {table}")
        if isinstance(created, list):
            return created[0] if created else row
        return created

    async def delete(self, table: str, row_id: int) -> None:
        await self._request(
            "DELETE",
            f"/rest/v1/{table}",
            f"delete from {table}",
            params={"id": f"eq.{row_id}"},
        )

    async def count(self, table: str) -> int:
        """Count rows without transferring them (``Prefer: count=exact``)."""
        response = await self._request(
            "HEAD",
            f"/rest/v1/{table}",
            f"count {table}",
            params={"select": "id"},
            headers={"Prefer": "count=exact"},
        )
        return _parse_content_range(response.headers.get("content-range", ""))

    # ──────────────────────────────────────────────
    # Object storage
    # ──────────────────────────────────────────────
    async def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Store *content* at *path* inside the bucket; never overwrites."""
        await self._request(
            "POST",
            f"/storage/v1/object/{self.bucket}/{quote(path)}",
            "upload file",
            headers={"Content-Type": content_type, "x-upsert": "false"},
            content=content,
        )
        return path

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{quote(path)}"

    async def list_buckets(self) -> list[dict[str, Any]]:
        response = await self._request("GET", "/storage/v1/bucket", "list buckets")
        return _json(response, "list buckets") or []

    async def bucket_exists(self, name: str) -> bool:
        buckets = await self.list_buckets()
        return any(bucket.get("name") == name for bucket in buckets)

    async def create_bucket(
        self,
        name: str,
        public: bool,
        file_size_limit: int | None = None,
        allowed_mime_types: list[str] | None = None,
    ) -> None:
        await self._request(
            "POST",
            "/storage/v1/bucket",
            f"create bucket {name}",
            json={
                "id": name,
                "name": name,
                "public": public,
                "file_size_limit": file_size_limit,
                "allowed_mime_types": allowed_mime_types,
            },
        )


# ──────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────
def _json(response: httpx.Response, operation: str) -> Any:
    """Decode a successful response body; an unreadable one is a backend fault."""
    try:
        return response.json()
    except ValueError as exc:
        logger.warning("Supabase %s returned an unreadable body: %s", operation, exc)
        raise BackendError(
            f"Unexpected response from Supabase during {operation}.", response.status_code,
        ) from exc


def _error_message(response: httpx.Response) -> str:
    """Pull the human-readable message out of a PostgREST / storage error."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict):
        return str(payload.get("message") or payload.get("error") or payload)
    return str(payload)


def _parse_content_range(header: str) -> int:
    """``0-24/25`` → 25, ``*/0`` → 0; unknown totals count as zero."""
    _, _, total = header.partition("/")
    try:
        return int(total)
    except ValueError:
        return 0
