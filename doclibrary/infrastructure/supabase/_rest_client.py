"""Thin Supabase REST client (no supabase-py).

Talks to the three Supabase HTTP APIs the application uses:
- PostgREST table API (``/rest/v1``): select/insert/update/delete and RPC,
- Storage API (``/storage/v1``): upload, remove, public URLs,
- GoTrue auth API (``/auth/v1``): resolve a user from an access token, sign up/in.

All HTTP calls use httpx.AsyncClient so they do not block the event loop.
Every call is one independent round trip; nothing here spans a transaction.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

import httpx

from doclibrary.domain.exceptions import RemoteException, UploadException

_REST_PATH = "/rest/v1"
_STORAGE_PATH = "/storage/v1"
_AUTH_PATH = "/auth/v1"
PUBLIC_OBJECT_PREFIX = f"{_STORAGE_PATH}/object/public/"


def _error_message(resp: httpx.Response) -> str:
    """Extract the remote error message (PostgREST, Storage and GoTrue use different keys)."""
    try:
        body = resp.json()
    except (json.JSONDecodeError, ValueError):
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        for key in ("message", "msg", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {resp.status_code}"


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    *,
    headers: dict[str, str] | None = None,
    params: list[tuple[str, str]] | None = None,
    body: Any = None,
    content: bytes | None = None,
) -> Any:
    """Perform async HTTP request to a Supabase API. Non-2xx raises RemoteException."""
    try:
        resp = await client.request(
            method,
            url,
            headers=headers,
            params=params,
            json=body if content is None else None,
            content=content,
        )
    except httpx.HTTPError as e:
        raise RemoteException(f"Request to Supabase failed: {e}") from e
    if resp.status_code >= 400:
        raise RemoteException(_error_message(resp), status_code=resp.status_code)
    raw = resp.content
    if not raw:
        return None
    try:
        return json.loads(raw.decode())
    except ValueError as e:
        raise RemoteException(
            f"Unreadable response from Supabase: {e}", status_code=resp.status_code
        ) from e


def _quote_in_value(value: Any) -> str:
    """Quote a value for a PostgREST ``in.(...)`` list (values may contain commas)."""
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


class _Query:
    """Fluent PostgREST query builder; runs via execute() (filter/order/offset/limit on server)."""

    def __init__(self, table: "TableReference", method: str = "GET") -> None:
        self._table = table
        self._method = method
        self._select = "*"
        self._filters: list[tuple[str, str]] = []
        self._order: list[str] = []
        self._limit: int | None = None
        self._offset: int | None = None
        self._single = False
        self._body: Any = None

    # ---- filters ----
    def eq(self, column: str, value: Any) -> "_Query":
        self._filters.append((column, f"eq.{value}"))
        return self

    def gte(self, column: str, value: Any) -> "_Query":
        self._filters.append((column, f"gte.{value}"))
        return self

    def lte(self, column: str, value: Any) -> "_Query":
        self._filters.append((column, f"lte.{value}"))
        return self

    def in_(self, column: str, values: list[Any] | tuple[Any, ...]) -> "_Query":
        joined = ",".join(_quote_in_value(v) for v in values)
        self._filters.append((column, f"in.({joined})"))
        return self

    # ---- shaping ----
    def select(self, columns: str = "*") -> "_Query":
        self._select = " ".join(columns.split())
        return self

    def order(self, column: str, ascending: bool = True) -> "_Query":
        self._order.append(f"{column}.{'asc' if ascending else 'desc'}")
        return self

    def limit(self, n: int) -> "_Query":
        self._limit = n
        return self

    def offset(self, n: int) -> "_Query":
        self._offset = n
        return self

    def single(self) -> "_Query":
        """Return the first matching row (or None) instead of a list."""
        self._single = True
        self._limit = 1
        return self

    def _params(self) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        if self._method == "GET" or self._select != "*":
            params.append(("select", self._select))
        params.extend(self._filters)
        if self._order:
            params.append(("order", ",".join(self._order)))
        if self._limit is not None:
            params.append(("limit", str(self._limit)))
        if self._offset:
            params.append(("offset", str(self._offset)))
        return params

    async def execute(self) -> Any:
        """Run the query. Returns list of rows, or a row/None after single()."""
        if self._method in ("PATCH", "DELETE") and not self._filters:
            raise ValueError(f"Refusing {self._method} without a filter on {self._table.name}")
        headers = self._table._client._headers()
        if self._method != "GET":
            headers["Prefer"] = "return=representation"
        out = await _request_async(
            self._table._client._http,
            self._table.url,
            method=self._method,
            headers=headers,
            params=self._params(),
            body=self._body,
        )
        rows = out if isinstance(out, list) else ([out] if out else [])
        if self._single:
            return rows[0] if rows else None
        return rows


class TableReference:
    """Reference to one table; entry point for queries and writes."""

    def __init__(self, client: "SupabaseRESTClient", name: str) -> None:
        self._client = client
        self.name = name
        self.url = f"{client.base_url}{_REST_PATH}/{name}"

    def select(self, columns: str = "*") -> _Query:
        return _Query(self).select(columns)

    def insert(self, rows: dict[str, Any] | list[dict[str, Any]]) -> _Query:
        q = _Query(self, method="POST")
        q._body = rows if isinstance(rows, list) else [rows]
        return q

    def update(self, values: dict[str, Any]) -> _Query:
        q = _Query(self, method="PATCH")
        q._body = values
        return q

    def delete(self) -> _Query:
        return _Query(self, method="DELETE")


class StorageBucket:
    """Object operations on one storage bucket."""

    def __init__(self, client: "SupabaseRESTClient", bucket_id: str) -> None:
        self._client = client
        self.bucket_id = bucket_id

    def _object_url(self, path: str) -> str:
        return (
            f"{self._client.base_url}{_STORAGE_PATH}/object/"
            f"{quote(self.bucket_id)}/{quote(path)}"
        )

    async def upload(
        self,
        path: str,
        data: bytes,
        content_type: str,
        *,
        cache_control: str = "3600",
        upsert: bool = False,
    ) -> str:
        """Upload bytes to path. Returns the stored path.

        With upsert=False an existing object at path is a collision and raises UploadException.
        """
        headers = self._client._headers()
        headers.update(
            {
                "Content-Type": content_type,
                "Cache-Control": f"max-age={cache_control}",
                "x-upsert": "true" if upsert else "false",
            }
        )
        try:
            await _request_async(
                self._client._http,
                self._object_url(path),
                method="POST",
                headers=headers,
                content=data,
            )
        except RemoteException as e:
            raise UploadException(e.message, path=path) from e
        return path

    async def remove(self, paths: list[str]) -> None:
        """Delete objects by path."""
        await _request_async(
            self._client._http,
            f"{self._client.base_url}{_STORAGE_PATH}/object/{quote(self.bucket_id)}",
            method="DELETE",
            headers=self._client._headers(),
            body={"prefixes": paths},
        )

    def get_public_url(self, path: str) -> str:
        """Return the public URL for path (no network call)."""
        return (
            f"{self._client.base_url}{PUBLIC_OBJECT_PREFIX}"
            f"{quote(self.bucket_id)}/{quote(path)}"
        )


class StorageClient:
    """Storage API entry point."""

    def __init__(self, client: "SupabaseRESTClient") -> None:
        self._client = client

    def from_(self, bucket_id: str) -> StorageBucket:
        return StorageBucket(self._client, bucket_id)


class AuthClient:
    """GoTrue auth API entry point."""

    def __init__(self, client: "SupabaseRESTClient") -> None:
        self._client = client

    async def get_user(self, access_token: str) -> dict[str, Any] | None:
        """Return the user for an access token; None when the token is invalid or expired."""
        headers = self._client._headers()
        headers["Authorization"] = f"Bearer {access_token}"
        try:
            return await _request_async(
                self._client._http,
                f"{self._client.base_url}{_AUTH_PATH}/user",
                headers=headers,
            )
        except RemoteException as e:
            if e.status_code in (401, 403):
                return None
            raise

    async def sign_up(self, email: str, password: str) -> dict[str, Any]:
        """Create an auth user. Returns the user object."""
        out = await _request_async(
            self._client._http,
            f"{self._client.base_url}{_AUTH_PATH}/signup",
            method="POST",
            headers=self._client._headers(),
            body={"email": email, "password": password},
        )
        out = out or {}
        # With email confirmation enabled GoTrue returns the bare user; otherwise a session.
        return out.get("user", out)

    async def sign_in_with_password(self, email: str, password: str) -> dict[str, Any]:
        """Exchange email/password for a session (access_token, refresh_token, user)."""
        out = await _request_async(
            self._client._http,
            f"{self._client.base_url}{_AUTH_PATH}/token",
            method="POST",
            headers=self._client._headers(),
            params=[("grant_type", "password")],
            body={"email": email, "password": password},
        )
        return out or {}


class SupabaseRESTClient:
    """Lightweight Supabase client using the REST APIs (no supabase-py)."""

    def __init__(
        self,
        url: str,
        api_key: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = url.rstrip("/")
        self._api_key = api_key
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None
        self.storage = StorageClient(self)
        self.auth = AuthClient(self)

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
        }

    def table(self, name: str) -> TableReference:
        return TableReference(self, name)

    async def rpc(self, function: str, params: dict[str, Any] | None = None) -> Any:
        """Call a Postgres function exposed by PostgREST."""
        return await _request_async(
            self._http,
            f"{self.base_url}{_REST_PATH}/rpc/{function}",
            method="POST",
            headers=self._headers(),
            body=params or {},
        )
