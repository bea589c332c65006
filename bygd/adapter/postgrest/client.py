"""PostgREST client for the hosted backend.

Thin async wrapper over the REST interface the hosted database exposes:
one table per path, filters as query parameters (``user_id=eq.<id>``),
``Prefer`` headers for returned rows, upserts and exact counts.
"""

from typing import Any, Iterable, Mapping

import httpx
import logfire

from bygd.adapter.error import PostgrestError

Row = dict[str, Any]
Filters = Mapping[str, str]


def eq(value: object) -> str:
    """Equality filter value."""
    return f"eq.{value}"


def in_(values: Iterable[object]) -> str:
    """Membership filter value, e.g. ``in.(a,b,c)``."""
    return f"in.({','.join(str(v) for v in values)})"


class PostgrestClient:
    """Async client for one PostgREST endpoint."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        access_token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize PostgREST client.

        Args:
            base_url: REST base URL, e.g. https://<project>.supabase.co/rest/v1
            api_key: Public API key sent with every request
            access_token: User access token; the API key is used when unset
            timeout: Request timeout in seconds
            transport: Optional transport override (tests)
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {access_token or api_key}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        table: str,
        params: Mapping[str, str] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> httpx.Response:
        headers = {"Prefer": prefer} if prefer else None
        try:
            response = await self._client.request(
                method, f"/{table}", params=params, json=json, headers=headers
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logfire.error(
                "PostgREST request rejected",
                method=method,
                table=table,
                status_code=e.response.status_code,
                error=message,
            )
            raise PostgrestError(message, e.response.status_code) from e
        except httpx.HTTPError as e:
            logfire.error(
                "PostgREST request failed", method=method, table=table, error=str(e)
            )
            raise PostgrestError(f"Request to {table} failed: {e}") from e
        return response

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Filters | None = None,
        order: str | None = None,
    ) -> list[Row]:
        """Select rows.

        Args:
            table: Table name
            columns: Column list, PostgREST syntax
            filters: Column -> filter expression (see ``eq`` and ``in_``)
            order: Ordering, e.g. ``created_at.asc``

        Returns:
            Matching rows
        """
        params = {"select": columns, **(filters or {})}
        if order:
            params["order"] = order
        response = await self._request("GET", table, params=params)
        return response.json()

    async def insert(self, table: str, rows: Row | list[Row]) -> list[Row]:
        """Insert rows and return them as stored."""
        response = await self._request(
            "POST",
            table,
            params={"select": "*"},
            json=rows if isinstance(rows, list) else [rows],
            prefer="return=representation",
        )
        return response.json()

    async def upsert(self, table: str, row: Row, on_conflict: str) -> None:
        """Insert a row, overwriting the row that conflicts on the given columns."""
        await self._request(
            "POST",
            table,
            params={"on_conflict": on_conflict},
            json=[row],
            prefer="resolution=merge-duplicates,return=minimal",
        )

    async def delete(self, table: str, filters: Filters) -> None:
        """Delete matching rows.

        Raises:
            ValueError: If no filter is given
        """
        if not filters:
            raise ValueError("Refusing to delete without a filter")
        await self._request("DELETE", table, params=dict(filters))

    async def count(self, table: str, filters: Filters | None = None) -> int:
        """Count matching rows without fetching them."""
        response = await self._request(
            "HEAD",
            table,
            params={"select": "*", **(filters or {})},
            prefer="count=exact",
        )
        return _parse_count(response.headers.get("content-range"))


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)


def _parse_count(content_range: str | None) -> int:
    """Total from a ``Content-Range`` header such as ``0-9/42`` or ``*/0``."""
    if not content_range or "/" not in content_range:
        raise PostgrestError("Missing row count in response")
    total = content_range.rsplit("/", 1)[1]
    if total == "*":
        raise PostgrestError("Backend did not report an exact count")
    return int(total)
