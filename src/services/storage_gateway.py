"""Asynchronous client for the hosted row store.

The backend exposes each table as a PostgREST-style resource at
``{base_url}/rest/v1/{table}``. Every operation either returns its result or
raises GatewayError; callers decide what a failure degrades to.

No retries are attempted and, unless a timeout is configured, requests wait
indefinitely.
"""

import json
import logging
from typing import Any

import httpx

from src.utils.exceptions import GatewayError, GatewayNotConfiguredError

logger = logging.getLogger(__name__)

REST_PREFIX = "/rest/v1"


def _format_filter_value(value: Any) -> str:
    """Render an equality filter value the way the REST dialect expects."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


class StorageGateway:
    """Table-scoped create/read/update/delete against the row store.

    Usage:
        gateway = StorageGateway(url, api_key)
        rows = await gateway.select("events", order_by="start_year")
        await gateway.aclose()
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the gateway.

        Args:
            base_url: Endpoint URL of the hosted backend (without /rest/v1).
            api_key: Public API key sent with every request.
            timeout: Request timeout in seconds, None to wait indefinitely.
            transport: Optional httpx transport (tests pass a MockTransport).
        """
        self.base_url = (base_url or "").rstrip("/")
        self.api_key = api_key or ""
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        logger.debug(
            "StorageGateway created: configured=%s, timeout=%s", self.is_configured, timeout
        )

    @property
    def is_configured(self) -> bool:
        """True when both the endpoint URL and the API key are present."""
        return bool(self.base_url and self.api_key)

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def _get_client(self) -> httpx.AsyncClient:
        """Create the shared AsyncClient on first use."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=f"{self.base_url}{REST_PREFIX}",
                headers=self._headers(),
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    async def _request(
        self,
        operation: str,
        method: str,
        table: str,
        params: dict[str, str] | None = None,
        json_body: Any = None,
        extra_headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send one request and translate every failure into GatewayError."""
        if not self.is_configured:
            raise GatewayNotConfiguredError(
                "Storage gateway URL or API key is not configured",
                table=table,
                operation=operation,
            )

        client = self._get_client()
        try:
            response = await client.request(
                method,
                f"/{table}",
                params=params,
                json=json_body,
                headers=extra_headers,
            )
        except httpx.HTTPError as e:
            raise GatewayError(
                f"{operation} on {table} failed: {e}", table=table, operation=operation
            ) from e

        if response.is_error:
            detail = response.text[:200]
            raise GatewayError(
                f"{operation} on {table} returned HTTP {response.status_code}: {detail}",
                table=table,
                operation=operation,
                status_code=response.status_code,
            )
        logger.debug("%s %s/%s -> %d", method, REST_PREFIX, table, response.status_code)
        return response

    @staticmethod
    def _decode(response: httpx.Response, table: str, operation: str) -> Any:
        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise GatewayError(
                f"{operation} on {table} returned an undecodable body",
                table=table,
                operation=operation,
                status_code=response.status_code,
            ) from e

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored (with server-assigned columns).

        Raises:
            GatewayError: If the insert fails or no row comes back.
        """
        response = await self._request(
            "insert",
            "POST",
            table,
            json_body=row,
            extra_headers={"Prefer": "return=representation"},
        )
        data = self._decode(response, table, "insert")
        if isinstance(data, list):
            data = data[0] if data else None
        if not isinstance(data, dict):
            raise GatewayError(
                f"insert on {table} returned no row",
                table=table,
                operation="insert",
                status_code=response.status_code,
            )
        return data

    async def select(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[dict[str, Any]]:
        """Select rows with optional equality filters and ordering.

        Args:
            table: Table name.
            filters: Column -> value equality filters.
            order_by: Column to order by, None for store order.
            ascending: Sort direction when order_by is given.

        Raises:
            GatewayError: If the query fails or the body is not a list.
        """
        params: dict[str, str] = {"select": "*"}
        for column, value in (filters or {}).items():
            params[column] = f"eq.{_format_filter_value(value)}"
        if order_by:
            params["order"] = f"{order_by}.{'asc' if ascending else 'desc'}"

        response = await self._request("select", "GET", table, params=params)
        data = self._decode(response, table, "select")
        if data is None:
            return []
        if not isinstance(data, list):
            raise GatewayError(
                f"select on {table} returned {type(data).__name__}, expected list",
                table=table,
                operation="select",
                status_code=response.status_code,
            )
        return data

    async def update(self, table: str, row_id: str, fields: dict[str, Any]) -> None:
        """Apply a partial update to the row with the given id.

        Raises:
            GatewayError: If the update fails.
        """
        await self._request(
            "update",
            "PATCH",
            table,
            params={"id": f"eq.{row_id}"},
            json_body=fields,
            extra_headers={"Prefer": "return=minimal"},
        )

    async def delete(self, table: str, row_id: str) -> None:
        """Delete the row with the given id.

        Raises:
            GatewayError: If the delete fails.
        """
        await self._request(
            "delete",
            "DELETE",
            table,
            params={"id": f"eq.{row_id}"},
            extra_headers={"Prefer": "return=minimal"},
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("StorageGateway client closed")
