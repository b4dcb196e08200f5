"""Schema retrieval from a live GraphQL endpoint.

Posts graphql-core's standard introspection query and hands back the raw
result, ready for ``schema_from_introspection`` or for saving to disk.
"""

import logging
from typing import Any

import httpx
from graphql import get_introspection_query

from .errors import SchemaLoadError

logger = logging.getLogger(__name__)


class SchemaFetcher:
    """Fetches introspection results over HTTP.

    Examples:
        async with SchemaFetcher(url, headers={"Authorization": f"Bearer {token}"}) as fetcher:
            data = await fetcher.fetch()
    """

    def __init__(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the fetcher.

        Args:
            url: GraphQL endpoint URL
            headers: Extra request headers, e.g. for authentication
            timeout: Request timeout in seconds
            transport: Optional httpx transport, mainly for tests
        """
        self.url = url
        self.headers = headers or {}
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            headers = {"Content-Type": "application/json"}
            headers.update(self.headers)
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SchemaFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def fetch(self) -> dict[str, Any]:
        """Run the introspection query.

        Returns:
            The ``data`` portion of the response, i.e. ``{"__schema": ...}``

        Raises:
            SchemaLoadError: on transport failures, HTTP errors or GraphQL errors
        """
        client = await self._get_client()
        payload = {
            "query": get_introspection_query(descriptions=True),
            "operationName": "IntrospectionQuery",
        }

        logger.debug("Fetching schema from %s", self.url)
        try:
            response = await client.post(self.url, json=payload)
            response.raise_for_status()
            result = response.json()
        except httpx.HTTPError as e:
            raise SchemaLoadError(f"Failed to fetch schema from {self.url}: {e}") from e
        except ValueError as e:
            raise SchemaLoadError(f"Response from {self.url} is not JSON: {e}") from e

        if result.get("errors"):
            messages = "; ".join(e.get("message", str(e)) for e in result["errors"])
            raise SchemaLoadError(f"Introspection failed: {messages}")

        data = result.get("data")
        if not data or "__schema" not in data:
            raise SchemaLoadError(f"Response from {self.url} holds no introspection result")
        return data
