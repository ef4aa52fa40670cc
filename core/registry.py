"""Hex package registry client."""

import logging

import httpx

from .config import DEFAULT_REGISTRY_URL, DEFAULT_TIMEOUT
from .errors import RegistryUnavailable
from .models import PackageCandidate

logger = logging.getLogger(__name__)


class HexRegistry:
    """Client for the hex.pm package search API."""

    def __init__(
        self,
        base_url: str = DEFAULT_REGISTRY_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize registry client.

        Args:
            base_url: Base URL of the registry API (e.g. "https://hex.pm/api")
            timeout: Request timeout in seconds
            transport: Optional httpx transport, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def search(self, query: str) -> list[PackageCandidate]:
        """Search the registry for packages matching a query.

        Args:
            query: Raw search term typed by the user

        Returns:
            Candidates in registry response order, possibly empty
        """
        payload = await self._fetch_search_results(query)
        if not isinstance(payload, list):
            raise RegistryUnavailable("Unexpected search response from registry")

        candidates = []
        for record in payload:
            if not isinstance(record, dict) or not record.get("name"):
                continue

            version = record.get("latest_version") or record.get("latest_stable_version")
            if not version:
                logger.debug("Skipping %s: no published version", record["name"])
                continue

            candidates.append(PackageCandidate(name=record["name"], latest_version=version))

        logger.debug("Registry returned %d candidates for %r", len(candidates), query)
        return candidates

    async def _fetch_search_results(self, query: str):
        """Fetch raw search results from the registry.

        Args:
            query: Search term, sent as the "search" query parameter

        Returns:
            Decoded JSON payload
        """
        url = f"{self.base_url}/packages"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url, params={"search": query})
                response.raise_for_status()
                return response.json()

        except httpx.TimeoutException:
            raise RegistryUnavailable(f"Timeout searching registry for {query}")
        except httpx.HTTPStatusError as e:
            raise RegistryUnavailable(f"HTTP error searching registry for {query}: {e}")
        except httpx.HTTPError as e:
            raise RegistryUnavailable(f"Network error searching registry for {query}: {e}")
        except ValueError as e:
            raise RegistryUnavailable(f"Invalid JSON from registry: {e}")
