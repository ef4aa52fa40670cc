"""Tests for the hex.pm registry client."""

from unittest.mock import patch

import httpx
import pytest

from core.errors import RegistryUnavailable
from core.registry import HexRegistry


def make_registry(handler):
    return HexRegistry(base_url="https://hex.test/api", transport=httpx.MockTransport(handler))


class TestHexRegistry:
    """Test registry search and response mapping."""

    @pytest.mark.asyncio
    async def test_search_maps_name_and_latest_version(self):
        """Should map each record to a candidate with no status."""
        registry = HexRegistry()

        with patch.object(registry, "_fetch_search_results") as mock_fetch:
            mock_fetch.return_value = [
                {"name": "pow", "latest_version": "1.0.2", "meta": {"description": "Auth"}},
                {"name": "pow_assent", "latest_version": "0.4.18"},
            ]

            packages = await registry.search("pow")

        assert [p.name for p in packages] == ["pow", "pow_assent"]
        assert packages[0].latest_version == "1.0.2"
        assert packages[0].status == "none"
        assert packages[0].locked_version is None

    @pytest.mark.asyncio
    async def test_search_empty_result(self):
        """Should return an empty list when nothing matches."""
        registry = make_registry(lambda request: httpx.Response(200, json=[]))

        assert await registry.search("zzzz") == []

    @pytest.mark.asyncio
    async def test_search_encodes_query(self):
        """Should send the raw query as an encoded search parameter."""
        seen = {}

        def handler(request):
            seen["url"] = request.url
            return httpx.Response(200, json=[])

        await make_registry(handler).search("plug cowboy&x=1")

        assert seen["url"].path == "/api/packages"
        assert seen["url"].params["search"] == "plug cowboy&x=1"
        assert "x" not in seen["url"].params

    @pytest.mark.asyncio
    async def test_search_falls_back_to_latest_stable_version(self):
        """Should use latest_stable_version when latest_version is missing."""
        payload = [
            {"name": "alpha", "latest_version": None, "latest_stable_version": "2.0.0"},
            {"name": "ghost"},
        ]
        registry = make_registry(lambda request: httpx.Response(200, json=payload))

        packages = await registry.search("alpha")

        assert len(packages) == 1
        assert packages[0].name == "alpha"
        assert packages[0].latest_version == "2.0.0"

    @pytest.mark.asyncio
    async def test_search_http_error(self):
        """Should raise RegistryUnavailable on non-success status."""
        registry = make_registry(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(RegistryUnavailable):
            await registry.search("pow")

    @pytest.mark.asyncio
    async def test_search_malformed_payload(self):
        """Should raise RegistryUnavailable when body is not JSON."""
        registry = make_registry(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(RegistryUnavailable):
            await registry.search("pow")

    @pytest.mark.asyncio
    async def test_search_unexpected_shape(self):
        """Should raise RegistryUnavailable when body is not a list."""
        registry = make_registry(lambda request: httpx.Response(200, json={"error": "nope"}))

        with pytest.raises(RegistryUnavailable):
            await registry.search("pow")

    @pytest.mark.asyncio
    async def test_search_network_error(self):
        """Should raise RegistryUnavailable when the request cannot be sent."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RegistryUnavailable):
            await make_registry(handler).search("pow")
