"""
Unit tests for the content API client.
"""

import pytest
import httpx
import json
from unittest.mock import AsyncMock, patch

from prometheus_client import CollectorRegistry

from content_access.adapters.content_api_client import ContentApiClient
from content_access.domain.options import RequestOptions
from shared.errors import RemoteError, NetworkError, ParseError
from shared.metrics import ContentMetrics


API_URL = "https://api.example.test"


def _response(status_code: int, body, url: str = f"{API_URL}/apps/acme/content/main") -> httpx.Response:
    content = body if isinstance(body, (bytes, str)) else json.dumps(body)
    return httpx.Response(
        status_code=status_code,
        content=content,
        request=httpx.Request("GET", url)
    )


class TestContentApiClient:
    """Test cases for ContentApiClient."""

    @pytest.fixture
    def metrics(self):
        """Metrics bound to a private registry."""
        return ContentMetrics(CollectorRegistry())

    @pytest.fixture
    def api_client(self, metrics):
        """Create ContentApiClient instance."""
        return ContentApiClient(API_URL + "/", metrics=metrics)

    @pytest.fixture
    def mock_content(self):
        """Mock content API payload."""
        return {
            "main": {"title": "Acme", "tagline": "Hello {{name}}"},
            "home": {"intro": "Welcome"}
        }

    def test_build_url_joins_ids(self, api_client):
        """Test ids are joined into a single path segment."""
        url = api_client.build_url("acme", ["main", "home"])

        assert url == f"{API_URL}/apps/acme/content/main,home"

    def test_build_params_published(self, api_client):
        """Test published requests carry no draft flag."""
        assert api_client.build_params(RequestOptions()) == {}

    def test_build_params_draft_and_lang(self, api_client):
        """Test draft and lang query parameters."""
        params = api_client.build_params(RequestOptions(draft=True, lang="fr"))

        assert params == {"draft": 1, "lang": "fr"}

    @pytest.mark.asyncio
    async def test_fetch_success(self, api_client, mock_content, metrics):
        """Test successful content fetch."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_get = AsyncMock(return_value=_response(200, mock_content))
            mock_client.return_value.__aenter__.return_value.get = mock_get

            result = await api_client.fetch("acme", ["main", "home"], RequestOptions(lang="fr"))

            assert result == mock_content
            mock_get.assert_called_once_with(
                f"{API_URL}/apps/acme/content/main,home",
                params={"lang": "fr"}
            )
            mock_client.assert_called_once_with()

        assert metrics.get_sample_value("content_remote_fetches_total", {"draft": "false"}) == 1

    @pytest.mark.asyncio
    async def test_fetch_draft_sends_draft_flag(self, api_client):
        """Test draft fetch adds draft=1."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_get = AsyncMock(return_value=_response(200, {"main": {}}))
            mock_client.return_value.__aenter__.return_value.get = mock_get

            await api_client.fetch("acme", ["main"], RequestOptions(draft=True))

            mock_get.assert_called_once_with(
                f"{API_URL}/apps/acme/content/main",
                params={"draft": 1}
            )

    @pytest.mark.asyncio
    async def test_fetch_uses_configured_timeout(self):
        """Test a configured timeout is passed to the transport."""
        api_client = ContentApiClient(API_URL, timeout=2.5)

        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response(200, {"main": {}})
            )

            await api_client.fetch("acme", ["main"], RequestOptions())

            mock_client.assert_called_once_with(timeout=2.5)

    @pytest.mark.asyncio
    async def test_fetch_http_error_status(self, api_client, metrics):
        """Test non-success status raises RemoteError."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response(500, "boom")
            )

            with pytest.raises(RemoteError) as exc_info:
                await api_client.fetch("acme", ["main"], RequestOptions())

        error = exc_info.value
        assert error.status_code == 500
        assert error.status_text == "Internal Server Error"
        assert error.url == f"{API_URL}/apps/acme/content/main"
        assert error.code == "REMOTE_ERROR"
        assert "Internal Server Error" in error.message
        assert metrics.get_sample_value("content_remote_errors_total", {"error_type": "remote"}) == 1

    @pytest.mark.asyncio
    async def test_fetch_not_found_is_remote_error(self, api_client):
        """Test 404 is surfaced rather than treated as empty content."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response(404, "missing")
            )

            with pytest.raises(RemoteError) as exc_info:
                await api_client.fetch("acme", ["main"], RequestOptions())

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_fetch_connection_error(self, api_client, metrics):
        """Test transport failure raises NetworkError."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=httpx.ConnectError("Connection refused")
            )

            with pytest.raises(NetworkError) as exc_info:
                await api_client.fetch("acme", ["main"], RequestOptions())

        assert exc_info.value.url == f"{API_URL}/apps/acme/content/main"
        assert metrics.get_sample_value("content_remote_errors_total", {"error_type": "network"}) == 1

    @pytest.mark.asyncio
    async def test_fetch_timeout(self, api_client):
        """Test transport timeout raises NetworkError."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=httpx.ReadTimeout("timed out")
            )

            with pytest.raises(NetworkError):
                await api_client.fetch("acme", ["main"], RequestOptions())

    @pytest.mark.asyncio
    async def test_fetch_malformed_json(self, api_client, metrics):
        """Test invalid JSON raises ParseError."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response(200, "{not json")
            )

            with pytest.raises(ParseError):
                await api_client.fetch("acme", ["main"], RequestOptions())

        assert metrics.get_sample_value("content_remote_errors_total", {"error_type": "parse"}) == 1

    @pytest.mark.asyncio
    async def test_fetch_undecodable_body(self, api_client, metrics):
        """Test a body that fails content decoding raises ParseError."""
        real_client = httpx.AsyncClient

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                status_code=200,
                headers={"content-encoding": "gzip"},
                content=b"not gzip at all"
            )

        with patch('httpx.AsyncClient') as mock_client:
            mock_client.side_effect = lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs)

            with pytest.raises(ParseError) as exc_info:
                await api_client.fetch("acme", ["main"], RequestOptions())

        assert exc_info.value.code == "PARSE_ERROR"
        assert exc_info.value.url == f"{API_URL}/apps/acme/content/main"
        assert metrics.get_sample_value("content_remote_errors_total", {"error_type": "parse"}) == 1

    @pytest.mark.asyncio
    async def test_fetch_other_request_error(self, api_client):
        """Test any other request failure raises NetworkError."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=httpx.TooManyRedirects("Exceeded maximum allowed redirects")
            )

            with pytest.raises(NetworkError):
                await api_client.fetch("acme", ["main"], RequestOptions())

    @pytest.mark.asyncio
    async def test_fetch_non_object_payload(self, api_client):
        """Test a JSON array is rejected as malformed content."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response(200, ["main"])
            )

            with pytest.raises(ParseError):
                await api_client.fetch("acme", ["main"], RequestOptions())
