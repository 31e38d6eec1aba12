"""
Content API client.
"""

import json
import time
from typing import Any, Dict, Optional, Sequence, TYPE_CHECKING
import httpx

from shared.logging import get_logger
from shared.errors import RemoteError, NetworkError, ParseError
from shared.metrics import ContentMetrics

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from ..domain.options import RequestOptions


class ContentApiClient:
    """Client for fetching section content from the content API."""

    def __init__(
        self,
        api_url: str,
        *,
        timeout: Optional[float] = None,
        metrics: Optional[ContentMetrics] = None,
    ):
        self.base_url = api_url.rstrip('/')
        self.timeout = timeout
        self.metrics = metrics
        self.logger = get_logger("content.api_client")

    def build_url(self, app: str, ids: Sequence[str]) -> str:
        """URL of the content endpoint for a batch of sections."""
        return f"{self.base_url}/apps/{app}/content/{','.join(ids)}"

    @staticmethod
    def build_params(options: "RequestOptions") -> Dict[str, Any]:
        """Query parameters for a request made with the given options."""
        params: Dict[str, Any] = {}
        if options.draft:
            params["draft"] = 1
        if options.lang:
            params["lang"] = options.lang
        return params

    def _client_kwargs(self) -> Dict[str, Any]:
        if self.timeout is None:
            return {}
        return {"timeout": self.timeout}

    async def fetch(self, app: str, ids: Sequence[str], options: "RequestOptions") -> Dict[str, Any]:
        """Fetch content for every id in one request.

        Raises RemoteError on a non-success status, ParseError when the body
        cannot be decoded or is not a JSON object, and NetworkError on any
        other request failure.
        """
        url = self.build_url(app, ids)
        params = self.build_params(options)
        start = time.perf_counter()
        error_type: Optional[str] = None

        try:
            try:
                async with httpx.AsyncClient(**self._client_kwargs()) as client:
                    response = await client.get(url, params=params)
            except httpx.DecodingError as e:
                error_type = "parse"
                self.logger.error("Content API body could not be decoded", url=url, params=params, error=str(e))
                raise ParseError(url, f"Undecodable content response: {e}", details={"error": str(e)})
            except httpx.RequestError as e:
                error_type = "network"
                self.logger.error("Content API unreachable", url=url, params=params, error=str(e))
                raise NetworkError(url, f"Content API unreachable: {e}", details={"error": str(e)})

            if not response.is_success:
                error_type = "remote"
                self.logger.error(
                    "Content API request failed",
                    url=str(response.request.url),
                    status_code=response.status_code,
                    response=response.text
                )
                raise RemoteError(
                    str(response.request.url),
                    response.status_code,
                    response.reason_phrase,
                    details={"body": response.text}
                )

            try:
                content = response.json()
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                error_type = "parse"
                self.logger.error("Content API returned invalid JSON", url=url, error=str(e))
                raise ParseError(url, details={"error": str(e)})

            if not isinstance(content, dict):
                error_type = "parse"
                self.logger.error(
                    "Content API returned unexpected payload",
                    url=url,
                    payload_type=type(content).__name__
                )
                raise ParseError(url, "Expected a JSON object of sections")

            self.logger.debug("Content retrieved", url=url, params=params, sections=list(content))
            return content

        finally:
            if self.metrics:
                self.metrics.record_fetch(options.draft, time.perf_counter() - start, error_type)
