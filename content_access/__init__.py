"""
Content Access Layer client package.

Loads named content sections from the remote content API, keeping published
content in a bounded in-process cache.

Structure:
- domain: request options, the ContentClient loader and ContentBlock read helpers.
- adapters: HTTP client for the content API.
- caching: cache key derivation and the in-process cache store.
- middleware: FastAPI request-option detection and load dependency.
"""

from shared.errors import (
    ConfigurationError,
    ContentLayerException,
    NetworkError,
    ParseError,
    RemoteError,
)
from .domain import ContentBlock, ContentClient, RequestOptions

__all__ = [
    "ContentBlock",
    "ContentClient",
    "RequestOptions",
    "ConfigurationError",
    "ContentLayerException",
    "NetworkError",
    "ParseError",
    "RemoteError",
]
