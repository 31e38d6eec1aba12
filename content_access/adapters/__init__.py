"""
Adapters package for the content client.

Contains the HTTP client wrapping the remote content API. The adapter
encapsulates:

- The base URL and request shape
- Error handling that maps to shared errors

Retries are left to callers; the adapter makes exactly one request per call.
"""

from .content_api_client import ContentApiClient

__all__ = ["ContentApiClient"]
