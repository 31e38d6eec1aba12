"""
Shared error handling for the Content Access Layer.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class ContentLayerException(Exception):
    """Base exception for the Content Access Layer."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self, request_id: Optional[str] = None) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class ConfigurationError(ContentLayerException):
    """Client used before an app identity was configured."""

    def __init__(self, message: str = "Content client is not connected", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class RemoteError(ContentLayerException):
    """Content API answered with a non-success status."""

    def __init__(self, url: str, status_code: int, status_text: str, details: Optional[Dict[str, Any]] = None):
        self.url = url
        self.status_code = status_code
        self.status_text = status_text
        details = {"url": url, "status_code": status_code, **(details or {})}
        super().__init__("REMOTE_ERROR", f"Error loading {url}: {status_text}", details)


class NetworkError(ContentLayerException):
    """Transport failure talking to the content API."""

    def __init__(self, url: str, message: str = "Network error", details: Optional[Dict[str, Any]] = None):
        self.url = url
        details = {"url": url, **(details or {})}
        super().__init__("NETWORK_ERROR", f"{message} ({url})", details)


class ParseError(ContentLayerException):
    """Content API returned a body that is not a JSON object."""

    def __init__(self, url: str, message: str = "Malformed content response", details: Optional[Dict[str, Any]] = None):
        self.url = url
        details = {"url": url, **(details or {})}
        super().__init__("PARSE_ERROR", f"{message} ({url})", details)
