"""
Domain layer: request options, the content loader and read helpers.
"""

from .block import ContentBlock
from .loader import ContentClient, normalize_ids
from .options import RequestOptions, resolve_options

__all__ = ["ContentBlock", "ContentClient", "RequestOptions", "normalize_ids", "resolve_options"]
