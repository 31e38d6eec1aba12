"""
Cache key derivation for loaded content sections.
"""

import hashlib
import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from ..domain.options import RequestOptions


CACHE_KEY_PREFIX = "content"


def derive_cache_key(app: str, section_id: str, options: "RequestOptions") -> str:
    """Map a section of an app to its cache key.

    Only options that change what the content *is* take part (the language).
    Draft content is never cached and ``log`` only affects tracing, so neither
    is part of the key.
    """
    key_string = json.dumps([app, options.lang or "", section_id])
    return f"{CACHE_KEY_PREFIX}:{hashlib.md5(key_string.encode()).hexdigest()}"
