"""
Content loader: resolves sections from the cache or the content API.
"""

import asyncio
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from shared.config import ContentSettings, get_settings
from shared.errors import ConfigurationError
from shared.logging import get_logger
from shared.metrics import ContentMetrics
from ..adapters.content_api_client import ContentApiClient
from ..caching.keys import derive_cache_key
from ..caching.memory_cache import CacheStore, MemoryCache
from .block import ContentBlock
from .options import OptionsLike, RequestOptions, resolve_options


SectionIds = Union[str, Sequence[str]]


def normalize_ids(ids: SectionIds) -> List[str]:
    """Turn ``'main,home'`` or ``['main', 'home']`` into an ordered list of distinct ids."""
    if isinstance(ids, str):
        ids = ids.split(",")

    seen = set()
    normalized = []
    for section_id in ids:
        section_id = section_id.strip()
        if section_id and section_id not in seen:
            seen.add(section_id)
            normalized.append(section_id)
    return normalized


class ContentClient:
    """Loads content sections for one app, caching published content in process."""

    def __init__(
        self,
        app: Optional[str] = None,
        options: OptionsLike = None,
        *,
        settings: Optional[ContentSettings] = None,
        cache: Optional[CacheStore] = None,
        api_client: Optional[ContentApiClient] = None,
        metrics: Optional[ContentMetrics] = None,
    ):
        self.settings = settings or get_settings()
        self.logger = get_logger("content.loader")
        self.metrics = metrics or ContentMetrics()

        self.app = app
        self.options = resolve_options(options)

        self.cache = cache if cache is not None else MemoryCache(
            max_entries=self.settings.cache_max_entries,
            ttl_seconds=self.settings.cache_ttl_seconds,
        )
        self.api_client = api_client or ContentApiClient(
            self.settings.api_url,
            timeout=self.settings.request_timeout,
            metrics=self.metrics,
        )

    def connect(self, app: str, options: OptionsLike = None) -> "ContentClient":
        """Set the app identity and default options."""
        self.app = app
        self.options = self.options.merge(options)
        self.logger.info("Content client connected", app=app, draft=self.options.draft)
        return self

    @property
    def connected(self) -> bool:
        return bool(self.app)

    def _trace(self, options: RequestOptions, event: str, **kw):
        if options.log:
            self.logger.info(event, **kw)
        else:
            self.logger.debug(event, **kw)

    async def load(self, ids: SectionIds, options: OptionsLike = None) -> ContentBlock:
        """Load sections so their content can be read from the returned block.

        Draft loads always go to the content API and never touch the cache.
        Published loads take what they can from the cache and fetch the rest
        in a single request. A failed fetch fails the whole load.
        """
        app = self.app
        if not app:
            raise ConfigurationError(
                "Content client is not connected; call connect(app) before load()"
            )

        options = self.options.merge(options)

        section_ids = normalize_ids(ids)
        self._trace(options, "Loading content", app=app, ids=section_ids, draft=options.draft, lang=options.lang)

        if not section_ids:
            return ContentBlock(app, None, {}, options)

        if options.draft:
            content = await self._load_from_server(app, section_ids, options)
            return ContentBlock(app, None, content, options)

        cached = await self._load_from_cache(app, section_ids, options)
        cached_ids, uncached_ids = self._partition(section_ids, cached)
        self.metrics.record_cache_lookup(len(cached_ids), len(uncached_ids))

        if not uncached_ids:
            return ContentBlock(app, None, cached, options)

        fetched = await self._load_from_server(app, uncached_ids, options)
        await self._save_to_cache(app, fetched, options)

        return ContentBlock(app, None, self._merge(section_ids, cached, fetched), options)

    @staticmethod
    def _partition(section_ids: List[str], cached: Dict[str, Any]) -> Tuple[List[str], List[str]]:
        """Split ids into (resolved from cache, missing from cache), keeping order."""
        hits = [section_id for section_id in section_ids if cached.get(section_id) is not None]
        misses = [section_id for section_id in section_ids if cached.get(section_id) is None]
        return hits, misses

    @staticmethod
    def _merge(section_ids: List[str], cached: Dict[str, Any], fetched: Dict[str, Any]) -> Dict[str, Any]:
        """Combine cached and fetched snapshots into a new map covering every requested id."""
        merged = {section_id: cached.get(section_id) for section_id in section_ids}
        merged.update(fetched)
        return merged

    async def _load_from_cache(self, app: str, section_ids: List[str], options: RequestOptions) -> Dict[str, Any]:
        """Look up every id concurrently; failures and absent entries read as None."""

        async def _get(section_id: str) -> Any:
            key = derive_cache_key(app, section_id, options)
            try:
                return await self.cache.get(key)
            except Exception as e:
                self.logger.warning("Cache get failed, treating as miss", section_id=section_id, key=key, error=str(e))
                self.metrics.record_cache_error("get")
                return None

        values = await asyncio.gather(*(_get(section_id) for section_id in section_ids))
        return dict(zip(section_ids, values))

    async def _save_to_cache(self, app: str, content: Dict[str, Any], options: RequestOptions) -> None:
        """Write each fetched section under its key; failures are logged only."""

        async def _set(section_id: str, section_content: Any):
            key = derive_cache_key(app, section_id, options)
            try:
                await self.cache.set(key, section_content)
            except Exception as e:
                self.logger.warning("Cache set failed", section_id=section_id, key=key, error=str(e))
                self.metrics.record_cache_error("set")

        await asyncio.gather(*(
            _set(section_id, section_content)
            for section_id, section_content in content.items()
            if section_content is not None
        ))

    async def _load_from_server(self, app: str, section_ids: List[str], options: RequestOptions) -> Dict[str, Any]:
        self._trace(options, "Loading from server", app=app, ids=section_ids)
        return await self.api_client.fetch(app, section_ids, options)
