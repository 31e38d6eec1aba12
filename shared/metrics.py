"""
Shared metrics configuration for the Content Access Layer.
"""

from typing import Dict, Any, Optional

from prometheus_client import CollectorRegistry, Counter, Histogram

from shared.logging import get_logger


class ContentMetrics:
    """Prometheus metrics for cache and content API activity."""

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        # A private registry keeps several clients in one process from colliding
        self.registry = registry if registry is not None else CollectorRegistry()
        self.logger = get_logger("content.metrics")
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up cache and remote metrics."""

        self._metrics["content_cache_hits_total"] = Counter(
            "content_cache_hits_total",
            "Sections resolved from the cache",
            registry=self.registry
        )

        self._metrics["content_cache_misses_total"] = Counter(
            "content_cache_misses_total",
            "Sections missing from the cache",
            registry=self.registry
        )

        self._metrics["content_cache_errors_total"] = Counter(
            "content_cache_errors_total",
            "Cache operations that failed",
            ["operation"],
            registry=self.registry
        )

        self._metrics["content_remote_fetches_total"] = Counter(
            "content_remote_fetches_total",
            "Requests issued to the content API",
            ["draft"],
            registry=self.registry
        )

        self._metrics["content_remote_errors_total"] = Counter(
            "content_remote_errors_total",
            "Failed requests to the content API",
            ["error_type"],
            registry=self.registry
        )

        self._metrics["content_remote_fetch_duration_seconds"] = Histogram(
            "content_remote_fetch_duration_seconds",
            "Content API request duration in seconds",
            registry=self.registry
        )

    def record_cache_lookup(self, hits: int, misses: int):
        """Record the outcome of one batch of cache lookups."""
        try:
            if hits:
                self._metrics["content_cache_hits_total"].inc(hits)
            if misses:
                self._metrics["content_cache_misses_total"].inc(misses)
        except Exception as e:  # pragma: no cover - metrics must never break loads
            self.logger.debug("Failed to record cache metrics", error=str(e))

    def record_cache_error(self, operation: str):
        """Record a failed cache get/set."""
        try:
            self._metrics["content_cache_errors_total"].labels(operation=operation).inc()
        except Exception as e:  # pragma: no cover
            self.logger.debug("Failed to record cache error metric", error=str(e))

    def record_fetch(self, draft: bool, duration: float, error_type: Optional[str] = None):
        """Record one content API request."""
        try:
            self._metrics["content_remote_fetches_total"].labels(draft=str(bool(draft)).lower()).inc()
            self._metrics["content_remote_fetch_duration_seconds"].observe(duration)
            if error_type:
                self._metrics["content_remote_errors_total"].labels(error_type=error_type).inc()
        except Exception as e:  # pragma: no cover
            self.logger.debug("Failed to record fetch metrics", error=str(e))

    def get_sample_value(self, name: str, labels: Optional[Dict[str, str]] = None) -> Optional[float]:
        """Read the current value of a sample from this collector's registry."""
        return self.registry.get_sample_value(name, labels or {})
