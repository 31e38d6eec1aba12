"""
Shared utilities for the Content Access Layer.

This package aggregates common building blocks consumed by the client:

- config: Client configuration via pydantic-settings
- logging: Structured logging with request correlation
- metrics: Prometheus metrics for cache and content API activity
- errors: Canonical error types and responses

Do not import from content_access into shared/.
"""
