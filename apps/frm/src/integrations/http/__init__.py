"""HTTP integration helpers."""

from .fetcher import ResourceFetcher

__all__ = ["ResourceFetcher"]
