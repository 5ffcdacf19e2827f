"""Observability helpers (logging)."""

from .logging import configure_logging, get_current_resource, resource_context

__all__ = [
    "configure_logging",
    "get_current_resource",
    "resource_context",
]
